"""Test fixtures for the redirect service."""

import os
import tempfile

# Settings are read at import time, so the test environment goes in first
os.environ["ENVIRONMENT"] = "testing"
os.environ["LOG_TO_FILE"] = "false"
os.environ["TOTP_SECRET"] = ""
os.environ["STORAGE_DIR"] = tempfile.mkdtemp(prefix="redirector-test-")

from typing import Dict, Generator

import pyotp
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from redirector.api.dependencies import get_authorizer, get_redirect_repository
from redirector.core.security import TOTPAuthorizer
from redirector.main import app as main_app
from redirector.repositories import FileRedirectRepository
from redirector.services import RedirectService


@pytest.fixture
def storage_dir(tmp_path):
    """Empty storage root for one test."""
    path = tmp_path / "redirects"
    path.mkdir()
    return path


@pytest.fixture
def repository(storage_dir) -> FileRedirectRepository:
    return FileRedirectRepository(storage_dir)


@pytest.fixture
def redirect_service(repository) -> RedirectService:
    return RedirectService(repository=repository)


@pytest.fixture
def totp_secret() -> str:
    return pyotp.random_base32()


@pytest.fixture
def authorizer(totp_secret) -> TOTPAuthorizer:
    return TOTPAuthorizer(totp_secret)


@pytest.fixture
def auth_headers(totp_secret) -> Dict[str, str]:
    """Authorization header carrying the current TOTP code."""
    return {"Authorization": pyotp.TOTP(totp_secret).now()}


@pytest.fixture
def test_app(repository, authorizer) -> Generator[FastAPI, None, None]:
    """FastAPI app wired to the per-test repository and authorizer."""
    app = main_app
    app.dependency_overrides[get_redirect_repository] = lambda: repository
    app.dependency_overrides[get_authorizer] = lambda: authorizer
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app) -> Generator[TestClient, None, None]:
    """Return FastAPI TestClient instance."""
    with TestClient(test_app) as test_client:
        yield test_client
