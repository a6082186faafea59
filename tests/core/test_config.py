"""Tests for application settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from redirector.core.config import EnvironmentType, Settings


def test_storage_dir_override(tmp_path):
    settings = Settings(_env_file=None, STORAGE_DIR=str(tmp_path / "store"))

    assert settings.STORAGE_PATH == tmp_path / "store"


def test_storage_path_defaults_to_home_folder(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))

    settings = Settings(_env_file=None, STORAGE_DIR="", STORAGE_FOLDER=".links")

    assert settings.STORAGE_PATH == Path(tmp_path) / ".links"


def test_defaults(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)

    settings = Settings(_env_file=None)

    assert settings.PORT == 3000
    assert settings.STORAGE_FOLDER == ".GRY"


def test_environment_variables_are_read(monkeypatch):
    monkeypatch.setenv("PORT", "8123")
    monkeypatch.setenv("home_url", "https://home.example.com/")

    settings = Settings(_env_file=None)

    assert settings.PORT == 8123
    assert settings.HOME_URL == "https://home.example.com/"


def test_production_requires_totp_secret():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, ENVIRONMENT="production", TOTP_SECRET="")

    settings = Settings(_env_file=None, ENVIRONMENT="production", TOTP_SECRET="JBSWY3DPEHPK3PXP")
    assert settings.ENVIRONMENT is EnvironmentType.PRODUCTION


def test_gry_prefixed_names_are_read(monkeypatch, tmp_path):
    for name in ("PORT", "STORAGE_FOLDER", "TOTP_SECRET"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GRY_PORT", "4100")
    monkeypatch.setenv("GRY_FOLDER", ".gry-links")
    monkeypatch.setenv("GRY_TOTP_SECRET", "JBSWY3DPEHPK3PXP")
    monkeypatch.setenv("HOME", str(tmp_path))

    settings = Settings(_env_file=None, STORAGE_DIR="")

    assert settings.PORT == 4100
    assert settings.TOTP_SECRET == "JBSWY3DPEHPK3PXP"
    assert settings.STORAGE_PATH == Path(tmp_path) / ".gry-links"


def test_plain_names_win_over_gry_prefixed(monkeypatch):
    monkeypatch.setenv("PORT", "5000")
    monkeypatch.setenv("GRY_PORT", "6000")
    monkeypatch.setenv("TOTP_SECRET", "JBSWY3DPEHPK3PXP")
    monkeypatch.setenv("GRY_TOTP_SECRET", "KRSXG5CTMVRXEZLU")

    settings = Settings(_env_file=None)

    assert settings.PORT == 5000
    assert settings.TOTP_SECRET == "JBSWY3DPEHPK3PXP"
