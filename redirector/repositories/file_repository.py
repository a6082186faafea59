"""Filesystem-backed redirect repository.

Each redirect is a single file directly under the storage root: the file
name is the slug and the content is the UTF-8 target URL.

Writes are published atomically. A new target is first written in full to
a hidden temporary file in the same directory, then either hard linked into
place (create, which fails if the name is taken) or renamed over the entry
(update). Readers therefore see the old target or the new one, never a mix.
Check-and-mutate runs under a per-slug lock so create, update and delete on
the same slug are serialized while different slugs proceed independently.
"""

import asyncio
import logging
import os
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Callable, Dict, TypeVar, Union

from redirector.repositories.base import (
    BaseRedirectRepository,
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidSlugError,
    RepositoryError,
    is_valid_slug,
)

logger = logging.getLogger(__name__)

FILE_MODE = 0o640
DIR_MODE = 0o750
TEMP_SUFFIX = ".tmp"

T = TypeVar("T")


class SlugLocks:
    """Per-slug asyncio locks, discarded once nobody holds or awaits them."""

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}
        self._users: Dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, slug: str) -> AsyncIterator[None]:
        lock = self._locks.get(slug)
        if lock is None:
            lock = self._locks[slug] = asyncio.Lock()
            self._users[slug] = 0
        self._users[slug] += 1
        try:
            async with lock:
                yield
        finally:
            self._users[slug] -= 1
            if self._users[slug] == 0:
                del self._users[slug]
                del self._locks[slug]

    def __len__(self) -> int:
        return len(self._locks)


async def _run_to_completion(func: Callable[..., T], *args) -> T:
    """
    Run blocking ``func`` in a worker thread and wait for it even if cancelled.

    Cancelling the caller cannot stop the thread, so the caller keeps waiting
    (and keeps any slug lock it holds) until the I/O has finished, then
    re-raises the cancellation.
    """
    task = asyncio.ensure_future(asyncio.to_thread(func, *args))
    try:
        return await asyncio.shield(task)
    except asyncio.CancelledError:
        while not task.done():
            try:
                await asyncio.wait({task})
            except asyncio.CancelledError:
                continue
        if not task.cancelled():
            task.exception()
        raise


def _discard(path: Union[str, Path]) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass


class FileRedirectRepository(BaseRedirectRepository):
    """
    Repository storing one file per redirect under a root directory.

    Blocking file I/O runs in worker threads, so the event loop only waits
    at the storage boundary.
    """

    def __init__(self, root: Union[str, Path]):
        """
        Initialize the repository.

        Args:
            root: Directory holding the redirect files
        """
        self.root = Path(root)
        self._locks = SlugLocks()

    def ensure_storage(self) -> None:
        """Create the storage root if it does not exist yet."""
        self.root.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)

    def _path_for(self, slug: str) -> Path:
        # The slug alphabet has no separators or dots, so the path stays inside root
        if not is_valid_slug(slug):
            raise InvalidSlugError(slug)
        return self.root / slug

    def _write_temp(self, slug: str, target: str) -> str:
        fd, tmp_path = tempfile.mkstemp(prefix=f".{slug}.", suffix=TEMP_SUFFIX, dir=self.root)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(target.encode("utf-8"))
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, FILE_MODE)
        except Exception:
            _discard(tmp_path)
            raise
        return tmp_path

    def _read_entry(self, path: Path) -> str:
        # Bytes first: text mode would rewrite "\r\n" and "\r" as "\n"
        with open(path, "rb") as f:
            return f.read().decode("utf-8")

    def _create_entry(self, slug: str, path: Path, target: str) -> None:
        tmp_path = self._write_temp(slug, target)
        try:
            # link() refuses to overwrite, which makes creation exclusive
            os.link(tmp_path, path)
        finally:
            _discard(tmp_path)

    def _replace_entry(self, slug: str, path: Path, target: str) -> None:
        if not path.exists():
            raise EntityNotFoundError(slug)
        tmp_path = self._write_temp(slug, target)
        try:
            os.replace(tmp_path, path)
        except Exception:
            _discard(tmp_path)
            raise

    async def get(self, slug: str) -> str:
        """
        Get the target for a slug.

        Args:
            slug: The slug to look up

        Returns:
            The stored target URL

        Raises:
            EntityNotFoundError: If no redirect exists for the slug
            RepositoryError: On storage errors
        """
        path = self._path_for(slug)
        try:
            return await asyncio.to_thread(self._read_entry, path)
        except FileNotFoundError:
            raise EntityNotFoundError(slug) from None
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading redirect {slug}: {e}")
            raise RepositoryError(f"Storage error reading redirect {slug}: {e}") from e

    async def create(self, slug: str, target: str) -> None:
        """
        Create a redirect.

        Args:
            slug: The slug to create
            target: Already validated target URL

        Raises:
            DuplicateEntityError: If the slug already exists
            RepositoryError: On storage errors
        """
        path = self._path_for(slug)
        async with self._locks.hold(slug):
            try:
                await _run_to_completion(self._create_entry, slug, path, target)
            except FileExistsError:
                raise DuplicateEntityError(slug) from None
            except OSError as e:
                logger.error(f"Error creating redirect {slug}: {e}")
                raise RepositoryError(f"Storage error creating redirect {slug}: {e}") from e
        logger.info(f"Created redirect {slug}")

    async def update(self, slug: str, target: str) -> None:
        """
        Replace the target of an existing redirect.

        Args:
            slug: The slug to update
            target: Already validated target URL

        Raises:
            EntityNotFoundError: If the slug does not exist
            RepositoryError: On storage errors
        """
        path = self._path_for(slug)
        async with self._locks.hold(slug):
            try:
                await _run_to_completion(self._replace_entry, slug, path, target)
            except OSError as e:
                logger.error(f"Error updating redirect {slug}: {e}")
                raise RepositoryError(f"Storage error updating redirect {slug}: {e}") from e
        logger.info(f"Updated redirect {slug}")

    async def delete(self, slug: str) -> None:
        """
        Delete a redirect.

        Raises:
            EntityNotFoundError: If the slug does not exist
            RepositoryError: On storage errors
        """
        path = self._path_for(slug)
        async with self._locks.hold(slug):
            try:
                await _run_to_completion(os.unlink, path)
            except FileNotFoundError:
                raise EntityNotFoundError(slug) from None
            except OSError as e:
                logger.error(f"Error deleting redirect {slug}: {e}")
                raise RepositoryError(f"Storage error deleting redirect {slug}: {e}") from e
        logger.info(f"Deleted redirect {slug}")

    async def exists(self, slug: str) -> bool:
        path = self._path_for(slug)
        try:
            return await asyncio.to_thread(path.is_file)
        except OSError as e:
            raise RepositoryError(f"Storage error checking redirect {slug}: {e}") from e

    def _root_usable(self) -> bool:
        return self.root.is_dir() and os.access(self.root, os.W_OK | os.X_OK)

    async def is_ready(self) -> bool:
        """The root must be a directory we can create entries in."""
        try:
            return await asyncio.to_thread(self._root_usable)
        except OSError as e:
            logger.warning(f"Storage root {self.root} is not usable: {e}")
            return False
