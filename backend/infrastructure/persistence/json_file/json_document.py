from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable

from domain.wishlist import StorageError

logger = logging.getLogger(__name__)


async def finish_in_thread(func: Callable[..., Any], *args: Any) -> Any:
    """Run blocking file I/O in a worker thread and wait for it even if cancelled.

    A cancelled caller still waits for the thread before re-raising, so a store
    lock held around this call is not released while the file is being written
    (loads write too, when they initialize a missing file).
    """
    job = asyncio.ensure_future(asyncio.to_thread(func, *args))
    try:
        return await asyncio.shield(job)
    except asyncio.CancelledError:
        await job
        raise


class JsonDocument:
    """A whole-file JSON document on local disk.

    Reads and writes are blocking; async callers run them in a worker thread
    while holding the owning store's lock.

    - A missing file is created with ``default()`` on first read.
    - A file that cannot be parsed raises ``StorageError`` and is left untouched.
    - Writes go to a temp file in the same directory and are moved into place
      with ``os.replace`` so a crash never leaves a half-written document.
    """

    def __init__(self, path: Path | str, *, default: Callable[[], Any]) -> None:
        self._path = Path(path)
        self._default = default

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Any:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            data = self._default()
            logger.info("initializing missing store file path=%s", self._path)
            self.dump(data)
            return data
        except UnicodeDecodeError as exc:
            raise StorageError(f"corrupt store file {self._path}: {exc}") from exc
        except OSError as exc:
            raise StorageError(f"unable to read {self._path}: {exc}") from exc

        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageError(f"corrupt store file {self._path}: {exc}") from exc

    def dump(self, data: Any) -> None:
        payload = json.dumps(data, ensure_ascii=False, indent=2)
        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                dir=str(self._path.parent),
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self._path)
            tmp_name = None
        except OSError as exc:
            raise StorageError(f"unable to write {self._path}: {exc}") from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.warning("failed to remove temp file %s", tmp_name)
