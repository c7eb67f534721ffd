"""Stores uploaded files on local disk under `settings.upload_dir`."""

import asyncio
import re
import secrets
import time
from dataclasses import dataclass
from pathlib import Path

from fastapi import UploadFile

from src.taskboard.core.config import Settings
from src.taskboard.core.exceptions import PayloadTooLargeError
from src.taskboard.core.logging import get_logger

logger = get_logger(__name__)

_SAFE_EXTENSION = re.compile(r"^\.[a-z0-9]{1,10}$")


@dataclass(frozen=True)
class StoredFile:
    filename: str
    original_name: str
    url: str
    content_type: str
    size: int


def _write(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


class UploadService:
    def __init__(self, settings: Settings):
        self.upload_dir = Path(settings.upload_dir)

    async def save(self, upload: UploadFile, prefix: str, max_bytes: int) -> StoredFile:
        """Persist `upload` as `<prefix>-<ms>-<rand><ext>`.

        The size ceiling is checked before anything touches the disk.
        """
        data = await upload.read(max_bytes + 1)
        if len(data) > max_bytes:
            raise PayloadTooLargeError(f"File exceeds the {max_bytes // (1024 * 1024)} MB limit")

        original_name = Path(upload.filename or "upload").name
        extension = Path(original_name).suffix.lower()
        if not _SAFE_EXTENSION.match(extension):
            extension = ""
        filename = f"{prefix}-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{extension}"

        await asyncio.to_thread(_write, self.upload_dir / filename, data)
        logger.info("File stored", filename=filename, size=len(data))

        return StoredFile(
            filename=filename,
            original_name=original_name,
            url=f"/uploads/{filename}",
            content_type=upload.content_type or "application/octet-stream",
            size=len(data),
        )
