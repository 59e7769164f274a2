"""
Image file storage for uploaded news pictures.

Files live in one flat directory (`UPLOAD_DIR`) and are named
`<epoch milliseconds><original extension>`. The stored name is what the
`news.image` column holds and what `GET /uploads/{name}` serves back.
"""

from __future__ import annotations

import asyncio
import logging
import os
import time
from pathlib import Path

from fastapi import UploadFile

from .errors import BadRequest, NotFound, PayloadTooLarge

ALLOWED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}

DEFAULT_UPLOAD_DIR = "uploads"
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10 MiB

logger = logging.getLogger(__name__)


def upload_dir() -> Path:
    raw = os.environ.get("UPLOAD_DIR", DEFAULT_UPLOAD_DIR).strip() or DEFAULT_UPLOAD_DIR
    return Path(raw)


def ensure_upload_dir() -> Path:
    directory = upload_dir()
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def max_upload_bytes() -> int:
    raw = os.environ.get("MAX_UPLOAD_BYTES", "").strip()
    if not raw:
        return DEFAULT_MAX_UPLOAD_BYTES
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_MAX_UPLOAD_BYTES
    return value if value > 0 else DEFAULT_MAX_UPLOAD_BYTES


def _file_ext(filename: str) -> str:
    return Path(filename).suffix.lower()


def validate_image(file: UploadFile) -> str:
    """
    Return the normalized extension if this upload is an acceptable image.

    Checked on the filename because `content_type` is often missing or wrong.
    """
    if not file.filename:
        raise BadRequest("Missing filename.")

    ext = _file_ext(file.filename)
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        raise BadRequest(
            f"Unsupported image type '{ext}'. Allowed: {sorted(ALLOWED_IMAGE_EXTENSIONS)}"
        )
    return ext


async def read_upload_bytes(file: UploadFile, max_bytes: int) -> bytes:
    chunk_size = 1024 * 1024  # 1 MiB
    buf = bytearray()

    while True:
        chunk = await file.read(chunk_size)
        if not chunk:
            break
        buf.extend(chunk)
        if len(buf) > max_bytes:
            raise PayloadTooLarge(f"File too large. Max is {max_bytes} bytes.")

    return bytes(buf)


def stored_name(ext: str, *, now_ms: int | None = None) -> str:
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{stamp}{ext}"


def _write_new_file(directory: Path, ext: str, data: bytes, now_ms: int) -> str:
    """
    Create a file that did not exist before and return its name.

    Uploads landing in the same millisecond take the next free stamp.
    """
    stamp = now_ms
    while True:
        name = stored_name(ext, now_ms=stamp)
        try:
            with open(directory / name, "xb") as fh:
                fh.write(data)
        except FileExistsError:
            stamp += 1
            continue
        return name


async def save_image(file: UploadFile) -> str:
    """
    Persist an uploaded image and return its stored file name.
    """
    ext = validate_image(file)
    data = await read_upload_bytes(file, max_bytes=max_upload_bytes())

    directory = ensure_upload_dir()
    # Disk writes run off the event loop.
    name = await asyncio.to_thread(
        _write_new_file, directory, ext, data, int(time.time() * 1000)
    )

    logger.info("image_stored name=%s size_bytes=%s", name, len(data))
    return name


def image_path(name: str) -> Path:
    """
    Resolve a stored image name to its path. Only bare file names are accepted.
    """
    if not name or Path(name).name != name or name in {".", ".."}:
        raise NotFound("Image not found")

    path = upload_dir() / name
    if not path.is_file():
        raise NotFound("Image not found")
    return path


def remove_image(name: str | None) -> None:
    """
    Best-effort delete of a stored image.

    Runs as a background task after the response; it must never raise.
    """
    if not name:
        return None

    path = upload_dir() / Path(name).name
    try:
        path.unlink()
    except FileNotFoundError:
        logger.warning("image_remove_skipped name=%s reason=missing", name)
    except OSError:
        logger.exception("image_remove_failed name=%s", name)
    else:
        logger.info("image_removed name=%s", name)
