"""
Upload helpers for persisting request files to disk and cleaning them up.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable
from uuid import uuid4

from flask import current_app
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

DEFAULT_UPLOAD_SUBDIR = "uploads"
CSV_UPLOAD_SUBDIR = "csv_imports"
IMAGE_EXTENSIONS: tuple[str, ...] = ("jpeg", "jpg", "png", "gif")


def _normalize_upload_dir(configured_path: str | None, instance_path: str) -> Path:
    if not configured_path:
        return Path(instance_path) / DEFAULT_UPLOAD_SUBDIR

    candidate = Path(configured_path)
    if candidate.is_absolute():
        return candidate

    return Path(instance_path) / candidate


def resolve_upload_directory(app, subdir: str | None = None) -> Path:
    """
    Determine and create (if necessary) the upload directory.

    Weld images live directly under the upload root so they can be served from
    ``/uploads/<filename>``; temporary CSV imports go to a subdirectory.
    """

    upload_dir = _normalize_upload_dir(app.config.get("UPLOAD_DIR"), app.instance_path)
    if subdir:
        upload_dir = upload_dir / subdir
    upload_dir.mkdir(parents=True, exist_ok=True)
    return upload_dir


def allowed_file(filename: str, allowed_extensions: Iterable[str]) -> bool:
    """
    Validate the uploaded filename extension against the allowed set.
    """

    if not filename or "." not in filename:
        return False
    extension = filename.rsplit(".", 1)[1].lower()
    return extension in {ext.lower() for ext in allowed_extensions}


def upload_size(file_storage: FileStorage) -> int:
    """Return the size of an uploaded file in bytes without consuming its stream."""

    stream = file_storage.stream
    position = stream.tell()
    stream.seek(0, 2)
    size_bytes = stream.tell()
    stream.seek(position)
    return size_bytes


def persist_upload(
    file_storage: FileStorage,
    app,
    *,
    subdir: str | None = None,
    prefix: str = "",
    default_suffix: str = ".csv",
) -> Path:
    """
    Persist the uploaded file to disk and return the fully-qualified path.

    Files are stored using a UUID-based filename to avoid collisions. The
    original extension is preserved when possible.
    """

    upload_dir = resolve_upload_directory(app, subdir)
    original_name = secure_filename(file_storage.filename or "")
    extension = Path(original_name).suffix.lower() if original_name else ""
    if not extension:
        extension = default_suffix

    target_path = upload_dir / f"{prefix}{uuid4().hex}{extension}"
    file_storage.save(target_path)
    current_app.logger.debug("Upload persisted to %s", target_path)
    return target_path


def cleanup_upload(path: Path) -> None:
    """
    Remove a stored upload, logging but ignoring filesystem errors.
    """

    try:
        path.unlink(missing_ok=True)
    except OSError as exc:  # pragma: no cover - logged only
        current_app.logger.warning("Failed to remove upload %s: %s", path, exc)
