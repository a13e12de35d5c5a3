"""
Image uploads.

Files land in ``settings.UPLOAD_DIR`` as ``<epoch-ms>-<random><ext>`` and are
referenced by the relative URL ``/uploads/<filename>``.
"""

import logging
import os
import secrets
import shutil
import time
from pathlib import Path

from fastapi import UploadFile

from techmatch.database.config.config import settings
from techmatch.errors import ValidationError

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads/"


def _extension(filename: str | None) -> str:
    return os.path.splitext(filename or "")[1].lower()


def save_image(upload: UploadFile) -> str:
    """
    Persist an uploaded image.

    Parameters
    ----------
    upload : UploadFile
        The multipart file part.

    Returns
    -------
    str
        Relative URL of the stored file.

    Raises
    ------
    ValidationError
        If the extension is not in ``ALLOWED_IMAGE_EXTENSIONS``.
    """
    ext = _extension(upload.filename)
    if ext.lstrip(".") not in settings.allowed_image_extensions:
        raise ValidationError(f"Unsupported image type '{ext or upload.filename}'")

    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    new_name = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{ext}"
    with open(upload_dir / new_name, "wb") as out:
        shutil.copyfileobj(upload.file, out)
    logger.info("Stored upload %s as %s", upload.filename, new_name)
    return UPLOAD_URL_PREFIX + new_name


def remove_upload(ref: str | None) -> bool:
    """
    Best-effort removal of a stored upload.

    Only the basename of ``ref`` is used, so references can never point
    outside the upload directory. Returns True when a file was removed.
    """
    if not ref:
        return False
    name = os.path.basename(ref)
    if not name:
        return False
    path = Path(settings.UPLOAD_DIR) / name
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.warning("Could not remove upload %s: %s", path, e)
        return False
    return True
