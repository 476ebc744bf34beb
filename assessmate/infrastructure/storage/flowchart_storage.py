import logging
import secrets
import time
from pathlib import Path

from fastapi import UploadFile

from assessmate.core.exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = ("image/jpeg", "image/png", "image/gif")
FLOWCHART_SUBDIR = "flowcharts"
PUBLIC_PREFIX = "/uploads"


def _unique_name(original_filename: str) -> str:
    suffix = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}"
    return f"flowchart-{suffix}{Path(original_filename).suffix.lower()}"


def save_flowchart(upload: UploadFile, upload_dir: str, max_bytes: int) -> str:
    """Store an uploaded flowchart image and return its public relative path."""
    if upload is None or not upload.filename:
        raise ValidationError("No file uploaded")
    if upload.content_type not in ALLOWED_CONTENT_TYPES:
        logger.warning(f"Rejected flowchart upload with type {upload.content_type}")
        raise ValidationError("Invalid file type. Only JPEG, PNG and GIF are allowed.")

    # Read one byte past the limit so oversize files are detected without loading them fully
    content = upload.file.read(max_bytes + 1)
    if len(content) > max_bytes:
        logger.warning(f"Rejected flowchart upload {upload.filename}: larger than {max_bytes} bytes")
        raise ValidationError(f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB")

    target_dir = Path(upload_dir) / FLOWCHART_SUBDIR
    filename = _unique_name(upload.filename)
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        (target_dir / filename).write_bytes(content)
    except OSError as e:
        logger.error(f"Failed to store flowchart {upload.filename}: {e}", exc_info=True)
        raise StorageError()

    file_path = f"{PUBLIC_PREFIX}/{FLOWCHART_SUBDIR}/{filename}"
    logger.info(f"Stored flowchart upload at {file_path}")
    return file_path
