# app/system_services/prescriptions.py
import logging
import shutil
import uuid
from pathlib import Path

from fastapi import UploadFile

from config.appconfig import settings

logger = logging.getLogger(__name__)


def save_prescription(upload: UploadFile, appointment_id: int) -> str:
    """Store an uploaded prescription file and return its path."""
    upload_dir = Path(settings.PRESCRIPTION_UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)

    suffix = Path(upload.filename or "").suffix
    destination = upload_dir / f"appointment-{appointment_id}-{uuid.uuid4().hex}{suffix}"
    with destination.open("wb") as buffer:
        shutil.copyfileobj(upload.file, buffer)

    logger.info(f"Stored prescription for appointment {appointment_id} at {destination}")
    return str(destination)


def discard_prescription(path: str) -> None:
    Path(path).unlink(missing_ok=True)
