import logging
import os
from pathlib import Path
from typing import List

from fastapi import UploadFile

from sociaty.core.config import Settings
from sociaty.services.ids import now_ms, random_id

logger = logging.getLogger(__name__)

SUFFIX_LENGTH = 6


def generate_filename(original_name: str) -> str:
    """<ms timestamp>-<random suffix><original extension>"""
    ext = os.path.splitext(original_name or "")[1]
    return f"{now_ms()}-{random_id(SUFFIX_LENGTH)}{ext}"


def selected_files(files: List[UploadFile]) -> List[UploadFile]:
    # browsers send an empty part when no file was picked
    return [f for f in files or [] if f.filename]


async def save_uploads(files: List[UploadFile], settings: Settings) -> List[str]:
    """Write each upload into the upload directory and return their public URL paths, in order."""
    upload_dir: Path = settings.upload_dir
    upload_dir.mkdir(parents=True, exist_ok=True)

    urls: List[str] = []
    for upload in files:
        filename = generate_filename(upload.filename)
        file_path = upload_dir / filename

        contents = await upload.read()
        file_path.write_bytes(contents)
        logger.info("Saved upload %s as %s (%d bytes)", upload.filename, filename, len(contents))

        urls.append(f"{settings.upload_url}/{filename}")

    return urls
