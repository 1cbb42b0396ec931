"""
Animal Catalog Backend — Request Dependencies
===============================================

What:  FastAPI dependencies shared by route handlers.
How:   FastAPI resolves dependencies before it calls the handler, so any
       ValidationError raised here fails the request before the handler
       body executes.

animal_image_upload:
    Reads the single `image` file part of a create-animal request and
    enforces the upload size limit. Returns None when no file was sent;
    the handler's validator then answers 400 "Animal image is required".
"""

import logging
from typing import Optional

from fastapi import File, UploadFile

from animal_catalog.services.file_service import ImageUpload, file_service

logger = logging.getLogger(__name__)

# Multipart field name the frontend uses for animal images
IMAGE_FIELD = "image"


async def animal_image_upload(
    image: Optional[UploadFile] = File(
        default=None,
        alias=IMAGE_FIELD,
        description="Animal image file (max 5MB)",
    ),
) -> Optional[ImageUpload]:
    if image is None:
        return None

    # The multipart parser has already spooled the part; never pull more than
    # one byte past the limit into memory
    limit = file_service.max_size
    try:
        file_service.validate_size(image.size, 0)
        content = await image.read(limit + 1)
    finally:
        await image.close()

    # Browsers send an empty, unnamed part when no file was chosen
    if not content and not image.filename:
        return None

    file_service.validate_size(None, len(content))
    logger.info(
        "Received image upload: filename=%s, size=%d bytes",
        image.filename or "unknown",
        len(content),
    )

    return ImageUpload(
        filename=image.filename,
        content=content,
        content_type=image.content_type,
    )
