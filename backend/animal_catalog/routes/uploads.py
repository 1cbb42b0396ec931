"""
Animal Catalog Backend — Uploaded Image Serving
=================================================

What:  Serves stored animal images read-only under /uploads/animals.
How:   FileService resolves the filename inside the image directory
       (rejecting traversal) and FileResponse streams it back.
Who:   Requested by <img> tags using the `image` URL of an animal.
"""

import mimetypes

from fastapi import APIRouter
from fastapi.responses import FileResponse

from animal_catalog.services.file_service import ANIMAL_IMAGE_URL_PREFIX, file_service

router = APIRouter(tags=["Uploads"])


@router.get(
    f"{ANIMAL_IMAGE_URL_PREFIX}/{{filename}}",
    summary="Serve an uploaded animal image",
    responses={
        200: {"description": "Image file"},
        400: {"description": "Invalid file path"},
        404: {"description": "File not found"},
    },
)
async def serve_animal_image(filename: str) -> FileResponse:
    path = file_service.resolve_image(filename)
    media_type, _ = mimetypes.guess_type(path.name)
    return FileResponse(
        path=str(path),
        media_type=media_type or "application/octet-stream",
        headers={"Cache-Control": "public, max-age=86400"},
    )
