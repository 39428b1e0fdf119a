"""Upload endpoints for community images"""
import logging
from typing import List

from fastapi import APIRouter, UploadFile, File, Depends, status

from designhub.api.deps import get_current_active_user
from designhub.models.user import User
from designhub.utils.file_handler import MAX_IMAGES_PER_UPLOAD, get_file_url, save_community_images

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/uploads",
    tags=["Upload"]
)


@router.post("/community-images", status_code=status.HTTP_201_CREATED)
def upload_community_images(
    files: List[UploadFile] = File(...),
    current_user: User = Depends(get_current_active_user),
):
    """
    Upload images for a community post.

    - **files**: 1 to 5 JPG, PNG, GIF or WEBP images (max 5MB each)

    Returns public URLs in upload order, ready to be used as post `images`.
    """
    file_paths = save_community_images(files)
    logger.info(f"Community images uploaded: count={len(file_paths)}, user={current_user.id}")

    return {
        "success": True,
        "images": [get_file_url(path) for path in file_paths],
        "max_images": MAX_IMAGES_PER_UPLOAD,
    }
