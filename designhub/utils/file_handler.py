"""File upload handler for community images"""
import uuid
import logging
from pathlib import Path
from typing import List, Optional, Set, Tuple
from fastapi import UploadFile, HTTPException, status
from designhub.config import settings

# Setup logging
logger = logging.getLogger(__name__)

# ============================================
# FILE TYPE DEFINITIONS WITH MIME VALIDATION
# ============================================

# Magic bytes signatures for file type validation
MAGIC_BYTES = {
    # JPEG: FFD8FF
    "jpeg": [b"\xff\xd8\xff"],
    # PNG: 89504E47
    "png": [b"\x89PNG\r\n\x1a\n"],
    # GIF: GIF87a or GIF89a
    "gif": [b"GIF87a", b"GIF89a"],
    # WEBP: RIFF....WEBP
    "webp": [b"RIFF"],
}

# Extension to magic type mapping
EXTENSION_TO_TYPE = {
    ".jpg": "jpeg",
    ".jpeg": "jpeg",
    ".png": "png",
    ".gif": "gif",
    ".webp": "webp",
}

ALLOWED_IMAGE_EXTENSIONS: Set[str] = {".jpg", ".jpeg", ".png", ".gif", ".webp"}

MAX_IMAGES_PER_UPLOAD = 5

# Upload paths mapping (relative to UPLOAD_DIR)
UPLOAD_PATHS = {
    "community_images": "images/community",
}


# ============================================
# SECURITY VALIDATION FUNCTIONS
# ============================================

def validate_magic_bytes(file_content: bytes, expected_type: str) -> bool:
    """
    Validate file content by checking magic bytes (file signature).

    Args:
        file_content: First few bytes of the file
        expected_type: Expected file type (jpeg, png, gif, webp)

    Returns:
        True if magic bytes match expected type
    """
    if expected_type not in MAGIC_BYTES:
        return False

    if expected_type == "webp":
        return file_content[:4] == b"RIFF" and file_content[8:12] == b"WEBP"

    return any(file_content.startswith(signature) for signature in MAGIC_BYTES[expected_type])


def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename to prevent path traversal.

    Returns:
        Sanitized filename (only alphanumeric, dash, underscore, and dot)
    """
    if not filename:
        return "unnamed"

    basename = Path(filename).name

    safe_chars = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-_.")
    sanitized = "".join(c if c in safe_chars else "_" for c in basename)

    # No hidden files
    sanitized = sanitized.lstrip(".")

    return sanitized if sanitized else "unnamed"


def get_file_extension(filename: str) -> str:
    """Safely get file extension in lowercase."""
    if not filename:
        return ""
    return Path(filename).suffix.lower()


# ============================================
# MAIN VALIDATION FUNCTION
# ============================================

def validate_image_file(
    upload_file: UploadFile,
    max_size_bytes: Optional[int] = None
) -> Tuple[bytes, str]:
    """
    Validate one uploaded image: extension, size and content signature.

    Returns:
        Tuple of (file_content, file_extension)

    Raises:
        HTTPException: If validation fails
    """
    if not upload_file or not upload_file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or missing file"
        )

    original_filename = sanitize_filename(upload_file.filename)
    file_ext = get_file_extension(original_filename)

    if file_ext not in ALLOWED_IMAGE_EXTENSIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File type not allowed. Accepted formats: {', '.join(sorted(ALLOWED_IMAGE_EXTENSIONS))}"
        )

    upload_file.file.seek(0)
    file_content = upload_file.file.read()
    upload_file.file.seek(0)

    max_size = max_size_bytes or settings.MAX_UPLOAD_SIZE
    if len(file_content) > max_size:
        size_mb = max_size / (1024 * 1024)
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File too large. Maximum: {size_mb:.1f}MB"
        )

    if len(file_content) == 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Empty files are not allowed"
        )

    expected_type = EXTENSION_TO_TYPE[file_ext]
    if not validate_magic_bytes(file_content, expected_type):
        logger.warning(
            f"Magic bytes mismatch - filename: {original_filename}, "
            f"expected_type: {expected_type}"
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="File content does not match its extension"
        )

    return file_content, file_ext


# ============================================
# FILE STORAGE FUNCTIONS
# ============================================

def save_upload_file(upload_file: UploadFile, upload_type: str) -> str:
    """
    Save an uploaded image to local storage.

    Returns:
        str: Relative URL path (e.g., /uploads/images/community/uuid.png)
    """
    if upload_type not in UPLOAD_PATHS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid upload type: {upload_type}"
        )

    file_content, file_ext = validate_image_file(upload_file)

    unique_filename = f"{uuid.uuid4()}{file_ext}"
    subfolder = UPLOAD_PATHS[upload_type]
    upload_path = Path(settings.UPLOAD_DIR) / subfolder
    upload_path.mkdir(parents=True, exist_ok=True)

    file_path = upload_path / unique_filename

    try:
        with open(file_path, "wb") as f:
            f.write(file_content)
    except OSError as e:
        logger.error(f"Failed to save file: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save file. Please try again."
        )

    logger.info(f"File saved: {file_path}")
    return f"/uploads/{subfolder}/{unique_filename}"


def save_community_images(files: List[UploadFile]) -> List[str]:
    """
    Validate and store a batch of community images, in upload order.

    Every file is validated before any is written, so a bad file rejects the
    whole batch.
    """
    if not files:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least one image is required"
        )
    if len(files) > MAX_IMAGES_PER_UPLOAD:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"You can upload at most {MAX_IMAGES_PER_UPLOAD} images"
        )

    for upload_file in files:
        validate_image_file(upload_file)

    return [save_upload_file(upload_file, "community_images") for upload_file in files]


def get_file_url(file_path: str) -> Optional[str]:
    """
    Get public URL for a stored file.

    Args:
        file_path: Relative path like /uploads/images/... or just the stored path

    Returns:
        Full URL like http://localhost:8000/uploads/images/...
    """
    if not file_path:
        return None

    if not file_path.startswith("/uploads"):
        if file_path.startswith("uploads/"):
            file_path = f"/{file_path}"
        elif file_path.startswith("/"):
            file_path = f"/uploads{file_path}"
        else:
            file_path = f"/uploads/{file_path}"

    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}{file_path}"
