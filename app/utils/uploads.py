"""
Image upload storage
"""
import logging
import uuid
from pathlib import Path
from typing import List, Tuple
from fastapi import UploadFile
from app.config import settings
from app.exceptions import NotFoundError, ValidationFailedError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}
DEFAULT_FOLDER = "default"


def validate_image_file(file: UploadFile) -> str:
    """Validate the content type and return the extension to store the file with"""
    if file.content_type not in ALLOWED_IMAGE_TYPES:
        raise ValidationFailedError(
            "Unsupported file type. Only JPEG, PNG, GIF and WEBP images are allowed.",
            details={"filename": file.filename, "content_type": file.content_type}
        )

    suffix = Path(file.filename).suffix.lower() if file.filename else ""
    return suffix or ALLOWED_IMAGE_TYPES[file.content_type]


def read_image_file(file: UploadFile) -> Tuple[str, bytes]:
    """Validate type and size; return the extension and the file content"""
    file_ext = validate_image_file(file)

    content = file.file.read()
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise ValidationFailedError(
            f"File size exceeds maximum allowed size of {settings.MAX_UPLOAD_SIZE / 1024 / 1024}MB",
            details={"filename": file.filename}
        )
    return file_ext, content


def store_image(content: bytes, file_ext: str, upload_type: str, folder: str = DEFAULT_FOLDER) -> str:
    """Write already validated content under a unique name and return its URL"""
    unique_filename = f"{uuid.uuid4()}{file_ext}"

    upload_dir = Path(settings.UPLOAD_DIR) / upload_type / folder
    upload_dir.mkdir(parents=True, exist_ok=True)

    file_path = upload_dir / unique_filename
    with open(file_path, 'wb') as f:
        f.write(content)

    logger.info(f"Stored upload as {file_path}")
    return f"{settings.CDN_BASE_URL}/uploads/{upload_type}/{folder}/{unique_filename}"


def stored_file_path(upload_type: str, folder: str, filename: str) -> Path:
    """Path of a previously stored upload; NotFoundError if there is none"""
    file_path = Path(settings.UPLOAD_DIR) / upload_type / folder / filename
    if not file_path.is_file():
        raise NotFoundError("File not found", details={"path": f"{upload_type}/{folder}/{filename}"})
    return file_path


def save_uploaded_images(files: List[UploadFile], upload_type: str, folder: str = DEFAULT_FOLDER) -> List[str]:
    """Validate the whole batch before writing anything, then store it"""
    if not files:
        raise ValidationFailedError("No files were uploaded")
    if len(files) > settings.MAX_UPLOAD_FILES:
        raise ValidationFailedError(f"A maximum of {settings.MAX_UPLOAD_FILES} images can be uploaded at once")

    images = [read_image_file(file) for file in files]
    return [store_image(content, file_ext, upload_type, folder) for file_ext, content in images]
