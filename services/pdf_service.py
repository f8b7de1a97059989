from typing import Optional

from config import get_settings
from models.errors import ValidationError
from models.schemas import UploadedDocument

PDF_CONTENT_TYPE = "application/pdf"


def validate_pdf_upload(upload: Optional[UploadedDocument]) -> UploadedDocument:
    """Check that an upload is present, is a PDF and fits the size limit."""
    if upload is None:
        raise ValidationError("No file provided", constraint="absent")

    if upload.content_type != PDF_CONTENT_TYPE:
        raise ValidationError("File must be a PDF", constraint="content_type")

    max_size = get_settings().max_upload_bytes
    if len(upload.data) > max_size:
        raise ValidationError(
            f"File size must be less than {max_size // (1024 * 1024)}MB",
            constraint="size",
        )

    return upload
