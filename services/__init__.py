# Services module

from services.blob_service import BlobStagingService, staged_file, staged_name
from services.formatting import format_requirements, summarize_bids
from services.llm_service import get_anthropic_llm, invoke_structured, validate_structured_output
from services.pdf_service import validate_pdf_upload
from services.project_store import ProjectStore

__all__ = [
    "BlobStagingService",
    "staged_file",
    "staged_name",
    "format_requirements",
    "summarize_bids",
    "get_anthropic_llm",
    "invoke_structured",
    "validate_structured_output",
    "validate_pdf_upload",
    "ProjectStore",
]
