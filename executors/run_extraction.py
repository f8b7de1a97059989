import logging
from typing import Optional

from executors.workflow import run_workflow
from graphs.extraction import create_extraction_graph
from models.errors import ExtractionError, ModelInvocationError
from models.schemas import RFP, UploadedDocument
from services.blob_service import BlobStagingService, staged_file, staged_name
from services.pdf_service import PDF_CONTENT_TYPE, validate_pdf_upload

logger = logging.getLogger(__name__)


async def run_extraction(
    upload: Optional[UploadedDocument],
    staging: BlobStagingService,
    llm,
    timeout: Optional[float] = None,
) -> RFP:
    """
    Extract a structured RFP from an uploaded PDF.

    The file is staged so the model can fetch it, and removed again once the
    model call has finished.
    """
    upload = validate_pdf_upload(upload)
    name = staged_name("rfp", upload.filename)

    async with staged_file(staging, name, upload.data, PDF_CONTENT_TYPE) as file_url:
        logger.info(f"Extracting RFP from {upload.filename}")
        try:
            result = await run_workflow(
                create_extraction_graph(llm), {"file_url": file_url}, timeout
            )
        except ModelInvocationError as e:
            logger.error(f"Error processing RFP: {str(e)}")
            raise ExtractionError(f"Failed to process RFP document: {str(e)}") from e

    rfp = result["rfp"]
    logger.info(f"Extracted {len(rfp.requirements)} requirements from '{rfp.title}'")
    return rfp
