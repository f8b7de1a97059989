import json
import logging
from typing import List, Optional, Sequence, Union

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from executors.workflow import run_workflow
from graphs.assessment import create_assessment_graph
from models.errors import AssessmentError, ModelInvocationError, ValidationError
from models.schemas import Bid, Requirement, UploadedDocument
from services.blob_service import BlobStagingService, staged_file, staged_name
from services.pdf_service import PDF_CONTENT_TYPE, validate_pdf_upload

logger = logging.getLogger(__name__)

_requirements_adapter = TypeAdapter(List[Requirement])


def parse_requirements(raw: Union[None, str, Sequence]) -> List[Requirement]:
    """
    Parse the RFP requirements a bid is assessed against.

    Accepts the serialized JSON form sent by clients or an already decoded
    sequence. Distinguishes absent from malformed input.
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise ValidationError("RFP requirements are required", constraint="absent")

    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise ValidationError(
                "RFP requirements must be valid JSON", constraint="malformed"
            ) from e

    if not isinstance(raw, list):
        raise ValidationError("RFP requirements must be a list", constraint="malformed")

    try:
        requirements = _requirements_adapter.validate_python(raw)
    except PydanticValidationError as e:
        raise ValidationError(
            "Each RFP requirement needs a text and a category", constraint="malformed"
        ) from e

    if not requirements:
        raise ValidationError("At least one RFP requirement is required", constraint="empty")
    return requirements


async def run_assessment(
    upload: Optional[UploadedDocument],
    requirements: Union[None, str, Sequence],
    staging: BlobStagingService,
    llm,
    timeout: Optional[float] = None,
) -> Bid:
    """Assess an uploaded bid PDF against the RFP requirements."""
    upload = validate_pdf_upload(upload)
    requirements = parse_requirements(requirements)
    name = staged_name("bid", upload.filename)

    async with staged_file(staging, name, upload.data, PDF_CONTENT_TYPE) as file_url:
        logger.info(
            f"Assessing bid {upload.filename} against {len(requirements)} requirements"
        )
        try:
            result = await run_workflow(
                create_assessment_graph(llm),
                {"file_url": file_url, "requirements": requirements},
                timeout,
            )
        except ModelInvocationError as e:
            logger.error(f"Error processing bid: {str(e)}")
            raise AssessmentError(f"Failed to process bid document: {str(e)}") from e

    bid = result["bid"]
    if len(bid.requirements) != len(requirements):
        logger.warning(
            f"Bid '{bid.title}' assessed {len(bid.requirements)} of {len(requirements)} requirements"
        )
    return bid
