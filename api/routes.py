from datetime import datetime
from typing import Dict, NoReturn, Optional
import logging

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile

from config import get_settings
from executors.run_analysis import run_analysis
from executors.run_assessment import run_assessment
from executors.run_extraction import run_extraction
from models.errors import BidCompareError, ValidationError
from models.schemas import UploadedDocument

# Initialize logging
logger = logging.getLogger(__name__)


async def to_document(file: Optional[UploadFile]) -> Optional[UploadedDocument]:
    """
    Read a multipart upload into memory.

    At most one byte past the upload limit is read, enough for the size check
    to reject the file without buffering all of it.
    """
    if file is None:
        return None
    limit = get_settings().max_upload_bytes
    return UploadedDocument(
        filename=file.filename or "upload.pdf",
        content_type=file.content_type,
        data=await file.read(limit + 1),
    )


def raise_http(action: str, e: Exception) -> NoReturn:
    """Report a failure with the status class of its error type."""
    if isinstance(e, BidCompareError):
        if e.status_code >= 500:
            logger.error(f"Error {action}: {str(e)}")
        else:
            logger.info(f"Rejected {action}: {str(e)}")
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e

    logger.exception(f"Unexpected error {action}")
    raise HTTPException(status_code=500, detail=f"Failed {action}") from e


def create_router() -> APIRouter:
    """
    Create the API router.

    Stage dependencies (staging service, chat model, project controller) are
    read from ``app.state`` so the application factory decides how they are built.

    Returns:
        Configured FastAPI router
    """
    router = APIRouter(prefix="/api", tags=["bids"])

    @router.post("/process-rfp")
    async def process_rfp(request: Request, file: Optional[UploadFile] = File(None)) -> Dict:
        """
        Extract title, raw text and categorized requirements from an RFP PDF.
        """
        state = request.app.state
        try:
            rfp = await run_extraction(await to_document(file), state.staging, state.llm)
        except Exception as e:
            raise_http("processing RFP", e)
        return {"output": rfp.to_wire()}

    @router.post("/process-bid")
    async def process_bid(
        request: Request,
        file: Optional[UploadFile] = File(None),
        requirements: Optional[str] = Form(None),
    ) -> Dict:
        """
        Assess a bid PDF against the RFP requirements.

        ``requirements`` is the JSON-encoded list of ``{text, category}`` objects.
        """
        state = request.app.state
        try:
            bid = await run_assessment(
                await to_document(file), requirements, state.staging, state.llm
            )
        except Exception as e:
            raise_http("processing bid", e)
        return {"output": bid.to_wire()}

    @router.post("/analyze-all")
    async def analyze_all(request: Request) -> Dict:
        """
        Compare all bids against the RFP, recommend one and list open questions per company.
        """
        try:
            try:
                payload = await request.json()
            except ValueError as e:
                raise ValidationError("Request body must be JSON", constraint="malformed") from e
            if not isinstance(payload, dict):
                raise ValidationError("Request body must be a JSON object", constraint="malformed")

            analysis = await run_analysis(
                payload.get("rfp"), payload.get("bids"), request.app.state.llm
            )
        except Exception as e:
            raise_http("analyzing bids", e)
        return {"output": analysis.to_wire()}

    @router.get("/project")
    async def get_project(request: Request) -> Dict:
        """Current workflow state and the accumulated project."""
        controller = request.app.state.controller
        project = controller.project
        return {
            "state": controller.state.value,
            "project": project.to_wire(),
            "requirementsByCategory": (
                project.rfp.requirements_by_category() if project.rfp else {}
            ),
        }

    @router.post("/project/rfp")
    async def load_rfp(request: Request, file: Optional[UploadFile] = File(None)) -> Dict:
        controller = request.app.state.controller
        try:
            rfp = await controller.load_rfp(await to_document(file))
        except Exception as e:
            raise_http("loading RFP", e)
        return {"state": controller.state.value, "output": rfp.to_wire()}

    @router.post("/project/bids")
    async def add_bid(request: Request, file: Optional[UploadFile] = File(None)) -> Dict:
        controller = request.app.state.controller
        try:
            bid = await controller.add_bid(await to_document(file))
        except Exception as e:
            raise_http("adding bid", e)
        return {"state": controller.state.value, "output": bid.to_wire()}

    @router.post("/project/analysis")
    async def analyze_project(request: Request) -> Dict:
        controller = request.app.state.controller
        try:
            analysis = await controller.run_analysis()
        except Exception as e:
            raise_http("analyzing project", e)
        return {"state": controller.state.value, "output": analysis.to_wire()}

    @router.delete("/project")
    async def reset_project(request: Request) -> Dict:
        """Discard the RFP, all bids and the analysis."""
        controller = request.app.state.controller
        await controller.reset()
        return {"state": controller.state.value}

    @router.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
        }

    return router
