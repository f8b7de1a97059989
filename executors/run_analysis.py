import logging
from typing import Any, List, Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from executors.workflow import run_workflow
from graphs.analysis import create_analysis_graph
from models.errors import AnalysisError, ModelInvocationError, ValidationError
from models.schemas import RFP, Analysis, Bid

logger = logging.getLogger(__name__)

_bids_adapter = TypeAdapter(List[Bid])


def parse_analysis_input(rfp: Any, bids: Any) -> tuple[RFP, List[Bid]]:
    """Validate the RFP and bids an analysis is run over."""
    if not rfp:
        raise ValidationError("RFP data is required", constraint="absent")
    if not bids or not isinstance(bids, list):
        raise ValidationError("At least one bid is required", constraint="absent")

    try:
        rfp = RFP.model_validate(rfp)
    except PydanticValidationError as e:
        raise ValidationError("RFP data is malformed", constraint="malformed") from e
    try:
        bids = _bids_adapter.validate_python(bids)
    except PydanticValidationError as e:
        raise ValidationError("Bid data is malformed", constraint="malformed") from e

    return rfp, bids


async def run_analysis(rfp: Any, bids: Any, llm, timeout: Optional[float] = None) -> Analysis:
    """
    Compare all assessed bids against the RFP and recommend one.

    Args:
        rfp: The RFP record, as a model or its wire form
        bids: A non-empty list of bid records, as models or their wire form
        llm: Chat model used for the comparison
        timeout: Optional override of the model timeout

    Returns:
        The analysis, with one set of open questions per company
    """
    rfp, bids = parse_analysis_input(rfp, bids)
    logger.info(f"Analyzing {len(bids)} bid(s) for '{rfp.title}'")

    try:
        result = await run_workflow(
            create_analysis_graph(llm), {"rfp": rfp, "bids": bids}, timeout
        )
    except ModelInvocationError as e:
        logger.error(f"Error analyzing bids: {str(e)}")
        raise AnalysisError(f"Failed to analyze bids: {str(e)}") from e

    return result["analysis"]
