from typing import Any, List, Optional, TypedDict

from models.schemas import RFP, Analysis, Bid, Requirement


class ExtractionState(TypedDict, total=False):
    file_url: str  # Staged RFP location the model fetches
    messages: List[Any]
    rfp: Optional[RFP]


class AssessmentState(TypedDict, total=False):
    file_url: str  # Staged bid location the model fetches
    requirements: List[Requirement]
    requirements_text: str  # Enumerated requirement block embedded in the prompt
    messages: List[Any]
    bid: Optional[Bid]


class AnalysisState(TypedDict, total=False):
    rfp: RFP
    bids: List[Bid]
    messages: List[Any]
    analysis: Optional[Analysis]
