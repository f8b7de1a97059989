import math
from collections import OrderedDict
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for records exchanged with the model and the client (camelCase on the wire)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_wire(self) -> Dict:
        return self.model_dump(by_alias=True, mode="json")


class Requirement(WireModel):
    text: str = Field(..., description="The text of the requirement.")
    category: str = Field(..., description="The category of the requirement.")


class AssessedRequirement(WireModel):
    text: str = Field(..., description="The text of the RFP requirement, verbatim.")
    category: str = Field(..., description="The category of the RFP requirement, verbatim.")
    is_satisfied: bool = Field(
        ..., description="Whether the bid satisfies the requirement."
    )
    reason: str = Field(
        ..., description="Why the requirement is or is not satisfied, citing the bid."
    )


class RFP(WireModel):
    """Structured RFP extracted from the uploaded document."""

    title: str = Field(..., description="The title of the RFP document.")
    raw_text: str = Field(
        ..., description="The raw text of the RFP document in markdown format."
    )
    requirements: List[Requirement] = Field(
        ..., description="The requirements a bid must meet, each with a category."
    )

    def requirements_by_category(self) -> Dict[str, List[str]]:
        """Group requirement texts under their category, in first-seen order."""
        grouped: Dict[str, List[str]] = OrderedDict()
        for req in self.requirements:
            grouped.setdefault(req.category, []).append(req.text)
        return grouped


class Bid(WireModel):
    """A vendor bid assessed against the RFP requirements."""

    title: str = Field(..., description="The title of the bid document.")
    raw_text: str = Field(
        ..., description="The raw text of the bid document in markdown format."
    )
    total_cost: float = Field(..., description="The total cost quoted in the bid.")
    timeline: str = Field(..., description="The delivery timeline proposed in the bid.")
    requirements: List[AssessedRequirement] = Field(
        ..., description="One assessment per RFP requirement, in the RFP's order."
    )

    @property
    def satisfied_count(self) -> int:
        return sum(1 for req in self.requirements if req.is_satisfied)

    @property
    def satisfaction_percent(self) -> int:
        """Share of satisfied requirements, rounded half up. 0 when there are none."""
        total = len(self.requirements)
        if total == 0:
            return 0
        return math.floor(self.satisfied_count * 100 / total + 0.5)


class CompanyQuestions(WireModel):
    company_name: str = Field(..., description="The name of the company.")
    open_questions: List[str] = Field(
        ..., description="The open questions to clarify the bid."
    )


class Analysis(WireModel):
    """Cross-bid recommendation with per-company open questions."""

    recommendation: str = Field(..., description="The recommendation for the best bid.")
    main_recommendation_reason: str = Field(
        ..., description="The main reason for the recommendation."
    )
    supporting_recommendation_points: List[str] = Field(
        ..., description="Further points supporting the recommendation."
    )
    open_questions: List[CompanyQuestions] = Field(
        ..., description="Open questions grouped by company, one entry per company."
    )


class Project(WireModel):
    """Aggregate root persisted as a single record."""

    rfp: Optional[RFP] = None
    bids: List[Bid] = Field(default_factory=list)
    analysis: Optional[Analysis] = None

    @model_validator(mode="after")
    def check_invariants(self) -> "Project":
        if self.bids and self.rfp is None:
            raise ValueError("bids require an RFP")
        if self.analysis is not None and not self.bids:
            raise ValueError("an analysis requires at least one bid")
        return self


class UploadedDocument(BaseModel):
    """A file received from the client, not yet validated."""

    filename: str
    content_type: Optional[str] = None
    data: bytes
