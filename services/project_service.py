"""
Workflow orchestrator for the single RFP/bid comparison project.

The controller owns the project and exposes only transition operations,
so the RFP-before-bids and bids-before-analysis invariants hold at the API
boundary. Stage calls are serialized, and the project is persisted after
every successful transition.
"""
import asyncio
import logging
from enum import Enum
from typing import Optional

from executors.run_analysis import run_analysis
from executors.run_assessment import run_assessment
from executors.run_extraction import run_extraction
from models.errors import InvalidTransitionError
from models.schemas import Analysis, Bid, Project, RFP, UploadedDocument
from services.blob_service import BlobStagingService
from services.project_store import ProjectStore

logger = logging.getLogger(__name__)


class ProjectState(str, Enum):
    EMPTY = "empty"
    RFP_LOADED = "rfp_loaded"
    BIDS_ACCUMULATING = "bids_accumulating"
    ANALYZED = "analyzed"


class ProjectController:
    def __init__(
        self,
        store: ProjectStore,
        staging: BlobStagingService,
        llm,
        timeout: Optional[float] = None,
    ):
        self.store = store
        self.staging = staging
        self.llm = llm
        self.timeout = timeout
        self._lock = asyncio.Lock()
        self._project = store.load()

    @property
    def project(self) -> Project:
        return self._project

    @property
    def state(self) -> ProjectState:
        if self._project.rfp is None:
            return ProjectState.EMPTY
        if self._project.analysis is not None:
            return ProjectState.ANALYZED
        if self._project.bids:
            return ProjectState.BIDS_ACCUMULATING
        return ProjectState.RFP_LOADED

    async def _commit(self, project: Project) -> Project:
        # Redis calls block, keep them off the event loop
        await asyncio.to_thread(self.store.save, project)
        self._project = project
        return project

    async def load_rfp(self, upload: Optional[UploadedDocument]) -> RFP:
        async with self._lock:
            if self._project.rfp is not None:
                raise InvalidTransitionError(
                    "An RFP is already loaded; reset the project to start over"
                )
            rfp = await run_extraction(upload, self.staging, self.llm, self.timeout)
            await self._commit(Project(rfp=rfp))
            logger.info(f"Loaded RFP '{rfp.title}'")
            return rfp

    async def add_bid(self, upload: Optional[UploadedDocument]) -> Bid:
        async with self._lock:
            rfp = self._project.rfp
            if rfp is None:
                raise InvalidTransitionError("Load an RFP before submitting bids")
            bid = await run_assessment(
                upload, list(rfp.requirements), self.staging, self.llm, self.timeout
            )
            # An existing analysis is kept even though it no longer covers every bid
            await self._commit(self._project.model_copy(update={"bids": [*self._project.bids, bid]}))
            logger.info(f"Added bid '{bid.title}' ({len(self._project.bids)} total)")
            return bid

    async def run_analysis(self) -> Analysis:
        async with self._lock:
            if not self._project.bids:
                raise InvalidTransitionError("At least one bid is required before analysis")
            analysis = await run_analysis(
                self._project.rfp, list(self._project.bids), self.llm, self.timeout
            )
            await self._commit(self._project.model_copy(update={"analysis": analysis}))
            return analysis

    async def reset(self) -> None:
        async with self._lock:
            await asyncio.to_thread(self.store.clear)
            self._project = Project()
            logger.info("Project reset")
