"""
Pytest configuration and shared fixtures for the bid comparison tests.

Provides:
- Fakes for the external collaborators (chat model, Supabase storage, Redis)
- Sample model outputs for an RFP, two bids and an analysis
- Upload factories
"""
import asyncio
import copy
import os
import sys
import time
from typing import Any, Dict, List
from urllib.parse import quote

import pytest
from langchain_core.messages import AIMessage

# Ensure the project root is importable
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from models.schemas import UploadedDocument
from services.blob_service import BlobStagingService
from services.project_service import ProjectController
from services.project_store import ProjectStore

BUCKET = "bid-staging"


# =============================================================================
# Sample model outputs
# =============================================================================

RFP_OUTPUT = {
    "title": "Acme Office Renovation",
    "rawText": "# Acme Office Renovation\n\nThe contractor must be licensed...",
    "requirements": [
        {"text": "Must use licensed contractor", "category": "Compliance"},
        {"text": "Budget under $500k", "category": "Financial"},
    ],
}

BID_OUTPUT = {
    "title": "BuildCo Proposal",
    "rawText": "# BuildCo Proposal\n\nBuildCo holds state license #4411...",
    "totalCost": 420000,
    "timeline": "4 months",
    "requirements": [
        {
            "text": "Must use licensed contractor",
            "category": "Compliance",
            "isSatisfied": True,
            "reason": "Bid states BuildCo holds state license #4411",
        },
        {
            "text": "Budget under $500k",
            "category": "Financial",
            "isSatisfied": False,
            "reason": "Bid excludes permits, which push the total past $500k",
        },
    ],
}

SECOND_BID_OUTPUT = {
    "title": "RenovatePro Bid",
    "rawText": "# RenovatePro\n\nFixed price of $510,000...",
    "totalCost": 510000,
    "timeline": "3 months",
    "requirements": [
        {
            "text": "Must use licensed contractor",
            "category": "Compliance",
            "isSatisfied": True,
            "reason": "License number listed in section 2",
        },
        {
            "text": "Budget under $500k",
            "category": "Financial",
            "isSatisfied": False,
            "reason": "Quoted price is $510,000",
        },
    ],
}

ANALYSIS_OUTPUT = {
    "recommendation": "BuildCo Proposal",
    "mainRecommendationReason": "Lowest cost with a licensed contractor",
    "supportingRecommendationPoints": [
        "Cost is $90,000 below RenovatePro",
        "Timeline fits the project window",
    ],
    "openQuestions": [
        {"companyName": "BuildCo", "openQuestions": ["Are permits included in the total?"]},
        {"companyName": "RenovatePro", "openQuestions": ["Can the price be reduced below $500k?"]},
    ],
}


@pytest.fixture
def rfp_output() -> Dict:
    return copy.deepcopy(RFP_OUTPUT)


@pytest.fixture
def bid_output() -> Dict:
    return copy.deepcopy(BID_OUTPUT)


@pytest.fixture
def second_bid_output() -> Dict:
    return copy.deepcopy(SECOND_BID_OUTPUT)


@pytest.fixture
def analysis_output() -> Dict:
    return copy.deepcopy(ANALYSIS_OUTPUT)


# =============================================================================
# Chat model fake
# =============================================================================

class SlowResponse:
    """Response that only arrives after ``delay`` seconds."""

    def __init__(self, delay: float, payload: Any = None):
        self.delay = delay
        self.payload = payload


class FakeStructuredModel:
    def __init__(self, llm: "FakeLLM", schema):
        self.llm = llm
        self.schema = schema

    async def ainvoke(self, messages):
        self.llm.calls.append({"schema": self.schema, "messages": messages})
        if not self.llm.responses:
            raise RuntimeError("FakeLLM has no response queued")
        response = self.llm.responses.pop(0)
        if isinstance(response, SlowResponse):
            await asyncio.sleep(response.delay)
            response = response.payload
        if isinstance(response, Exception):
            raise response
        return {
            "raw": AIMessage(
                content="",
                tool_calls=[{"name": self.schema.__name__, "args": response, "id": "call_1"}],
            ),
            "parsed": None,
            "parsing_error": None,
        }


class FakeLLM:
    """Chat model double that replays queued tool-call payloads."""

    def __init__(self, *responses):
        self.responses: List[Any] = list(responses)
        self.calls: List[Dict] = []

    def queue(self, *responses) -> None:
        self.responses.extend(responses)

    def with_structured_output(self, schema, include_raw: bool = False):
        return FakeStructuredModel(self, schema)


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


# =============================================================================
# Supabase storage fake
# =============================================================================

class FakeBucket:
    def __init__(self, name: str):
        self.name = name
        self.objects: Dict[str, bytes] = {}
        self.uploads: List[str] = []
        self.removed: List[str] = []
        self.fail_upload = False
        self.fail_remove = False
        self.upload_delay = 0.0

    def upload(self, path, file, file_options=None):
        if self.upload_delay:
            time.sleep(self.upload_delay)
        if self.fail_upload:
            raise RuntimeError("storage unavailable")
        self.uploads.append(path)
        self.objects[path] = file
        return {"path": path}

    def get_public_url(self, path):
        return f"https://example.supabase.co/storage/v1/object/public/{self.name}/{quote(path)}?"

    def remove(self, paths):
        if self.fail_remove:
            raise RuntimeError("delete refused")
        for path in paths:
            self.removed.append(path)
            self.objects.pop(path, None)
        return []


class FakeStorage:
    def __init__(self):
        self.buckets: Dict[str, FakeBucket] = {}

    def from_(self, name: str) -> FakeBucket:
        return self.buckets.setdefault(name, FakeBucket(name))


class FakeSupabase:
    def __init__(self):
        self.storage = FakeStorage()


@pytest.fixture
def supabase_client() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def bucket(supabase_client) -> FakeBucket:
    return supabase_client.storage.from_(BUCKET)


@pytest.fixture
def staging(supabase_client) -> BlobStagingService:
    return BlobStagingService(supabase_client, BUCKET)


# =============================================================================
# Redis fake
# =============================================================================

class FakeRedis:
    def __init__(self):
        self.data: Dict[str, bytes] = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value.encode() if isinstance(value, str) else value
        return True

    def delete(self, key):
        return 1 if self.data.pop(key, None) is not None else 0


@pytest.fixture
def redis_conn() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def store(redis_conn) -> ProjectStore:
    return ProjectStore(redis_conn, "bid-compare:project")


@pytest.fixture
def controller(store, staging, fake_llm) -> ProjectController:
    return ProjectController(store, staging, fake_llm)


# =============================================================================
# Uploads
# =============================================================================

def make_pdf(filename: str = "document.pdf", size: int = 1024, content_type: str = "application/pdf") -> UploadedDocument:
    body = b"%PDF-1.4\n"
    return UploadedDocument(
        filename=filename,
        content_type=content_type,
        data=body + b"0" * max(size - len(body), 0),
    )


@pytest.fixture
def rfp_pdf() -> UploadedDocument:
    return make_pdf("acme-rfp.pdf", size=2 * 1024 * 1024)


@pytest.fixture
def bid_pdf() -> UploadedDocument:
    return make_pdf("buildco-bid.pdf")
