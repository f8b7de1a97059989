from langchain_core.messages import HumanMessage, SystemMessage
from langgraph.graph import END, START, StateGraph

from models.schemas import RFP
from models.state import ExtractionState
from prompts.extraction import EXTRACTION_SYSTEM_PROMPT, EXTRACTION_USER_PROMPT
from services.llm_service import document_block, invoke_structured


def build_messages(state: ExtractionState) -> ExtractionState:
    """Point the model at the staged RFP document."""
    return {
        "messages": [
            SystemMessage(content=EXTRACTION_SYSTEM_PROMPT),
            HumanMessage(
                content=[
                    document_block(state["file_url"]),
                    {"type": "text", "text": EXTRACTION_USER_PROMPT},
                ]
            ),
        ]
    }


def create_extraction_graph(llm) -> StateGraph:
    """Create the RFP extraction workflow graph."""

    async def extract(state: ExtractionState) -> ExtractionState:
        rfp = await invoke_structured(llm, state["messages"], RFP)
        return {"rfp": rfp}

    graph = StateGraph(ExtractionState)
    graph.add_node("build_messages", build_messages)
    graph.add_node("extract", extract)

    graph.add_edge(START, "build_messages")
    graph.add_edge("build_messages", "extract")
    graph.add_edge("extract", END)

    return graph
