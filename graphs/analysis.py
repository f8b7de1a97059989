from langchain_core.messages import HumanMessage, SystemMessage
from langgraph.graph import END, START, StateGraph

from models.schemas import Analysis
from models.state import AnalysisState
from prompts.analysis import ANALYSIS_SYSTEM_PROMPT, ANALYSIS_USER_PROMPT
from services.formatting import format_requirements, summarize_bids
from services.llm_service import invoke_structured


def build_messages(state: AnalysisState) -> AnalysisState:
    """Summarize every bid next to the RFP requirements."""
    rfp = state["rfp"]
    user_prompt = ANALYSIS_USER_PROMPT.format(
        rfp_title=rfp.title,
        requirements_text=format_requirements(rfp.requirements),
        bids_summary=summarize_bids(state["bids"]),
    )
    return {
        "messages": [
            SystemMessage(content=ANALYSIS_SYSTEM_PROMPT),
            HumanMessage(content=user_prompt),
        ]
    }


def create_analysis_graph(llm) -> StateGraph:
    """Create the comparative analysis workflow graph."""

    async def recommend(state: AnalysisState) -> AnalysisState:
        analysis = await invoke_structured(llm, state["messages"], Analysis)
        return {"analysis": analysis}

    graph = StateGraph(AnalysisState)
    graph.add_node("build_messages", build_messages)
    graph.add_node("recommend", recommend)

    graph.add_edge(START, "build_messages")
    graph.add_edge("build_messages", "recommend")
    graph.add_edge("recommend", END)

    return graph
