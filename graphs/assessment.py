from langchain_core.messages import HumanMessage, SystemMessage
from langgraph.graph import END, START, StateGraph

from models.schemas import Bid
from models.state import AssessmentState
from prompts.assessment import ASSESSMENT_SYSTEM_PROMPT, ASSESSMENT_USER_PROMPT
from services.formatting import format_requirements
from services.llm_service import document_block, invoke_structured


def render_requirements(state: AssessmentState) -> AssessmentState:
    """Enumerate the RFP requirements for the prompt."""
    return {"requirements_text": format_requirements(state["requirements"])}


def build_messages(state: AssessmentState) -> AssessmentState:
    system_prompt = ASSESSMENT_SYSTEM_PROMPT.format(
        requirements_text=state["requirements_text"]
    )
    return {
        "messages": [
            SystemMessage(content=system_prompt),
            HumanMessage(
                content=[
                    document_block(state["file_url"]),
                    {"type": "text", "text": ASSESSMENT_USER_PROMPT},
                ]
            ),
        ]
    }


def create_assessment_graph(llm) -> StateGraph:
    """Create the bid assessment workflow graph."""

    async def assess(state: AssessmentState) -> AssessmentState:
        # The number of assessed requirements is not checked against the input
        bid = await invoke_structured(llm, state["messages"], Bid)
        return {"bid": bid}

    graph = StateGraph(AssessmentState)
    graph.add_node("render_requirements", render_requirements)
    graph.add_node("build_messages", build_messages)
    graph.add_node("assess", assess)

    graph.add_edge(START, "render_requirements")
    graph.add_edge("render_requirements", "build_messages")
    graph.add_edge("build_messages", "assess")
    graph.add_edge("assess", END)

    return graph
