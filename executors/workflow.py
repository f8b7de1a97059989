import asyncio
from typing import Dict, Optional

from langgraph.graph import StateGraph

from config import get_settings
from models.errors import ModelTimeoutError


async def run_workflow(graph: StateGraph, initial_state: Dict, timeout: Optional[float] = None) -> Dict:
    """
    Compile and run a stage graph, bounded by the model timeout.

    Args:
        graph: The uncompiled stage graph
        initial_state: The initial state for the workflow
        timeout: Seconds before giving up, defaults to the configured model timeout

    Returns:
        The final workflow state
    """
    if timeout is None:
        timeout = get_settings().model_timeout_seconds

    app = graph.compile()
    try:
        return await asyncio.wait_for(app.ainvoke(initial_state), timeout=timeout)
    except asyncio.TimeoutError as e:
        raise ModelTimeoutError(f"Model did not respond within {timeout:g} seconds") from e
