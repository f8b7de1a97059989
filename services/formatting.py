from typing import Sequence, Union

from models.schemas import Bid, Requirement


def format_requirements(requirements: Sequence[Requirement]) -> str:
    """Render requirements as a 1-based enumerated block, one per line."""
    return "\n".join(
        f"{index}. [{req.category}] {req.text}"
        for index, req in enumerate(requirements, start=1)
    )


def format_cost(amount: Union[int, float]) -> str:
    """Format a cost with thousands separators, dropping a zero fraction."""
    if float(amount).is_integer():
        return f"${int(amount):,}"
    return f"${amount:,.2f}"


def summarize_bid(index: int, bid: Bid) -> str:
    details = "\n".join(
        f"  • [{req.category}] {req.text} - "
        f"{'SATISFIED' if req.is_satisfied else 'NOT SATISFIED'}: {req.reason}"
        for req in bid.requirements
    )
    return (
        f"Bid {index}: {bid.title}\n"
        f"- Total Cost: {format_cost(bid.total_cost)}\n"
        f"- Timeline: {bid.timeline}\n"
        f"- Requirements Satisfied: {bid.satisfied_count}/{len(bid.requirements)} "
        f"({bid.satisfaction_percent}%)\n"
        f"- Requirements Details:\n"
        f"{details}"
    )


def summarize_bids(bids: Sequence[Bid]) -> str:
    return "\n\n".join(summarize_bid(index, bid) for index, bid in enumerate(bids, start=1))
