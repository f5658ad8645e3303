"""Flow orchestration over the routing engine and the catalog."""

from serviceflow.flow.models import Answer, FlowState, FlowTurn, QuestionNode, ResultNode
from serviceflow.flow.orchestrator import FlowOrchestrator

__all__ = [
    "Answer",
    "FlowState",
    "FlowTurn",
    "QuestionNode",
    "ResultNode",
    "FlowOrchestrator",
]
