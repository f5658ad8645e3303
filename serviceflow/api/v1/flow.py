"""Flow endpoints: start a flow and advance it one answer at a time."""

from fastapi import APIRouter, HTTPException, status

from serviceflow.api.deps import Orchestrator
from serviceflow.core.errors import CatalogError, FlowError, InvalidHistoryError
from serviceflow.flow.models import FlowTurn
from serviceflow.schemas.flow import (
    FlowErrorDetail,
    FlowNextRequest,
    FlowResponse,
    FlowStartRequest,
)

router = APIRouter(prefix="/flow", tags=["flow"])

# Seconds a client should wait before retrying a turn after a catalog failure
CATALOG_RETRY_AFTER_SECONDS = 5


def _raise_for_error(error: FlowError) -> None:
    detail = FlowErrorDetail(
        code=error.code,
        message=error.message,
        retryable=error.retryable,
    ).model_dump()

    if isinstance(error, InvalidHistoryError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
    if isinstance(error, CatalogError):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
            headers={"Retry-After": str(CATALOG_RETRY_AFTER_SECONDS)},
        )
    # Configuration errors: content references missing questions or goals
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


def _to_response(turn: FlowTurn) -> FlowResponse:
    if turn.error is not None:
        _raise_for_error(turn.error)
    return FlowResponse.from_turn(turn)


@router.post("/start", response_model=FlowResponse)
async def start_flow(
    orchestrator: Orchestrator,
    body: FlowStartRequest | None = None,
) -> FlowResponse:
    """Start a flow and return its first question.

    ``node`` is null when the catalog holds no question for the goal.
    """
    turn = await orchestrator.start(body.goal_id if body else None)
    return _to_response(turn)


@router.post("/next", response_model=FlowResponse)
async def next_node(
    body: FlowNextRequest,
    orchestrator: Orchestrator,
) -> FlowResponse:
    """Return the node following the last submitted answer.

    The full answer history is submitted on every call; nothing is stored
    server-side. Responds with:
    - a question node when the flow continues
    - a result node with recommended services when a goal is reached
    - a null node when no rule applies or the flow ended
    """
    history = [answer.to_answer() for answer in body.answers]
    turn = await orchestrator.next(history, goal_id=body.goal_id)
    return _to_response(turn)
