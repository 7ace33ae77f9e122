"""
Calculation session API routes.

A session pins a league snapshot and tracks the user's target team,
simulation mode and locked outcomes. Every change is followed by a call to
``/calculate`` from the client.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from starlette.concurrency import run_in_threadpool

from ..schemas import (
    SessionCreateRequest,
    SessionResponse,
    TargetUpdateRequest,
    ModeUpdateRequest,
    OutcomeUpdateRequest,
    CalculateRequest,
    CalculationResponse,
)
from ..store import SessionStore, StoredSession, get_provider, get_session_store
from ...core.config import DEFAULT_TARGET_TEAM
from ...platforms import ScheduleProvider, SeasonDataNotFoundError, PlatformError
from ...simulator import Outcome, TeamNotFoundError


router = APIRouter(prefix="/sessions", tags=["sessions"])


def _session_response(stored: StoredSession) -> SessionResponse:
    data = stored.session.to_dict()
    return SessionResponse(
        session_id=stored.id,
        season=stored.league.season,
        week=stored.league.week,
        **data
    )


def _get_or_404(store: SessionStore, session_id: str) -> StoredSession:
    stored = store.get(session_id)
    if stored is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Session not found"
        )
    return stored


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    request: SessionCreateRequest,
    provider: ScheduleProvider = Depends(get_provider),
    store: SessionStore = Depends(get_session_store)
) -> SessionResponse:
    """
    Load the league and start a session for a target team.
    """
    try:
        league = await provider.load_league(request.season)
    except SeasonDataNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PlatformError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    target = (request.target_team or DEFAULT_TARGET_TEAM).upper()
    try:
        stored = store.create(league, target, weighted=request.weighted)
    except TeamNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Team not found: {target}"
        )

    return _session_response(stored)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: str,
    store: SessionStore = Depends(get_session_store)
) -> SessionResponse:
    """Get session state and its critical games."""
    return _session_response(_get_or_404(store, session_id))


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: str,
    store: SessionStore = Depends(get_session_store)
):
    """End a session."""
    if not store.delete(session_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Session not found"
        )


@router.put("/{session_id}/target", response_model=SessionResponse)
async def update_target(
    session_id: str,
    request: TargetUpdateRequest,
    store: SessionStore = Depends(get_session_store)
) -> SessionResponse:
    """
    Switch the target team.

    Locked outcomes are cleared and critical games re-identified.
    """
    stored = _get_or_404(store, session_id)
    target = request.target_team.upper()
    try:
        stored.session.set_target(target)
    except TeamNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Team not found: {target}"
        )
    return _session_response(stored)


@router.put("/{session_id}/mode", response_model=SessionResponse)
async def update_mode(
    session_id: str,
    request: ModeUpdateRequest,
    store: SessionStore = Depends(get_session_store)
) -> SessionResponse:
    """Switch between random and weighted simulation."""
    stored = _get_or_404(store, session_id)
    stored.session.set_weighted(request.weighted)
    return _session_response(stored)


@router.put("/{session_id}/outcomes/{game_id}", response_model=SessionResponse)
async def set_outcome(
    session_id: str,
    game_id: str,
    request: OutcomeUpdateRequest,
    store: SessionStore = Depends(get_session_store)
) -> SessionResponse:
    """Lock a game's winner ('home'/'away') or unlock it ('reset')."""
    stored = _get_or_404(store, session_id)
    outcome = None if request.outcome == "reset" else Outcome(request.outcome)
    try:
        stored.session.set_outcome(game_id, outcome)
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Game {game_id} is not a critical game for {stored.session.target}"
        )
    return _session_response(stored)


@router.delete("/{session_id}/outcomes", response_model=SessionResponse)
async def clear_outcomes(
    session_id: str,
    store: SessionStore = Depends(get_session_store)
) -> SessionResponse:
    """Unlock every game."""
    stored = _get_or_404(store, session_id)
    stored.session.clear_outcomes()
    return _session_response(stored)


@router.post("/{session_id}/apply/{case}", response_model=SessionResponse)
async def apply_case(
    session_id: str,
    case: str,
    store: SessionStore = Depends(get_session_store)
) -> SessionResponse:
    """Lock the outcomes of the last best or worst case."""
    stored = _get_or_404(store, session_id)

    if case not in ("best", "worst"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid case: {case}. Supported: best, worst"
        )

    scenario = stored.session.best_case if case == "best" else stored.session.worst_case
    if scenario is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Run a calculation first"
        )

    stored.session.apply_scenario(scenario)
    return _session_response(stored)


@router.post("/{session_id}/calculate", response_model=CalculationResponse)
async def calculate(
    session_id: str,
    request: CalculateRequest = CalculateRequest(),
    store: SessionStore = Depends(get_session_store)
) -> CalculationResponse:
    """
    Run a calculation pass: playoff probability, best case and worst case.

    The computation is CPU-bound, so it runs in the threadpool.
    """
    stored = _get_or_404(store, session_id)
    result = await run_in_threadpool(stored.session.calculate, request.n_simulations)
    return CalculationResponse(session_id=stored.id, **result.to_dict())
