"""API routes for offloaded simulation requests."""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..errors import SimulationError
from ..keywords import relevant_keywords
from ..models import AttackContext
from ..types import AttackType
from ..worker import SimulationRequest, handle_request

router = APIRouter()

DEFAULT_ITERATIONS = 10_000
MAX_ITERATIONS = 1_000_000

# Request/Response models
class SimulateRequest(BaseModel):
    request_id: int
    context: Dict[str, Any] = {}
    iterations: int = Field(DEFAULT_ITERATIONS, ge=0, le=MAX_ITERATIONS)
    seed: Optional[int] = None

class KeywordsResponse(BaseModel):
    attack_type: str
    attacker: List[str]
    defender: List[str]

# ============================================================================
# Simulation
# ============================================================================

@router.post("/simulate")
def simulate_attack(request: SimulateRequest):
    """Run one simulation; the response echoes ``request_id``.

    Failures come back as ``{"request_id", "error"}`` with status 400 so the
    caller can match them to the request that caused them.
    """
    try:
        context = AttackContext.from_dict(request.context)
    except SimulationError as e:
        return JSONResponse(status_code=400, content={"request_id": request.request_id, "error": str(e)})

    response = handle_request(
        SimulationRequest(
            request_id=request.request_id,
            context=context,
            iterations=request.iterations,
            seed=request.seed,
        )
    )
    if not response.ok:
        return JSONResponse(status_code=400, content=response.to_dict())
    return response.to_dict()

# ============================================================================
# Keyword relevance
# ============================================================================

@router.get("/keywords/{attack_type}", response_model=KeywordsResponse)
def keywords_for(attack_type: str) -> KeywordsResponse:
    """Gated keywords that apply to the given attack type."""
    try:
        kind = AttackType(attack_type.lower())
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown attack type '{attack_type}'")
    return KeywordsResponse(
        attack_type=kind.value,
        attacker=relevant_keywords(kind, "attacker"),
        defender=relevant_keywords(kind, "defender"),
    )
