"""Off-thread execution of simulation requests.

Requests carry a monotonically increasing id; responses echo it back. There
is no cancellation: a caller that has moved on simply ignores any response
whose id is no longer the latest one it issued (see ``is_current``).
"""
from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple
import itertools
import logging

from .errors import SimulationError
from .models import AttackContext
from .simulators.monte_carlo import SimulationResult, simulate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationRequest:
    request_id: int
    context: AttackContext
    iterations: int
    seed: Optional[int] = None


@dataclass(frozen=True)
class SimulationResponse:
    request_id: int
    result: Optional[SimulationResult] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        if self.ok:
            return {"request_id": self.request_id, "result": self.result.to_dict()}
        return {"request_id": self.request_id, "error": self.error}


def handle_request(request: SimulationRequest) -> SimulationResponse:
    try:
        result = simulate(request.context, request.iterations, seed=request.seed)
    except SimulationError as exc:
        logger.warning("request %s failed: %s", request.request_id, exc)
        return SimulationResponse(request_id=request.request_id, error=str(exc))
    return SimulationResponse(request_id=request.request_id, result=result)


class SimulationWorker:
    def __init__(self, max_workers: int = 1):
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="legion-sim")
        self._ids = itertools.count(1)
        self._latest = 0

    def submit(
        self, context: AttackContext, iterations: int, seed: Optional[int] = None
    ) -> Tuple[int, "Future[SimulationResponse]"]:
        request_id = next(self._ids)
        self._latest = request_id
        request = SimulationRequest(request_id, context, iterations, seed)
        return request_id, self._executor.submit(handle_request, request)

    def is_current(self, request_id: int) -> bool:
        return request_id == self._latest

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "SimulationWorker":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.shutdown()
        return False


__all__ = ["SimulationRequest", "SimulationResponse", "SimulationWorker", "handle_request"]
