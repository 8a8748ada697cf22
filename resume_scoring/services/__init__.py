from .scoring_service import (
    InvocationState,
    InvocationStatus,
    ScoringOrchestrator,
    build_orchestrator,
    get_orchestrator,
    parse_event,
)

__all__ = [
    "InvocationState",
    "InvocationStatus",
    "ScoringOrchestrator",
    "build_orchestrator",
    "get_orchestrator",
    "parse_event",
]
