from .aggregator import aggregate, weighted_score
from .breakdown import ScoreBreakdownBuilder
from .recommendation import build_recommendation, diagnostic_flags

__all__ = ["aggregate", "weighted_score", "ScoreBreakdownBuilder", "build_recommendation", "diagnostic_flags"]
