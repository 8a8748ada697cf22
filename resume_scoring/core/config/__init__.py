from .scoring import ScoringConfigError, get_factor_weights, get_scoring_config, get_scoring_value
from .settings import Settings, load_settings, settings

__all__ = [
    "Settings",
    "load_settings",
    "settings",
    "ScoringConfigError",
    "get_scoring_config",
    "get_scoring_value",
    "get_factor_weights",
]
