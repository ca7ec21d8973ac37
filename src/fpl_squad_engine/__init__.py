"""
FPL Squad Engine - Fantasy Premier League valuation and squad optimization.

Scores players, summarizes upcoming fixture difficulty per team, selects a
constrained 15-player squad and ranks captaincy options.
"""

__version__ = "0.1.0"

from .config import EngineSettings, Settings, get_settings
from .engine import AnalysisResult, analyze_bootstrap, run_analysis
from .exceptions import EngineError, InputFormatError, InvalidConstraintsError

__all__ = [
    "AnalysisResult",
    "EngineError",
    "EngineSettings",
    "InputFormatError",
    "InvalidConstraintsError",
    "Settings",
    "analyze_bootstrap",
    "get_settings",
    "run_analysis",
    "__version__",
]
