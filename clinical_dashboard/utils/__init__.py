"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    DashboardError,
    IntakeError,
    ScoringError,
    AnalysisInProgressError,
    ReportGenerationError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "DashboardError",
    "IntakeError",
    "ScoringError",
    "AnalysisInProgressError",
    "ReportGenerationError",
]
