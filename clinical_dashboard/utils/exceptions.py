"""
Custom Exception Hierarchy

Error types for the intake, scoring and reporting layers, each carrying
a machine-readable code and structured details.
"""
from typing import Optional, Dict, Any


class DashboardError(Exception):
    """Base exception for all clinical dashboard errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for display or CLI output."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class IntakeError(DashboardError):
    """Errors while collecting or normalising form data."""

    def __init__(
        self,
        message: str,
        field: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="INTAKE_ERROR",
            details={"field": field, **(details or {})}
        )
        self.field = field


class ScoringError(DashboardError):
    """Errors inside the diagnosis scorer. Never escapes the public entry points."""

    def __init__(
        self,
        message: str,
        stage: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="SCORING_ERROR",
            details={"stage": stage, **(details or {})}
        )
        self.stage = stage


class AnalysisInProgressError(DashboardError):
    """Raised when an analysis is requested while another one is pending."""

    def __init__(
        self,
        message: str = "An analysis is already in progress",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="ANALYSIS_IN_PROGRESS",
            details=details
        )


class ReportGenerationError(DashboardError):
    """Errors while assembling report tables."""

    def __init__(
        self,
        message: str,
        report_type: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="REPORT_ERROR",
            details={"report_type": report_type, **(details or {})}
        )
        self.report_type = report_type
