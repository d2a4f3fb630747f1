"""
Clinician session: form state plus a single-flight analyze action.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional

from clinical_dashboard.core.diagnosis import DiagnosisEngine, DiagnosisResult
from clinical_dashboard.utils.exceptions import AnalysisInProgressError, IntakeError
from .fields import DOCTOR_FIELDS
from .models import DoctorIntake

logger = logging.getLogger(__name__)


class ClinicalSession:
    """
    Holds one clinician's form data and the most recent analysis.

    The scorer itself does not prevent overlapping calls, so `analyze`
    refuses to start while a previous call is still pending.
    """

    def __init__(self, engine: Optional[DiagnosisEngine] = None, intake: Optional[DoctorIntake] = None):
        self.engine = engine or DiagnosisEngine()
        self._data: Dict[str, str] = (intake or DoctorIntake()).to_clinical_input()
        self.result: Optional[DiagnosisResult] = None
        self.is_analyzing = False

    @property
    def data(self) -> Dict[str, str]:
        return dict(self._data)

    def update(self, field: str, value: Optional[str]) -> None:
        if field not in DOCTOR_FIELDS:
            raise IntakeError(f"Unknown clinical field: {field}", field=field)
        self._data[field] = "" if value is None else str(value)

    def reset(self) -> None:
        self._data = DoctorIntake().to_clinical_input()
        self.result = None

    @property
    def show_report(self) -> bool:
        return self.result is not None

    async def analyze(self, delay: Optional[float] = None) -> DiagnosisResult:
        """
        Score the current form snapshot.

        Raises:
            AnalysisInProgressError: if a previous analyze call has not finished.
        """
        if self.is_analyzing:
            raise AnalysisInProgressError(details={"patient_id": self._data.get("patientId", "")})

        self.is_analyzing = True
        try:
            snapshot = dict(self._data)
            result = await self.engine.score_async(snapshot, delay=delay)
            self.result = result
            logger.info(f"ClinicalSession: analysis complete, top={result.top.disease}")
            return result
        finally:
            self.is_analyzing = False
