"""
Patient Health Report (self-report mode)

Assembles the table data for the patient-facing report:
- Patient information
- Vital signs with a plain status label
- Medical history and current medications, when provided
- Safety notes
"""
from dataclasses import dataclass, field
from typing import Dict, Any, List, Mapping, Optional
from datetime import datetime, timezone
import random
import re

from clinical_dashboard import config
from clinical_dashboard.core.intake.vitals import UNITS, VitalStatus, vital_status
from clinical_dashboard.utils import get_logger
from .base import NOT_AVAILABLE, ReportTable, text_section, value_or_na, with_unit

logger = get_logger(__name__)

STATUS_LABELS = {
    VitalStatus.PENDING:  "Not recorded",
    VitalStatus.INVALID:  "Invalid",
    VitalStatus.NORMAL:   "Normal",
    VitalStatus.ABNORMAL: "Abnormal",
    VitalStatus.LOW:      "Low",
    VitalStatus.CRITICAL: "Critical",
}

VITAL_ROWS = (
    ("Heart Rate", "heartRate"),
    ("Blood Sugar", "bloodSugar"),
    ("Temperature", "temperature"),
    ("Blood Pressure", "bloodPressure"),
    ("SpO2", "spO2"),
)

# Vitals without a normal band just confirm the reading was taken
_BANDED_VITALS = {"heartRate", "bloodSugar", "temperature", "spO2"}

SAFETY_NOTES = (
    "This report is for informational purposes only",
    "Always consult with healthcare professionals for medical advice",
    "Keep this report for your medical records",
    "Contact emergency services if you experience severe symptoms",
)


@dataclass
class PatientReport:
    """Data container for the patient report."""
    report_id: str
    generated_at: datetime
    patient_id: str = NOT_AVAILABLE

    patient_info: Optional[ReportTable] = None
    vitals: Optional[ReportTable] = None

    medical_history: Optional[str] = None
    medications: Optional[str] = None
    safety_notes: List[str] = field(default_factory=lambda: list(SAFETY_NOTES))
    footer: str = config.REPORT_FOOTER_PATIENT
    filename: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "report_id": self.report_id,
            "generated_at": self.generated_at.isoformat(),
            "patient_id": self.patient_id,
            "tables": [t.to_dict() for t in (self.patient_info, self.vitals) if t is not None],
            "medical_history": self.medical_history,
            "medications": self.medications,
            "safety_notes": list(self.safety_notes),
            "footer": self.footer,
            "filename": self.filename,
        }


def pseudonymous_patient_id(name: Optional[str], rng: Optional[random.Random] = None) -> str:
    """First six letters of the name (upper-case, no spaces) plus a number below 1000."""
    if not name:
        return NOT_AVAILABLE
    rng = rng or random.Random()
    stem = re.sub(r"\s", "", name).upper()[:6]
    return f"{stem}{rng.randrange(1000)}"


class PatientReportGenerator:
    """Builds PatientReport table data from the patient self-report form."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def generate(
        self,
        patient_data: Mapping[str, str],
        generated_at: Optional[datetime] = None,
    ) -> PatientReport:
        now = generated_at or datetime.now(timezone.utc)

        report = PatientReport(
            report_id=f"PR-{now.strftime('%Y%m%d-%H%M%S')}",
            generated_at=now,
            patient_id=pseudonymous_patient_id(patient_data.get("name"), self._rng),
        )

        report.patient_info = ReportTable(
            title="Patient Information",
            head=["Parameter", "Value"],
            rows=[
                ["Name", patient_data.get("name") or "Not provided"],
                ["Age", value_or_na(patient_data, "age")],
                ["Sex", value_or_na(patient_data, "sex")],
                ["Weight", with_unit(patient_data, "weight", UNITS["weight"])],
                ["Height", with_unit(patient_data, "height", UNITS["height"])],
                ["Contact", value_or_na(patient_data, "contact")],
            ],
        )

        report.vitals = ReportTable(
            title="Vital Signs",
            head=["Vital", "Value", "Status"],
            rows=[self._vital_row(patient_data, label, key) for label, key in VITAL_ROWS],
        )

        report.medical_history = text_section(patient_data, "medicalHistory")
        report.medications = text_section(patient_data, "medications")
        report.filename = f"patient-health-report-{now.strftime('%Y-%m-%d')}.pdf"

        logger.info(f"PatientReportGenerator: built {report.report_id}")
        return report

    @staticmethod
    def _vital_row(data: Mapping[str, str], label: str, key: str) -> List[str]:
        unit = UNITS.get(key)
        value = with_unit(data, key, unit) if unit else value_or_na(data, key)
        if key in _BANDED_VITALS:
            status = STATUS_LABELS[vital_status(key, data.get(key, ""))]
        else:
            status = "Recorded"
        return [label, value, status]
