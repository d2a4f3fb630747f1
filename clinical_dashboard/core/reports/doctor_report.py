"""
Clinical Assessment Report (clinician mode)

Assembles the table data for the clinician report from the form snapshot
and the scorer's DiagnosisResult:
- Header with clinician and signature placeholders
- Patient demographics
- Vital signs with reference ranges
- AI-assisted differential (requires clinician confirmation)
- Numbered next steps, urgency and confidence lines
- Audit block
"""
from dataclasses import dataclass, field
from typing import Dict, Any, List, Mapping, Optional
from datetime import datetime, timezone

from clinical_dashboard import config
from clinical_dashboard.core.diagnosis import DiagnosisResult
from clinical_dashboard.core.intake.vitals import REFERENCE_RANGES, UNITS
from clinical_dashboard.utils import get_logger
from clinical_dashboard.utils.exceptions import ReportGenerationError
from .base import NOT_AVAILABLE, ReportTable, value_or_na, with_unit

logger = get_logger(__name__)

DEMOGRAPHIC_ROWS = (
    ("Patient ID", "patientId"),
    ("Date of Birth", "dateOfBirth"),
    ("Ethnicity", "ethnicity"),
    ("BMI", "bmi"),
    ("Smoking", "smoking"),
    ("Alcohol", "alcohol"),
)

VITAL_ROWS = (
    ("Heart Rate", "heartRate"),
    ("Blood Pressure", "bloodPressure"),
    ("Temperature", "temperature"),
    ("Respiratory Rate", "respiratoryRate"),
    ("SpO2", "spO2"),
    ("Glucose", "glucose"),
)

# Features shown per diagnosis row
KEY_FEATURE_COUNT = 2

DIAGNOSIS_TITLE = "AI-Assisted Diagnosis (Requires Clinician Confirmation)"
MODEL_VERSION = "Rule-Based Differential Scorer v1.0"

# Left for the signing clinician to complete on the printed report
CLINICIAN_LINE = "Clinician: Dr. [Name Required]"
SIGNATURE_LINE = "Signature: ________________"


@dataclass
class DoctorReport:
    """Data container for the clinician report."""
    report_id: str
    generated_at: datetime
    patient_id: str = NOT_AVAILABLE

    demographics: Optional[ReportTable] = None
    vitals: Optional[ReportTable] = None
    diagnosis: Optional[ReportTable] = None

    header_lines: List[str] = field(default_factory=list)
    next_steps: List[str] = field(default_factory=list)
    urgency_line: str = ""
    confidence_line: str = ""
    audit_lines: List[str] = field(default_factory=list)
    footer: str = config.REPORT_FOOTER_DOCTOR
    filename: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "report_id": self.report_id,
            "generated_at": self.generated_at.isoformat(),
            "patient_id": self.patient_id,
            "header": list(self.header_lines),
            "tables": [t.to_dict() for t in (self.demographics, self.vitals, self.diagnosis) if t is not None],
            "next_steps": list(self.next_steps),
            "urgency": self.urgency_line,
            "confidence": self.confidence_line,
            "audit": list(self.audit_lines),
            "footer": self.footer,
            "filename": self.filename,
        }


class DoctorReportGenerator:
    """Builds DoctorReport table data. Stateless apart from the clock."""

    def generate(
        self,
        clinical_data: Mapping[str, str],
        diagnosis: Optional[DiagnosisResult] = None,
        generated_at: Optional[datetime] = None,
    ) -> DoctorReport:
        """
        Args:
            clinical_data: The form snapshot that was scored.
            diagnosis: Scorer output; the differential section is omitted without it.
            generated_at: Timestamp override, defaults to now (UTC).

        Raises:
            ReportGenerationError: if the diagnosis section cannot be assembled.
        """
        now = generated_at or datetime.now(timezone.utc)
        patient_id = value_or_na(clinical_data, "patientId")

        report = DoctorReport(
            report_id=f"DR-{now.strftime('%Y%m%d-%H%M%S')}",
            generated_at=now,
            patient_id=patient_id,
        )

        report.header_lines = [
            f"Generated: {now.isoformat()}",
            f"Patient ID: {patient_id}",
            CLINICIAN_LINE,
            SIGNATURE_LINE,
        ]

        report.demographics = ReportTable(
            title="Patient Demographics",
            head=["Parameter", "Value"],
            rows=[[label, value_or_na(clinical_data, key)] for label, key in DEMOGRAPHIC_ROWS],
        )

        report.vitals = ReportTable(
            title="Vital Signs",
            head=["Parameter", "Value", "Normal Range", "Status"],
            rows=[self._vital_row(clinical_data, label, key) for label, key in VITAL_ROWS],
        )

        if diagnosis is not None:
            try:
                report.diagnosis = ReportTable(
                    title=DIAGNOSIS_TITLE,
                    head=["Rank", "Disease", "ICD-10", "Probability", "Rarity", "Key Features"],
                    rows=[
                        [
                            str(d.rank),
                            d.disease,
                            d.icd10,
                            f"{d.probability}%",
                            d.rarity.value,
                            ", ".join(d.supporting_features[:KEY_FEATURE_COUNT]),
                        ]
                        for d in diagnosis.diagnoses
                    ],
                )
                report.next_steps = [f"{i}. {step}" for i, step in enumerate(diagnosis.recommended_tests, start=1)]
                report.urgency_line = f"Urgency Level: {diagnosis.urgency.value}"
                report.confidence_line = f"AI Confidence: {diagnosis.confidence}"
            except (AttributeError, TypeError) as exc:
                raise ReportGenerationError(
                    f"Malformed diagnosis result: {exc}", report_type="doctor"
                ) from exc

        report.audit_lines = [
            f"AI Model Version: {MODEL_VERSION}",
            f"Generation Timestamp: {now.isoformat()}",
            "Clinician Confirmation Required: YES",
            "Report Status: DRAFT - Pending Clinician Review",
        ]

        file_id = clinical_data.get("patientId") or "patient"
        report.filename = f"clinical-report-{file_id}-{now.strftime('%Y-%m-%d')}.pdf"

        logger.info(f"DoctorReportGenerator: built {report.report_id} for patient {patient_id}")
        return report

    @staticmethod
    def _vital_row(data: Mapping[str, str], label: str, key: str) -> List[str]:
        unit = UNITS.get(key, "")
        value = with_unit(data, key, unit) if unit else value_or_na(data, key)
        status = "Recorded" if data.get(key) else NOT_AVAILABLE
        return [label, value, REFERENCE_RANGES.get(key, ""), status]
