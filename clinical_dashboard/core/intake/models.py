"""
Intake models for the patient and clinician forms.

Every field is optional free text. Values arriving as None become "",
numbers are stringified, and unknown keys are dropped. Field aliases are
the camelCase wire names used in ClinicalInput mappings.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from clinical_dashboard.core.diagnosis.base import coerce_text
from clinical_dashboard.utils.exceptions import IntakeError


def normalize_clinical_input(data: Any) -> Dict[str, str]:
    """
    Turn an arbitrary mapping into a plain ``dict[str, str]``.

    Raises:
        IntakeError: if ``data`` is not a mapping.
    """
    if not isinstance(data, Mapping):
        raise IntakeError(
            f"Clinical input must be a JSON object / mapping, got {type(data).__name__}",
            field="<root>",
        )
    return {str(key): coerce_text(value) for key, value in data.items()}


class _FormModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def _to_text(cls, value: Any) -> str:
        return coerce_text(value)

    def to_clinical_input(self) -> Dict[str, str]:
        """Plain mapping keyed by wire names, ready for the scorer."""
        return self.model_dump(by_alias=True)

    def filled_fields(self) -> Dict[str, str]:
        """Only the fields holding non-blank text."""
        return {k: v for k, v in self.to_clinical_input().items() if v.strip()}


class DoctorIntake(_FormModel):
    """Clinician assessment form."""

    # Demographics
    patient_id: str = Field(default="", alias="patientId")
    date_of_birth: str = Field(default="", alias="dateOfBirth")
    ethnicity: str = ""
    bmi: str = ""
    smoking: str = ""
    alcohol: str = ""

    # Presenting complaint
    chief_complaint: str = Field(default="", alias="chiefComplaint")
    presenting_symptoms: str = Field(default="", alias="presentingSymptoms")
    onset: str = ""
    duration: str = ""

    # Vitals
    heart_rate: str = Field(default="", alias="heartRate", description="bpm")
    blood_pressure: str = Field(default="", alias="bloodPressure", description="systolic/diastolic mmHg")
    temperature: str = Field(default="", description="°C")
    respiratory_rate: str = Field(default="", alias="respiratoryRate", description="breaths/min")
    sp_o2: str = Field(default="", alias="spO2", description="%")
    glucose: str = Field(default="", description="mg/dL")
    pain_score: str = Field(default="", alias="painScore", description="0-10")

    # System examination
    cardiac: str = ""
    respiratory: str = ""
    gastrointestinal: str = ""
    neurological: str = ""
    skin: str = ""

    # Laboratory & imaging
    cbc: str = ""
    bmp: str = ""
    lfts: str = ""
    crp: str = ""
    d_dimer: str = Field(default="", alias="dDimer")
    troponin: str = ""
    hba1c: str = Field(default="", description="%")
    lipid_panel: str = Field(default="", alias="lipidPanel")
    urinalysis: str = ""
    imaging: str = ""

    # History
    past_history: str = Field(default="", alias="pastHistory")
    surgeries: str = ""
    allergies: str = ""
    family_history: str = Field(default="", alias="familyHistory")

    # Current treatment
    current_medications: str = Field(default="", alias="currentMedications")

    # Social
    occupation: str = ""
    travel: str = ""
    exposures: str = ""

    special_tests: str = Field(default="", alias="specialTests")
    red_flags: str = Field(default="", alias="redFlags")


class PatientIntake(_FormModel):
    """Patient self-report form."""

    name: str = ""
    age: str = ""
    sex: str = ""
    weight: str = Field(default="", description="kg")
    height: str = Field(default="", description="cm")
    contact: str = ""

    heart_rate: str = Field(default="", alias="heartRate")
    blood_sugar: str = Field(default="", alias="bloodSugar")
    temperature: str = ""
    blood_pressure: str = Field(default="", alias="bloodPressure")
    sp_o2: str = Field(default="", alias="spO2")

    medical_history: str = Field(default="", alias="medicalHistory")
    medications: str = ""
