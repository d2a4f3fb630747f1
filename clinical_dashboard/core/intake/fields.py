"""
Form field vocabulary for the two dashboard modes.

Keys are the wire names used by the forms and by ClinicalInput mappings.
"""
from types import MappingProxyType
from typing import Mapping, Tuple

# ── Clinician assessment form, grouped by tab ───────────────────────────────
DOCTOR_FIELD_GROUPS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "demographics": ("patientId", "dateOfBirth", "ethnicity", "bmi", "smoking", "alcohol"),
    "presenting":   ("chiefComplaint", "presentingSymptoms", "onset", "duration"),
    "vitals":       ("heartRate", "bloodPressure", "temperature", "respiratoryRate", "spO2", "glucose", "painScore"),
    "examination":  ("cardiac", "respiratory", "gastrointestinal", "neurological", "skin"),
    "laboratory":   ("cbc", "bmp", "lfts", "crp", "dDimer", "troponin", "hba1c", "lipidPanel", "urinalysis", "imaging"),
    "history":      ("pastHistory", "surgeries", "allergies", "familyHistory"),
    "treatment":    ("currentMedications",),
    "social":       ("occupation", "travel", "exposures"),
    "special":      ("specialTests",),
    "red_flags":    ("redFlags",),
})

DOCTOR_FIELDS: Tuple[str, ...] = tuple(
    name for group in DOCTOR_FIELD_GROUPS.values() for name in group
)

# ── Patient self-report form ────────────────────────────────────────────────
PATIENT_FIELDS: Tuple[str, ...] = (
    "name", "age", "sex", "weight", "height", "contact",
    "heartRate", "bloodSugar", "temperature", "bloodPressure", "spO2",
    "medicalHistory", "medications",
)

# Vitals shown with a status badge in patient mode
PATIENT_VITALS: Tuple[str, ...] = ("heartRate", "bloodSugar", "temperature", "bloodPressure", "spO2")


def group_of(field_name: str) -> str:
    """Tab a clinician field belongs to, or "" when it is not a clinician field."""
    for group, names in DOCTOR_FIELD_GROUPS.items():
        if field_name in names:
            return group
    return ""
