"""
Intake Layer

Form vocabulary, typed form models, vital-sign status and the clinician
session that drives the analyze action.
"""
from .fields import DOCTOR_FIELD_GROUPS, DOCTOR_FIELDS, PATIENT_FIELDS, PATIENT_VITALS, group_of
from .models import DoctorIntake, PatientIntake, normalize_clinical_input
from .vitals import VitalStatus, patient_vital_statuses, vital_status
from .session import ClinicalSession

__all__ = [
    "DOCTOR_FIELD_GROUPS",
    "DOCTOR_FIELDS",
    "PATIENT_FIELDS",
    "PATIENT_VITALS",
    "group_of",
    "DoctorIntake",
    "PatientIntake",
    "normalize_clinical_input",
    "VitalStatus",
    "patient_vital_statuses",
    "vital_status",
    "ClinicalSession",
]
