"""
Vital-sign status classification for the patient view and reports.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping, Optional

from clinical_dashboard.core.diagnosis.base import coerce_text
from clinical_dashboard.core.diagnosis.findings import parse_number
from .fields import PATIENT_VITALS


class VitalStatus(str, Enum):
    PENDING  = "pending"       # nothing entered
    INVALID  = "invalid"       # not a number
    NORMAL   = "normal"
    ABNORMAL = "abnormal"
    LOW      = "low"
    CRITICAL = "critical"


# Inclusive normal bands
NORMAL_BANDS = {
    "heartRate":   (60.0, 100.0),
    "bloodSugar":  (80.0, 140.0),
    "glucose":     (80.0, 140.0),
    "temperature": (36.1, 37.2),
}

SPO2_NORMAL = 95
SPO2_LOW    = 90

# Reference ranges printed on the clinician report
REFERENCE_RANGES = {
    "heartRate":       "60-100 bpm",
    "bloodPressure":   "120/80 mmHg",
    "temperature":     "36.1-37.2 °C",
    "respiratoryRate": "12-20/min",
    "spO2":            ">95%",
    "glucose":         "80-140 mg/dL",
}

UNITS = {
    "heartRate":       "bpm",
    "bloodSugar":      "mg/dL",
    "glucose":         "mg/dL",
    "temperature":     "°C",
    "respiratoryRate": "/min",
    "spO2":            "%",
    "weight":          "kg",
    "height":          "cm",
}


def vital_status(vital: str, value: Optional[Any]) -> VitalStatus:
    """
    Classify one vital reading.

    Blood pressure and any vital without a band are reported as NORMAL once
    a number is present.
    """
    text = coerce_text(value)
    if not text:
        return VitalStatus.PENDING

    number = parse_number(text)
    if number is None:
        return VitalStatus.INVALID

    if vital == "spO2":
        if number >= SPO2_NORMAL:
            return VitalStatus.NORMAL
        if number >= SPO2_LOW:
            return VitalStatus.LOW
        return VitalStatus.CRITICAL

    band = NORMAL_BANDS.get(vital)
    if band is None:
        return VitalStatus.NORMAL
    low, high = band
    return VitalStatus.NORMAL if low <= number <= high else VitalStatus.ABNORMAL


def patient_vital_statuses(data: Mapping[str, str]) -> Dict[str, VitalStatus]:
    return {name: vital_status(name, data.get(name, "")) for name in PATIENT_VITALS}
