"""
Signal extraction for the diagnosis scorer.

Turns free-text form values into three lists of normalized tags:

    extract_symptoms     catalog phrases found in the complaint text
    analyze_vitals       threshold findings from vital signs
    analyze_laboratory   findings from lab results

Non-string values are read through their text form. Unparseable or empty
values are skipped silently; nothing here raises on bad clinical text.

Thresholds:
    heart rate     (bpm)   >100 tachycardia, <60 bradycardia
    blood pressure (mmHg)  >140 systolic or >90 diastolic hypertension, <90 systolic hypotension
    temperature    (°C)    >37.5 fever, <36 hypothermia
    SpO2           (%)     <95 hypoxemia
    glucose        (mg/dL) >140 hyperglycemia, <70 hypoglycemia
    HbA1c          (%)     >6.5 elevated
"""
from __future__ import annotations

import re
from typing import List, Optional

from .base import ClinicalInput, coerce_text
from .knowledge_base import SYMPTOM_CATALOG

# ── Thresholds ────────────────────────────────────────────────────────────────

HR_TACHY          = 100
HR_BRADY          = 60
SBP_HYPERTENSION  = 140
DBP_HYPERTENSION  = 90
SBP_HYPOTENSION   = 90
TEMP_FEVER        = 37.5
TEMP_HYPOTHERMIA  = 36.0
SPO2_HYPOXEMIA    = 95
GLUCOSE_HIGH      = 140
GLUCOSE_LOW       = 70
HBA1C_ELEVATED    = 6.5

# Leading decimal number, the rest of the text is ignored ("120 bpm" -> 120)
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_BLOOD_PRESSURE = re.compile(r"(\d+)/(\d+)")

# Lab field -> finding emitted when its text mentions "elevated"
_QUALITATIVE_LABS = (
    ("troponin", "elevated troponin"),
    ("dDimer", "elevated D-dimer"),
    ("crp", "elevated CRP"),
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _text(data: ClinicalInput, name: str) -> str:
    return coerce_text(data.get(name))


def parse_number(value: Optional[str]) -> Optional[float]:
    """Parse the leading number of a free-text value, or None if there is none."""
    if not value:
        return None
    match = _LEADING_NUMBER.match(value)
    if match is None:
        return None
    return float(match.group(1))


def parse_blood_pressure(value: Optional[str]) -> Optional[tuple]:
    """Return (systolic, diastolic) from the first ``N/N`` pattern in the text."""
    if not value:
        return None
    match = _BLOOD_PRESSURE.search(value)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


# ── Extraction ────────────────────────────────────────────────────────────────

def extract_symptoms(data: ClinicalInput) -> List[str]:
    """Catalog symptom phrases occurring verbatim in the complaint fields."""
    text = f"{_text(data, 'chiefComplaint')} {_text(data, 'presentingSymptoms')}".lower()
    return [symptom for symptom in SYMPTOM_CATALOG if symptom in text]


def analyze_vitals(data: ClinicalInput) -> List[str]:
    findings: List[str] = []

    hr = parse_number(_text(data, "heartRate"))
    if hr is not None:
        if hr > HR_TACHY:
            findings.append("tachycardia")
        if hr < HR_BRADY:
            findings.append("bradycardia")

    bp = parse_blood_pressure(_text(data, "bloodPressure"))
    if bp is not None:
        systolic, diastolic = bp
        if systolic > SBP_HYPERTENSION or diastolic > DBP_HYPERTENSION:
            findings.append("hypertension")
        if systolic < SBP_HYPOTENSION:
            findings.append("hypotension")

    temp = parse_number(_text(data, "temperature"))
    if temp is not None:
        if temp > TEMP_FEVER:
            findings.append("fever")
        if temp < TEMP_HYPOTHERMIA:
            findings.append("hypothermia")

    spo2 = parse_number(_text(data, "spO2"))
    if spo2 is not None and spo2 < SPO2_HYPOXEMIA:
        findings.append("hypoxemia")

    glucose = parse_number(_text(data, "glucose"))
    if glucose is not None:
        if glucose > GLUCOSE_HIGH:
            findings.append("hyperglycemia")
        if glucose < GLUCOSE_LOW:
            findings.append("hypoglycemia")

    return findings


def analyze_laboratory(data: ClinicalInput) -> List[str]:
    findings: List[str] = []

    for field_name, finding in _QUALITATIVE_LABS:
        if "elevated" in _text(data, field_name).lower():
            findings.append(finding)

    hba1c = parse_number(_text(data, "hba1c"))
    if hba1c is not None and hba1c > HBA1C_ELEVATED:
        findings.append("elevated HbA1c")

    return findings
