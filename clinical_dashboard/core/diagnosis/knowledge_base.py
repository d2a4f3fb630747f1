"""
Static medical knowledge base for the diagnosis scorer.

Both catalogs are read-only. Iteration order is significant: symptoms are
extracted in catalog order and ranking ties keep condition order.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple

from .base import Rarity


@dataclass(frozen=True)
class SymptomEntry:
    conditions: Tuple[str, ...]
    urgency: str                 # baseline tag, informational only


@dataclass(frozen=True)
class ConditionEntry:
    icd10: str
    rarity: Rarity
    features: FrozenSet[str]


# ── Symptoms ─────────────────────────────────────────────────────────────────
# Some listed conditions (Angina, Asthma, Sepsis, ...) have no catalog entry
# and are skipped during scoring.
SYMPTOM_CATALOG: Mapping[str, SymptomEntry] = MappingProxyType({
    "chest pain": SymptomEntry(
        conditions=("Myocardial Infarction", "Angina", "Pulmonary Embolism", "Anxiety", "GERD"),
        urgency="immediate",
    ),
    "shortness of breath": SymptomEntry(
        conditions=("Asthma", "COPD", "Heart Failure", "Pulmonary Embolism", "Pneumonia"),
        urgency="urgent",
    ),
    "fever": SymptomEntry(
        conditions=("Infection", "Pneumonia", "UTI", "Sepsis", "Viral Syndrome"),
        urgency="urgent",
    ),
    "headache": SymptomEntry(
        conditions=("Tension Headache", "Migraine", "Cluster Headache", "Sinusitis", "Hypertension"),
        urgency="routine",
    ),
    "abdominal pain": SymptomEntry(
        conditions=("Appendicitis", "Gastritis", "Gallstones", "IBS", "Peptic Ulcer"),
        urgency="urgent",
    ),
})


# ── Conditions ───────────────────────────────────────────────────────────────
CONDITION_CATALOG: Mapping[str, ConditionEntry] = MappingProxyType({
    "Myocardial Infarction": ConditionEntry(
        icd10="I21.9",
        rarity=Rarity.COMMON,
        features=frozenset({"chest pain", "elevated troponin", "ECG changes", "diaphoresis"}),
    ),
    "Pneumonia": ConditionEntry(
        icd10="J18.9",
        rarity=Rarity.COMMON,
        features=frozenset({"fever", "cough", "shortness of breath", "chest pain"}),
    ),
    "Type 2 Diabetes": ConditionEntry(
        icd10="E11.9",
        rarity=Rarity.COMMON,
        features=frozenset({"elevated glucose", "polyuria", "polydipsia", "elevated HbA1c"}),
    ),
    "Hypertension": ConditionEntry(
        icd10="I10",
        rarity=Rarity.COMMON,
        features=frozenset({"elevated blood pressure", "headache", "dizziness"}),
    ),
    "Anxiety Disorder": ConditionEntry(
        icd10="F41.9",
        rarity=Rarity.COMMON,
        features=frozenset({"chest pain", "palpitations", "shortness of breath", "sweating"}),
    ),
    "Pulmonary Embolism": ConditionEntry(
        icd10="I26.9",
        rarity=Rarity.UNCOMMON,
        features=frozenset({"shortness of breath", "chest pain", "elevated D-dimer", "tachycardia"}),
    ),
    "Appendicitis": ConditionEntry(
        icd10="K35.9",
        rarity=Rarity.COMMON,
        features=frozenset({"right lower quadrant pain", "fever", "nausea", "elevated WBC"}),
    ),
    "GERD": ConditionEntry(
        icd10="K21.9",
        rarity=Rarity.COMMON,
        features=frozenset({"chest pain", "heartburn", "regurgitation", "dysphagia"}),
    ),
})


# ── Urgency triggers ─────────────────────────────────────────────────────────
# Kept literal. "severe tachycardia" and "severe abdominal pain" are never
# produced by the extraction steps.
CRITICAL_FINDINGS: FrozenSet[str] = frozenset({"hypoxemia", "hypotension", "severe tachycardia", "fever"})
URGENT_SYMPTOMS: FrozenSet[str] = frozenset({"chest pain", "shortness of breath", "severe abdominal pain"})


# ── Recommendations ──────────────────────────────────────────────────────────
RECOMMENDATIONS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "Myocardial Infarction": ("Immediate ECG", "Serial troponins", "Chest X-ray", "Cardiology consultation"),
    "Pneumonia": ("Chest X-ray", "Blood cultures", "Sputum culture", "Complete blood count"),
    "Type 2 Diabetes": ("Fasting glucose", "HbA1c", "Lipid panel", "Diabetic education"),
    "Pulmonary Embolism": (
        "CT pulmonary angiogram", "D-dimer", "Arterial blood gas", "Lower extremity ultrasound",
    ),
})
DEFAULT_RECOMMENDATIONS: Tuple[str, ...] = (
    "Further clinical evaluation", "Symptom monitoring", "Follow-up in 48-72 hours",
)
IMMEDIATE_DIRECTIVE = "Immediate medical attention required"
URGENT_DIRECTIVE = "Evaluation within 24 hours"

HIGH_CONFIDENCE = "High confidence based on clinical presentation and available data"
MODERATE_CONFIDENCE = "Moderate confidence - additional testing recommended for definitive diagnosis"
