"""
Diagnosis Scorer

Maps free-text symptoms, vitals and labs to a ranked differential.

Usage:
    from clinical_dashboard.core.diagnosis import score

    result = score(clinical_input)          # Mapping[str, str]
    result.to_dict()
"""
from .base import ClinicalInput, ClinicalSignals, Diagnosis, DiagnosisResult, Rarity, UrgencyLevel
from .engine import DiagnosisEngine, FALLBACK_RESULT, score, score_async
from .findings import analyze_laboratory, analyze_vitals, extract_symptoms

__all__ = [
    "ClinicalInput",
    "ClinicalSignals",
    "Diagnosis",
    "DiagnosisResult",
    "Rarity",
    "UrgencyLevel",
    "DiagnosisEngine",
    "FALLBACK_RESULT",
    "score",
    "score_async",
    "analyze_laboratory",
    "analyze_vitals",
    "extract_symptoms",
]
