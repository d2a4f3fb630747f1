"""
Diagnosis Scorer — Base Types

Result contracts produced by the scorer and consumed by the results view
and the report builders. Instances are immutable once returned.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Tuple


# A flat form snapshot: field name -> free text
ClinicalInput = Mapping[str, str]


def coerce_text(value: Any) -> str:
    """None becomes "", anything else its str() form."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


class UrgencyLevel(str, Enum):
    """
    How quickly the presentation needs clinical attention.

    IMMEDIATE – a critical vital finding is present
    URGENT    – an urgent presenting symptom, evaluate within 24 h
    ROUTINE   – nothing above triggered
    """
    IMMEDIATE = "Immediate"
    URGENT    = "Urgent"
    ROUTINE   = "Routine"


class Rarity(str, Enum):
    COMMON   = "common"
    UNCOMMON = "uncommon"
    RARE     = "rare"


@dataclass(frozen=True)
class ClinicalSignals:
    """Normalized tags extracted from one form snapshot."""
    symptoms: Tuple[str, ...] = ()
    vital_findings: Tuple[str, ...] = ()
    lab_findings: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symptoms": list(self.symptoms),
            "vitalFindings": list(self.vital_findings),
            "labFindings": list(self.lab_findings),
        }


@dataclass(frozen=True)
class Diagnosis:
    """One ranked candidate condition."""
    rank: int                                   # 1-based, dense
    disease: str
    icd10: str
    probability: int                            # displayed percentage, 0–95
    rarity: Rarity
    supporting_features: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rank": self.rank,
            "disease": self.disease,
            "icd10": self.icd10,
            "probability": self.probability,
            "rarity": self.rarity.value,
            "supportingFeatures": list(self.supporting_features),
        }


@dataclass(frozen=True)
class DiagnosisResult:
    """
    Complete output of one scoring call.

    `diagnoses` holds between one and five entries ordered by rank.
    `recommended_tests` is the ordered list of suggested next actions.
    """
    diagnoses: Tuple[Diagnosis, ...]
    recommended_tests: Tuple[str, ...]
    urgency: UrgencyLevel
    confidence: str

    @property
    def top(self) -> Diagnosis:
        return self.diagnoses[0]

    # ── Serialisation ─────────────────────────────────────────────────────
    def to_dict(self) -> Dict[str, Any]:
        return {
            "diagnoses": [d.to_dict() for d in self.diagnoses],
            "recommendedTests": list(self.recommended_tests),
            "urgency": self.urgency.value,
            "confidence": self.confidence,
        }
