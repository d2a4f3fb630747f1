"""
Diagnosis Engine

Rule-based differential-diagnosis scorer. Takes a flat form snapshot
(field name -> free text) and returns a ranked DiagnosisResult.

Usage:
    from clinical_dashboard.core.diagnosis import DiagnosisEngine

    engine = DiagnosisEngine()
    result = engine.score({"chiefComplaint": "chest pain", "troponin": "elevated"})
    print(result.top.disease, result.urgency.value)

Scoring weights per matched signal:
    symptom        +25 for every catalogued condition linked to it
    vital finding  +20 for every condition listing the finding
    lab finding    +30 for every condition listing the finding

The public entry points never raise. Any internal failure is logged and
replaced by FALLBACK_RESULT.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Dict, List, Optional, Sequence

from clinical_dashboard import config
from clinical_dashboard.utils.exceptions import ScoringError
from .base import (
    ClinicalInput,
    ClinicalSignals,
    Diagnosis,
    DiagnosisResult,
    Rarity,
    UrgencyLevel,
)
from .findings import analyze_laboratory, analyze_vitals, extract_symptoms
from .knowledge_base import (
    CONDITION_CATALOG,
    CRITICAL_FINDINGS,
    DEFAULT_RECOMMENDATIONS,
    HIGH_CONFIDENCE,
    IMMEDIATE_DIRECTIVE,
    MODERATE_CONFIDENCE,
    RECOMMENDATIONS,
    SYMPTOM_CATALOG,
    URGENT_DIRECTIVE,
    URGENT_SYMPTOMS,
)

logger = logging.getLogger(__name__)

SYMPTOM_WEIGHT = 25
VITAL_WEIGHT = 20
LAB_WEIGHT = 30

MAX_PROBABILITY = 95
MAX_DIAGNOSES = 5
HIGH_CONFIDENCE_THRESHOLD = 70

UNDIFFERENTIATED = Diagnosis(
    rank=1,
    disease="Undifferentiated Symptoms",
    icd10="R69",
    probability=60,
    rarity=Rarity.COMMON,
    supporting_features=("clinical presentation", "patient history"),
)

FALLBACK_RESULT = DiagnosisResult(
    diagnoses=(
        Diagnosis(
            rank=1,
            disease="Clinical Evaluation Required",
            icd10="Z00.00",
            probability=50,
            rarity=Rarity.COMMON,
            supporting_features=("incomplete data", "requires clinical assessment"),
        ),
    ),
    recommended_tests=("Complete clinical examination", "Basic laboratory studies", "Clinical correlation"),
    urgency=UrgencyLevel.ROUTINE,
    confidence="Unable to generate reliable diagnosis - clinical evaluation required",
)


# ── Pipeline stages ───────────────────────────────────────────────────────────

def collect_signals(data: ClinicalInput) -> ClinicalSignals:
    if not isinstance(data, Mapping):
        raise ScoringError(
            f"Clinical input must be a mapping, got {type(data).__name__}",
            stage="input",
        )
    return ClinicalSignals(
        symptoms=tuple(extract_symptoms(data)),
        vital_findings=tuple(analyze_vitals(data)),
        lab_findings=tuple(analyze_laboratory(data)),
    )


def calculate_diagnosis_probabilities(signals: ClinicalSignals) -> List[Diagnosis]:
    """
    Accumulate additive scores per catalogued condition and rank them.

    Only conditions with a positive score survive. The displayed probability
    is capped at MAX_PROBABILITY; the sort is stable so ties keep catalog order.
    Returns the undifferentiated fallback entry when nothing matched.
    """
    scores: Dict[str, int] = {name: 0 for name in CONDITION_CATALOG}
    features: Dict[str, List[str]] = {name: [] for name in CONDITION_CATALOG}

    for symptom in signals.symptoms:
        entry = SYMPTOM_CATALOG.get(symptom)
        if entry is None:
            continue
        for condition in entry.conditions:
            if condition in scores:
                scores[condition] += SYMPTOM_WEIGHT
                features[condition].append(symptom)

    for weight, findings in ((VITAL_WEIGHT, signals.vital_findings), (LAB_WEIGHT, signals.lab_findings)):
        for finding in findings:
            for condition, entry in CONDITION_CATALOG.items():
                if finding in entry.features:
                    scores[condition] += weight
                    features[condition].append(finding)

    candidates = [
        (condition, min(score, MAX_PROBABILITY))
        for condition, score in scores.items()
        if score > 0
    ]
    candidates.sort(key=lambda item: item[1], reverse=True)

    diagnoses = []
    for rank, (condition, probability) in enumerate(candidates[:MAX_DIAGNOSES], start=1):
        entry = CONDITION_CATALOG[condition]
        diagnoses.append(Diagnosis(
            rank=rank,
            disease=condition,
            icd10=entry.icd10,
            probability=probability,
            rarity=entry.rarity,
            supporting_features=tuple(dict.fromkeys(features[condition])),
        ))

    if not diagnoses:
        return [UNDIFFERENTIATED]
    return diagnoses


def determine_urgency(symptoms: Sequence[str], vital_findings: Sequence[str]) -> UrgencyLevel:
    if any(f in CRITICAL_FINDINGS for f in vital_findings):
        return UrgencyLevel.IMMEDIATE
    if any(s in URGENT_SYMPTOMS for s in symptoms):
        return UrgencyLevel.URGENT
    return UrgencyLevel.ROUTINE


def generate_recommendations(diagnoses: Sequence[Diagnosis], urgency: UrgencyLevel) -> List[str]:
    recommendations: List[str] = []

    if diagnoses:
        top = diagnoses[0]
        recommendations.extend(RECOMMENDATIONS.get(top.disease, DEFAULT_RECOMMENDATIONS))

    if urgency == UrgencyLevel.IMMEDIATE:
        recommendations.insert(0, IMMEDIATE_DIRECTIVE)
    elif urgency == UrgencyLevel.URGENT:
        recommendations.append(URGENT_DIRECTIVE)

    return recommendations


def confidence_statement(diagnoses: Sequence[Diagnosis]) -> str:
    if diagnoses and diagnoses[0].probability > HIGH_CONFIDENCE_THRESHOLD:
        return HIGH_CONFIDENCE
    return MODERATE_CONFIDENCE


# ── Engine ────────────────────────────────────────────────────────────────────

class DiagnosisEngine:
    """
    Scores clinical form snapshots against the static knowledge base.

    Stateless, so one instance can serve any number of callers. Overlapping
    async calls are not serialised here; ClinicalSession does that.
    """

    def __init__(self, delay_seconds: Optional[float] = None):
        self.delay_seconds = config.DIAGNOSIS_DELAY_SECONDS if delay_seconds is None else delay_seconds

    def score(self, data: ClinicalInput) -> DiagnosisResult:
        """
        Run the full pipeline synchronously.

        Returns:
            DiagnosisResult with 1–5 ranked diagnoses. On any internal
            failure returns FALLBACK_RESULT instead of raising.
        """
        try:
            signals = collect_signals(data)
            diagnoses = calculate_diagnosis_probabilities(signals)
            urgency = determine_urgency(signals.symptoms, signals.vital_findings)
            recommended = generate_recommendations(diagnoses, urgency)

            logger.info(
                f"DiagnosisEngine: {len(diagnoses)} candidate(s), urgency={urgency.value}: "
                + ", ".join(f"{d.disease} {d.probability}%" for d in diagnoses)
            )
            return DiagnosisResult(
                diagnoses=tuple(diagnoses),
                recommended_tests=tuple(recommended),
                urgency=urgency,
                confidence=confidence_statement(diagnoses),
            )
        except ScoringError as exc:
            logger.warning(f"DiagnosisEngine: {exc.message} ({exc.code}), returning fallback result")
            return FALLBACK_RESULT
        except Exception as exc:
            logger.error(f"DiagnosisEngine: scoring raised {exc}", exc_info=True)
            return FALLBACK_RESULT

    async def score_async(self, data: ClinicalInput, delay: Optional[float] = None) -> DiagnosisResult:
        """Wait out the simulated processing delay, then score."""
        wait = self.delay_seconds if delay is None else delay
        if wait > 0:
            logger.debug(f"DiagnosisEngine: simulating {wait:.1f}s processing delay")
            await asyncio.sleep(wait)
        return self.score(data)

    @staticmethod
    def signals(data: ClinicalInput) -> ClinicalSignals:
        """Extracted symptoms and findings, empty when the input is unusable."""
        try:
            return collect_signals(data)
        except ScoringError:
            return ClinicalSignals()


_default_engine = DiagnosisEngine()


def score(data: ClinicalInput) -> DiagnosisResult:
    return _default_engine.score(data)


async def score_async(data: ClinicalInput, delay: Optional[float] = None) -> DiagnosisResult:
    return await _default_engine.score_async(data, delay=delay)
