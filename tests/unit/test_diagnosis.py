"""
Unit Tests for the Diagnosis Scorer

Tests for signal extraction, scoring, ranking, urgency, recommendations
and the fallback behaviour.
"""
import pytest
from typing import Dict

from clinical_dashboard.core.diagnosis import (
    DiagnosisEngine,
    DiagnosisResult,
    FALLBACK_RESULT,
    Rarity,
    UrgencyLevel,
    analyze_laboratory,
    analyze_vitals,
    extract_symptoms,
    score,
)
from clinical_dashboard.core.diagnosis.engine import (
    calculate_diagnosis_probabilities,
    determine_urgency,
    generate_recommendations,
)
from clinical_dashboard.core.diagnosis.base import ClinicalSignals
from clinical_dashboard.core.diagnosis.findings import parse_blood_pressure, parse_number
from clinical_dashboard.core.diagnosis.knowledge_base import CONDITION_CATALOG, SYMPTOM_CATALOG


class BrokenInput(dict):
    """Mapping whose lookups blow up, to exercise the catch-all path."""

    def get(self, key, default=None):
        raise RuntimeError("storage failure")


def _assert_well_formed(result: DiagnosisResult):
    assert 1 <= len(result.diagnoses) <= 5
    assert [d.rank for d in result.diagnoses] == list(range(1, len(result.diagnoses) + 1))
    probabilities = [d.probability for d in result.diagnoses]
    assert probabilities == sorted(probabilities, reverse=True)
    assert all(0 <= p <= 95 for p in probabilities)


class TestParsing:
    """Tests for defensive numeric parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("120", 120.0),
        ("120 bpm", 120.0),
        (" 37.8", 37.8),
        ("-3", -3.0),
        (".5", 0.5),
    ])
    def test_leading_number(self, text, expected):
        assert parse_number(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["", "abc", "bpm 120", None])
    def test_not_a_number(self, text):
        assert parse_number(text) is None

    def test_blood_pressure_pattern(self):
        assert parse_blood_pressure("150/95") == (150, 95)
        assert parse_blood_pressure("BP 85/60 sitting") == (85, 60)
        assert parse_blood_pressure("high") is None
        assert parse_blood_pressure("") is None


class TestSymptomExtraction:

    def test_case_insensitive_substring(self):
        assert extract_symptoms({"chiefComplaint": "Severe CHEST PAIN since morning"}) == ["chest pain"]

    def test_both_fields_are_searched(self):
        symptoms = extract_symptoms({
            "chiefComplaint": "headache",
            "presentingSymptoms": "some shortness of breath",
        })
        # Catalog order, not text order
        assert symptoms == ["shortness of breath", "headache"]

    def test_words_out_of_order_are_not_detected(self):
        assert extract_symptoms({"chiefComplaint": "pain in the chest"}) == []

    def test_missing_fields(self):
        assert extract_symptoms({}) == []


class TestVitalFindings:

    def test_heart_rate(self):
        assert analyze_vitals({"heartRate": "120"}) == ["tachycardia"]
        assert analyze_vitals({"heartRate": "55"}) == ["bradycardia"]
        assert analyze_vitals({"heartRate": "100"}) == []
        assert analyze_vitals({"heartRate": "fast"}) == []

    def test_blood_pressure(self):
        assert analyze_vitals({"bloodPressure": "150/95"}) == ["hypertension"]
        assert analyze_vitals({"bloodPressure": "120/95"}) == ["hypertension"]
        assert analyze_vitals({"bloodPressure": "85/60"}) == ["hypotension"]
        assert analyze_vitals({"bloodPressure": "high"}) == []

    def test_temperature_spo2_glucose(self):
        assert analyze_vitals({"temperature": "38.2"}) == ["fever"]
        assert analyze_vitals({"temperature": "35.5"}) == ["hypothermia"]
        assert analyze_vitals({"spO2": "88"}) == ["hypoxemia"]
        assert analyze_vitals({"spO2": "95"}) == []
        assert analyze_vitals({"glucose": "200"}) == ["hyperglycemia"]
        assert analyze_vitals({"glucose": "65"}) == ["hypoglycemia"]

    def test_multiple_findings(self):
        findings = analyze_vitals({
            "heartRate": "130",
            "bloodPressure": "80/50",
            "temperature": "39",
            "spO2": "90",
        })
        assert findings == ["tachycardia", "hypotension", "fever", "hypoxemia"]

    def test_numeric_values_are_read(self):
        findings = analyze_vitals({"heartRate": 120, "temperature": 38.4, "spO2": 88, "glucose": None})
        assert findings == ["tachycardia", "fever", "hypoxemia"]

    def test_numeric_reading_keeps_urgency(self, engine):
        result = engine.score({"chiefComplaint": "chest pain", "heartRate": 120, "spO2": 88})
        assert result.urgency == UrgencyLevel.IMMEDIATE
        assert "hypoxemia" in engine.signals({"spO2": 88.0}).vital_findings


class TestLabFindings:

    def test_qualitative_labs(self):
        findings = analyze_laboratory({
            "troponin": "ELEVATED (0.8 ng/mL)",
            "dDimer": "Elevated",
            "crp": "normal",
        })
        assert findings == ["elevated troponin", "elevated D-dimer"]

    def test_hba1c_threshold(self):
        assert analyze_laboratory({"hba1c": "6.5"}) == []
        assert analyze_laboratory({"hba1c": "7.1%"}) == ["elevated HbA1c"]
        assert analyze_laboratory({"hba1c": "pending"}) == []


class TestScoring:

    def test_cardiopulmonary_presentation(self, engine, cardiopulmonary_case):
        signals = engine.signals(cardiopulmonary_case)
        assert {"chest pain", "shortness of breath"} <= set(signals.symptoms)
        assert {"tachycardia", "hypoxemia"} <= set(signals.vital_findings)

        result = engine.score(cardiopulmonary_case)
        _assert_well_formed(result)
        assert result.urgency == UrgencyLevel.IMMEDIATE
        assert result.top.disease in {"Myocardial Infarction", "Pulmonary Embolism", "Anxiety Disorder"}

        top = result.top
        assert top.disease == "Pulmonary Embolism"
        assert top.probability == 70
        assert top.rarity == Rarity.UNCOMMON
        assert top.supporting_features == ("chest pain", "shortness of breath", "tachycardia")
        assert [d.disease for d in result.diagnoses[1:]] == ["Myocardial Infarction", "Pneumonia", "GERD"]

    def test_lab_finding_outranks_symptom_only(self, engine, troponin_case):
        result = engine.score(troponin_case)
        top = result.top
        assert top.disease == "Myocardial Infarction"
        assert top.probability == 55
        assert top.icd10 == "I21.9"
        assert top.supporting_features == ("chest pain", "elevated troponin")
        assert all(d.probability == 25 for d in result.diagnoses[1:])
        assert result.urgency == UrgencyLevel.URGENT
        assert result.recommended_tests == (
            "Immediate ECG", "Serial troponins", "Chest X-ray", "Cardiology consultation",
            "Evaluation within 24 hours",
        )

    def test_probability_capped_at_95(self, engine):
        result = engine.score({
            "chiefComplaint": "chest pain, shortness of breath",
            "heartRate": "125",
            "dDimer": "elevated",
        })
        assert result.top.disease == "Pulmonary Embolism"
        assert result.top.probability == 95
        assert result.confidence.startswith("High confidence")

    def test_at_most_five_diagnoses(self, engine):
        result = engine.score({
            "chiefComplaint": "chest pain, shortness of breath, headache",
            "presentingSymptoms": "abdominal pain",
            "hba1c": "8.0",
        })
        assert len(result.diagnoses) == 5
        assert [d.disease for d in result.diagnoses] == [
            "Pulmonary Embolism", "Type 2 Diabetes", "Myocardial Infarction", "Pneumonia", "Hypertension",
        ]
        assert [d.probability for d in result.diagnoses] == [50, 30, 25, 25, 25]

    def test_uncatalogued_conditions_are_skipped(self):
        # "Anxiety" in the symptom table is not the "Anxiety Disorder" condition
        diagnoses = calculate_diagnosis_probabilities(ClinicalSignals(symptoms=("chest pain",)))
        names = [d.disease for d in diagnoses]
        assert "Anxiety Disorder" not in names
        assert "Angina" not in names
        assert all(name in CONDITION_CATALOG for name in names)

    def test_zero_score_conditions_never_listed(self, engine):
        result = engine.score({"temperature": "38.5"})
        assert [d.disease for d in result.diagnoses] == ["Pneumonia", "Appendicitis"]
        assert all(d.probability > 0 for d in result.diagnoses)

    def test_duplicate_features_are_collapsed(self):
        diagnoses = calculate_diagnosis_probabilities(ClinicalSignals(
            symptoms=("chest pain", "chest pain"),
        ))
        mi = next(d for d in diagnoses if d.disease == "Myocardial Infarction")
        assert mi.probability == 50
        assert mi.supporting_features == ("chest pain",)


class TestFallbacks:

    def test_empty_input(self, engine):
        result = engine.score({})
        assert len(result.diagnoses) == 1
        only = result.diagnoses[0]
        assert only.disease == "Undifferentiated Symptoms"
        assert only.icd10 == "R69"
        assert only.probability == 60
        assert result.urgency == UrgencyLevel.ROUTINE
        assert result.recommended_tests == (
            "Further clinical evaluation", "Symptom monitoring", "Follow-up in 48-72 hours",
        )
        assert result.confidence.startswith("Moderate confidence")

    def test_non_mapping_input_returns_fallback(self, engine):
        assert engine.score(None) is FALLBACK_RESULT
        assert engine.score(["chest pain"]) is FALLBACK_RESULT

    def test_internal_failure_returns_fallback(self, engine):
        result = engine.score(BrokenInput())
        assert result is FALLBACK_RESULT
        assert result.top.disease == "Clinical Evaluation Required"
        assert result.top.icd10 == "Z00.00"
        assert result.top.probability == 50
        assert result.urgency == UrgencyLevel.ROUTINE

    def test_module_level_score(self):
        assert score({}).top.disease == "Undifferentiated Symptoms"


class TestUrgency:

    def test_fever_from_vitals_is_immediate(self, engine):
        result = engine.score({"temperature": "38.5"})
        assert result.urgency == UrgencyLevel.IMMEDIATE
        assert result.recommended_tests[0] == "Immediate medical attention required"

    def test_hypotension_is_immediate(self):
        assert determine_urgency([], ["hypotension"]) == UrgencyLevel.IMMEDIATE

    def test_plain_tachycardia_is_not_critical(self):
        assert determine_urgency([], ["tachycardia"]) == UrgencyLevel.ROUTINE

    def test_abdominal_pain_stays_routine(self, engine):
        # Only "severe abdominal pain" is an urgent trigger and it is never extracted
        result = engine.score({"chiefComplaint": "severe abdominal pain"})
        assert result.top.disease == "Appendicitis"
        assert result.urgency == UrgencyLevel.ROUTINE

    def test_fever_symptom_is_not_urgent(self, engine):
        result = engine.score({"chiefComplaint": "fever and cough"})
        assert result.top.disease == "Pneumonia"
        assert result.urgency == UrgencyLevel.ROUTINE


class TestRecommendations:

    def test_unlisted_disease_gets_generic_actions(self, engine):
        result = engine.score({"chiefComplaint": "headache"})
        assert result.top.disease == "Hypertension"
        assert result.recommended_tests == (
            "Further clinical evaluation", "Symptom monitoring", "Follow-up in 48-72 hours",
        )

    def test_immediate_directive_is_prepended(self, engine, cardiopulmonary_case):
        result = engine.score(cardiopulmonary_case)
        assert result.recommended_tests == (
            "Immediate medical attention required",
            "CT pulmonary angiogram", "D-dimer", "Arterial blood gas", "Lower extremity ultrasound",
        )

    def test_no_diagnoses_no_actions(self):
        assert generate_recommendations([], UrgencyLevel.ROUTINE) == []


@pytest.mark.parametrize("case", [
    {},
    {"chiefComplaint": "chest pain"},
    {"chiefComplaint": "headache", "bloodPressure": "150/95"},
    {"chiefComplaint": "abdominal pain and fever", "temperature": "39", "crp": "elevated"},
    {"heartRate": "abc", "spO2": "", "glucose": "x"},
    {"chiefComplaint": "chest pain shortness of breath fever headache abdominal pain",
     "troponin": "elevated", "dDimer": "elevated", "hba1c": "9"},
])
def test_result_invariants(engine, case: Dict[str, str]):
    first = engine.score(case)
    _assert_well_formed(first)
    assert engine.score(case) == first


def test_catalogs_are_read_only():
    with pytest.raises(TypeError):
        SYMPTOM_CATALOG["cough"] = None  # type: ignore[index]
    with pytest.raises(TypeError):
        CONDITION_CATALOG["Sepsis"] = None  # type: ignore[index]


def test_result_serialisation(engine, troponin_case):
    data = engine.score(troponin_case).to_dict()
    assert set(data) == {"diagnoses", "recommendedTests", "urgency", "confidence"}
    assert data["urgency"] == "Urgent"
    assert data["diagnoses"][0] == {
        "rank": 1,
        "disease": "Myocardial Infarction",
        "icd10": "I21.9",
        "probability": 55,
        "rarity": "common",
        "supportingFeatures": ["chest pain", "elevated troponin"],
    }
