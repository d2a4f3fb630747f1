"""
Pytest Configuration and Fixtures

Shared fixtures for the clinical dashboard tests.
"""
import pytest
from pathlib import Path
from datetime import datetime, timezone
from typing import Dict
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from clinical_dashboard.core.diagnosis import DiagnosisEngine


@pytest.fixture
def engine() -> DiagnosisEngine:
    """Engine with the simulated delay switched off."""
    return DiagnosisEngine(delay_seconds=0)


@pytest.fixture
def cardiopulmonary_case() -> Dict[str, str]:
    """Chest pain with breathlessness, tachycardia and low saturation."""
    return {
        "patientId": "PT-001",
        "chiefComplaint": "severe chest pain and shortness of breath",
        "heartRate": "120",
        "spO2": "88",
    }


@pytest.fixture
def troponin_case() -> Dict[str, str]:
    return {
        "chiefComplaint": "chest pain",
        "troponin": "elevated",
    }


@pytest.fixture
def patient_form() -> Dict[str, str]:
    return {
        "name": "Jane Doe",
        "age": "42",
        "sex": "F",
        "weight": "70",
        "height": "",
        "heartRate": "72",
        "bloodSugar": "",
        "temperature": "abc",
        "bloodPressure": "120/80",
        "spO2": "91",
        "medicalHistory": "Asthma since childhood",
        "medications": "  ",
    }


@pytest.fixture
def fixed_time() -> datetime:
    return datetime(2026, 10, 16, 12, 0, 0, tzinfo=timezone.utc)
