"""
Clinical Dashboard — Configuration
==================================
Centralised runtime settings. Values come from the environment, optionally
seeded from a project-level .env file.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# ── Paths ───────────────────────────────────────────────────────────────
PACKAGE_DIR = Path(__file__).resolve().parent                  # clinical_dashboard/
PROJECT_ROOT = PACKAGE_DIR.parent

# ── Load .env ───────────────────────────────────────────────────────────
load_dotenv(PROJECT_ROOT / ".env")


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "")
    try:
        return float(raw) if raw.strip() else default
    except ValueError:
        return default


# ── Scoring ─────────────────────────────────────────────────────────────
# Simulated processing latency before an async analysis starts (seconds)
DIAGNOSIS_DELAY_SECONDS: float = max(0.0, _float_env("DIAGNOSIS_DELAY_SECONDS", 2.0))

# ── Logging ─────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE: str = os.getenv("LOG_FILE", "")

# ── Report metadata ─────────────────────────────────────────────────────
REPORT_FOOTER_PATIENT = "Digital Twin Health - AI-Powered Medical Dashboard"
REPORT_FOOTER_DOCTOR = "Digital Twin Health - Clinical Decision Support System"
