"""
Clinical Dashboard - decision support core for the patient / clinician dashboard.
"""
__version__ = "1.0.0"
