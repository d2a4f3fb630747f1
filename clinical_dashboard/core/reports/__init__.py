"""
Report Module

Builds the table data behind the two downloadable reports:
- Patient Report: information, vitals with status, safety notes
- Doctor Report: demographics, vitals with ranges, AI differential, audit
"""
from .base import ReportTable
from .patient_report import PatientReportGenerator, PatientReport
from .doctor_report import DoctorReportGenerator, DoctorReport

__all__ = [
    "ReportTable",
    "PatientReportGenerator",
    "PatientReport",
    "DoctorReportGenerator",
    "DoctorReport",
]
