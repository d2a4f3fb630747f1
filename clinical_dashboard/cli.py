"""
Command-line entry point.

    clinical-dashboard score case.json [--report] [--no-delay] [--out result.json]
    clinical-dashboard vitals patient.json [--report]

The case file is a JSON object mapping form field names to text values.
"""
import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List, Optional

from clinical_dashboard import config
from clinical_dashboard.core.diagnosis import DiagnosisEngine
from clinical_dashboard.core.intake import (
    DoctorIntake,
    PatientIntake,
    group_of,
    normalize_clinical_input,
    patient_vital_statuses,
)
from clinical_dashboard.core.reports import DoctorReportGenerator, PatientReportGenerator
from clinical_dashboard.utils import DashboardError, get_logger, setup_logging

logger = get_logger(__name__)


def load_case(path: str) -> Dict[str, str]:
    """
    Read a case file into a ClinicalInput mapping.

    Raises:
        IntakeError: if the JSON document is not an object.
        OSError / UnicodeDecodeError / json.JSONDecodeError: if the file
            cannot be read or parsed.
    """
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    return normalize_clinical_input(raw)


def _emit(payload: Dict[str, Any], out: Optional[str]) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        logger.info(f"Wrote {out}")
    else:
        print(text)


def _filled_by_tab(intake: DoctorIntake) -> Dict[str, List[str]]:
    tabs: Dict[str, List[str]] = {}
    for name in intake.filled_fields():
        tabs.setdefault(group_of(name), []).append(name)
    return tabs


def cmd_score(args: argparse.Namespace) -> int:
    intake = DoctorIntake.model_validate(load_case(args.case))
    data = intake.to_clinical_input()
    filled = _filled_by_tab(intake)
    logger.info(f"Loaded {args.case}: {sum(len(v) for v in filled.values())} field(s) filled")
    engine = DiagnosisEngine()

    if args.no_delay:
        result = engine.score(data)
    else:
        result = asyncio.run(engine.score_async(data))

    payload: Dict[str, Any] = {
        "filledFields": filled,
        "signals": engine.signals(data).to_dict(),
        "result": result.to_dict(),
    }
    if args.report:
        payload["report"] = DoctorReportGenerator().generate(data, result).to_dict()

    _emit(payload, args.out)
    return 0


def cmd_vitals(args: argparse.Namespace) -> int:
    data = PatientIntake.model_validate(load_case(args.case)).to_clinical_input()
    payload: Dict[str, Any] = {
        "vitals": {name: status.value for name, status in patient_vital_statuses(data).items()},
    }
    if args.report:
        payload["report"] = PatientReportGenerator().generate(data).to_dict()

    _emit(payload, args.out)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clinical-dashboard",
        description="Rule-based clinical decision support for dashboard form data.",
    )
    parser.add_argument("--log-level", default=config.LOG_LEVEL)
    parser.add_argument("--log-file", default=config.LOG_FILE or None)
    sub = parser.add_subparsers(dest="command", required=True)

    score_p = sub.add_parser("score", help="Score a clinician case file")
    score_p.add_argument("case", help="JSON object of clinician form fields")
    score_p.add_argument("--report", action="store_true", help="Include clinician report tables")
    score_p.add_argument("--no-delay", action="store_true", help="Skip the simulated processing delay")
    score_p.add_argument("--out", help="Write JSON here instead of stdout")
    score_p.set_defaults(func=cmd_score)

    vitals_p = sub.add_parser("vitals", help="Classify patient self-reported vitals")
    vitals_p.add_argument("case", help="JSON object of patient form fields")
    vitals_p.add_argument("--report", action="store_true", help="Include patient report tables")
    vitals_p.add_argument("--out", help="Write JSON here instead of stdout")
    vitals_p.set_defaults(func=cmd_vitals)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        return args.func(args)
    except json.JSONDecodeError as e:
        logger.error(f"JSON parse failure in {args.case}: {e}")
    except UnicodeDecodeError as e:
        logger.error(f"{args.case} is not UTF-8 text: {e}")
    except OSError as e:
        logger.error(f"File error: {e}")
    except DashboardError as e:
        logger.error(f"{e.code}: {e.message}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
