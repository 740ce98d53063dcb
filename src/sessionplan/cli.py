"""CLI entrypoint for sessionplan."""

from __future__ import annotations

import argparse
from typing import Any

from sessionplan.io import read_json, read_plan_json, write_json
from sessionplan.logging import get_logger, setup_logging
from sessionplan.metrics import collect_metrics
from sessionplan.normalization import normalize_plan_days, resolve_normalize_options
from sessionplan.reporting import (
    build_error_report,
    build_validation_error_report,
    build_success_report,
)
from sessionplan.validation import (
    ValidationError,
    ValidationReport,
    validate_plan_payload,
    validate_plan_with_schema,
)

logger = get_logger(__name__)


def _load_options_file(options_path: str | None) -> tuple[dict[str, Any], list[ValidationError]]:
    if not options_path:
        return {}, []
    try:
        return read_json(options_path), []
    except FileNotFoundError:
        message = f"Options file not found: {options_path}"
        code = "file_not_found"
    except ValueError as exc:
        message = str(exc)
        code = "invalid_json"
    return {}, [ValidationError(code=code, message=message, path="$.options_path")]


def run_normalize_command(
    plan_path: str,
    output_path: str,
    *,
    options_path: str | None = None,
    option_overrides: dict[str, Any] | None = None,
) -> int:
    """Normalize every day of a plan file and write a JSON report; returns the exit code."""
    validation_report = ValidationReport()

    try:
        plan_payload = read_plan_json(plan_path)
    except (OSError, ValueError) as exc:
        logger.error("plan_read_failed", plan=plan_path, error=str(exc))
        write_json(
            output_path,
            build_error_report(
                [ValidationError(code="invalid_request", message=str(exc), path="$.plan")],
                code="request_read_error",
            ),
        )
        return 2

    errors = validate_plan_payload(plan_payload)
    if errors:
        write_json(output_path, build_error_report(errors))
        return 2

    file_options, load_errors = _load_options_file(options_path)
    if load_errors:
        write_json(output_path, build_error_report(load_errors, code="input_load_error"))
        return 2

    # Precedence: options embedded in the plan < options file < command-line flags.
    embedded = plan_payload.get("options") if isinstance(plan_payload.get("options"), dict) else {}
    merged_options = {**embedded, **file_options, **(option_overrides or {})}
    options = resolve_normalize_options(merged_options, validation_report)

    validation_report.absorb(validate_plan_with_schema(plan_payload))

    if validation_report.errors:
        write_json(output_path, build_validation_error_report(validation_report))
        return 2

    normalization = normalize_plan_days(plan_payload["days"], options)
    metrics = collect_metrics(normalization, options)
    write_json(
        output_path,
        build_success_report(
            normalization,
            options=options.as_dict(),
            metrics=metrics,
            validation_report=validation_report,
        ),
    )
    logger.info(
        "plan_normalized",
        plan=plan_path,
        output=output_path,
        days=metrics["days_count"],
        adjusted_days=normalization.meta.adjusted_days,
        total_notes=normalization.meta.total_notes,
    )
    return 0


def _option_overrides(args: argparse.Namespace) -> dict[str, Any]:
    flags = {
        "startTime": args.start,
        "endTime": args.end,
        "minBlockMinutes": args.min_block,
        "createFillerTitle": args.filler_title,
    }
    return {key: value for key, value in flags.items() if value is not None}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sessionplan", description="Workshop day-schedule normalizer")
    parser.add_argument("--log-json", action="store_true", help="Emit JSON log lines")
    parser.add_argument("--log-level", default="INFO", help="DEBUG, INFO, WARNING, ERROR or CRITICAL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    normalize_parser = subparsers.add_parser("normalize", help="Normalize every day of a session plan JSON")
    normalize_parser.add_argument("--plan", required=True, help="Path to the session plan JSON")
    normalize_parser.add_argument("--output", required=True, help="Path to the normalized report JSON")
    normalize_parser.add_argument("--options", help="Path to a JSON file with normalize options")
    normalize_parser.add_argument("--start", help="Window start, HH:MM (default 09:00)")
    normalize_parser.add_argument("--end", help="Window end, HH:MM (default 17:00)")
    normalize_parser.add_argument("--min-block", type=int, help="Minimum block size in minutes (default 5)")
    normalize_parser.add_argument("--filler-title", help="Title of synthesized buffer blocks")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(json_output=args.log_json, log_level=args.log_level)

    if args.command == "normalize":
        return run_normalize_command(
            args.plan,
            args.output,
            options_path=args.options,
            option_overrides=_option_overrides(args),
        )

    parser.error("Unknown command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
