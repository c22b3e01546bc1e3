"""Command-line entry point for the job description cleaner.

Reads job records as JSON (a single record, a list of records, or a search
response with a "jobs" list) from a file or stdin, or a bare description via
--text, and prints the cleaned result as JSON on stdout. Logs go to stderr.
"""

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from dotenv import load_dotenv
from pydantic import ValidationError

from jobclean.config.exceptions import ConfigurationError
from jobclean.config.loader import load_config, validate_config_file
from jobclean.domain.models import RawPosting
from jobclean.logging import get_logger
from jobclean.logging.config import configure_logging
from jobclean.normalization import JobNormalizer, NormalizationMode
from jobclean.preview import build_preview
from jobclean.salary import derive_salary

logger = get_logger(__name__, component="cli")


class InputError(Exception):
    """Raised when the input cannot be read or is not valid job JSON."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jobclean",
        description="Clean scraped job descriptions, derive salaries and build previews",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="JSON file with job records ('-' or omitted reads stdin)",
    )
    parser.add_argument(
        "--text",
        default=None,
        help="Clean this raw description instead of reading job records",
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in NormalizationMode],
        default=NormalizationMode.LISTING.value,
        help="Treat records as search listings or job details (default: listing)",
    )
    parser.add_argument(
        "--cards",
        action="store_true",
        help="Output job cards with a plain-text preview",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml if present)",
    )
    parser.add_argument(
        "--check-config",
        action="store_true",
        help="Validate the configuration file and exit",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation of the output (default: 2)",
    )
    return parser


def read_records(source: str, stdin: TextIO) -> Any:
    """Read and parse JSON from a file path or stdin ('-').

    Raises:
        InputError: If the file cannot be read or holds invalid JSON
    """
    try:
        if source == "-":
            content = stdin.read()
        else:
            content = Path(source).read_text(encoding="utf-8")
    except OSError as e:
        raise InputError(f"Cannot read input {source}: {e}") from e

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise InputError(f"Input is not valid JSON: {e}") from e


def _clean_text(normalizer: JobNormalizer, text: str) -> Dict[str, Any]:
    description = normalizer.cleaner.clean(text)
    salary = derive_salary(description)
    return {
        "description": description,
        "salary": salary.model_dump() if salary else None,
        "preview": build_preview(description, normalizer.preview_length),
    }


def _serialize(normalizer: JobNormalizer, jobs: List[Any], cards: bool) -> List[Dict[str, Any]]:
    if cards:
        return [normalizer.to_card(job).model_dump() for job in jobs]
    return [job.model_dump() for job in jobs]


def process_payload(
    normalizer: JobNormalizer, payload: Any, mode: NormalizationMode, cards: bool
) -> Dict[str, Any]:
    """Normalize a parsed JSON payload into the output document.

    Args:
        normalizer: Configured JobNormalizer
        payload: Parsed input JSON
        mode: Listing or detail normalization
        cards: Whether to emit job cards with previews

    Returns:
        Output document ready for json.dumps

    Raises:
        InputError: If the payload has an unsupported shape or an invalid single record
    """
    if isinstance(payload, dict) and isinstance(payload.get("jobs"), list):
        records, upstream_total = payload["jobs"], payload.get("total_count")
    elif isinstance(payload, list):
        records, upstream_total = payload, None
    elif isinstance(payload, dict):
        try:
            raw = RawPosting.model_validate(payload)
        except ValidationError as e:
            raise InputError(f"Invalid job record: {e}") from e
        result = normalizer.normalize(raw, mode)
        return {"job": _serialize(normalizer, [result.job], cards)[0]}
    else:
        raise InputError(
            "Expected a job record, a list of records or an object with a 'jobs' list"
        )

    batch = normalizer.process_batch(records, mode)
    total = (
        batch.estimated_total(upstream_total)
        if isinstance(upstream_total, int)
        else len(batch.results)
    )
    return {
        "jobs": _serialize(normalizer, batch.jobs, cards),
        "total": total,
        "filtered_out": batch.filtered_out,
        "failed": batch.failed_ids,
    }


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    """
    Main entry point for the jobclean command.

    Args:
        argv: Command-line arguments (default: sys.argv[1:])
        stdin: Stream read when the input is '-' (default: sys.stdin)
        stdout: Stream the JSON result is written to (default: sys.stdout)

    Returns:
        Exit code (0 for success, 1 for configuration or input errors).
    """
    load_dotenv()
    args = build_parser().parse_args(argv)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    start_time = time.time()

    if args.check_config:
        config_path = args.config or Path("config.yaml")
        return 0 if validate_config_file(config_path) else 1

    try:
        app_config, env_config = load_config(args.config)

        # Log level priority: CLI > environment > config file
        log_level = args.log_level or app_config.logging.level
        configure_logging(
            level=log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        normalizer = JobNormalizer.from_config(app_config)
        mode = NormalizationMode(args.mode)

        if args.text is not None:
            output = _clean_text(normalizer, args.text)
        else:
            output = process_payload(normalizer, read_records(args.input, stdin), mode, args.cards)

        stdout.write(json.dumps(output, indent=args.indent or None, ensure_ascii=False))
        stdout.write("\n")

        logger.info(
            "Run completed",
            extra={
                "event": "cli.run.completed",
                "mode": mode.value,
                "duration_seconds": round(time.time() - start_time, 3),
            },
        )
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1
    except InputError as e:
        print(f"Input Error: {e}", file=sys.stderr)
        logger.error(
            f"Input error: {e}",
            extra={"event": "cli.input.error", "error_type": "InputError"},
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
