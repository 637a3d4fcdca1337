# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""apijc CLI."""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
import threading
from collections.abc import Sequence

from ..config import HttpSettings, load_http_settings, load_run_settings
from ..errors import ApijcError
from ..http import create_default_http_client
from ..loader import load_header_config, load_target_set
from ..log import setup_logging
from ..models import Finding, RunResult
from ..runtime import ApiJsonCompare

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_FATAL = 2


def positive_float(value: str) -> float:
    """Parse and validate a positive float value."""
    try:
        result = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{value!r} is not a number") from exc
    if not math.isfinite(result) or result <= 0:
        raise argparse.ArgumentTypeError(f"{value!r} must be a positive finite number")
    return result


def build_parser() -> argparse.ArgumentParser:
    run_settings = load_run_settings()
    parser = argparse.ArgumentParser(
        prog="apijc",
        description="Compare JSON responses of the same API across two domains",
    )
    parser.add_argument(
        "--url-file",
        "--urlFile",
        dest="url_file",
        required=True,
        help="JSON file with relative paths, HTTP method, expected status code, ...",
    )
    parser.add_argument(
        "--base-domain",
        "--baseDomain",
        dest="base_domain",
        required=True,
        help="Domain for the left side of the comparison",
    )
    parser.add_argument(
        "--new-domain",
        "--newDomain",
        dest="new_domain",
        required=True,
        help="Domain for the right side of the comparison",
    )
    parser.add_argument(
        "--rate-limit",
        "--rateLimit",
        dest="rate_limit",
        type=positive_float,
        default=run_settings.rate_limit,
        help="Compared paths per second (default: %(default)s)",
    )
    parser.add_argument(
        "--output-file",
        "--outputFile",
        dest="output_file",
        default=None,
        help="Write findings as JSON to this file instead of listing them on stdout",
    )
    parser.add_argument(
        "--header-file",
        "--headerFile",
        dest="header_file",
        default=None,
        help="JSON object of header name/value pairs applied to every request",
    )
    parser.add_argument(
        "--max-duration",
        dest="max_duration",
        type=positive_float,
        default=run_settings.max_duration,
        help="Cancel the run after this many seconds, keeping findings collected so far",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print findings and counters as JSON instead of a human-friendly listing",
    )
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for staging/self-signed deployments)",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: APIJC_LOG_LEVEL or INFO)")
    return parser


def _findings_payload(findings: Sequence[Finding]) -> list[dict[str, str]]:
    return [finding.to_dict() for finding in findings]


def _print_json(result: RunResult) -> None:
    json.dump(result.to_dict(), sys.stdout, indent=2)
    sys.stdout.write("\n")


def _pretty_print(result: RunResult) -> None:
    if not result.findings:
        print("All targets matched!")
        return
    print("Findings:")
    for finding in result.findings:
        print(finding.url)
        print(f"Error: {finding.error}")
        print(f"Diff: {finding.diff}")
    print(f"Finished - {len(result.findings)} findings (checked {result.checked_paths} of {result.total_paths} paths)")


def write_findings(path: str, findings: Sequence[Finding]) -> None:
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(_findings_payload(findings), handle, indent=2)
        handle.write("\n")


def _report(result: RunResult, args: argparse.Namespace) -> bool:
    """Print and/or write the findings; False when the output file could not be written."""
    written = True
    if args.output_file and result.findings:
        try:
            write_findings(args.output_file, result.findings)
            logger.info("Written findings to %s", args.output_file)
        except OSError as exc:
            logger.error("Error: cannot write findings to %s: %s", args.output_file, exc)
            written = False
    if args.json:
        _print_json(result)
    elif not args.output_file or not result.findings or not written:
        _pretty_print(result)
    return written


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings: HttpSettings = load_http_settings()
    if args.ignore_ssl_errors:
        settings.verify_ssl = False

    try:
        target_set = load_target_set(args.url_file)
        headers = load_header_config(args.header_file)
    except ApijcError as exc:
        logger.error("Error: %s", exc)
        return EXIT_FATAL

    logger.info("Starting with rate limit: %s/second", args.rate_limit)
    cancel_event = threading.Event()
    timer: threading.Timer | None = None
    if args.max_duration:
        timer = threading.Timer(args.max_duration, cancel_event.set)
        timer.daemon = True
        timer.start()

    http_client = create_default_http_client(settings)
    try:
        with ApiJsonCompare(
            args.base_domain,
            args.new_domain,
            rate_limit=args.rate_limit,
            headers=headers,
            http_client=http_client,
            http_settings=settings,
        ) as comparison:
            result = comparison.run(target_set, cancel_event=cancel_event)
    except ApijcError as exc:
        logger.error("Error: %s", exc)
        if exc.result is not None and exc.result.findings:
            _report(exc.result, args)
        return EXIT_FATAL
    finally:
        if timer is not None:
            timer.cancel()

    if not _report(result, args):
        return EXIT_FATAL
    return EXIT_FINDINGS if result.findings else EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
