"""
cli.py - Command-line entry point for the AppSpec core.

Usage:
    fastform name "I need a patient intake form"
    fastform validate app.json [--json]
    fastform compile app.json [--output prompt.txt] [--json]
    fastform template [--intent "..."] [--app-id ID] [--org-id ID] [--org-slug SLUG]

Exit codes:
    0  success
    1  invalid AppSpec or unsupported feature
    2  usage error (bad arguments, missing file)
"""

from __future__ import annotations

import argparse
import logging
import sys
import uuid
from pathlib import Path
from typing import List, Optional

from fastform.appspec.loader import AppSpecLoadError, dump_app_spec, load_app_spec, load_document
from fastform.appspec.templates import psych_intake_template, seed_app_spec
from fastform.appspec.validator import find_consistency_issues, validate_app_spec
from fastform.compiler.appspec_to_prompt import compile_app_spec_to_prompt
from fastform.compiler.errors import UnsupportedAppSpecFeatureError, to_user_message
from fastform.config.runtime_config import get_log_level
from fastform.naming import generate_heuristic_name
from fastform.schema import (
    CompileResponse,
    HeuristicNameResponse,
    UnsupportedFeatureResponse,
    ValidationReport,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_USAGE = 2


def _cmd_name(args: argparse.Namespace) -> int:
    heuristic = generate_heuristic_name(args.intent)
    if args.json:
        print(HeuristicNameResponse.from_heuristic(heuristic).model_dump_json(indent=2))
    else:
        print(f"Name: {heuristic.name}")
        print(f"Slug: {heuristic.slug}")
    return EXIT_OK


def _cmd_validate(args: argparse.Namespace) -> int:
    try:
        doc = load_document(args.file)
    except FileNotFoundError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE
    except AppSpecLoadError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_INVALID

    result = validate_app_spec(doc)
    if not result.has_errors():
        result.extend(find_consistency_issues(doc))

    if args.json:
        print(ValidationReport.from_result(result).model_dump_json(indent=2))
    else:
        report = result.format_report()
        if report:
            print(report)
        if result.has_errors():
            print(f"FAIL: {args.file} ({len(result.errors)} error(s))")
        else:
            print(f"OK: {args.file} is a valid AppSpec ({len(result.warnings)} warning(s))")

    return EXIT_INVALID if result.has_errors() else EXIT_OK


def _cmd_compile(args: argparse.Namespace) -> int:
    try:
        spec = load_app_spec(args.file)
    except FileNotFoundError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE
    except AppSpecLoadError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_INVALID

    try:
        prompt = compile_app_spec_to_prompt(spec)
    except UnsupportedAppSpecFeatureError as e:
        if args.json:
            print(UnsupportedFeatureResponse.from_error(e).model_dump_json(indent=2))
        else:
            print(to_user_message(e), file=sys.stderr)
            print(f"  Feature: {e.feature}", file=sys.stderr)
        return EXIT_INVALID

    if args.output:
        Path(args.output).write_text(prompt, encoding="utf-8")
        logger.info("Wrote prompt for %s to %s", spec.id, args.output)

    if args.json:
        payload = CompileResponse(app_id=spec.id, prompt=prompt, prompt_length=len(prompt))
        print(payload.model_dump_json(indent=2))
    elif not args.output:
        sys.stdout.write(prompt)
    else:
        print(f"Written to: {args.output}")
    return EXIT_OK


def _cmd_template(args: argparse.Namespace) -> int:
    if args.intent:
        doc = seed_app_spec(
            args.intent,
            app_id=args.app_id or str(uuid.uuid4()),
            org_id=args.org_id,
            org_slug=args.org_slug,
        )
    else:
        doc = psych_intake_template()
    text = dump_app_spec(doc, args.output)
    if args.output:
        print(f"Written to: {args.output}")
    else:
        sys.stdout.write(text)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fastform",
        description="Validate, name and compile Fastform AppSpecs",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_name = sub.add_parser("name", help="Heuristic app name and slug from intent text")
    p_name.add_argument("intent", help="Freeform description of the app")
    p_name.add_argument("--json", action="store_true", help="Print JSON")
    p_name.set_defaults(func=_cmd_name)

    p_validate = sub.add_parser("validate", help="Validate an AppSpec file (JSON or YAML)")
    p_validate.add_argument("file", help="AppSpec file")
    p_validate.add_argument("--json", action="store_true", help="Print the report as JSON")
    p_validate.set_defaults(func=_cmd_validate)

    p_compile = sub.add_parser("compile", help="Compile an AppSpec file into a build prompt")
    p_compile.add_argument("file", help="AppSpec file")
    p_compile.add_argument("--output", help="Write the prompt to this file")
    p_compile.add_argument("--json", action="store_true", help="Print JSON")
    p_compile.set_defaults(func=_cmd_compile)

    p_template = sub.add_parser("template", help="Print the starting AppSpec")
    p_template.add_argument("--intent", help="Seed a new app from this intent")
    p_template.add_argument("--app-id", help="App id for the seeded spec (default: random UUID)")
    p_template.add_argument("--org-id", default="org-local", help="Organization id")
    p_template.add_argument("--org-slug", default="local", help="Organization slug")
    p_template.add_argument("--output", help="Write the document to this file")
    p_template.set_defaults(func=_cmd_template)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level="DEBUG" if args.verbose else get_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
