"""phrasechain-validate - check translation bundles before shipping.

Usage:
    phrasechain-validate locales/en.json locales/es.json \\
        --plural-suffix Count --date-formats date relative fullDate

Every file is checked. Exit status: 0 when every bundle is valid, 1 when
any issue is found, 2 when any file cannot be read or parsed.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence

import yaml

from phrasechain.i18n.models import (
    DEFAULT_OPTIONAL_PLURAL_CATEGORIES,
    DEFAULT_REQUIRED_PLURAL_CATEGORIES,
)
from phrasechain.i18n.schema import SchemaOptions, validate_bundle
from phrasechain.logging import configure_logging, get_module_logger

logger = get_module_logger()

EXIT_OK = 0
EXIT_ISSUES = 1
EXIT_UNREADABLE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phrasechain-validate",
        description="Validate the structure of translation bundles",
    )
    parser.add_argument("files", nargs="+", type=Path, help="JSON or YAML bundle files")
    parser.add_argument(
        "--plural-keys",
        nargs="*",
        default=[],
        metavar="KEY",
        help="Key names that hold plural objects",
    )
    parser.add_argument(
        "--plural-suffix",
        default=None,
        metavar="SUFFIX",
        help="Treat every key ending with SUFFIX as a plural key",
    )
    parser.add_argument(
        "--required",
        nargs="+",
        default=list(DEFAULT_REQUIRED_PLURAL_CATEGORIES),
        metavar="CATEGORY",
        help="Required plural categories (default: one other)",
    )
    parser.add_argument(
        "--optional",
        nargs="*",
        default=list(DEFAULT_OPTIONAL_PLURAL_CATEGORIES),
        metavar="CATEGORY",
        help="Optional plural categories (default: zero two few many)",
    )
    parser.add_argument(
        "--date-formats",
        nargs="+",
        default=["date", "relative"],
        metavar="FORMAT",
        help="Allowed {date:FORMAT} formats (default: date relative)",
    )
    parser.add_argument(
        "--check-placeholders",
        action="store_true",
        help="Also check placeholder names",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        metavar="LEVEL",
        help="Level for diagnostics written to stderr (default: WARNING)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Write diagnostics as JSON lines",
    )
    return parser


def options_from_args(args: argparse.Namespace) -> SchemaOptions:
    plural_keys = list(args.plural_keys)
    suffix = args.plural_suffix

    if suffix:
        def identifier(key: str) -> bool:
            return key in plural_keys or key.endswith(suffix)
    else:
        identifier = plural_keys

    return SchemaOptions(
        plural_key_identifier=identifier,
        required_plural_keys=args.required,
        optional_plural_keys=args.optional,
        allowed_date_formats=args.date_formats,
        validate_all_placeholders_syntax=args.check_placeholders,
    )


def read_bundle(path: Path) -> Any:
    """Parse a bundle file by extension (.yml/.yaml as YAML, else JSON).

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file cannot be parsed.
    """
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() in (".yml", ".yaml"):
            try:
                return yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Failed to parse {path}: {e}") from e
        return json.load(f)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(log_level=args.log_level, json_output=args.json_logs)
    options = options_from_args(args)

    status = EXIT_OK
    for path in args.files:
        try:
            bundle = read_bundle(path)
        except (OSError, ValueError) as e:
            logger.error("bundle_unreadable", file=str(path), error=str(e))
            print(f"{path}: cannot read bundle: {e}", file=sys.stderr)
            status = EXIT_UNREADABLE
            continue

        issues = validate_bundle(bundle, options)
        lines: List[str] = [
            f"{path}: {issue.path_string or '<root>'}: {issue.message}" for issue in issues
        ]
        for line in lines:
            print(line)

        logger.info("bundle_validated", file=str(path), issue_count=len(issues))
        if issues:
            status = max(status, EXIT_ISSUES)
        else:
            print(f"{path}: ok")

    return status


if __name__ == "__main__":
    sys.exit(main())
