"""Command-line interface for duplicating entries and assets.

Usage:
    content-duplicator --space-id SPACE ENTRY_ID [ENTRY_ID ...]
    content-duplicator --space-id SPACE --prefix "Copy of " --exclude AUTHOR_ID ENTRY_ID
    content-duplicator --space-id SPACE --target-environment staging --id-map ids.json ENTRY_ID

All roots given on one command line are duplicated in a single run, so a
record linked from several roots is cloned only once. With ``--id-map`` the
original -> clone mapping of earlier runs is loaded first and the updated
mapping is written back when the run ends, also when it fails part way. A
failed run can then be started again without cloning the same records twice.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from content_duplicator.core.config import DuplicatorConfig
from content_duplicator.core.constants import DEFAULT_ENVIRONMENT, TOKEN_ENV_VAR
from content_duplicator.core.enums import CycleStrategy
from content_duplicator.core.exceptions import ContentDuplicatorConfigurationError, ContentDuplicatorException
from content_duplicator.core.logging_config import configure_logging, get_logger
from content_duplicator.duplicate.context import DuplicationContext
from content_duplicator.duplicate.engine import duplicate_records
from content_duplicator.duplicate.fields import NamingRules
from content_duplicator.interfaces import ContentStore
from content_duplicator.model.records import ClonedRecord
from content_duplicator.store.contentful import ContentfulEnvironment

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="content-duplicator",
        description="Duplicate entries or assets, together with the entries and assets they link to.",
        epilog=(
            "Examples:\n"
            "  content-duplicator --space-id abc123 5KsDBWseXY6QegucYAoacS\n"
            "  content-duplicator --space-id abc123 --prefix 'Copy of ' --no-publish 5KsDBWseXY6QegucYAoacS\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("entry_ids", nargs="+", metavar="ENTRY_ID", help="Id of a record to duplicate")
    parser.add_argument("--space-id", required=True, help="Space holding the records")
    parser.add_argument(
        "--environment", default=DEFAULT_ENVIRONMENT, help=f"Source environment (default: {DEFAULT_ENVIRONMENT})"
    )
    parser.add_argument("--target-environment", help="Environment to create clones in (default: source environment)")
    parser.add_argument("--token", help=f"Content Management API token (default: ${TOKEN_ENV_VAR})")
    parser.add_argument("--asset", action="store_true", help="The ids given are assets, not entries")
    parser.add_argument(
        "--no-publish",
        dest="publish",
        action="store_false",
        help="Leave every clone as draft, even when the original is published",
    )
    parser.add_argument(
        "--exclude", action="append", default=[], metavar="ID", help="Id that is linked, not duplicated (repeatable)"
    )
    parser.add_argument("--single-level", action="store_true", help="Only duplicate the given records, not their children")
    parser.add_argument("--prefix", default="", help="Prefix of cloned names, titles and slugs")
    parser.add_argument("--suffix", default="", help="Suffix of cloned names, titles and slugs")
    parser.add_argument("--regex", help="Pattern replaced in cloned names, titles and slugs")
    parser.add_argument("--replace-str", help="Replacement for --regex")
    parser.add_argument(
        "--on-cycle",
        choices=[s.value for s in CycleStrategy],
        default=CycleStrategy.fail.value,
        help="Fail on link cycles, or keep the link pointing at the original record (default: fail)",
    )
    parser.add_argument("--id-map", type=Path, help="JSON file of original -> clone ids, read and updated")
    parser.add_argument("--report", type=Path, help="Write a JSON report of the run to this file")
    parser.add_argument("--timeout", type=float, default=30.0, help="Seconds to wait for each HTTP response")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    verbosity.add_argument("--debug", action="store_true", help="Log every HTTP request")
    return parser


def config_from_args(args: argparse.Namespace) -> DuplicatorConfig:
    if args.debug:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    return DuplicatorConfig(
        space_id=args.space_id,
        environment=args.environment,
        target_environment=args.target_environment,
        token=args.token,
        entry_ids=args.entry_ids,
        asset=args.asset,
        publish=args.publish,
        exclude=args.exclude,
        single_level=args.single_level,
        prefix=args.prefix,
        suffix=args.suffix,
        regex=args.regex,
        replace_str=args.replace_str,
        cycle_strategy=args.on_cycle,
        timeout=args.timeout,
        logging_level=level,
    )


def load_id_map(path: Path | None) -> dict[str, str]:
    """Read the original -> clone mapping written by an earlier run.

    Raises:
        ContentDuplicatorConfigurationError: The file is not a JSON object of ids.
    """
    if path is None or not path.exists():
        return {}
    try:
        with open(path, "r") as f:
            id_map = json.load(f)
    except ValueError as e:
        raise ContentDuplicatorConfigurationError(f"Id map {path} is not valid JSON: {e}") from e
    if not isinstance(id_map, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in id_map.items()
    ):
        raise ContentDuplicatorConfigurationError(f"Id map {path} must map original ids to clone ids")
    return id_map


def save_id_map(path: Path, id_map: dict[str, str]) -> None:
    with open(path, "w") as f:
        json.dump(id_map, f, indent=2)


def connect(config: DuplicatorConfig) -> tuple[ContentStore, ContentStore]:
    """Return the source and target environments described by `config`."""
    source = ContentfulEnvironment(config.space_id, config.environment, token=config.token, timeout=config.timeout)
    if config.same_environment:
        return source, source
    target = ContentfulEnvironment(config.space_id, config.target_environment, token=config.token, timeout=config.timeout)
    return source, target


def run(
    config: DuplicatorConfig,
    source: ContentStore,
    target: ContentStore,
    duplicated_entries: dict[str, str] | None = None,
) -> tuple[list[ClonedRecord | None], DuplicationContext]:
    """Duplicate the roots of `config` in one run and return the clones with the run context."""
    context = DuplicationContext.for_environments(
        source,
        target,
        naming=NamingRules(
            prefix=config.prefix,
            suffix=config.suffix,
            regex=config.regex,
            replacement=config.replace_str,
        ),
        exclude=set(config.exclude),
        duplicated_entries=duplicated_entries if duplicated_entries is not None else {},
        publish=config.publish,
        single_level=config.single_level,
        cycle_strategy=config.cycle_strategy,
    )
    return duplicate_records(config.entry_ids, context, config.link_type), context


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the duplicator CLI.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = config_from_args(args)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    configure_logging(level=config.logging_level)

    try:
        id_map = load_id_map(args.id_map)
    except ContentDuplicatorConfigurationError as e:
        # The file is left as it is.
        logger.error(str(e))
        return 1
    try:
        source, target = connect(config)
        results, context = run(config, source, target, id_map)
    except ContentDuplicatorException as e:
        logger.error(str(e))
        return 1
    finally:
        if args.id_map is not None:
            save_id_map(args.id_map, id_map)

    for root_id, result in zip(config.entry_ids, results):
        if result is None:
            print(f"{root_id}: excluded, not duplicated")
        else:
            print(f"{root_id}: duplicated as {result.id} ({result.outcome.value})")
    if args.report is not None:
        args.report.write_text(context.report.to_json())
    else:
        logger.info(context.report.to_text())
    return 0


if __name__ == "__main__":
    sys.exit(main())
