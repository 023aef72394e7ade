"""
Admin CLI for running and managing validators.

Usage:
    python -m validation_engine.cli.admin_cli --config rules.yaml validate --validator <id|name> --data '<json>'
    python -m validation_engine.cli.admin_cli validate --validator <id|name> --data-file <path> [--collect-errors]
    python -m validation_engine.cli.admin_cli list-validators [--active-only]
    python -m validation_engine.cli.admin_cli show-validator <id|name>
    python -m validation_engine.cli.admin_cli check-rules --validator <id|name>
    python -m validation_engine.cli.admin_cli init-schema
    python -m validation_engine.cli.admin_cli import-config --config-file <path>

Add --serve-metrics to expose Prometheus metrics while a command runs.

The rule store is the YAML file given with --config, or the PostgreSQL
database described by the --db-* options (falling back to the DB_*
environment variables).
"""

import argparse
import json
import sys
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

from ..config import get_settings
from ..core.models import ValidatorRule
from ..core.rules import RuleConfigLoader, ValidatorService
from ..observability.logger import get_logger, log_operation, setup_logger
from ..observability.metrics import start_metrics_server
from ..storage.connection import DatabaseConnectionPool

logger = get_logger(__name__)


def format_timestamp(ts: datetime | str | None) -> str:
    """Format timestamp for display."""
    if isinstance(ts, str):
        return ts
    return ts.strftime("%Y-%m-%d %H:%M:%S") if ts else "N/A"


def _create_pool(args) -> DatabaseConnectionPool:
    return DatabaseConnectionPool(
        host=args.db_host,
        port=args.db_port,
        database=args.db_name,
        user=args.db_user,
        password=args.db_password,
    )


@contextmanager
def open_store(args):
    """
    Open the rule store selected on the command line.

    Yields:
        InMemoryRuleStore loaded from --config, or a PostgresRuleStore
    """
    if args.config:
        yield RuleConfigLoader(args.config).load_store()
        return

    from ..storage.postgres_store import PostgresRuleStore

    pool = _create_pool(args)
    try:
        pool.open()
        yield PostgresRuleStore(pool)
    finally:
        pool.close()


def _read_record(args) -> dict:
    if args.data is not None:
        raw = args.data
    else:
        raw = Path(args.data_file).read_text()

    record = json.loads(raw)
    if not isinstance(record, dict):
        raise ValueError("Input record must be a JSON object")
    return record


def validate_command(args) -> int:
    """
    Run a validator against one JSON record.

    Returns:
        0 when the record is valid, 1 otherwise
    """
    record = _read_record(args)

    with open_store(args) as store:
        service = ValidatorService(store)
        result = service.run_validator(args.validator, record, fail_fast=not args.collect_errors)

    print(json.dumps(result.to_response(include_errors=args.collect_errors or not result.success), indent=2))
    return 0 if result.success else 1


def list_validators_command(args) -> int:
    """List stored validators."""
    with open_store(args) as store:
        validators = store.list_validators(active_only=args.active_only)

    if not validators:
        print("\nNo validators found.")
        return 0

    print(f"\n{'Order':<7} {'Status':<10} {'Name':<30} {'ID'}")
    print(f"{'-' * 80}")
    for validator in validators:
        print(
            f"{validator.order_number:<7} {validator.active_status.value:<10} "
            f"{validator.name:<30} {validator.validator_id}"
        )
    print(f"\nTotal: {len(validators)} validator(s)\n")
    return 0


def show_validator_command(args) -> int:
    """Show a validator and its active rules in evaluation order."""
    with open_store(args) as store:
        validator = store.get_validator(args.validator, active_only=False)
        if validator is None:
            print(f"\nNo validator found: {args.validator}")
            return 1
        rules = store.get_active_rules_for_validator(validator.validator_id)

    print(f"\n{'=' * 60}")
    print(f"VALIDATOR: {validator.name}")
    print(f"{'=' * 60}\n")
    print(f"  ID:          {validator.validator_id}")
    print(f"  Status:      {validator.active_status.value}")
    print(f"  Order:       {validator.order_number}")
    print(f"  Description: {validator.description or '-'}")
    print(f"  Context:     {validator.context or '-'}")
    print(f"  Updated:     {format_timestamp(validator.updated_at)}\n")

    print(f"Active rules ({len(rules)}):")
    for rule, order_number in rules:
        print(f"  [{order_number}] {rule.attribute}: {rule.kind} {json.dumps(rule.parameters, default=str)}")
    print()
    return 0


def check_rules_command(args) -> int:
    """
    Compile every active rule of a validator and report configuration errors.

    Returns:
        0 when every rule compiles, 1 otherwise
    """
    with open_store(args) as store:
        problems = ValidatorService(store).check_validator(args.validator)

    if not problems:
        print(f"\nAll rules of '{args.validator}' compile.")
        return 0

    print(f"\n{len(problems)} problem(s) in '{args.validator}':")
    for rule_id, attribute, error in problems:
        if rule_id:
            print(f"  - rule {rule_id} ({attribute}): {error}")
        else:
            print(f"  - {error}")
    return 1


def init_schema_command(args) -> int:
    """Create the PostgreSQL rule store tables."""
    from ..storage.schema import create_schema

    pool = _create_pool(args)
    try:
        pool.open()
        create_schema(pool)
    finally:
        pool.close()

    print("\nSchema created.")
    return 0


def import_config_command(args) -> int:
    """Copy rules, validators and associations from a YAML file into PostgreSQL."""
    from ..storage.postgres_store import PostgresRuleStore

    source = RuleConfigLoader(args.config_file).load_store()

    pool = _create_pool(args)
    try:
        pool.open()
        target = PostgresRuleStore(pool)

        with log_operation("Importing rule config", logger=logger, path=str(args.config_file)):
            rules = source.list_rules()
            for rule in rules:
                target.save_rule(rule)

            validators = source.list_validators()
            associations: list[ValidatorRule] = []
            for validator in validators:
                target.save_validator(validator)
                associations.extend(source.get_associations(validator.validator_id))

            for association in associations:
                target.attach_rule(association)
    finally:
        pool.close()

    print(
        f"\nImported {len(rules)} rule(s), {len(validators)} validator(s) "
        f"and {len(associations)} association(s)."
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Admin CLI for the validation engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        help="YAML rule configuration to use as an in-memory store (instead of PostgreSQL)",
    )

    # Database connection options; unset values fall back to DB_* settings
    parser.add_argument("--db-host", help="Database host")
    parser.add_argument("--db-port", type=int, help="Database port")
    parser.add_argument("--db-name", help="Database name")
    parser.add_argument("--db-user", help="Database user")
    parser.add_argument("--db-password", help="Database password")

    parser.add_argument(
        "--serve-metrics",
        action="store_true",
        help="Expose Prometheus metrics over HTTP while the command runs",
    )
    parser.add_argument("--metrics-port", type=int, help="Port for --serve-metrics (default: METRICS_PORT)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # validate command
    validate_parser = subparsers.add_parser("validate", help="Run a validator against a JSON record")
    validate_parser.add_argument("--validator", required=True, help="Validator id or name")
    data_group = validate_parser.add_mutually_exclusive_group(required=True)
    data_group.add_argument("--data", help="Input record as a JSON object")
    data_group.add_argument("--data-file", help="Path to a file holding the JSON record")
    validate_parser.add_argument(
        "--collect-errors",
        action="store_true",
        help="Evaluate every rule and print all failure messages",
    )

    # list-validators command
    list_parser = subparsers.add_parser("list-validators", help="List validators")
    list_parser.add_argument("--active-only", action="store_true", help="Only show active validators")

    # show-validator command
    show_parser = subparsers.add_parser("show-validator", help="Show a validator and its rules")
    show_parser.add_argument("validator", help="Validator id or name")

    # check-rules command
    check_parser = subparsers.add_parser("check-rules", help="Report rules that fail to compile")
    check_parser.add_argument("--validator", required=True, help="Validator id or name")

    # init-schema command
    subparsers.add_parser("init-schema", help="Create the PostgreSQL rule store tables")

    # import-config command
    import_parser = subparsers.add_parser("import-config", help="Import a YAML rule configuration into PostgreSQL")
    import_parser.add_argument("--config-file", required=True, help="Path to the YAML rule configuration")

    return parser


COMMANDS = {
    "validate": validate_command,
    "list-validators": list_validators_command,
    "show-validator": show_validator_command,
    "check-rules": check_rules_command,
    "init-schema": init_schema_command,
    "import-config": import_config_command,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point for admin CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    settings = get_settings()
    setup_logger(level=settings.log_level, format_type=settings.log_format)

    try:
        if args.serve_metrics:
            port = start_metrics_server(args.metrics_port)
            logger.info(f"Serving metrics on port {port}", extra={"port": port})
        return COMMANDS[args.command](args)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Command '{args.command}' failed: {e}", exc_info=True)
        print(f"\nError: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
