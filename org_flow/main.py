#!/usr/bin/env python3
# Path: org_flow/main.py
"""
Organization Flowchart (org_flow) - Main Entry Point

Reconstructs an organization chart from a flat export of organizational
units and positions.

Data Flow:
    INPUT:   CSV/TSV export or the organizational_units table
    PROCESS: Normalization, parent resolution, orphan handling, indexing
    OUTPUT:  Summary, search results, JSON or indented text export

Usage:
    python main.py --csv units.csv --text
    python main.py --csv units.csv --import          # Load rows into the database
    python main.py --database sqlite:///org.db --search finance --kind organization
    python main.py --csv units.csv --children 50000001
    python main.py --csv units.csv --json out/forest.json
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from config_loader import ConfigLoader
from core.logger import setup_from_config, get_input_logger
from database import initialize_database, session_scope, get_session_factory, UnitOperations
from loaders import UnitFileReader
from process.hierarchy import (
    OrgFlowchartService,
    OrgFlowError,
    SearchKind,
    Forest,
)
from constants import (
    STATUS_OK, STATUS_FAIL, STATUS_INFO, STATUS_WARN,
    MENU_HEADER, MENU_SEPARATOR,
)


logger = get_input_logger('main')


def print_banner() -> None:
    """Print application banner."""
    print()
    print(MENU_HEADER)
    print("  ORG_FLOW - Organization Flowchart")
    print("  Hierarchy Reconstruction from Flat Unit Exports")
    print(MENU_HEADER)
    print()


def print_summary(forest: Forest) -> None:
    """
    Print forest statistics and data-quality notices.

    Args:
        forest: Built forest
    """
    stats = forest.statistics
    print(f"{STATUS_OK} Built hierarchy:")
    print(f"  Organizations: {stats.total_organizations}")
    print(f"  Positions:     {stats.total_positions}")
    print(f"  Roots:         {stats.root_count} ({len(forest.orphans)} orphans)")
    print(f"  Max depth:     {stats.max_depth}")

    for notice in forest.report.notices():
        print(f"{STATUS_INFO} {notice}")
    print()


def print_search(service: OrgFlowchartService, term: str, kind: SearchKind, limit: int) -> None:
    """Print search results with their paths."""
    results = service.search(term, kind, limit)
    if not results:
        print(f"{STATUS_INFO} No matches for '{term}'")
        return

    print(f"{STATUS_OK} {len(results)} matches for '{term}':")
    print(f"  {MENU_SEPARATOR}")
    for result in results:
        print(f"  [{result.kind.value}] {result.entity.id}  {result.breadcrumb}")
    print()


def print_children(service: OrgFlowchartService, node_id: str) -> bool:
    """
    Print one level of the hierarchy below an organization.

    Returns:
        False when the organization does not exist
    """
    expansion = service.children_of(node_id)
    if expansion is None:
        print(f"{STATUS_WARN} Organization not found: {node_id}")
        return False

    print(f"{STATUS_OK} {node_id}: {len(expansion.children)} units, "
          f"{len(expansion.positions)} positions")
    for child in expansion.children:
        marker = '+' if child.has_children else ' '
        manager = f" ({child.manager})" if child.manager else ""
        print(f"  {marker} {child.id}  {child.name}{manager}")
    for position in expansion.positions:
        holder = position.holder or 'vacant'
        print(f"    - {position.id}  {position.name} [{holder}]")
    print()
    return True


def import_csv(csv_path: Path, db_url: Optional[str]) -> None:
    """Upsert CSV rows into the organizational_units table."""
    rows = UnitFileReader().read(csv_path)
    initialize_database(db_url)
    with session_scope() as session:
        summary = UnitOperations.upsert_rows(session, rows)
    print(
        f"{STATUS_OK} Imported {csv_path.name}: {summary.inserted} inserted, "
        f"{summary.updated} updated, {summary.skipped} skipped"
    )


def create_service(args: argparse.Namespace, config: ConfigLoader) -> OrgFlowchartService:
    """
    Create the hierarchy service for the selected record source.

    A CSV path without --import reads the file directly; everything else
    reads the database.
    """
    if args.csv and not args.import_rows:
        reader = UnitFileReader()
        return OrgFlowchartService.from_config(lambda: reader.read(args.csv), config)

    initialize_database(args.database)
    source = UnitOperations.record_source(get_session_factory())
    return OrgFlowchartService.from_config(source, config)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='org_flow - Organization Flowchart',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --csv units.csv --text             Print the tree
  python main.py --csv units.csv --import           Load rows into the database
  python main.py --search "finance" --kind organization
  python main.py --csv units.csv --children 50000001
  python main.py --csv units.csv --json forest.json
        """
    )

    parser.add_argument('--csv', type=Path, help='Delimited export to read')
    parser.add_argument(
        '--database',
        type=str,
        help='Database URL (defaults to ORG_FLOW_DATABASE_URL)'
    )
    parser.add_argument(
        '--import',
        dest='import_rows',
        action='store_true',
        help='Upsert the CSV rows into the database before building'
    )
    parser.add_argument('--search', type=str, help='Substring to search for')
    parser.add_argument(
        '--kind',
        choices=[kind.value for kind in SearchKind],
        default=SearchKind.ANY.value,
        help='Restrict search to organizations or positions'
    )
    parser.add_argument('--children', type=str, metavar='ID', help='Show direct children of a unit')
    parser.add_argument('--json', type=Path, metavar='PATH', help='Write the forest as JSON')
    parser.add_argument('--text', action='store_true', help='Print the forest as indented text')
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Override ORG_FLOW_LOG_LEVEL'
    )
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress banner')

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for org_flow.

    Returns:
        Exit code (0 for success, 1 for errors)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.import_rows and not args.csv:
        parser.error('--import requires --csv')

    if not args.quiet:
        print_banner()

    try:
        config = ConfigLoader()
        setup_from_config(config, args.log_level)
        logger.info("org_flow started")

        if args.import_rows:
            import_csv(args.csv, args.database)

        service = create_service(args, config)
        forest = service.get_hierarchy().forest
        print_summary(forest)

        exit_code = 0

        if args.search is not None:
            print_search(service, args.search, SearchKind(args.kind), config.get('search_limit'))

        if args.children and not print_children(service, args.children):
            exit_code = 1

        if args.text:
            print(forest.to_text())
            print()

        if args.json:
            forest.to_json_file(args.json, indent=config.get('json_indent'))
            print(f"{STATUS_OK} Wrote {args.json}")

        return exit_code

    except (OrgFlowError, FileNotFoundError, SQLAlchemyError, ValueError) as e:
        print(f"\n{STATUS_FAIL} Error: {e}")
        logger.error(f"Run failed: {e}")
        return 1

    except KeyboardInterrupt:
        print("\n[Interrupted]")
        return 130


if __name__ == '__main__':
    sys.exit(main())
