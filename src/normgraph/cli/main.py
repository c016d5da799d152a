#!/usr/bin/env python3
"""
normgraph CLI - Main entry point.

Usage:
    normgraph init                                  # Write default normgraph.yaml
    normgraph write query.graphql data.json         # Normalize a result into the snapshot
    normgraph read query.graphql                    # Read a query back from the snapshot
    normgraph inspect [--key Node:1]                # Show stored records
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from graphql import GraphQLError

from ..config import CacheSettings, load_settings
from ..core.document import load_document
from ..core.errors import NormgraphError
from ..core.types import CacheSnapshot
from ..store.node_cache import NodeCache

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT = "normgraph.snapshot.json"

# read exits with this code when the cache cannot answer the query
EXIT_INCOMPLETE = 2


def _parse_variables(raw: Optional[str]) -> dict[str, Any]:
    if not raw:
        return {}
    variables = json.loads(raw)
    if not isinstance(variables, dict):
        raise ValueError("--variables must be a JSON object")
    return variables


def _open_cache(args: argparse.Namespace) -> NodeCache:
    """Cache restored from the snapshot file, empty if the file does not exist."""
    settings = load_settings(args.config) or CacheSettings()
    snapshot_path = Path(args.snapshot)
    if snapshot_path.exists():
        return NodeCache(initial_data=CacheSnapshot.load(snapshot_path), settings=settings)
    logger.info(f"No snapshot at {snapshot_path}, starting empty")
    return NodeCache(settings=settings)


def _dump(data: Any) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def cmd_init(args: argparse.Namespace) -> int:
    """Write a default settings file."""
    config_path = Path(args.config)

    if config_path.exists() and not args.force:
        print(f"Error: {config_path} already exists. Use --force to overwrite.")
        return 1

    CacheSettings().save(config_path)
    print(f"Created {config_path}")
    return 0


def cmd_write(args: argparse.Namespace) -> int:
    """Normalize a JSON result into the snapshot."""
    cache = _open_cache(args)
    document = load_document(args.query)
    data = json.loads(Path(args.data).read_text())

    # accept raw GraphQL responses: {"data": {...}}
    if isinstance(data, dict) and "data" in data and "__typename" not in data:
        data = data["data"]

    variables = _parse_variables(args.variables)
    cache.write(document, variables, data)
    cache.serialize().save(args.snapshot)
    print(f"Wrote {cache.get_operation_id(document, variables)} "
          f"({len(cache)} records in {args.snapshot})")
    return 0


def cmd_read(args: argparse.Namespace) -> int:
    """Read a query from the snapshot."""
    cache = _open_cache(args)
    document = load_document(args.query)
    result = cache.read(document, _parse_variables(args.variables))
    _dump(result.to_dict())
    return 0 if result.complete else EXIT_INCOMPLETE


def cmd_inspect(args: argparse.Namespace) -> int:
    """Show records of the snapshot."""
    snapshot = _open_cache(args).serialize().to_dict()

    if args.key:
        record = snapshot["normalizedData"].get(args.key)
        if record is None:
            print(f"Error: no record {args.key}")
            return 1
        _dump(record)
        return 0

    _dump(snapshot)
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="normgraph",
        description="normgraph - normalized cache for GraphQL query results"
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
    parser.add_argument("--config", "-c", default="normgraph.yaml", help="Settings file (YAML)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # init
    init_parser = subparsers.add_parser("init", help="Write default settings file")
    init_parser.add_argument("--force", "-f", action="store_true", help="Overwrite existing config")

    # write
    write_parser = subparsers.add_parser("write", help="Write a query result into the snapshot")
    write_parser.add_argument("query", help="Path to .graphql document")
    write_parser.add_argument("data", help="Path to JSON result")
    write_parser.add_argument("--variables", help="Variables as JSON object")
    write_parser.add_argument("--snapshot", "-s", default=DEFAULT_SNAPSHOT, help="Snapshot file")

    # read
    read_parser = subparsers.add_parser("read", help="Read a query from the snapshot")
    read_parser.add_argument("query", help="Path to .graphql document")
    read_parser.add_argument("--variables", help="Variables as JSON object")
    read_parser.add_argument("--snapshot", "-s", default=DEFAULT_SNAPSHOT, help="Snapshot file")

    # inspect
    inspect_parser = subparsers.add_parser("inspect", help="Show stored records")
    inspect_parser.add_argument("--key", "-k", help="Record key (Type:id)")
    inspect_parser.add_argument("--snapshot", "-s", default=DEFAULT_SNAPSHOT, help="Snapshot file")

    return parser


def app(args: Optional[List[str]] = None) -> int:
    """Main CLI application."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "init": cmd_init,
        "write": cmd_write,
        "read": cmd_read,
        "inspect": cmd_inspect,
    }

    handler = commands.get(parsed.command)
    if not handler:
        parser.print_help()
        return 1

    try:
        return handler(parsed)
    except (NormgraphError, GraphQLError, ValueError, OSError) as e:
        print(f"Error: {e}")
        return 1


def main() -> None:
    """Entry point for CLI."""
    sys.exit(app())


if __name__ == "__main__":
    main()
