"""proofstore CLI — manage a workspace and its external references.

Usage:
    python -m proofstore init                          Create the workspace layout
    python -m proofstore add-external NAME SOURCE      Record an external reference
    python -m proofstore externals                     List external references
    python -m proofstore show-external ID              Show one external reference
    python -m proofstore remove-external ID            Delete an external reference
    python -m proofstore verify-external ID            Mark an external as verified
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from proofstore.config.layout import DEFAULT_LAYOUT, WorkspaceLayout
from proofstore.config.settings import get_settings
from proofstore.exceptions import ProofStoreError
from proofstore.schemas.external import External
from proofstore.storage.external_store import (
    delete_external,
    list_externals,
    read_external,
    write_external,
)
from proofstore.utils.logging import configure_logging, get_logger
from proofstore.workspace.initializer import init_workspace, is_initialized

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="proofstore",
        description="proofstore — workspace and external reference management",
    )
    parser.add_argument(
        "--dir",
        "-d",
        type=Path,
        default=settings.workspace_dir,
        help="Workspace root directory (default: PROOFSTORE_DIR or .)",
    )
    parser.add_argument(
        "--layout",
        type=Path,
        default=settings.layout_file,
        help="YAML file overriding the workspace layout",
    )
    parser.add_argument(
        "--log-level",
        choices=_LOG_LEVELS,
        default=settings.log_level if settings.log_level in _LOG_LEVELS else "INFO",
        help="Logging level",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=settings.json_logs,
        help="Render logs as JSON",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init", help="Create the workspace layout (idempotent)")

    add = subparsers.add_parser("add-external", help="Record an external reference")
    add.add_argument("name", help="Human-readable name")
    add.add_argument("source", help="Citation or location of the source")
    add.add_argument("--notes", default="", help="Free-form notes")
    _add_format(add)

    listing = subparsers.add_parser("externals", help="List external references")
    _add_format(listing)

    show = subparsers.add_parser("show-external", help="Show one external reference")
    show.add_argument("ext_id", help="External ID")
    _add_format(show)

    remove = subparsers.add_parser("remove-external", help="Delete an external reference")
    remove.add_argument("ext_id", help="External ID")

    verify = subparsers.add_parser("verify-external", help="Mark an external as verified")
    verify.add_argument("ext_id", help="External ID")
    _add_format(verify)

    return parser.parse_args(argv)


def _add_format(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        "-f",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )


def _layout(args: argparse.Namespace) -> WorkspaceLayout:
    if args.layout is None:
        return DEFAULT_LAYOUT
    return WorkspaceLayout.from_yaml(args.layout)


def _require_initialized(args: argparse.Namespace) -> None:
    if not is_initialized(args.dir, _layout(args)):
        raise ProofStoreError(
            f"workspace not initialized at {args.dir} (run 'proofstore init')",
            path=str(args.dir),
        )


def _print_external(ext: External, fmt: str, **extra: object) -> None:
    if fmt == "json":
        data = ext.model_dump(mode="json")
        data.update(extra)
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return

    print(f"ID:           {ext.id}")
    print(f"Name:         {ext.name}")
    print(f"Source:       {ext.source}")
    print(f"Content hash: {ext.content_hash}")
    print(f"Created:      {ext.created.isoformat()}")
    if ext.notes:
        print(f"Notes:        {ext.notes}")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_init(args: argparse.Namespace) -> int:
    paths = init_workspace(args.dir, _layout(args))
    print(f"Initialized workspace at {paths.base}")
    return 0


def _cmd_add_external(args: argparse.Namespace) -> int:
    _require_initialized(args)
    ext = External.new(args.name, args.source, notes=args.notes)
    ext.validate_fields()
    write_external(args.dir, ext)

    if args.format == "json":
        _print_external(ext, "json")
    else:
        print(f"Added external {ext.id}: {ext.name}")
    return 0


def _cmd_externals(args: argparse.Namespace) -> int:
    _require_initialized(args)
    externals = [read_external(args.dir, ext_id) for ext_id in sorted(list_externals(args.dir))]

    if args.format == "json":
        print(json.dumps([e.model_dump(mode="json") for e in externals], indent=2, ensure_ascii=False))
        return 0

    if not externals:
        print("No external references.")
        return 0
    for ext in externals:
        status = "verified" if ext.is_verified else "unverified"
        print(f"{ext.id:<18} {status:<11} {ext.name}  ({ext.source})")
    return 0


def _cmd_show_external(args: argparse.Namespace) -> int:
    _require_initialized(args)
    _print_external(read_external(args.dir, args.ext_id), args.format)
    return 0


def _cmd_remove_external(args: argparse.Namespace) -> int:
    _require_initialized(args)
    delete_external(args.dir, args.ext_id)
    print(f"Removed external {args.ext_id}")
    return 0


def _cmd_verify_external(args: argparse.Namespace) -> int:
    _require_initialized(args)
    ext = read_external(args.dir, args.ext_id)
    changed = ext.mark_verified()
    if changed:
        write_external(args.dir, ext)

    if args.format == "json":
        _print_external(ext, "json", verified=True, already_verified=not changed)
    elif changed:
        print(f"Verified external {ext.id}: {ext.name}")
    else:
        print(f"External {ext.id} was already verified")
    return 0


_COMMANDS = {
    "init": _cmd_init,
    "add-external": _cmd_add_external,
    "externals": _cmd_externals,
    "show-external": _cmd_show_external,
    "remove-external": _cmd_remove_external,
    "verify-external": _cmd_verify_external,
}


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(args.log_level, json_output=args.json_logs)

    handler = _COMMANDS.get(args.command)
    if handler is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    try:
        return handler(args)
    except ProofStoreError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        get_logger(workspace=str(args.dir)).error(
            "Filesystem error", command=args.command, error=str(exc)
        )
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
