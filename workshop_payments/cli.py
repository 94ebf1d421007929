#!/usr/bin/env python3
"""
Workshop Payments CLI — load, inspect, edit and export payment sheets.

USAGE:
  python -m workshop_payments.cli load payments.xlsx            # Replace data with a workbook
  python -m workshop_payments.cli sheets                        # List sheets
  python -m workshop_payments.cli show --sheet Trip             # Show a sheet
  python -m workshop_payments.cli show --sort amount --desc     # Sorted view
  python -m workshop_payments.cli show --person Alice           # Only rows paid to Alice
  python -m workshop_payments.cli add "Alice" "Lunch" "12.50"   # Append to the active sheet
  python -m workshop_payments.cli edit 0 "Alice" "Dinner" 20    # Overwrite row 0
  python -m workshop_payments.cli delete 0                      # Delete row 0
  python -m workshop_payments.cli export --format both          # xlsx (all sheets) + csv (active)
  python -m workshop_payments.cli clear                         # Forget saved state
  python -m workshop_payments.cli serve --port 8000             # Start API server

Row numbers are positions in stored order, as shown in the first column of `show`.
Every change is saved and picked up by the next command.
"""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from workshop_payments.common import format_amount
from workshop_payments.config import BASE_FOLDER
from workshop_payments.data.loader import read_workbook
from workshop_payments.data.schemas import SortKey
from workshop_payments.data.snapshot import SnapshotStore
from workshop_payments.errors import PaymentsError
from workshop_payments.logging_setup import configure_logging
from workshop_payments.workspace import Workspace


def _open_workspace(args) -> Workspace:
    """Workspace restored from the saved snapshot in --data-dir."""
    workspace = Workspace(SnapshotStore(Path(args.data_dir)))
    workspace.restore()
    sheet = getattr(args, "sheet", None)
    if sheet:
        workspace.set_active_sheet(sheet, preserve_filter=sheet == workspace.view.active_sheet)
    return workspace


def _print_view(workspace: Workspace) -> None:
    view = workspace.current_view()
    if view.sheet is None:
        print("  No sheet selected — load a workbook first.")
        return

    sort = view.sort
    order = f"{sort.key.value} {'asc' if sort.ascending else 'desc'}" if sort.key else "stored order"
    print(f"\n  {view.sheet}  ({order}" + (f", person: {view.person_filter})" if view.person_filter else ")"))
    print(f"  {'#':<5}{'Who':<24}{'Why':<32}{'How Much':>14}")
    print("  " + "-" * 75)
    for entry in view.entries:
        r = entry.row
        print(f"  {entry.position:<5}{r.who[:22]:<24}{r.why[:30]:<32}{format_amount(r.amount):>14}")
    print("  " + "-" * 75)
    print(f"  {'Total':<61}{format_amount(view.total):>14}")
    if view.person_total is not None:
        print(f"  {'Total for ' + view.person_filter:<61}{format_amount(view.person_total):>14}")
    print(f"  Rows: {view.row_count}    People: {', '.join(view.people) or '—'}\n")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_load(args):
    """Replace all data with a workbook or CSV file."""
    workspace = _open_workspace(args)
    workbook = read_workbook(Path(args.file))
    workspace.ingest(workbook)
    print(f"\nLoaded {args.file}: {workspace.store.row_count()} row(s) in "
          f"{len(workspace.store.sheet_names())} sheet(s)")
    for name in workspace.store.sheet_names():
        print(f"   {name:<30}{workspace.store.row_count(name):>6} rows  {format_amount(workspace.store.total(name)):>14}")
    print()


def cmd_sheets(args):
    workspace = _open_workspace(args)
    names = workspace.store.sheet_names()
    if not names:
        print("  No data loaded.")
        return
    for name in names:
        marker = "*" if name == workspace.view.active_sheet else " "
        print(f" {marker} {name:<30}{workspace.store.row_count(name):>6} rows  {format_amount(workspace.store.total(name)):>14}")


def cmd_show(args):
    workspace = _open_workspace(args)
    if args.sort:
        workspace.set_sort(args.sort, ascending=not args.desc)
    elif args.unsorted:
        workspace.set_sort(None)
    if args.person is not None:
        workspace.set_filter(args.person)
        if args.person and workspace.view.person_filter is None:
            print(f"  No rows paid to '{args.person}' — showing everyone.")
    _print_view(workspace)


def cmd_add(args):
    workspace = _open_workspace(args)
    row = workspace.append(args.who, args.why, args.amount)
    print(f"  Added to {workspace.view.active_sheet}: {row.who} / {row.why} / {format_amount(row.amount)}")


def cmd_edit(args):
    workspace = _open_workspace(args)
    row = workspace.edit_at(args.position, args.who, args.why, args.amount)
    print(f"  Row {args.position} is now: {row.who} / {row.why} / {format_amount(row.amount)}")


def cmd_delete(args):
    workspace = _open_workspace(args)
    row = workspace.delete_at(args.position)
    print(f"  Deleted row {args.position}: {row.who} / {row.why} / {format_amount(row.amount)}")


def cmd_export(args):
    workspace = _open_workspace(args)
    output = Path(args.output) if args.output else Path(args.data_dir) / "exports"
    if args.format in ("xlsx", "both"):
        path = workspace.export_workbook(output)
        print(f"  Workbook saved to: {path}")
    if args.format in ("csv", "both"):
        path = workspace.export_csv(output)
        print(f"  CSV saved to: {path}")


def cmd_clear(args):
    workspace = Workspace(SnapshotStore(Path(args.data_dir)))
    if not workspace.clear_saved():
        raise PaymentsError(f"Could not delete saved state at {workspace.snapshots.path}")
    print("  Saved state cleared.")


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    os.environ["WORKSHOP_PAYMENTS_DATA_DIR"] = str(args.data_dir)
    print(f"\nStarting Workshop Payments API on port {args.port}...")
    uvicorn.run("workshop_payments.main:app", host="0.0.0.0", port=args.port, reload=args.reload)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Workshop Payments — spreadsheet payments viewer/editor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--data-dir", default=str(BASE_FOLDER), help=f"Saved-state folder (default {BASE_FOLDER})")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING...")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    load_parser = subparsers.add_parser("load", help="Load an .xlsx or .csv file (replaces current data)")
    load_parser.add_argument("file", help="Dataset file")
    load_parser.set_defaults(func=cmd_load)

    sheets_parser = subparsers.add_parser("sheets", help="List sheets")
    sheets_parser.set_defaults(func=cmd_sheets)

    show_parser = subparsers.add_parser("show", help="Show the active sheet")
    show_parser.add_argument("--sheet", help="Switch to this sheet first")
    show_parser.add_argument("--sort", choices=[k.value for k in SortKey], help="Sort column")
    show_parser.add_argument("--desc", action="store_true", help="Sort descending")
    show_parser.add_argument("--unsorted", action="store_true", help="Back to stored order")
    show_parser.add_argument("--person", help="Only rows paid to this person ('' clears)")
    show_parser.set_defaults(func=cmd_show)

    add_parser = subparsers.add_parser("add", help="Append a row to the active sheet")
    add_parser.add_argument("who")
    add_parser.add_argument("why")
    add_parser.add_argument("amount")
    add_parser.add_argument("--sheet", help="Target sheet (becomes active)")
    add_parser.set_defaults(func=cmd_add)

    edit_parser = subparsers.add_parser("edit", help="Overwrite a row of the active sheet")
    edit_parser.add_argument("position", type=int)
    edit_parser.add_argument("who")
    edit_parser.add_argument("why")
    edit_parser.add_argument("amount")
    edit_parser.add_argument("--sheet", help="Target sheet (becomes active)")
    edit_parser.set_defaults(func=cmd_edit)

    delete_parser = subparsers.add_parser("delete", help="Delete a row of the active sheet")
    delete_parser.add_argument("position", type=int)
    delete_parser.add_argument("--sheet", help="Target sheet (becomes active)")
    delete_parser.set_defaults(func=cmd_delete)

    export_parser = subparsers.add_parser("export", help="Export xlsx (all sheets) and/or csv (active sheet)")
    export_parser.add_argument("--format", choices=["xlsx", "csv", "both"], default="xlsx")
    export_parser.add_argument("--output", help="Output directory (default <data-dir>/exports)")
    export_parser.add_argument("--sheet", help="Sheet for the CSV export")
    export_parser.set_defaults(func=cmd_export)

    clear_parser = subparsers.add_parser("clear", help="Delete saved state")
    clear_parser.set_defaults(func=cmd_clear)

    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    configure_logging(args.log_level or os.getenv("WORKSHOP_PAYMENTS_LOG_LEVEL") or "WARNING")
    try:
        args.func(args)
    except PaymentsError as exc:
        print(f"  Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
