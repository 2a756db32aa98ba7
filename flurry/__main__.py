"""Entry point for Flurry: validate the bundled catalog and summarise it."""

from __future__ import annotations

import argparse
import sys
from collections import Counter

from rich.console import Console
from rich.table import Table

from flurry.data.balance import BALANCE
from flurry.engine.catalog import EntryKind, load_catalog
from flurry.engine.errors import CatalogValidationError
from flurry.log import setup_logging


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Flurry — check the progression catalog")
    parser.add_argument("--kind", choices=[k.value for k in EntryKind], help="List entries of one kind")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    args = parser.parse_args(argv)

    setup_logging(args.log_level.upper())
    console = Console()

    try:
        catalog = load_catalog()
    except CatalogValidationError as exc:
        console.print(f"[bold red]Catalog is invalid ({len(exc.problems)} problem(s)):[/]")
        for problem in exc.problems:
            console.print(f"  • {problem}")
        return 1

    if args.kind:
        table = Table(title=f"{args.kind} entries")
        table.add_column("Order", justify="right")
        table.add_column("Id")
        table.add_column("Name")
        table.add_column("Cost", justify="right")
        for entry in catalog.of_kind(EntryKind(args.kind)):
            table.add_row(str(entry.order), entry.id, entry.name, f"{entry.cost:,.0f}")
    else:
        counts = Counter(entry.kind for entry in catalog)
        table = Table(title="Flurry catalog")
        table.add_column("Kind")
        table.add_column("Entries", justify="right")
        table.add_column("Reset on jump")
        resets = set(BALANCE.engine.jump_reset_classes)
        for kind in EntryKind:
            table.add_row(kind.value, str(counts.get(kind, 0)), "yes" if kind.value in resets else "no")
        table.add_section()
        table.add_row("assistants", str(len(catalog.assistants)), "")
        table.add_row("groups", str(len(catalog.groups)), "")

    console.print(table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
