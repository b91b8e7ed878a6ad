"""Command-line interface for Enumeta."""

import enum
import importlib
import logging
import os
import sys

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from enumeta.errors import InvalidInputError

console = Console()


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log lookups and fallbacks")
def main(verbose: bool) -> None:
    """Enumeta - inspect metadata attached to enum members."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )


def _load_enum(target: str) -> type[enum.Enum]:
    """Import ``package.module:EnumName`` or exit with an error."""
    module_name, _, attr = target.partition(":")
    if not module_name or not attr:
        console.print(f"[red]Target must look like package.module:EnumName, got {target!r}[/red]")
        sys.exit(1)

    # Resolve modules from the working directory the way ``python -m`` does,
    # only for the duration of the import
    cwd = os.getcwd()
    added = cwd not in sys.path
    if added:
        sys.path.insert(0, cwd)
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        console.print(f"[red]Cannot import {module_name}: {e}[/red]")
        sys.exit(1)
    finally:
        if added:
            sys.path.remove(cwd)

    obj = module
    for part in attr.split("."):
        obj = getattr(obj, part, None)
        if obj is None:
            console.print(f"[red]{module_name} has no attribute {attr!r}[/red]")
            sys.exit(1)

    if not isinstance(obj, type) or not issubclass(obj, enum.Enum):
        console.print(f"[red]{target} is not an enum[/red]")
        sys.exit(1)
    return obj


def _kind_or_exit(name: str):
    from enumeta.kinds import get_kind

    try:
        return get_kind(name)
    except InvalidInputError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


@main.command()
@click.argument("target")
def show(target: str) -> None:
    """Show members of an enum and their metadata."""
    from enumeta.kinds import DEPRECATED, DESCRIPTION, INTERVIEW_FLAG, STRING_VALUE
    from enumeta.store import default_store

    enum_type = _load_enum(target)
    try:
        table = default_store.annotations_for(enum_type)
    except InvalidInputError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    kinds = [DESCRIPTION, STRING_VALUE, DEPRECATED, INTERVIEW_FLAG]
    kinds += [k for k in table.kinds if k not in kinds]

    console.print(Panel.fit(f"[bold]{enum_type.__module__}.{enum_type.__qualname__}[/bold]", title="Enum"))

    out = Table()
    out.add_column("Value", style="green")
    out.add_column("Name", style="cyan")
    for kind in kinds:
        out.add_column(kind.name)
    out.add_column("Default")

    for member in table.members:
        cells = []
        for kind in kinds:
            entry = table.entry(member.name, kind)
            cells.append("" if entry is None else str(entry.value))
        out.add_row(
            str(member.value),
            member.name,
            *cells,
            "*" if member is table.default_member else "",
        )

    console.print(out)
    console.print(f"\nTotal: {len(table.members)} members, {len(table)} entries")


@main.command("resolve")
@click.argument("target")
@click.argument("text")
@click.option("-k", "--kind", "kind_name", default="description", help="Metadata kind to match")
def resolve_cmd(target: str, text: str, kind_name: str) -> None:
    """Find the member whose metadata or name equals TEXT."""
    from enumeta.resolver import has_metadata_match, resolve

    enum_type = _load_enum(target)
    kind = _kind_or_exit(kind_name)

    try:
        member = resolve(enum_type, kind, text)
        matched = has_metadata_match(enum_type, kind, text)
    except InvalidInputError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    if matched:
        console.print(f"[bold]{enum_type.__name__}.{member.name}[/bold] = {member.value}")
    else:
        console.print(
            f"[yellow]No match for {text!r}[/yellow], default: "
            f"[bold]{enum_type.__name__}.{member.name}[/bold] = {member.value}"
        )


@main.command()
@click.argument("target")
@click.argument("value")
def lookup(target: str, value: str) -> None:
    """Find the member with an underlying integer VALUE."""
    from enumeta.resolver import from_value
    from enumeta.store import default_store

    enum_type = _load_enum(target)

    try:
        number = int(value, 0)
    except ValueError:
        console.print(f"[red]Invalid value: {value}[/red]")
        sys.exit(1)

    try:
        member = from_value(enum_type, number)
        members = default_store.all_members(enum_type)
    except InvalidInputError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    if any(m.value == number for m in members):
        console.print(f"[bold]{enum_type.__name__}.{member.name}[/bold] = {member.value}")
    else:
        console.print(
            f"[yellow]{number} is not defined[/yellow], default: "
            f"[bold]{enum_type.__name__}.{member.name}[/bold] = {member.value}"
        )


@main.command()
def kinds() -> None:
    """List registered metadata kinds."""
    from enumeta.kinds import registered_kinds

    table = Table(title="Metadata Kinds")
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="green")
    table.add_column("Default")

    for kind in registered_kinds():
        table.add_row(
            kind.name,
            kind.value_type.__name__,
            "required" if kind.default is None else repr(kind.default),
        )

    console.print(table)


if __name__ == "__main__":
    main()
