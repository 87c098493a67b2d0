#!/usr/bin/env python3
"""Command-line interface for contentbridge.

This CLI is primarily for debugging and development: converting JSON
documents between formats and resolving formats from a directory of
provider fixtures. For production use, import contentbridge as a library.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.tree import Tree

from contentbridge.config import ResolverConfig
from contentbridge.exceptions import ContentBridgeError
from contentbridge.lib.converters import ConversionContext, convert_format
from contentbridge.models.content import ContentFile, InstructionItem, Instructions, Plan
from contentbridge.models.enums import ActionType, ContentFormat
from contentbridge.models.resolved import FormatMeta
from contentbridge.providers.json_directory import (
    JsonDirectoryProvider,
    parse_document,
    read_json,
)
from contentbridge.services.resolver import FormatResolver
from contentbridge.utils.duration import format_duration, playlist_duration
from contentbridge.utils.ids import SequentialIdFactory, generate_id
from contentbridge.utils.instruction_path import generate_path, navigate_to_path

logger = logging.getLogger("contentbridge")

FORMAT_CHOICES = [fmt.value for fmt in ContentFormat]


def setup_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Configure logging with Rich handler.

    Clears existing handlers first so it can be called again to switch
    consoles.

    Args:
        verbose: If True, set log level to DEBUG. Otherwise WARNING.
        console: Optional Console instance to use for RichHandler.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = RichHandler(
        rich_tracebacks=True,
        show_path=False,
        console=console,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    root_logger.setLevel(level)
    root_logger.addHandler(handler)


def to_jsonable(data: Any) -> Any:
    """Dump a format payload to JSON-compatible data with camelCase keys."""
    if isinstance(data, list):
        return [item.to_wire() for item in data]
    return data.to_wire()


def print_section_header(console: Console, title: str, subtitle: str = "") -> None:
    """Print a section header with optional subtitle."""
    header = f"  {title.upper()}"
    if subtitle:
        header += f"  [dim]│[/dim]  {subtitle}"
    console.print()
    console.rule(style="dim")
    console.print(header)
    console.rule(style="dim")


def print_playlist(console: Console, files: list[ContentFile]) -> None:
    """Print a playlist as a table with its total running time."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title")
    table.add_column("Type")
    table.add_column("Duration", justify="right")
    table.add_column("URL", overflow="fold")

    for index, file in enumerate(files, 1):
        table.add_row(
            str(index),
            file.title,
            file.media_type.value,
            format_duration(file.seconds) if file.seconds else "-",
            file.url,
        )

    console.print(table)
    console.print(
        f"\n{len(files)} file(s), about "
        f"[cyan]{format_duration(playlist_duration(files))}[/cyan]"
    )


def print_plan(console: Console, plan: Plan) -> None:
    """Print a plan as a section/presentation/file tree."""
    tree = Tree(f"[bold]{plan.name}[/bold] [dim]({plan.id})[/dim]")
    for section in plan.sections:
        section_node = tree.add(f"[bold cyan]{section.name}[/bold cyan]")
        for presentation in section.presentations:
            style = "green" if presentation.action_type != ActionType.OTHER else "dim"
            pres_node = section_node.add(
                f"[{style}]{presentation.name}[/{style}] "
                f"[dim]{presentation.action_type.value}[/dim]"
            )
            for file in presentation.files:
                pres_node.add(f"{file.title} [dim]{file.media_type.value}[/dim]")
    console.print(tree)
    console.print(f"\n{len(plan.all_files)} file(s) in {len(plan.sections)} section(s)")


def _instruction_label(item: InstructionItem, path: str) -> str:
    parts = [f"[dim]{path}[/dim]", item.label or "[dim]untitled[/dim]"]
    if item.item_type:
        parts.append(f"[magenta]{item.item_type}[/magenta]")
    if item.seconds:
        parts.append(f"[dim]{format_duration(item.seconds)}[/dim]")
    if item.embed_url:
        parts.append(f"[blue]{item.embed_url}[/blue]")
    return " ".join(parts)


def print_instructions(
    console: Console, instructions: Instructions, root_path: str | None = None
) -> None:
    """Print an instruction tree, optionally starting at a dot path."""
    tree = Tree(f"[bold]{instructions.name or 'Instructions'}[/bold]")

    def add(node: Tree, items: list[InstructionItem], prefix: list[int]) -> None:
        for index, item in enumerate(items):
            indices = [*prefix, index]
            child = node.add(_instruction_label(item, generate_path(indices)))
            if item.children:
                add(child, item.children, indices)

    if root_path:
        item = navigate_to_path(instructions, root_path)
        if item is None:
            raise click.ClickException(f"No instruction item at path {root_path}")
        prefix = [int(part) for part in root_path.split(".")]
        node = tree.add(_instruction_label(item, root_path))
        add(node, item.children or [], prefix)
    else:
        add(tree, instructions.items, [])
    console.print(tree)


def print_payload(
    console: Console, fmt: ContentFormat, data: Any, path: str | None = None
) -> None:
    """Print any format payload in its natural shape."""
    match fmt:
        case ContentFormat.PLAYLIST:
            print_playlist(console, data)
        case ContentFormat.PRESENTATIONS:
            print_plan(console, data)
        case _:
            print_instructions(console, data, path)


def print_meta(console: Console, meta: FormatMeta) -> None:
    """Print resolver provenance."""
    style = "green" if meta.is_native else ("yellow" if meta.is_lossy else "cyan")
    console.print(f"Source: [{style}]{meta.label}[/{style}]")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Convert and resolve lesson content between formats."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose=verbose)


@main.command(name="convert")
@click.argument("source", type=click.Choice(FORMAT_CHOICES), metavar="SOURCE")
@click.argument("target", type=click.Choice(FORMAT_CHOICES), metavar="TARGET")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option(
    "--seed-ids",
    is_flag=True,
    help="Use sequential generated IDs (gen-1, gen-2, ...) for reproducible output.",
)
def convert_cmd(
    source: str, target: str, file: Path, as_json: bool, seed_ids: bool
) -> None:
    """Convert a JSON document from one format to another.

    \b
    Examples:
      contentbridge convert presentations playlist plan.json
      contentbridge convert expandedInstructions presentations run.json --json
    """
    console = Console()
    source_fmt = ContentFormat(source)
    target_fmt = ContentFormat(target)

    try:
        data = parse_document(source_fmt, read_json(file), source=str(file))
        context = ConversionContext(
            id_factory=SequentialIdFactory() if seed_ids else generate_id
        )
        result = convert_format(data, source_fmt, target_fmt, context)
    except ContentBridgeError as e:
        logger.error(str(e))
        raise click.ClickException(str(e)) from e

    if as_json:
        json.dump(to_jsonable(result), sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")
        return

    print_section_header(console, target_fmt.label, f"from {source_fmt.label}")
    print_payload(console, target_fmt, result)


@main.command(name="resolve")
@click.argument(
    "directory", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@click.argument("folder_id", metavar="FOLDER")
@click.option(
    "-f",
    "--format",
    "target",
    type=click.Choice(FORMAT_CHOICES),
    default=ContentFormat.PLAYLIST.value,
    show_default=True,
    help="Format to resolve.",
)
@click.option("--strict", is_flag=True, help="Refuse last-resort lossy fallbacks.")
@click.option("--json", "as_json", is_flag=True, help="Output data and meta as JSON.")
@click.option("--path", "item_path", help="Show only this instruction item (e.g. 0.2).")
@click.option("--seed-ids", is_flag=True, help="Use sequential generated IDs.")
@click.pass_context
def resolve_cmd(
    ctx: click.Context,
    directory: Path,
    folder_id: str,
    target: str,
    strict: bool,
    as_json: bool,
    item_path: str | None,
    seed_ids: bool,
) -> None:
    """Resolve a folder of a JSON fixture provider into a format.

    DIRECTORY holds one subdirectory per folder, each with any of
    playlist.json, presentations.json, instructions.json and
    expandedInstructions.json.

    \b
    Examples:
      contentbridge resolve ./fixtures week-1
      contentbridge resolve ./fixtures week-1 -f instructions --path 0
    """
    console = Console()
    setup_logging(verbose=ctx.obj.get("verbose", False), console=console)
    target_fmt = ContentFormat(target)
    if item_path and target_fmt in (ContentFormat.PLAYLIST, ContentFormat.PRESENTATIONS):
        raise click.UsageError("--path only applies to instruction formats")

    try:
        client = JsonDirectoryProvider(directory)
        folder = client.get_folder(folder_id)
        resolver = FormatResolver(
            client.as_provider(),
            ResolverConfig(allow_lossy=not strict),
            id_factory=SequentialIdFactory() if seed_ids else None,
        )
        result = asyncio.run(resolver.resolve(target_fmt, folder))
    except ContentBridgeError as e:
        logger.error(str(e))
        raise click.ClickException(str(e)) from e
    except Exception as e:
        logger.exception("Unexpected error")
        raise click.ClickException(f"Unexpected error: {e}") from e

    if as_json:
        payload = {
            "data": to_jsonable(result.data) if result.found else None,
            "meta": result.meta.model_dump(mode="json", by_alias=True),
        }
        json.dump(payload, sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")
        return

    print_section_header(console, target_fmt.label, f"{client.name} / {folder.id}")
    print_meta(console, result.meta)
    if not result.found:
        console.print(f"[yellow]No {target_fmt.label} available for {folder.id}[/yellow]")
        ctx.exit(1)
    console.print()
    print_payload(console, target_fmt, result.data, item_path)


@main.command(name="folders")
@click.argument(
    "directory", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
def folders_cmd(directory: Path) -> None:
    """List the folders and capabilities of a JSON fixture provider."""
    console = Console()
    try:
        client = JsonDirectoryProvider(directory)
    except ContentBridgeError as e:
        raise click.ClickException(str(e)) from e

    formats = ", ".join(fmt.label for fmt in client.capabilities.formats) or "none"
    print_section_header(console, "Folders", f"{client.name} ({formats})")
    for folder in client.list_folders():
        console.print(f"  {folder.id}")


if __name__ == "__main__":
    main()
