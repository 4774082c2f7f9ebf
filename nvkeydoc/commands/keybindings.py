"""Keybinding listing commands for nvkeydoc."""

from typing import List, Optional

import typer
from rich.markup import escape
from rich.text import Text

from nvkeydoc.config import get_settings
from nvkeydoc.config.constants import KEYMAP_COLUMN_WIDTH, RAW_ROOT_ALIAS
from nvkeydoc.exceptions import KeydocError
from nvkeydoc.keybindings import DocResolver, Keybinding, discover_definitions, scan_file
from nvkeydoc.utils.output import console, err_console, print_json


def list_keybindings(
    initvim: Optional[str] = typer.Option(
        None, "--initvim", "-i", help="Vim configuration file to parse"
    ),
    definitions: Optional[str] = typer.Option(
        None, "--definitions", "-d", help="Directory with per-plugin JSON definitions"
    ),
    show_all: bool = typer.Option(
        False, "--all", "-a", help="Also list keybindings without documentation"
    ),
    root: Optional[str] = typer.Option(
        None, "--root", "-r", help=f"Only list one plugin ('{RAW_ROOT_ALIAS}' for plain maps)"
    ),
    examples: bool = typer.Option(
        False, "--examples", "-e", help="Show usage examples"
    ),
    json_output: bool = typer.Option(
        False, "--json", "-j", help="Output as JSON"
    ),
):
    """
    List the keybindings of a vim configuration with their documentation.
    """
    try:
        settings = get_settings(initvim=initvim, definitions=definitions)
        keybindings = scan_file(settings.initvim)
    except KeydocError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]", soft_wrap=True)
        raise typer.Exit(1) from e

    DocResolver(discover_definitions(settings.definitions)).resolve(keybindings)

    if root is not None:
        wanted = "" if root == RAW_ROOT_ALIAS else root
        keybindings = [k for k in keybindings if k.root == wanted]

    if not show_all:
        keybindings = [k for k in keybindings if k.doc is not None]

    if json_output:
        print_json([k.to_dict() for k in keybindings])
        return

    _show_keybindings(keybindings, examples)


def format_keybinding(keybinding: Keybinding) -> Text:
    """Format one listing line: keymap column, optional (root), description."""
    line = Text(keybinding.keymap.ljust(KEYMAP_COLUMN_WIDTH))
    if keybinding.root:
        line.append(f" ({keybinding.root})", style="cyan")
    if keybinding.doc:
        line.append(f" {keybinding.doc.description}")
    else:
        line.append(f" {keybinding.command}", style="dim")
    return line


def _show_keybindings(keybindings: List[Keybinding], examples: bool) -> None:
    for keybinding in keybindings:
        console.print(format_keybinding(keybinding), soft_wrap=True)
        if examples and keybinding.doc and keybinding.doc.examples:
            for example in keybinding.doc.examples:
                console.print(Text(f"    {example}", style="dim"), soft_wrap=True)
