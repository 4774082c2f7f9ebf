#!/usr/bin/env python3
"""
Main CLI entry point for nvkeydoc
"""

import typer

from nvkeydoc import __version__
from nvkeydoc.commands.keybindings import list_keybindings
from nvkeydoc.utils.logging import setup_logging


# Version command
def version():
    """Show nvkeydoc version"""
    typer.echo(f"nvkeydoc version {__version__}")


# Callback for global options
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
):
    """
    nvkeydoc - document the keybindings of your Neovim configuration

    [bold]Examples:[/bold]

    List documented keybindings:
        [cyan]nvkeydoc list[/cyan]

    Parse another file, show everything:
        [cyan]nvkeydoc list --initvim ./init.vim --all[/cyan]
    """
    if verbose and quiet:
        typer.echo("Error: --verbose and --quiet are mutually exclusive", err=True)
        raise typer.Exit(1)

    setup_logging(verbose=verbose, quiet=quiet)


def create_app() -> typer.Typer:
    """Create and configure the main CLI application"""
    app = typer.Typer(rich_markup_mode="rich", no_args_is_help=True)
    app.callback()(main)
    app.command("list")(list_keybindings)
    app.command()(version)
    return app


# Create the app instance
app = create_app()


def run():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    run()
