"""CLI entrypoint for babelvault."""

import logging
import sys
from pathlib import Path

import click
from rich.logging import RichHandler

from . import __version__


def _auto_detect_vault(start: Path) -> Path | None:
    """Find the enclosing Obsidian vault (a folder holding `.obsidian/`) by walking up from `start`."""
    cur = start.resolve()
    for p in (cur, *cur.parents):
        if (p / ".obsidian").is_dir():
            return p
    return None


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(__version__, prog_name="babelvault")
@click.option(
    "--vault",
    "-v",
    type=click.Path(exists=False, file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    envvar="BABELVAULT_VAULT",
    help="Path to the vault (defaults to the enclosing folder with a .obsidian directory)",
)
@click.option("--verbose", is_flag=True, help="Log vault loading and edits")
@click.pass_context
def cli(ctx: click.Context, vault: Path | None, verbose: bool) -> None:
    """babelvault - links, tags and Leaflet documents in a note vault."""
    ctx.ensure_object(dict)
    _configure_logging(verbose)

    if vault is None:
        detected = _auto_detect_vault(Path.cwd())
        if detected is None:
            raise click.ClickException("Vault not found. Pass --vault /path/to/vault or run from inside one.")
        vault = detected

    if not vault.exists() or not vault.is_dir():
        raise click.BadParameter(f"Directory '{vault}' does not exist.", param_hint="--vault / -v")

    ctx.obj["vault"] = vault.resolve()


@cli.command()
@click.option("--unresolved", "unresolved_only", is_flag=True, help="Only show links that match no file")
@click.option("--json", "output_json", is_flag=True, help="Output results as JSON")
@click.pass_context
def links(ctx: click.Context, unresolved_only: bool, output_json: bool) -> None:
    """List every wikilink in the vault and the file it resolves to."""
    from .commands.links import run_links

    sys.exit(run_links(ctx.obj["vault"], unresolved_only, output_json))


@cli.command()
@click.option("--json", "output_json", is_flag=True, help="Output results as JSON")
@click.pass_context
def tags(ctx: click.Context, output_json: bool) -> None:
    """Count #tags across all pages."""
    from .commands.links import run_tags

    sys.exit(run_tags(ctx.obj["vault"], output_json))


@cli.command()
@click.argument("page")
@click.option("--json", "output_json", is_flag=True, help="Output the parsed document as JSON")
@click.pass_context
def leaflet(ctx: click.Context, page: str, output_json: bool) -> None:
    """Parse PAGE as a Leaflet document.

    Examples:

        babelvault leaflet "Haiku 2024.md"

        babelvault leaflet "Haiku 2024" --json
    """
    from .commands.leaflet_cmd import run_leaflet

    sys.exit(run_leaflet(ctx.obj["vault"], page, output_json))


@cli.command()
@click.argument("year", type=int)
@click.pass_context
def dates(ctx: click.Context, year: int) -> None:
    """Create year, month and day notes for YEAR."""
    from .commands.move import run_dates

    sys.exit(run_dates(ctx.obj["vault"], year))


@cli.command()
@click.argument("source")
@click.argument("destination")
@click.pass_context
def move(ctx: click.Context, source: str, destination: str) -> None:
    """Move SOURCE to DESTINATION and rewrite links to it."""
    from .commands.move import run_move

    sys.exit(run_move(ctx.obj["vault"], source, destination))


@cli.command("move-tagged")
@click.argument("topic")
@click.argument("folder")
@click.pass_context
def move_tagged(ctx: click.Context, topic: str, folder: str) -> None:
    """Move every page linking to TOPIC into FOLDER.

    Example:

        babelvault move-tagged "topics + tags/People.md" people
    """
    from .commands.move import run_move_tagged

    sys.exit(run_move_tagged(ctx.obj["vault"], topic, folder))


if __name__ == "__main__":
    cli()
