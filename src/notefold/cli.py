"""notefold CLI - daily notes and monthly archives."""

import logging
import sys
from datetime import date, datetime

import click

from .adapters.file_notes import FileNoteStore
from .archive import run_archive
from .config import CONFIG_FILE, Config, load_config
from .core.errors import ArchiveError
from .core.notes import NoteDocument


def _load_valid_config() -> Config:
    config = load_config()
    try:
        config.validate()
    except ValueError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    return config


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """notefold - fold daily notes into monthly archives."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else logging.INFO,
    )


@main.command()
@click.option("--delete", "-x", is_flag=True, help="Delete individual files after archiving")
@click.option(
    "--nowrite",
    "-n",
    "no_write",
    is_flag=True,
    help="Disable writing archive files (helpful for deleting previously archived files)",
)
def archive(delete: bool, no_write: bool):
    """Organize old notes into monthly archives."""
    config = _load_valid_config()
    store = FileNoteStore(config.note_path, config)

    try:
        result = run_archive(config, store, datetime.now(), delete=delete, no_write=no_write)
    except ArchiveError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not result.archived:
        click.echo("Nothing to archive.")
    else:
        click.echo(f"Archived {len(result.archived)} note(s).")
    for name in result.written:
        click.echo(f"  wrote {name}")
    if result.deleted:
        click.echo(f"Deleted {len(result.deleted)} note(s).")
    if result.skipped:
        click.echo(f"Skipped {len(result.skipped)} unarchivable note(s).", err=True)


@main.command()
@click.option("--date", "-d", "target_date", default=None,
              help="Date of the note (YYYY-MM-DD), defaults to today")
def new(target_date: str | None):
    """Create an empty daily note."""
    config = _load_valid_config()
    target = date.fromisoformat(target_date) if target_date else date.today()

    store = FileNoteStore(config.note_path, config)
    note = NoteDocument(config, target)
    if store.exists(note):
        click.echo(f"Note already exists: {store.path_for(note)}")
        return

    store.overwrite(note)
    click.echo(str(store.path_for(note)))


@main.command("config")
def show_config():
    """Show the effective configuration."""
    config = load_config()
    click.echo(f"# {CONFIG_FILE}")
    for key, value in config.as_dict().items():
        if isinstance(value, list):
            value = ",".join(value)
        # Quote values the parser would otherwise strip or cut at a comment
        if isinstance(value, str) and (value != value.strip() or "#" in value):
            value = f'"{value}"'
        click.echo(f"{key.upper()} = {value}")
    click.echo(f"# notes in {config.note_path}")
