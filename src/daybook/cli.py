"""Daybook CLI - personal journal."""

import json
import logging
import sys

import click

from .config import load_config
from .core.entries import Entry
from .core.formatting import format_timestamp
from .ports.entry_store import StorageUnavailable
from .views import TemporalView, get_store


def _open(ctx: click.Context) -> tuple:
    """Resolve config, store and view for a command. Exits on storage errors."""
    config = ctx.obj["config"]
    try:
        store = get_store(config)
    except StorageUnavailable as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    return config, store, TemporalView.from_config(config, store)


@click.group()
@click.version_option(package_name="daybook")
@click.option("--db", "db_path", default=None, help="Path to the journal database")
@click.pass_context
def main(ctx, db_path: str | None):
    """Daybook - personal journal."""
    config = load_config()
    if db_path:
        config.database_path = db_path
    ctx.obj = {"config": config}


@main.command()
@click.pass_context
def init(ctx):
    """Create the journal database if it doesn't exist."""
    config, _, _ = _open(ctx)
    click.echo(f"Journal database ready at {config.database_path}")


@main.command()
@click.argument("title")
@click.option("--text", "-t", default="", help="Entry body text")
@click.option("--timestamp", type=int, default=None, help="Unix time (defaults to now)")
@click.pass_context
def add(ctx, title: str, text: str, timestamp: int | None):
    """Store a new entry."""
    config, store, _ = _open(ctx)
    try:
        entry = store.insert(Entry(title=title, text=text, timestamp=timestamp))
    except (ValueError, StorageUnavailable) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f'✓ Saved "{entry.title}" ({format_timestamp(entry.timestamp, config.local_zone())})')


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def today(ctx, as_json: bool):
    """Show today's entry."""
    _, _, view = _open(ctx)
    try:
        entry = view.today_entry()
    except StorageUnavailable as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(entry.to_dict() if entry else None, indent=2))
        return

    if entry is None:
        click.echo("Nothing written today.")
        return

    formatted = view.format_entry(entry)
    click.echo(f"{formatted['time']}\n# {formatted['title']}\n")
    if formatted["text"]:
        click.echo(formatted["text"])


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def history(ctx, as_json: bool):
    """List past entries, one per day, newest first."""
    _, _, view = _open(ctx)
    try:
        entries = view.past_entries()
    except StorageUnavailable as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps([e.to_dict() for e in entries], indent=2))
        return

    if not entries:
        click.echo("No past entries.")
        return

    for entry in entries:
        formatted = view.format_entry(entry)
        click.echo(f"{formatted['time']:28} {formatted['title']}")


@main.command()
@click.option("--host", default=None, help="Interface to bind (default from config)")
@click.option("--port", type=int, default=None, help="Port to listen on (default from config)")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def serve(ctx, host: str | None, port: int | None, debug: bool):
    """Run the journal web app."""
    config = ctx.obj["config"]
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else getattr(logging, config.log_level, logging.INFO),
    )

    from .web import create_app

    _, store, view = _open(ctx)
    app = create_app(store, view)

    host = host or config.host
    port = port or config.port
    click.echo(f"Visit http://{host}:{port}/")
    click.echo("Press Ctrl+C to stop")
    app.run(host=host, port=port, debug=debug, threaded=True)


if __name__ == "__main__":
    main()
