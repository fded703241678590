"""Mindful CLI - mood journal."""

import json
import logging
import sys

import click

from .adapters.json_entries import CorruptStoreError
from .config import load_config
from .controller import JournalController
from .core.entries import InvalidMoodError, Mood, count_by_mood, format_entry_line, parse_mood
from .workflows import open_journal

EMPTY_MESSAGE = "Your mindful journey starts here."


def _mood_option(ctx, param, value):
    """click callback: turn a mood symbol or name into a Mood."""
    if value is None:
        return None
    try:
        return parse_mood(value)
    except InvalidMoodError as e:
        raise click.BadParameter(str(e)) from e


def _open(ctx: click.Context) -> JournalController:
    """Open the journal, reporting unreadable storage."""
    config = load_config()
    try:
        journal = open_journal(config, in_memory=ctx.obj["memory"])
    except CorruptStoreError as e:
        click.echo(f"Error: stored entries are unreadable ({e})", err=True)
        sys.exit(1)

    error = journal.store.last_load_error
    if error is not None:
        click.echo(
            f"Warning: stored entries were unreadable ({error}). "
            f"Starting empty; the old data was kept under '{journal.store.last_backup_key}'.",
            err=True,
        )
    return journal


@click.group()
@click.version_option(package_name="mindful")
@click.option("--memory", is_flag=True, help="Use a throwaway in-memory journal")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, memory: bool, debug: bool):
    """Mindful - capture your thoughts, track your feelings."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )
    ctx.ensure_object(dict)
    ctx.obj["memory"] = memory


@main.command()
@click.argument("text", nargs=-1)
@click.option("--mood", "-m", default=None, callback=_mood_option,
              help="Mood symbol or name (green, blue, purple, orange, red)")
@click.pass_context
def add(ctx, text: tuple[str, ...], mood: Mood | None):
    """Save a moment."""
    journal = _open(ctx)
    entry = journal.add(" ".join(text), mood=mood)
    if entry is None:
        click.echo("Nothing to save.")
        return
    click.echo(f"✓ Saved\n{format_entry_line(entry)}")


@main.command()
@click.option("--mood", "-m", default=None, callback=_mood_option,
              help="Mood symbol or name; prompted for when omitted")
@click.pass_context
def write(ctx, mood: Mood | None):
    """Write a moment interactively."""
    journal = _open(ctx)

    if mood is None:
        click.echo("How are you feeling today?")
        click.echo("  " + "  ".join(f"{m.value} {m.label}" for m in Mood))
        mood = click.prompt(
            ">",
            default=journal.mood.value,
            value_proc=lambda value: _mood_option(None, None, value),
        )
    journal.select_mood(mood)

    click.echo("\nShare what's on your mind...")
    journal.set_draft(click.prompt(">", default="", show_default=False))

    entry = journal.add()
    if entry is None:
        click.echo("Nothing to save.")
        return
    click.echo(f"\n✓ Saved\n{format_entry_line(entry)}")


@main.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--limit", "-n", type=click.IntRange(min=1), default=None,
              help="Show only the newest N entries")
@click.pass_context
def list_entries(ctx, as_json: bool, limit: int | None):
    """List moments, newest first."""
    journal = _open(ctx)
    entries = journal.entries[:limit] if limit else journal.entries

    if as_json:
        click.echo(json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False))
        return

    if not entries:
        click.echo(EMPTY_MESSAGE)
        return

    click.echo("\n\n".join(format_entry_line(e) for e in entries))


@main.command()
@click.argument("entry_id", type=int)
@click.pass_context
def delete(ctx, entry_id: int):
    """Delete a moment by id."""
    journal = _open(ctx)
    removed = journal.delete(entry_id)
    if not removed:
        click.echo(f"No entry with id {entry_id}.")
        return
    click.echo(f"Deleted {removed} {'entry' if removed == 1 else 'entries'}.")


@main.command()
@click.pass_context
def stats(ctx):
    """Show how many moments were captured, per mood."""
    journal = _open(ctx)
    click.echo(f"{journal.count} Moments Captured")
    for symbol, count in count_by_mood(list(journal.entries)).items():
        click.echo(f"  {symbol} {count}")


@main.command()
def moods():
    """List the available moods."""
    for mood in Mood:
        click.echo(f"{mood.value}  {mood.label}")


@main.command()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def bot(debug: bool):
    """Run the Telegram bot."""
    try:
        from .telegram_bot import run_bot
        click.echo("Starting Mindful Telegram bot...")
        click.echo("Press Ctrl+C to stop")
        run_bot(debug=debug)
    except ImportError as e:
        click.echo("Error: Missing dependencies. Run 'pip install python-telegram-bot telegramify-markdown'", err=True)
        click.echo(f"Details: {e}", err=True)
        sys.exit(1)
    except CorruptStoreError as e:
        click.echo(f"Error: stored entries are unreadable ({e})", err=True)
        sys.exit(1)
    except ValueError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nBot stopped.")


if __name__ == "__main__":
    main()
