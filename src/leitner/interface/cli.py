"""leitner CLI: practice, update and inspect a YAML deck file."""

import dataclasses
import json
import logging
import sys
import time
from pathlib import Path
from typing import Annotated

import typer

from leitner.application.config import day_number, resolve_config
from leitner.application.scheduler import (
    get_bucket_range,
    get_hint,
    practice,
    to_bucket_sets,
    update,
)
from leitner.consts import VERSION
from leitner.domain.errors import CardNotFoundError, InvalidDayError
from leitner.domain.models import AnswerDifficulty, ReviewRecord
from leitner.infrastructure.deck_file import Deck, DeckFileError, find_card, load_deck, render_deck

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="leitner: Modified-Leitner flashcard scheduler.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

config_app = typer.Typer(help="Manage leitner configuration.")
app.add_typer(config_app, name="config")

DeckArg = Annotated[
    Path | None,
    typer.Argument(help="Path to a YAML deck file. Defaults to 'deck_path' in config."),
]


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 1,
):
    """Global settings for leitner."""
    if max(verbose, resolve_config().verbose) >= 2:
        logging.getLogger().setLevel(logging.DEBUG)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _fail(message: str, code: int = 1) -> typer.Exit:
    typer.secho(message, fg="red", err=True)
    return typer.Exit(code)


def _load(deck_path: Path | None) -> Deck:
    config = resolve_config({"deck_path": deck_path})
    if config.deck_path is None:
        raise _fail("No deck file given and no 'deck_path' configured.", code=2)
    try:
        return load_deck(config.deck_path)
    except DeckFileError as e:
        raise _fail(str(e)) from e


def _resolve_day(day: int | None) -> int:
    if day is not None:
        return day
    config = resolve_config()
    if config.start_date is None:
        return 0
    try:
        return day_number(config.start_date)
    except InvalidDayError as e:
        raise _fail(str(e)) from e


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command("practice")
def practice_cmd(
    deck: DeckArg = None,
    day: Annotated[
        int | None,
        typer.Option(help="Day number (0 = first day). Defaults to days since 'start_date'."),
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """List the cards due for practice on a given day."""
    loaded = _load(deck)
    day = _resolve_day(day)
    bucket_sets = to_bucket_sets(loaded.buckets)

    try:
        due = practice(bucket_sets, day)
    except InvalidDayError as e:
        raise _fail(str(e)) from e

    rows = [
        (number, card.front)
        for number, cards in enumerate(bucket_sets)
        for card in cards
        if card in due
    ]
    rows.sort()

    if json_output:
        typer.echo(
            json.dumps(
                {"day": day, "cards": [{"bucket": b, "front": f} for b, f in rows]},
                indent=2,
            )
        )
        return

    if not rows:
        typer.secho(f"Nothing to practice on day {day}.", fg="green")
        return

    typer.echo(f"Day {day}: {len(rows)} card(s) due")
    for number, front in rows:
        typer.echo(f"  [{number}] {front}")


@app.command("range")
def range_cmd(
    deck: DeckArg = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show the lowest and highest buckets that hold cards."""
    loaded = _load(deck)
    result = get_bucket_range(to_bucket_sets(loaded.buckets))

    if json_output:
        typer.echo(json.dumps(dataclasses.asdict(result) if result else None))
        return

    if result is None:
        typer.secho("No cards in any bucket.", fg="yellow")
        return
    typer.echo(f"Buckets {result.min_bucket}..{result.max_bucket}")


@app.command()
def hint(
    front: Annotated[str, typer.Argument(help="Front text of the card.")],
    deck: DeckArg = None,
):
    """Print the hint for a card."""
    loaded = _load(deck)
    try:
        card = find_card(loaded, front)
    except CardNotFoundError as e:
        raise _fail(str(e)) from e
    typer.echo(get_hint(card))


@app.command("update")
def update_cmd(
    front: Annotated[str, typer.Argument(help="Front text of the practiced card.")],
    difficulty: Annotated[str, typer.Argument(help="How it went: easy, hard or wrong.")],
    deck: DeckArg = None,
    timestamp: Annotated[
        float | None, typer.Option(help="Time of the trial. Defaults to now (epoch seconds).")
    ] = None,
):
    """Apply a practice result and print the updated deck YAML.

    The deck file itself is not modified; redirect the output to keep it.
    """
    try:
        outcome = AnswerDifficulty.parse(difficulty)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="DIFFICULTY") from e

    loaded = _load(deck)
    try:
        card = find_card(loaded, front)
        new_buckets = update(loaded.buckets, card, outcome)
    except CardNotFoundError as e:
        raise _fail(str(e)) from e

    record = ReviewRecord(
        card=card,
        difficulty=outcome,
        timestamp=timestamp if timestamp is not None else int(time.time()),
    )
    logger.info(f"Recorded {outcome.name.lower()} for {front!r}")
    typer.echo(render_deck(new_buckets, loaded.history + [record]), nl=False)


@app.command()
def stats(
    deck: DeckArg = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Summarize accuracy and bucket distribution."""
    from leitner.application.stats import ProgressService
    from leitner.infrastructure.deck_file import YamlDeckRepository

    config = resolve_config({"deck_path": deck})
    if config.deck_path is None:
        raise _fail("No deck file given and no 'deck_path' configured.", code=2)

    service = ProgressService(YamlDeckRepository(config.deck_path))
    try:
        report = service.get_report()
    except (DeckFileError, ValueError) as e:
        raise _fail(str(e)) from e

    if json_output:
        typer.echo(json.dumps(dataclasses.asdict(report), indent=2))
        return

    typer.echo(f"Reviews: {report.total_reviews}")
    typer.echo(f"Accuracy: {report.accuracy_rate:.0%}")
    if report.average_difficulty is None:
        typer.echo("Average difficulty: n/a")
    else:
        typer.echo(f"Average difficulty: {report.average_difficulty:.2f}")
    for number in sorted(report.bucket_distribution):
        typer.echo(f"  bucket {number}: {report.bucket_distribution[number]}")


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = resolve_config()
    typer.echo(json.dumps(config.model_dump(mode="json"), indent=2))


@app.command()
def version():
    """Print the leitner version."""
    typer.echo(VERSION)
