"""vocato CLI: word management, study sessions, auto-play and stats."""

import json
import logging
import sys
import time
from pathlib import Path
from typing import Annotated

import typer

from vocato.application.config import resolve_config
from vocato.application.factory import Services
from vocato.application.queue_builder import QueueBuilder
from vocato.application.quiz import DictationPrompt, choose_direction, policy_for
from vocato.application.session import StudySession
from vocato.domain.errors import InvalidWordError, StoreError
from vocato.domain.models import AutoPlayMode, QuizMode, Word, WordGroup

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="vocato: Spaced-repetition vocabulary trainer.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage vocato configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

QUIT = "q"
PAUSED_MESSAGE = "Progress saved. Resume with 'vocato study --resume'."
POLL_SECONDS = 0.1


def _services() -> Services:
    return Services(resolve_config())


def _fail(message: str, code: int = 1) -> None:
    typer.secho(message, fg="red", err=True)
    raise typer.Exit(code)


def _notice(error: StoreError) -> None:
    typer.secho(f"Not saved: {error}", fg="yellow", err=True)


def _find_word(services: Services, word_id: str) -> Word:
    try:
        word = services.words().get(word_id)
    except StoreError as e:
        _fail(f"Cannot read words: {e}")
    if word is None:
        _fail(f"No word with id {word_id}")
    return word


def _describe(word: Word) -> str:
    flags = ("★" if word.is_favorite else "") + ("✓" if word.is_mastered else "")
    due = word.next_review_date.strftime("%Y-%m-%d") if word.next_review_date else "now"
    return (
        f"{word.id}  {word.term} - {word.meaning}  "
        f"(stage {word.srs_stage}, due {due}, importance {word.importance_count}) {flags}"
    ).rstrip()


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
    ] = 0,
):
    """Global settings for vocato."""
    if verbose >= 2:
        logging.getLogger().setLevel(logging.DEBUG)
    elif verbose == 1:
        logging.getLogger().setLevel(logging.INFO)


# ---------------------------------------------------------------------------
# Word management
# ---------------------------------------------------------------------------


@app.command()
def add(
    term: Annotated[str, typer.Argument(help="Word or phrase to learn.")],
    meaning: Annotated[str, typer.Argument(help="Its meaning.")],
    memo: Annotated[str | None, typer.Option(help="Free-form note.")] = None,
    synonyms: Annotated[str | None, typer.Option(help="Related words.")] = None,
):
    """[bold green]Add[/bold green] a word."""
    services = _services()
    try:
        word = services.words().add_word(term, meaning, memo=memo, synonyms=synonyms)
    except InvalidWordError as e:
        _fail(str(e), code=2)
    except StoreError as e:
        _fail(f"Could not save word: {e}")
    typer.echo(f"Added {word.id}")


@app.command("list")
def list_words(
    search: Annotated[str, typer.Option("--search", "-s", help="Filter by text.")] = "",
):
    """List words, oldest first."""
    services = _services()
    try:
        words = services.words().search(search)
    except StoreError as e:
        _fail(f"Cannot read words: {e}")
    if not words:
        typer.echo("No words.")
        return
    for word in words:
        typer.echo(_describe(word))


@app.command()
def remove(word_id: Annotated[str, typer.Argument(help="Word id.")]):
    """Delete a word."""
    services = _services()
    word = _find_word(services, word_id)
    try:
        services.words().delete_word(word)
    except StoreError as e:
        _fail(f"Could not delete word: {e}")
    typer.echo(f"Removed {word.term}")


@app.command()
def favorite(word_id: Annotated[str, typer.Argument(help="Word id.")]):
    """Toggle the favorite flag of a word."""
    services = _services()
    word = _find_word(services, word_id)
    try:
        state = services.words().toggle_favorite(word)
    except StoreError as e:
        _fail(f"Could not save word: {e}")
    typer.echo(f"{word.term}: {'favorite' if state else 'not favorite'}")


@app.command()
def master(word_id: Annotated[str, typer.Argument(help="Word id.")]):
    """Toggle the mastered flag of a word."""
    services = _services()
    word = _find_word(services, word_id)
    services.session(on_notice=_notice, load=False).toggle_mastered(word)
    typer.echo(f"{word.term}: {'mastered' if word.is_mastered else 'not mastered'}")


@app.command()
def easier(word_id: Annotated[str, typer.Argument(help="Word id.")]):
    """Lower the importance of a word by one."""
    services = _services()
    word = _find_word(services, word_id)
    services.session(on_notice=_notice, load=False).decrease_importance(word)
    typer.echo(f"{word.term}: importance {word.importance_count}")


# ---------------------------------------------------------------------------
# Study
# ---------------------------------------------------------------------------


@app.command()
def due(
    group: Annotated[WordGroup, typer.Option(help="Word group to draw from.")] = WordGroup.ALL,
    count: Annotated[int | None, typer.Option(help="Maximum words (0 = all).")] = None,
    include_favorites: Annotated[
        bool, typer.Option("--include-favorites", help="Also include favorite words.")
    ] = False,
):
    """Show the words a study session would use, in order."""
    services = _services()
    settings = services.config.study_settings(
        word_group=group, question_count=count, include_favorites=include_favorites
    )
    queue = QueueBuilder(services.store, services.clock).build(settings)
    if not queue:
        typer.echo("Nothing to study.")
        return
    for word in queue:
        typer.echo(_describe(word))


def _ask(prompt: str) -> str:
    return typer.prompt(prompt, default="", show_default=False).strip()


def _ask_flashcard(word: Word) -> bool | None:
    typer.secho(word.term, bold=True)
    while True:
        answer = _ask("Know it? [y/n, q to pause]").lower()
        if answer == QUIT:
            return None
        if answer in ("y", "n"):
            typer.echo(f"  → {word.meaning}")
            return answer == "y"


def _ask_choice(word: Word, options: list[str]) -> bool | None:
    typer.secho(word.term, bold=True)
    for i, option in enumerate(options, start=1):
        typer.echo(f"  {i}. {option}")
    while True:
        answer = _ask("Choice [number, q to pause]").lower()
        if answer == QUIT:
            return None
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            correct = options[int(answer) - 1] == word.meaning
            typer.echo("  Correct" if correct else f"  Wrong: {word.meaning}")
            return correct


def _ask_dictation(prompt: DictationPrompt) -> bool | None:
    typer.secho(prompt.shown, bold=True)
    answer = _ask("Answer [? = don't know, :q to pause]")
    if answer == ":q":
        return None
    correct = answer != "?" and prompt.check(answer)
    typer.echo("  Correct" if correct else f"  Answer: {prompt.expected}")
    return correct


def _follow(session: StudySession) -> None:
    """Print each word as the cursor reaches it, until the session is finished."""
    shown = -1
    while not session.is_finished:
        if session.cursor != shown:
            shown = session.cursor
            word = session.current_word
            typer.echo(f"[{shown + 1}/{len(session.queue)}] {word.term} - {word.meaning}")
        time.sleep(POLL_SECONDS)


def _quiz(services: Services, session: StudySession, mode: QuizMode) -> bool:
    """Ask every remaining question; returns False if the learner paused."""
    policy = policy_for(mode)
    sampler = services.distractors()
    while not session.is_finished:
        word = session.current_word
        typer.echo(f"[{session.cursor + 1}/{len(session.queue)}]")
        if mode == QuizMode.MULTIPLE_CHOICE:
            result = _ask_choice(word, sampler.options(word))
        elif mode == QuizMode.DICTATION:
            result = _ask_dictation(DictationPrompt(word, choose_direction(services.rng)))
        else:
            result = _ask_flashcard(word)

        if result is None:
            return False
        session.submit(result, policy)
    return True


def _flip_cards(services: Services, session: StudySession, speed: float | None) -> bool:
    """Show flashcards on a timer without grading; returns False on Ctrl-C."""
    with services.auto_advance(session, speed) as flipper:
        flipper.start()
        try:
            _follow(session)
        except KeyboardInterrupt:
            return False
    return True


@app.command()
def study(
    mode: Annotated[QuizMode, typer.Option(help="Quiz mode.")] = QuizMode.FLASHCARDS,
    group: Annotated[WordGroup, typer.Option(help="Word group to draw from.")] = WordGroup.ALL,
    count: Annotated[int | None, typer.Option(help="Number of questions (0 = all).")] = None,
    include_favorites: Annotated[
        bool, typer.Option("--include-favorites", help="Also include favorite words.")
    ] = False,
    resume: Annotated[
        bool, typer.Option("--resume", help="Continue the last paused session.")
    ] = False,
    auto_advance: Annotated[
        bool, typer.Option("--auto-advance", help="Flip flashcards on a timer, ungraded.")
    ] = False,
    speed: Annotated[
        float | None, typer.Option(help="Seconds per card with --auto-advance (1-5).")
    ] = None,
):
    """[bold green]Study[/bold green] due words interactively."""
    if mode == QuizMode.AUTO_PLAY:
        _fail("Use 'vocato autoplay' for auto-play mode.", code=2)
    if auto_advance and mode != QuizMode.FLASHCARDS:
        _fail("--auto-advance only works with flashcards.", code=2)

    services = _services()
    settings = services.config.study_settings(
        word_group=group,
        quiz_mode=mode,
        question_count=count,
        include_favorites=include_favorites,
    )
    session = services.session(settings, on_notice=_notice)

    if resume:
        if not session.restore():
            typer.echo("No unfinished session; starting a new one.")
        elif session.is_empty:
            # Every word of the saved session has been deleted since.
            session.discard_progress()
            session.load_queue()
    elif session.has_unfinished_session:
        typer.echo("An unfinished session exists. Use --resume to continue it.")

    if session.is_empty:
        typer.echo("Nothing to study.")
        return

    tracker = services.tracker()
    tracker.start_session()
    try:
        if auto_advance:
            finished = _flip_cards(services, session, speed)
        else:
            finished = _quiz(services, session, mode)

        if not finished:
            session.persist_progress()
            typer.echo(PAUSED_MESSAGE)
            return
        session.complete()
        typer.secho("Session complete!", fg="green")
    finally:
        tracker.end_session()


@app.command()
def autoplay(
    mode: Annotated[
        AutoPlayMode | None, typer.Option(help="What to read aloud.")
    ] = None,
    interval: Annotated[
        float | None, typer.Option(help="Seconds per word (1-10).")
    ] = None,
    group: Annotated[WordGroup, typer.Option(help="Word group to draw from.")] = WordGroup.ALL,
    count: Annotated[int | None, typer.Option(help="Number of words (0 = all).")] = None,
):
    """Play through due words hands-free. Ctrl-C stops."""
    services = _services()
    settings = services.config.study_settings(
        word_group=group,
        quiz_mode=QuizMode.AUTO_PLAY,
        question_count=count,
        auto_play_mode=mode,
        auto_play_interval=interval,
    )
    session = services.session(settings, on_notice=_notice)
    if session.is_empty:
        typer.echo("Nothing to study.")
        return

    tracker = services.tracker()
    tracker.start_session()
    with services.autoplay(session) as controller:
        controller.start()
        try:
            _follow(session)
        except KeyboardInterrupt:
            typer.echo("Stopped.")
        finally:
            tracker.end_session()


@app.command()
def stats():
    """Show study statistics."""
    services = _services()
    result = services.stats().load()
    minutes, seconds = divmod(result.study_seconds_today, 60)
    typer.echo(f"Words: {result.total_words} ({result.favorite_words} favorites)")
    typer.echo(f"Reviewed today: {result.today_count}, accuracy {result.accuracy:.0%}")
    typer.echo(f"Studied today: {minutes:02d}:{seconds:02d}")
    typer.echo(
        "Stages: " + ", ".join(f"{stage}: {n}" for stage, n in sorted(result.stage_counts.items()))
    )
    typer.echo(
        "Groups: " + ", ".join(f"{group.value}: {n}" for group, n in result.group_counts.items())
    )


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = resolve_config()
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump(mode="json").items()}
    typer.echo(json.dumps(d, indent=2, ensure_ascii=False))


def main():
    app()


if __name__ == "__main__":
    main()
