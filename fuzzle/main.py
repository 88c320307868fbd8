#!/usr/bin/env python3
"""
Fuzzle Reader - Main CLI

Reading support for dyslexic readers.

Features:
- Text simplification with a fixed word table
- Syllable mode for long words
- Word-by-word narration with live highlighting
- Vocabulary building from difficult words
- Word definitions with syllables and examples
"""

import asyncio
import sys
from typing import Optional, TextIO, Tuple

import click
from rich.live import Live
from rich.markup import escape
from rich.table import Table

from fuzzle import __version__
from fuzzle.dictionary import default_dictionary, default_substitutions
from fuzzle.lookup import lookup
from fuzzle.readalong.display import render_text
from fuzzle.readalong.playback import PlaybackState, PlaybackStatus, PlaybackSynchronizer
from fuzzle.readalong.speech_engine import Pyttsx3SpeechEngine
from fuzzle.simplify import TextSimplifier
from fuzzle.syllables import segment, syllabify_text
from fuzzle.utils import logger
from fuzzle.utils.config import config
from fuzzle.vocabulary import VocabularyCollection
from fuzzle.words import tokenize


def _display_text(input_file: TextIO, simplify: bool) -> str:
    """Read the input and simplify it if requested."""
    text = input_file.read()
    if simplify:
        text = TextSimplifier(default_substitutions()).simplify(text)
    return text


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    Fuzzle Reader

    Simplify, split, read aloud and learn the words of any text.
    INPUT arguments are UTF-8 text files, or - for stdin.
    """
    pass


@cli.command("simplify")
@click.argument("input_file", type=click.File("r", encoding="utf-8"))
def simplify_command(input_file: TextIO):
    """Replace complex words with simpler ones."""
    click.echo(_display_text(input_file, simplify=True))


@cli.command()
@click.argument("words", nargs=-1, required=True)
def syllables(words: Tuple[str, ...]):
    """Split words into syllables."""
    for word in words:
        click.echo(f"{word}: {segment(word)}")


@cli.command()
@click.argument("input_file", type=click.File("r", encoding="utf-8"))
@click.option("--simplify", is_flag=True, help="Simplify the text first")
@click.option("--syllables", "syllable_mode", is_flag=True, help="Split long words into syllables")
@click.option("--plain", is_flag=True, help="Print without styling")
def show(input_file: TextIO, simplify: bool, syllable_mode: bool, plain: bool):
    """Show the text the way the reader sees it."""
    text = _display_text(input_file, simplify)
    min_length = config.syllable_min_length

    if plain:
        click.echo(syllabify_text(text, min_length) if syllable_mode else text)
        return

    logger.console.print(render_text(text, syllable_mode=syllable_mode, min_length=min_length))


@cli.command()
@click.argument("input_file", type=click.File("r", encoding="utf-8"))
@click.option("--simplify", is_flag=True, help="Simplify the text first")
@click.option(
    "-n", "--limit",
    type=click.IntRange(min=0),
    default=None,
    help=f"Maximum number of new words (default: {config.vocabulary_limit})",
)
@click.option(
    "-k", "--known",
    multiple=True,
    help="Word already in your vocabulary (repeatable)",
)
def vocab(input_file: TextIO, simplify: bool, limit: Optional[int], known: Tuple[str, ...]):
    """Find difficult words worth adding to your vocabulary."""
    text = _display_text(input_file, simplify)
    limit = config.vocabulary_limit if limit is None else limit

    collection = VocabularyCollection()
    for word in known:
        collection.add_word(word, definition="Already learned")
    if len(collection):
        logger.step(f"Skipping {len(collection)} known words")

    items = collection.harvest(text, default_dictionary(), limit=limit)
    if not items:
        logger.warning("No new difficult words found")
        return

    table = Table(title="New vocabulary")
    table.add_column("", width=2)
    table.add_column("Word", style="bold", no_wrap=True)
    table.add_column("Syllables", style="syllable", no_wrap=True)
    table.add_column("Definition")
    table.add_column("Example", style="italic")
    table.add_column("Difficulty", no_wrap=True)

    for item in items:
        level = item.difficulty.value
        table.add_row(
            item.emoji,
            escape(item.word),
            escape(item.phonetic),
            escape(item.definition),
            escape(item.example),
            f"[{level}]{level}[/{level}]",
        )

    logger.console.print(table)
    logger.success(f"Added {len(items)} words")


@cli.command()
@click.argument("word")
def define(word: str):
    """Look up a word in the dictionary."""
    record = lookup(word, default_dictionary())
    if record is None:
        logger.warning(f"'{escape(word)}' is not in the dictionary")
        sys.exit(1)

    level = record.difficulty.value
    logger.console.print(
        f"{record.emoji} [bold]{escape(record.word)}[/bold] "
        f"([syllable]{escape(record.phonetic)}[/syllable])"
    )
    logger.console.print(f"  {escape(record.definition)}")
    logger.console.print(f"  [italic]{escape(record.example)}[/italic]")
    logger.console.print(f"  Difficulty: [{level}]{level}[/{level}]")


async def _narrate(text: str, syllable_mode: bool) -> bool:
    """
    Read text aloud with the spoken word highlighted.

    Returns:
        False if no speech engine is available
    """
    loop = asyncio.get_running_loop()
    engine = Pyttsx3SpeechEngine(loop=loop)
    if not engine.available:
        return False

    synchronizer = PlaybackSynchronizer(engine, scheduler=loop)
    finished = asyncio.Event()
    min_length = config.syllable_min_length

    try:
        with Live(
            render_text(text, syllable_mode=syllable_mode, min_length=min_length),
            console=logger.console,
            auto_refresh=False,
        ) as live:

            def on_change(state: PlaybackState) -> None:
                live.update(
                    render_text(text, state.current_index, syllable_mode, min_length),
                    refresh=True,
                )
                if state.status is PlaybackStatus.IDLE:
                    finished.set()

            synchronizer.add_listener(on_change)
            synchronizer.start(text)
            await finished.wait()
    finally:
        synchronizer.stop()
        engine.close()

    return True


@cli.command()
@click.argument("input_file", type=click.File("r", encoding="utf-8"))
@click.option("--simplify", is_flag=True, help="Simplify the text first")
@click.option("--syllables", "syllable_mode", is_flag=True, help="Split long words into syllables")
def read(input_file: TextIO, simplify: bool, syllable_mode: bool):
    """
    Read the text aloud, one word at a time.

    The word being spoken is highlighted. Press Ctrl+C to stop.
    """
    text = _display_text(input_file, simplify)
    if not text.strip():
        logger.warning("Nothing to read")
        return

    logger.header("Reading aloud")
    logger.step(f"{len(tokenize(text))} words, press Ctrl+C to stop")
    try:
        spoken = asyncio.run(_narrate(text, syllable_mode))
    except KeyboardInterrupt:
        logger.info("Stopped")
        return

    if not spoken:
        logger.error("No speech engine available; install pyttsx3 and a system voice")
        sys.exit(1)

    logger.success("Finished reading")


if __name__ == "__main__":
    cli()
