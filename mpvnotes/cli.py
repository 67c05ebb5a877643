import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import click
import typer

from mpvnotes.core.config.settings import settings
from mpvnotes.core.errors import MpvNotesError, NoLivePlayer
from mpvnotes.features.links.domain.models import LINK_TYPE, MediaLink
from mpvnotes.features.links.service import codec

app = typer.Typer(help="Play media from notes and write timestamped links back.", no_args_is_help=True)
link_app = typer.Typer(help="Read and write media links.", no_args_is_help=True)
app.add_typer(link_app, name="link")

logger = logging.getLogger(__name__)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging.")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@contextmanager
def user_errors():
    """Turns domain failures into a message and exit code 1."""
    try:
        yield
    except (MpvNotesError, FileNotFoundError, ValueError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def read_target(text: str) -> MediaLink:
    """Accepts a bare 'path#b-e', 'mpv:path#b-e' or a full [[mpv:...][...]] link."""
    from mpvnotes.features.notes.data.document import LINK_PATTERN

    text = text.strip()
    match = LINK_PATTERN.fullmatch(text)
    if match:
        text = match.group("target")
    elif text.startswith(f"{LINK_TYPE}:"):
        text = text[len(LINK_TYPE) + 1:]
    return codec.parse(text)


def _show_link(link: MediaLink) -> None:
    typer.echo(f"path:  {link.path}")
    typer.echo(f"begin: {'' if link.begin is None else codec.seconds_to_hms(link.begin)}")
    typer.echo(f"end:   {'' if link.end is None else codec.seconds_to_hms(link.end)}")


@link_app.command("parse")
def link_parse(text: str = typer.Argument(..., help="Link or path#begin-end")):
    """Show the path and range a link points at."""
    with user_errors():
        _show_link(read_target(text))


@link_app.command("encode")
def link_encode(path: str,
                begin: Optional[str] = typer.Option(None, "--begin", "-b"),
                end: Optional[str] = typer.Option(None, "--end", "-e"),
                description: Optional[str] = typer.Option(None, "--description", "-d")):
    """Print the note text for a media moment."""
    with user_errors():
        typer.echo(codec.encode(path, codec.time_to_seconds(begin), codec.time_to_seconds(end), description))


@app.command()
def play(target: str = typer.Argument(..., help="Path, URL or media link"),
         note: Optional[Path] = typer.Option(None, "--note", "-n", help="Append inserted links to this note"),
         description: Optional[str] = typer.Option(None, "--description", "-d")):
    """Play media and seek interactively; 'i' inserts a link, 'q' quits."""
    from mpvnotes.features.extraction.service.registry import default_registry
    from mpvnotes.features.library.service.api import LibraryService
    from mpvnotes.features.player.domain.models import PlaybackRequest
    from mpvnotes.features.player.service.api import open_player, start_playback

    with user_errors():
        link = read_target(target)
        channel = open_player()
        try:
            session = start_playback(
                channel,
                PlaybackRequest(path=link.path, begin=link.begin, end=link.end),
                default_registry(),
                LibraryService(),
            )
            result = seek_loop(session)
        finally:
            channel.terminate()

        if result.link is None:
            return
        text = codec.encode_link(result.link, description)
        if note is None:
            typer.echo(text)
            return
        write_to_note(note, text, result.captures)
        typer.echo(f"Link added to {note}")


def seek_loop(session):
    from mpvnotes.features.seek.domain.models import SeekResult
    from mpvnotes.features.seek.service.controller import SeekController, resolve_key

    controller = SeekController(session)
    state = controller.snapshot()
    typer.echo("n/p ±1s  N/P ±10s  f/b ±60s  ./, frame  0-9 percent  [ ] = speed  "
               "space pause  m mark  s shot  o ocr  c copy  i insert  q quit")

    while True:
        key = click.getchar()
        binding = resolve_key(key, state)
        if binding is None:
            continue
        action, arg = binding
        try:
            outcome = controller.apply(state, action, arg)
        except NoLivePlayer:
            # Player window closed: nothing left to drive, end the session
            raise
        except (MpvNotesError, ValueError) as e:
            # Stay in the loop; the player is still there
            typer.secho(str(e), fg=typer.colors.YELLOW, err=True)
            continue
        if isinstance(outcome, SeekResult):
            return outcome
        state = outcome
        if state.message:
            typer.echo(state.message)


def write_to_note(note: Path, link_text: str, captures=()) -> None:
    from mpvnotes.features.notes.data.attachments import LocalAttachmentStore
    from mpvnotes.features.notes.data.document import NoteDocument
    from mpvnotes.features.notes.service.api import insert_attachment

    doc = NoteDocument.load(note)
    doc.append_line(link_text)
    store = LocalAttachmentStore(note)
    try:
        for capture in captures:
            pos = insert_attachment(doc, len(doc.text), store, capture, move=True)
            doc.insert(pos, "\n")
    finally:
        # Keep the link and the attachments moved so far
        doc.save()


@app.command()
def clip(target: str = typer.Argument(..., help="Media link with a range, e.g. video.mp4#1:00-1:30"),
         output: Optional[Path] = typer.Argument(None),
         overwrite: bool = typer.Option(False, "--overwrite", "-f")):
    """Cut a segment out of a local file or a URL."""
    from mpvnotes.features.clipping.service.api import create_clip

    with user_errors():
        link = read_target(target)
        written = create_clip(link.path, link.begin, link.end, str(output) if output else None, overwrite=overwrite)
        typer.echo(str(written))


@app.command()
def convert(source: str, output: Path, overwrite: bool = typer.Option(False, "--overwrite", "-f")):
    """Convert a whole file; the format follows OUTPUT's extension."""
    from mpvnotes.features.clipping.service.api import convert_media

    with user_errors():
        typer.echo(str(convert_media(source, str(output), overwrite=overwrite)))


@app.command()
def ocr(image: Path, lang: Optional[str] = typer.Option(None, "--lang", "-l"),
        copy: bool = typer.Option(False, "--copy", help="Also copy the text to the clipboard")):
    """Recognize the text in an image."""
    from mpvnotes.features.ocr.service.api import ocr_image

    with user_errors():
        text = ocr_image(str(image), lang)
        typer.echo(text)
        if copy:
            from mpvnotes.features.desktop.service.api import copy_text
            copy_text(text)


@app.command()
def describe(url: str):
    """List what yt-dlp sees at a URL (playlist entries or one item)."""
    from mpvnotes.features.extraction.data.ytdlp_adapter import YtDlpClient

    with user_errors():
        description = YtDlpClient().describe(url)
        typer.echo(description.title or description.url)
        if description.duration:
            typer.echo(f"duration: {codec.seconds_to_hms(description.duration, truncate=True)}")
        for index, entry in enumerate(description.entries, 1):
            typer.echo(f"{index:>3}. {entry.title}  {entry.url}")


@app.command()
def history(limit: int = typer.Option(20, "--limit", "-l")):
    """Recently played, newest first."""
    from mpvnotes.features.library.service.api import LibraryService

    for entry in LibraryService().history(limit):
        typer.echo(f"{entry.played_at:%Y-%m-%d %H:%M}  {entry.title or entry.path}  {entry.path}")


@app.command()
def favorites():
    """Configured favorites (MPVNOTES_FAVORITES)."""
    from mpvnotes.features.library.service.api import LibraryService

    for path in LibraryService().favorites():
        typer.echo(path)


if __name__ == "__main__":
    app()
