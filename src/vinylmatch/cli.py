#!/usr/bin/env python3
"""Command-line interface for vinylmatch.

This CLI is primarily for debugging and small curation jobs.
For production use, import vinylmatch as a library.
"""

import json
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from vinylmatch import create_engine_from_settings, create_matching_engine
from vinylmatch.db import TrackMatchRepository, create_db_engine, init_db
from vinylmatch.exceptions import VinylMatchError
from vinylmatch.lib.confidence import (
    classify_confidence,
    score_match,
    to_unit_confidence,
)
from vinylmatch.lib.mix import extract_mix_info
from vinylmatch.lib.review import classify_bucket
from vinylmatch.models.enums import Classification, ReviewAction, TrackStatus
from vinylmatch.models.release import ReleaseInput
from vinylmatch.models.results import MatchResult
from vinylmatch.models.review import TrackReview
from vinylmatch.services import ReviewService
from vinylmatch.settings import get_settings
from vinylmatch.utils.duration import format_duration

logger = logging.getLogger("vinylmatch")

_CLASSIFICATION_STYLES = {
    Classification.HIGH: "green",
    Classification.MEDIUM: "yellow",
    Classification.LOW: "red",
}

_STATUS_STYLES = {
    TrackStatus.APPROVED: "green",
    TrackStatus.REJECTED: "red",
    TrackStatus.NEEDS_REVIEW: "yellow",
    TrackStatus.PENDING: "dim",
}


def setup_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Configure logging with Rich handler.

    Clears existing handlers first, so it can be called again to
    reconfigure.

    Args:
        verbose: If True, set log level to DEBUG. Otherwise WARNING.
        console: Optional Console instance to use for RichHandler.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = RichHandler(
        rich_tracebacks=True,
        show_path=False,
        console=console,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    root_logger.setLevel(level)
    root_logger.addHandler(handler)


def _percent(unit_confidence: float) -> str:
    return f"{unit_confidence:.0%}"


def load_release(path: Path) -> ReleaseInput:
    """Read a Discogs-shaped release document.

    Raises:
        click.ClickException: If the file is not valid JSON or not a release.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise click.ClickException(f"Cannot read release file {path}: {e}") from e
    if not isinstance(data, dict):
        raise click.ClickException(f"{path} does not contain a release object")
    try:
        return ReleaseInput.from_discogs(data)
    except ValidationError as e:
        raise click.ClickException(f"Invalid release document: {e}") from e


def print_match_result(console: Console, result: MatchResult) -> None:
    """Print one row per processed track with its best match."""
    table = Table(
        title=f"[bold cyan]Release {result.release_id}[/bold cyan]",
        title_justify="left",
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Pos", style="bold")
    table.add_column("Title", overflow="fold")
    table.add_column("Length", justify="right")
    table.add_column("Source")
    table.add_column("Conf", justify="right")
    table.add_column("Tier")
    table.add_column("Bucket")
    table.add_column("URL", overflow="fold")

    for match in result.matches:
        best = match.best_match
        if best is None:
            table.add_row(
                str(match.track_index),
                match.track_position,
                match.track_title,
                format_duration(match.track_duration),
                "[dim]-[/dim]",
                "",
                "",
                "",
                "[red]no match[/red]",
            )
            continue
        style = _CLASSIFICATION_STYLES[best.classification]
        table.add_row(
            str(match.track_index),
            match.track_position,
            match.track_title,
            format_duration(match.track_duration),
            "embedded" if best.source.is_trusted else "search",
            str(best.confidence),
            f"[{style}]{best.classification}[/{style}]",
            best.bucket.label,
            best.url,
        )

    console.print(table)
    summary = result.summary
    console.print(
        f"Processed [bold]{result.processed_tracks}[/bold] of "
        f"{result.total_tracks} tracks: "
        f"[green]{summary.discogs_matches} embedded[/green], "
        f"[cyan]{summary.search_matches} search[/cyan], "
        f"[red]{summary.no_matches} unmatched[/red]"
    )


def print_review(
    console: Console, release_id: int, tracks: list[TrackReview], approvable: bool
) -> None:
    """Print stored matches with their bucket and review status."""
    table = Table(
        title=f"[bold cyan]Review: release {release_id}[/bold cyan]",
        title_justify="left",
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Conf", justify="right")
    table.add_column("Bucket")
    table.add_column("Status")
    table.add_column("By", style="dim")
    table.add_column("URL", overflow="fold")

    for track in tracks:
        style = _STATUS_STYLES[track.status]
        table.add_row(
            str(track.track_index),
            _percent(track.confidence),
            track.bucket.label,
            f"[{style}]{track.status}[/{style}]",
            track.verified_by or "",
            track.match_url,
        )

    console.print(table)
    if approvable:
        console.print("[green]Release can be approved[/green]")
    else:
        console.print("[yellow]Release has tracks awaiting review[/yellow]")


def _review_service(ctx: click.Context) -> ReviewService:
    db_path: Path = ctx.obj["db_path"]
    engine = create_db_engine(db_path)
    init_db(engine)
    return ReviewService(TrackMatchRepository(engine))


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="SQLite database for track matches (default: VINYLMATCH_DB_PATH).",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, db_path: Path | None) -> None:
    """Match vinyl release tracks to playable audio and review the matches."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["db_path"] = db_path or get_settings().db_path
    setup_logging(verbose=verbose)


@main.command(name="match")
@click.argument(
    "release_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    metavar="RELEASE_JSON",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option(
    "--no-search", is_flag=True, help="Only use videos embedded in the release."
)
@click.option("--save", is_flag=True, help="Store best matches for review.")
@click.pass_context
def match_cmd(
    ctx: click.Context,
    release_file: Path,
    as_json: bool,
    no_search: bool,
    save: bool,
) -> None:
    """Find the best audio match for each track of a release.

    RELEASE_JSON is a Discogs release document with ``id``, ``artists``
    (or ``artist``), ``tracklist`` and ``videos``.

    \b
    Examples:
      vinylmatch match release.json
      vinylmatch match release.json --no-search --json
      vinylmatch match release.json --save
    """
    console = Console()
    release = load_release(release_file)

    try:
        if no_search:
            engine = create_matching_engine(config=get_settings().engine_config())
        else:
            engine = create_engine_from_settings()

        result = engine.find_matches(
            release.id, release.artist, release.tracklist, release.videos
        )

        if save:
            recorded = _review_service(ctx).record_best_matches(
                result, verified_by="vinylmatch"
            )
            logger.info("Stored %d matches", len(recorded))
    except VinylMatchError as e:
        logger.error(str(e))
        raise click.ClickException(str(e)) from e
    except Exception as e:
        logger.exception("Unexpected error")
        raise click.ClickException(f"Unexpected error: {e}") from e

    if as_json:
        json.dump(result.to_payload(), sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")
    else:
        print_match_result(console, result)
        if save:
            console.print(f"Stored matches in [bold]{ctx.obj['db_path']}[/bold]")


@main.command(name="score")
@click.argument("track_title")
@click.argument("candidate_title")
@click.option("--artist", default="", help="Track artist.")
@click.option("--candidate-artist", default="", help="Candidate artist.")
@click.option(
    "--duration", type=int, default=180, show_default=True, help="Track seconds."
)
@click.option(
    "--candidate-duration",
    type=int,
    default=180,
    show_default=True,
    help="Candidate seconds.",
)
@click.option("--trusted", is_flag=True, help="Score as an embedded video.")
def score_cmd(
    track_title: str,
    candidate_title: str,
    artist: str,
    candidate_artist: str,
    duration: int,
    candidate_duration: int,
    trusted: bool,
) -> None:
    """Show how a candidate scores against a track.

    \b
    Examples:
      vinylmatch score "Spastik (Dub Mix)" "Spastik (Radio Edit)"
      vinylmatch score "Lovelee Dae" "Lovelee Dae" --artist Blaze --trusted
    """
    console = Console()
    score = score_match(
        track_title,
        artist,
        duration,
        candidate_title,
        candidate_artist,
        candidate_duration,
        is_trusted_source=trusted,
    )
    track_mix = extract_mix_info(track_title)
    candidate_mix = extract_mix_info(candidate_title)
    classification = classify_confidence(score.confidence)
    bucket = classify_bucket(to_unit_confidence(score.confidence))

    table = Table(show_header=False, padding=(0, 1), box=None)
    table.add_column("Field", style="bold cyan", width=16)
    table.add_column("Value", overflow="fold")
    table.add_row("Track mix", f"{track_mix.mix_type} ({track_mix.base_name})")
    table.add_row(
        "Candidate mix", f"{candidate_mix.mix_type} ({candidate_mix.base_name})"
    )
    table.add_row("Title", str(score.title_similarity))
    table.add_row("Artist", str(score.artist_similarity))
    table.add_row("Duration", str(score.duration_similarity))
    confidence = str(score.confidence)
    if score.mix_capped:
        confidence += " [yellow](capped: incompatible mix)[/yellow]"
    table.add_row("Confidence", confidence)
    style = _CLASSIFICATION_STYLES[classification]
    table.add_row("Tier", f"[{style}]{classification}[/{style}]")
    table.add_row("Bucket", bucket.label)
    console.print(table)


@main.command(name="review")
@click.argument("release_id", type=int)
@click.option("--show-low", is_flag=True, help="Include low-confidence matches.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def review_cmd(
    ctx: click.Context, release_id: int, show_low: bool, as_json: bool
) -> None:
    """List stored matches of a release and whether it can be approved."""
    console = Console()
    service = _review_service(ctx)
    tracks = service.review_queue(release_id, show_low_confidence=show_low)
    approvable = service.can_approve(release_id)

    if as_json:
        data = {
            "releaseId": release_id,
            "canApprove": approvable,
            "summary": service.summary(release_id).model_dump(),
            "tracks": [t.model_dump(mode="json") for t in tracks],
        }
        json.dump(data, sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")
        return

    if not service.release_tracks(release_id):
        console.print(f"[yellow]No matches stored for release {release_id}[/yellow]")
        return
    print_review(console, release_id, tracks, approvable)
    hidden = service.summary(release_id).dont_bother
    if hidden and not show_low:
        console.print(f"[dim]{hidden} low-confidence match(es) hidden[/dim]")


def _apply_action(
    ctx: click.Context,
    release_id: int,
    track_index: int,
    action: ReviewAction,
    by: str | None,
) -> None:
    console = Console()
    try:
        service = _review_service(ctx)
        review = service.apply_action(release_id, track_index, action, verified_by=by)
    except VinylMatchError as e:
        logger.error(str(e))
        raise click.ClickException(str(e)) from e

    style = _STATUS_STYLES[review.status]
    console.print(
        f"Release {release_id} track {track_index}: [{style}]{review.status}[/{style}]"
    )
    if service.can_approve(release_id):
        console.print("[green]Release can be approved[/green]")


_BY_OPTION = click.option("--by", "by", help="Reviewer recorded on the decision.")


@main.command(name="approve")
@click.argument("release_id", type=int)
@click.argument("track_index", type=int)
@_BY_OPTION
@click.pass_context
def approve_cmd(
    ctx: click.Context, release_id: int, track_index: int, by: str | None
) -> None:
    """Approve the stored match of one track."""
    _apply_action(ctx, release_id, track_index, ReviewAction.APPROVE, by)


@main.command(name="reject")
@click.argument("release_id", type=int)
@click.argument("track_index", type=int)
@_BY_OPTION
@click.pass_context
def reject_cmd(
    ctx: click.Context, release_id: int, track_index: int, by: str | None
) -> None:
    """Reject the stored match of one track."""
    _apply_action(ctx, release_id, track_index, ReviewAction.REJECT, by)


@main.command(name="flag")
@click.argument("release_id", type=int)
@click.argument("track_index", type=int)
@_BY_OPTION
@click.pass_context
def flag_cmd(
    ctx: click.Context, release_id: int, track_index: int, by: str | None
) -> None:
    """Send the stored match of one track back for review."""
    _apply_action(ctx, release_id, track_index, ReviewAction.NEEDS_REVIEW, by)


@main.command(name="approve-release")
@click.argument("release_id", type=int)
@_BY_OPTION
@click.pass_context
def approve_release_cmd(ctx: click.Context, release_id: int, by: str | None) -> None:
    """Approve a release once every track is approved or a top hit."""
    console = Console()
    try:
        tracks = _review_service(ctx).approve_release(release_id, verified_by=by)
    except VinylMatchError as e:
        logger.error(str(e))
        raise click.ClickException(str(e)) from e
    console.print(
        f"[green]Release {release_id} approved[/green] ({len(tracks)} tracks)"
    )


@main.command(name="reject-release")
@click.argument("release_id", type=int)
@_BY_OPTION
@click.pass_context
def reject_release_cmd(ctx: click.Context, release_id: int, by: str | None) -> None:
    """Reject every stored match of a release."""
    console = Console()
    try:
        tracks = _review_service(ctx).reject_release(release_id, verified_by=by)
    except VinylMatchError as e:
        logger.error(str(e))
        raise click.ClickException(str(e)) from e
    console.print(f"[red]Release {release_id} rejected[/red] ({len(tracks)} tracks)")


if __name__ == "__main__":
    main()
