"""Candidate resolution for release tracks.

For each track, candidates are gathered in two stages:

1. Trusted: the release's own embedded videos, scored with the trust
   boost and kept from 65 up.
2. Fallback: a search query ``"{artist} - {title}"``, only issued when no
   trusted candidate was kept or the best one triages low. Results are
   kept from 50 up.

Kept candidates are merged and ranked; the top one is the track's best
match. Search failures and timeouts count as "no results", and a failure
on one track never affects its siblings.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any

from pydantic import ValidationError

from vinylmatch.config import EngineConfig
from vinylmatch.lib.confidence import classify_confidence, score_match
from vinylmatch.models.enums import CandidateSource, Classification, Platform
from vinylmatch.models.release import Track, TrustedVideo
from vinylmatch.models.results import (
    Candidate,
    MatchResult,
    MatchSummary,
    TrackMatchResult,
)
from vinylmatch.models.search import SearchResult
from vinylmatch.services.protocols import SearchProvider
from vinylmatch.utils.url import embed_url, parse_video_id, watch_url

logger = logging.getLogger(__name__)

type TrackInput = Track | Mapping[str, Any]
type VideoInput = TrustedVideo | Mapping[str, Any]


def _validate_videos(videos: Iterable[VideoInput]) -> list[TrustedVideo]:
    """Validate raw embedded videos, dropping entries that cannot be read."""
    validated: list[TrustedVideo] = []
    for video in videos:
        if isinstance(video, TrustedVideo):
            validated.append(video)
            continue
        try:
            validated.append(TrustedVideo.model_validate(video))
        except ValidationError as e:
            logger.debug("Skipping malformed embedded video: %s", e)
    return validated


class AudioMatchingEngine:
    """Resolve the best audio source for each track of a release.

    The engine holds no ambient state: the search provider and all
    thresholds are passed in at construction, and each ``find_matches``
    call is independent of every other.
    """

    def __init__(
        self,
        search_provider: SearchProvider | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            search_provider: Fallback search capability. Without one, tracks
                resolve from embedded videos only.
            config: Engine configuration. Uses defaults if not provided.
        """
        self._search_provider = search_provider
        self._config = config or EngineConfig()

    @property
    def config(self) -> EngineConfig:
        return self._config

    def find_matches(
        self,
        release_id: int,
        release_artist: str,
        tracks: Sequence[TrackInput],
        trusted_videos: Iterable[VideoInput] = (),
    ) -> MatchResult:
        """Match the tracks of one release to audio sources.

        Only the first ``max_tracks`` tracks are processed. Results are
        ordered by track index whether tracks resolve sequentially or in
        parallel.

        Args:
            release_id: Release identifier, echoed in the result.
            release_artist: Release artist, used for uncredited tracks and as
                the artist of embedded videos.
            tracks: Tracklist entries, as models or raw mappings.
            trusted_videos: Videos embedded on the release page.

        Returns:
            MatchResult with per-track candidates and provenance tallies.
        """
        release_artist = release_artist or ""
        videos = _validate_videos(trusted_videos or ())
        all_tracks = list(tracks or ())
        to_process = all_tracks[: self._config.max_tracks]

        logger.info(
            "Matching release %d: %d of %d tracks, %d embedded videos",
            release_id,
            len(to_process),
            len(all_tracks),
            len(videos),
        )

        def resolve(indexed: tuple[int, TrackInput]) -> TrackMatchResult:
            index, track = indexed
            return self._resolve_track_safely(index, track, release_artist, videos)

        if self._config.max_workers > 1 and len(to_process) > 1:
            with ThreadPoolExecutor(max_workers=self._config.max_workers) as executor:
                # map() yields in submission order, i.e. by track index
                matches = list(executor.map(resolve, enumerate(to_process)))
        else:
            matches = [resolve(item) for item in enumerate(to_process)]

        summary = MatchSummary.from_matches(matches)
        logger.info(
            "Release %d matched %d/%d tracks (%d embedded, %d search)",
            release_id,
            summary.total_matched,
            len(matches),
            summary.discogs_matches,
            summary.search_matches,
        )
        return MatchResult(
            release_id=release_id,
            total_tracks=len(all_tracks),
            processed_tracks=len(matches),
            matches=matches,
            summary=summary,
        )

    def _resolve_track_safely(
        self,
        index: int,
        track: TrackInput,
        release_artist: str,
        videos: Sequence[TrustedVideo],
    ) -> TrackMatchResult:
        """Resolve one track, turning any failure into an unmatched result."""
        if not isinstance(track, Track):
            try:
                track = Track.model_validate(track)
            except ValidationError as e:
                logger.warning(
                    "Track %d is malformed, leaving it unmatched: %s", index, e
                )
                return self._unmatched(index, Track(), release_artist)

        try:
            return self.resolve_track(index, track, release_artist, videos)
        except Exception:
            logger.exception("Failed to resolve track %d, leaving it unmatched", index)
            return self._unmatched(index, track, release_artist)

    @staticmethod
    def _unmatched(index: int, track: Track, release_artist: str) -> TrackMatchResult:
        return TrackMatchResult(
            track_index=index,
            track_position=track.position,
            track_title=track.title,
            track_artist=track.primary_artist or release_artist,
            track_duration=track.duration_seconds,
        )

    def resolve_track(
        self,
        index: int,
        track: Track,
        release_artist: str,
        videos: Sequence[TrustedVideo] = (),
    ) -> TrackMatchResult:
        """Gather, score and rank candidates for a single track.

        Args:
            index: Zero-based track index.
            track: The track to match.
            release_artist: Artist for uncredited tracks and embedded videos.
            videos: Embedded videos of the release.

        Returns:
            TrackMatchResult with candidates sorted by descending confidence.
        """
        track_artist = track.primary_artist or release_artist
        track_duration = track.duration_seconds

        logger.debug("Processing track %d: %s - %s", index, track.position, track.title)

        candidates = self._score_trusted(
            track, track_artist, track_duration, release_artist, videos
        )

        best_trusted = max(candidates, key=lambda c: c.confidence, default=None)
        if (
            best_trusted is None
            or classify_confidence(best_trusted.confidence) is Classification.LOW
        ):
            query = f"{track_artist} - {track.title}"
            logger.debug("No strong embedded match for track %d, searching", index)
            candidates.extend(
                self._score_search(
                    track, track_artist, track_duration, self._search(query)
                )
            )

        # Stable: on equal confidence embedded candidates stay ahead
        candidates.sort(key=lambda c: c.confidence, reverse=True)

        return TrackMatchResult(
            track_index=index,
            track_position=track.position,
            track_title=track.title,
            track_artist=track_artist,
            track_duration=track_duration,
            candidates=candidates,
            best_match=candidates[0] if candidates else None,
        )

    def _score_trusted(
        self,
        track: Track,
        track_artist: str,
        track_duration: int,
        release_artist: str,
        videos: Sequence[TrustedVideo],
    ) -> list[Candidate]:
        """Score embedded videos, keeping those at or above the trusted floor."""
        kept: list[Candidate] = []
        for video in videos:
            video_id = parse_video_id(video.uri)
            if not video_id:
                logger.debug("Skipping embedded video with no video ID: %s", video.uri)
                continue

            score = score_match(
                track.title,
                track_artist,
                track_duration,
                video.title,
                release_artist,
                video.duration,
                is_trusted_source=True,
                trust_boost=self._config.trusted_boost,
            )
            logger.debug(
                "Embedded %s %r: title=%d artist=%d duration=%d -> %d",
                video_id,
                video.title,
                score.title_similarity,
                score.artist_similarity,
                score.duration_similarity,
                score.confidence,
            )
            if score.confidence < self._config.trusted_min_confidence:
                continue

            kept.append(
                Candidate(
                    platform=Platform.YOUTUBE,
                    id=video_id,
                    title=video.title,
                    artist=release_artist,
                    duration=video.duration,
                    url=video.uri,
                    embed_url=embed_url(video_id),
                    confidence=score.confidence,
                    source=CandidateSource.EMBEDDED,
                )
            )
        return kept

    def _score_search(
        self,
        track: Track,
        track_artist: str,
        track_duration: int,
        results: Sequence[SearchResult],
    ) -> list[Candidate]:
        """Score search results, keeping those at or above the search floor."""
        kept: list[Candidate] = []
        for result in results:
            if not result.id:
                continue

            score = score_match(
                track.title,
                track_artist,
                track_duration,
                result.title,
                result.channel_or_artist,
                result.duration_seconds,
                is_trusted_source=False,
            )
            logger.debug(
                "Search %s %r: title=%d artist=%d duration=%d -> %d",
                result.id,
                result.title,
                score.title_similarity,
                score.artist_similarity,
                score.duration_similarity,
                score.confidence,
            )
            if score.confidence < self._config.search_min_confidence:
                continue

            kept.append(
                Candidate(
                    platform=Platform.YOUTUBE,
                    id=result.id,
                    title=result.title,
                    artist=result.channel_or_artist,
                    duration=result.duration_seconds,
                    url=result.url or watch_url(result.id),
                    embed_url=result.embed_url or embed_url(result.id),
                    thumbnail_url=result.thumbnail_url,
                    confidence=score.confidence,
                    source=CandidateSource.SEARCH,
                )
            )
        return kept

    def _search(self, query: str) -> list[SearchResult]:
        """Run the fallback search under the configured timeout.

        Any error or timeout is logged and treated as no results. A search
        that overruns keeps its worker thread until the provider returns,
        and the interpreter joins that thread at exit, so providers should
        time out no later than ``search_timeout``.
        """
        if self._search_provider is None:
            return []

        provider = self._search_provider
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="search")
        try:
            future = executor.submit(provider.search, query)
            return list(future.result(timeout=self._config.search_timeout))
        except FutureTimeoutError:
            logger.warning(
                "Search timed out after %.1fs for %r",
                self._config.search_timeout,
                query,
            )
            return []
        except Exception as e:
            logger.warning("Search failed for %r: %s", query, e)
            return []
        finally:
            # Do not wait for a search that outlived its timeout
            executor.shutdown(wait=False, cancel_futures=True)
