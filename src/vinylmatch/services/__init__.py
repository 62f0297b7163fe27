"""Business logic services for vinylmatch.

Public API:
    AudioMatchingEngine - Resolve the best audio source per release track
    ReviewService - Record matches and apply human review decisions

Protocols (for dependency injection):
    SearchProvider - Fallback search abstraction
    MatchStore - Match persistence abstraction
"""

from vinylmatch.services.protocols import MatchStore, SearchProvider
from vinylmatch.services.resolver import AudioMatchingEngine
from vinylmatch.services.review import ReviewService

__all__ = [
    "AudioMatchingEngine",
    "MatchStore",
    "ReviewService",
    "SearchProvider",
]
