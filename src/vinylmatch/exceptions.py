"""Custom exceptions for vinylmatch.

All exceptions include an HTTP status_code attribute for easy
integration with web frameworks. Nothing inside the matching engine is
fatal: provider errors are raised by the providers and caught by the
resolver, which degrades them to "no results".
"""


class VinylMatchError(Exception):
    """Base exception for vinylmatch.

    Attributes:
        status_code: HTTP status code for API error responses.
    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(VinylMatchError):
    """Caller input is structurally invalid.

    Raised at service boundaries, e.g. for an unknown review action.
    """

    status_code: int = 400  # Bad Request


class MissingCredentialError(VinylMatchError):
    """A search provider needs a credential it was not given."""

    status_code: int = 401  # Unauthorized


class MatchNotFoundError(VinylMatchError):
    """No stored match exists for the requested release track."""

    status_code: int = 404  # Not Found


class SearchProviderError(VinylMatchError):
    """Fallback search request failed.

    Raised when the upstream search API errors or returns an unusable
    response.
    """

    status_code: int = 502  # Bad Gateway (upstream failure)


class PersistenceError(VinylMatchError):
    """The match store failed to read or write."""

    status_code: int = 500  # Internal Server Error


class ReleaseNotApprovableError(InvalidInputError):
    """A release still has tracks that are neither approved nor top hits.

    Attributes:
        track_indices: Indices of the blocking tracks.
    """

    def __init__(self, release_id: int, track_indices: list[int]) -> None:
        self.track_indices = track_indices
        indices = ", ".join(str(i) for i in track_indices)
        super().__init__(
            f"Cannot approve release {release_id}: unapproved tracks {indices}"
        )
