"""Errors raised when talking to OpenSearch."""


class SearchBackendError(Exception):
    """Base class for failures of the search backend."""


class UpstreamUnavailable(SearchBackendError):
    """OpenSearch could not be reached or did not answer in time."""


class UpstreamQueryRejected(SearchBackendError):
    """OpenSearch answered with a non-success status."""

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.status_code = status_code


class MalformedResponse(SearchBackendError):
    """OpenSearch answered with a payload missing a required field."""
