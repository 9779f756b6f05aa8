class TimelineError(Exception):
    """Base class for errors raised by the timeline read path."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidQuery(TimelineError):
    """The filter selection or paging parameters break the query contract."""

    status_code = 400


class NotFound(TimelineError):
    """An id or readableId resolved to no document."""

    status_code = 404


class TransientFetchError(TimelineError):
    """The store or a remote service failed; safe to retry by hand."""

    status_code = 503
