"""Exceptions for the Splunk search client."""


class SplunkError(Exception):
    """Base exception for Splunk-related errors."""

    stage = "splunk"


class ConfigurationError(SplunkError):
    """Configuration-related errors."""

    stage = "configuration"


class AuthenticationError(SplunkError):
    """Login failed or the authentication endpoint was unreachable."""

    stage = "authentication"


class SubmissionError(SplunkError):
    """The search job could not be created or its sid could not be read."""

    stage = "submission"


class PollTimeoutError(SplunkError):
    """The search job did not finish within the polling attempt budget."""

    stage = "polling"

    def __init__(self, job_id: str, attempts: int) -> None:
        """Initialize PollTimeoutError with the job and attempt count.

        Args:
            job_id: Search job identifier
            attempts: Number of status checks made
        """
        self.job_id = job_id
        self.attempts = attempts
        super().__init__(
            f"Search job {job_id} did not complete after {attempts} status checks"
        )


class ResponseParseError(SplunkError):
    """Base class for malformed backend payloads."""

    stage = "parsing"


class PollParseError(ResponseParseError):
    """Malformed job status payload."""

    stage = "polling"


class ResultParseError(ResponseParseError):
    """Malformed results payload."""

    stage = "results"


class TransportError(SplunkError):
    """Connection-level failure talking to Splunk."""

    stage = "transport"
