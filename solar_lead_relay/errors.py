class RelayError(Exception):
    """Base class for failures that abort a request with a non-200 status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidSubmissionError(RelayError):
    """The caller sent a submission missing required sections or fields."""

    status_code = 400


class ConfigurationError(RelayError):
    """The operator did not configure something the request needs."""

    status_code = 500


class UpstreamUnavailableError(RelayError):
    """The solar data provider returned nothing usable."""

    status_code = 500
