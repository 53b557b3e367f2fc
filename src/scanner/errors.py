"""Scanner exceptions and the process exit status each one maps to."""

from __future__ import annotations

EXIT_OK = 0
EXIT_FAILURE = 1


class ScannerError(Exception):
    exit_code: int = EXIT_FAILURE
    default_detail: str = "Scanner error"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.default_detail)
        self.detail = detail or self.default_detail


class ConfigurationError(ScannerError):
    default_detail = "Invalid configuration."


class SocketSetupError(ScannerError):
    default_detail = "Could not set up the UDP socket."


class ReceiveError(ScannerError):
    # Ends the receive loop but is not a failure of the process.
    exit_code = EXIT_OK
    default_detail = "Error receiving UDP packet."
