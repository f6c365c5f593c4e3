"""Collection point for the recoverable problems found while resolving docs."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportedError:
    """One reported problem and the item it was found on."""

    message: str
    location: str = ""

    def __str__(self) -> str:
        if self.location:
            return f"{self.location}: {self.message}"
        return self.message


class ErrorReporter:
    """Accumulates reported errors and logs each one as a warning."""

    def __init__(self) -> None:
        """Create a reporter with no errors."""
        self.errors: list[ReportedError] = []

    def report(self, message: str, location: str = "") -> None:
        """Record a problem found at ``location``."""
        error = ReportedError(message=message, location=location)
        self.errors.append(error)
        logger.warning("%s", error)

    def for_location(self, location: str) -> Callable[[str], None]:
        """Return a one-argument callback bound to ``location``."""

        def report_error(message: str) -> None:
            self.report(message, location)

        return report_error

    def messages(self) -> list[str]:
        return [error.message for error in self.errors]

    def __len__(self) -> int:
        return len(self.errors)
