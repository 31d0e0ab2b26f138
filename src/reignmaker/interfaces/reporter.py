"""Phase Lifecycle Reporter Protocol Interface."""

from typing import Protocol


class IPhaseReporter(Protocol):
    """Fire-and-forget notifications about phase lifecycle events."""

    def report_start(self, name: str) -> None:
        """Signal that the named phase controller started."""
        ...

    def report_complete(self, name: str) -> None:
        """Signal that the named phase controller finished starting up."""
        ...

    def report_error(self, name: str, error: BaseException) -> None:
        """Signal that the named phase controller failed."""
        ...
