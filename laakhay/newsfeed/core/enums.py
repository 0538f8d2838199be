"""Core enumerations.

Key Types:
    - GenerationMode: Which fetch variant produces items (web crawl or synthetic)
    - RunStatus: Terminal state of a collection run
"""

from enum import Enum


class GenerationMode(str, Enum):
    """Selects the fetch capability variant used for a run.

    The scheduling core never inspects the mode; it only decides which
    fetcher (and prompt) the collector builds.
    """

    LIVE_SEARCH = "LIVE_SEARCH"
    SYNTHETIC = "SYNTHETIC"

    @property
    def id_prefix(self) -> str:
        """Prefix used for item ids produced in this mode."""
        return "WEB" if self is GenerationMode.LIVE_SEARCH else "SYN"


class RunStatus(str, Enum):
    """How a collection run terminated."""

    COMPLETED = "completed"
    STOPPED = "stopped"
    ABORTED = "aborted"
