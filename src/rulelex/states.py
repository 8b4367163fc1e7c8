"""Scanner states.

A scanner starts READY and leaves it only through scan(); reset()
returns it to READY from anywhere.
"""

from __future__ import annotations

from enum import Enum, auto


class ScannerState(Enum):
    """Scanner states.

    - READY: Input remains and no error is pending
    - EXHAUSTED: All input consumed cleanly (terminal)
    - STUCK: No matcher recognized the remaining input (terminal)

    """

    READY = auto()
    EXHAUSTED = auto()
    STUCK = auto()

    @property
    def terminal(self) -> bool:
        """True if further scan() calls cannot produce tokens."""
        return self is not ScannerState.READY
