"""Token definition for the rulelex scanner.

A Token pairs a caller-defined name with the exact bytes a matcher
reported for it. Names are opaque: strings, enum members and integers all
work, as long as they compare the way the caller expects.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.

Performance Note:
Token stores raw coordinates and lazily creates SourceLocation on demand.
Coordinates are excluded from equality, so ``Token("WORD", b"price")``
compares equal to a scanned token with the same name and text.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rulelex.location import SourceLocation


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by a successful scan step.

    Attributes:
        name: Caller-defined token identifier (from the matcher)
        text: Token body as bytes
        _start_offset: Absolute start position of the consumed span
        _end_offset: Absolute end position of the consumed span
        _lineno: Start line number (1-indexed)
        _col: Start column offset (1-indexed)
        _end_lineno: End line number
        _end_col: End column offset
        _source_file: Optional source file path

    """

    name: Any
    text: bytes
    _start_offset: int = field(default=0, compare=False)
    _end_offset: int = field(default=0, compare=False)
    _lineno: int = field(default=1, compare=False)
    _col: int = field(default=1, compare=False)
    _end_lineno: int | None = field(default=None, compare=False)
    _end_col: int | None = field(default=None, compare=False)
    _source_file: str | None = field(default=None, compare=False)
    _location_cache: SourceLocation | None = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def location(self) -> SourceLocation:
        """Get source location (lazily created and cached).

        The location covers the bytes the matcher consumed, which may be
        wider than ``text`` when a matcher strips part of its match.
        """
        if self._location_cache is not None:
            return self._location_cache

        from rulelex.location import SourceLocation

        loc = SourceLocation(
            lineno=self._lineno,
            col_offset=self._col,
            offset=self._start_offset,
            end_offset=self._end_offset,
            end_lineno=self._end_lineno,
            end_col_offset=self._end_col,
            source_file=self._source_file,
        )
        object.__setattr__(self, "_location_cache", loc)
        return loc

    @property
    def value(self) -> str:
        """Token text decoded as UTF-8 (undecodable bytes replaced)."""
        return self.text.decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        text = self.text
        if len(text) > 20:
            text = text[:17] + b"..."
        name = getattr(self.name, "name", self.name)
        return f"Token({name}, {text!r}, {self._lineno}:{self._col})"

    @property
    def lineno(self) -> int:
        """Line number (convenience accessor)."""
        return self._lineno

    @property
    def col(self) -> int:
        """Column offset (convenience accessor)."""
        return self._col
