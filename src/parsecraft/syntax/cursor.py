"""Immutable cursor infrastructure for type-safe parsing.

Implements the immutable cursor pattern over any random-access sequence.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
    - take_* helpers return Outcome | None, never mutate
    - Line:column computed on-demand (O(n) only for errors)

Supported Inputs:
    Any sliceable sequence with equatable elements: str, list, tuple, bytes.
    Slices keep the type of the source, so a parser over a list of tokens
    produces lists and a parser over text produces strings.

Line Ending Support:
    Cursor.compute_line_col() and LineOffsetCache use \\n as the line
    delimiter. CRLF text works correctly because the \\n is still present.

Pattern Reference:
    - Rust nom parser combinator library
    - Haskell Parsec
    - F# FParsec
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from parsecraft.constants import MAX_EXCERPT_LENGTH

__all__ = ["Cursor", "LineOffsetCache", "Outcome"]


@dataclass(frozen=True, slots=True)
class Cursor[E]:
    """Immutable position marker over an input sequence.

    Key Design Decisions:
        1. Frozen dataclass - Immutability enforced by Python
        2. Slots - Memory efficiency (one cursor per attempted match)
        3. Simple position - Just an integer offset
        4. EOF is a property - Not a return value
        5. Position is validated - Always within [0, len(source)]

    Example:
        >>> cursor = Cursor("hello")
        >>> cursor.current
        'h'
        >>> outcome = cursor.take_literal("he")
        >>> outcome.value, outcome.cursor.pos
        ('he', 2)
        >>> cursor.pos  # Original unchanged (immutability)
        0
        >>> str(outcome.cursor)
        'he^llo'
    """

    source: Sequence[E]
    pos: int = 0

    def __post_init__(self) -> None:
        """Validate the position invariant.

        Raises:
            ValueError: If pos is outside [0, len(source)]
        """
        if not 0 <= self.pos <= len(self.source):
            msg = f"Cursor.pos must be within [0, {len(self.source)}], got {self.pos}"
            raise ValueError(msg)

    @classmethod
    def start(cls, source: Sequence[E]) -> Cursor[E]:
        """Cursor at the beginning of source."""
        return cls(source, 0)

    @property
    def is_eof(self) -> bool:
        """Check if at end of input.

        Returns:
            True if position equals the source length
        """
        return self.pos == len(self.source)

    @property
    def current(self) -> E:
        """Get current element.

        Returns:
            Element at position

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            msg = f"Unexpected EOF at position {self.pos}"
            raise EOFError(msg)
        return self.source[self.pos]

    @property
    def remaining(self) -> int:
        """Number of elements between position and end of input."""
        return len(self.source) - self.pos

    def peek(self, offset: int = 0) -> E | None:
        """Peek at element with offset without advancing.

        Args:
            offset: Offset from current position (0 = current, 1 = next)

        Returns:
            Element at position + offset, or None if beyond EOF
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> Cursor[E]:
        """Return new cursor advanced by count positions.

        Args:
            count: Number of positions to advance (default: 1)

        Returns:
            New Cursor instance at new position, clamped at end of input
        """
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def slice_to(self, end_pos: int) -> Sequence[E]:
        """Extract source slice from current position to end_pos (exclusive)."""
        return self.source[self.pos : end_pos]

    def slice_ahead(self, n: int) -> Sequence[E]:
        """Get next n elements without advancing cursor.

        May return fewer elements near EOF.
        """
        return self.source[self.pos : self.pos + n]

    def take_element(self, value: E) -> Outcome[E] | None:
        """Consume one element equal to value."""
        if self.is_eof or self.source[self.pos] != value:
            return None
        return Outcome(self.source[self.pos], self.advance())

    def take_element_where(self, predicate: Callable[[E], bool]) -> Outcome[E] | None:
        """Consume one element satisfying predicate."""
        if self.is_eof or not predicate(self.source[self.pos]):
            return None
        return Outcome(self.source[self.pos], self.advance())

    def take_literal(
        self, prefix: Sequence[E], *, case_insensitive: bool = False
    ) -> Outcome[Sequence[E]] | None:
        """Consume prefix if the input at position starts with it.

        Args:
            prefix: Elements to match
            case_insensitive: Compare text with str.casefold() (str sources
                only). The match always spans len(prefix) characters of input

        Returns:
            Outcome holding the matched slice of the source, or None

        Example:
            >>> Cursor("SELECT *").take_literal("select", case_insensitive=True).value
            'SELECT'
            >>> Cursor([1, 2, 3]).take_literal([1, 2]).cursor.pos
            2
        """
        size = len(prefix)
        segment = self.slice_ahead(size)
        if len(segment) != size:
            return None

        if case_insensitive and isinstance(segment, str) and isinstance(prefix, str):
            matched = segment.casefold() == prefix.casefold()
        else:
            matched = all(a == b for a, b in zip(segment, prefix, strict=True))

        if not matched:
            return None
        return Outcome(segment, self.advance(size))

    def take_while(self, predicate: Callable[[E], bool]) -> Outcome[Sequence[E]] | None:
        """Consume the maximal run of elements satisfying predicate.

        Zero-length runs are not a match: "at least one" is the low-level
        default, and zero-or-more is built with optional() on top.

        Returns:
            Outcome holding the run, or None if the first element fails
        """
        end = self.pos
        size = len(self.source)
        while end < size and predicate(self.source[end]):
            end += 1
        if end == self.pos:
            return None
        return self.take_up_to(end)

    def take_until(self, predicate: Callable[[E], bool]) -> Outcome[Sequence[E]] | None:
        """Consume the maximal run of elements NOT satisfying predicate.

        Returns:
            Outcome holding the run, or None on a zero-length run
        """
        return self.take_while(lambda element: not predicate(element))

    def take_up_to(self, index: int) -> Outcome[Sequence[E]]:
        """Consume [pos, index). Total for index in [pos, len(source)].

        Raises:
            ValueError: If index precedes the current position
        """
        if index < self.pos:
            msg = f"take_up_to index must be >= pos ({self.pos}), got {index}"
            raise ValueError(msg)
        return Outcome(self.slice_to(index), Cursor(self.source, index))

    def count_newlines_before(self) -> int:
        """Count newlines before current position (text sources only)."""
        if not isinstance(self.source, str):
            return 0
        return self.source.count("\n", 0, self.pos)

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for current position.

        Non-text sources are treated as a single line of elements.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Performance:
            O(n) where n = current position
            Only call for error reporting, not during normal parsing!

        Example:
            >>> Cursor("line1\\nline2", 8).compute_line_col()
            (2, 3)
        """
        if not isinstance(self.source, str):
            return (1, self.pos + 1)

        line = self.count_newlines_before() + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1

        return (line, col)

    def excerpt(self, width: int = MAX_EXCERPT_LENGTH) -> str:
        """Render at most width elements on each side of the position marker."""
        start = max(0, self.pos - width)
        end = min(len(self.source), self.pos + width)
        before = self.source[start : self.pos]
        after = self.source[self.pos : end]
        if isinstance(self.source, str):
            return f"{before}^{after}"
        return f"{list(before)!r}^{list(after)!r}"

    def __str__(self) -> str:
        """Render the full input with a marker at the position: ``before^after``."""
        before = self.source[: self.pos]
        after = self.source[self.pos :]
        if isinstance(self.source, str):
            return f"{before}^{after}"
        return f"{list(before)!r}^{list(after)!r}"


class LineOffsetCache:
    """Cached line offset computation for efficient position lookups.

    Precomputes line start offsets in O(n) single pass, then provides
    O(log n) lookups using binary search. Use this when you need to
    compute line:column for multiple positions in the same source.

    Example:
        >>> cache = LineOffsetCache("line1\\nline2\\nline3")
        >>> cache.get_line_col(0)
        (1, 1)
        >>> cache.get_line_col(8)
        (2, 3)

    Thread Safety:
        Thread-safe. Internal state is only set during __init__.
    """

    __slots__ = ("_offsets", "_source_len")

    def __init__(self, source: str) -> None:
        """Build line offset cache from source.

        Complexity:
            O(n) where n = len(source)
        """
        offsets = [0]
        for i, char in enumerate(source):
            if char == "\n":
                offsets.append(i + 1)
        self._offsets: tuple[int, ...] = tuple(offsets)
        self._source_len = len(source)

    def get_line_col(self, pos: int) -> tuple[int, int]:
        """Get line and column for position using binary search.

        Args:
            pos: Character position in source (0-indexed), clamped to range

        Returns:
            (line, column) tuple (1-indexed)
        """
        if pos < 0:
            pos = 0
        elif pos > self._source_len:
            pos = self._source_len

        # Line index = index of largest offset <= pos
        left, right = 0, len(self._offsets) - 1
        while left < right:
            mid = (left + right + 1) // 2
            if self._offsets[mid] <= pos:
                left = mid
            else:
                right = mid - 1

        return (left + 1, pos - self._offsets[left] + 1)


@dataclass(frozen=True, slots=True)
class Outcome[T]:
    """Successful match: parsed value and the cursor after it.

    Type Parameters:
        T: The type of the parsed value

    Example:
        >>> outcome = Outcome("h", Cursor("hello", 1))
        >>> outcome.map(str.upper).value
        'H'
        >>> outcome.cursor.pos
        1
    """

    value: T
    cursor: Cursor

    def map[U](self, transform: Callable[[T], U]) -> Outcome[U]:
        """Transform the value, keeping the cursor."""
        return Outcome(transform(self.value), self.cursor)
