"""Structured, hierarchical parse failures.

A Failure is a returned value, not an exception: parser bodies return either
an Outcome or a Failure, and only the top-level Parser.parse() raises, by
wrapping the Failure in ParseFailureError.

Failure chains are built strictly by wrapping. Each layer records the cursor
where it detected failure, so the innermost layer carries the most specific
position while outer layers carry the names of the grammar rules that were
active.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from parsecraft.diagnostics import Diagnostic, ErrorTemplate, FailureKind, SourceSpan

from .cursor import Cursor

__all__ = ["Failure"]


@dataclass(frozen=True, slots=True)
class Failure:
    """Immutable record of a failed match.

    Attributes:
        position: Cursor where this layer detected failure
        labels: Context labels of this layer, innermost first
        cause: The wrapped, more specific failure (None for a leaf)
        kind: How the failure came to be

    Example:
        >>> leaf = Failure(Cursor("(1,foo)", 3))
        >>> outer = leaf.wrap("number")
        >>> outer.label_path
        ('number',)
        >>> str(outer.innermost.position)
        '(1,^foo)'
    """

    position: Cursor
    labels: tuple[str, ...] = ()
    cause: Failure | None = None
    kind: FailureKind = FailureKind.UNMATCHED

    def wrap(self, name: str) -> Failure:
        """Wrap this failure in a labeled layer at the same position."""
        return Failure(self.position, (name,), self, FailureKind.LABELED)

    def chain(self) -> Iterator[Failure]:
        """Iterate layers from outermost to innermost."""
        current: Failure | None = self
        while current is not None:
            yield current
            current = current.cause

    @property
    def innermost(self) -> Failure:
        """Deepest layer of the chain, holding the most specific position."""
        layer = self
        while layer.cause is not None:
            layer = layer.cause
        return layer

    @property
    def label_path(self) -> tuple[str, ...]:
        """Every label in the chain, outermost first."""
        return tuple(label for layer in self.chain() for label in layer.labels)

    def describe(self) -> str:
        """Render a multi-line report of the chain.

        Each labeled layer contributes an ``- Expected:`` line, indented by
        depth. The position marker is shown once, for the deepest layer.

        Example:
            >>> print(failure.describe())
            Parse failed:
            - Expected: parenthesized expression
              - Expected: argument list
                - Expected: number
                  at position:
                  > (1,2,^foo,4)
        """
        lines: list[str] = []
        indentation = ""
        for layer in self.chain():
            if layer.labels:
                lines.append(f"{indentation}- Expected: {' -> '.join(layer.labels)}")
            if layer.cause is None:
                lines.append(f"{indentation}  at position:")
                lines.append(f"{indentation}  > {layer.position}")
            indentation += "  "
        return "Parse failed:\n" + "\n".join(lines)

    def __str__(self) -> str:
        return self.describe()

    def to_diagnostic(self) -> Diagnostic:
        """Convert the chain into a structured Diagnostic.

        The span and excerpt point at the innermost position.
        """
        deepest = self.innermost
        position = deepest.position
        line, column = position.compute_line_col()
        span = SourceSpan(start=position.pos, end=position.pos, line=line, column=column)
        return ErrorTemplate.parse_failed(
            self.label_path,
            span,
            position.excerpt(),
            at_end=position.is_eof,
            rejected=deepest.kind is FailureKind.REJECTED,
        )
