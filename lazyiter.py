"""Fused lazy pipelines over a fixed-size backing sequence."""

import logging
from dataclasses import dataclass
from collections.abc import Sequence
from typing import Any, Callable

logger = logging.getLogger(__name__)


class EmptySourceError(ValueError):
    """Raised when a pipeline is built from an empty sequence."""
    pass


# --------- operation variants ----------
@dataclass(frozen=True)
class Map:
    """Replace the working value with transform(value, index)."""
    transform: Callable[[Any, int], Any]
    kind = "map"


@dataclass(frozen=True)
class Filter:
    """Drop the current element when predicate(value, index) is false."""
    predicate: Callable[[Any, int], bool]
    kind = "filter"


@dataclass(frozen=True)
class TakeWhile:
    """Stop the whole pass when predicate(value, index) is false."""
    predicate: Callable[[Any, int], bool]
    kind = "take_while"


class Pipeline:
    """
    A chainable, lazy view over a backing sequence. Chaining methods queue
    operations on this same instance; nothing runs until the pipeline is
    iterated, and then every queued operation is applied to one element
    before the next element is read.

    The index handed to operation callbacks is the number of values the
    current pass has yielded so far. Elements dropped by filter() do not
    advance it, so take(n) placed after filter() yields at most n values.
    """

    def __init__(self, source):
        if isinstance(source, bool):
            raise TypeError("Pipeline source must be a sequence or an int count, not bool")

        if isinstance(source, int):
            if source < 0:
                raise ValueError(f"Pipeline count must be >= 0, got {source}")
            self._source = [None] * source
        elif isinstance(source, Sequence):
            if not len(source):
                raise EmptySourceError("Pipeline cannot wrap an empty sequence")
            self._source = source
        else:
            raise TypeError(
                f"Pipeline source must be a sequence or an int count, got {type(source).__name__}"
            )

        self._ops = []
        logger.debug(f"Created pipeline over {len(self._source)} elements")

    @property
    def source(self) -> Sequence:
        return self._source

    @property
    def operations(self) -> tuple:
        return tuple(self._ops)

    # --------- chainable operators (lazy) ----------
    def map(self, transform):
        self._ops.append(Map(transform))
        return self

    def filter(self, predicate):
        self._ops.append(Filter(predicate))
        return self

    def take_while(self, predicate):
        self._ops.append(TakeWhile(predicate))
        return self

    def take(self, n):
        """Stop the pass once n values have been yielded."""
        self._ops.append(TakeWhile(lambda _, index: index < n))
        return self

    def clone(self) -> "Pipeline":
        """New pipeline on the same backing sequence with its own operation list."""
        # Bypass __init__: a Pipeline(0) source is an empty list, which __init__ rejects.
        c = Pipeline.__new__(Pipeline)
        c._source = self._source
        c._ops = list(self._ops)
        logger.debug(f"Cloned pipeline with {len(c._ops)} queued operations")
        return c

    # --------- consumers ----------
    def for_each(self, action) -> None:
        for value in self:
            action(value)

    def find(self, predicate):
        """Return the first yielded value matching predicate(value, output_index), or None."""
        for output_index, value in enumerate(self):
            if predicate(value, output_index):
                return value
        return None

    def reduce(self, combine, initial):
        """
        Fold combine(acc, value, output_index) over the yielded values.

        The initial accumulator is required: whether any value survives the
        queued filters is unknown until the pass has run.
        """
        acc = initial
        for output_index, value in enumerate(self):
            acc = combine(acc, value, output_index)
        return acc

    def collect(self) -> list:
        return list(self)

    # --------- iterator protocol ----------
    def __iter__(self):
        ops = self._ops
        logger.debug(f"Starting pass over {len(self._source)} elements with {len(ops)} operations")

        # Advances only on yield; filtered-out elements reuse the same index.
        index = 0
        for item in self._source:
            value = item
            keep = True
            for op in ops:
                if isinstance(op, Map):
                    value = op.transform(value, index)
                elif isinstance(op, Filter):
                    if not op.predicate(value, index):
                        keep = False
                        break
                elif isinstance(op, TakeWhile):
                    if not op.predicate(value, index):
                        logger.debug(f"Pass stopped by take_while after {index} values")
                        return
                else:
                    raise ValueError(f"Unknown op: {op!r}")

            if keep:
                yield value
                index += 1

    def __repr__(self):
        kinds = ", ".join(op.kind for op in self._ops)
        return f"Pipeline(source_length={len(self._source)}, operations=[{kinds}])"
