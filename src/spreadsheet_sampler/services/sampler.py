"""Random selection of data rows without replacement."""

from __future__ import annotations

import math
import random
from collections.abc import Iterator
from dataclasses import dataclass, field

from spreadsheet_sampler.sample_spec import SampleMode, SampleSpec

# Row 1 of the result sheet holds the header.
FIRST_NEW_ROW_NUMBER = 2


@dataclass(frozen=True)
class RowMapping:
    """One sampled row: 0-based source index and 1-based result row number."""

    original_index: int
    new_row_number: int

    @property
    def original_row_number(self) -> int:
        return self.original_index + 1


@dataclass
class SampleResult:
    """Sampled rows in draw order."""

    mappings: list[RowMapping] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.mappings)

    def __iter__(self) -> Iterator[RowMapping]:
        return iter(self.mappings)

    @property
    def original_indices(self) -> list[int]:
        return [mapping.original_index for mapping in self.mappings]


def compute_target_count(spec: SampleSpec, row_count: int) -> int:
    """Number of rows to draw, clamped to ``[0, row_count]``."""
    if row_count <= 0:
        return 0
    if spec.mode == SampleMode.PERCENTAGE:
        target = math.floor(spec.value / 100.0 * row_count)
    else:
        target = int(spec.value)
    return max(0, min(target, row_count))


def sample_rows(
    first_index: int,
    last_index: int,
    target_count: int,
    rng: random.Random | None = None,
) -> SampleResult:
    """Draw distinct row indices from ``[first_index, last_index]``.

    Every subset of the clamped size is equally likely. Result row numbers
    are assigned from 2 upward in draw order.

    Args:
        first_index: First data row index (inclusive).
        last_index: Last data row index (inclusive).
        target_count: Rows wanted; clamped to the range size.
        rng: Random source; a fresh unseeded one when omitted.
    """
    population = range(first_index, last_index + 1)
    count = max(0, min(target_count, len(population)))
    rng = rng or random.Random()

    drawn = rng.sample(population, count)
    return SampleResult(
        mappings=[
            RowMapping(original_index=index, new_row_number=FIRST_NEW_ROW_NUMBER + i)
            for i, index in enumerate(drawn)
        ]
    )
