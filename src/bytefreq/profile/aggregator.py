from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass

from bytefreq.mask.grain import Grain, mask_value


@dataclass(frozen=True)
class PatternStat:
    pattern: str
    count: int
    example: str


class FrequencyAggregator:
    """Per-column pattern histograms with one retained example per pattern.

    Examples are kept with size-1 reservoir sampling: the n-th value seen
    for a (column, pattern) key replaces the stored example with
    probability 1/n, so the retained value is uniform over all n values
    regardless of arrival order.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self._counts: list[Counter[str]] = []
        self._examples: list[dict[str, str]] = []

    def track(self, column_index: int) -> None:
        while len(self._counts) <= column_index:
            self._counts.append(Counter())
            self._examples.append({})

    def observe(self, column_index: int, raw_value: str, grain: str | Grain) -> None:
        pattern = mask_value(raw_value, grain)
        counts = self._counts[column_index]
        counts[pattern] += 1
        # draw once per observation, including the first (1/1 always keeps)
        if self.rng.random() < 1.0 / counts[pattern]:
            self._examples[column_index][pattern] = raw_value

    def counts(self, column_index: int) -> dict[str, int]:
        return dict(self._counts[column_index])

    def examples(self, column_index: int) -> dict[str, str]:
        return dict(self._examples[column_index])

    def ranked(self, column_index: int) -> list[PatternStat]:
        examples = self._examples[column_index]
        return [
            PatternStat(pattern=pattern, count=count, example=examples.get(pattern, ""))
            for pattern, count in self._counts[column_index].most_common()
        ]

    def total(self, column_index: int) -> int:
        return sum(self._counts[column_index].values())

    def __len__(self) -> int:
        return len(self._counts)
