from __future__ import annotations

import logging
import random
from collections import Counter
from typing import Iterable

from bytefreq.config import ProfileConfig
from bytefreq.parse.json_flatten import JsonNormalizer
from bytefreq.parse.tabular import TabularNormalizer
from bytefreq.profile.aggregator import FrequencyAggregator
from bytefreq.profile.registry import ColumnRegistry
from bytefreq.util.seed import make_rng

logger = logging.getLogger(__name__)


class Profiler:
    """Drives one input stream through a normalizer into the aggregator."""

    def __init__(self, config: ProfileConfig | None = None, rng: random.Random | None = None) -> None:
        self.config = config or ProfileConfig()
        self.registry = ColumnRegistry()
        self.aggregator = FrequencyAggregator(rng if rng is not None else make_rng(self.config.seed))
        self.record_count = 0
        self.normalizer: TabularNormalizer | JsonNormalizer
        if self.config.format == "json":
            self.normalizer = JsonNormalizer(
                self.registry,
                self.aggregator,
                self.config.grain,
                max_depth=self.config.pathdepth,
                remove_array_numbers=self.config.remove_array_numbers,
            )
        else:
            self.normalizer = TabularNormalizer(
                self.registry,
                self.aggregator,
                self.config.grain,
                delimiter=self.config.delimiter,
            )

    @property
    def field_counts(self) -> Counter[int]:
        if isinstance(self.normalizer, TabularNormalizer):
            return self.normalizer.field_counts
        return Counter()

    def feed(self, line: str) -> None:
        if not line:
            return
        self.normalizer.process_line(line)
        self.record_count += 1

    def run(self, lines: Iterable[str], log_every: int = 0) -> "Profiler":
        for line in lines:
            self.feed(line)
            if line and log_every and self.record_count % log_every == 0:
                logger.info("profile progress rows=%d columns=%d", self.record_count, len(self.registry))
        logger.info(
            "profile complete format=%s grain=%s rows=%d columns=%d",
            self.config.format,
            self.config.grain.value,
            self.record_count,
            len(self.registry),
        )
        return self
