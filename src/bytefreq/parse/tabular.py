from __future__ import annotations

import logging
from collections import Counter
from enum import Enum

from bytefreq.mask.grain import Grain
from bytefreq.profile.aggregator import FrequencyAggregator
from bytefreq.profile.registry import ColumnRegistry, ragged_column_name

logger = logging.getLogger(__name__)


class TabularState(str, Enum):
    AWAITING_HEADER = "awaiting_header"
    STREAMING = "streaming"


def clean_header_name(name: str) -> str:
    return name.strip().replace(" ", "_")


class TabularNormalizer:
    """Delimited rows -> (column, value) observations.

    The first line is the header. Later rows are realigned by position:
    fields past the header width go to synthesized ``RaggedErr<N>``
    columns (N counted from the end of the header), missing trailing
    fields are simply not observed.
    """

    def __init__(
        self,
        registry: ColumnRegistry,
        aggregator: FrequencyAggregator,
        grain: str | Grain,
        delimiter: str = "|",
    ) -> None:
        if not delimiter:
            raise ValueError("delimiter must be a non-empty string")
        self.registry = registry
        self.aggregator = aggregator
        self.grain = grain
        self.delimiter = delimiter
        self.state = TabularState.AWAITING_HEADER
        self.header_width = 0
        self.field_counts: Counter[int] = Counter()
        # position -> registry index; grows when ragged columns appear
        self._positions: list[int] = []

    def process_line(self, line: str) -> None:
        if self.state is TabularState.AWAITING_HEADER:
            self._read_header(line)
        else:
            self._read_row(line)

    def _register(self, name: str) -> int:
        idx = self.registry.get_or_create(name)
        self.aggregator.track(idx)
        return idx

    def _read_header(self, line: str) -> None:
        seen: set[str] = set()
        for raw_name in line.split(self.delimiter):
            name = clean_header_name(raw_name)
            if name in seen:
                logger.warning("tabular duplicate header name=%r merged into one column", name)
            seen.add(name)
            self._positions.append(self._register(name))
        self.header_width = len(self._positions)
        self.state = TabularState.STREAMING
        logger.debug("tabular header columns=%d", self.header_width)

    def _column_at(self, position: int) -> int:
        while len(self._positions) <= position:
            ordinal = len(self._positions) + 1 - self.header_width
            self._positions.append(self._register(ragged_column_name(ordinal)))
        return self._positions[position]

    def _read_row(self, line: str) -> None:
        fields = line.split(self.delimiter)
        self.field_counts[len(fields)] += 1
        for pos, value in enumerate(fields):
            self.aggregator.observe(self._column_at(pos), value, self.grain)
