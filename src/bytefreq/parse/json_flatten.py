from __future__ import annotations

import json
import logging
from typing import Any

from bytefreq.mask.grain import Grain
from bytefreq.profile.aggregator import FrequencyAggregator
from bytefreq.profile.registry import ColumnRegistry

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def parse_line(line: str) -> Any:
    """Strict parse of one JSON document.

    Rejects NaN and Infinity, and documents holding lone surrogates (they
    cannot be written back out as UTF-8). Raises ValueError on any failure.
    """
    value = json.loads(line, parse_constant=_reject_constant)
    try:
        json.dumps(value, ensure_ascii=False).encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ValueError(f"document is not valid unicode: {exc.reason}") from exc
    return value


def json_literal(value: Any) -> str:
    """Literal JSON text of a scalar: strings keep their quotes."""
    return json.dumps(value, ensure_ascii=False)


def join_key(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def index_key(prefix: str, idx: int, remove_array_numbers: bool) -> str:
    return f"{prefix}[]" if remove_array_numbers else f"{prefix}[{idx}]"


def flatten(
    value: Any,
    max_depth: int = 2,
    remove_array_numbers: bool = False,
) -> list[tuple[str, str]]:
    """Flatten one parsed JSON document into (path, literal) leaves.

    Only object nesting consumes ``max_depth``; arrays are always walked.
    Leaves come out in document order.
    """
    leaves: list[tuple[str, str]] = []
    stack: list[tuple[Any, str, int]] = [(value, "", 0)]
    while stack:
        node, path, depth = stack.pop()
        if isinstance(node, dict):
            if depth >= max_depth:
                continue
            children = [(v, join_key(path, k), depth + 1) for k, v in node.items()]
            stack.extend(reversed(children))
        elif isinstance(node, list):
            children = [
                (v, index_key(path, i, remove_array_numbers), depth)
                for i, v in enumerate(node)
            ]
            stack.extend(reversed(children))
        else:
            leaves.append((path, json_literal(node)))
    return leaves


class JsonNormalizer:
    def __init__(
        self,
        registry: ColumnRegistry,
        aggregator: FrequencyAggregator,
        grain: str | Grain,
        max_depth: int = 2,
        remove_array_numbers: bool = False,
    ) -> None:
        self.registry = registry
        self.aggregator = aggregator
        self.grain = grain
        self.max_depth = max_depth
        self.remove_array_numbers = remove_array_numbers

    def process_value(self, value: Any) -> None:
        for path, literal in flatten(value, self.max_depth, self.remove_array_numbers):
            idx = self.registry.get_or_create(path)
            self.aggregator.track(idx)
            self.aggregator.observe(idx, literal, self.grain)

    def process_line(self, line: str) -> None:
        try:
            value = parse_line(line)
        except (ValueError, RecursionError):
            logger.debug("json skip unparsable line=%.80r", line)
            return
        self.process_value(value)
