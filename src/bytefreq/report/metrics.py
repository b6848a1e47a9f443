from __future__ import annotations

from typing import Iterable

import numpy as np


def pattern_shares(counts: Iterable[int]) -> list[float]:
    vals = np.array(list(counts), dtype=float)
    total = vals.sum()
    if total == 0:
        return []
    return (vals / total).tolist()


def dominant_share(counts: Iterable[int]) -> float:
    """Fraction of observations carried by the most frequent pattern."""
    vals = np.array(list(counts), dtype=float)
    if vals.size == 0 or vals.sum() == 0:
        return 0.0
    return float(vals.max() / vals.sum())


def pattern_entropy(counts: Iterable[int]) -> float:
    """Shannon entropy in bits of a pattern histogram; 0.0 for one pattern."""
    vals = np.array(list(counts), dtype=float)
    vals = vals[vals > 0]
    if vals.size <= 1:
        return 0.0
    p = vals / vals.sum()
    return float(-(p * np.log2(p)).sum())


def column_summary(counts: Iterable[int]) -> dict[str, float | int]:
    vals = list(counts)
    return {
        "observations": int(sum(vals)),
        "distinct_patterns": len(vals),
        "dominant_share": round(dominant_share(vals), 6),
        "entropy_bits": round(pattern_entropy(vals), 6),
    }
