from __future__ import annotations

import logging
from typing import Optional

import pandas as pd

from . import config
from .generators import make_generator
from .statistics import UniformityResult


logger = logging.getLogger(__name__)

COLUMNS = ["stream", "draw", "value"]


def generate_samples(
    variant: str = config.DEFAULT_VARIANT,
    seed: int = config.DEFAULT_SEED,
    count: int = config.DEFAULT_SAMPLE_COUNT,
    lower: int = config.DEFAULT_LOWER,
    upper: int = config.DEFAULT_UPPER,
    streams: int = config.DEFAULT_STREAMS,
    stride: Optional[int] = None,
) -> pd.DataFrame:
    """Draw bounded samples from one or more sub-streams of a generator.

    - Seeds one generator of ``variant`` with ``seed``.
    - Stream k starts ``k * stride`` steps ahead of the seeded state
      (default stride: the period split evenly across ``streams``).
    - Each stream yields ``count`` values of ``bounded(lower, upper)``.

    Returns a pandas DataFrame with:
      stream, draw, value
    """
    if count <= 0:
        raise ValueError("count must be > 0")
    if streams <= 0:
        raise ValueError("streams must be > 0")

    base = make_generator(variant, seed)
    if stride is None:
        stride = base.recurrence.period // streams
    if stride <= 0:
        raise ValueError("stride must be > 0")

    rows: list[dict] = []
    for k in range(streams):
        gen = base.substream(k, stride)
        for i in range(count):
            rows.append({"stream": k, "draw": i, "value": gen.bounded(lower, upper)})

    logger.info(
        "generated %d samples from %s (seed=%d, streams=%d, stride=%d)",
        len(rows), variant, seed, streams, stride,
    )
    return pd.DataFrame(rows, columns=COLUMNS)


def counts_frame(result: UniformityResult, binned: bool = False) -> pd.DataFrame:
    """Observed count per category of a uniformity result.

    The category column is named ``bin`` when the draws were binned first,
    since the categories are then bin indices rather than drawn values.
    """
    column = "bin" if binned else "value"
    return pd.DataFrame(
        {column: list(range(result.lower, result.upper + 1)), "count": list(result.counts)}
    )


def export_to_csv(df: pd.DataFrame) -> str:
    """Export a sample table to a CSV string."""
    out = df.copy()
    for c in COLUMNS:
        if c not in out.columns:
            out[c] = ""
    return out[COLUMNS].to_csv(index=False)
