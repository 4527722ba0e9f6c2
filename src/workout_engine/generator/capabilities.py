"""Generation capability probe.

Runs repeated generations across workout lengths and muscle-group subsets
and tabulates how often each combination succeeds, how many attempts it
needs and how long it takes. Useful for checking that a custom catalog can
actually serve the lengths a UI offers.
"""

from __future__ import annotations

import logging
from itertools import combinations
from typing import Sequence

import numpy as np
import pandas as pd

from workout_engine.exceptions import WorkoutEngineError
from workout_engine.generator.generator import WorkoutGenerator

logger = logging.getLogger(__name__)

PROBE_COLUMNS = [
    "length",
    "groups",
    "group_count",
    "trial",
    "success",
    "attempts",
    "generation_time_ms",
    "error",
]


def probe_generation_capabilities(
    generator: WorkoutGenerator,
    lengths: Sequence[int] = (5, 10, 15, 20),
    group_counts: Sequence[int] = (2, 3, 4),
    trials: int = 5,
    max_subsets: int = 3,
) -> pd.DataFrame:
    """Return one row per generation trial.

    For every group count, the first *max_subsets* combinations of the
    catalog's muscle groups are tried at every length, *trials* times each.
    Failed generations are recorded with ``success=False`` and the error
    class name rather than raised.
    """
    all_groups = generator.catalog.get_all_muscle_groups()
    rows: list[dict] = []

    for count in group_counts:
        if count < 1 or count > len(all_groups):
            logger.debug("Skipping group count %d (catalog has %d groups)", count, len(all_groups))
            continue
        subsets = list(combinations(all_groups, count))[:max_subsets]
        for subset in subsets:
            for length in lengths:
                for trial in range(trials):
                    row = {
                        "length": length,
                        "groups": ",".join(subset),
                        "group_count": count,
                        "trial": trial,
                        "success": False,
                        "attempts": 0,
                        "generation_time_ms": np.nan,
                        "error": "",
                    }
                    try:
                        result = generator.generate(length, subset)
                    except WorkoutEngineError as exc:
                        row["error"] = type(exc).__name__
                        row["attempts"] = getattr(exc, "attempts", 0)
                    else:
                        row["success"] = True
                        row["attempts"] = result.attempts
                        row["generation_time_ms"] = result.generation_time_ms
                    rows.append(row)

    logger.info("Capability probe ran %d generation(s)", len(rows))
    return pd.DataFrame(rows, columns=PROBE_COLUMNS)


def summarize_capabilities(frame: pd.DataFrame) -> pd.DataFrame:
    """Aggregate probe rows per (length, group_count).

    Columns: ``success_rate`` (0..1), ``mean_attempts``, ``p95_time_ms``
    (NaN when nothing succeeded) and ``runs``.
    """
    if frame.empty:
        return pd.DataFrame(
            columns=["length", "group_count", "success_rate", "mean_attempts", "p95_time_ms", "runs"]
        )

    records: list[dict] = []
    for (length, count), group in frame.groupby(["length", "group_count"], sort=True):
        successes = group["success"].to_numpy(dtype=bool)
        attempts = group.loc[group["success"], "attempts"].to_numpy(dtype=np.float64)
        times = group.loc[group["success"], "generation_time_ms"].to_numpy(dtype=np.float64)
        records.append(
            {
                "length": int(length),
                "group_count": int(count),
                "success_rate": float(np.mean(successes)),
                "mean_attempts": float(np.mean(attempts)) if attempts.size else np.nan,
                "p95_time_ms": float(np.percentile(times, 95)) if times.size else np.nan,
                "runs": int(successes.size),
            }
        )
    return pd.DataFrame(records)
