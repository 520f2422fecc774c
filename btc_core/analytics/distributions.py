"""
Group-and-count tables keyed by enum label.

Rows keep the order in which each label first appears, percentages are
count / total * 100 rounded to one decimal, and zero-count groups are omitted.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Type

import pandas as pd

from btc_core.analytics.enums import LabelledEnum, label_for
from btc_core.analytics.records import Number, as_dict, as_list, as_non_negative, dig, round_half_up


@dataclass(frozen=True)
class DistributionRow:
    label: str
    count: Number
    percentage: float


def _rows_from_counts(counts: pd.Series) -> List[DistributionRow]:
    counts = counts[counts > 0]
    total = counts.sum()
    if counts.empty or total <= 0:
        return []
    return [
        DistributionRow(
            label=str(label),
            count=int(count) if float(count).is_integer() else float(count),
            percentage=round_half_up(float(count) / float(total) * 100, 1),
        )
        for label, count in counts.items()
    ]


def distribution_from_labels(labels: Iterable[str]) -> List[DistributionRow]:
    """Count occurrences of each label."""
    series = pd.Series(list(labels), dtype="object")
    if series.empty:
        return []
    return _rows_from_counts(series.groupby(series, sort=False).size())


def distribution_from_records(records: Any, field: str, enum_cls: Type[LabelledEnum]) -> List[DistributionRow]:
    """
    Group raw records by the label of one coded field.

    Example:
        distribution_from_records(requests, "priority", Priority)
        # [DistributionRow("Critical", 4, 66.7), DistributionRow("Normal", 1, 16.7), ...]
    """
    return distribution_from_labels(
        label_for(enum_cls, dig(record, field)) for record in as_list(records)
    )


def distribution_from_counts(counts: Any, enum_cls: Type[LabelledEnum]) -> List[DistributionRow]:
    """
    Relabel a pre-counted {code: count} map (as served by /Dashboard/stats).

    Codes sharing a label (e.g. "7" and 7) are merged.
    """
    items = [
        (label_for(enum_cls, code), as_non_negative(count) or 0)
        for code, count in as_dict(counts).items()
    ]
    if not items:
        return []
    frame = pd.DataFrame(items, columns=["label", "count"])
    return _rows_from_counts(frame.groupby("label", sort=False)["count"].sum())
