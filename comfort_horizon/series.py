"""
Series selection and grouping for the Comfort Horizon Viewer.

Sensor feeds number their samples sequentially.  After a dropout or a
reset the ``id`` sequence jumps, and whatever follows belongs to a
different run that should not be drawn on the same time axis.
``select_first_run`` keeps, for each ``(category, field)``, only the
run that starts at the smallest ``id``.
"""

from collections import OrderedDict
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

from .data_model import Record


def _group(records: Iterable[Record]) -> "OrderedDict[Tuple[str, str], List[Record]]":
    groups: "OrderedDict[Tuple[str, str], List[Record]]" = OrderedDict()
    for rec in records:
        groups.setdefault((rec.category, rec.field), []).append(rec)
    return groups


def first_run(group: Sequence[Record]) -> List[Record]:
    """Leading run of consecutive ids in *group* (sorted by id)."""
    if not group:
        return []
    ordered = sorted(group, key=lambda r: r.id)
    run = [ordered[0]]
    for rec in ordered[1:]:
        if rec.id != run[-1].id + 1:
            break
        run.append(rec)
    return run


def select_first_run(records: Iterable[Record]) -> List[Record]:
    """Keep only the first unbroken id run of every (category, field).

    Groups appear in the order their first record appears in
    *records*; within a group records are in ascending ``id`` order.

    Examples
    --------
    ids ``1, 2, 3, 5, 6`` for one field → ``1, 2, 3``.
    """
    selected: List[Record] = []
    for group in _group(records).values():
        selected.extend(first_run(group))
    return selected


def group_by_category(records: Iterable[Record]) -> "OrderedDict[str, List[Record]]":
    """Records per category, categories in first-seen order."""
    grouped: "OrderedDict[str, List[Record]]" = OrderedDict()
    for rec in records:
        grouped.setdefault(rec.category, []).append(rec)
    return grouped


def fields_in_category(records: Iterable[Record]) -> List[str]:
    """Distinct field names in first-seen order."""
    return list(OrderedDict.fromkeys(rec.field for rec in records))


def series_arrays(
    records: Sequence[Record],
    plot_property: str = "value",
) -> Tuple[np.ndarray, np.ndarray]:
    """Time and value arrays for one field, ready for plotting.

    Records without a timestamp are left out.  Non-finite values stay
    ``NaN`` so renderers can treat them as gaps.

    Returns
    -------
    times : ndarray of datetime64[ms]
    values : ndarray of float
    """
    placed = [r for r in records if r.time is not None]
    times = np.array([np.datetime64(r.time, 'ms') for r in placed],
                     dtype='datetime64[ms]')
    values = np.array([getattr(r, plot_property) for r in placed],
                      dtype=float)
    values[~np.isfinite(values)] = np.nan
    return times, values


def time_extent(records: Iterable[Record]):
    """``(earliest, latest)`` timestamp over *records*, or ``None``."""
    times = [r.time for r in records if r.time is not None]
    if not times:
        return None
    return min(times), max(times)


def split_by_field(records: Iterable[Record]) -> Dict[str, List[Record]]:
    """Records of one category keyed by field, fields in first-seen order."""
    fields: Dict[str, List[Record]] = OrderedDict()
    for rec in records:
        fields.setdefault(rec.field, []).append(rec)
    return fields
