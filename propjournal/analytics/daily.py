"""Daily P&L aggregation.

Folds either ledger (day entries or trades) into one net figure per
calendar day. The fold is order-independent: per-day sums use
``math.fsum``, so any permutation of the input yields identical output.
"""

import math
from collections import defaultdict
from datetime import date, datetime
from typing import Iterable, Union

from propjournal.models import AggregatedDay, DayEntry, Trade

LedgerRecord = Union[DayEntry, Trade]


def calendar_day(value: Union[date, datetime]) -> date:
    """Return the calendar date of a date or timestamp, ignoring time of day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def aggregate_by_day(ledger: Iterable[LedgerRecord]) -> list[AggregatedDay]:
    """Aggregate ledger records into net P&L per calendar day.

    Args:
        ledger: Day entries or trades, in any order. Trades contribute
            their ``result_amount``.

    Returns:
        One AggregatedDay per distinct date, sorted ascending by date.
        Empty when the ledger is empty.
    """
    buckets: dict[date, list[float]] = defaultdict(list)
    for record in ledger:
        buckets[calendar_day(record.date)].append(record.pnl)

    return [
        AggregatedDay(date=day, pnl=math.fsum(buckets[day]))
        for day in sorted(buckets)
    ]
