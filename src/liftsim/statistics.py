from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

logger = logging.getLogger(__name__)


@dataclass
class StatisticsSummary:
    total_passengers: int
    average_time: float
    longest_time: Optional[int]
    shortest_time: Optional[int]
    p95_time: float
    anomalies: int


class ConveyanceStatistics:
    """Running totals of completed conveyance times."""

    def __init__(self) -> None:
        self.conveyance_times: List[int] = []
        self.total_passengers: int = 0
        self.total_conveyance_time: int = 0
        self.longest_time: Optional[int] = None
        self.shortest_time: Optional[int] = None
        self.anomalies: int = 0

    def report_completion(self, conveyance_time: Optional[int]) -> bool:
        """Count a completed journey; non-positive times are flagged and skipped."""
        if conveyance_time is None or conveyance_time <= 0:
            self.anomalies += 1
            logger.warning("Ignoring invalid conveyance time %r", conveyance_time)
            return False

        self.conveyance_times.append(conveyance_time)
        self.total_passengers += 1
        self.total_conveyance_time += conveyance_time
        if self.longest_time is None or conveyance_time > self.longest_time:
            self.longest_time = conveyance_time
        if self.shortest_time is None or conveyance_time < self.shortest_time:
            self.shortest_time = conveyance_time
        return True

    def _average(self) -> float:
        if not self.total_passengers:
            return 0.0
        return self.total_conveyance_time / self.total_passengers

    def _percentile(self, percentile: float) -> float:
        if not self.conveyance_times:
            return 0.0
        sorted_vals = sorted(self.conveyance_times)
        k = (len(sorted_vals) - 1) * percentile
        f = math.floor(k)
        c = math.ceil(k)
        if f == c:
            return float(sorted_vals[int(k)])
        d0 = sorted_vals[int(f)] * (c - k)
        d1 = sorted_vals[int(c)] * (k - f)
        return float(d0 + d1)

    def calculate_statistics(self) -> StatisticsSummary:
        return StatisticsSummary(
            total_passengers=self.total_passengers,
            average_time=self._average(),
            longest_time=self.longest_time,
            shortest_time=self.shortest_time,
            p95_time=self._percentile(0.95),
            anomalies=self.anomalies,
        )
