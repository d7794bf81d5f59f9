"""Pydantic schemas for aggregate response statistics."""
from community_events.schemas.common import CamelModel


class EventStatistics(CamelModel):
    likes: int = 0
    dislikes: int = 0
    total_responses: int = 0


class StatisticsTotals(EventStatistics):
    event_count: int = 0


class StatisticsOut(CamelModel):
    events: dict[str, EventStatistics] = {}
    totals: StatisticsTotals = StatisticsTotals()
