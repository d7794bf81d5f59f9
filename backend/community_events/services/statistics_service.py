"""Aggregate like/dislike counts per event and across all events."""
from typing import Iterable, Mapping

from community_events.models.response import ResponseType
from community_events.schemas.response import ResponseRecord
from community_events.schemas.statistics import EventStatistics, StatisticsOut, StatisticsTotals


def count_responses(responses: Iterable[ResponseRecord]) -> EventStatistics:
    """Count recognized response types; anything else is left out of every total."""
    likes = dislikes = 0
    for response in responses:
        if response.response_type == ResponseType.like.value:
            likes += 1
        elif response.response_type == ResponseType.dislike.value:
            dislikes += 1
    return EventStatistics(likes=likes, dislikes=dislikes, total_responses=likes + dislikes)


def compute_statistics(grouped: Mapping[str, Iterable[ResponseRecord]]) -> StatisticsOut:
    """Build the per-event map and grand totals.

    Events without a single recognized response do not appear in ``events``.
    """
    events: dict[str, EventStatistics] = {}
    totals = StatisticsTotals()
    for event_id, responses in grouped.items():
        stats = count_responses(responses)
        if stats.total_responses == 0:
            continue
        events[event_id] = stats
        totals.likes += stats.likes
        totals.dislikes += stats.dislikes
        totals.total_responses += stats.total_responses
    totals.event_count = len(events)
    return StatisticsOut(events=events, totals=totals)
