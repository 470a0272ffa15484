from __future__ import annotations

from datetime import date, timedelta


BASE_DELIVERY_DAYS = 7
MIN_DELIVERY_DAYS = 2


def estimate_timeline(service_ids: list[str] | tuple[str, ...], service_level: str | None) -> int:
    """Delivery estimate in days for the selected services at the given level."""
    timeline = BASE_DELIVERY_DAYS

    if service_level == "luxury":
        timeline -= 2
    elif service_level == "premium":
        timeline -= 1

    service_count = len(service_ids)
    if service_count > 1:
        timeline += int(service_count * 1.5)

    return max(MIN_DELIVERY_DAYS, timeline)


def estimate_delivery_date(timeline_days: int, start: date | None = None) -> date:
    """Calendar date ``timeline_days`` out, pushed forward off a weekend."""
    delivery = (start or date.today()) + timedelta(days=timeline_days)
    while delivery.weekday() >= 5:
        delivery += timedelta(days=1)
    return delivery
