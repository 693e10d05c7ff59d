"""
Resolution of off-requests into priority and ordinary requests.
"""

from enum import Enum
from typing import AbstractSet

from .models import Worker


class RequestStatus(Enum):
    """How a worker's request applies to a date."""

    NO_REQUEST = "no_request"
    PRIORITY = "priority"
    ORDINARY = "ordinary"


def is_priority_worker(worker: Worker, priority_worker_ids: AbstractSet[str]) -> bool:
    return worker.id in priority_worker_ids


def resolve_request(
    worker: Worker, check_date: str, priority_worker_ids: AbstractSet[str]
) -> RequestStatus:
    """
    Resolve a worker's off-request for a date.

    A request is priority when its own flag is set or when the worker is in
    the priority set. Only the first request for a date counts.

    Args:
        worker: The worker whose requests are checked
        check_date: Canonical date string
        priority_worker_ids: Ids whose requests are always priority

    Returns:
        RequestStatus for the date
    """
    request = worker.request_for(check_date)
    if request is None:
        return RequestStatus.NO_REQUEST
    if request.priority or is_priority_worker(worker, priority_worker_ids):
        return RequestStatus.PRIORITY
    return RequestStatus.ORDINARY
