"""Celery background tasks for keeping precomputed sprint metrics fresh."""

import logging

from celery import shared_task
from django.db.models import Q, Sum
from django.db.models.functions import Coalesce

from pulse.models import Sprint, TicketStatus

logger = logging.getLogger("pulse.tasks")


@shared_task
def refresh_sprint_velocity(sprint_id: int | None = None) -> dict:
    """Recompute ``Sprint.velocity`` from the story points of DONE tickets.

    Args:
        sprint_id: Primary key of a single Sprint, or ``None`` for every sprint.

    Returns:
        A dict mapping sprint IDs to their refreshed velocity.
    """
    sprints = Sprint.objects.annotate(
        done_points=Coalesce(
            Sum("tickets__story_points", filter=Q(tickets__status=TicketStatus.DONE)), 0,
        ),
    )
    if sprint_id is not None:
        sprints = sprints.filter(pk=sprint_id)

    refreshed: dict[int, int] = {}
    for sprint in sprints:
        if sprint.velocity != sprint.done_points:
            sprint.velocity = sprint.done_points
            sprint.save(update_fields=["velocity", "updated_at"])
        refreshed[sprint.pk] = sprint.done_points

    logger.info("Refreshed velocity for %d sprint(s)", len(refreshed))
    return refreshed
