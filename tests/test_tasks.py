from datetime import timedelta

import pytest
from django.utils import timezone

from pulse.models import Sprint, Team, Ticket, TicketStatus
from pulse.tasks import refresh_sprint_velocity

pytestmark = pytest.mark.django_db


@pytest.fixture
def sprints():
    team = Team.objects.create(name="Backend Team")
    end = timezone.now()
    first = Sprint.objects.create(team=team, name="S1", start_date=end - timedelta(days=14), end_date=end)
    second = Sprint.objects.create(
        team=team, name="S2", start_date=end - timedelta(days=28), end_date=end - timedelta(days=14),
    )
    Ticket.objects.create(team=team, sprint=first, title="a", status=TicketStatus.DONE, story_points=5)
    Ticket.objects.create(team=team, sprint=first, title="b", status=TicketStatus.DONE, story_points=3)
    Ticket.objects.create(team=team, sprint=first, title="c", status=TicketStatus.TESTING, story_points=8)
    return first, second


def test_refresh_all_sprints(sprints):
    first, second = sprints
    assert refresh_sprint_velocity() == {first.pk: 8, second.pk: 0}
    first.refresh_from_db()
    second.refresh_from_db()
    assert first.velocity == 8
    assert second.velocity == 0


def test_refresh_single_sprint(sprints):
    first, second = sprints
    assert refresh_sprint_velocity(first.pk) == {first.pk: 8}
    second.refresh_from_db()
    assert second.velocity is None
