import pytest

from database.lifecycle_models import CollaborationStatusDB, Dispute, DisputeStatusDB
from lifecycle.errors import Forbidden, InvalidArgument, InvalidTransition, NotFound


def _open(coordinator, collaboration, user, subject="Late delivery"):
    return coordinator.open_dispute(collaboration.id, user.id, subject, "Reel was due last Friday")


def test_outsider_cannot_open_dispute(coordinator, collaboration, world, db):
    with pytest.raises(Forbidden):
        _open(coordinator, collaboration, world.outsider)
    assert db.query(Dispute).count() == 0


@pytest.mark.parametrize("who", ["brand_user", "influencer_user"])
def test_participants_can_open_dispute(coordinator, collaboration, world, who):
    user = getattr(world, who)
    dispute = _open(coordinator, collaboration, user)
    assert dispute.status == DisputeStatusDB.OPEN
    assert dispute.initiated_by == user.id
    assert dispute.resolution is None
    assert dispute.resolved_at is None


def test_dispute_does_not_touch_collaboration(coordinator, accepted_collaboration, world):
    dispute = _open(coordinator, accepted_collaboration, world.brand_user)
    coordinator.resolve_dispute(dispute.id, "Influencer gets one more week")
    assert coordinator.get_collaboration(accepted_collaboration.id).status == CollaborationStatusDB.ACCEPTED


def test_review_then_resolve(coordinator, collaboration, world):
    dispute = _open(coordinator, collaboration, world.influencer_user)

    dispute = coordinator.start_dispute_review(dispute.id)
    assert dispute.status == DisputeStatusDB.IN_REVIEW

    dispute = coordinator.resolve_dispute(dispute.id, "Partial refund agreed")
    assert dispute.status == DisputeStatusDB.RESOLVED
    assert dispute.resolution == "Partial refund agreed"
    assert dispute.resolved_at is not None


def test_resolve_straight_from_open(coordinator, collaboration, world):
    dispute = _open(coordinator, collaboration, world.brand_user)
    assert coordinator.resolve_dispute(dispute.id, "Withdrawn").status == DisputeStatusDB.RESOLVED


def test_close_records_reason(coordinator, collaboration, world):
    dispute = _open(coordinator, collaboration, world.brand_user)
    dispute = coordinator.close_dispute(dispute.id, "duplicate")
    assert dispute.status == DisputeStatusDB.CLOSED
    assert dispute.resolution == "Closed: duplicate"
    assert dispute.resolved_at is not None


def test_closed_dispute_cannot_be_resolved(coordinator, collaboration, world):
    dispute = _open(coordinator, collaboration, world.brand_user)
    coordinator.close_dispute(dispute.id, "spam")

    with pytest.raises(InvalidTransition):
        coordinator.resolve_dispute(dispute.id, "too late")
    assert coordinator.get_dispute(dispute.id).resolution == "Closed: spam"


def test_resolved_dispute_is_terminal(coordinator, collaboration, world):
    dispute = _open(coordinator, collaboration, world.brand_user)
    coordinator.resolve_dispute(dispute.id, "done")

    with pytest.raises(InvalidTransition):
        coordinator.start_dispute_review(dispute.id)
    with pytest.raises(InvalidTransition):
        coordinator.close_dispute(dispute.id, "again")


def test_multiple_disputes_per_collaboration(coordinator, collaboration, world):
    first = _open(coordinator, collaboration, world.brand_user, "Quality")
    second = _open(coordinator, collaboration, world.influencer_user, "Payment")

    listed = coordinator.list_collaboration_disputes(collaboration.id)
    assert [d.id for d in listed] == [first.id, second.id]


def test_open_requires_subject_and_collaboration(coordinator, collaboration, world):
    with pytest.raises(InvalidArgument):
        _open(coordinator, collaboration, world.brand_user, subject=" ")
    with pytest.raises(NotFound):
        coordinator.open_dispute("missing", world.brand_user.id, "x", "y")
    with pytest.raises(NotFound):
        coordinator.resolve_dispute("missing", "x")
