from decimal import Decimal

import pytest

from database.lifecycle_models import Payment, PaymentStatusDB
from lifecycle.errors import InvalidArgument, InvalidState, InvalidTransition, NotFound
from lifecycle.payments import validate_split

from .conftest import advance


def _payment(coordinator, collaboration, amount="500", commission="50", payout="450"):
    return coordinator.create_payment(collaboration.id, Decimal(amount), Decimal(commission), Decimal(payout))


def test_release_blocked_until_collaboration_completed(coordinator, collaboration):
    payment = _payment(coordinator, collaboration)
    assert payment.status == PaymentStatusDB.PENDING

    with pytest.raises(InvalidState):
        coordinator.update_payment_status(payment.id, "released")

    coordinator.update_payment_status(payment.id, "in_escrow")
    advance(coordinator, collaboration.id, "accepted", "in_progress")
    with pytest.raises(InvalidState):
        coordinator.update_payment_status(payment.id, "released")
    assert coordinator.get_payment(payment.id).status == PaymentStatusDB.IN_ESCROW


def test_release_after_completion(coordinator, completed_collaboration):
    payment = _payment(coordinator, completed_collaboration)
    coordinator.update_payment_status(payment.id, "in_escrow", transaction_id="ch_123")

    payment = coordinator.update_payment_status(payment.id, "released")
    assert payment.status == PaymentStatusDB.RELEASED
    assert payment.transaction_id == "ch_123"


def test_release_from_pending_is_invalid_transition_once_completed(coordinator, completed_collaboration):
    payment = _payment(coordinator, completed_collaboration)
    with pytest.raises(InvalidTransition):
        coordinator.update_payment_status(payment.id, "released")


@pytest.mark.parametrize("amount,commission,payout", [
    ("500", "50", "400"),
    ("500", "60", "450"),
    ("100.00", "0.01", "100.00"),
])
def test_split_must_add_up(coordinator, collaboration, db, amount, commission, payout):
    with pytest.raises(InvalidArgument):
        _payment(coordinator, collaboration, amount, commission, payout)
    assert db.query(Payment).count() == 0


@pytest.mark.parametrize("amount,commission,payout", [
    ("0", "0", "0"),
    ("-10", "0", "-10"),
    ("10", "-1", "11"),
    ("10", "10", "0"),
    ("10.001", "0.001", "10"),
])
def test_split_bounds(amount, commission, payout):
    with pytest.raises(InvalidArgument):
        validate_split(Decimal(amount), Decimal(commission), Decimal(payout))


def test_zero_commission_allowed(coordinator, collaboration):
    payment = _payment(coordinator, collaboration, "250.00", "0", "250.00")
    assert payment.platform_commission == Decimal("0.00")


def test_payment_amounts_are_exact(coordinator, collaboration):
    payment = _payment(coordinator, collaboration, "1000.10", "150.02", "850.08")
    reloaded = coordinator.get_payment(payment.id)
    assert reloaded.amount == Decimal("1000.10")
    assert reloaded.platform_commission + reloaded.influencer_payout == reloaded.amount


def test_payment_can_be_created_in_any_collaboration_status(coordinator, collaboration):
    advance(coordinator, collaboration.id, "declined")
    assert _payment(coordinator, collaboration).status == PaymentStatusDB.PENDING


def test_transaction_id_kept_when_omitted_and_replaced_when_given(coordinator, completed_collaboration):
    payment = _payment(coordinator, completed_collaboration)

    payment = coordinator.update_payment_status(payment.id, "in_escrow", transaction_id="hold_1")
    assert payment.transaction_id == "hold_1"

    payment = coordinator.update_payment_status(payment.id, "released", transaction_id="payout_9")
    assert payment.transaction_id == "payout_9"


@pytest.mark.parametrize("path", [["refunded"], ["in_escrow", "refunded"]])
def test_refund_paths(coordinator, collaboration, path):
    payment = _payment(coordinator, collaboration)
    for status in path:
        payment = coordinator.update_payment_status(payment.id, status)
    assert payment.status == PaymentStatusDB.REFUNDED

    for status in PaymentStatusDB:
        if status == PaymentStatusDB.RELEASED:
            continue
        with pytest.raises(InvalidTransition):
            coordinator.update_payment_status(payment.id, status)


def test_released_is_terminal(coordinator, completed_collaboration):
    payment = _payment(coordinator, completed_collaboration)
    coordinator.update_payment_status(payment.id, "in_escrow")
    coordinator.update_payment_status(payment.id, "released")

    for status in ("pending", "in_escrow", "refunded", "released"):
        with pytest.raises(InvalidTransition):
            coordinator.update_payment_status(payment.id, status)


def test_failed_release_leaves_payment_untouched(coordinator, collaboration, db):
    payment = _payment(coordinator, collaboration)
    coordinator.update_payment_status(payment.id, "in_escrow", transaction_id="hold_1")
    before = coordinator.get_payment(payment.id).updated_at

    with pytest.raises(InvalidState):
        coordinator.update_payment_status(payment.id, "released", transaction_id="payout_1")

    db.expire_all()
    reloaded = coordinator.get_payment(payment.id)
    assert reloaded.status == PaymentStatusDB.IN_ESCROW
    assert reloaded.transaction_id == "hold_1"
    assert reloaded.updated_at == before


def test_unknown_payment_and_status(coordinator, collaboration):
    with pytest.raises(NotFound):
        coordinator.update_payment_status("missing", "in_escrow")
    with pytest.raises(NotFound):
        coordinator.create_payment("missing", Decimal("10"), Decimal("1"), Decimal("9"))

    payment = _payment(coordinator, collaboration)
    with pytest.raises(InvalidArgument):
        coordinator.update_payment_status(payment.id, "paid")


def test_listings(coordinator, collaboration, world):
    first = _payment(coordinator, collaboration)
    second = _payment(coordinator, collaboration, "100", "10", "90")

    assert [p.id for p in coordinator.list_collaboration_payments(collaboration.id)] == [first.id, second.id]
    assert [p.id for p in coordinator.list_influencer_earnings(world.influencer.id)] == [first.id, second.id]
    assert coordinator.list_influencer_earnings("someone-else") == []


@pytest.mark.parametrize("amount,commission,payout", [
    ("10000000000000000.01", "0.01", "10000000000000000.00"),
    ("10000000000.00", "1000000000.00", "9000000000.00"),
])
def test_split_beyond_column_range_rejected(coordinator, collaboration, db, amount, commission, payout):
    with pytest.raises(InvalidArgument):
        _payment(coordinator, collaboration, amount, commission, payout)
    assert db.query(Payment).count() == 0


def test_largest_split_round_trips(coordinator, collaboration, db):
    payment = _payment(coordinator, collaboration, "9999999999.99", "999999999.99", "9000000000.00")
    db.expire_all()
    reloaded = coordinator.get_payment(payment.id)
    assert reloaded.amount == Decimal("9999999999.99")
    assert reloaded.platform_commission + reloaded.influencer_payout == reloaded.amount
