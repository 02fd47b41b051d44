from datetime import timedelta

import pytest

from wellness.core.errors import InvalidInput, NotFound
from wellness.schemas.followup import FollowupFields
from wellness.services.followup_lifecycle import FollowupLifecycle, is_overdue, normalize_status
from wellness.utils.timezone import utcnow

from tests.conftest import add_followup


def test_create_defaults_to_pending(db):
    lifecycle = FollowupLifecycle(db)
    followup = lifecycle.create(FollowupFields(scheduled_at=utcnow()), company_id=1, client_id=7)

    assert followup.id is not None
    assert followup.status == "pending"
    assert followup.completed_at is None
    assert followup.notes == ""


def test_create_requires_both_ids(db):
    with pytest.raises(InvalidInput) as exc:
        FollowupLifecycle(db).create(FollowupFields(), company_id=1, client_id=None)
    assert exc.value.error == "company_id and client_id are required"


def test_create_rejects_unknown_status(db):
    with pytest.raises(InvalidInput):
        FollowupLifecycle(db).create(FollowupFields(status="cancelled"), company_id=1, client_id=1)


def test_create_as_done_stamps_completion(db):
    followup = FollowupLifecycle(db).create(FollowupFields(status="DONE"), company_id=1, client_id=1)

    assert followup.status == "done"
    assert followup.completed_at is not None


def test_stale_pending_followup_is_overdue_until_done(db):
    lifecycle = FollowupLifecycle(db)
    followup = lifecycle.create(
        FollowupFields(scheduled_at=utcnow() - timedelta(hours=50)), company_id=1, client_id=1
    )
    assert lifecycle.present(followup).overdue is True

    updated = lifecycle.update_status(followup.id, "done")

    assert lifecycle.present(updated).overdue is False
    assert updated.completed_at is not None


def test_recent_pending_followup_is_not_overdue(db):
    followup = add_followup(db, 1, 1, hours_from_now=-47)

    assert is_overdue(followup) is False


def test_legacy_date_counts_when_scheduled_at_missing(db):
    followup = add_followup(db, 1, 1, hours_from_now=-72, legacy_date=True)

    assert followup.scheduled_at is None
    assert followup.effective_scheduled_at == followup.followup_date
    assert is_overdue(followup) is True


def test_scheduled_at_wins_over_legacy_date(db):
    followup = add_followup(db, 1, 1, hours_from_now=24)
    followup.followup_date = utcnow() - timedelta(days=10)
    db.commit()

    assert followup.effective_scheduled_at == followup.scheduled_at
    assert is_overdue(followup) is False


def test_undated_followup_is_never_overdue(db):
    followup = add_followup(db, 1, 1)

    assert is_overdue(followup) is False


def test_reached_out_is_not_overdue(db):
    followup = add_followup(db, 1, 1, hours_from_now=-100, status="reached_out")

    assert is_overdue(followup) is False


def test_status_is_a_flat_overwrite(db):
    lifecycle = FollowupLifecycle(db)
    followup = add_followup(db, 1, 1, hours_from_now=-1)

    assert lifecycle.update_status(followup.id, "reached_out").completed_at is None
    assert lifecycle.update_status(followup.id, "done").completed_at is not None
    reopened = lifecycle.update_status(followup.id, "pending")
    assert reopened.status == "pending"
    assert reopened.completed_at is None


def test_update_status_validates_status(db):
    followup = add_followup(db, 1, 1)

    with pytest.raises(InvalidInput) as exc:
        FollowupLifecycle(db).update_status(followup.id, "archived")
    assert exc.value.error == "Invalid status"


def test_update_status_unknown_id(db):
    with pytest.raises(NotFound):
        FollowupLifecycle(db).update_status(9999, "done")


def test_overdue_window_is_configurable(db):
    followup = add_followup(db, 1, 1, hours_from_now=-5)
    lifecycle = FollowupLifecycle(db, overdue_after_hours=4)

    assert lifecycle.present(followup).overdue is True


def test_normalize_status():
    assert normalize_status(None) == "pending"
    assert normalize_status("  ") == "pending"
    assert normalize_status("Reached_Out") == "reached_out"
    assert normalize_status("closed") is None
