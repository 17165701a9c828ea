import pytest
from datetime import date

from app.db.models import CampaignSchedules
from app.services.scheduling.persistence import (
    CapacityExceededError,
    count_on_date,
    delete_schedule,
    replace_campaign_schedules,
    save_assignments,
    upsert_assignment,
)
from app.services.scheduling.types import ScheduleAssignment


class TestUpsertAssignment:

    def test_creates_then_moves(self, seeded):
        row = upsert_assignment(seeded, 1, 2, date(2024, 3, 2))
        seeded.commit()
        moved = upsert_assignment(seeded, 1, 2, date(2024, 3, 6))
        seeded.commit()

        assert moved.id == row.id
        assert seeded.query(CampaignSchedules).count() == 1
        assert moved.activity_date == date(2024, 3, 6)

    def test_enforces_capacity(self, seeded):
        upsert_assignment(seeded, 1, 1, date(2024, 3, 2), max_per_day=2)
        upsert_assignment(seeded, 1, 2, date(2024, 3, 2), max_per_day=2)
        with pytest.raises(CapacityExceededError):
            upsert_assignment(seeded, 1, 3, date(2024, 3, 2), max_per_day=2)

    def test_same_store_on_full_date(self, seeded):
        upsert_assignment(seeded, 1, 1, date(2024, 3, 2), max_per_day=2)
        upsert_assignment(seeded, 1, 2, date(2024, 3, 2), max_per_day=2)
        # re-saving a store already on the date does not count against it
        upsert_assignment(seeded, 1, 2, date(2024, 3, 2), max_per_day=2)
        assert count_on_date(seeded, 1, date(2024, 3, 2)) == 2


class TestBulkWrites:

    def test_save_assignments_upserts(self, seeded):
        save_assignments(seeded, 1, [
            ScheduleAssignment(store_id=1, activity_date=date(2024, 3, 6)),
            ScheduleAssignment(store_id=2, activity_date=date(2024, 3, 2)),
        ])
        save_assignments(seeded, 1, [ScheduleAssignment(store_id=1, activity_date=date(2024, 3, 13))])
        seeded.commit()

        rows = {r.store_id: r.activity_date for r in seeded.query(CampaignSchedules).all()}
        assert rows == {1: date(2024, 3, 13), 2: date(2024, 3, 2)}

    def test_replace_drops_previous_rows(self, seeded):
        upsert_assignment(seeded, 1, 3, date(2024, 3, 3))
        seeded.commit()

        replace_campaign_schedules(seeded, 1, [
            ScheduleAssignment(store_id=1, activity_date=date(2024, 3, 6)),
        ])
        seeded.commit()

        rows = seeded.query(CampaignSchedules).all()
        assert [(r.store_id, r.activity_date) for r in rows] == [(1, date(2024, 3, 6))]


class TestDeleteSchedule:

    def test_delete_twice(self, seeded):
        schedule_id = upsert_assignment(seeded, 1, 3, date(2024, 3, 3)).id
        seeded.commit()

        assert delete_schedule(seeded, schedule_id) is True
        assert delete_schedule(seeded, schedule_id) is False
