import pytest
from datetime import date

from app.services.scheduling.data_loader import CampaignNotFoundError, load_schedule_context
from app.services.scheduling.generator import generate_schedule


class TestLoadScheduleContext:

    def test_active_stores_in_code_order(self, seeded):
        context = load_schedule_context(seeded, 1)
        assert [s.id for s in context.stores] == [2, 3, 1, 5]
        assert context.stores[0].name == "Central"
        assert context.stores[3].supervisor_id is None

    def test_campaign_range(self, seeded):
        context = load_schedule_context(seeded, 1)
        assert context.campaign_id == 1
        assert context.campaign_start == date(2024, 3, 1)
        assert context.campaign_end == date(2024, 3, 31)

    def test_settings_keyed_by_store(self, seeded):
        context = load_schedule_context(seeded, 1)
        assert set(context.settings) == {1}
        assert context.settings[1].forbidden_days == [6, 7]
        assert context.settings[1].allowed_days == []

    def test_events_limited_to_campaign(self, seeded):
        context = load_schedule_context(seeded, 1)
        assert set(context.blocked_events) == {date(2024, 3, 9), date(2024, 3, 10)}
        assert context.blocked_events[date(2024, 3, 10)].is_blocked is False

    def test_unknown_campaign(self, seeded):
        with pytest.raises(CampaignNotFoundError):
            load_schedule_context(seeded, 99)


class TestGenerateSchedule:

    def test_end_to_end(self, seeded):
        result = generate_schedule(seeded, 1)
        dates = {a.store_id: a.activity_date for a in result.placed}

        assert result.success is True
        assert dates == {
            2: date(2024, 3, 2),   # Central, S1
            3: date(2024, 3, 6),   # Riverside, S1, spread away from 03-02
            1: date(2024, 3, 6),   # Harbour, weekdays only, shares 03-06 with another supervisor
            5: date(2024, 3, 2),   # Outskirts, unassigned
        }
        assert date(2024, 3, 9) not in dates.values()
