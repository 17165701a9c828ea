import pytest
from datetime import date

from app.db.models import (
    Campaigns,
    EventDates,
    EventType,
    StoreActivitySettings,
    Stores,
)

from app.services.scheduling.types import (
    BlockedDateEvent,
    ScheduleContext,
    Store,
    StoreActivitySetting,
)


# March 2024 runs Friday 1st to Sunday 31st
MARCH_START = date(2024, 3, 1)
MARCH_END = date(2024, 3, 31)

MARCH_CANDIDATES = [
    date(2024, 3, 2), date(2024, 3, 3), date(2024, 3, 6),
    date(2024, 3, 9), date(2024, 3, 10), date(2024, 3, 13),
    date(2024, 3, 16), date(2024, 3, 17), date(2024, 3, 20),
    date(2024, 3, 23), date(2024, 3, 24), date(2024, 3, 27),
    date(2024, 3, 30), date(2024, 3, 31),
]


@pytest.fixture
def march_candidates() -> list[date]:
    return list(MARCH_CANDIDATES)


@pytest.fixture
def make_context():
    # builds a context over March 2024 unless a range is given
    def _make(stores, settings=None, blocked=None, start=MARCH_START, end=MARCH_END):
        return ScheduleContext(
            campaign_start=start,
            campaign_end=end,
            stores=list(stores),
            settings={s.store_id: s for s in (settings or [])},
            blocked_events={e.event_date: e for e in (blocked or [])},
        )
    return _make


@pytest.fixture
def same_supervisor_stores() -> list[Store]:
    return [
        Store(id=1, name="Store A", supervisor_id="S1"),
        Store(id=2, name="Store B", supervisor_id="S1"),
    ]


@pytest.fixture
def weekend_forbidden() -> StoreActivitySetting:
    return StoreActivitySetting(store_id=1, forbidden_days=[6, 7])


@pytest.fixture
def blocked_march_9() -> BlockedDateEvent:
    return BlockedDateEvent(event_date=date(2024, 3, 9), is_blocked=True, description="Holiday")


@pytest.fixture
def chain_stores() -> list[Store]:
    # 20 stores over 4 supervisors plus two without one
    stores = []
    supervisors = ["S1", "S2", "S3", "S4"]
    for i in range(18):
        stores.append(Store(id=100 + i, name=f"Store {100 + i}", supervisor_id=supervisors[i % 4]))
    stores.append(Store(id=200, name="Store 200", supervisor_id=None))
    stores.append(Store(id=201, name="Store 201", supervisor_id=None))
    return stores


@pytest.fixture
def seeded(db):
    """Five stores (one inactive), a March campaign, one weekday setting and three events."""
    # codes are inserted out of order on purpose
    db.add_all([
        Stores(id=1, store_code="T003", store_name="Harbour", supervisor_id="S2"),
        Stores(id=2, store_code="T001", store_name="Central", supervisor_id="S1"),
        Stores(id=3, store_code="T002", store_name="Riverside", supervisor_id="S1"),
        Stores(id=4, store_code="T004", store_name="Closed", supervisor_id="S2", is_active=False),
        Stores(id=5, store_code="T005", store_name="Outskirts", supervisor_id=None),
    ])
    db.add(Campaigns(id=1, name="Spring Promo", start_date=date(2024, 3, 1), end_date=date(2024, 3, 31)))
    db.add(StoreActivitySettings(store_id=1, allowed_days=None, forbidden_days=[6, 7], notes="Weekdays"))
    db.add_all([
        EventDates(event_date=date(2024, 3, 9), event_type=EventType.HOLIDAY, is_blocked=True),
        EventDates(event_date=date(2024, 3, 10), event_type=EventType.COMPANY_EVENT, is_blocked=False),
        EventDates(event_date=date(2024, 4, 6), event_type=EventType.HOLIDAY, is_blocked=True),
    ])
    db.commit()
    return db
