"""
Seed script for StoreOps development database.

- 12 stores across 4 supervisors, one store without a supervisor
- A spring campaign covering March 2024
- Weekday settings for a handful of stores
- Two event dates in March, one of them blocked

Run with: python -m scripts.seed_activity_data
"""

import sys
from datetime import date
from sqlalchemy import delete, text
from app.db.database import SessionLocal, engine
from app.db.models import (
    Base,
    Campaigns,
    CampaignSchedules,
    EventDates,
    EventType,
    StoreActivitySettings,
    Stores,
)


def clear_tables(db):
    """Delete all rows, children first."""
    print("Clearing tables...")

    for model in [CampaignSchedules, StoreActivitySettings, EventDates, Campaigns, Stores]:
        db.execute(delete(model))

    db.commit()
    print("All tables cleared.")


def reset_sequences(db):
    """
    Move Postgres id sequences past the seeded ids.
    SQLite picks the next rowid itself, so there is nothing to do there.
    """
    if db.get_bind().dialect.name != "postgresql":
        print("Sequence reset skipped (not PostgreSQL).")
        return False

    print("Resetting sequences...")

    sequences = [
        ("stores", "stores_id_seq"),
        ("campaigns", "campaigns_id_seq"),
        ("store_activity_settings", "store_activity_settings_id_seq"),
        ("event_dates", "event_dates_id_seq"),
        ("campaign_schedules", "campaign_schedules_id_seq"),
    ]

    for table, seq in sequences:
        db.execute(text(f"SELECT setval('{seq}', (SELECT COALESCE(MAX(id), 1) FROM {table}));"))

    db.commit()
    print("Sequences reset.")
    return True


def seed_stores(db):
    """Seed 12 stores. Store code order is the auto-schedule priority."""
    print("Seeding stores...")

    stores = [
        Stores(id=1, store_code="ST001", store_name="Central Square", short_name="Central", supervisor_id="SUP-A"),
        Stores(id=2, store_code="ST002", store_name="Riverside Mall", short_name="Riverside", supervisor_id="SUP-A"),
        Stores(id=3, store_code="ST003", store_name="Harbour Front", short_name="Harbour", supervisor_id="SUP-A"),
        Stores(id=4, store_code="ST004", store_name="North Gate", short_name="North", supervisor_id="SUP-B"),
        Stores(id=5, store_code="ST005", store_name="Old Town", short_name="Old Town", supervisor_id="SUP-B"),
        Stores(id=6, store_code="ST006", store_name="Station Road", short_name="Station", supervisor_id="SUP-B"),
        Stores(id=7, store_code="ST007", store_name="Airport Terminal", short_name="Airport", supervisor_id="SUP-C"),
        Stores(id=8, store_code="ST008", store_name="University Park", short_name="Uni", supervisor_id="SUP-C"),
        Stores(id=9, store_code="ST009", store_name="West End", short_name="West", supervisor_id="SUP-D"),
        Stores(id=10, store_code="ST010", store_name="East Market", short_name="East", supervisor_id="SUP-D"),
        Stores(id=11, store_code="ST011", store_name="Lakeside Outlet", short_name="Lakeside", supervisor_id=None),
        Stores(id=12, store_code="ST012", store_name="Closed Kiosk", short_name="Kiosk", supervisor_id="SUP-D", is_active=False),
    ]

    db.add_all(stores)
    db.commit()
    print(f"Seeded {len(stores)} stores.")


def seed_campaigns(db):
    """Seed 1 campaign for March 2024."""
    print("Seeding campaigns...")

    campaign = Campaigns(
        id=1,
        name="Spring Tasting Week",
        start_date=date(2024, 3, 1),
        end_date=date(2024, 3, 31),
    )

    db.add(campaign)
    db.commit()
    print("Seeded 1 campaign.")


def seed_activity_settings(db):
    """
    Weekday settings (ISO weekdays, 1=Mon ... 7=Sun):
    - Harbour Front: no weekends (mall is closed)
    - Airport Terminal: Sundays only
    - University Park: Wednesdays and Saturdays
    """
    print("Seeding store activity settings...")

    settings = [
        StoreActivitySettings(store_id=3, forbidden_days=[6, 7], notes="Closed at weekends"),
        StoreActivitySettings(store_id=7, allowed_days=[7], notes="Quiet on Sundays only"),
        StoreActivitySettings(store_id=8, allowed_days=[3, 6]),
    ]

    db.add_all(settings)
    db.commit()
    print(f"Seeded {len(settings)} store activity settings.")


def seed_event_dates(db):
    """Seed 2 event dates. Only the holiday blocks scheduling."""
    print("Seeding event dates...")

    events = [
        EventDates(
            event_date=date(2024, 3, 9),
            description="Regional holiday",
            event_type=EventType.HOLIDAY,
            is_blocked=True,
        ),
        EventDates(
            event_date=date(2024, 3, 17),
            description="Supplier visit",
            event_type=EventType.COMPANY_EVENT,
            is_blocked=False,
        ),
    ]

    db.add_all(events)
    db.commit()
    print(f"Seeded {len(events)} event dates.")


def main():
    """Main seed function."""
    print("\n" + "="*50)
    print("StoreOps Database Seeder")
    print("="*50 + "\n")

    response = input("This will DELETE ALL EXISTING DATA. Continue? (yes/no): ")
    if response.lower() != "yes":
        print("Aborted.")
        sys.exit(0)

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    try:
        clear_tables(db)

        seed_stores(db)
        seed_campaigns(db)
        seed_activity_settings(db)
        seed_event_dates(db)

        reset_sequences(db)

        print("\n" + "="*50)
        print("Seeding complete!")
        print("="*50)
        print("\nCampaign 1: Spring Tasting Week (2024-03-01 to 2024-03-31)")
        print("  11 active stores, 4 supervisors + 1 unassigned")
        print("  2024-03-09 is blocked")
        print("\nPreview with: POST /api/v1/campaigns/1/auto-schedule")
        print("="*50 + "\n")

    except Exception as e:
        db.rollback()
        print(f"\nError during seeding: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
