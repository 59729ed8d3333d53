import argparse

from petdesk.config import get_settings
from petdesk.core.logging import setup_logging
from petdesk.database import Base, engine, session_scope
from petdesk.models import import_all_models
from petdesk.services.seed_service import clear_data, seed_mock_data


def parse_args():
    parser = argparse.ArgumentParser(description="Seed demo pet store data.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing data before seeding.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()
    settings = get_settings()

    import_all_models()
    Base.metadata.create_all(bind=engine)

    with session_scope() as db:
        if args.reset:
            clear_data(db)
        if seed_mock_data(db, bank_commission=settings.BANK_COMMISSION_PERCENT):
            print("Seed data created.")
        else:
            print("Seed skipped: products already exist.")


if __name__ == "__main__":
    main()
