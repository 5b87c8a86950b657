"""
Setup database for EventManagement - creates every table for DATABASE_URL
"""

import argparse
import asyncio

from eventmgmt.config import settings
from eventmgmt.core.database import close_db, drop_db, init_db
from eventmgmt.core.logging import get_logger, setup_logging

logger = get_logger("eventmgmt.setup")


async def create_schema(recreate: bool = False) -> bool:
    """Create all tables, dropping existing ones first when asked"""
    try:
        if recreate:
            await drop_db()
            print("[OK] Existing tables dropped.")
        await init_db()
        print("[OK] Tables created (venues, organizers, events, registrations).")
    except Exception as e:
        logger.exception("Schema creation failed")
        print(f"[ERROR] Database error: {e}")
        return False
    finally:
        await close_db()

    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the event management tables")
    parser.add_argument("--recreate", action="store_true", help="drop existing tables first")
    args = parser.parse_args()
    setup_logging()

    print("\n>>> EventManagement Database Setup")
    print("-" * 40)
    print(f"Database: {settings.DATABASE_URL}")

    if asyncio.run(create_schema(recreate=args.recreate)):
        print("\n[OK] Database setup completed!")
        print("\nNext step: python seed_data.py")
    else:
        print("\n[ERROR] Database setup failed!")
        print("Please check DATABASE_URL and that the server is reachable.")
        raise SystemExit(1)
