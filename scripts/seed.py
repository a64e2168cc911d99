"""Database seeder for local development of the subscription service."""
import argparse
import asyncio
import time

from subscription_service.config import settings
from subscription_service.database import Base, build_engine, build_session_factory
from subscription_service.seeds import seed_subscriptions


async def seed(reset: bool = False):
    start = time.perf_counter()
    engine = build_engine(settings)

    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with build_session_factory(engine)() as session:
        added = await seed_subscriptions(session)
        await session.commit()

    await engine.dispose()

    elapsed = time.perf_counter() - start
    if added:
        print(f"Seeding complete in {elapsed:.1f}s: {added} subscriptions added")
    else:
        print("Table already contains data, nothing seeded (use --reset to start over)")


def main():
    parser = argparse.ArgumentParser(description="Seed the subscriptions database")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate the table first")
    args = parser.parse_args()
    asyncio.run(seed(reset=args.reset))


if __name__ == "__main__":
    main()
