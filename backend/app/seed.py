import argparse
import asyncio
import logging
import random
from datetime import date
from typing import Optional, Sequence

from .config import Settings, get_settings
from .database import Database
from .infrastructure.repositories import SqlAlchemyReservationRepository
from .usecases import bookings as booking_usecase
from .utils.dates import parse_booking_date

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Insert random demo reservations around a date.")
    parser.add_argument("--date", type=parse_booking_date, default=None, help="center date, yyyyMMdd (default: today)")
    parser.add_argument("--probability", type=float, default=0.3, help="chance of booking each hour")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    return parser.parse_args(argv)


async def seed(settings: Settings, *, today: date, probability: float, rng: random.Random) -> int:
    database = Database.from_settings(settings)
    try:
        if settings.create_tables:
            await database.create_tables()
        async with database.session_factory() as session:
            async with session.begin():
                created = await booking_usecase.seed_demo_reservations(
                    SqlAlchemyReservationRepository(session),
                    today=today,
                    rng=rng,
                    probability=probability,
                )
    finally:
        await database.dispose()
    return len(created)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    count = asyncio.run(
        seed(
            settings,
            today=args.date or date.today(),
            probability=args.probability,
            rng=random.Random(args.seed),
        )
    )
    logger.info("created %d demo reservations", count)


if __name__ == "__main__":
    main()
