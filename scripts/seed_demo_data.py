"""Seed idempotent demo lesson catalogue for local/non-production environments."""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import SessionLocal, close_engine
from app.modules.lessons.repository import LessonsRepository


@dataclass(frozen=True, slots=True)
class DemoLesson:
    topic: str
    location: str
    price: Decimal
    space: int
    icon: str


DEMO_LESSONS = (
    DemoLesson("Math", "Hendon", Decimal("100"), 5, "fa-solid fa-calculator"),
    DemoLesson("Math", "Colindale", Decimal("80"), 5, "fa-solid fa-calculator"),
    DemoLesson("English", "Brent Cross", Decimal("90"), 5, "fa-solid fa-book"),
    DemoLesson("Science", "Golders Green", Decimal("95"), 5, "fa-solid fa-flask"),
    DemoLesson("Music", "Hendon", Decimal("70"), 5, "fa-solid fa-music"),
    DemoLesson("Art", "Mill Hill", Decimal("60"), 5, "fa-solid fa-palette"),
    DemoLesson("Chess", "Colindale", Decimal("50"), 5, "fa-solid fa-chess"),
    DemoLesson("Coding", "Brent Cross", Decimal("120"), 5, "fa-solid fa-code"),
    DemoLesson("Drama", "Golders Green", Decimal("65"), 5, "fa-solid fa-masks-theater"),
    DemoLesson("Football", "Mill Hill", Decimal("55"), 5, "fa-solid fa-futbol"),
)


@dataclass(slots=True)
class SeedStats:
    lessons_created: int = 0
    lessons_existing: int = 0


async def _ensure_lessons(session: AsyncSession, stats: SeedStats) -> None:
    repository = LessonsRepository(session)
    for demo in DEMO_LESSONS:
        existing = await repository.get_lesson_by_topic_and_location(demo.topic, demo.location)
        if existing is not None:
            stats.lessons_existing += 1
            continue
        await repository.create_lesson(
            topic=demo.topic,
            location=demo.location,
            price=demo.price,
            space=demo.space,
            icon=demo.icon,
        )
        stats.lessons_created += 1


async def _run_seed(*, allow_production: bool) -> SeedStats:
    settings = get_settings()
    app_env = settings.app_env.strip().lower()
    if app_env in {"production", "prod"} and not allow_production:
        raise RuntimeError(
            "Refusing to seed demo data in production. "
            "Re-run with --allow-production only if you are absolutely sure.",
        )

    stats = SeedStats()

    async with SessionLocal() as session:
        try:
            await _ensure_lessons(session, stats)
            await session.commit()
        except Exception:
            await session.rollback()
            raise

    return stats


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Seed the idempotent demo lesson catalogue for the after-school storefront.",
    )
    parser.add_argument(
        "--allow-production",
        action="store_true",
        help="Allow seeding even when APP_ENV is production/prod.",
    )
    return parser


def _print_summary(stats: SeedStats) -> None:
    print("Demo seed completed.")
    print(f"- Lessons created: {stats.lessons_created}")
    print(f"- Lessons already present: {stats.lessons_existing}")


def main() -> int:
    parser = _build_parser()
    args = parser.parse_args()

    try:
        stats = asyncio.run(_run_seed(allow_production=args.allow_production))
    except Exception as exc:
        print(f"Demo seed failed: {exc}")
        return 1
    finally:
        asyncio.run(close_engine())

    _print_summary(stats)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
