"""
Operator script to preview or apply a bulk session rearrangement.

Prints the current and the recomputed schedule of a cohort. Nothing is
written unless --apply is given.

Run:
    python -m cohort_backend.scripts.rearrange_sessions \
        --cohort-name "Cohort 1" --start-date 2026-01-19 \
        [--fixed 4=2026-01-26 ...] [--apply]

Dependencies: cohort_backend.application.services, cohort_backend.boundary.db
"""

import argparse
import asyncio
import sys
from datetime import date

from cohort_backend.application.services.rearrangement_service import (
    SessionRearrangementService,
)
from cohort_backend.boundary.db import cohort_session_crud, get_async_engine, get_async_session_factory
from cohort_backend.configs import get_settings
from cohort_backend.core.date_parsing import parse_calendar_date, weekday_name
from cohort_backend.core.exceptions import CohortSchedulerException, InvalidInputError
from cohort_backend.core.schedule_pattern import WeeklyPattern
from cohort_backend.observability.correlation import correlation_scope
from cohort_backend.observability.logger import configure_logging


def parse_fixed_option(values: list[str]) -> dict[int, date] | None:
    """Parse repeated ``N=DATE`` options; None when none were given."""
    if not values:
        return None

    fixed: dict[int, date] = {}
    for value in values:
        number, sep, raw_date = value.partition("=")
        if not sep or not number.strip().isdigit():
            raise InvalidInputError(f"--fixed expects SESSION_NUMBER=DATE, got {value!r}", field="fixed")
        fixed[int(number)] = parse_calendar_date(raw_date, field=f"--fixed {number.strip()}")
    return fixed


async def run(cohort_name: str, start_date: date, fixed_dates: dict[int, date] | None, apply: bool) -> int:
    settings = get_settings()
    session_factory = get_async_session_factory()

    async with session_factory() as db:
        service = SessionRearrangementService(
            db=db,
            pattern=WeeklyPattern(settings.scheduler.working_weekdays),
            default_fixed_dates=settings.scheduler.fixed_session_dates,
        )

        cohort = await service.resolve_cohort(cohort_name=cohort_name)
        print(f"Found cohort: {cohort.name} (ID: {cohort.id})")

        current = await cohort_session_crud.get_by_cohort(db, cohort.id)
        print(f"\nCurrent sessions ({len(current)}):")
        for session in current:
            print(f"  - Session {session.session_number}: {session.session_date} ({weekday_name(session.session_date)})")

        result = await service.rearrange(
            start_date=start_date,
            cohort_id=cohort.id,
            fixed_dates=fixed_dates,
            dry_run=not apply,
        )

    print(f"\nNew schedule starting {start_date.isoformat()}:")
    for entry in result.schedule:
        marker = " [fixed]" if entry.fixed else ""
        print(f"  - Session {entry.session_number}: {entry.session_date.isoformat()} ({entry.day}){marker}")

    if not apply:
        print(f"\nDry run: {len(result.schedule)} sessions not saved. Re-run with --apply to write them.")
        return 0

    print(f"\nSuccessfully rearranged {len(result.schedule)} sessions for {result.cohort_name}")
    print(f"  Start date: {result.start_date.isoformat()}")
    print(f"  End date: {result.end_date.isoformat()}")
    return 0


async def main_async(args: argparse.Namespace) -> int:
    try:
        start_date = parse_calendar_date(args.start_date, field="--start-date")
        fixed_dates = parse_fixed_option(args.fixed)
        return await run(args.cohort_name, start_date, fixed_dates, args.apply)
    except CohortSchedulerException as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        await get_async_engine().dispose()


def main() -> None:
    ap = argparse.ArgumentParser(description="Recompute all session dates of a cohort on the weekly pattern")
    ap.add_argument("--cohort-name", required=True)
    ap.add_argument("--start-date", required=True, help="Date of the first session, e.g. 2026-01-19")
    ap.add_argument(
        "--fixed",
        action="append",
        default=[],
        metavar="N=DATE",
        help="Pin session N to DATE (repeatable); configured fixed dates apply when omitted",
    )
    ap.add_argument("--apply", action="store_true", help="Write the new dates (default: preview only)")
    args = ap.parse_args()

    configure_logging()
    # One correlation ID tags every log line of this run
    with correlation_scope():
        exit_code = asyncio.run(main_async(args))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
