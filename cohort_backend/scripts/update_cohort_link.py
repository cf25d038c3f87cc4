"""
Operator script to set one video call link on every session of a cohort.

Run:
    python -m cohort_backend.scripts.update_cohort_link \
        --cohort-name "Cohort 1" --link https://meet.example.com/abc

Dependencies: cohort_backend.application.services, cohort_backend.boundary.db
"""

import argparse
import asyncio
import sys

from cohort_backend.application.services.cohort_session_service import CohortSessionService
from cohort_backend.boundary.db import get_async_engine, get_async_session_factory
from cohort_backend.core.exceptions import CohortSchedulerException
from cohort_backend.observability.correlation import correlation_scope
from cohort_backend.observability.logger import configure_logging


async def run(cohort_name: str, link: str) -> int:
    session_factory = get_async_session_factory()

    async with session_factory() as db:
        outcome = await CohortSessionService(db).update_cohort_link(cohort_name, link)

    print(f"Updated {outcome['sessions_updated']} sessions for {outcome['cohort_name']}")
    print(f"  Cohort ID: {outcome['cohort_id']}")
    print(f"  Link: {link.strip()}")
    return 0


async def main_async(args: argparse.Namespace) -> int:
    try:
        return await run(args.cohort_name, args.link)
    except CohortSchedulerException as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        await get_async_engine().dispose()


def main() -> None:
    ap = argparse.ArgumentParser(description="Set the video call link on every session of a cohort")
    ap.add_argument("--cohort-name", required=True)
    ap.add_argument("--link", required=True, help="Video call URL")
    args = ap.parse_args()

    configure_logging()
    # One correlation ID tags every log line of this run
    with correlation_scope():
        exit_code = asyncio.run(main_async(args))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
