"""
CLI for inspecting and editing a booking-sync store.

Usage:
    python -m booking_sync.cli init
    python -m booking_sync.cli cases --search zhang
    python -m booking_sync.cli book "Zhao Liu" 13600136004 2025-11-13 14:00-15:00
    python -m booking_sync.cli cancel APT-1A2B3C
    python -m booking_sync.cli slots --date 2025-11-13
    python -m booking_sync.cli stats --storage-dir /tmp/bookings
"""

import argparse
import dataclasses
import json
import logging
import sys
from typing import Any, Optional

from booking_sync.config import settings
from booking_sync.data_sync import DataSync, create_data_sync

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Inspect and edit the case / appointment data store."
    )
    parser.add_argument(
        "--storage-dir",
        type=str,
        default=None,
        help="Use the local backend in this directory instead of the configured backend.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging output.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init", help="Seed any empty collection with sample data.")

    cases = sub.add_parser("cases", help="List cases.")
    cases.add_argument("--search", type=str, default=None, help="Filter by name or phone.")

    sub.add_parser("appointments", help="List all appointments, cancelled included.")

    slots = sub.add_parser("slots", help="Show booked slots.")
    slots.add_argument("--date", type=str, default=None, help="Only this date (YYYY-MM-DD).")

    sub.add_parser("stats", help="Show dashboard counters.")

    book = sub.add_parser("book", help="Book an appointment.")
    book.add_argument("name")
    book.add_argument("phone")
    book.add_argument("date", help="YYYY-MM-DD")
    book.add_argument("time", help="HH:MM-HH:MM")
    book.add_argument("--display-date", type=str, default="")

    cancel = sub.add_parser("cancel", help="Cancel an appointment by id.")
    cancel.add_argument("appointment_id")

    sub.add_parser("reconcile", help="Rebuild the slot index from appointments.")
    return parser


def _emit(value: Any) -> None:
    if hasattr(value, "model_dump"):
        value = value.model_dump(mode="json", by_alias=True)
    elif isinstance(value, list):
        value = [v.model_dump(mode="json", by_alias=True) if hasattr(v, "model_dump") else v
                 for v in value]
    sys.stdout.write(json.dumps(value, indent=2, ensure_ascii=False) + "\n")


def _run(sync: DataSync, args: argparse.Namespace) -> int:
    if args.command == "init":
        sync.initialize(seed=True)
        return 0
    if args.command == "cases":
        _emit(sync.cases.search(args.search))
        return 0
    if args.command == "appointments":
        _emit(sync.appointments.get_all())
        return 0
    if args.command == "slots":
        if args.date:
            _emit(sync.appointments.get_booked_slots_for(args.date))
        else:
            _emit(sync.appointments.get_booked_slots())
        return 0
    if args.command == "stats":
        stats = sync.statistics
        _emit({
            "total_appointments": stats.total_appointments(),
            "active_appointments": stats.active_appointment_count(),
            "approved_cases": stats.approved_case_count(),
            "pending_cases": stats.pending_case_count(),
            "rejected_cases": stats.rejected_case_count(),
        })
        return 0
    if args.command == "book":
        booked = sync.appointments.add({
            "name": args.name,
            "phone": args.phone,
            "date": args.date,
            "time": args.time,
            "displayDate": args.display_date,
        })
        if booked is None:
            logger.error("Booking failed for %s (%s)", args.name, args.phone)
            return 1
        _emit(booked)
        return 0
    if args.command == "cancel":
        cancelled = sync.appointments.cancel(args.appointment_id)
        if cancelled is None:
            logger.error("No active appointment %s", args.appointment_id)
            return 1
        _emit(cancelled)
        return 0
    if args.command == "reconcile":
        _emit(sync.appointments.reconcile_slots())
        return 0
    raise ValueError(f"Unhandled command {args.command!r}")


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    config = settings
    if args.storage_dir:
        config = dataclasses.replace(
            settings,
            storage=dataclasses.replace(settings.storage, backend="local", directory=args.storage_dir),
        )

    sync = create_data_sync(config, initialize=False)
    return _run(sync, args)


if __name__ == "__main__":
    sys.exit(main())
