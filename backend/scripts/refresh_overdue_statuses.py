from __future__ import annotations

import argparse
import logging
from datetime import date

from finboard.database import SessionLocal
from finboard.services.installments_service import refresh_overdue_statuses


def _parse_iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("Invalid date, expected YYYY-MM-DD") from exc


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Mark open installments whose due date has passed as overdue."
    )
    parser.add_argument("--as-of", type=_parse_iso_date, default=date.today())
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    db = SessionLocal()
    try:
        updated = refresh_overdue_statuses(db, args.as_of)
    finally:
        db.close()

    print(f"as_of={args.as_of.isoformat()} updated={updated}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
