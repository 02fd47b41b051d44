#!/usr/bin/env python3
"""
Seed the companies table.

Names come from the command line and/or a text file with one name per line.
Existing names (case-insensitive) are skipped, so the script can be re-run.

    python scripts/seed_companies.py "Acme Corp" "Globex"
    python scripts/seed_companies.py --file companies.txt
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from wellness import crud  # noqa: E402
from wellness.db.session import SessionLocal  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("seed_companies")


def read_names(args) -> list:
    names = list(args.names)
    if args.file:
        names.extend(line.strip() for line in Path(args.file).read_text(encoding="utf-8").splitlines())
    return [n for n in names if n]


def main() -> int:
    parser = argparse.ArgumentParser(description="Insert missing companies")
    parser.add_argument("names", nargs="*", help="company names")
    parser.add_argument("--file", help="text file with one company name per line")
    args = parser.parse_args()

    names = read_names(args)
    if not names:
        parser.error("no company names given")

    db = SessionLocal()
    try:
        created = crud.company.seed(db, names=names)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"❌ Seeding failed: {e}")
        return 1
    finally:
        db.close()

    for company in created:
        logger.info(f"✅ {company.company_id}: {company.name}")
    logger.info(f"{len(created)} created, {len(names) - len(created)} already present")
    return 0


if __name__ == "__main__":
    sys.exit(main())
