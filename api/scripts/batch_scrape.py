"""
Scrape a list of carriers and store them in Neo4j.

Usage:
    python scripts/batch_scrape.py 123456 234567 --safety --insurance
    python scripts/batch_scrape.py --file mc_numbers.txt --dry-run
"""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import settings
from database import db
from repositories.carrier_repository import CarrierRepository, InMemoryCarrierRepository
from services.batch_scrape_service import scrape_carriers_batch

logger = logging.getLogger(__name__)


def load_mc_numbers(args) -> List[str]:
    """Collect MC numbers from the command line and an optional file (one per line)."""
    mc_numbers = list(args.mc_numbers)
    if args.file:
        with open(args.file, "r") as f:
            mc_numbers.extend(line.strip() for line in f if line.strip())
    # Keep order, drop repeats
    return list(dict.fromkeys(mc_numbers))


def main():
    """Main entry point for the batch scrape script."""
    import argparse

    parser = argparse.ArgumentParser(description="Scrape FMCSA carrier profiles in bulk")
    parser.add_argument("mc_numbers", nargs="*", help="MC numbers to scrape")
    parser.add_argument("--file", help="File with one MC number per line")
    parser.add_argument("--safety", action="store_true", help="Also scrape SMS safety profiles")
    parser.add_argument("--insurance", action="store_true", help="Also scrape insurance filings")
    parser.add_argument("--concurrency", type=int, default=settings.batch_concurrency,
                        help="Carriers scraped at once")
    parser.add_argument("--timeout", type=float, default=settings.batch_item_timeout,
                        help="Seconds allowed per carrier")
    parser.add_argument("--dry-run", action="store_true", help="Keep results in memory instead of Neo4j")

    args = parser.parse_args()
    logging.basicConfig(level=getattr(logging, settings.log_level.upper()),
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    mc_numbers = load_mc_numbers(args)
    if not mc_numbers:
        parser.error("No MC numbers given")

    if args.dry_run:
        repository = InMemoryCarrierRepository()
    else:
        db.ensure_schema()
        repository = CarrierRepository()

    results = asyncio.run(scrape_carriers_batch(
        mc_numbers,
        repository=repository,
        concurrency=args.concurrency,
        timeout=args.timeout,
        include_safety=args.safety,
        include_insurance=args.insurance
    ))
    db.close()

    print(json.dumps(results, indent=2))
    return 0 if results["failed"] == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
