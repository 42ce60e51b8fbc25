"""
Batch Scrape Service.

Scrapes many carriers with bounded concurrency and a timeout per carrier.
Each carrier runs in a worker thread; a failure or timeout is recorded for
that carrier and the rest of the batch continues. A timed-out carrier keeps
its concurrency slot until its thread finishes and is never persisted.
Successful results are optionally written through a carrier repository.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from config import settings
from exceptions import ScraperError
from services.scrape_service import ScrapeService, scrape_summary

logger = logging.getLogger(__name__)


def _persist(repository, summary: Dict) -> None:
    carrier = summary["carrier"]
    repository.upsert(carrier)
    if summary["safety"] is not None:
        repository.update_safety(carrier.dot_number, summary["safety"])
    if summary["insurance"] is not None:
        repository.update_insurance(carrier.dot_number, summary["insurance"].policies)


async def scrape_carriers_batch(
    mc_numbers: List[str],
    service: Optional[ScrapeService] = None,
    repository=None,
    concurrency: Optional[int] = None,
    timeout: Optional[float] = None,
    include_safety: bool = False,
    include_insurance: bool = False
) -> Dict:
    """
    Scrape a list of carriers.

    Args:
        mc_numbers: MC numbers to scrape
        service: ScrapeService to use, a default one is created otherwise
        repository: Optional repository with upsert/update_safety/update_insurance
        concurrency: Maximum carriers in flight, defaults to settings.batch_concurrency
        timeout: Seconds allowed per carrier, defaults to settings.batch_item_timeout
        include_safety: Also scrape the SMS safety profile
        include_insurance: Also scrape insurance filings

    Returns:
        Dictionary with per-carrier results and statistics
    """
    service = service or ScrapeService()
    semaphore = asyncio.Semaphore(concurrency or settings.batch_concurrency)
    timeout = timeout or settings.batch_item_timeout

    start_time = datetime.now(timezone.utc)
    results = {
        "status": "processing",
        "processed": 0,
        "succeeded": 0,
        "failed": 0,
        "carriers": [],
        "errors": [],
        "started_at": start_time.isoformat()
    }

    logger.info(f"Starting batch scrape of {len(mc_numbers)} carriers")

    async def run(mc_number: str) -> None:
        async with semaphore:
            worker = asyncio.ensure_future(asyncio.to_thread(
                scrape_summary, service, mc_number, include_safety, include_insurance
            ))
            try:
                summary = await asyncio.wait_for(asyncio.shield(worker), timeout)
                if repository is not None:
                    await asyncio.to_thread(_persist, repository, summary)
            except asyncio.TimeoutError:
                error = f"Timed out after {timeout}s"
                # A thread cannot be cancelled; hold the slot until it returns
                await asyncio.gather(worker, return_exceptions=True)
            except ScraperError as e:
                error = f"{e.message}: {e.details}" if e.details else e.message
            except Exception as e:
                logger.error(f"Unexpected error scraping MC {mc_number}: {e}", exc_info=True)
                error = str(e)
            else:
                results["succeeded"] += 1
                results["carriers"].append({
                    "mc_number": mc_number,
                    "dot_number": summary["carrier"].dot_number,
                    "legal_name": summary["carrier"].legal_name
                })
                return
            finally:
                results["processed"] += 1

            logger.warning(f"Failed to scrape MC {mc_number}: {error}")
            results["failed"] += 1
            results["errors"].append({"mc_number": mc_number, "error": error})

    await asyncio.gather(*(run(mc_number) for mc_number in mc_numbers))

    end_time = datetime.now(timezone.utc)
    results["status"] = "completed"
    results["completed_at"] = end_time.isoformat()
    results["duration_seconds"] = (end_time - start_time).total_seconds()

    logger.info(
        f"Batch scrape completed: {results['succeeded']} succeeded, "
        f"{results['failed']} failed in {results['duration_seconds']:.1f}s"
    )
    return results
