"""
Parser for the FMCSA daily register.

The register page has drifted between layouts over time, so entries are
pulled by an ordered list of independent strategies. Each strategy is a pure
function from a parsed document to a (possibly empty) list of entries; the
first strategy that finds anything wins and the rest are not run:

1. scan_table_rows      - every table row with 3+ cells
2. scan_document_order  - element walk tracking the nearest section heading
3. scan_flat_text       - regex over the page's text, line by line

The winning list is de-duplicated on (number, title).
"""

import logging
import re
from typing import Callable, Iterable, List, Optional, Sequence

from bs4 import BeautifulSoup, Tag

from models.register_entry import RegisterCategory, RegisterEntry
from utils.text import clean_text

logger = logging.getLogger(__name__)

DOCKET_PREFIXES = ("MC-", "FF-", "MX-")
CATEGORY_LABELS = tuple(category.value for category in RegisterCategory)

_DOCKET = re.compile(r"(MC-\d+|FF-\d+|MX-\d+)")
_TITLE = re.compile(r"(?:MC-\d+|FF-\d+|MX-\d+)\s+(.+?)(?:\d{2}/\d{2}/\d{4}|$)")
_DATE = re.compile(r"(\d{2}/\d{2}/\d{4})")

Strategy = Callable[[BeautifulSoup], List[RegisterEntry]]


def classify_category(context: str) -> str:
    """Return the first register category (in priority order) named in `context`.

    Args:
        context: Text surrounding an entry

    Returns:
        str: One of the nine category labels, MISCELLANEOUS when none appears
    """
    for label in CATEGORY_LABELS:
        if label in context:
            return label
    return RegisterCategory.MISCELLANEOUS.value


def has_docket_prefix(number: str) -> bool:
    return any(prefix in number for prefix in DOCKET_PREFIXES)


def dedupe_entries(entries: Iterable[RegisterEntry]) -> List[RegisterEntry]:
    """Keep the first entry for each (number, title) pair, preserving order."""
    seen = set()
    unique = []
    for entry in entries:
        key = (entry.number, entry.title)
        if key in seen:
            continue
        seen.add(key)
        unique.append(entry)
    return unique


def _row_cells(row: Tag) -> Optional[List[str]]:
    cells = row.find_all("td")
    if len(cells) < 3:
        return None
    return [clean_text(cell.get_text()) for cell in cells[:3]]


def scan_table_rows(soup: BeautifulSoup) -> List[RegisterEntry]:
    """Strategy 1: read number/title/decided from the first three cells of table rows.

    The category comes from the text of every row above the entry in the
    same table, classified in priority order. A heading far above the row
    can therefore win over a nearer one; scan_document_order tracks the
    nearest heading instead.
    """
    entries = []
    for table in soup.find_all("table"):
        for row in table.find_all("tr"):
            cells = _row_cells(row)
            if cells is None:
                continue
            number, title, decided = cells
            if not (has_docket_prefix(number) and title and decided):
                continue

            preceding = " ".join(
                sibling.get_text() for sibling in reversed(row.find_previous_siblings())
            )
            entries.append(RegisterEntry(
                number=number,
                title=title,
                decided=decided,
                category=classify_category(preceding)
            ))
    return entries


def scan_document_order(soup: BeautifulSoup) -> List[RegisterEntry]:
    """Strategy 2: walk all elements, tagging rows with the last heading seen.

    A heading is any element whose whole text is exactly a category label.
    Rows without a decided date are kept with decided "N/A".
    """
    root = soup.body or soup
    current = RegisterCategory.MISCELLANEOUS.value
    entries = []

    for element in root.find_all(True):
        text = clean_text(element.get_text())
        if text in CATEGORY_LABELS:
            current = text
            continue
        if element.name != "tr":
            continue

        cells = _row_cells(element)
        if cells is None:
            continue
        number, title, decided = cells
        if has_docket_prefix(number) and title:
            entries.append(RegisterEntry(
                number=number,
                title=title,
                decided=decided or "N/A",
                category=current
            ))
    return entries


def scan_flat_text(soup: BeautifulSoup) -> List[RegisterEntry]:
    """Strategy 3: find docket numbers in the page text line by line.

    The title is whatever follows the docket number up to the first
    MM/DD/YYYY date or the end of the line.
    """
    root = soup.body or soup
    current = RegisterCategory.MISCELLANEOUS.value
    entries = []

    for raw_line in root.get_text().split("\n"):
        line = raw_line.strip()

        for label in CATEGORY_LABELS:
            if label in line:
                current = label
                break

        docket = _DOCKET.search(line)
        if docket is None:
            continue
        title = _TITLE.search(line)
        if title is None or not title.group(1).strip():
            continue
        decided = _DATE.search(line)

        entries.append(RegisterEntry(
            number=docket.group(1),
            title=title.group(1).strip(),
            decided=decided.group(1) if decided else "N/A",
            category=current
        ))
    return entries


DEFAULT_STRATEGIES = (scan_table_rows, scan_document_order, scan_flat_text)


def parse_register(html: str, strategies: Sequence[Strategy] = DEFAULT_STRATEGIES) -> List[RegisterEntry]:
    """Parse register entries from the register page.

    Args:
        html: Register page body
        strategies: Extraction strategies in fallback order

    Returns:
        list: De-duplicated entries from the first strategy that found any,
        or [] if none did
    """
    soup = BeautifulSoup(html, "html.parser")

    for strategy in strategies:
        entries = strategy(soup)
        if entries:
            logger.info(f"Register strategy {getattr(strategy, '__name__', strategy)} found {len(entries)} entries")
            return dedupe_entries(entries)

    logger.info("No register entries found by any strategy")
    return []
