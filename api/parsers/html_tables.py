"""
Extractors for label/value table layouts.

Registry pages do not name their fields; a value lives in the cell next to a
cell holding its label, and boolean flags are rendered as an "X" cell next to
the flag's label. Both extractors take an already-parsed BeautifulSoup
document and return empty values instead of raising when nothing matches.
"""

import re
from typing import List

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from utils.text import clean_text

MARKER = "X"

_BR_TAG = re.compile(r"<br\s*/?>", re.IGNORECASE)


def _address_value(cell: Tag) -> str:
    """Join the text segments of an address cell with commas."""
    parts = []
    for node in cell.contents:
        if isinstance(node, Comment):
            continue
        if isinstance(node, NavigableString):
            text = clean_text(str(node))
        elif node.name == "br":
            continue
        else:
            text = clean_text(node.get_text())
        if text:
            parts.append(text)

    value = ", ".join(parts)
    if not value:
        value = clean_text(_BR_TAG.sub(", ", cell.decode_contents()))
    return value


def find_value_by_label(soup: BeautifulSoup, label: str) -> str:
    """Return the value of the first cell whose text contains `label`.

    Cells are scanned in document order. The value is read from the `td`
    directly following the matching cell; a match without such a sibling is
    skipped. Labels containing "Address" are read in address mode, which
    turns line breaks into ", " separators.

    Args:
        soup: Parsed document
        label: Label text, e.g. "Legal Name:"

    Returns:
        str: The normalized value, or "" when no labelled value exists
    """
    for cell in soup.find_all(["th", "td"]):
        if label not in clean_text(cell.get_text()):
            continue

        value_cell = cell.find_next_sibling()
        if value_cell is None or value_cell.name != "td":
            continue

        if "Address" in label:
            return _address_value(value_cell)
        return clean_text(value_cell.get_text())

    return ""


def find_marked(soup: BeautifulSoup, summary: str) -> List[str]:
    """Return the labels of the marked checkboxes in a summary table.

    Args:
        soup: Parsed document
        summary: Value of the table's summary attribute, e.g. "Cargo Carried"

    Returns:
        list: Labels following each "X" cell, in document order
    """
    marked = []
    for table in soup.find_all("table", attrs={"summary": summary}):
        for cell in table.find_all("td"):
            if clean_text(cell.get_text()) != MARKER:
                continue
            label_cell = cell.find_next_sibling()
            if label_cell is not None:
                marked.append(clean_text(label_cell.get_text()))
    return marked
