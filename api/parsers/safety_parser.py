"""
Parser for the SMS carrier complete profile page.
"""

from bs4 import BeautifulSoup

from models.safety_profile import BASIC_CATEGORIES, BasicScore, OosRate, SafetyProfile
from utils.text import clean_text


def _rating_date(soup: BeautifulSoup) -> str:
    element = soup.find(id="RatingDate")
    if element is None:
        return "N/A"
    text = clean_text(element.get_text())
    return text.replace("Rating Date:", "", 1).replace("(", "", 1).replace(")", "", 1).strip()


def _basic_scores(soup: BeautifulSoup) -> list:
    row = soup.find("tr", class_="sumData")
    if row is None:
        return []

    scores = []
    for category, cell in zip(BASIC_CATEGORIES, row.find_all("td")):
        value = cell.find("span", class_="val")
        measure = clean_text((value if value is not None else cell).get_text())
        scores.append(BasicScore(category=category, measure=measure or "0"))
    return scores


def _oos_rates(soup: BeautifulSoup) -> list:
    container = soup.find(id="SafetyRating")
    if container is None:
        return []
    table = container.find("table")
    if table is None:
        return []

    # html.parser does not add implied <tbody>; treat rows outside <thead> as body rows
    bodies = table.find_all("tbody")
    if bodies:
        rows = [row for body in bodies for row in body.find_all("tr")]
    else:
        rows = [row for row in table.find_all("tr") if row.find_parent("thead") is None]

    rates = []
    for row in rows:
        cols = row.find_all(["th", "td"])
        if len(cols) < 3:
            continue
        rates.append(OosRate(
            type=clean_text(cols[0].get_text()),
            rate=clean_text(cols[1].get_text()),
            national_avg=clean_text(cols[2].get_text())
        ))
    return rates


def parse_safety_profile(html: str) -> SafetyProfile:
    """Extract rating, BASIC measures and OOS rates from an SMS profile page.

    BASIC measures are matched to categories by column position in the
    summary row. Missing sections leave their defaults ("N/A" or []).
    """
    soup = BeautifulSoup(html, "html.parser")

    rating_element = soup.find(id="Rating")
    return SafetyProfile(
        rating=clean_text(rating_element.get_text()) if rating_element is not None else "N/A",
        rating_date=_rating_date(soup),
        basic_scores=_basic_scores(soup),
        oos_rates=_oos_rates(soup)
    )
