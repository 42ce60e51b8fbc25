"""
Unit tests for the label/value and checkbox table extractors.
"""

import pytest
from bs4 import BeautifulSoup

from parsers.html_tables import find_marked, find_value_by_label


def soup_of(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


class TestFindValueByLabel:
    """Test suite for find_value_by_label."""

    @pytest.fixture
    def snapshot(self, snapshot_html):
        return soup_of(snapshot_html)

    def test_exact_label(self, snapshot):
        assert find_value_by_label(snapshot, "USDOT Number:") == "3487141"

    def test_value_is_normalized(self, snapshot):
        assert find_value_by_label(snapshot, "Legal Name:") == "ABC TRUCKING LLC"

    def test_label_matches_by_substring(self, snapshot):
        assert find_value_by_label(snapshot, "Authority Status") == "AUTHORIZED FOR Property"

    def test_second_label_in_row(self, snapshot):
        assert find_value_by_label(snapshot, "Drivers:") == "30"
        assert find_value_by_label(snapshot, "MCS-150 Mileage (Year):") == "2,500,000 (2024)"

    def test_missing_label_returns_empty(self, snapshot):
        assert find_value_by_label(snapshot, "Non-CMV Units:") == ""

    def test_empty_value_cell_returns_empty(self, snapshot):
        assert find_value_by_label(snapshot, "DBA Name:") == ""

    def test_address_segments_joined_with_commas(self):
        soup = soup_of(
            "<table><tr><th>Physical Address:</th>"
            "<td>123 MAIN ST<br>DALLAS, TX 75201</td></tr></table>"
        )
        assert find_value_by_label(soup, "Physical Address:") == "123 MAIN ST, DALLAS, TX 75201"

    def test_address_with_nested_tags_and_whitespace(self):
        soup = soup_of(
            "<table><tr><th>Mailing Address:</th>"
            "<td>\n  PO BOX 9 <br/>\n <span>DALLAS,&nbsp;TX</span>  75202\n</td></tr></table>"
        )
        assert find_value_by_label(soup, "Mailing Address:") == "PO BOX 9, DALLAS, TX, 75202"

    def test_address_without_text_falls_back_to_markup(self):
        soup = soup_of("<table><tr><th>Physical Address:</th><td><br/></td></tr></table>")
        assert find_value_by_label(soup, "Physical Address:") == ","

    def test_first_match_in_document_order_wins(self):
        soup = soup_of(
            "<table><tr><td>Phone:</td><td>111</td></tr>"
            "<tr><td>Fax Phone:</td><td>222</td></tr></table>"
        )
        assert find_value_by_label(soup, "Phone:") == "111"

    def test_match_without_value_cell_is_skipped(self):
        soup = soup_of(
            "<table><tr><th>Phone:</th></tr>"
            "<tr><th>Phone:</th><td>(214) 555-0100</td></tr></table>"
        )
        assert find_value_by_label(soup, "Phone:") == "(214) 555-0100"

    def test_next_sibling_must_be_a_data_cell(self):
        soup = soup_of("<table><tr><td>Phone:</td><th>header</th></tr></table>")
        assert find_value_by_label(soup, "Phone:") == ""

    @pytest.mark.parametrize("html", [
        "",
        "<html><body><p>No record found</p></body></html>",
        "<div><span>Legal Name:</span><span>ABC</span></div>",
    ])
    @pytest.mark.parametrize("label", ["Legal Name:", "Physical Address:", "USDOT Number:"])
    def test_documents_without_tables_return_empty(self, html, label):
        assert find_value_by_label(soup_of(html), label) == ""


class TestFindMarked:
    """Test suite for find_marked."""

    def test_marked_labels_in_document_order(self, snapshot_html):
        soup = soup_of(snapshot_html)
        assert find_marked(soup, "Cargo Carried") == ["General Freight", "Building Materials", "General Freight"]

    def test_single_group(self, snapshot_html):
        assert find_marked(soup_of(snapshot_html), "Carrier Operation") == ["Interstate"]

    def test_missing_table_returns_empty_list(self, snapshot_html):
        assert find_marked(soup_of(snapshot_html), "Hazmat Operation") == []

    def test_marker_must_match_exactly(self):
        soup = soup_of(
            '<table summary="Cargo Carried"><tr>'
            '<td>x</td><td>Lowercase</td><td>XX</td><td>Double</td>'
            '<td> X </td><td>Padded</td></tr></table>'
        )
        assert find_marked(soup, "Cargo Carried") == ["Padded"]

    def test_marker_in_last_cell_is_ignored(self):
        soup = soup_of('<table summary="Cargo Carried"><tr><td>Logs</td><td>X</td></tr></table>')
        assert find_marked(soup, "Cargo Carried") == []
