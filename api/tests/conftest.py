"""
Shared pytest configuration for all tests.
Sets up test settings and common fixtures.
"""
import os
import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load test environment variables before any imports
from dotenv import load_dotenv

# Load test-specific environment variables
test_env_path = Path(__file__).parent.parent / ".env.test"
if test_env_path.exists():
    load_dotenv(test_env_path, override=True)
else:
    # Fallback to hardcoded test values if .env.test doesn't exist
    os.environ["API_KEY"] = "test-api-key"
    os.environ.pop("NEO4J_PASSWORD", None)
    os.environ.pop("LOG_FILE", None)


SNAPSHOT_HTML = """
<html><body>
<center>
<table>
  <tr><th>Entity Type:</th><td>CARRIER</td></tr>
  <tr><th>Operating Authority Status:</th><td>AUTHORIZED FOR Property</td></tr>
  <tr><th>Legal Name:</th><td>ABC&nbsp;TRUCKING   LLC</td></tr>
  <tr><th>DBA Name:</th><td></td></tr>
  <tr><th>Physical Address:</th><td>123 MAIN ST<br>DALLAS, TX 75201</td></tr>
  <tr><th>Phone:</th><td>(214) 555-0100</td></tr>
  <tr><th>Mailing Address:</th><td>PO BOX 9<br/>DALLAS, TX 75202</td></tr>
  <tr><th>USDOT Number:</th><td>3487141</td><th>State Carrier ID Number:</th><td></td></tr>
  <tr><th>Power Units:</th><td>25</td><th>Drivers:</th><td>30</td></tr>
  <tr><th>MCS-150 Form Date:</th><td>01/15/2025</td><th>MCS-150 Mileage (Year):</th><td>2,500,000 (2024)</td></tr>
</table>
<table summary="Operation Classification">
  <tr><td class="queryfield">X</td><td>Auth. For Hire</td><td></td><td>Exempt For Hire</td></tr>
</table>
<table summary="Carrier Operation">
  <tr><td>X</td><td>Interstate</td><td></td><td>Intrastate Only (HM)</td></tr>
</table>
<table summary="Cargo Carried">
  <tr><td>X</td><td>General Freight</td><td></td><td>Household Goods</td></tr>
  <tr><td>X</td><td>Building Materials</td><td>X</td><td>General Freight</td></tr>
</table>
</center>
</body></html>
"""

REGISTRATION_HTML = """
<html><body>
<ul>
  <li><label>Legal Name:</label> ABC TRUCKING LLC</li>
  <li><label>Email:</label> <a href="/cdn-cgi/l/email-protection" class="__cf_email__"
      data-cfemail="422b2c242d022320216c212d2f">[email&#160;protected]</a></li>
</ul>
</body></html>
"""

SAFETY_HTML = """
<html><body>
<div id="Rating">Satisfactory</div>
<div id="RatingDate">Rating Date: (06/12/2019)</div>
<table>
  <tr class="sumData">
    <td><span class="val">45.2</span> measure</td>
    <td>12.1</td>
    <td><span class="val"></span></td>
    <td>80.5</td>
    <td>0</td>
    <td>-</td>
    <td>3.3</td>
    <td>extra</td>
  </tr>
</table>
<div id="SafetyRating">
  <table>
    <thead><tr><th>Type</th><th>OOS %</th><th>Nat'l Avg %</th></tr></thead>
    <tbody>
      <tr><th>Vehicle</th><td>25.0%</td><td>22.26%</td></tr>
      <tr><th>Driver</th><td>4.5%</td><td>6.67%</td></tr>
      <tr><td colspan="3">Footnote</td></tr>
    </tbody>
  </table>
</div>
</body></html>
"""

REGISTER_HTML = """
<html><body>
<table>
  <tr><td>CERTIFICATE, PERMIT, LICENSE</td></tr>
  <tr><td>MC-12345</td><td>ABC TRUCKING LLC - DALLAS, TX</td><td>01/01/2026</td></tr>
  <tr><td>FF-40152</td><td>PFL TRANSPORTATION SOLUTIONS INC - SURREY, BC, CA</td><td>01/02/2026</td></tr>
  <tr><td>MC-12345</td><td>ABC TRUCKING LLC - DALLAS, TX</td><td>01/05/2026</td></tr>
  <tr><td>Number</td><td>Title</td><td>Decided</td></tr>
</table>
</body></html>
"""


@pytest.fixture
def snapshot_html():
    return SNAPSHOT_HTML


@pytest.fixture
def registration_html():
    return REGISTRATION_HTML


@pytest.fixture
def safety_html():
    return SAFETY_HTML


@pytest.fixture
def register_html():
    return REGISTER_HTML
