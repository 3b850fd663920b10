import copy
from datetime import date, datetime

import pytest

from quote_engine.quote_data import (
    build_quote_page_data,
    customer_name,
    format_date_full,
    format_date_long,
    format_date_medium,
    format_date_short,
    inventory_window,
    total_cube,
)

QUOTE_DAY = date(2026, 2, 18)


def test_date_formats():
    assert format_date_short(QUOTE_DAY) == "18/02/2026"
    assert format_date_long(QUOTE_DAY) == "Wednesday, February 18, 2026"
    assert format_date_full(QUOTE_DAY) == "Wednesday, 18 February 2026"
    assert format_date_medium(QUOTE_DAY) == "18 Feb 2026"
    assert format_date_medium(date(2026, 3, 5)) == "5 Mar 2026"


def test_customer_name_skips_blank_parts():
    assert customer_name({"titleName": "Mr", "firstName": "Leigh", "lastName": "Morrow"}) == "Mr Leigh Morrow"
    assert customer_name({"firstName": " Jane ", "lastName": "Doe", "titleName": ""}) == "Jane Doe"
    assert customer_name({}) == ""


def test_total_cube_ignores_bad_values():
    assert total_cube([{"cube": 1.25}, {"cube": "0.5"}, {"cube": None}, {}]) == 1.75
    assert total_cube([]) == 0
    assert total_cube([{"cube": "nan"}, {"cube": "inf"}, {"cube": 2}]) == 2


@pytest.mark.parametrize("count,page,size,expected", [
    (0, 1, 10, (0, 0, 0, 1, 1)),
    (24, 1, 10, (1, 10, 24, 1, 3)),
    (24, 3, 10, (21, 24, 24, 3, 3)),
    (24, 9, 10, (21, 24, 24, 3, 3)),
    (24, 0, 10, (1, 10, 24, 1, 3)),
    (24, 2, -1, (1, 24, 24, 1, 1)),
    (5, 1, 10, (1, 5, 5, 1, 1)),
])
def test_inventory_window(count, page, size, expected):
    window = inventory_window(count, page, size)
    assert (
        window["inventoryFrom"],
        window["inventoryTo"],
        window["inventoryTotal"],
        window["inventoryCurrentPage"],
        window["inventoryTotalPages"],
    ) == expected


def test_build_derives_presentation_fields(quote_data):
    assert quote_data["customerName"] == "Mr Leigh Morrow"
    assert quote_data["companyName"] == "Grace Removals"
    assert quote_data["primaryColor"] == "#cc0000"
    assert quote_data["moveManager"] == "Sarah Johnson"
    assert quote_data["quoteDate"] == "18/02/2026"
    assert quote_data["expiryDate"] == "20/03/2026"
    assert quote_data["expiryDateLong"] == "Friday, March 20, 2026"
    assert quote_data["totalCube"] == 4.3
    assert quote_data["inventoryTotal"] == 3
    assert quote_data["job"]["branding"]["companyName"] == "Grace Removals"


def test_build_uses_default_branding(job):
    data = build_quote_page_data(job, quote_date=QUOTE_DAY)
    assert data["companyName"] == "Your Moving Company"
    assert data["primaryColor"] == "#1a56db"
    assert data["inventory"] == []
    assert data["costings"] == []
    assert data["inventoryCurrentPage"] == 1


def test_job_branding_wins_over_company_branding(job):
    job = dict(job, branding={"companyName": "Job Brand", "logoUrl": ""})
    data = build_quote_page_data(job, branding={"companyName": "Company", "logoUrl": "/logo.png"},
                                 quote_date=QUOTE_DAY)
    assert data["companyName"] == "Job Brand"
    assert data["logoUrl"] == "/logo.png"


def test_build_accepts_datetime(job):
    data = build_quote_page_data(job, quote_date=datetime(2026, 2, 18, 15, 30))
    assert data["quoteDate"] == "18/02/2026"


def test_build_does_not_modify_inputs(job, inventory, costings):
    before = copy.deepcopy((job, inventory, costings))
    data = build_quote_page_data(job, inventory, costings, quote_date=QUOTE_DAY)
    data["job"]["firstName"] = "Changed"
    data["inventory"][0]["room"] = "Changed"
    assert (job, inventory, costings) == before
    assert "branding" not in job


def test_build_inventory_page(job, inventory):
    data = build_quote_page_data(job, inventory, inventory_page=2, inventory_page_size=2, quote_date=QUOTE_DAY)
    assert data["inventoryFrom"] == 3
    assert data["inventoryTo"] == 3
    assert data["inventoryTotalPages"] == 2


def test_build_keeps_requested_page_size(job, inventory):
    data = build_quote_page_data(job, inventory, inventory_page_size=-1, quote_date=QUOTE_DAY)
    assert data["inventoryPageSize"] == -1
    assert data["inventoryTo"] == 3
