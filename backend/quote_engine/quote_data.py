"""
Quote Page Data

Assembles the read-only snapshot a layout is rendered against from the
job, inventory, costings and company branding. Derived presentation
fields (customer name, formatted dates, total cube, inventory page
window) are computed once here so templates and renderers only read.

The returned dict uses the same camelCase keys as the template
placeholders, e.g. data["job"]["upliftCity"] for {{job.upliftCity}}.
"""

import copy
import math
from datetime import date, datetime, timedelta
from typing import List, Optional, Union

from .branding_config import DEFAULT_BRANDING, merge_branding
from .formatting import to_number

QUOTE_VALIDITY_DAYS = 30
DEFAULT_INVENTORY_PAGE_SIZE = 10


# =============================================================================
# DATE FORMATS
# =============================================================================

def format_date_short(d: date) -> str:
    """18/02/2026"""
    return d.strftime('%d/%m/%Y')


def format_date_long(d: date) -> str:
    """Wednesday, February 18, 2026"""
    return f"{d.strftime('%A')}, {d.strftime('%B')} {d.day}, {d.year}"


def format_date_full(d: date) -> str:
    """Wednesday, 18 February 2026"""
    return f"{d.strftime('%A')}, {d.day} {d.strftime('%B')} {d.year}"


def format_date_medium(d: date) -> str:
    """18 Feb 2026"""
    return f"{d.day} {d.strftime('%b')} {d.year}"


def date_fields(prefix: str, d: date) -> dict:
    return {
        prefix: format_date_short(d),
        f'{prefix}Long': format_date_long(d),
        f'{prefix}Full': format_date_full(d),
        f'{prefix}Medium': format_date_medium(d),
    }


# =============================================================================
# DERIVED FIELDS
# =============================================================================

def customer_name(job: dict) -> str:
    parts = [job.get('titleName'), job.get('firstName'), job.get('lastName')]
    return ' '.join(str(p).strip() for p in parts if p and str(p).strip())


def total_cube(inventory: List[dict]) -> float:
    return round(sum(to_number(item.get('cube')) for item in inventory), 4)


def inventory_window(count: int, page: int = 1, page_size: int = DEFAULT_INVENTORY_PAGE_SIZE) -> dict:
    """
    Pagination window for the inventory table.

    page_size -1 shows everything on one page. Out-of-range pages are
    clamped.
    """
    if count == 0:
        return {
            'inventoryFrom': 0,
            'inventoryTo': 0,
            'inventoryTotal': 0,
            'inventoryCurrentPage': 1,
            'inventoryTotalPages': 1,
        }

    if not page_size or page_size < 0:
        page_size = count
    total_pages = max(1, math.ceil(count / page_size))
    page = min(max(1, page or 1), total_pages)
    start = (page - 1) * page_size

    return {
        'inventoryFrom': start + 1,
        'inventoryTo': min(start + page_size, count),
        'inventoryTotal': count,
        'inventoryCurrentPage': page,
        'inventoryTotalPages': total_pages,
    }


def build_quote_page_data(
    job: dict,
    inventory: Optional[List[dict]] = None,
    costings: Optional[List[dict]] = None,
    branding: Optional[dict] = None,
    quote_date: Optional[Union[date, datetime]] = None,
    inventory_page: int = 1,
    inventory_page_size: int = DEFAULT_INVENTORY_PAGE_SIZE,
) -> dict:
    """
    Build quote page data for one render.

    Args:
        job: Job fields (camelCase), optionally with a "branding" sub-dict
        inventory: Inventory items
        costings: Pricing options, each with its charges
        branding: Company branding; job["branding"] values win over it
        quote_date: Quote issue date, defaults to today
        inventory_page: Inventory page shown by the table
        inventory_page_size: Items per inventory page (-1 for all)

    Returns:
        New dict; inputs are copied, never modified
    """
    job = copy.deepcopy(job or {})
    inventory = copy.deepcopy(inventory or [])
    costings = copy.deepcopy(costings or [])

    brand = merge_branding(merge_branding(DEFAULT_BRANDING, branding), job.get('branding'))
    job['branding'] = brand

    if isinstance(quote_date, datetime):
        quote_date = quote_date.date()
    quote_date = quote_date or date.today()
    expiry_date = quote_date + timedelta(days=QUOTE_VALIDITY_DAYS)

    data = {
        'job': job,
        'inventory': inventory,
        'costings': costings,
        'customerName': customer_name(job),
        'companyName': brand.get('companyName', ''),
        'logoUrl': brand.get('logoUrl', ''),
        'heroBannerUrl': brand.get('heroBannerUrl', ''),
        'footerImageUrl': brand.get('footerImageUrl', ''),
        'primaryColor': brand.get('primaryColor', ''),
        'moveManager': job.get('moveManager') or '',
        'totalCube': total_cube(inventory),
        'inventoryPageSize': inventory_page_size,
    }
    data.update(date_fields('quoteDate', quote_date))
    data.update(date_fields('expiryDate', expiry_date))
    data.update(inventory_window(len(inventory), inventory_page, inventory_page_size))
    return data
