"""
Placeholder Registry and Template Resolver

Custom HTML sections are small templates:

    {{customerName}}                  scalar from the quote data
    {{#each costings}} ... {{/each}}  one copy of the body per item
    {{this.totalPrice}}               item field inside an each-block
    {{config.desktopMaxHeight}}       value from the section's config

Resolution always runs in three passes: each-blocks, then scalars, then
config values. Tokens that no pass recognises are left exactly as written
so stale placeholders stay visible in the rendered page.

PLACEHOLDER_REGISTRY is the single source of truth for scalar tokens and
also feeds the placeholder picker in the layout builder.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from .conditions import resolve_field
from .formatting import format_value, stringify

logger = logging.getLogger(__name__)

# =============================================================================
# TOKEN PATTERNS
# Applied in this order by resolve_template()
# =============================================================================

TOKEN_PATTERNS = {
    'each': re.compile(r'\{\{#each\s+(\w+)\s*\}\}([\s\S]*?)\{\{/each\}\}'),
    'this': re.compile(r'\{\{this\.(\w+)\}\}'),
    'scalar': re.compile(r'\{\{([A-Za-z_]\w*(?:\.\w+)*)\}\}'),
    'config': re.compile(r'\{\{config\.([\w-]+)\}\}'),
}


# =============================================================================
# SCALAR PLACEHOLDERS
# key -> where to read it, how to format it
# =============================================================================

def _p(key, label, category, example, paths=None, fmt='text', fallback='', description=None):
    entry = {
        'key': key,
        'label': label,
        'category': category,
        'example': example,
        'paths': tuple(paths or (key,)),
        'format': fmt,
        'fallback': fallback,
    }
    if description:
        entry['description'] = description
    return entry


def _branding(field, label, example, description=None):
    return _p(f'branding.{field}', label, 'Branding', example,
              paths=(field, f'job.branding.{field}'), description=description)


PLACEHOLDER_REGISTRY: List[dict] = [
    # Customer
    _p('customerName', 'Full Customer Name', 'Customer', 'Mr John Smith',
       description='Title + first + last name combined'),
    _p('job.titleName', 'Title', 'Customer', 'Mr'),
    _p('job.firstName', 'First Name', 'Customer', 'John'),
    _p('job.lastName', 'Last Name', 'Customer', 'Smith'),

    # Job
    _p('moveManager', 'Move Manager Name', 'Job', 'Sarah Johnson',
       paths=('moveManager', 'job.moveManager')),
    _p('job.id', 'Job / Quote Number', 'Job', '111505'),
    _p('job.moveManager', 'Move Manager (job field)', 'Job', 'Sarah Johnson'),
    _p('job.moveType', 'Move Type', 'Job', 'LR'),
    _p('job.brandCode', 'Brand Code', 'Job', 'MWB'),
    _p('job.branchCode', 'Branch Code', 'Job', 'MEL'),
    _p('job.estimatedDeliveryDetails', 'Estimated Delivery Details', 'Job', '27/02/2026'),

    # Dates
    _p('quoteDate', 'Quote Date', 'Dates', '18/02/2026', description='DD/MM/YYYY'),
    _p('quoteDateLong', 'Quote Date (long)', 'Dates', 'Wednesday, February 18, 2026'),
    _p('quoteDateFull', 'Quote Date (full)', 'Dates', 'Wednesday, 18 February 2026'),
    _p('quoteDateMedium', 'Quote Date (medium)', 'Dates', '18 Feb 2026'),
    _p('expiryDate', 'Expiry Date', 'Dates', '20/03/2026', description='30 days from quote date'),
    _p('expiryDateLong', 'Expiry Date (long)', 'Dates', 'Friday, March 20, 2026'),
    _p('expiryDateFull', 'Expiry Date (full)', 'Dates', 'Friday, 20 March 2026'),
    _p('expiryDateMedium', 'Expiry Date (medium)', 'Dates', '20 Mar 2026'),

    # Origin Address
    _p('job.upliftLine1', 'Origin Street Line 1', 'Origin Address', '3 Spring Water Crescent'),
    _p('job.upliftLine2', 'Origin Street Line 2', 'Origin Address', ''),
    _p('job.upliftCity', 'Origin City', 'Origin Address', 'Cranbourne'),
    _p('job.upliftState', 'Origin State', 'Origin Address', 'VIC'),
    _p('job.upliftPostcode', 'Origin Postcode', 'Origin Address', '3977'),
    _p('job.upliftCountry', 'Origin Country', 'Origin Address', 'Australia'),

    # Destination Address
    _p('job.deliveryLine1', 'Destination Street Line 1', 'Destination Address', '12 Cato Street'),
    _p('job.deliveryLine2', 'Destination Street Line 2', 'Destination Address', ''),
    _p('job.deliveryCity', 'Destination City', 'Destination Address', 'Hawthorn East'),
    _p('job.deliveryState', 'Destination State', 'Destination Address', 'VIC'),
    _p('job.deliveryPostcode', 'Destination Postcode', 'Destination Address', '3123'),
    _p('job.deliveryCountry', 'Destination Country', 'Destination Address', 'Australia'),

    # Pricing
    _p('job.jobValue', 'Total Job Value', 'Pricing', '2675.00', fmt='fixed2', fallback=0,
       description='Total value formatted to 2 decimal places'),

    # Measures
    _p('job.measuresVolumeGrossM3', 'Gross Volume (m3)', 'Measures', '0.62', fmt='fixed2', fallback=0),
    _p('job.measuresWeightGrossKg', 'Gross Weight (kg)', 'Measures', '70', fmt='count', fallback=0),
    _p('totalCube', 'Total Inventory Cube (m3)', 'Measures', '12.50', fmt='fixed2', fallback=0),

    # Branding
    _branding('companyName', 'Company Name', 'Grace Removals'),
    _branding('logoUrl', 'Company Logo URL', '/uploads/logo.png', 'Use as img src'),
    _branding('heroBannerUrl', 'Hero Banner Image URL', '/uploads/layouts/banner.jpg'),
    _branding('footerImageUrl', 'Footer Image URL', '/uploads/layouts/footer.jpg'),
    _branding('primaryColor', 'Primary Color', '#cc0000', 'Use as CSS color value'),
    _branding('secondaryColor', 'Secondary Color', '#ffffff'),
    _p('companyName', 'Company Name (shorthand)', 'Branding', 'Grace Removals'),
    _p('primaryColor', 'Primary Color (shorthand)', 'Branding', '#cc0000'),

    # Inventory pagination window
    _p('inventoryFrom', 'First Item Shown', 'Inventory Pages', '1', fmt='number'),
    _p('inventoryTo', 'Last Item Shown', 'Inventory Pages', '10', fmt='number'),
    _p('inventoryTotal', 'Inventory Item Count', 'Inventory Pages', '24', fmt='number'),
    _p('inventoryCurrentPage', 'Current Inventory Page', 'Inventory Pages', '1', fmt='number'),
    _p('inventoryTotalPages', 'Inventory Page Count', 'Inventory Pages', '3', fmt='number'),
]

_SCALARS: Dict[str, dict] = {p['key']: p for p in PLACEHOLDER_REGISTRY}

PLACEHOLDER_CATEGORIES = [
    'Customer',
    'Job',
    'Dates',
    'Origin Address',
    'Destination Address',
    'Pricing',
    'Measures',
    'Branding',
    'Inventory Pages',
]


# =============================================================================
# LOOP FIELDS
# collection -> {field: (format, fallback)}
# =============================================================================

LOOP_FIELDS: Dict[str, Dict[str, tuple]] = {
    'inventory': {
        'description': ('text', ''),
        'room': ('text', ''),
        'quantity': ('count', 1),
        'cube': ('fixed2', 0),
        'typeCode': ('text', 'N/A'),
    },
    'costings': {
        'id': ('text', ''),
        'name': ('text', ''),
        'category': ('text', ''),
        'description': ('text', ''),
        'quantity': ('count', 1),
        'rate': ('fixed2', 0),
        'netTotal': ('text', 'N/A'),
        'totalPrice': ('fixed2', 0),
        'currency': ('text', ''),
        'currencySymbol': ('text', ''),
    },
}


def get_placeholder(key: str) -> Optional[dict]:
    return _SCALARS.get(key)


def get_placeholders_by_category(category: str) -> List[dict]:
    return [p for p in PLACEHOLDER_REGISTRY if p['category'] == category]


def registry_for_display() -> List[dict]:
    """Registry entries without the internal lookup details, for the picker UI."""
    public = []
    for p in PLACEHOLDER_REGISTRY:
        entry = {k: v for k, v in p.items() if k not in ('paths', 'format', 'fallback')}
        public.append(entry)
    for collection, fields in LOOP_FIELDS.items():
        for field in fields:
            public.append({
                'key': f'this.{field}',
                'label': field,
                'category': 'Loop Fields',
                'example': '',
                'description': f'Use inside {{{{#each {collection}}}}}',
            })
    return public


# =============================================================================
# RESOLVER
# =============================================================================

def resolve_scalar(key: str, data: Any) -> Optional[str]:
    """Formatted value for a registry key, or None if the key is unknown."""
    entry = _SCALARS.get(key)
    if entry is None:
        return None

    value = None
    for path in entry['paths']:
        value = resolve_field(data, path)
        if value not in (None, ''):
            break
    return format_value(value, entry['format'], entry['fallback'])


def _expand_item(body: str, item: Any, fields: Dict[str, tuple]) -> str:
    def replace(match):
        field = match.group(1)
        if field not in fields:
            return match.group(0)
        fmt, fallback = fields[field]
        value = item.get(field) if isinstance(item, Mapping) else None
        return format_value(value, fmt, fallback)

    return TOKEN_PATTERNS['this'].sub(replace, body)


def _expand_each_blocks(template: str, data: Any) -> str:
    def replace(match):
        collection = match.group(1)
        fields = LOOP_FIELDS.get(collection)
        if fields is None:
            logger.debug("Unknown each-block collection %r left as text", collection)
            return match.group(0)
        items = resolve_field(data, collection) or []
        if not isinstance(items, (list, tuple)):
            return ''
        body = match.group(2)
        return ''.join(_expand_item(body, item, fields) for item in items)

    return TOKEN_PATTERNS['each'].sub(replace, template)


def _substitute_scalars(template: str, data: Any) -> str:
    def replace(match):
        value = resolve_scalar(match.group(1), data)
        return match.group(0) if value is None else value

    return TOKEN_PATTERNS['scalar'].sub(replace, template)


def _substitute_config(template: str, section_config: Optional[Mapping]) -> str:
    if not section_config:
        return template

    def replace(match):
        key = match.group(1)
        value = section_config.get(key)
        if value is None:
            return match.group(0)
        return stringify(value)

    return TOKEN_PATTERNS['config'].sub(replace, template)


def resolve_template(template: Optional[str], data: Any,
                     section_config: Optional[Mapping] = None) -> str:
    """
    Resolve a custom section template against quote page data.

    Args:
        template: HTML template with {{...}} tokens
        data: Quote page data dict
        section_config: The section's config dict, for {{config.KEY}}

    Returns:
        Resolved string. Unknown tokens are returned verbatim.
    """
    if not isinstance(template, str) or not template:
        return ''

    result = _expand_each_blocks(template, data)
    result = _substitute_scalars(result, data)
    result = _substitute_config(result, section_config)
    return result
