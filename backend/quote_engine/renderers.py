"""
Section Renderers for Quote Pages

Each built-in renderer takes the quote page data and the section config
and returns HTML for that section. Renderers are registered in
SECTION_RENDERERS for lookup by component name.

Every renderer reads only the config keys listed in its *_CONFIG
defaults; anything else in the section config is ignored.

NextStepsForm and AcceptanceForm are slots: their content is interactive
(signature, date pickers) and comes from the host page.
"""

import logging
from dataclasses import asdict, dataclass
from html import escape as html_escape
from typing import Any, Callable, Dict, List, Optional

from .formatting import format_money, format_value, stringify, to_number
from .layout_config import SECTION_TYPE_CUSTOM, SectionComponent
from .placeholders import resolve_template
from .quote_data import DEFAULT_INVENTORY_PAGE_SIZE, inventory_window
from .sanitizer import neutralize_css, sanitize

logger = logging.getLogger(__name__)

KG_TO_LBS = 2.20462
M3_TO_FT3 = 35.3147

SLOT_NEXT_STEPS = "nextStepsFormSlot"
SLOT_ACCEPTANCE = "acceptanceFormSlot"

SLOT_COMPONENTS = {
    SectionComponent.NEXT_STEPS: SLOT_NEXT_STEPS,
    SectionComponent.ACCEPTANCE: SLOT_ACCEPTANCE,
}

SLOT_PLACEHOLDER_IDS = {
    SLOT_NEXT_STEPS: "custom-layout-next-steps-slot",
    SLOT_ACCEPTANCE: "custom-layout-acceptance-slot",
}


@dataclass
class RenderNode:
    """One rendered section, in layout order."""
    section_id: str
    kind: str                  # "custom_html" or a component name
    html: str
    css: str = ""
    full_bleed: bool = False   # Rendered outside the max-width container
    slot: Optional[str] = None

    def to_dict(self) -> dict:
        d = asdict(self)
        return {
            'sectionId': d['section_id'],
            'kind': d['kind'],
            'html': d['html'],
            'css': d['css'],
            'fullBleed': d['full_bleed'],
            'slot': d['slot'],
        }


def esc(text: Any) -> str:
    if text is None:
        return ''
    return html_escape(stringify(text))


def section_config(config: Optional[dict], defaults: dict) -> dict:
    """Known config keys with explicit defaults for anything missing or null."""
    config = config if isinstance(config, dict) else {}
    result = {}
    for key, default in defaults.items():
        value = config.get(key)
        result[key] = default if value is None else value
    return result


def _job(data: dict) -> dict:
    job = data.get('job')
    return job if isinstance(job, dict) else {}


def _list(value) -> list:
    return value if isinstance(value, list) else []


# =============================================================================
# BUILT-IN RENDERERS
# =============================================================================

HEADER_CONFIG = {
    'showBanner': True,
    'bannerImageUrl': 'https://images.unsplash.com/photo-1600880292203-757bb62b4baf?w=800&h=450&fit=crop',
}


def r_header(data: dict, config: Optional[dict]) -> str:
    cfg = section_config(config, HEADER_CONFIG)
    job = _job(data)
    company = esc(data.get('companyName'))

    if data.get('logoUrl'):
        brand = f'<img class="quote-logo" src="{esc(data["logoUrl"])}" alt="{company}">'
    else:
        brand = f'<h1 class="quote-company" style="color: {esc(data.get("primaryColor"))}">{company}</h1>'

    banner = ''
    if cfg['showBanner'] is not False:
        banner = f'''<div class="quote-header-banner">
            <img src="{esc(cfg["bannerImageUrl"])}" alt="Professional moving services">
        </div>'''

    return f'''<div class="quote-header">
        <div class="quote-header-main">
            {brand}
            <h2 class="quote-title">Your Moving Quote</h2>
            <div class="quote-meta">
                <p><span class="label">Prepared For:</span> {esc(data.get("customerName"))}</p>
                <p><span class="label">Reference:</span> #{esc(job.get("id"))}</p>
                <p><span class="label">Quote Date:</span> {esc(data.get("quoteDate"))}</p>
                <p><span class="label">Expiry Date:</span> {esc(data.get("expiryDate"))}</p>
            </div>
        </div>
        {banner}
    </div>'''


INTRO_CONFIG = {
    'template': 'letter',      # letter, brief, custom
    'customText': '',
}


def r_intro(data: dict, config: Optional[dict]) -> str:
    cfg = section_config(config, INTRO_CONFIG)
    job = _job(data)
    quote_id = esc(job.get('id'))
    salutation = ' '.join(esc(p) for p in (job.get('titleName'), job.get('lastName')) if p)

    if cfg['template'] == 'custom' and cfg['customText']:
        return f'''<div class="quote-card quote-intro">
            <h3>Quotation Number: {quote_id}</h3>
            <div class="quote-intro-custom">{esc(cfg["customText"])}</div>
        </div>'''

    if cfg['template'] == 'brief':
        return f'''<div class="quote-card quote-intro">
            <h3>Quotation #{quote_id}</h3>
            <p>Dear {salutation}, please review your moving quote below.
            This quotation is valid for 28 days. Select your preferred pricing option and accept to confirm.</p>
        </div>'''

    return f'''<div class="quote-card quote-intro">
        <h3>Quotation Number: {quote_id}</h3>
        <p>Dear {salutation},</p>
        <p>Thank you for contacting us for your upcoming move. Below you will find our pricing,
        tailored to meet your specific moving requirements.</p>
        <p>Please note this quotation is valid for 28 days from the quotation date.</p>
        <p>To confirm a booking with us, simply select the pricing option that you prefer and
        accept after filling in all information we need. And of course, should you have any
        questions about this quote, please do not hesitate to contact us.</p>
        <p>We look forward to being at your service.</p>
        <p class="quote-signoff">{esc(data.get("companyName"))} Admin</p>
    </div>'''


LOCATION_CONFIG = {
    'layout': 'two-column',    # two-column, stacked
}


def _address(job: dict, prefix: str) -> str:
    line2 = job.get(f'{prefix}Line2')
    city = esc(job.get(f'{prefix}City'))
    city_line = ' '.join(p for p in (
        f'{city},' if city else '',
        esc(job.get(f'{prefix}State')),
        esc(job.get(f'{prefix}Postcode')),
    ) if p)
    return ''.join([
        f'<p>{esc(job.get(f"{prefix}Line1"))}</p>',
        f'<p>{esc(line2)}</p>' if line2 else '',
        f'<p>{city_line}</p>',
        f'<p>{esc(job.get(f"{prefix}Country"))}</p>',
    ])


def r_location_info(data: dict, config: Optional[dict]) -> str:
    cfg = section_config(config, LOCATION_CONFIG)
    job = _job(data)
    layout_class = 'quote-locations-stacked' if cfg['layout'] == 'stacked' else 'quote-locations-columns'

    move_date = ''
    if job.get('estimatedDeliveryDetails'):
        move_date = f'''<div class="quote-move-date">
            <h4>Scheduled Move Date <span style="color: {esc(data.get("primaryColor"))}">{esc(job["estimatedDeliveryDetails"])}</span></h4>
        </div>'''

    return f'''<div class="quote-card quote-locations">
        <h3>Location Information</h3>
        <div class="{layout_class}">
            <div class="quote-address"><h4>Origin Address</h4>{_address(job, "uplift")}</div>
            <div class="quote-address"><h4>Destination Address</h4>{_address(job, "delivery")}</div>
        </div>
        {move_date}
    </div>'''


ESTIMATE_CONFIG = {
    'showDetails': True,
    'selectLabel': 'Select Option',
}


def _base_charge(charges: List[dict]) -> Optional[dict]:
    for charge in charges:
        if charge.get('isBaseCharge'):
            return charge
    return None


def estimate_total(costing: dict) -> float:
    """Base charge price (or costing total) plus add-ons included by default."""
    charges = [c for c in _list(costing.get('charges')) if isinstance(c, dict)]
    base = _base_charge(charges)
    if base is not None:
        total = to_number(base.get('price'))
    else:
        total = to_number(costing.get('totalPrice'))
    for charge in charges:
        if charge is base or not charge.get('included'):
            continue
        total += to_number(charge.get('price')) * to_number(charge.get('quantity'), 1)
    return total


def _render_addon(charge: dict, costing_id: str, symbol: str) -> str:
    checked = ' checked' if charge.get('included') else ''
    price = esc(format_money(charge.get('price'), symbol))
    notes = ''
    if charge.get('notes'):
        notes = f'<span class="estimate-line">{esc(charge["notes"])}</span>'
    return f'''<label class="estimate-addon">
        <input type="checkbox" data-costing-id="{costing_id}" data-charge-id="{esc(charge.get("id"))}"{checked}>
        <span class="estimate-addon-heading">{esc(charge.get("heading"))}</span>
        <span class="estimate-line">Qty: {esc(format_value(charge.get("quantity"), "count", 1))} | Rate: {price} | NT: N/A</span>
        {notes}
        <span class="estimate-price">{price}</span>
    </label>'''


def _render_estimate_card(costing: dict, index: int, data: dict, cfg: dict) -> str:
    primary = esc(data.get('primaryColor'))
    symbol = stringify(costing.get('currencySymbol')) or '$'
    currency = esc(costing.get('currency') or 'AUD')
    costing_id = esc(costing.get('id'))
    charges = [c for c in _list(costing.get('charges')) if isinstance(c, dict)]
    base = _base_charge(charges)
    addons = [c for c in charges if c is not base]
    total = estimate_total(costing)

    base_price = to_number(base.get('price')) if base else 0
    base_qty = format_value(base.get('quantity') if base else None, 'count', 1)
    net_total = costing.get('netTotal')
    nt = f'{esc(symbol)}{esc(net_total)}' if net_total and net_total != '0.00' else 'N/A'
    description = ''
    if costing.get('description'):
        description = f'<p class="estimate-description" style="color: {primary}">{esc(costing["description"])}</p>'

    addon_html = ''
    if addons:
        rows = ''.join(_render_addon(c, costing_id, symbol) for c in addons)
        addon_html = f'''<div class="estimate-addons">
            <div class="estimate-addons-title" style="color: {primary}">Optional Services</div>
            {rows}
        </div>'''

    details_html = ''
    raw = costing.get('rawData') if isinstance(costing.get('rawData'), dict) else {}
    inclusions = _list(raw.get('inclusions'))
    exclusions = _list(raw.get('exclusions'))
    if cfg['showDetails'] is not False and (inclusions or exclusions):
        parts = []
        for title, items in (('Inclusions', inclusions), ('Exclusions', exclusions)):
            if items:
                lis = ''.join(f'<li>{esc(item)}</li>' for item in items)
                parts.append(f'<h5>{title}</h5><ul>{lis}</ul>')
        details_html = f'<details class="estimate-details"><summary>Details</summary>{"".join(parts)}</details>'

    money_total = esc(format_money(total, symbol))
    return f'''<div class="quote-card estimate-card" data-costing-id="{costing_id}" data-costing-index="{index}">
        <div class="estimate-header" style="background-color: {primary}">
            <h3>Your Estimate</h3>
            <div class="estimate-total">({currency}) {money_total}<div class="estimate-tax">Tax included</div></div>
        </div>
        <div class="estimate-base">
            <div class="estimate-name">{esc(costing.get("name"))}</div>
            <div class="estimate-line">Qty: {esc(base_qty)} | Rate: {esc(format_money(base_price, symbol))} | NT: {nt}</div>
            {description}
            <div class="estimate-price">{esc(format_money(base_price, symbol))}</div>
        </div>
        {addon_html}
        <div class="estimate-totals">
            <div><span>Subtotal</span><span>{money_total}</span></div>
            <div><span>Tax</span><span>N/A</span></div>
            <div class="estimate-grand-total"><span>Total</span><span>{money_total}</span></div>
            <p class="estimate-tax">Tax Included</p>
        </div>
        <div class="estimate-select">
            <button type="button" data-select-costing="{costing_id}" style="background-color: {primary}">{esc(cfg["selectLabel"])}</button>
        </div>
        {details_html}
    </div>'''


def r_estimate_cards(data: dict, config: Optional[dict]) -> str:
    """One card per pricing option."""
    cfg = section_config(config, ESTIMATE_CONFIG)
    costings = [c for c in _list(data.get('costings')) if isinstance(c, dict)]
    return ''.join(
        _render_estimate_card(costing, i, data, cfg)
        for i, costing in enumerate(costings)
    )


INVENTORY_CONFIG = {
    'defaultPageSize': 10,     # -1 shows all items
    'weightUnit': 'kg',        # kg, lbs
}


def _fmt_weight(kg, unit: str) -> str:
    if kg is None or kg == '':
        return '-'
    value = to_number(kg)
    if unit == 'lbs':
        value *= KG_TO_LBS
    return f'{value:.0f}'


def r_inventory_table(data: dict, config: Optional[dict]) -> str:
    cfg = section_config(config, INVENTORY_CONFIG)
    inventory = [i for i in _list(data.get('inventory')) if isinstance(i, dict)]
    if not inventory:
        return ''

    unit = 'lbs' if cfg['weightUnit'] == 'lbs' else 'kg'
    page_size = data.get('inventoryPageSize')
    if page_size is None:
        page_size = cfg['defaultPageSize']
    window = inventory_window(
        len(inventory),
        int(to_number(data.get('inventoryCurrentPage'), 1)),
        int(to_number(page_size, DEFAULT_INVENTORY_PAGE_SIZE)),
    )
    page = window['inventoryCurrentPage']
    total_pages = window['inventoryTotalPages']
    paginated = inventory[window['inventoryFrom'] - 1: window['inventoryTo']]

    rows = ''.join(
        f'''<tr>
            <td>{esc(item.get("room") or "-")}</td>
            <td>{esc(format_value(item.get("quantity"), "count", 1))}</td>
            <td class="inventory-item">{esc(item.get("description"))}</td>
            <td>{_fmt_weight(item.get("weightKg"), unit)}</td>
        </tr>'''
        for item in paginated
    )

    total_items = sum(int(to_number(i.get('quantity'), 0)) or 1 for i in inventory)
    total_weight_kg = sum(to_number(i.get('weightKg')) * (to_number(i.get('quantity'), 0) or 1) for i in inventory)
    total_volume_m3 = sum(to_number(i.get('cube')) for i in inventory)

    if unit == 'lbs':
        weight_display = f'{total_weight_kg * KG_TO_LBS:.0f} lbs'
        volume_display = f'{total_volume_m3 * M3_TO_FT3:.2f} ft³'
    else:
        weight_display = f'{total_weight_kg:.0f} kg'
        volume_display = f'{total_volume_m3:.2f} m³'

    pagination = ''
    if total_pages > 1:
        pagination = f'''<div class="inventory-pagination" data-page="{page}" data-total-pages="{total_pages}">
            {page} of {total_pages} pages ({len(inventory)} items)
        </div>'''

    return f'''<div class="quote-card inventory-card">
        <div class="inventory-header" style="background-color: {esc(data.get("primaryColor"))}">
            <h3>Your Estimated Inventory</h3>
        </div>
        <table class="inventory-table">
            <thead><tr><th>Room</th><th>Quantity</th><th>Item</th><th>Weight ({"lbs" if unit == "lbs" else "Kg"})</th></tr></thead>
            <tbody>{rows}</tbody>
            <tfoot><tr>
                <td>Total</td>
                <td>{total_items}</td>
                <td>Volume: <strong>{volume_display}</strong></td>
                <td>{weight_display}</td>
            </tr></tfoot>
        </table>
        {pagination}
    </div>'''


TERMS_CONFIG = {
    'terms': [
        'This quote is valid for 30 days from the date of issue.',
        'All prices are in Australian Dollars (AUD) and include GST.',
        'Final pricing may vary based on actual inventory and conditions.',
        'Payment: 50% deposit to confirm, balance due on completion.',
        'Cancellation: Full refund if cancelled 7+ days before move date.',
    ],
}


def r_terms(data: dict, config: Optional[dict]) -> str:
    cfg = section_config(config, TERMS_CONFIG)
    terms = cfg['terms'] if isinstance(cfg['terms'], list) else TERMS_CONFIG['terms']
    items = ''.join(f'<li>&bull; {esc(term)}</li>' for term in terms)
    return f'''<div class="quote-card quote-terms">
        <h3>Terms &amp; Conditions</h3>
        <ul>{items}</ul>
    </div>'''


# =============================================================================
# RENDERER REGISTRY
# =============================================================================

SECTION_RENDERERS: Dict[SectionComponent, Callable[[dict, Optional[dict]], str]] = {
    SectionComponent.HEADER: r_header,
    SectionComponent.INTRO: r_intro,
    SectionComponent.LOCATION: r_location_info,
    SectionComponent.ESTIMATE: r_estimate_cards,
    SectionComponent.INVENTORY: r_inventory_table,
    SectionComponent.TERMS: r_terms,
}


def render_slot(slot: str, slots: Optional[dict]) -> str:
    """Host-supplied fragment for a slot, or an empty placeholder div."""
    fragment = (slots or {}).get(slot)
    if fragment:
        return fragment
    return f'<div id="{SLOT_PLACEHOLDER_IDS[slot]}"></div>'


def dispatch_section(section: dict, data: dict, slots: Optional[dict] = None) -> Optional[RenderNode]:
    """
    Render one section.

    Returns None for unknown components and for built-ins with nothing to
    show (e.g. an inventory table with no items).
    """
    section_id = stringify(section.get('id'))
    config = section.get('config') if isinstance(section.get('config'), dict) else None

    if section.get('type') == SECTION_TYPE_CUSTOM:
        html = sanitize(resolve_template(section.get('html'), data, config))
        return RenderNode(
            section_id=section_id,
            kind=SECTION_TYPE_CUSTOM,
            html=html,
            css=neutralize_css(section.get('css')),
            full_bleed=True,
        )

    component = SectionComponent.parse(section.get('component'))
    if component is None:
        logger.debug("Unknown component %r in section %r, skipping",
                     section.get('component'), section_id)
        return None

    if component in SLOT_COMPONENTS:
        slot = SLOT_COMPONENTS[component]
        return RenderNode(
            section_id=section_id,
            kind=component.value,
            html=render_slot(slot, slots),
            full_bleed=component is SectionComponent.ACCEPTANCE,
            slot=slot,
        )

    html = SECTION_RENDERERS[component](data, config)
    if not html:
        return None
    return RenderNode(section_id=section_id, kind=component.value, html=html)
