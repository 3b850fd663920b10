"""
Quote Page Templates

CSS generation and the HTML page shell for rendered quote pages.
Page-wide styles come from the layout's effective globalStyles.
"""

import re
from typing import List, Optional

from .formatting import stringify, to_number
from .sanitizer import neutralize_css

# Banner section id -> image class whose height is capped per breakpoint
BANNER_SECTIONS = {
    'grace-hero': 'grace-hero-img',
    'grace-footer-image': 'grace-footer-img',
}

# config key, media query (None = all widths)
BANNER_BREAKPOINTS = (
    ('desktopMaxHeight', None),
    ('tabletMaxHeight', '(max-width: 1024px)'),
    ('mobileMaxHeight', '(max-width: 640px)'),
)

# Characters that could end a declaration, rule or the style element
_UNSAFE_CSS_VALUE = re.compile(r"[<>{};\\]")


def css_value(value, default: str) -> str:
    """A single CSS value from globalStyles, or default if it could break out."""
    text = stringify(value).strip()
    if not text or _UNSAFE_CSS_VALUE.search(text):
        return default
    return text


def generate_css(global_styles: dict) -> str:
    """Generate base CSS for a quote page from effective global styles."""
    font_family = css_value(global_styles.get("fontFamily"), "Inter, sans-serif")
    background = css_value(global_styles.get("backgroundColor"), "#f9fafb")
    max_width = css_value(global_styles.get("maxWidth"), "1152px")

    return f'''
        * {{ box-sizing: border-box; }}

        body {{
            margin: 0;
            font-family: {font_family};
            background-color: {background};
            color: #111827;
            line-height: 1.5;
        }}

        img {{ max-width: 100%; }}

        .quote-container {{
            max-width: {max_width};
            margin: 0 auto;
            padding: 0 16px;
        }}

        /* Cards */
        .quote-card {{
            background: #ffffff;
            border-radius: 8px;
            box-shadow: 0 1px 3px rgba(0,0,0,0.1);
            padding: 24px;
            margin: 24px 0;
        }}

        .quote-card h3 {{
            margin: 0 0 12px 0;
            font-size: 1.25rem;
        }}

        /* Header */
        .quote-header {{
            display: flex;
            flex-wrap: wrap;
            gap: 24px;
            padding: 24px 0;
        }}

        .quote-header-main {{ flex: 1 1 320px; }}
        .quote-header-banner {{ flex: 1 1 320px; }}
        .quote-header-banner img {{ width: 100%; border-radius: 8px; object-fit: cover; }}
        .quote-logo {{ max-height: 80px; }}
        .quote-company {{ margin: 0; font-size: 1.875rem; }}
        .quote-title {{ font-size: 1.5rem; margin: 16px 0; }}
        .quote-meta p {{ margin: 4px 0; }}
        .quote-meta .label {{ font-weight: 600; }}

        /* Intro */
        .quote-intro p {{ margin: 8px 0; }}
        .quote-intro-custom {{ white-space: pre-line; }}
        .quote-signoff {{ font-weight: 600; }}

        /* Locations */
        .quote-locations-columns {{ display: grid; grid-template-columns: 1fr 1fr; gap: 24px; }}
        .quote-locations-stacked {{ display: grid; grid-template-columns: 1fr; gap: 16px; }}
        .quote-address h4 {{ margin: 0 0 8px 0; }}
        .quote-address p {{ margin: 0; }}
        .quote-move-date {{ margin-top: 16px; border-top: 1px solid #e5e7eb; padding-top: 16px; }}

        /* Estimate cards */
        .estimate-card {{ padding: 0; overflow: hidden; }}
        .estimate-header {{
            color: #ffffff;
            display: flex;
            justify-content: space-between;
            align-items: center;
            padding: 16px 24px;
        }}
        .estimate-header h3 {{ margin: 0; }}
        .estimate-total {{ font-size: 1.25rem; font-weight: 700; text-align: right; }}
        .estimate-tax {{ font-size: 0.75rem; font-weight: 400; }}
        .estimate-base, .estimate-addons, .estimate-totals, .estimate-select, .estimate-details {{
            padding: 16px 24px;
        }}
        .estimate-name {{ font-weight: 600; }}
        .estimate-line {{ display: block; font-size: 0.875rem; color: #6b7280; }}
        .estimate-price {{ font-weight: 600; }}
        .estimate-addons-title {{ font-weight: 600; margin-bottom: 8px; }}
        .estimate-addon {{ display: block; padding: 8px 0; border-top: 1px solid #f3f4f6; }}
        .estimate-totals div {{ display: flex; justify-content: space-between; }}
        .estimate-grand-total {{ font-weight: 700; }}
        .estimate-select button {{
            color: #ffffff;
            border: none;
            border-radius: 6px;
            padding: 10px 20px;
            cursor: pointer;
        }}

        /* Inventory */
        .inventory-card {{ padding: 0; overflow: hidden; }}
        .inventory-header {{ color: #ffffff; padding: 16px 24px; }}
        .inventory-header h3 {{ margin: 0; }}
        .inventory-table {{ width: 100%; border-collapse: collapse; }}
        .inventory-table th, .inventory-table td {{
            padding: 8px 16px;
            text-align: left;
            border-bottom: 1px solid #e5e7eb;
        }}
        .inventory-table tfoot td {{ font-weight: 600; }}
        .inventory-pagination {{ padding: 12px 24px; font-size: 0.875rem; color: #6b7280; }}

        /* Terms */
        .quote-terms ul {{ list-style: none; padding: 0; margin: 0; }}
        .quote-terms li {{ margin: 4px 0; color: #4b5563; }}
    '''


def generate_banner_overrides(sections: Optional[List[dict]]) -> str:
    """
    Max-height rules for the hero/footer banner images.

    Emitted as !important rules so they win over inline heights stored
    in older saved layouts. Only numeric config values produce rules.
    """
    rules = []
    for section in sections or []:
        if not isinstance(section, dict):
            continue
        img_class = BANNER_SECTIONS.get(section.get('id'))
        config = section.get('config')
        if not img_class or not isinstance(config, dict):
            continue

        for key, media in BANNER_BREAKPOINTS:
            value = config.get(key)
            if isinstance(value, bool) or not isinstance(value, (int, float, str)):
                continue
            height = to_number(value, None)
            if height is None:
                continue
            rule = f'.{img_class} {{ max-height: {height:g}px !important; }}'
            if media:
                rule = f'@media {media} {{ {rule} }}'
            rules.append(rule)

    return '\n'.join(rules)


def generate_base_html(title: str, css: str, body: str, custom_css: str = None) -> str:
    """Generate complete HTML document with CSS and body content."""
    custom_style = ""
    if custom_css:
        custom_style = f'<style>\n{neutralize_css(custom_css)}\n    </style>'

    return f'''<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{title}</title>
    <style>
{css}
    </style>
    {custom_style}
</head>
<body>
    {body}
</body>
</html>'''
