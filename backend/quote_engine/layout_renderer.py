"""
Quote Layout Renderer

One render pass over a layout:

    1. Effective global styles (defaults for missing keys)
    2. Banner max-height overrides for the hero/footer image sections
    3. Drop sections with visible == False, then sections whose
       condition evaluates False
    4. Dispatch each remaining section to a renderer
    5. Custom HTML and the acceptance slot render full width; every
       other built-in is wrapped in the max-width container

A render reads the layout and quote data and never modifies either.
"""

import logging
from dataclasses import dataclass, field
from html import escape as html_escape
from typing import List, Optional

from .conditions import evaluate
from .layout_config import get_effective_global_styles, normalize_layout
from .renderers import RenderNode, dispatch_section
from .templates import css_value, generate_banner_overrides, generate_base_html, generate_css

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    global_styles: dict
    structural_css: str
    nodes: List[RenderNode] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'globalStyles': self.global_styles,
            'structuralCss': self.structural_css,
            'nodes': [node.to_dict() for node in self.nodes],
        }


def is_section_visible(section: dict, data: dict) -> bool:
    """visible == False always hides; otherwise the condition decides."""
    if section.get('visible') is False:
        return False
    condition = section.get('condition')
    if condition:
        return evaluate(condition, data)
    return True


def render_layout(layout: Optional[dict], data: Optional[dict], slots: Optional[dict] = None) -> RenderResult:
    """
    Render a layout against quote page data.

    Args:
        layout: Layout config dict (any saved version)
        data: Quote page data, see quote_data.build_quote_page_data
        slots: Host fragments keyed by slot name
               ("acceptanceFormSlot", "nextStepsFormSlot")

    Returns:
        RenderResult with nodes in section order
    """
    layout = normalize_layout(layout if isinstance(layout, dict) else {})
    data = data if isinstance(data, dict) else {}
    global_styles = get_effective_global_styles(layout)

    # Banner images fall back to the layout's images when the quote has none
    if not data.get('heroBannerUrl') or not data.get('footerImageUrl'):
        data = dict(data)
        data['heroBannerUrl'] = data.get('heroBannerUrl') or global_styles.get('heroBannerUrl', '')
        data['footerImageUrl'] = data.get('footerImageUrl') or global_styles.get('footerImageUrl', '')

    nodes = []
    for section in layout['sections']:
        if not is_section_visible(section, data):
            continue
        node = dispatch_section(section, data, slots)
        if node is not None:
            nodes.append(node)

    logger.debug("Rendered %d of %d sections", len(nodes), len(layout['sections']))

    return RenderResult(
        global_styles=global_styles,
        structural_css=generate_banner_overrides(layout['sections']),
        nodes=nodes,
    )


def _node_html(node: RenderNode) -> str:
    if not node.css:
        return node.html
    return f'<style>{node.css}</style>\n{node.html}'


def compose_body(result: RenderResult) -> str:
    """Join nodes in order, wrapping contained sections in the max-width container."""
    max_width = html_escape(css_value(result.global_styles.get('maxWidth'), '1152px'))
    parts = []
    for node in result.nodes:
        html = _node_html(node)
        if node.full_bleed:
            parts.append(f'<div class="quote-section" data-section-id="{html_escape(node.section_id)}">{html}</div>')
        else:
            parts.append(
                f'<div class="quote-section quote-container" data-section-id="{html_escape(node.section_id)}" '
                f'style="max-width: {max_width}; margin: 0 auto">{html}</div>'
            )
    return '\n'.join(parts)


def render_quote_page(layout: Optional[dict], data: Optional[dict],
                      slots: Optional[dict] = None, title: str = None) -> str:
    """Render a complete HTML document for a quote page."""
    result = render_layout(layout, data, slots)

    css = generate_css(result.global_styles)
    if result.structural_css:
        css = f'{css}\n{result.structural_css}'

    if title is None:
        company = (data or {}).get('companyName') or 'Quote'
        title = f'{company} - Your Moving Quote'

    return generate_base_html(
        title=html_escape(title),
        css=css,
        body=compose_body(result),
        custom_css=result.global_styles.get('customCss'),
    )
