"""
Quote Engine Package

Renders a company's customized quote page from a layout config and the
quote data. Separated from routers for maintainability.

Components:
- conditions: Section display conditions
- formatting: Shared value formats
- placeholders: Placeholder registry and template resolver
- sanitizer: Allow-list sanitizer for custom section HTML
- renderers: Built-in section renderers (r_* functions) and dispatcher
- templates: CSS generation and page shell
- layout_renderer: Render pass over a layout
- layout_config: Layout schema, defaults, parsing and validation
- branding_config: Default branding settings and helpers
- layout_store: Company layout resolution
- quote_data: Quote page data builder
"""

from .branding_config import DEFAULT_BRANDING, get_branding
from .conditions import evaluate
from .layout_config import (
    DEFAULT_GLOBAL_STYLES,
    DEFAULT_QUOTE_LAYOUT,
    LayoutConfigError,
    SectionComponent,
    load_layout_config,
    parse_layout_config,
    validate_layout,
)
from .layout_renderer import RenderResult, compose_body, render_layout, render_quote_page
from .layout_store import ResolvedLayout, resolve_layout_config
from .placeholders import PLACEHOLDER_REGISTRY, resolve_template
from .quote_data import build_quote_page_data
from .renderers import SECTION_RENDERERS, RenderNode, dispatch_section
from .sanitizer import sanitize

__all__ = [
    'DEFAULT_BRANDING',
    'DEFAULT_GLOBAL_STYLES',
    'DEFAULT_QUOTE_LAYOUT',
    'PLACEHOLDER_REGISTRY',
    'SECTION_RENDERERS',
    'LayoutConfigError',
    'RenderNode',
    'RenderResult',
    'ResolvedLayout',
    'SectionComponent',
    'build_quote_page_data',
    'compose_body',
    'dispatch_section',
    'evaluate',
    'get_branding',
    'load_layout_config',
    'parse_layout_config',
    'render_layout',
    'render_quote_page',
    'resolve_layout_config',
    'resolve_template',
    'sanitize',
    'validate_layout',
]
