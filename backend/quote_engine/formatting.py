"""
Value Formatting for Quote Pages

One table of value formats shared by the template resolver, the condition
evaluator and the built-in section renderers. Every number that reaches a
quote page goes through format_value() so two-decimal money, counts and
fallback text look the same everywhere.
"""

import math
from typing import Any, Callable, Dict


def stringify(value: Any) -> str:
    """
    Convert a data value to display text.

    None becomes "", booleans become "true"/"false", whole floats drop
    their trailing ".0" and lists are comma-joined.
    """
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ','.join(stringify(v) for v in value)
    return str(value)


def to_number(value: Any, default: float = 0.0) -> float:
    """Coerce a number or numeric string, falling back to default."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value) if isinstance(value, (int, float)) else float(str(value).strip())
    except (ValueError, TypeError, OverflowError):
        return default
    # nan and inf can't be shown or counted
    return number if math.isfinite(number) else default


def _fmt_text(value: Any, fallback: Any) -> str:
    text = stringify(value)
    return text if text else stringify(fallback)


def _fmt_count(value: Any, fallback: Any) -> str:
    # Zero counts as missing, so a quantity of 0 shows the fallback
    if not value:
        return stringify(fallback)
    return stringify(value)


def _fmt_fixed2(value: Any, fallback: Any) -> str:
    number = to_number(value, to_number(fallback))
    if not number:
        number = to_number(fallback)
    return f'{number:.2f}'


def _fmt_number(value: Any, fallback: Any) -> str:
    if value is None or value == '':
        return stringify(fallback)
    return stringify(value)


def _fmt_money(value: Any, fallback: Any) -> str:
    return f'{to_number(value, to_number(fallback)):,.2f}'


FORMATTERS: Dict[str, Callable[[Any, Any], str]] = {
    'text': _fmt_text,
    'count': _fmt_count,
    'fixed2': _fmt_fixed2,
    'number': _fmt_number,
    'money': _fmt_money,
}


def format_value(value: Any, fmt: str = 'text', fallback: Any = '') -> str:
    """Format a value with a named format from FORMATTERS."""
    formatter = FORMATTERS.get(fmt, _fmt_text)
    return formatter(value, fallback)


def format_money(value: Any, symbol: str = '$') -> str:
    """Money with thousands separators, e.g. $2,675.00"""
    return f"{symbol}{format_value(value, 'money', 0)}"
