"""
Section Display Conditions

A section may carry a condition that decides whether it renders for a
given quote:

    {"field": "job.moveType", "operator": "==", "value": "EX"}

The field is a dot-path into the quote page data. Comparison is
case-insensitive and ignores surrounding whitespace. A missing field
reads as the empty string, never as an error.

Unknown operators evaluate to True so a section is shown rather than
silently hidden.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from .formatting import stringify

logger = logging.getLogger(__name__)

CONDITION_OPERATORS = (
    '==',
    '!=',
    'contains',
    'startsWith',
    'endsWith',
    'isBlank',
    'isNotBlank',
)

# Operators that ignore condition["value"]
VALUELESS_OPERATORS = ('isBlank', 'isNotBlank')


def resolve_field(data: Any, path: Optional[str]) -> Any:
    """
    Walk a dot-separated path through nested dicts (and list indexes).

    Returns None when a segment is missing or the current value can't
    be indexed.
    """
    if not path:
        return None

    current = data
    for segment in str(path).split('.'):
        if isinstance(current, Mapping):
            if segment not in current:
                return None
            current = current[segment]
        elif isinstance(current, (list, tuple)) and segment.isdigit():
            index = int(segment)
            if index >= len(current):
                return None
            current = current[index]
        else:
            return None
    return current


def _normalize(value: Any) -> str:
    return stringify(value).strip().lower()


def evaluate(condition: Optional[Mapping], data: Any) -> bool:
    """Evaluate one section condition against quote page data."""
    if not condition:
        return True
    if not isinstance(condition, Mapping):
        logger.debug("Ignoring malformed condition %r, showing section", condition)
        return True

    field_value = _normalize(resolve_field(data, condition.get('field')))
    expected = _normalize(condition.get('value'))
    operator = condition.get('operator')

    if operator == '==':
        return field_value == expected
    if operator == '!=':
        return field_value != expected
    if operator == 'contains':
        return expected in field_value
    if operator == 'startsWith':
        return field_value.startswith(expected)
    if operator == 'endsWith':
        return field_value.endswith(expected)
    if operator == 'isBlank':
        return field_value == ''
    if operator == 'isNotBlank':
        return field_value != ''

    logger.debug("Unknown condition operator %r on field %r, showing section",
                 operator, condition.get('field'))
    return True
