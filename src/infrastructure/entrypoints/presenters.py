"""
JSON rendering of domain records.

Domain dataclasses use snake_case; the HTTP contract uses the camelCase field
names the dashboard was built against (market_cap → marketCap).
"""

import dataclasses
from typing import Any

from pydantic.alias_generators import to_camel


def present(value: Any) -> Any:
    """Recursively convert dataclasses (and lists of them) into camelCase dicts."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            to_camel(field.name): present(getattr(value, field.name))
            for field in dataclasses.fields(value)
        }
    if isinstance(value, (list, tuple)):
        return [present(item) for item in value]
    return value
