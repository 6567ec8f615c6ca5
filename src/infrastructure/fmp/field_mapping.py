"""
Declarative mapping from raw FMP payloads to domain dataclasses.

Each normalizer describes its record as a FieldMap: one entry per dataclass
field, naming where the value comes from.

  * a plain string is the single authoritative upstream key, copied as-is;
  * Numeric(...) lists upstream spellings in priority order and takes the
    first one holding a real number (provider typos such as "...Activites"
    live here);
  * Text(...) does the same for non-empty strings.

The priority order of every alias group is part of the API contract.
"""

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Numeric:
    keys: tuple[str, ...]

    def __init__(self, *keys: str) -> None:
        object.__setattr__(self, "keys", keys)


@dataclass(frozen=True)
class Text:
    keys: tuple[str, ...]

    def __init__(self, *keys: str) -> None:
        object.__setattr__(self, "keys", keys)


FieldSource = Union[str, Numeric, Text]
FieldMap = Mapping[str, FieldSource]


def is_number(value: Any) -> bool:
    # bool is an int subclass but never a financial figure.
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def pick_number(raw: Mapping[str, Any], keys: tuple[str, ...]) -> Optional[float]:
    """First value among *keys* that is a number; None when none is."""
    for key in keys:
        value = raw.get(key)
        if is_number(value):
            return value
    return None


def pick_text(raw: Mapping[str, Any], keys: tuple[str, ...]) -> Optional[str]:
    for key in keys:
        value = raw.get(key)
        if isinstance(value, str) and value != "":
            return value
    return None


def resolve(raw: Mapping[str, Any], source: FieldSource) -> Any:
    if isinstance(source, Numeric):
        return pick_number(raw, source.keys)
    if isinstance(source, Text):
        return pick_text(raw, source.keys)
    return raw.get(source)


def build_record(record_type: type[T], raw: Any, field_map: FieldMap) -> T:
    """Construct *record_type* from one raw upstream object.

    A non-dict element (e.g. a stray null inside the array) yields a record
    whose fields are all None; individual fields never raise.
    """
    source = raw if isinstance(raw, Mapping) else {}
    values = {f.name: resolve(source, field_map[f.name]) for f in fields(record_type)}
    return record_type(**values)
