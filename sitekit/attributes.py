"""Build HTML attribute strings and JS key/value lists from attribute maps."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Union

from sitekit.escaping import esc

Attributes = Union[str, Mapping[str, Any], Iterable[tuple[str, Any]], None]


def _attribute_pairs(attributes: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> Iterable[tuple[str, Any]]:
    if isinstance(attributes, Mapping):
        return attributes.items()
    return attributes


def _escaped(value: Any, context: str) -> Any:
    if value is None:
        return ""
    return esc(value, context)


def stringify_attributes(attributes: Attributes, js: bool = False) -> str:
    """
    Convert attributes to a string for use in a tag.

    A string is passed through behind a single space. Mappings (or key/value
    pairs) become ``key="value"`` pairs escaped for attributes, or with ``js``
    a comma-separated ``key=value`` list escaped for JavaScript. ``None``
    values render as empty strings. The string ``"0"`` counts as empty.
    """

    if not attributes or attributes == "0":
        return ""

    if isinstance(attributes, str):
        return f" {attributes}"

    if js:
        return ",".join(f"{key}={_escaped(value, 'js')}" for key, value in _attribute_pairs(attributes))

    return "".join(f' {key}="{_escaped(value, "attr")}"' for key, value in _attribute_pairs(attributes))
