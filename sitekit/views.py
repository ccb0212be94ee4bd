"""Jinja2 view rendering with the escaping helpers exposed to templates."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jinja2 import BaseLoader, Environment, FileSystemLoader

from sitekit.attributes import stringify_attributes
from sitekit.escaping import esc


def build_environment(loader: BaseLoader | None = None, *, directory: str = "templates") -> Environment:
    """Create a template environment; data is rendered raw unless a template calls ``esc``."""

    environment = Environment(loader=loader or FileSystemLoader(directory), autoescape=False)
    environment.filters["esc"] = esc
    environment.filters["stringify_attributes"] = stringify_attributes
    return environment


class ViewRenderer:
    """Collect view data and render named templates with it."""

    def __init__(self, environment: Environment) -> None:
        self.environment = environment
        self._data: dict[str, Any] = {}

    @property
    def data(self) -> dict[str, Any]:
        return dict(self._data)

    def set_data(self, data: Mapping[str, Any]) -> ViewRenderer:
        self._data.update(data)
        return self

    def render(self, name: str, save_data: bool = False) -> str:
        output = self.environment.get_template(name).render(self._data)
        if not save_data:
            self._data = {}
        return output


def view(
    renderer: ViewRenderer,
    name: str,
    data: Mapping[str, Any] | None = None,
    options: Mapping[str, Any] | None = None,
) -> str:
    """Render a view; pass ``{"save_data": True}`` to keep its data for the next render."""

    save_data = bool(options) and options.get("save_data") is True
    return renderer.set_data(data or {}).render(name, save_data=save_data)
