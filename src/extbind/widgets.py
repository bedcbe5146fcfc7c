"""Widget augmentations backed by a bound `WidgetService`.

Bootstrap once, then call the augmentation functions anywhere:

  services = ServiceCollection().add_singleton(WidgetService, DefaultWidgetService)
  widgets.initialize(services.build_provider())
  widgets.enhance_with_di(Widget("test", 42))
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Protocol

from ._binding import augmentation
from ._cell import RegistryCell


@dataclass(frozen=True)
class Widget:
    name: str
    value: int

    def __str__(self) -> str:
        return f"Widget(Name={self.name}, Value={self.value})"


class WidgetService(Protocol):
    def enhance(self, widget: Widget) -> Widget: ...


class DefaultWidgetService:
    def enhance(self, widget: Widget) -> Widget:
        return replace(widget, name=widget.name.upper(), value=widget.value * 2)


_cell: RegistryCell[WidgetService] = RegistryCell(WidgetService)


def initialize(provider: object) -> None:
    """Bind the widget augmentations to the `WidgetService` of `provider`."""
    _cell.initialize(provider)


enhance_with_di = augmentation(
    _cell,
    "enhance",
    name="enhance_with_di",
    doc="Return `widget` enhanced by the bound `WidgetService`.",
)
