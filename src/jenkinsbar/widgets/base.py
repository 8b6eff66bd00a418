from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

@dataclass(frozen=True)
class WidgetUpdate:
    content: str
    refresh_interval: int
    name: str = ""
    status: str = ""

class Widget(Protocol):
    name: str

    def update(self) -> WidgetUpdate | None:
        ...

    def close(self) -> None:
        ...
