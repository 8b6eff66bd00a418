"""Pango markup for the bar.

Every piece of text on the bar is a ``<span>`` carrying its own foreground and
background, so the block looks the same whatever the bar's defaults are.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable
from xml.sax.saxutils import escape

from .config import TrackedGroup

DEFAULT_FOREGROUND = "white"
DEFAULT_BACKGROUND = "black"
DISCONNECTED_FOREGROUND = "grey"
RUNNING_BACKGROUND = "blue"
FAILED_BACKGROUND = "red"

@dataclass(frozen=True)
class StyledText:
    text: str
    foreground: str = DEFAULT_FOREGROUND
    background: str = DEFAULT_BACKGROUND

@dataclass(frozen=True)
class GroupSummary:
    connected: bool
    fragments: tuple[StyledText, ...] = ()
    running: int = 0
    failed: int = 0

def render(styled: StyledText) -> str:
    return (
        f"<span foreground='{styled.foreground}' background='{styled.background}'>"
        f"{escape(styled.text)}</span>"
    )

SEPARATOR = render(StyledText("|"))
SPACE = render(StyledText(" "))

def _group_items(group: TrackedGroup, summary: GroupSummary) -> list[str]:
    if summary.connected:
        label = StyledText(group.name)
    else:
        label = StyledText(group.name, foreground=DISCONNECTED_FOREGROUND)
    items = [render(label)]
    # No separator at all when there is nothing noteworthy
    if summary.fragments:
        items.append(SEPARATOR.join(render(f) for f in summary.fragments))
    return items

def render_group(group: TrackedGroup, summary: GroupSummary) -> str:
    return SPACE.join(_group_items(group, summary))

def render_all(pairs: Iterable[tuple[TrackedGroup, GroupSummary]]) -> str:
    items: list[str] = []
    for group, summary in pairs:
        items.extend(_group_items(group, summary))
    return SPACE.join(items)
