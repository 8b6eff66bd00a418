from __future__ import annotations

from ..widgets.base import WidgetUpdate

from . import render_i3bar, render_waybar

FORMATS = ("i3bar", "waybar", "plain")

def _module(kind: str):
    kind = kind.lower().strip()
    if kind == "i3bar":
        return render_i3bar
    if kind == "waybar":
        return render_waybar
    if kind == "plain":
        return None
    raise ValueError(f"Unknown output format: {kind}")

def preamble_for(kind: str) -> list[str]:
    mod = _module(kind)
    return mod.preamble() if mod is not None else []

def render_with(kind: str, update: WidgetUpdate, first: bool = True) -> str:
    mod = _module(kind)
    if mod is None:
        return update.content
    return mod.render(update, first)
