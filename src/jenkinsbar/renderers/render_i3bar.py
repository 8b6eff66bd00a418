"""i3bar protocol output.

The stream is a JSON header line, then an endless JSON array whose elements
are status lines; every status line is itself a list of blocks.
"""
from __future__ import annotations

import json

from ..widgets.base import WidgetUpdate

HEADER = {"version": 1}

def preamble() -> list[str]:
    return [json.dumps(HEADER), "["]

def block(update: WidgetUpdate) -> dict:
    return {
        "name": update.name,
        "full_text": update.content,
        "markup": "pango",
    }

def render(update: WidgetUpdate, first: bool) -> str:
    line = json.dumps([block(update)])
    return line if first else f",{line}"
