from __future__ import annotations

import json

from ..widgets.base import WidgetUpdate

TOOLTIPS = {
    "ok": "Jenkins: all good",
    "building": "Jenkins: build running",
    "failed": "Jenkins: build failed",
    "degraded": "Jenkins: some servers unreachable",
    "offline": "Jenkins: offline",
}

def preamble() -> list[str]:
    return []

def render(update: WidgetUpdate, first: bool) -> str:
    # waybar custom module with return-type: json, one object per line
    status = update.status or "ok"
    return json.dumps({
        "text": update.content,
        "tooltip": TOOLTIPS.get(status, "Jenkins"),
        "class": f"jenkins-{status}",
    })
