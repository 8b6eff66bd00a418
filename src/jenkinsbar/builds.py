from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

class BuildOutcome(str, Enum):
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    UNSTABLE = "UNSTABLE"
    ABORTED = "ABORTED"
    NOT_BUILT = "NOT_BUILT"

    @classmethod
    def parse(cls, value: Any) -> BuildOutcome | None:
        if value is None:
            return None
        try:
            return cls(str(value).upper())
        except ValueError:
            return None

@dataclass(frozen=True)
class BuildResult:
    display_name: str
    is_running: bool = False
    outcome: BuildOutcome | None = None

    @classmethod
    def from_json(cls, js: dict[str, Any]) -> BuildResult:
        # fullDisplayName carries the job name ("app #12"), displayName only "#12"
        name = js.get("fullDisplayName") or js.get("displayName") or f'#{js.get("number", "?")}'
        return cls(
            display_name=str(name),
            is_running=bool(js.get("building", False)),
            outcome=BuildOutcome.parse(js.get("result")),
        )

class Kind(str, Enum):
    RUNNING = "running"
    FAILED = "failed"
    IGNORED = "ignored"

@dataclass(frozen=True)
class Classification:
    kind: Kind
    display_name: str = ""

IGNORED = Classification(Kind.IGNORED)

def classify(result: BuildResult | None) -> Classification | None:
    """Reduce the latest build of a job to what the bar shows for it.

    ``None`` means the job or its build could not be fetched and stays
    unclassified. A running build wins over whatever outcome it reports.
    """
    if result is None:
        return None
    if result.is_running:
        return Classification(Kind.RUNNING, result.display_name)
    if result.outcome is BuildOutcome.FAILURE:
        return Classification(Kind.FAILED, result.display_name)
    return IGNORED
