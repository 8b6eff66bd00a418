from __future__ import annotations

from typing import Iterable

from .builds import BuildResult, Kind, classify
from .markup import FAILED_BACKGROUND, RUNNING_BACKGROUND, GroupSummary, StyledText

_BACKGROUNDS = {
    Kind.RUNNING: RUNNING_BACKGROUND,
    Kind.FAILED: FAILED_BACKGROUND,
}

DISCONNECTED = GroupSummary(connected=False)

def reduce_group(results: Iterable[BuildResult | None]) -> GroupSummary:
    """Fold the latest builds of a group's jobs, in job order, into one summary.

    The group counts as connected as soon as Jenkins answered for any job,
    whatever that build's state. Only running and failed builds get a fragment.
    """
    connected = False
    fragments: list[StyledText] = []
    counts = {Kind.RUNNING: 0, Kind.FAILED: 0}
    for result in results:
        classification = classify(result)
        if classification is None:
            continue
        connected = True
        background = _BACKGROUNDS.get(classification.kind)
        if background is not None:
            counts[classification.kind] += 1
            fragments.append(StyledText(classification.display_name, background=background))
    return GroupSummary(
        connected=connected,
        fragments=tuple(fragments),
        running=counts[Kind.RUNNING],
        failed=counts[Kind.FAILED],
    )
