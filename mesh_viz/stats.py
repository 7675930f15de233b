"""
Per-cycle statistics shown in the legend of a cycle snapshot.

The table always holds one "Activated" counter plus one counter per known
activation code, zero-filled, so viewers see the whole vocabulary and not only
the events that happened in a given cycle.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from mesh_core.enums import ActivationCode
from mesh_core.mesh import ActivationCycle

ACTIVATED = "Activated"


@dataclass(frozen=True)
class StatEntry:
    name: str
    value: int


def cycle_stats(cycle: ActivationCycle) -> List[StatEntry]:
    """
    Count the activation results of one cycle.

    Every result increments the counter of its code; results that report
    `activated` additionally increment "Activated". Codes outside the known
    set are not counted.

    Args:
        cycle: Activation cycle to summarize

    Returns:
        One entry per counter (len(ActivationCode) + 1), sorted by name
    """
    activated = 0
    by_code = dict.fromkeys(ActivationCode, 0)

    for result in cycle.results:
        if result.activated:
            activated += 1
        if result.code in by_code:
            by_code[result.code] += 1

    entries = [StatEntry(ACTIVATED, activated)]
    entries.extend(StatEntry(str(code), count) for code, count in by_code.items())
    return sorted(entries, key=lambda e: e.name)


def stats_as_dict(entries: List[StatEntry]) -> Dict[str, int]:
    """Return entries as an ordered name -> value dict."""
    return {e.name: e.value for e in entries}
