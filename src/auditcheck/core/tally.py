"""Per-action tally aggregation."""

from collections.abc import Mapping
from dataclasses import asdict, replace
from types import MappingProxyType

from auditcheck.core.models import ATTEMPTED, SUCCESSFUL, UNSUCCESSFUL, ActionTally

TallyTable = dict[str, ActionTally]


def record(table: TallyTable, action: str, result: str) -> TallyTable:
    """Record one event outcome for an action.

    Creates a zero-valued tally the first time an action is seen, bumps the
    counter matching ``result`` and always bumps ``total``. Result labels
    other than attempted/successful/unsuccessful only count towards ``total``.

    Args:
        table: Tally table to update in place.
        action: Attempted-action label of the event.
        result: Action-result label of the event.

    Returns:
        The same table, for chaining.
    """
    tally = table.get(action)
    if tally is None:
        tally = table[action] = ActionTally()

    if result == SUCCESSFUL:
        tally.successful += 1
    elif result == UNSUCCESSFUL:
        tally.unsuccessful += 1
    elif result == ATTEMPTED:
        tally.attempted += 1

    tally.total += 1
    return table


def snapshot(table: TallyTable) -> Mapping[str, ActionTally]:
    """Return a read-only view over copies of the current tallies.

    Later updates to ``table`` are not reflected in the snapshot.
    """
    return MappingProxyType({action: replace(t) for action, t in table.items()})


def tally_to_dict(table: Mapping[str, ActionTally]) -> dict[str, dict[str, int]]:
    """Convert a tally table to plain, JSON-ready dictionaries."""
    return {action: asdict(t) for action, t in table.items()}
