"""Collision detection between sibling windows in one parent scope."""
from typing import Any, Iterable

from .windows import ActiveWindow


def collides(candidate: ActiveWindow, sibling: ActiveWindow, ignore_empty: bool = False) -> bool:
    """
    Return True if `sibling` is active at some instant `candidate` is active.

    A sibling conflicts when it starts before the candidate finishes and
    finishes after the candidate starts. Open-ended windows never finish.
    """
    if ignore_empty and sibling.is_empty:
        return False
    starts_before_finish = candidate.finish is None or sibling.start < candidate.finish
    finishes_after_start = sibling.finish is None or sibling.finish > candidate.start
    return starts_before_finish and finishes_after_start


def detect_collisions(
    candidate: ActiveWindow,
    siblings: Iterable[tuple[Any, ActiveWindow]],
    self_id: Any = None,
    ignore_empty: bool = False,
) -> list:
    """
    Find every sibling whose window overlaps the candidate's.

    Args:
        candidate: Window of the record about to be written
        siblings: (id, window) pairs sharing the candidate's parent scope
        self_id: Id of the record itself; its stored state is skipped so an
            update never collides with its own previous values
        ignore_empty: Treat zero-length windows as never occupying the scope

    Returns:
        Ids of the conflicting siblings, in input order
    """
    if ignore_empty and candidate.is_empty:
        return []

    conflicts = []
    for sibling_id, window in siblings:
        if self_id is not None and sibling_id == self_id:
            continue
        if collides(candidate, window, ignore_empty=ignore_empty):
            conflicts.append(sibling_id)
    return conflicts
