"""Swipe Classification — maps a drag translation on the top card to an action.

Invariants:
    - Horizontal swipes win over vertical: |dx| > threshold decides save/skip first
    - Right = save, left = skip, up = details; anything shorter = none
    - classify_swipe is PURE: the feed controller applies the resulting action
"""

from applixy.core.domain_types import SwipeAction


SWIPE_THRESHOLD: float = 100.0


def classify_swipe(dx: float, dy: float, threshold: float = SWIPE_THRESHOLD) -> SwipeAction:
    """Classify a drag by its translation (screen points, y grows downward)."""
    if abs(dx) > threshold:
        return SwipeAction.SAVE if dx > 0 else SwipeAction.SKIP
    if dy < -threshold:
        return SwipeAction.DETAILS
    return SwipeAction.NONE


def moves_cursor(action: SwipeAction) -> bool:
    return action in (SwipeAction.SAVE, SwipeAction.SKIP)
