"""Translate indices between display and logical coordinates."""
from __future__ import annotations

from typing import Optional, Sequence

from .slots import Slot


def to_logical_index(slots: Sequence[Slot], display_pos: int) -> int:
    """Count filled input slots strictly before ``display_pos``.

    ``display_pos`` is clamped to the mask length. Unfilled slots are not
    counted, so a position inside trailing placeholders maps to the end of the
    logical text.
    """

    limit = max(0, min(display_pos, len(slots)))
    count = 0
    for slot in slots[:limit]:
        if slot.filled and not slot.is_literal:
            count += 1
    return count


def to_display_index(slots: Sequence[Slot], logical_pos: int) -> int:
    """Return the display index just after the ``logical_pos``-th input slot."""

    literals = 0
    inputs = 0
    for slot in slots:
        if inputs >= logical_pos:
            break
        if slot.is_literal:
            literals += 1
        else:
            inputs += 1
    return literals + inputs


def first_unfilled_position(slots: Sequence[Slot]) -> Optional[int]:
    """Return the lowest unfilled input slot index, or ``None`` when full."""

    for index, slot in enumerate(slots):
        if not slot.is_literal and not slot.filled:
            return index
    return None


__all__ = ["first_unfilled_position", "to_display_index", "to_logical_index"]
