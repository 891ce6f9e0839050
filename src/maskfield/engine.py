"""Edit processor that keeps logical and display text in step with a mask."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .errors import MaskedInputError
from .mask_compiler import DEFAULT_PLACEHOLDER, compile_mask, validate_placeholder
from .position_mapper import first_unfilled_position, to_display_index, to_logical_index
from .slots import Slot
from .validation import policy_for

LOGGER = logging.getLogger(__name__)


class IndexRangeError(MaskedInputError, IndexError):
    """Raised when display bounds fall outside ``0 <= start <= end <= length``."""


@dataclass(frozen=True)
class RebuildResult:
    """Display text and accepted logical text produced by a rebuild pass."""

    display_text: str
    logical_text: str


@dataclass(frozen=True)
class EditResult:
    """State handed back to the host after a mutating call."""

    display_text: str
    logical_text: str
    caret: int


class MaskedTextEngine:
    """Apply display-coordinate edits to a compiled mask.

    The engine owns its slots and logical text exclusively. Hosts drive it
    through the public edit methods and apply the returned caret to their own
    selection state.
    """

    def __init__(
        self,
        mask: str = "",
        placeholder: str = DEFAULT_PLACEHOLDER,
        text: str = "",
    ) -> None:
        self._placeholder = validate_placeholder(placeholder)
        self._slots: List[Slot] = list(compile_mask(mask, placeholder))
        self._mask = mask
        self._logical_text = ""
        self._selection: Tuple[int, int] = (0, 0)
        if text:
            self._consume(text)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def mask(self) -> str:
        return self._mask

    @property
    def placeholder(self) -> str:
        return self._placeholder

    @property
    def logical_text(self) -> str:
        return self._logical_text

    @property
    def display_text(self) -> str:
        return "".join(slot.current_value for slot in self._slots)

    @property
    def display_length(self) -> int:
        return len(self._slots)

    @property
    def slots(self) -> Tuple[Slot, ...]:
        return tuple(self._slots)

    @property
    def selection(self) -> Tuple[int, int]:
        return self._selection

    @property
    def capacity(self) -> int:
        """Number of input (non-literal) slots in the compiled mask."""

        return sum(1 for slot in self._slots if not slot.is_literal)

    @property
    def is_complete(self) -> bool:
        return len(self._logical_text) == self.capacity

    def first_unfilled_position(self) -> Optional[int]:
        """Return where a host should park the caret on focus, if anywhere."""

        return first_unfilled_position(self._slots)

    def to_logical_index(self, display_pos: int) -> int:
        return to_logical_index(self._slots, display_pos)

    def to_display_index(self, logical_pos: int) -> int:
        return to_display_index(self._slots, logical_pos)

    # ------------------------------------------------------------------
    # Rebuild
    # ------------------------------------------------------------------
    def rebuild(self, logical_text: str) -> RebuildResult:
        """Re-derive every slot from ``logical_text`` and return the outcome."""

        self._consume(logical_text)
        return RebuildResult(display_text=self.display_text, logical_text=self._logical_text)

    def _consume(self, candidate: str) -> List[bool]:
        """Greedily place ``candidate`` into the slots.

        Returns one flag per candidate character telling whether it was
        accepted. Rejected characters are dropped while the same slot is
        retried with the next character; characters left over once the slots
        run out are discarded.
        """

        for slot in self._slots:
            slot.reset(self._placeholder)

        accepted_flags = [False] * len(candidate)
        accepted: List[str] = []
        slot_index = 0
        char_index = 0
        slot_count = len(self._slots)
        while slot_index < slot_count and char_index < len(candidate):
            slot = self._slots[slot_index]
            if slot.is_literal:
                slot_index += 1
                continue
            char = candidate[char_index]
            policy = policy_for(slot.kind)
            if policy.accepts(char):
                value = policy.transform(char)
                slot.fill(value)
                accepted.append(value)
                accepted_flags[char_index] = True
                slot_index += 1
            else:
                LOGGER.debug(
                    "dropped %r at offset %d: rejected by %s slot %d",
                    char,
                    char_index,
                    slot.kind.value,
                    slot_index,
                )
            char_index += 1

        if char_index < len(candidate):
            LOGGER.debug(
                "discarded %d character(s) beyond mask capacity",
                len(candidate) - char_index,
            )

        self._store_logical_text("".join(accepted))
        return accepted_flags

    def _store_logical_text(self, text: str) -> None:
        # Quiet setter: never routes back through a public edit entry point.
        self._logical_text = text

    # ------------------------------------------------------------------
    # Edit entry points
    # ------------------------------------------------------------------
    def replace_text(self, start: int, end: int, text: str) -> EditResult:
        """Replace the display range ``[start, end)`` with ``text``.

        The caret lands after the last character of ``text`` that the mask
        accepted, not after the raw input length.
        """

        self._check_range(start, end)
        plain_start = self.to_logical_index(start)
        plain_end = self.to_logical_index(end)
        previous = self._logical_text
        candidate = previous[:plain_start] + text + previous[plain_end:]
        flags = self._consume(candidate)
        accepted_through_edit = sum(flags[: plain_start + len(text)])
        caret = self.to_display_index(accepted_through_edit)
        LOGGER.debug(
            "replace [%d, %d) with %r -> %r (caret %d)",
            start,
            end,
            text,
            self._logical_text,
            caret,
        )
        return self._finish(caret)

    def replace_selection(self, text: str) -> EditResult:
        start, end = self._selection
        if text == "":
            return self.delete_text(start, end)
        return self.replace_text(start, end, text)

    def delete_text(self, start: int, end: int) -> EditResult:
        """Remove the logical characters under ``[start, end)``.

        The caret returns to ``start`` even when that position sits over a
        literal or a placeholder.
        """

        self._check_range(start, end)
        plain_start = self.to_logical_index(start)
        plain_end = self.to_logical_index(end)
        previous = self._logical_text
        self._consume(previous[:plain_start] + previous[plain_end:])
        LOGGER.debug("delete [%d, %d) -> %r", start, end, self._logical_text)
        return self._finish(start)

    def set_logical_text(self, text: str) -> EditResult:
        self._consume(text)
        return self._finish(self.to_display_index(len(self._logical_text)))

    def clear(self) -> EditResult:
        self._consume("")
        caret = self.first_unfilled_position()
        return self._finish(0 if caret is None else caret)

    def set_mask(self, pattern: str) -> EditResult:
        """Recompile against ``pattern`` and re-validate the current text.

        A malformed pattern raises before any state changes.
        """

        slots = compile_mask(pattern, self._placeholder)
        previous = self._logical_text
        self._slots = list(slots)
        self._mask = pattern
        self._consume(previous)
        return self._finish(self.to_display_index(len(self._logical_text)))

    def set_placeholder(self, placeholder: str) -> EditResult:
        """Swap the filler shown in unfilled slots; filled slots keep their values."""

        self._placeholder = validate_placeholder(placeholder)
        for slot in self._slots:
            if not slot.filled:
                slot.reset(placeholder)
        return EditResult(
            display_text=self.display_text,
            logical_text=self._logical_text,
            caret=self._selection[1],
        )

    def select_range(self, start: int, end: int) -> Tuple[int, int]:
        """Record the host selection used by :meth:`replace_selection`."""

        self._check_range(start, end)
        self._selection = (start, end)
        return self._selection

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _check_range(self, start: int, end: int) -> None:
        length = len(self._slots)
        if start < 0 or end < 0:
            raise IndexRangeError(f"negative display index in range ({start}, {end})")
        if start > end:
            raise IndexRangeError(f"range start {start} exceeds end {end}")
        if end > length:
            raise IndexRangeError(f"range end {end} exceeds display length {length}")

    def _finish(self, caret: int) -> EditResult:
        self._selection = (caret, caret)
        return EditResult(
            display_text=self.display_text,
            logical_text=self._logical_text,
            caret=caret,
        )


__all__ = ["EditResult", "IndexRangeError", "MaskedTextEngine", "RebuildResult"]
