"""Compile mask patterns into ordered slot sequences."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from .errors import InvalidPlaceholderError, MaskedInputError
from .slots import Slot, SlotKind

LOGGER = logging.getLogger(__name__)

ESCAPE_MARKER = "'"
DEFAULT_PLACEHOLDER = "_"

CLASS_MARKERS: Mapping[str, SlotKind] = MappingProxyType(
    {
        "#": SlotKind.DIGIT,
        "?": SlotKind.LETTER,
        "A": SlotKind.ALPHANUMERIC,
        "H": SlotKind.HEX,
        "U": SlotKind.UPPER_LETTER,
        "L": SlotKind.LOWER_LETTER,
        "*": SlotKind.ANY,
    }
)


class MalformedMaskError(MaskedInputError):
    """Raised when a mask pattern cannot be compiled."""

    def __init__(self, pattern: str, index: int, reason: str) -> None:
        super().__init__(f"malformed mask {pattern!r} at index {index}: {reason}")
        self.pattern = pattern
        self.index = index


@dataclass(frozen=True)
class SlotDescription:
    """Static summary of a compiled slot used by reporting tools."""

    index: int
    kind: SlotKind
    literal: str | None


def validate_placeholder(placeholder: str) -> str:
    """Return ``placeholder`` after checking it is a single character."""

    if not isinstance(placeholder, str) or len(placeholder) != 1:
        raise InvalidPlaceholderError(
            f"placeholder must be exactly one character, received {placeholder!r}"
        )
    return placeholder


def compile_mask(pattern: str, placeholder: str = DEFAULT_PLACEHOLDER) -> Tuple[Slot, ...]:
    """Scan ``pattern`` left to right and return its slot sequence.

    Escaped characters and anything outside :data:`CLASS_MARKERS` become literal
    slots. Class markers become unfilled input slots showing ``placeholder``.
    """

    validate_placeholder(placeholder)
    slots: list[Slot] = []
    index = 0
    length = len(pattern)
    while index < length:
        char = pattern[index]
        if char == ESCAPE_MARKER:
            if index + 1 >= length:
                raise MalformedMaskError(pattern, index, "escape marker has no following character")
            slots.append(Slot.literal(pattern[index + 1]))
            index += 2
            continue
        kind = CLASS_MARKERS.get(char)
        if kind is None:
            slots.append(Slot.literal(char))
        else:
            slots.append(Slot.placeholder_slot(kind, placeholder))
        index += 1

    LOGGER.debug("compiled mask %r into %d slots", pattern, len(slots))
    return tuple(slots)


def describe_pattern(pattern: str) -> Tuple[SlotDescription, ...]:
    """Return per-slot descriptions for ``pattern`` without keeping any state."""

    return tuple(
        SlotDescription(index=index, kind=slot.kind, literal=slot.literal_char)
        for index, slot in enumerate(compile_mask(pattern))
    )


__all__ = [
    "CLASS_MARKERS",
    "DEFAULT_PLACEHOLDER",
    "ESCAPE_MARKER",
    "MalformedMaskError",
    "SlotDescription",
    "compile_mask",
    "describe_pattern",
    "validate_placeholder",
]
