"""Runtime slot model for compiled masks."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SlotKind(Enum):
    """Input class accepted by a compiled mask position."""

    LITERAL = "literal"
    DIGIT = "digit"
    LETTER = "letter"
    ALPHANUMERIC = "alphanumeric"
    HEX = "hex"
    UPPER_LETTER = "upper_letter"
    LOWER_LETTER = "lower_letter"
    ANY = "any"

    @property
    def is_literal(self) -> bool:
        return self is SlotKind.LITERAL


@dataclass(slots=True)
class Slot:
    """One fixed position of a compiled mask.

    Literal slots are created filled with ``current_value == literal_char`` and
    never change afterwards. Input slots toggle between the placeholder
    (``filled`` is ``False``) and an accepted character.
    """

    kind: SlotKind
    current_value: str
    filled: bool = False
    literal_char: str | None = None

    @classmethod
    def literal(cls, char: str) -> "Slot":
        return cls(kind=SlotKind.LITERAL, current_value=char, filled=True, literal_char=char)

    @classmethod
    def placeholder_slot(cls, kind: SlotKind, placeholder: str) -> "Slot":
        return cls(kind=kind, current_value=placeholder, filled=False)

    @property
    def is_literal(self) -> bool:
        return self.kind is SlotKind.LITERAL

    def fill(self, char: str) -> None:
        if self.is_literal:
            raise TypeError("literal slots are immutable")
        self.current_value = char
        self.filled = True

    def reset(self, placeholder: str) -> None:
        if self.is_literal:
            return
        self.current_value = placeholder
        self.filled = False


__all__ = ["Slot", "SlotKind"]
