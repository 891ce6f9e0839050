"""Per-kind acceptance predicates and case transforms for input slots."""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping

from .slots import SlotKind

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def _never(char: str) -> bool:
    return False


def _always(char: str) -> bool:
    return True


def _is_digit(char: str) -> bool:
    return char.isdecimal()


def _is_letter(char: str) -> bool:
    return char.isalpha()


def _is_letter_or_digit(char: str) -> bool:
    return char.isalpha() or char.isdecimal()


def _is_hex(char: str) -> bool:
    return char in _HEX_DIGITS


def _identity(char: str) -> str:
    return char


def _single_char(converted: str, original: str) -> str:
    # One accepted character always occupies exactly one slot.
    if len(converted) != 1:
        return original
    return converted


def _to_upper(char: str) -> str:
    return _single_char(char.upper(), char)


def _to_lower(char: str) -> str:
    return _single_char(char.lower(), char)


@dataclass(frozen=True)
class SlotPolicy:
    """Acceptance predicate paired with the transform applied on acceptance."""

    accepts: Callable[[str], bool]
    transform: Callable[[str], str]


SLOT_POLICIES: Mapping[SlotKind, SlotPolicy] = MappingProxyType(
    {
        SlotKind.LITERAL: SlotPolicy(_never, _identity),
        SlotKind.DIGIT: SlotPolicy(_is_digit, _identity),
        SlotKind.LETTER: SlotPolicy(_is_letter, _identity),
        SlotKind.ALPHANUMERIC: SlotPolicy(_is_letter_or_digit, _identity),
        SlotKind.HEX: SlotPolicy(_is_hex, _identity),
        SlotKind.UPPER_LETTER: SlotPolicy(_is_letter, _to_upper),
        SlotKind.LOWER_LETTER: SlotPolicy(_is_letter, _to_lower),
        SlotKind.ANY: SlotPolicy(_always, _identity),
    }
)


def policy_for(kind: SlotKind) -> SlotPolicy:
    """Return the :class:`SlotPolicy` registered for ``kind``."""

    try:
        return SLOT_POLICIES[kind]
    except KeyError as exc:  # pragma: no cover - table covers every kind
        raise KeyError(f"no validation policy for slot kind {kind!r}") from exc


def accepts(kind: SlotKind, char: str) -> bool:
    """Return ``True`` when a slot of ``kind`` accepts the single ``char``."""

    if len(char) != 1:
        return False
    return policy_for(kind).accepts(char)


def transform(kind: SlotKind, char: str) -> str:
    return policy_for(kind).transform(char)


__all__ = ["SLOT_POLICIES", "SlotPolicy", "accepts", "policy_for", "transform"]
