from __future__ import annotations

import pytest

from maskfield.errors import InvalidPlaceholderError, MaskedInputError
from maskfield.mask_compiler import (
    CLASS_MARKERS,
    MalformedMaskError,
    compile_mask,
    describe_pattern,
)
from maskfield.slots import SlotKind


def _kinds(pattern: str) -> list[SlotKind]:
    return [slot.kind for slot in compile_mask(pattern)]


def test_compile_phone_mask_interleaves_literals_and_digits() -> None:
    slots = compile_mask("(###) ###-####", "_")

    assert len(slots) == 14
    assert "".join(slot.current_value for slot in slots) == "(___) ___-____"
    assert [slot.literal_char for slot in slots if slot.is_literal] == ["(", ")", " ", "-"]
    assert sum(1 for slot in slots if slot.kind is SlotKind.DIGIT) == 10
    assert all(slot.filled for slot in slots if slot.is_literal)
    assert not any(slot.filled for slot in slots if not slot.is_literal)


def test_each_class_marker_maps_to_its_kind() -> None:
    assert _kinds("#?AHUL*") == [
        SlotKind.DIGIT,
        SlotKind.LETTER,
        SlotKind.ALPHANUMERIC,
        SlotKind.HEX,
        SlotKind.UPPER_LETTER,
        SlotKind.LOWER_LETTER,
        SlotKind.ANY,
    ]
    assert set(CLASS_MARKERS) == set("#?AHUL*")


def test_escape_turns_marker_into_literal() -> None:
    slots = compile_mask("'#123")

    assert len(slots) == 4
    assert all(slot.is_literal for slot in slots)
    assert [slot.literal_char for slot in slots] == ["#", "1", "2", "3"]
    assert "".join(slot.current_value for slot in slots) == "#123"


def test_escaped_escape_marker_is_a_literal_quote() -> None:
    slots = compile_mask("''#")

    assert slots[0].is_literal
    assert slots[0].literal_char == "'"
    assert slots[1].kind is SlotKind.DIGIT
    assert len(slots) == 2


def test_trailing_escape_raises_malformed_mask() -> None:
    with pytest.raises(MalformedMaskError) as excinfo:
        compile_mask("##'")

    assert excinfo.value.index == 2
    assert excinfo.value.pattern == "##'"
    assert isinstance(excinfo.value, MaskedInputError)


def test_placeholder_must_be_single_character() -> None:
    with pytest.raises(InvalidPlaceholderError):
        compile_mask("##", "")
    with pytest.raises(InvalidPlaceholderError):
        compile_mask("##", "__")


def test_empty_pattern_compiles_to_no_slots() -> None:
    assert compile_mask("") == ()


def test_custom_placeholder_fills_input_slots_only() -> None:
    slots = compile_mask("##-##", "*")

    assert "".join(slot.current_value for slot in slots) == "**-**"


def test_describe_pattern_reports_kinds_and_literals() -> None:
    described = describe_pattern("U'A-")

    assert [(entry.index, entry.kind, entry.literal) for entry in described] == [
        (0, SlotKind.UPPER_LETTER, None),
        (1, SlotKind.LITERAL, "A"),
        (2, SlotKind.LITERAL, "-"),
    ]
