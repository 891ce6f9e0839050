from __future__ import annotations

from maskfield.engine import MaskedTextEngine
from maskfield.mask_compiler import compile_mask
from maskfield.position_mapper import (
    first_unfilled_position,
    to_display_index,
    to_logical_index,
)


def _partial_phone() -> MaskedTextEngine:
    engine = MaskedTextEngine("(###) ###-####", text="555")
    assert engine.display_text == "(555) ___-____"
    return engine


def test_to_logical_index_counts_filled_input_slots_only() -> None:
    slots = _partial_phone().slots

    assert to_logical_index(slots, 0) == 0
    assert to_logical_index(slots, 1) == 0
    assert to_logical_index(slots, 2) == 1
    assert to_logical_index(slots, 4) == 3
    assert to_logical_index(slots, 5) == 3
    assert to_logical_index(slots, 14) == 3


def test_to_logical_index_clamps_out_of_range_positions() -> None:
    slots = _partial_phone().slots

    assert to_logical_index(slots, 99) == 3
    assert to_logical_index(slots, -4) == 0


def test_to_display_index_skips_literals() -> None:
    slots = _partial_phone().slots

    assert to_display_index(slots, 0) == 0
    assert to_display_index(slots, 1) == 2
    assert to_display_index(slots, 3) == 4
    assert to_display_index(slots, 4) == 7
    assert to_display_index(slots, 6) == 9
    assert to_display_index(slots, 10) == 14
    assert to_display_index(slots, 11) == 14


def test_mapping_is_not_an_exact_inverse_inside_placeholders() -> None:
    slots = _partial_phone().slots

    logical = to_logical_index(slots, 9)
    assert logical == 3
    assert to_display_index(slots, logical) == 4


def test_first_unfilled_position() -> None:
    assert first_unfilled_position(_partial_phone().slots) == 6
    assert first_unfilled_position(compile_mask("(###)")) == 1
    assert first_unfilled_position(MaskedTextEngine("##", text="12").slots) is None
    assert first_unfilled_position(compile_mask("abc")) is None
