from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from maskfield.field_config import FieldConfig, FieldConfigError, load_field_config
from maskfield.presets import MASK_PRESETS, resolve_preset


def write_config(tmp_path: Path, body: str) -> Path:
    config_path = tmp_path / "fields.toml"
    config_path.write_text(textwrap.dedent(body), encoding="utf-8")
    return config_path


def test_load_field_config_reads_masks_and_presets(tmp_path: Path) -> None:
    config_path = write_config(
        tmp_path,
        """
        [fields.phone]
        mask = "(###) ###-####"
        text = "5551234567"

        [fields.zip]
        preset = "zip_plus4"
        placeholder = "#"
        """,
    )

    fields = load_field_config(config_path)

    assert fields["phone"] == FieldConfig(
        name="phone", mask="(###) ###-####", placeholder="_", text="5551234567"
    )
    assert fields["zip"].mask == MASK_PRESETS["zip_plus4"]
    assert fields["zip"].placeholder == "#"

    engine = fields["phone"].build_engine()
    assert engine.display_text == "(555) 123-4567"
    assert fields["zip"].build_engine().display_text == "#####-####"


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ("[other]\nvalue = 1\n", "requires a \\[fields\\] table"),
        ("fields = 3\n", "must be a mapping"),
        ("[fields]\n", "at least one field"),
        ("[fields]\nphone = \"###\"\n", "must be a table"),
        ("[fields.a]\nmask = \"#\"\npreset = \"zip\"\n", "not both"),
        ("[fields.a]\nplaceholder = \"_\"\n", "must set a mask or a preset"),
        ("[fields.a]\npreset = \"nope\"\n", "unknown mask preset"),
        ("[fields.a]\nmask = 12\n", "mask must be a string"),
        ("[fields.a]\nmask = \"##\"\nplaceholder = \"ab\"\n", "exactly one character"),
        ("[fields.a]\nmask = \"##'\"\n", "malformed mask"),
    ],
)
def test_load_field_config_rejects_invalid_tables(
    tmp_path: Path, body: str, message: str
) -> None:
    config_path = write_config(tmp_path, body)

    with pytest.raises(FieldConfigError, match=message):
        load_field_config(config_path)


def test_load_field_config_wraps_toml_errors(tmp_path: Path) -> None:
    config_path = write_config(tmp_path, "[fields\n")

    with pytest.raises(FieldConfigError):
        load_field_config(config_path)


def test_load_field_config_wraps_undecodable_bytes(tmp_path: Path) -> None:
    config_path = tmp_path / "fields.toml"
    config_path.write_bytes(b'[fields.a]\nmask = "\xff##"\n')

    with pytest.raises(FieldConfigError):
        load_field_config(config_path)


def test_presets_compile_and_resolve() -> None:
    for name in MASK_PRESETS:
        assert FieldConfig(name=name, mask=resolve_preset(name)).build_engine().capacity > 0

    with pytest.raises(KeyError, match="unknown mask preset"):
        resolve_preset("missing")
