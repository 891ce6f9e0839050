"""Load masked field definitions from TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping

import tomllib

from .engine import MaskedTextEngine
from .errors import MaskedInputError
from .mask_compiler import DEFAULT_PLACEHOLDER, compile_mask
from .presets import resolve_preset


class FieldConfigError(ValueError):
    """Raised when a field configuration file fails validation."""


@dataclass(frozen=True)
class FieldConfig:
    """Mask, placeholder and initial text for one named field."""

    name: str
    mask: str
    placeholder: str = DEFAULT_PLACEHOLDER
    text: str = ""

    def build_engine(self) -> MaskedTextEngine:
        """Return a fresh engine seeded with this field's settings."""

        return MaskedTextEngine(self.mask, placeholder=self.placeholder, text=self.text)


def load_field_config(config_path: Path) -> Dict[str, FieldConfig]:
    """Parse and validate the ``[fields]`` table stored at ``config_path``."""

    with config_path.open("rb") as stream:
        try:
            raw_data = tomllib.load(stream)
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise FieldConfigError(f"{config_path}: {exc}") from exc

    return parse_field_config(raw_data)


def parse_field_config(data: Mapping[str, Any]) -> Dict[str, FieldConfig]:
    fields = data.get("fields")
    if fields is None:
        raise FieldConfigError("field configuration requires a [fields] table")
    if not isinstance(fields, Mapping):
        raise FieldConfigError("[fields] section must be a mapping")
    if not fields:
        raise FieldConfigError("field configuration must define at least one field")

    resolved: Dict[str, FieldConfig] = {}
    for name, entry in fields.items():
        if not isinstance(entry, Mapping):
            raise FieldConfigError(
                f"field {name!r} must be a table, received {type(entry)!r}"
            )
        resolved[name] = _parse_field(name, entry)
    return resolved


def _parse_field(name: str, entry: Mapping[str, Any]) -> FieldConfig:
    mask = _resolve_mask(name, entry)
    placeholder = _coerce_text(name, entry, "placeholder", DEFAULT_PLACEHOLDER)
    text = _coerce_text(name, entry, "text", "")

    try:
        compile_mask(mask, placeholder)
    except MaskedInputError as exc:
        raise FieldConfigError(f"field {name!r}: {exc}") from exc

    return FieldConfig(name=name, mask=mask, placeholder=placeholder, text=text)


def _resolve_mask(name: str, entry: Mapping[str, Any]) -> str:
    has_mask = "mask" in entry
    has_preset = "preset" in entry
    if has_mask and has_preset:
        raise FieldConfigError(f"field {name!r} must set either mask or preset, not both")
    if not has_mask and not has_preset:
        raise FieldConfigError(f"field {name!r} must set a mask or a preset")
    if has_mask:
        return _coerce_text(name, entry, "mask", "")

    preset = _coerce_text(name, entry, "preset", "")
    try:
        return resolve_preset(preset)
    except KeyError as exc:
        raise FieldConfigError(f"field {name!r}: {exc.args[0]}") from exc


def _coerce_text(name: str, entry: Mapping[str, Any], key: str, default: str) -> str:
    value = entry.get(key, default)
    if not isinstance(value, str):
        raise FieldConfigError(f"field {name!r}: {key} must be a string")
    return value


__all__ = [
    "FieldConfig",
    "FieldConfigError",
    "load_field_config",
    "parse_field_config",
]
