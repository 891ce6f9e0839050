"""Masked-input transformation engine and its host-side helpers."""
from __future__ import annotations

from typing import Any

from . import engine as _engine
from . import errors as _errors
from . import field_config as _field_config
from . import mask_compiler as _mask_compiler
from . import position_mapper as _position_mapper
from . import presets as _presets
from . import slots as _slots
from . import validation as _validation

_modules = [
    _errors,
    _slots,
    _validation,
    _mask_compiler,
    _position_mapper,
    _engine,
    _presets,
    _field_config,
]

__all__: list[str] = []
_seen: set[str] = set()
for _module in _modules:
    for _name in _module.__all__:
        if _name not in _seen:
            _seen.add(_name)
            __all__.append(_name)
        globals()[_name] = getattr(_module, _name)


def __getattr__(name: str) -> Any:
    for _module in _modules:
        if hasattr(_module, name):
            return getattr(_module, name)
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(__all__)
