"""Line-driven harness that applies masked edits and prints JSON snapshots."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import IO, Callable, Dict, Mapping, Sequence

from .engine import EditResult, MaskedTextEngine
from .errors import MaskedInputError
from .field_config import FieldConfigError, load_field_config
from .mask_compiler import DEFAULT_PLACEHOLDER, describe_pattern
from .presets import MASK_PRESETS, resolve_preset

LOGGER = logging.getLogger(__name__)

_QUIT_COMMANDS = frozenset({"quit", "exit"})


class CommandError(ValueError):
    """Raised when a session command line cannot be parsed."""


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed arguments for the masked field CLI."""

    parser = argparse.ArgumentParser(description=__doc__)
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--mask", default=None, help="Mask pattern to compile")
    source.add_argument(
        "--preset",
        choices=sorted(MASK_PRESETS),
        default=None,
        help="Use a named mask preset",
    )
    source.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a TOML file describing [fields] definitions",
    )
    parser.add_argument(
        "--field",
        default=None,
        help="Field name to load from --config (optional when it defines one field)",
    )
    parser.add_argument(
        "--placeholder",
        default=None,
        help=f"Placeholder character for unfilled slots (default: {DEFAULT_PLACEHOLDER!r})",
    )
    parser.add_argument("--text", default=None, help="Initial logical text")
    parser.add_argument(
        "--describe",
        action="store_true",
        help="Print the compiled slot layout as JSON and exit",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity for the session.",
    )
    return parser.parse_args(argv)


def build_engine(args: argparse.Namespace) -> MaskedTextEngine:
    """Instantiate :class:`MaskedTextEngine` according to ``args``."""

    if args.config is not None:
        fields = load_field_config(args.config)
        if args.field is None:
            if len(fields) != 1:
                names = ", ".join(sorted(fields))
                raise FieldConfigError(f"--field is required; configuration defines: {names}")
            config = next(iter(fields.values()))
        else:
            try:
                config = fields[args.field]
            except KeyError:
                raise FieldConfigError(f"field {args.field!r} is not configured") from None
        mask = config.mask
        placeholder = config.placeholder
        text = config.text
    else:
        if args.field is not None:
            raise FieldConfigError("--field requires --config")
        mask = resolve_preset(args.preset) if args.preset is not None else (args.mask or "")
        placeholder = DEFAULT_PLACEHOLDER
        text = ""

    if args.placeholder is not None:
        placeholder = args.placeholder
    if args.text is not None:
        text = args.text
    return MaskedTextEngine(mask, placeholder=placeholder, text=text)


def snapshot(engine: MaskedTextEngine, caret: int | None = None) -> Dict[str, object]:
    """Return a JSON-friendly view of ``engine``."""

    start, end = engine.selection
    return {
        "display": engine.display_text,
        "logical": engine.logical_text,
        "caret": end if caret is None else caret,
        "selection": [start, end],
        "complete": engine.is_complete,
        "first_unfilled": engine.first_unfilled_position(),
    }


def _describe(engine: MaskedTextEngine) -> Dict[str, object]:
    slots = [
        {"index": entry.index, "kind": entry.kind.value, "literal": entry.literal}
        for entry in describe_pattern(engine.mask)
    ]
    return {
        "mask": engine.mask,
        "placeholder": engine.placeholder,
        "length": engine.display_length,
        "capacity": engine.capacity,
        "slots": slots,
    }


def _parse_int(token: str) -> int:
    try:
        return int(token)
    except ValueError as exc:
        raise CommandError(f"expected an integer index, received {token!r}") from exc


def _split(argument: str, count: int, usage: str) -> list[str]:
    # The final field keeps its spaces so typed text survives intact.
    parts = argument.split(" ", count - 1) if argument else []
    if len(parts) < count:
        raise CommandError(f"usage: {usage}")
    return parts


def _cmd_insert(engine: MaskedTextEngine, argument: str) -> EditResult:
    position, text = _split(argument, 2, "insert POS TEXT")
    index = _parse_int(position)
    return engine.replace_text(index, index, text)


def _cmd_replace(engine: MaskedTextEngine, argument: str) -> EditResult:
    start, end, text = _split(argument, 3, "replace START END TEXT")
    return engine.replace_text(_parse_int(start), _parse_int(end), text)


def _cmd_delete(engine: MaskedTextEngine, argument: str) -> EditResult:
    start, end = _split(argument, 2, "delete START END")
    return engine.delete_text(_parse_int(start), _parse_int(end.strip()))


def _cmd_select(engine: MaskedTextEngine, argument: str) -> None:
    start, end = _split(argument, 2, "select START END")
    engine.select_range(_parse_int(start), _parse_int(end.strip()))


def _cmd_type(engine: MaskedTextEngine, argument: str) -> EditResult:
    return engine.replace_selection(argument)


def _cmd_backspace(engine: MaskedTextEngine, argument: str) -> EditResult | None:
    start, end = engine.selection
    if start != end:
        return engine.delete_text(start, end)
    if start == 0:
        return None
    return engine.delete_text(start - 1, start)


def _cmd_set(engine: MaskedTextEngine, argument: str) -> EditResult:
    return engine.set_logical_text(argument)


def _cmd_clear(engine: MaskedTextEngine, argument: str) -> EditResult:
    return engine.clear()


def _cmd_mask(engine: MaskedTextEngine, argument: str) -> EditResult:
    return engine.set_mask(argument)


def _cmd_placeholder(engine: MaskedTextEngine, argument: str) -> EditResult:
    return engine.set_placeholder(argument)


def _cmd_show(engine: MaskedTextEngine, argument: str) -> None:
    return None


_COMMANDS: Mapping[str, Callable[[MaskedTextEngine, str], EditResult | None]] = {
    "insert": _cmd_insert,
    "replace": _cmd_replace,
    "delete": _cmd_delete,
    "select": _cmd_select,
    "type": _cmd_type,
    "backspace": _cmd_backspace,
    "set": _cmd_set,
    "clear": _cmd_clear,
    "mask": _cmd_mask,
    "placeholder": _cmd_placeholder,
    "show": _cmd_show,
}


def apply_command(engine: MaskedTextEngine, line: str) -> Dict[str, object]:
    """Run one session command against ``engine`` and return the snapshot."""

    name, _, argument = line.partition(" ")
    handler = _COMMANDS.get(name.lower())
    if handler is None:
        raise CommandError(f"unknown command {name!r}")
    result = handler(engine, argument)
    payload: Dict[str, object] = {"command": name.lower()}
    payload.update(snapshot(engine, None if result is None else result.caret))
    return payload


def _write_json(stream: IO[str], payload: Mapping[str, object]) -> None:
    stream.write(json.dumps(payload, sort_keys=True) + "\n")
    stream.flush()


def drive_session(
    engine: MaskedTextEngine,
    *,
    input_stream: IO[str] = sys.stdin,
    output_stream: IO[str] = sys.stdout,
) -> int:
    """Feed commands from ``input_stream`` to ``engine`` until EOF or ``quit``.

    Returns the number of commands that were applied successfully.
    """

    applied = 0
    _write_json(output_stream, {"command": "start", **snapshot(engine)})
    for raw_line in input_stream:
        line = raw_line.rstrip("\r\n")
        if not line.strip():
            continue
        if line.strip().lower() in _QUIT_COMMANDS:
            break
        try:
            payload = apply_command(engine, line)
        except (CommandError, MaskedInputError) as exc:
            LOGGER.info("command %r failed: %s", line, exc)
            _write_json(output_stream, {"command": line.partition(" ")[0], "error": str(exc)})
            continue
        applied += 1
        _write_json(output_stream, payload)
    return applied


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the masked field CLI."""

    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))
    try:
        engine = build_engine(args)
    except (FieldConfigError, MaskedInputError, OSError) as exc:
        print(f"maskfield: {exc}", file=sys.stderr)
        return 2

    if args.describe:
        print(json.dumps(_describe(engine), indent=2, sort_keys=True))
        return 0

    applied = drive_session(engine, input_stream=sys.stdin, output_stream=sys.stdout)
    LOGGER.debug("session finished after %d command(s)", applied)
    return 0


if __name__ == "__main__":  # pragma: no cover - exercised via python -m
    raise SystemExit(main())


__all__ = [
    "CommandError",
    "apply_command",
    "build_engine",
    "drive_session",
    "main",
    "parse_args",
    "snapshot",
]
