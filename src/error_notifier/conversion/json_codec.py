"""JSON parsing and rendering backed by orjson."""

from __future__ import annotations

import dataclasses
from typing import Any, Mapping

import orjson

from ..payloads import Fault, Message
from ..time_utils import utc_isoformat
from .errors import FormatError

METADATA_KEY = "_metadata"
METADATA_SOURCE = "error-notifier"

_OPTIONS = orjson.OPT_NON_STR_KEYS | orjson.OPT_PASSTHROUGH_DATACLASS
_PRETTY_OPTIONS = _OPTIONS | orjson.OPT_INDENT_2

# orjson only encodes integers in this range natively.
_NATIVE_INT_MIN = -(2**63)
_NATIVE_INT_MAX = 2**64 - 1


def _widen_ints(value: Any) -> Any:
    """Replace integers orjson cannot encode with pre-rendered number fragments."""

    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if _NATIVE_INT_MIN <= value <= _NATIVE_INT_MAX:
            return value
        return orjson.Fragment(str(int(value)))
    if isinstance(value, Mapping):
        return {_widen_key(key): _widen_ints(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_widen_ints(item) for item in value]
    return value


def _widen_key(key: Any) -> Any:
    if isinstance(key, int) and not isinstance(key, bool) and not _NATIVE_INT_MIN <= key <= _NATIVE_INT_MAX:
        return str(int(key))
    return key


def _default(value: Any) -> Any:
    if isinstance(value, Fault):
        return fault_record(value)
    if isinstance(value, Message):
        return value.text
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _widen_ints(dataclasses.asdict(value))
    if isinstance(value, (set, frozenset)):
        return _widen_ints(list(value))
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def loads_strict(text: str) -> Any:
    """Parse *text* as strict JSON, raising ``orjson.JSONDecodeError`` on failure."""

    return orjson.loads(text)


def dumps_compact(value: Any) -> str:
    try:
        return orjson.dumps(_widen_ints(value), default=_default, option=_OPTIONS).decode("utf-8")
    except orjson.JSONEncodeError as exc:
        raise FormatError.not_serializable("JSON") from exc


def dumps_pretty(value: Any) -> str:
    try:
        return orjson.dumps(_widen_ints(value), default=_default, option=_PRETTY_OPTIONS).decode("utf-8")
    except orjson.JSONEncodeError as exc:
        raise FormatError.not_serializable("JSON") from exc


def fault_record(fault: Fault) -> dict[str, Any]:
    return {
        "error": fault.message,
        "stack": fault.stack,
        "timestamp": utc_isoformat(),
        "type": "Error",
    }


def parse_json_source(data: Any) -> Any:
    """Canonical value of JSON-tagged input: strings are parsed, everything else passes through.

    Integer literals outside the 64-bit range are read by orjson as floats, so
    digits beyond double precision are lost on this side.
    """

    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("utf-8")
    if isinstance(data, str):
        try:
            return loads_strict(data)
        except orjson.JSONDecodeError as exc:
            raise FormatError.invalid_json() from exc
    return data


def _json_document(data: Any) -> Any:
    if isinstance(data, str):
        try:
            return loads_strict(data)
        except orjson.JSONDecodeError:
            return {"content": data, "timestamp": utc_isoformat()}
    if isinstance(data, Fault):
        return fault_record(data)
    return data


def render_json(data: Any) -> str:
    """Render *data* as an indented JSON document.

    Mappings receive a ``_metadata`` block (replacing any caller field of that
    name). Top-level arrays are written unchanged; other scalars are wrapped as
    ``{"value": ...}`` so the metadata has an object to live in.
    """

    document = _json_document(data)
    if isinstance(document, (list, tuple)):
        return dumps_pretty(list(document))

    if isinstance(document, Mapping):
        payload = dict(document)
    else:
        payload = {"value": document}
    payload[METADATA_KEY] = {
        "generatedAt": utc_isoformat(),
        "source": METADATA_SOURCE,
        "format": "json",
    }
    return dumps_pretty(payload)


__all__ = [
    "METADATA_KEY",
    "METADATA_SOURCE",
    "dumps_compact",
    "dumps_pretty",
    "fault_record",
    "loads_strict",
    "parse_json_source",
    "render_json",
]
