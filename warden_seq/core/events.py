"""Mapping of check results to Seq raw events."""

from __future__ import annotations

import json
import logging
import traceback
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields, is_dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any

from pydantic import BaseModel

from warden_seq.ports.iteration import CheckResult, Iteration

__all__ = [
    "SerializerOptions",
    "DEFAULT_SERIALIZER_OPTIONS",
    "SUCCESS_MESSAGE_TEMPLATE",
    "ERROR_MESSAGE_TEMPLATE",
    "to_seq_event",
    "to_jsonable",
    "check_result_to_seq_json",
    "iteration_to_seq_json",
]

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE_TEMPLATE = "Watcher {WatcherName} ran with result {Description}"
ERROR_MESSAGE_TEMPLATE = "Watcher {WatcherName} ran but encountered an exception {Exception}"

# (JSON property, CheckResult attribute)
_PROPERTY_FIELDS = (
    ("WatcherName", "watcher_name"),
    ("WatcherGroup", "watcher_group"),
    ("WatcherType", "watcher_type"),
    ("Description", "description"),
    ("Exception", "exception"),
    ("StartedAt", "started_at"),
    ("CompletedAt", "completed_at"),
    ("ExecutionTime", "execution_time"),
)

_TICKS_PER_SECOND = 10_000_000
_TICKS_PER_MINUTE = 60 * _TICKS_PER_SECOND
_TICKS_PER_HOUR = 60 * _TICKS_PER_MINUTE
_TICKS_PER_DAY = 24 * _TICKS_PER_HOUR


@dataclass(slots=True, frozen=True)
class SerializerOptions:
    """How event envelopes are rendered to JSON.

    Attributes:
        ignore_reference_loops: Omit values that point back to a container
            already being serialized instead of raising ValueError.
        indent: Indentation for pretty-printing; None for compact output.
        populate_defaults: Emit None for properties missing on the source
            record instead of raising AttributeError.
        include_nulls: Write None values; when False they are dropped.
        ignore_errors: Silently omit values that cannot be serialized.
        string_enums: Write enum members by name rather than by value.
        camel_case_enums: Camel-case enum member names.
        allow_integer_enums: Fall back to the member value when the member
            has no single name (e.g. flag combinations).
    """

    ignore_reference_loops: bool = True
    indent: int | None = 2
    populate_defaults: bool = True
    include_nulls: bool = True
    ignore_errors: bool = True
    string_enums: bool = True
    camel_case_enums: bool = True
    allow_integer_enums: bool = True


DEFAULT_SERIALIZER_OPTIONS = SerializerOptions()


class _Omit(Exception):
    """Internal signal to drop a value from its enclosing container."""


def _read(record: Any, attribute: str, options: SerializerOptions) -> Any:
    if options.populate_defaults:
        return getattr(record, attribute, None)
    return getattr(record, attribute)


def to_seq_event(
    check_result: CheckResult,
    warden_name: str | None = None,
    options: SerializerOptions = DEFAULT_SERIALIZER_OPTIONS,
) -> dict[str, Any]:
    """Build one Seq raw event from a check result.

    The level reflects validity only; the message template depends only on
    whether an exception was captured.

    Args:
        check_result: Check result to map.
        warden_name: Name of the warden (iteration) the result belongs to.
        options: Serializer options (only populate_defaults applies here).

    Returns:
        Event dictionary with native (not yet JSON-encoded) values.
    """
    exception = _read(check_result, "exception", options)
    message_template = SUCCESS_MESSAGE_TEMPLATE
    if exception is not None:
        message_template = ERROR_MESSAGE_TEMPLATE

    properties: dict[str, Any] = {}
    for json_name, attribute in _PROPERTY_FIELDS:
        properties[json_name] = _read(check_result, attribute, options)
        if json_name == "WatcherName":
            properties["Warden"] = warden_name

    return {
        "Timestamp": properties["CompletedAt"],
        "Level": "Debug" if _read(check_result, "is_valid", options) else "Error",
        "MessageTemplate": message_template,
        "Properties": properties,
    }


def check_result_to_seq_json(
    check_result: CheckResult,
    options: SerializerOptions = DEFAULT_SERIALIZER_OPTIONS,
) -> str:
    """Serialize a single check result into a one-event envelope."""
    return _dump_envelope([to_seq_event(check_result, options=options)], options)


def iteration_to_seq_json(
    iteration: Iteration,
    options: SerializerOptions = DEFAULT_SERIALIZER_OPTIONS,
) -> str:
    """Serialize every result of an iteration, in order, into one envelope.

    Args:
        iteration: Iteration to serialize.
        options: Serializer options.

    Returns:
        JSON text of the form {"Events": [...]}.
    """
    events = [
        to_seq_event(check_result, iteration.warden_name, options)
        for check_result in iteration.results
    ]
    logger.debug(f"Mapped {len(events)} events for warden {iteration.warden_name!r}")
    return _dump_envelope(events, options)


def _dump_envelope(events: list[dict[str, Any]], options: SerializerOptions) -> str:
    document = to_jsonable({"Events": events}, options)
    return json.dumps(document, indent=options.indent, ensure_ascii=False)


def to_jsonable(value: Any, options: SerializerOptions = DEFAULT_SERIALIZER_OPTIONS) -> Any:
    """Convert a value into plain JSON-compatible Python data.

    Args:
        value: Value to convert.
        options: Serializer options.

    Returns:
        Data made of dicts, lists, strings, numbers, booleans and None.

    Raises:
        ValueError: On a reference loop when loops are not ignored.
        TypeError: On an unsupported top-level value.
    """
    try:
        return _convert(value, options, frozenset())
    except _Omit:
        return None


def _convert(value: Any, options: SerializerOptions, path: frozenset[int]) -> Any:
    # Enum first: str/int mixin members are also str/int instances.
    if isinstance(value, Enum):
        return _enum_value(value, options)
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return _format_timespan(value)
    if isinstance(value, BaseException):
        return traceback.format_exception_only(type(value), value)[-1].strip()

    if id(value) in path:
        if options.ignore_reference_loops:
            raise _Omit
        raise ValueError(f"Self referencing loop detected for type {type(value).__name__}")
    path = path | {id(value)}

    if isinstance(value, Mapping):
        return _convert_items(value.items(), options, path)
    if isinstance(value, BaseModel):
        model_items = ((name, getattr(value, name)) for name in type(value).model_fields)
        return _convert_items(model_items, options, path)
    if is_dataclass(value) and not isinstance(value, type):
        dataclass_items = ((f.name, getattr(value, f.name)) for f in fields(value))
        return _convert_items(dataclass_items, options, path)
    if isinstance(value, (list, tuple, set, frozenset)):
        return _convert_sequence(value, options, path)
    if hasattr(value, "__dict__") and not isinstance(value, type):
        public = ((k, v) for k, v in vars(value).items() if not k.startswith("_"))
        return _convert_items(public, options, path)

    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _convert_items(
    items: Iterable[tuple[Any, Any]],
    options: SerializerOptions,
    path: frozenset[int],
) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, item in items:
        try:
            converted = _convert(item, options, path)
        except _Omit:
            continue
        except Exception as e:
            if not options.ignore_errors:
                raise
            logger.debug(f"Omitting field {key!r} from serialized event: {e}")
            continue
        if converted is None and not options.include_nulls:
            continue
        result[key if isinstance(key, str) else str(key)] = converted
    return result


def _convert_sequence(
    values: Iterable[Any],
    options: SerializerOptions,
    path: frozenset[int],
) -> list[Any]:
    result: list[Any] = []
    for item in values:
        try:
            result.append(_convert(item, options, path))
        except _Omit:
            continue
        except Exception as e:
            if not options.ignore_errors:
                raise
            logger.debug(f"Omitting item from serialized event: {e}")
    return result


def _enum_value(member: Enum, options: SerializerOptions) -> Any:
    if not options.string_enums:
        return member.value
    name = member.name
    if name is None or "|" in name:
        if options.allow_integer_enums:
            return member.value
        raise ValueError(f"Enum value {member.value!r} has no name")
    return _camel_case(name) if options.camel_case_enums else name


def _camel_case(name: str) -> str:
    """Camel-case an enum member name (NOT_FOUND -> notFound, HTTPError -> httpError)."""
    if "_" in name or name.isupper():
        parts = [p for p in name.lower().split("_") if p]
        if not parts:
            return name
        return parts[0] + "".join(p.capitalize() for p in parts[1:])

    chars = list(name)
    for i, ch in enumerate(chars):
        if i == 1 and not ch.isupper():
            break
        has_next = i + 1 < len(chars)
        if i > 0 and has_next and not chars[i + 1].isupper():
            break
        chars[i] = ch.lower()
    return "".join(chars)


def _format_timespan(value: timedelta) -> str:
    """Render a duration as constant TimeSpan text: [-][d.]hh:mm:ss[.fffffff]."""
    ticks = (value.days * 86_400 + value.seconds) * _TICKS_PER_SECOND + value.microseconds * 10
    sign = "-" if ticks < 0 else ""
    ticks = abs(ticks)

    days, ticks = divmod(ticks, _TICKS_PER_DAY)
    hours, ticks = divmod(ticks, _TICKS_PER_HOUR)
    minutes, ticks = divmod(ticks, _TICKS_PER_MINUTE)
    seconds, fraction = divmod(ticks, _TICKS_PER_SECOND)

    text = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if days:
        text = f"{days}.{text}"
    if fraction:
        text = f"{text}.{fraction:07d}"
    return sign + text
