"""
Scalar codecs

Each pair of functions owns one ambiguous wire representation used by Xtream
Codes servers. Decoders accept every variant seen in the wild and return one
canonical Python value; encoders always emit the representation the API uses.

Decoders raise ValueError only for the shapes documented as errors. Inside a
pydantic model that becomes a ValidationError, which the transport wraps in
DecoderError.

The Annotated aliases at the bottom plug the codecs into the wire schemas.
"""
from __future__ import annotations

import base64
import binascii
import re
from datetime import date, datetime, timedelta, timezone
from typing import Annotated, Any, Callable

from pydantic import BeforeValidator, PlainSerializer


INVALID_INTEGER = -1

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_whole_number(value: int | float) -> int:
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"expected a whole number, got {value!r}")
        return int(value)
    return value


# Integer-or-string

def decode_int(value: Any) -> int | None:
    """
    Decode an integer sent either as a number or as a quoted string.

    A quoted string that is not an integer decodes to INVALID_INTEGER (-1).
    Note that -1 is also a legitimate upstream value; the two cannot be told apart.
    """
    if value is None:
        return None
    if isinstance(value, str):
        if _INTEGER_RE.fullmatch(value):
            return int(value)
        return INVALID_INTEGER
    if _is_number(value):
        return _as_whole_number(value)
    raise ValueError(f"expected an integer or a string, got {type(value).__name__}")


def encode_int(value: int | None) -> int | None:
    if value is None:
        return None
    return int(value)


# Boolean-as-digit

def decode_bool(value: Any) -> bool | None:
    """Decode 0/1 (number or quoted). Anything else is False."""
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value == "1"
    if _is_number(value):
        return value == 1
    raise ValueError(f"expected 0/1 or a string, got {type(value).__name__}")


def encode_bool(value: bool | None) -> int | None:
    if value is None:
        return None
    return 1 if value else 0


# Locale-tolerant float

def decode_float(value: Any) -> float | None:
    """Decode a float; quoted values may use ',' as decimal separator, '' is 0."""
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        return float(text.replace(",", "."))
    if _is_number(value):
        return float(value)
    raise ValueError(f"expected a number or a string, got {type(value).__name__}")


def encode_float(value: float | None) -> float | None:
    if value is None:
        return None
    return float(value)


# Unix time as integer

def decode_unix_time(value: Any) -> datetime | None:
    """Decode seconds since epoch (number or quoted number) to an aware UTC datetime."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        if not _INTEGER_RE.fullmatch(value):
            raise ValueError(f"invalid unix timestamp: {value!r}")
        seconds = int(value)
    elif _is_number(value):
        seconds = _as_whole_number(value)
    else:
        raise ValueError(f"expected a unix timestamp, got {type(value).__name__}")

    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError) as exc:
        raise ValueError(f"unix timestamp out of range: {seconds}") from exc


def encode_unix_time(value: datetime | None) -> int | None:
    if value is None:
        return None
    return int(value.timestamp())


# Date-only string

def decode_date(value: Any) -> date | None:
    """Decode YYYY-MM-DD. Anything unparsable is unset (None)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        return None


def encode_date(value: date | None) -> str | None:
    if value is None:
        return None
    return value.strftime(DATE_FORMAT)


# Datetime string

def decode_datetime(value: Any) -> datetime | None:
    """Decode YYYY-MM-DD HH:MM:SS as a UTC wall clock. Malformed strings raise."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"expected a datetime string, got {type(value).__name__}")
    parsed = datetime.strptime(value, DATETIME_FORMAT)
    return parsed.replace(tzinfo=timezone.utc)


def encode_datetime(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.strftime(DATETIME_FORMAT)


# Duration as clock string

def decode_duration(value: Any) -> timedelta:
    """Decode HH:MM:SS. Malformed input is a zero duration."""
    if isinstance(value, timedelta):
        return value
    if not isinstance(value, str):
        return timedelta(0)

    parts = value.split(":")
    if len(parts) != 3:
        return timedelta(0)
    try:
        hours, minutes, seconds = (int(part) for part in parts)
    except ValueError:
        return timedelta(0)
    return timedelta(hours=hours, minutes=minutes, seconds=seconds)


def encode_duration(value: timedelta | None) -> str:
    total = int(value.total_seconds()) if value else 0
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


# Base64 text

def decode_base64_text(value: Any) -> str:
    """
    Base64-decode a text field

    Line breaks inside the value are ignored. Other invalid base64 raises.
    Bytes that are not UTF-8 are kept as surrogate escapes, so re-encoding
    yields the original bytes.
    """
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"expected a base64 string, got {type(value).__name__}")
    text = value.replace("\r", "").replace("\n", "")
    try:
        raw = base64.b64decode(text, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"invalid base64 text: {exc}") from exc
    return raw.decode("utf-8", errors="surrogateescape")


def encode_base64_text(value: str | None) -> str:
    return base64.b64encode((value or "").encode("utf-8", errors="surrogateescape")).decode("ascii")


# Scalar-or-array of string

def decode_string_list(value: Any) -> list[str]:
    """A single string is a one-element list ('' is empty); lists pass through."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, (list, tuple)):
        if not all(isinstance(item, str) for item in value):
            raise ValueError("expected a list of strings")
        return list(value)
    raise ValueError(f"expected a string or a list of strings, got {type(value).__name__}")


# Free-form object

def decode_free_form(value: Any) -> dict[str, Any]:
    """Server specific metadata: null and [] are an empty mapping, objects pass through."""
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    if isinstance(value, list) and not value:
        return {}
    raise ValueError(f"expected an object, got {type(value).__name__}")


# Plain text

def decode_text(value: Any) -> str | None:
    """Plain string field; numbers are stringified."""
    if value is None or isinstance(value, str):
        return value
    if _is_number(value):
        return str(value)
    raise ValueError(f"expected a string, got {type(value).__name__}")


def _null_as(default: Any, decoder: Callable[[Any], Any]) -> Callable[[Any], Any]:
    def decode(value: Any) -> Any:
        decoded = decoder(value)
        return default if decoded is None else decoded
    return decode


def _null_as_zero(value: Any) -> Any:
    return 0 if value is None else value


def _null_as_empty_list(value: Any) -> Any:
    return [] if value is None else value


def _null_as_false(value: Any) -> Any:
    return False if value is None else value


IntegerAsInteger = Annotated[
    int, BeforeValidator(_null_as(0, decode_int)), PlainSerializer(encode_int)
]
OptionalIntegerAsInteger = Annotated[
    int | None, BeforeValidator(decode_int), PlainSerializer(encode_int)
]
PlainInteger = Annotated[int, BeforeValidator(_null_as_zero)]
BooleanAsInteger = Annotated[
    bool, BeforeValidator(_null_as(False, decode_bool)), PlainSerializer(encode_bool)
]
OptionalBooleanAsInteger = Annotated[
    bool | None, BeforeValidator(decode_bool), PlainSerializer(encode_bool)
]
FloatAsFloat = Annotated[
    float, BeforeValidator(_null_as(0.0, decode_float)), PlainSerializer(encode_float)
]
UnixTimeAsInteger = Annotated[
    datetime | None, BeforeValidator(decode_unix_time), PlainSerializer(encode_unix_time)
]
DateAsString = Annotated[
    date | None, BeforeValidator(decode_date), PlainSerializer(encode_date)
]
DateTimeAsString = Annotated[
    datetime | None, BeforeValidator(decode_datetime), PlainSerializer(encode_datetime)
]
DurationAsString = Annotated[
    timedelta, BeforeValidator(decode_duration), PlainSerializer(encode_duration)
]
Base64Text = Annotated[
    str, BeforeValidator(decode_base64_text), PlainSerializer(encode_base64_text)
]
StringList = Annotated[list[str], BeforeValidator(decode_string_list)]
FreeForm = Annotated[dict[str, Any], BeforeValidator(decode_free_form)]
Text = Annotated[str, BeforeValidator(_null_as("", decode_text))]
OptionalText = Annotated[str | None, BeforeValidator(decode_text)]
IntegerList = Annotated[list[int], BeforeValidator(_null_as_empty_list)]
Flag = Annotated[bool, BeforeValidator(_null_as_false)]
