# ConfigHelper Typed Values
# Typed get/set over the flat settings store

import re
import uuid
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional

from confighelper.document.accessor import DocumentError, is_xml_safe
from confighelper.logger import Logger
from confighelper.settings.store import SettingsStore

_LIST_SEPARATOR_RE = re.compile(r"[,;]")


class ValueKind(str, Enum):
    """Closed set of value kinds the settings accessor converts."""

    TEXT = "text"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    FLOAT = "float"
    DECIMAL = "decimal"
    TIMESTAMP = "timestamp"
    IDENTIFIER = "identifier"
    ENUM = "enum"
    STRING_LIST = "string_list"

    @classmethod
    def for_value(cls, value: Any) -> "ValueKind":
        """
        Pick the kind matching a Python value.

        bool is checked before int and Enum before str, since each is a
        subclass of the other.
        """
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, Enum):
            return cls.ENUM
        if isinstance(value, int):
            return cls.INTEGER
        if isinstance(value, float):
            return cls.FLOAT
        if isinstance(value, Decimal):
            return cls.DECIMAL
        if isinstance(value, datetime):
            return cls.TIMESTAMP
        if isinstance(value, uuid.UUID):
            return cls.IDENTIFIER
        if isinstance(value, (list, tuple, set, frozenset)):
            return cls.STRING_LIST
        return cls.TEXT


def split_list(raw: str) -> list[str]:
    """Split on comma or semicolon, trim, and drop empty items."""
    return [item.strip() for item in _LIST_SEPARATOR_RE.split(raw) if item.strip()]


def _parse_bool(raw: str) -> bool:
    text = raw.strip().lower()
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueError(f"'{raw}' is not a valid boolean")


def _parse_enum(raw: str, enum_type: Optional[type[Enum]]) -> Enum:
    if enum_type is None:
        raise TypeError("enum_type is required to parse an enum value")
    text = raw.strip()
    if text in enum_type.__members__:
        return enum_type[text]
    for member in enum_type:
        if str(member.value) == text:
            return member
    raise ValueError(f"'{raw}' is not a member of {enum_type.__name__}")


def _format_float(value: Any) -> str:
    return repr(float(value))


def _format_bool(value: Any) -> str:
    if not isinstance(value, bool):
        raise TypeError(f"Expected bool, got {type(value).__name__}")
    return "true" if value else "false"


def _format_enum(value: Any) -> str:
    if not isinstance(value, Enum):
        raise TypeError(f"Expected Enum member, got {type(value).__name__}")
    return value.name


def _format_timestamp(value: Any) -> str:
    if not isinstance(value, datetime):
        raise TypeError(f"Expected datetime, got {type(value).__name__}")
    return value.isoformat()


def _format_list(value: Any) -> str:
    if isinstance(value, str):
        return ",".join(split_list(value))
    return ",".join(str(item).strip() for item in value if item is not None and str(item).strip())


PARSERS: dict[ValueKind, Callable[[str, Optional[type[Enum]]], Any]] = {
    ValueKind.TEXT: lambda raw, _: raw,
    ValueKind.INTEGER: lambda raw, _: int(raw.strip()),
    ValueKind.BOOLEAN: lambda raw, _: _parse_bool(raw),
    ValueKind.FLOAT: lambda raw, _: float(raw.strip()),
    ValueKind.DECIMAL: lambda raw, _: Decimal(raw.strip()),
    ValueKind.TIMESTAMP: lambda raw, _: datetime.fromisoformat(raw.strip()),
    ValueKind.IDENTIFIER: lambda raw, _: uuid.UUID(raw.strip()),
    ValueKind.ENUM: _parse_enum,
    ValueKind.STRING_LIST: lambda raw, _: split_list(raw),
}

FORMATTERS: dict[ValueKind, Callable[[Any], str]] = {
    ValueKind.TEXT: str,
    ValueKind.INTEGER: lambda value: str(int(value)),
    ValueKind.BOOLEAN: _format_bool,
    ValueKind.FLOAT: _format_float,
    ValueKind.DECIMAL: lambda value: str(value if isinstance(value, Decimal) else Decimal(str(value))),
    ValueKind.TIMESTAMP: _format_timestamp,
    ValueKind.IDENTIFIER: lambda value: str(uuid.UUID(str(value))),
    ValueKind.ENUM: _format_enum,
    ValueKind.STRING_LIST: _format_list,
}

CONVERSION_ERRORS = (ValueError, TypeError, KeyError, InvalidOperation)


def parse_value(raw: str, kind: ValueKind, enum_type: Optional[type[Enum]] = None) -> Any:
    """
    Convert a stored string to a value of the given kind.

    Raises:
        ValueError, TypeError, KeyError, InvalidOperation: On conversion failure.
    """
    return PARSERS[kind](raw, enum_type)


def format_value(value: Any, kind: Optional[ValueKind] = None) -> str:
    """
    Convert a value to its stored string form.

    Floats and decimals use a locale-independent form, timestamps ISO 8601,
    and sequences are joined with commas.
    """
    if value is None:
        raise TypeError("Cannot store None as a setting value")
    return FORMATTERS[kind or ValueKind.for_value(value)](value)


class TypedSettings:
    """Typed access to the flat settings store."""

    def __init__(self, store: SettingsStore, logger: Logger):
        self.store = store
        self.logger = logger

    def get_value(
        self,
        key: str,
        default: Any = None,
        kind: Optional[ValueKind] = None,
        enum_type: Optional[type[Enum]] = None,
    ) -> Any:
        """
        Get a setting converted to a typed value.

        Args:
            key: Setting key.
            default: Returned when the key is absent, empty, or unconvertible.
            kind: Target kind; derived from default when omitted.
            enum_type: Enum class for ValueKind.ENUM; derived from default when omitted.

        Returns:
            The converted value, or default.
        """
        try:
            raw = self.store.get(key)
        except DocumentError as e:
            self.logger.error(f"Error retrieving configuration value for key '{key}'. Using default value.", e)
            return default

        if raw is None or raw == "":
            self.logger.debug(f"Configuration key '{key}' not found. Using default value.")
            return default

        if kind is None:
            kind = ValueKind.for_value(default)
        if enum_type is None and isinstance(default, Enum):
            enum_type = type(default)

        try:
            return parse_value(raw, kind, enum_type)
        except CONVERSION_ERRORS as e:
            self.logger.debug(
                f"Error converting configuration value for key '{key}' to {kind.value}. Using default value.", e
            )
            return default

    def set_value(self, key: str, value: Any, kind: Optional[ValueKind] = None) -> bool:
        """
        Store a typed value under a key, inserting or overwriting.

        Returns:
            True if persisted, False otherwise.
        """
        if not key or not key.strip():
            self.logger.error("Cannot set configuration value with null or empty key")
            return False

        try:
            text = format_value(value, kind)
        except CONVERSION_ERRORS as e:
            self.logger.error(f"Error converting value for configuration key '{key}'", e)
            return False

        if not is_xml_safe(key) or not is_xml_safe(text):
            self.logger.error(f"Cannot set configuration value with characters not allowed in XML for key {key!r}")
            return False

        try:
            existed = self.store.get(key) is not None
            self.store.set(key, text)
            self.store.save()
            self.store.refresh()
        except DocumentError as e:
            self.logger.error(f"Error setting configuration value for key '{key}'", e)
            return False

        if existed:
            self.logger.debug(f"Updated configuration key '{key}' to value '{text}'")
        else:
            self.logger.debug(f"Added new configuration key '{key}' with value '{text}'")
        return True
