# ConfigHelper Settings Module
# Flat key/value settings store and typed conversions

from confighelper.settings.store import SettingsStore, XmlSettingsStore
from confighelper.settings.values import TypedSettings, ValueKind, format_value, parse_value, split_list

__all__ = [
    # Store
    "SettingsStore",
    "XmlSettingsStore",
    # Values
    "TypedSettings",
    "ValueKind",
    "parse_value",
    "format_value",
    "split_list",
]
