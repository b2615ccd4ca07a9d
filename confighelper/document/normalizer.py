# ConfigHelper Identifier Normalizer
# Canonical drive letters and the matchers used to find existing entries

import re
from collections.abc import Callable, Iterable
from typing import Optional
from xml.etree.ElementTree import Element

# Leading letter, optionally followed by non-alphanumeric noise (":", ":\", " : ")
_DRIVE_LETTER_RE = re.compile(r"^\s*([A-Za-z])[^A-Za-z0-9]*$")
_CANONICAL_RE = re.compile(r"^[A-Z]:$")


def normalize_drive_letter(value: str, include_colon: bool = True) -> str:
    """
    Normalize a drive letter to its canonical form.

    "v", "V", "v:" and "V:\\" all become "V:" (or "V" without the colon).

    Args:
        value: Raw drive letter input.
        include_colon: Append a colon to the letter.

    Returns:
        The canonical letter, or the input unchanged if no single leading
        letter can be extracted.
    """
    if value is None:
        return value

    match = _DRIVE_LETTER_RE.match(value)
    if not match:
        return value

    letter = match.group(1).upper()
    return f"{letter}:" if include_colon else letter


def is_canonical_drive_letter(value: str) -> bool:
    """Check whether a value is exactly an uppercase letter followed by a colon."""
    return bool(value) and bool(_CANONICAL_RE.match(value))


def strip_colon(value: str) -> str:
    """Drop trailing colons and surrounding whitespace."""
    return value.strip().rstrip(":").strip()


class DriveLetterMatcher:
    """
    Find mapping elements by drive letter.

    Strategies are tried in order and the first hit wins:
    canonical-form exact match, case-insensitive match, colon-stripped match.
    """

    attribute = "driveLetter"

    def __init__(self) -> None:
        self.strategies: list[tuple[str, Callable[[str, str], bool]]] = [
            ("canonical", self._canonical_match),
            ("case-insensitive", self._casefold_match),
            ("colon-stripped", self._colon_stripped_match),
        ]

    def same(self, left: str, right: str) -> bool:
        """Check whether two drive letters identify the same mapping."""
        return any(predicate(left, right) for _, predicate in self.strategies)

    def find(self, elements: Iterable[Element], drive_letter: str) -> Optional[Element]:
        """
        Find the first element whose drive letter matches.

        Args:
            elements: Candidate mapping elements.
            drive_letter: Letter to look for, in any accepted spelling.

        Returns:
            Matching element or None.
        """
        candidates = [e for e in elements if e.get(self.attribute) is not None]
        for _, predicate in self.strategies:
            for element in candidates:
                if predicate(element.get(self.attribute, ""), drive_letter):
                    return element
        return None

    @staticmethod
    def _canonical_match(stored: str, wanted: str) -> bool:
        return normalize_drive_letter(stored) == normalize_drive_letter(wanted)

    @staticmethod
    def _casefold_match(stored: str, wanted: str) -> bool:
        return stored.strip().casefold() == wanted.strip().casefold()

    @staticmethod
    def _colon_stripped_match(stored: str, wanted: str) -> bool:
        return strip_colon(stored).casefold() == strip_colon(wanted).casefold()


class PathMatcher:
    """Find directory elements by path."""

    attribute = "path"

    def __init__(self, case_sensitive: bool = True):
        self.case_sensitive = case_sensitive

    def same(self, left: str, right: str) -> bool:
        """Check whether two directory paths identify the same entry."""
        if self.case_sensitive:
            return left == right
        return left.casefold() == right.casefold()

    def find(self, elements: Iterable[Element], path: str) -> Optional[Element]:
        """Find the first element whose path matches."""
        for element in elements:
            stored = element.get(self.attribute)
            if stored is not None and self.same(stored, path):
                return element
        return None
