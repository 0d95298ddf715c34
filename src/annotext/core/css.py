"""Inline CSS helpers used by the style templates."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import re


_LEADING_DIGIT = re.compile(r"^-?[0-9].+")
_INVALID_IDENTIFIER_CHARS = re.compile(r"[^-_A-Za-z0-9]")


class CssDeclarations(Mapping[str, str]):
    """Inline style declarations rendered in alphabetical property order."""

    __slots__ = ("_properties",)

    def __init__(self, properties: Mapping[str, str] | None = None) -> None:
        self._properties: dict[str, str] = {}
        for name, value in (properties or {}).items():
            self.put(name, value)

    def put(self, name: str, value: str) -> None:
        """Store a property, replacing any previous value."""
        if not name:
            raise ValueError("CSS property name cannot be empty.")
        if ":" in name:
            raise ValueError(f"Malformed CSS property name '{name}'.")
        self._properties[name] = value

    def __getitem__(self, name: str) -> str:
        return self._properties[name]

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._properties))

    def __len__(self) -> int:
        return len(self._properties)

    def __str__(self) -> str:
        return " ".join(f"{name}:{self._properties[name]};" for name in self)

    def __repr__(self) -> str:
        return f"CssDeclarations({str(self)!r})"


def css_identifier(value: str) -> str:
    """Sanitise ``value`` into something usable as a CSS class name.

    Identifiers cannot start with a digit (or a hyphen followed by a digit), so
    such values receive a leading underscore. Everything outside
    ``[-_A-Za-z0-9]`` is dropped, which removes whitespace from labels such as
    ``"Legal Obligation"``.
    """
    if not value:
        raise ValueError("CSS identifier cannot be empty.")
    output = value
    if _LEADING_DIGIT.match(output):
        output = f"_{output}"
    return _INVALID_IDENTIFIER_CHARS.sub("", output)


__all__ = ["CssDeclarations", "css_identifier"]
