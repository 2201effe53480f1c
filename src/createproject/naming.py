"""Case conversion helpers used to derive template tokens from a project name."""

from __future__ import annotations

import re
import unicodedata
from typing import Callable, Iterable, Mapping

__all__ = [
    "CASE_CONVERTERS",
    "camel_case",
    "constant_case",
    "dot_case",
    "header_case",
    "kebab_case",
    "lower_case",
    "no_case",
    "pascal_case",
    "snake_case",
    "split_words",
    "title_case",
]


_CASE_BOUNDARIES = (
    re.compile(r"([a-z0-9])([A-Z])"),
    re.compile(r"([A-Z])([A-Z][a-z])"),
)
_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]+")


def _to_ascii(value: str) -> str:
    text = unicodedata.normalize("NFKD", value)
    return text.encode("ascii", "ignore").decode("ascii")


def split_words(value: str | Iterable[str]) -> list[str]:
    """Split ``value`` into lower-case words.

    Word boundaries are runs of non alphanumeric characters and case
    transitions, so ``"myCoolApp"``, ``"my-cool-app"`` and ``"My Cool App"``
    all produce ``["my", "cool", "app"]``. When an iterable of strings is
    provided the values are joined with spaces first.
    """

    if isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
        value = " ".join(str(part) for part in value)

    text = _to_ascii(str(value))
    for boundary in _CASE_BOUNDARIES:
        text = boundary.sub(r"\1 \2", text)
    text = _NON_ALPHANUMERIC.sub(" ", text)
    return [word.lower() for word in text.split()]


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


def no_case(value: str) -> str:
    """``"myCoolApp"`` -> ``"my cool app"``."""

    return " ".join(split_words(value))


def camel_case(value: str) -> str:
    words = split_words(value)
    if not words:
        return ""
    head, *tail = words
    return head + "".join(_capitalize(word) for word in tail)


def pascal_case(value: str) -> str:
    return "".join(_capitalize(word) for word in split_words(value))


def kebab_case(value: str) -> str:
    return "-".join(split_words(value))


def snake_case(value: str) -> str:
    return "_".join(split_words(value))


def constant_case(value: str) -> str:
    return "_".join(split_words(value)).upper()


def header_case(value: str) -> str:
    return "-".join(_capitalize(word) for word in split_words(value))


def dot_case(value: str) -> str:
    return ".".join(split_words(value))


def title_case(value: str) -> str:
    return " ".join(_capitalize(word) for word in split_words(value))


def lower_case(value: str) -> str:
    """Lower-case ``value`` without touching word boundaries."""

    return str(value).lower()


CASE_CONVERTERS: Mapping[str, Callable[[str], str]] = {
    "camel": camel_case,
    "pascal": pascal_case,
    "kebab": kebab_case,
    "snake": snake_case,
    "constant": constant_case,
    "header": header_case,
    "dot": dot_case,
    "title": title_case,
    "lower": lower_case,
    "no": no_case,
}
