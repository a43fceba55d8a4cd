"""Version-string ordering with the semantics Composer-format tooling uses."""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Callable

__all__ = [
    "canonicalize_version",
    "compare_versions",
    "version_key",
]

_NUMBER_FORM = "#N#"
_SEPARATOR_CHARS = "-_+"
_DIGITS = "0123456789"

# Prefix matched in order, so "alpha" must precede "a".
_SPECIAL_FORMS: tuple[tuple[str, int], ...] = (
    ("dev", 0),
    ("alpha", 1),
    ("a", 1),
    ("beta", 2),
    ("b", 2),
    ("RC", 3),
    ("rc", 3),
    ("#", 4),
    ("pl", 5),
    ("p", 5),
)


def _is_digit(char: str) -> bool:
    return char != "" and char in _DIGITS


def _is_non_digit(char: str) -> bool:
    return char != "." and not _is_digit(char)


def _is_alnum(char: str) -> bool:
    return char.isascii() and char.isalnum()


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def canonicalize_version(version: str) -> str:
    """Split ``version`` into dot-separated numeric and textual segments.

    Separators (``-``, ``_``, ``+`` and any other non-alphanumeric
    character) become a single dot, and a dot is inserted wherever the
    string switches between digits and non-digits. The first character is
    kept verbatim.
    """
    if not version:
        return version
    out: list[str] = [version[0]]
    previous = version[0]
    for char in version[1:]:
        if char in _SEPARATOR_CHARS:
            if out[-1] != ".":
                out.append(".")
        elif (_is_non_digit(previous) and _is_digit(char)) or (
            _is_digit(previous) and _is_non_digit(char)
        ):
            if out[-1] != ".":
                out.append(".")
            out.append(char)
        elif not _is_alnum(char):
            if out[-1] != ".":
                out.append(".")
        else:
            out.append(char)
        previous = char
    return "".join(out)


def _special_form_order(form: str) -> int:
    for name, order in _SPECIAL_FORMS:
        if form.startswith(name):
            return order
    return -1


def _compare_special_forms(left: str, right: str) -> int:
    return _sign(_special_form_order(left) - _special_form_order(right))


def _compare_segments(left: str, right: str) -> int:
    left_digit = _is_digit(left[:1])
    right_digit = _is_digit(right[:1])
    if left_digit and right_digit:
        return _sign(int(left) - int(right))
    if not left_digit and not right_digit:
        return _compare_special_forms(left, right)
    if left_digit:
        return _compare_special_forms(_NUMBER_FORM, right)
    return _compare_special_forms(left, _NUMBER_FORM)


def compare_versions(a: str, b: str) -> int:
    """Return -1, 0 or 1 as ``a`` sorts before, equal to or after ``b``.

    Numeric segments compare as integers, textual segments by their
    release stage (``dev`` < ``alpha`` < ``beta`` < ``RC`` < number <
    ``pl``) and unknown text such as constraint operators sorts lowest.
    When one side runs out of segments, a trailing number makes the longer
    string greater while a trailing stage is compared against a number.
    """
    if not a or not b:
        if not a and not b:
            return 0
        return 1 if a else -1

    rest_a = a if a.startswith("#") else canonicalize_version(a)
    rest_b = b if b.startswith("#") else canonicalize_version(b)
    more_a = more_b = True
    result = 0

    while rest_a and rest_b and more_a and more_b:
        segment_a, sep_a, tail_a = rest_a.partition(".")
        segment_b, sep_b, tail_b = rest_b.partition(".")
        more_a = bool(sep_a)
        more_b = bool(sep_b)
        result = _compare_segments(segment_a, segment_b)
        if result != 0:
            break
        if more_a:
            rest_a = tail_a
        if more_b:
            rest_b = tail_b

    if result == 0:
        if more_a:
            result = 1 if _is_digit(rest_a[:1]) else compare_versions(rest_a, _NUMBER_FORM)
        elif more_b:
            result = -1 if _is_digit(rest_b[:1]) else compare_versions(_NUMBER_FORM, rest_b)
    return result


version_key: Callable[[str], Any] = cmp_to_key(compare_versions)
