"""Incremental decoding of the database index documents.

Both index documents are JSON arrays of small objects. They are decoded
one element at a time so that a caller looking for a single module or
alias can stop as soon as it has found it.
"""

import json
from typing import Any, Iterator, Union

from ..errors import DecodeError
from .models import ModuleMeta, VulnMeta

_WHITESPACE = " \t\n\r"


def iter_json_array(data: Union[bytes, str]) -> Iterator[Any]:
    """Yield the elements of a JSON array without decoding all of it.

    Args:
        data: The raw document

    Yields:
        Decoded array elements, in order

    Raises:
        DecodeError: If the document is not a well-formed JSON array
    """
    if isinstance(data, bytes):
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise DecodeError(f"index is not valid UTF-8: {e}") from e
    else:
        text = data

    decoder = json.JSONDecoder()
    end = len(text)
    pos = _skip_whitespace(text, 0)
    if pos >= end or text[pos] != "[":
        raise DecodeError("index: expected a JSON array")
    pos = _skip_whitespace(text, pos + 1)

    if pos < end and text[pos] == "]":
        _expect_end(text, pos + 1)
        return

    while True:
        try:
            item, pos = decoder.raw_decode(text, pos)
        except json.JSONDecodeError as e:
            raise DecodeError(f"index: {e}") from e
        yield item

        pos = _skip_whitespace(text, pos)
        if pos >= end:
            raise DecodeError("index: unterminated JSON array")
        if text[pos] == ",":
            pos = _skip_whitespace(text, pos + 1)
            continue
        if text[pos] == "]":
            _expect_end(text, pos + 1)
            return
        raise DecodeError(f"index: unexpected {text[pos]!r} at offset {pos}")


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _WHITESPACE:
        pos += 1
    return pos


def _expect_end(text: str, pos: int) -> None:
    if _skip_whitespace(text, pos) != len(text):
        raise DecodeError("index: trailing data after JSON array")


def iter_modules(data: Union[bytes, str]) -> Iterator[ModuleMeta]:
    """Yield the records of ``index/modules.json``."""
    for item in iter_json_array(data):
        yield ModuleMeta.from_dict(item)


def iter_vulns(data: Union[bytes, str]) -> Iterator[VulnMeta]:
    """Yield the records of ``index/vulns.json``."""
    for item in iter_json_array(data):
        yield VulnMeta.from_dict(item)
