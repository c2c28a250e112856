"""Parameter assembly for Web API calls.

Every operation turns its arguments into an ordered list of string pairs.
Optional arguments are left out when unset; how a boolean is spelled depends
on the field (Slack is not consistent about it), so callers pick a BoolStyle
per field instead of relying on one global rule.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from .payload import encode_payload, is_empty_payload
from .timestamps import to_slack_ts

Param = Tuple[str, str]


class BoolStyle(str, Enum):
    DIGIT = "digit"  # "1" / "0"
    WORD = "word"  # "true" / "false"
    TITLE = "title"  # "True" / "False"


def format_bool(value: bool, style: BoolStyle) -> str:
    if style is BoolStyle.DIGIT:
        return "1" if value else "0"
    if style is BoolStyle.WORD:
        return "true" if value else "false"
    return str(bool(value))


class FileType(str, Enum):
    """File type filter values for files.list, in wire order."""

    POSTS = "posts"
    SNIPPETS = "snippets"
    IMAGES = "images"
    GDOCS = "gdocs"
    ZIPS = "zips"
    PDFS = "pdfs"


def file_types_param(types: Optional[Iterable[FileType]]) -> Optional[str]:
    """Comma-joined filter, or None when no filtering is wanted.

    An empty (or missing) set means "all types" and sends no filter at all.
    Members come out in declaration order regardless of the input order.
    """
    if not types:
        return None
    wanted = {FileType(t) for t in types}
    return ",".join(t.value for t in FileType if t in wanted)


class ParamList:
    """Ordered (name, value) pairs. Duplicate names are kept as given."""

    def __init__(self, *pairs: Param):
        self._items: List[Param] = []
        for name, value in pairs:
            self.add(name, value)

    def add(self, name: str, value: Any) -> "ParamList":
        self._items.append((name, str(value)))
        return self

    def add_str(self, name: str, value: Optional[str]) -> "ParamList":
        if value:
            self._items.append((name, value))
        return self

    def add_int(self, name: str, value: Optional[int]) -> "ParamList":
        if value is not None:
            self._items.append((name, str(value)))
        return self

    def add_positive(self, name: str, value: Optional[int]) -> "ParamList":
        if value is not None and value > 0:
            self._items.append((name, str(value)))
        return self

    def add_flag(self, name: str, value: Optional[bool], style: BoolStyle) -> "ParamList":
        if value is not None:
            self._items.append((name, format_bool(value, style)))
        return self

    def add_if_true(self, name: str, value: bool) -> "ParamList":
        # link_names / highlight: only ever sent switched on
        if value:
            self._items.append((name, "1"))
        return self

    def add_joined(self, name: str, values: Optional[Iterable[str]]) -> "ParamList":
        if values:
            joined = ",".join(values)
            if joined:
                self._items.append((name, joined))
        return self

    def add_payload(self, name: str, value: Any) -> "ParamList":
        if not is_empty_payload(value):
            self._items.append((name, encode_payload(value)))
        return self

    def add_timestamp(self, name: str, value: Optional[datetime]) -> "ParamList":
        if value is not None:
            self._items.append((name, to_slack_ts(value)))
        return self

    def items(self) -> List[Param]:
        return list(self._items)

    def names(self) -> List[str]:
        return [name for name, _ in self._items]

    def __iter__(self) -> Iterator[Param]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"ParamList({self._items!r})"
