"""Identifier, tag and case-style helpers for generated code."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from sqldyngen.catalog import Column

_ENUM_SEPARATORS = "-/:_"


@dataclass
class Constant:
    """One named value of a generated enum type."""

    name: str
    type: str
    value: str


@dataclass
class GoEnum:
    """A generated enum type with its constants and struct tags."""

    name: str = ""
    comment: str = ""
    constants: list[Constant] = field(default_factory=list)
    name_tags: dict[str, str] = field(default_factory=dict)
    valid_tags: dict[str, str] = field(default_factory=dict)

    def name_tag(self) -> str:
        return tags_to_string(self.name_tags)

    def valid_tag(self) -> str:
        return tags_to_string(self.valid_tags)


@dataclass
class Field:
    """A field of a generated struct."""

    name: str = ""
    db_name: str = ""
    type: str = ""
    tags: dict[str, str] = field(default_factory=dict)
    comment: str = ""
    column: Column | None = None
    embed_fields: list[Field] = field(default_factory=list)

    def tag(self) -> str:
        return tags_to_string(self.tags)

    def has_sqlc_slice(self) -> bool:
        return self.column is not None and self.column.is_sqlc_slice


def _quote(value: str) -> str:
    out = ['"']
    for ch in value:
        if ch == '"':
            out.append('\\"')
        elif ch == "\\":
            out.append("\\\\")
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\t":
            out.append("\\t")
        elif ch == "\r":
            out.append("\\r")
        elif ch.isprintable():
            out.append(ch)
        elif ord(ch) < 0x100:
            out.append(f"\\x{ord(ch):02x}")
        elif ord(ch) < 0x10000:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(f"\\U{ord(ch):08x}")
    out.append('"')
    return "".join(out)


def tags_to_string(tags: dict[str, str] | None) -> str:
    """Render struct tags as key:"value" pairs in sorted order."""
    if not tags:
        return ""
    return " ".join(sorted(f"{key}:{_quote(val)}" for key, val in tags.items()))


def enum_replace(value: str) -> str:
    """Drop every character that cannot appear in an identifier; map separators to '_'."""
    out = []
    for ch in value:
        if ch in _ENUM_SEPARATORS:
            out.append("_")
        elif ch.isascii() and ch.isalnum():
            out.append(ch)
    return "".join(out)


def title_first(s: str) -> str:
    """Upper-case the first character of a non-empty string."""
    if not s:
        raise ValueError("cannot title-case an empty string")
    return s[0].upper() + s[1:]


def enum_value_name(value: str) -> str:
    """Turn an enum value into a CamelCase identifier."""
    return "".join(title_first(part) for part in enum_replace(value).split("_"))


def _is_word_separator(ch: str) -> bool:
    if ch.isascii():
        return not (ch.isalnum() or ch == "_")
    if ch.isalpha() or ch.isdigit():
        return False
    return ch.isspace()


def _title_words(s: str) -> str:
    out = []
    prev = " "
    for ch in s:
        out.append(ch.upper() if _is_word_separator(prev) else ch)
        prev = ch
    return "".join(out)


_CAMEL_PATTERN = re.compile(r"[^A-Z][A-Z]+")


def to_snake_case(s: str) -> str:
    if "_" not in s:
        s = _CAMEL_PATTERN.sub(lambda m: m.group()[:1] + "_" + m.group()[1:], s)
    return s.lower()


def _to_camel_init_case(name: str, init_upper: bool) -> str:
    out = []
    for i, part in enumerate(name.split("_")):
        if not init_upper and i == 0:
            out.append(part)
        elif part == "id":
            out.append("ID")
        else:
            out.append(_title_words(part))
    return "".join(out)


def to_camel_case(s: str) -> str:
    return _to_camel_init_case(s, False)


def to_pascal_case(s: str) -> str:
    return _to_camel_init_case(s, True)


def to_json_camel_case(name: str, id_uppercase: bool) -> str:
    id_str = "ID" if id_uppercase else "Id"
    out = []
    for i, part in enumerate(name.split("_")):
        if i == 0:
            out.append(part)
        elif part == "id":
            out.append(id_str)
        else:
            out.append(_title_words(part))
    return "".join(out)


def set_case_style(name: str, style: str) -> str:
    if style == "camel":
        return to_camel_case(name)
    if style == "pascal":
        return to_pascal_case(name)
    if style == "snake":
        return to_snake_case(name)
    raise ValueError(f"unsupported JSON tags case style: '{style}'")


def set_json_case_style(name: str, style: str, id_uppercase: bool) -> str:
    if style == "camel":
        return to_json_camel_case(name, id_uppercase)
    if style == "pascal":
        return to_pascal_case(name)
    if style == "snake":
        return to_snake_case(name)
    raise ValueError(f"unsupported JSON tags case style: '{style}'")


def json_tag_name(name: str, style: str = "", id_uppercase: bool = False) -> str:
    """Return the JSON tag name for a column under the configured case style."""
    if style in ("", "none"):
        return name
    return set_json_case_style(name, style, id_uppercase)


def to_lower_case(s: str) -> str:
    if not s:
        return ""
    return s[:1].lower() + s[1:]