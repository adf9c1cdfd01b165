"""Parsing of ``-- :if @param`` annotations in query text."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable

from sqldyngen.catalog import Parameter

_IF_ANNOTATION_RE = re.compile(r"--\s*:if\s+[@$]\w+(?:\s+[@$]\w+)*\s*$", re.ASCII)
_IF_PARAM_RE = re.compile(r"[@$](\w+)", re.ASCII)


@dataclass
class FlagParam:
    """A boolean parameter that exists only to switch lines on or off."""

    name: str
    go_name: str


@dataclass
class DynFilterInfo:
    """Result of rewriting a query's ``:if`` annotations.

    ``annotated_sql`` carries ``-- :if $N`` markers where N-1 indexes the full
    argument list: SQL parameters by position, then flag parameters.
    """

    annotated_sql: str
    conditional_param_numbers: list[int] = field(default_factory=list)
    flag_params: list[FlagParam] = field(default_factory=list)
    ordered_arg_names: list[str] = field(default_factory=list)


def parse_if_names(annotation: str) -> list[str]:
    """Return every parameter name listed in an ``:if`` annotation."""
    return _IF_PARAM_RE.findall(annotation)


def struct_name(name: str) -> str:
    """Convert snake_case to CamelCase."""
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def _paren_depth(text: str) -> int:
    return text.count("(") - text.count(")")


def parse_dyn_filter(sql: str, params: Iterable[Parameter] | None) -> DynFilterInfo | None:
    """Rewrite ``-- :if @name`` annotations into positional ``-- :if $N`` markers.

    Returns None when the query has no annotations. Raises ValueError when an
    annotation names an unknown parameter.
    """
    params = list(params or [])
    param_by_name = {p.column.name: p.number for p in params if p.column.name}
    lines = sql.split("\n")

    # Names in order of first appearance, mapped to their $N number or None for flags.
    refs: dict[str, int | None] = {}
    for line in lines:
        match = _IF_ANNOTATION_RE.search(line)
        if match is None:
            continue
        for name in parse_if_names(line[match.start():]):
            if name not in refs:
                refs[name] = param_by_name.get(name)

    if not refs:
        return None

    arg_index: dict[str, int] = {}
    conditional: set[int] = set()
    flag_params: list[FlagParam] = []
    for name, number in refs.items():
        if number is not None:
            arg_index[name] = number - 1
            conditional.add(number)
        else:
            arg_index[name] = len(params) + len(flag_params)
            flag_params.append(FlagParam(name=name, go_name=struct_name(name)))

    def suffix_for(names: list[str]) -> str:
        parts = []
        for name in names:
            try:
                idx = arg_index[name]
            except KeyError:
                raise ValueError(f"dynfilter: unknown param @{name}") from None
            parts.append(f"-- :if ${idx + 1}")
        return " " + " ".join(parts)

    new_lines: list[str] = []
    block_suffix = ""
    block_depth = 0

    for i, line in enumerate(lines):
        if block_suffix:
            block_depth += _paren_depth(line)
            match = _IF_ANNOTATION_RE.search(line)
            if match is not None:
                inner = suffix_for(parse_if_names(line[match.start():]))
                line = line[: match.start()].rstrip(" \t") + inner
            new_lines.append(line.rstrip(" \t") + block_suffix)
            if block_depth <= 0:
                block_suffix = ""
                block_depth = 0
            continue

        match = _IF_ANNOTATION_RE.search(line)
        if match is None:
            new_lines.append(line)
            continue

        suffix = suffix_for(parse_if_names(line[match.start():]))
        if not line[: match.start()].strip():
            # Standalone marker: the following line is conditional.
            new_lines.append(suffix.strip())
            if i + 1 < len(lines) and _paren_depth(lines[i + 1]) > 0:
                block_suffix = suffix
                block_depth = 0
        else:
            content = line[: match.start()].rstrip(" \t")
            new_lines.append(content + suffix)
            depth = _paren_depth(content)
            if depth > 0:
                block_suffix = suffix
                block_depth = depth

    sql_params = sorted(
        ((p.number, p.column.name) for p in params if p.column.name), key=lambda item: item[0]
    )
    ordered = [""] * (len(params) + len(flag_params))
    for position, (_, name) in enumerate(sql_params):
        ordered[position] = name
    for offset, flag in enumerate(flag_params):
        ordered[len(params) + offset] = flag.name

    return DynFilterInfo(
        annotated_sql="\n".join(new_lines),
        conditional_param_numbers=sorted(conditional),
        flag_params=flag_params,
        ordered_arg_names=ordered,
    )