"""Runtime filtering of queries annotated with ``-- :if $N`` markers.

Each annotated line is kept only when every argument it names is active
(not None and not False). Placeholders in the kept text are renumbered
sequentially and the argument list is trimmed to match.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Sequence

_INLINE_MARKER = " -- :if $"
_STANDALONE_PREFIX = "-- :if $"
_INLINE_MARKER_RE = re.compile(r" -- :if \$([0-9]*)")
_PLACEHOLDER_RE = re.compile(r"\$([0-9]+)")
_ORPHAN_KEYWORDS = tuple(kw.casefold() for kw in ("ORDER BY", "WHERE", "GROUP BY", "HAVING"))
_LINE_WHITESPACE = " \t\n"


@dataclass(frozen=True)
class _Segment:
    """A piece of query text split at its placeholders.

    ``parts`` interleave with ``arg_nums`` (1-based placeholder numbers);
    ``cond_idxs`` are 0-based argument indices that must all be active.
    """

    parts: tuple[str, ...]
    arg_nums: tuple[int, ...]
    cond_idxs: tuple[int, ...] = ()


def arg_active(arg: Any) -> bool:
    """Return whether an argument switches its annotated lines on."""
    if arg is None:
        return False
    if isinstance(arg, bool):
        return arg
    return True


def extract_cond_idxs(line: str) -> tuple[list[int], str]:
    """Pull every ``-- :if $N`` marker off a line.

    Returns the 0-based condition indices and the line without its markers.
    """
    idx = line.find(_INLINE_MARKER)
    if idx == -1:
        return [], line
    cleaned = line[:idx].rstrip(" \t")
    cond_idxs = [
        int(digits) - 1
        for digits in _INLINE_MARKER_RE.findall(line[idx:])
        if digits and int(digits) > 0
    ]
    return cond_idxs, cleaned


def split_placeholders(text: str) -> tuple[list[str], list[int]]:
    """Split text at ``$N`` placeholders.

    Returns the text parts (one more than the placeholders) and the 1-based
    placeholder numbers in order of appearance. A ``$`` without digits, or
    followed by a zero value, stays part of the text.
    """
    parts: list[str] = []
    arg_nums: list[int] = []
    last = 0
    for match in _PLACEHOLDER_RE.finditer(text):
        number = int(match.group(1))
        if number <= 0:
            continue
        parts.append(text[last : match.start()])
        arg_nums.append(number)
        last = match.end()
    parts.append(text[last:])
    return parts, arg_nums


def finalize_query(query: str) -> str:
    """Tidy the query after conditional lines were dropped.

    Repeatedly strips a trailing comma from the last line and removes a
    clause keyword (WHERE, ORDER BY, GROUP BY, HAVING) left with no body.
    """
    while True:
        end = len(query.rstrip(_LINE_WHITESPACE))
        if end == 0:
            return query
        start = query.rfind("\n", 0, end) + 1
        last_line = query[start:end]
        trimmed = last_line.strip()

        if trimmed.endswith(","):
            comma = start + last_line.rfind(",")
            query = query[:comma] + query[comma + 1 :]
            continue

        if trimmed.casefold() in _ORPHAN_KEYWORDS:
            query = query[:start].rstrip(_LINE_WHITESPACE)
            continue

        return query


def _split_lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _standalone_condition(trimmed: str) -> int:
    """Return N for a line that is exactly ``-- :if $N``, else 0."""
    if not trimmed.startswith(_STANDALONE_PREFIX):
        return 0
    rest = trimmed[len(_STANDALONE_PREFIX) :]
    if not rest or not all("0" <= ch <= "9" for ch in rest):
        return 0
    return int(rest)


@dataclass(frozen=True)
class CompiledQuery:
    """A pre-parsed annotated query whose ``build`` can be called repeatedly."""

    segments: tuple[_Segment, ...]

    def build(self, args: Sequence[Any]) -> tuple[str, list[Any]]:
        """Return the filtered query and the arguments its placeholders use."""
        out: list[str] = []
        out_args: list[Any] = []
        assigned: dict[int, int] = {}
        next_number = 1

        for seg in self.segments:
            if not all(idx < len(args) and arg_active(args[idx]) for idx in seg.cond_idxs):
                continue
            for i, part in enumerate(seg.parts):
                out.append(part)
                if i >= len(seg.arg_nums):
                    continue
                arg_idx = seg.arg_nums[i] - 1
                if arg_idx in assigned:
                    out.append(f"${assigned[arg_idx]}")
                    continue
                out.append(f"${next_number}")
                assigned[arg_idx] = next_number
                next_number += 1
                if 0 <= arg_idx < len(args):
                    out_args.append(args[arg_idx])

        return finalize_query("".join(out)), out_args


def compile_dyn_sql(annotated_sql: str) -> CompiledQuery:
    """Parse a query carrying ``-- :if $N`` markers once, for repeated builds."""
    segments: list[_Segment] = []
    static: list[str] = []

    def flush_static() -> None:
        if not static:
            return
        text = "".join(static)
        static.clear()
        if text:
            parts, nums = split_placeholders(text)
            segments.append(_Segment(tuple(parts), tuple(nums)))

    lines = iter(_split_lines(annotated_sql))
    first = True
    for line in lines:
        sep = "" if first else "\n"
        first = False

        number = _standalone_condition(line.strip())
        if number > 0:
            flush_static()
            next_line = next(lines, None)
            if next_line is not None:
                conds, cleaned = extract_cond_idxs(next_line)
                parts, nums = split_placeholders("\n" + cleaned)
                segments.append(_Segment(tuple(parts), tuple(nums), (number - 1, *conds)))
            continue

        conds, cleaned = extract_cond_idxs(line)
        if conds:
            flush_static()
            parts, nums = split_placeholders(sep + cleaned)
            segments.append(_Segment(tuple(parts), tuple(nums), tuple(conds)))
            continue

        static.append(sep + line)

    flush_static()
    return CompiledQuery(tuple(segments))


def dynamic_sql(query: str, args: Sequence[Any]) -> tuple[str, list[Any]]:
    """Compile and build in one step; prefer ``compile_dyn_sql`` for reuse."""
    return compile_dyn_sql(query).build(args)