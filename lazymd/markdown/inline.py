"""Inline span recognition.

Spans are matched left to right: backslash escapes, code spans, autolinks and
``<br>`` breaks, links, then ``*``/``_``/``~`` delimiter runs. A delimiter
without a valid closer stays literal text, so parsing never fails.

Failed closer searches are remembered per piece of text, which keeps long
paragraphs full of unmatched delimiters linear.
"""

from __future__ import annotations

import re

from .nodes import Code, Emphasis, InlineSpan, LineBreak, Link, Strikethrough, Strong, Text

ESCAPABLE = set("\\`*_{}[]()#+-.!|~<>\"'")
# Spans nested deeper than this keep their delimiters as literal text.
MAX_INLINE_NESTING = 32
_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_AUTOLINK_RE = re.compile(r"<((?:https?|ftp|mailto):[^\s<>]+)>", re.IGNORECASE)
_LINK_TITLE_RE = re.compile(r"""^(\S+)\s+(?:"[^"]*"|'[^']*')$""")


class _Misses:
    """Closer searches already known to fail within one piece of text."""

    def __init__(self) -> None:
        # Backtick run length -> earliest start of a search that found nothing.
        self.backticks: dict[int, int] = {}
        # Delimiter -> scan positions past the start of a failed search.
        self.passed: dict[str, set[int]] = {}
        # Delimiter -> starts of failed searches.
        self.starts: dict[str, set[int]] = {}

    def backtick_failed(self, run: int, start: int) -> bool:
        earliest = self.backticks.get(run)
        return earliest is not None and start >= earliest

    def record_backtick(self, run: int, start: int) -> None:
        self.backticks[run] = min(start, self.backticks.get(run, start))

    def closer_failed(self, delim: str, j: int, start: int) -> bool:
        # A failed scan that passed ``j`` saw every candidate from ``j`` on.
        if j in self.passed.get(delim, ()):
            return True
        return j == start and j in self.starts.get(delim, ())

    def record_closer(self, delim: str, start: int, visited: list[int]) -> None:
        self.starts.setdefault(delim, set()).add(start)
        self.passed.setdefault(delim, set()).update(visited)


def parse_inline(text: str) -> tuple[InlineSpan, ...]:
    """Parse one paragraph/heading/cell worth of text into inline spans."""
    return tuple(_merge_text(_parse(text, 0)))


def _merge_text(spans: list[InlineSpan]) -> list[InlineSpan]:
    out: list[InlineSpan] = []
    for span in spans:
        if isinstance(span, Text):
            if not span.text:
                continue
            if out and isinstance(out[-1], Text):
                out[-1] = Text(out[-1].text + span.text)
                continue
        out.append(span)
    return out


def _run_length(text: str, start: int) -> int:
    ch = text[start]
    end = start
    while end < len(text) and text[end] == ch:
        end += 1
    return end - start


def _skip_code_span(text: str, start: int, misses: _Misses) -> int:
    """Return index after the code span opening at ``start``, or ``start + run`` if unmatched."""
    run = _run_length(text, start)
    closer = _find_backtick_closer(text, start + run, run, misses)
    if closer < 0:
        return start + run
    return closer + run


def _find_backtick_closer(text: str, start: int, run: int, misses: _Misses) -> int:
    if misses.backtick_failed(run, start):
        return -1
    j = start
    while j < len(text):
        if text[j] == "`":
            length = _run_length(text, j)
            if length == run:
                return j
            j += length
            continue
        j += 1
    misses.record_backtick(run, start)
    return -1


def _find_closer(text: str, start: int, delim: str, misses: _Misses) -> int:
    """Find a closing delimiter run for ``delim`` starting the search at ``start``.

    Escapes and code spans are skipped. A closer must follow a non-space
    character; for single delimiters, longer runs of the same character are
    skipped as a unit so ``*a **b** c*`` pairs the outer stars.
    """
    ch = delim[0]
    size = len(delim)
    visited: list[int] = []
    j = start
    while j < len(text):
        if misses.closer_failed(delim, j, start):
            break
        if j > start:
            visited.append(j)
        c = text[j]
        if c == "\\":
            j += 2
            continue
        if c == "`":
            j = _skip_code_span(text, j, misses)
            continue
        if c == ch:
            run = _run_length(text, j)
            if j > start and not text[j - 1].isspace():
                if run == size or (run > size and size >= 2):
                    if ch == "_" and j + size < len(text) and text[j + size].isalnum():
                        j += run
                        continue
                    return j
            j += run
            continue
        j += 1
    misses.record_closer(delim, start, visited)
    return -1


def _find_bracket_close(text: str, start: int, misses: _Misses) -> int:
    depth = 0
    j = start
    while j < len(text):
        c = text[j]
        if c == "\\":
            j += 2
            continue
        if c == "`":
            j = _skip_code_span(text, j, misses)
            continue
        if c == "[":
            depth += 1
        elif c == "]":
            if depth == 0:
                return j
            depth -= 1
        j += 1
    return -1


def _find_paren_close(text: str, start: int) -> int:
    depth = 0
    j = start
    while j < len(text):
        c = text[j]
        if c == "\\":
            j += 2
            continue
        if c == "(":
            depth += 1
        elif c == ")":
            if depth == 0:
                return j
            depth -= 1
        j += 1
    return -1


def _link_target(raw: str) -> str:
    target = raw.strip()
    titled = _LINK_TITLE_RE.match(target)
    if titled:
        target = titled.group(1)
    if target.startswith("<") and target.endswith(">"):
        target = target[1:-1]
    return target


def _parse(text: str, depth: int) -> list[InlineSpan]:
    out: list[InlineSpan] = []
    buf: list[str] = []
    misses = _Misses()
    nested = depth < MAX_INLINE_NESTING

    def flush() -> None:
        if buf:
            out.append(Text("".join(buf)))
            buf.clear()

    i = 0
    n = len(text)
    while i < n:
        ch = text[i]

        if ch == "\\" and i + 1 < n and text[i + 1] in ESCAPABLE:
            buf.append(text[i + 1])
            i += 2
            continue

        if ch == "`":
            run = _run_length(text, i)
            closer = _find_backtick_closer(text, i + run, run, misses)
            if closer < 0:
                buf.append(text[i : i + run])
                i += run
                continue
            content = text[i + run : closer]
            if len(content) >= 2 and content.startswith(" ") and content.endswith(" ") and content.strip():
                content = content[1:-1]
            flush()
            out.append(Code(content))
            i = closer + run
            continue

        if ch == "<":
            br = _BR_RE.match(text, i)
            if br:
                flush()
                out.append(LineBreak())
                i = br.end()
                continue
            auto = _AUTOLINK_RE.match(text, i)
            if auto:
                flush()
                url = auto.group(1)
                out.append(Link((Text(url),), url))
                i = auto.end()
                continue

        if ch == "[" and nested:
            close = _find_bracket_close(text, i + 1, misses)
            if close > 0 and close + 1 < n and text[close + 1] == "(":
                paren = _find_paren_close(text, close + 2)
                if paren > 0:
                    flush()
                    label = tuple(_merge_text(_parse(text[i + 1 : close], depth + 1)))
                    out.append(Link(label, _link_target(text[close + 2 : paren])))
                    i = paren + 1
                    continue

        if ch in "*_~":
            span, end = _parse_delimited(text, i, depth, misses) if nested else (None, i)
            if span is not None:
                flush()
                out.append(span)
                i = end
                continue
            run = _run_length(text, i)
            buf.append(text[i : i + run])
            i += run
            continue

        buf.append(ch)
        i += 1

    flush()
    return out


def _inner(text: str, depth: int) -> tuple[InlineSpan, ...]:
    return tuple(_merge_text(_parse(text, depth + 1)))


def _parse_delimited(text: str, start: int, depth: int, misses: _Misses) -> tuple[InlineSpan | None, int]:
    """Try to match an emphasis/strong/strike span opening at ``start``."""
    ch = text[start]
    run = _run_length(text, start)
    after = start + run
    if after >= len(text) or text[after].isspace():
        return None, start
    if ch == "_" and start > 0 and text[start - 1].isalnum():
        return None, start

    if ch == "~":
        if run != 2:
            return None, start
        closer = _find_closer(text, after, "~~", misses)
        if closer < 0:
            return None, start
        return Strikethrough(_inner(text[after:closer], depth)), closer + 2

    if run >= 3:
        closer = _find_closer(text, start + 3, ch * 3, misses)
        if closer >= 0 and _run_length(text, closer) == 3:
            return Strong((Emphasis(_inner(text[start + 3 : closer], depth)),)), closer + 3

    if run >= 2:
        closer = _find_closer(text, start + 2, ch * 2, misses)
        if closer >= 0:
            inner = _inner(text[start + 2 : closer], depth)
            if inner:
                return Strong(inner), closer + 2

    closer = _find_closer(text, start + 1, ch, misses)
    if closer >= 0:
        inner = _inner(text[start + 1 : closer], depth)
        if inner:
            return Emphasis(inner), closer + 1
    return None, start
