"""Code-block tokenization and terminal text sanitization.

Fenced code is lexed with Pygments in a single pass over the whole block, so
multi-line strings and block comments keep their state across lines. Pygments
token types are folded into a small set of syntax classes the layout engine
colors. Unknown or missing language tags degrade to one plain token.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

from pygments.lexers import get_lexer_by_name
from pygments.token import Comment, Keyword, Name, Number, Operator, Punctuation, String
from pygments.util import ClassNotFound

log = logging.getLogger(__name__)

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


class SyntaxClass(Enum):
    KEYWORD = "keyword"
    STRING = "string"
    COMMENT = "comment"
    NUMBER = "number"
    IDENTIFIER = "identifier"
    PUNCTUATION = "punctuation"
    PLAIN = "plain"


@dataclass(frozen=True)
class Token:
    text: str
    syntax_class: SyntaxClass


# Fenced-code info tags mapped to Pygments lexer aliases.
SUPPORTED_LANGUAGES: dict[str, str] = {
    "python": "python",
    "py": "python",
    "python3": "python",
    "javascript": "javascript",
    "js": "javascript",
    "typescript": "typescript",
    "ts": "typescript",
    "rust": "rust",
    "rs": "rust",
    "go": "go",
    "golang": "go",
    "c": "c",
    "cpp": "cpp",
    "c++": "cpp",
    "java": "java",
    "bash": "bash",
    "sh": "bash",
    "shell": "bash",
    "zsh": "bash",
    "json": "json",
    "yaml": "yaml",
    "yml": "yaml",
    "toml": "toml",
    "html": "html",
    "css": "css",
    "sql": "sql",
    "ruby": "ruby",
    "rb": "ruby",
    "markdown": "markdown",
    "md": "markdown",
    "diff": "diff",
}

_LEXERS: dict[str, object] = {}


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def normalize_language(language: str | None) -> str | None:
    """Return the Pygments alias for a fence info tag, or ``None`` if unsupported."""
    if not language:
        return None
    return SUPPORTED_LANGUAGES.get(language.strip().lower())


def _lexer_for(alias: str):
    """Return a cached lexer that preserves leading/trailing newlines verbatim."""
    lexer = _LEXERS.get(alias)
    if lexer is None:
        lexer = get_lexer_by_name(alias, stripnl=False, ensurenl=False)
        _LEXERS[alias] = lexer
    return lexer


def classify(token_type) -> SyntaxClass:
    """Fold a Pygments token type into a SyntaxClass."""
    if token_type in Comment:
        return SyntaxClass.COMMENT
    if token_type in String:
        return SyntaxClass.STRING
    if token_type in Number:
        return SyntaxClass.NUMBER
    if token_type in Keyword or token_type in Name.Tag or token_type in Name.Builtin:
        return SyntaxClass.KEYWORD
    if token_type in Name:
        return SyntaxClass.IDENTIFIER
    if token_type in Punctuation or token_type in Operator:
        return SyntaxClass.PUNCTUATION
    return SyntaxClass.PLAIN


def tokenize(code: str, language: str | None = None) -> list[Token]:
    """Split one code block into classified tokens.

    Concatenating the token texts always reproduces ``code``. Lexer state
    carries across the block's lines and starts fresh on every call.
    """
    if not code:
        return []
    alias = normalize_language(language)
    if alias is None:
        return [Token(code, SyntaxClass.PLAIN)]

    try:
        raw_tokens = list(_lexer_for(alias).get_tokens(code))
    except ClassNotFound:
        log.debug("no pygments lexer for %r", alias)
        return [Token(code, SyntaxClass.PLAIN)]

    tokens: list[Token] = []
    for token_type, value in raw_tokens:
        if not value:
            continue
        syntax_class = classify(token_type)
        if tokens and tokens[-1].syntax_class is syntax_class:
            tokens[-1] = Token(tokens[-1].text + value, syntax_class)
        else:
            tokens.append(Token(value, syntax_class))

    if "".join(token.text for token in tokens) != code:
        # Some lexers normalize input; never let that alter the displayed code.
        log.debug("lexer %r altered block text; falling back to plain", alias)
        return [Token(code, SyntaxClass.PLAIN)]
    return tokens
