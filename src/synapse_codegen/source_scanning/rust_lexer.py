"""Tokenizer for the subset of Rust syntax needed to find item declarations."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from enum import Enum

from synapse_codegen.diagnostics.diagnostic_models import SourceLocation


class TokenKind(str, Enum):
    """Lexical classes produced by the tokenizer."""

    IDENT = "ident"
    LIFETIME = "lifetime"
    LITERAL = "literal"
    PUNCT = "punct"
    DOC = "doc"


@dataclass(frozen=True)
class Token:
    """One lexical token with its source span."""

    kind: TokenKind
    text: str
    start: int
    end: int
    line: int
    column: int

    def is_punct(self, value: str) -> bool:
        return self.kind == TokenKind.PUNCT and self.text == value

    def is_ident(self, value: str) -> bool:
        return self.kind == TokenKind.IDENT and self.text == value

    @property
    def is_raw_identifier(self) -> bool:
        """Return True for `r#name` identifiers, whose text omits the prefix."""
        return self.kind == TokenKind.IDENT and self.end - self.start != len(self.text)


_MULTI_CHAR_PUNCT = ("::", "->", "=>")


class _LineIndex:
    """Maps character offsets to 1-based line/column pairs."""

    def __init__(self, text: str) -> None:
        self._starts = [0]
        for index, char in enumerate(text):
            if char == "\n":
                self._starts.append(index + 1)

    def position(self, offset: int) -> tuple[int, int]:
        line_index = bisect_right(self._starts, offset) - 1
        return line_index + 1, offset - self._starts[line_index] + 1


class RustTokenizer:
    """Produces tokens while dropping ordinary comments and whitespace.

    Outer doc comments (`///` and `/** */`) are kept as DOC tokens; inner doc
    comments (`//!`, `/*! */`) are dropped with the other comments.
    """

    def __init__(self, text: str, path: str) -> None:
        self._text = text
        self._path = path
        self._index = 0
        self._lines = _LineIndex(text)
        self._tokens: list[Token] = []

    def location(self, offset: int) -> SourceLocation:
        line, column = self._lines.position(offset)
        return SourceLocation(path=self._path, line=line, column=column)

    def tokenize(self) -> list[Token]:
        text = self._text
        length = len(text)
        while self._index < length:
            char = text[self._index]
            if char.isspace():
                self._index += 1
            elif text.startswith("//", self._index):
                self._line_comment()
            elif text.startswith("/*", self._index):
                self._block_comment()
            elif char == '"':
                self._string(self._index, self._index)
            elif char in "rb" and self._raw_or_byte_literal():
                continue
            elif char == "'":
                self._quote()
            elif char.isalpha() or char == "_":
                self._identifier(self._index)
            elif char.isdigit():
                self._number()
            else:
                self._punct()
        return self._tokens

    def _emit(self, kind: TokenKind, text: str, start: int, end: int) -> None:
        line, column = self._lines.position(start)
        self._tokens.append(
            Token(kind=kind, text=text, start=start, end=end, line=line, column=column)
        )

    def _line_comment(self) -> None:
        start = self._index
        end = self._text.find("\n", start)
        if end == -1:
            end = len(self._text)
        body = self._text[start:end]
        self._index = end
        if body.startswith("///") and not body.startswith("////"):
            self._emit(TokenKind.DOC, _strip_doc_prefix(body[3:]), start, end)

    def _block_comment(self) -> None:
        start = self._index
        depth = 0
        index = start
        text = self._text
        while index < len(text):
            if text.startswith("/*", index):
                depth += 1
                index += 2
            elif text.startswith("*/", index):
                depth -= 1
                index += 2
                if depth == 0:
                    break
            else:
                index += 1
        self._index = index
        body = text[start:index]
        is_outer_doc = (
            body.startswith("/**") and not body.startswith("/***") and body not in ("/**/", "/***/")
        )
        if is_outer_doc:
            inner = body[3:-2] if body.endswith("*/") else body[3:]
            lines = [line.strip() for line in inner.splitlines()]
            cleaned = [
                _strip_doc_prefix(line[1:] if line.startswith("*") else line) for line in lines
            ]
            while cleaned and not cleaned[0]:
                cleaned.pop(0)
            while cleaned and not cleaned[-1]:
                cleaned.pop()
            self._emit(TokenKind.DOC, "\n".join(cleaned), start, index)

    def _string(self, start: int, quote_index: int) -> None:
        index = quote_index + 1
        text = self._text
        while index < len(text) and text[index] != '"':
            index += 2 if text[index] == "\\" else 1
        self._index = min(index + 1, len(text))
        self._emit(TokenKind.LITERAL, text[start : self._index], start, self._index)

    def _raw_string(self, start: int, hash_index: int) -> None:
        text = self._text
        index = hash_index
        hashes = 0
        while index < len(text) and text[index] == "#":
            hashes += 1
            index += 1
        terminator = '"' + "#" * hashes
        end = text.find(terminator, index + 1)
        self._index = len(text) if end == -1 else end + len(terminator)
        self._emit(TokenKind.LITERAL, text[start : self._index], start, self._index)

    def _raw_or_byte_literal(self) -> bool:
        text = self._text
        start = self._index
        if text.startswith('b"', start):
            self._string(start, start + 1)
            return True
        if text.startswith("b'", start):
            self._index = start + 1
            self._quote(literal_start=start)
            return True
        for prefix in ("br", "r"):
            if text.startswith(prefix, start):
                after = start + len(prefix)
                if text.startswith('"', after) or (
                    text.startswith("#", after) and text[after:].lstrip("#").startswith('"')
                ):
                    self._raw_string(start, after)
                    return True
        if text.startswith("r#", start) and start + 2 < len(text):
            following = text[start + 2]
            if following.isalpha() or following == "_":
                self._identifier(start, skip=2)
                return True
        return False

    def _quote(self, literal_start: int | None = None) -> None:
        text = self._text
        start = self._index
        token_start = start if literal_start is None else literal_start
        if start + 1 < len(text) and text[start + 1] == "\\":
            end = text.find("'", start + 2)
            self._index = len(text) if end == -1 else end + 1
            self._emit(TokenKind.LITERAL, text[token_start : self._index], token_start, self._index)
            return
        if start + 2 < len(text) and text[start + 2] == "'":
            self._index = start + 3
            self._emit(TokenKind.LITERAL, text[token_start : self._index], token_start, self._index)
            return
        index = start + 1
        while index < len(text) and (text[index].isalnum() or text[index] == "_"):
            index += 1
        if index == start + 1:
            self._index = start + 1
            self._emit(TokenKind.PUNCT, "'", start, start + 1)
            return
        self._index = index
        self._emit(TokenKind.LIFETIME, text[start:index], start, index)

    def _identifier(self, start: int, skip: int = 0) -> None:
        text = self._text
        index = start + skip
        while index < len(text) and (text[index].isalnum() or text[index] == "_"):
            index += 1
        self._index = index
        self._emit(TokenKind.IDENT, text[start + skip : index], start, index)

    def _number(self) -> None:
        text = self._text
        start = self._index
        index = start
        while index < len(text):
            char = text[index]
            if char.isalnum() or char == "_":
                index += 1
            elif char == "." and index + 1 < len(text) and text[index + 1].isdigit():
                index += 1
            else:
                break
        self._index = index
        self._emit(TokenKind.LITERAL, text[start:index], start, index)

    def _punct(self) -> None:
        start = self._index
        for candidate in _MULTI_CHAR_PUNCT:
            if self._text.startswith(candidate, start):
                self._index = start + len(candidate)
                self._emit(TokenKind.PUNCT, candidate, start, self._index)
                return
        self._index = start + 1
        self._emit(TokenKind.PUNCT, self._text[start], start, self._index)


def _strip_doc_prefix(line: str) -> str:
    return line[1:] if line.startswith(" ") else line


def tokenize(text: str, path: str) -> tuple[list[Token], RustTokenizer]:
    """Tokenize source text and return the tokens plus the tokenizer for locations."""
    tokenizer = RustTokenizer(text, path)
    return tokenizer.tokenize(), tokenizer
