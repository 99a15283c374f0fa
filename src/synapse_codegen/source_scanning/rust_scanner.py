"""Rust source scanner that extracts struct and enum declarations."""

from __future__ import annotations

import logging

from synapse_codegen.diagnostics.diagnostic_collector import DiagnosticCollector
from synapse_codegen.diagnostics.diagnostic_models import DiagnosticKind, SourceLocation

from .declaration_models import (
    Attribute,
    Declaration,
    DeclarationKind,
    DeclarationShape,
    RawField,
    ScanResult,
    SourceText,
)
from .rust_lexer import RustTokenizer, Token, TokenKind, tokenize

_LOGGER = logging.getLogger(__name__)

_OPENERS = {"{": "}", "(": ")", "[": "]"}
_CLOSERS = {"}", ")", "]"}

# Keywords that start a new item; seeing one at the indentation of the item
# being parsed, inside its body, means the body was never closed.
_ITEM_KEYWORDS = frozenset(
    {"struct", "enum", "fn", "impl", "mod", "use", "trait", "type", "const", "static", "union"}
)


class _MalformedDeclarationError(Exception):
    """Raised inside the scanner when a declaration cannot be parsed."""

    def __init__(self, message: str, token: Token | None) -> None:
        super().__init__(message)
        self.token = token


class _Cursor:
    """Forward-only cursor over a token list."""

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.index = 0

    @property
    def at_end(self) -> bool:
        return self.index >= len(self.tokens)

    def peek(self, offset: int = 0) -> Token | None:
        position = self.index + offset
        if position < len(self.tokens):
            return self.tokens[position]
        return None

    def advance(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token


def scan_source(source: SourceText) -> ScanResult:
    """Scan Rust source text and return its declarations in source order.

    Unrelated items are skipped. A declaration that cannot be parsed is
    reported as a MalformedDeclaration diagnostic and scanning resumes with
    the next item.
    """
    tokens, tokenizer = tokenize(source.text, source.path)
    scanner = _RustDeclarationScanner(source, tokens, tokenizer)
    declarations = scanner.scan()
    _LOGGER.debug("Scanned %s: %d declaration(s)", source.path, len(declarations))
    return ScanResult(
        declarations=tuple(declarations),
        diagnostics=scanner.collector.diagnostics,
    )


class _RustDeclarationScanner:
    def __init__(self, source: SourceText, tokens: list[Token], tokenizer: RustTokenizer) -> None:
        self._source = source
        self._cursor = _Cursor(tokens)
        self._tokenizer = tokenizer
        self.collector = DiagnosticCollector()
        self._item_column = 1

    def scan(self) -> list[Declaration]:
        declarations: list[Declaration] = []
        self._scan_items(declarations, nested=False)
        return declarations

    def _location(self, token: Token) -> SourceLocation:
        return SourceLocation(path=self._source.path, line=token.line, column=token.column)

    def _scan_items(self, declarations: list[Declaration], *, nested: bool) -> None:
        cursor = self._cursor
        attributes: list[Attribute] = []
        docs: list[str] = []
        while True:
            token = cursor.peek()
            if token is None:
                return
            if token.kind == TokenKind.DOC:
                docs.append(cursor.advance().text)
            elif token.is_punct("#") and _is_punct(cursor.peek(1), "!"):
                cursor.advance()
                cursor.advance()
                self._skip_group_if_open()
            elif token.is_punct("#") and _is_punct(cursor.peek(1), "["):
                attributes.append(self._parse_attribute())
            elif token.is_ident("pub"):
                cursor.advance()
                if _is_punct(cursor.peek(), "("):
                    self._skip_group()
            elif token.is_ident("struct") or token.is_ident("enum"):
                declaration = self._parse_item(attributes, docs)
                if declaration is not None:
                    declarations.append(declaration)
                attributes, docs = [], []
            elif token.is_ident("mod") and _is_punct(cursor.peek(2), "{"):
                cursor.advance()
                cursor.advance()
                cursor.advance()
                self._scan_items(declarations, nested=True)
                attributes, docs = [], []
            elif token.is_punct("}") and nested:
                cursor.advance()
                return
            elif token.kind == TokenKind.PUNCT and token.text in _OPENERS:
                self._skip_group()
                attributes, docs = [], []
            elif token.is_punct(";"):
                cursor.advance()
                attributes, docs = [], []
            else:
                cursor.advance()

    def _parse_attribute(self) -> Attribute:
        """Consume `#[...]` and return its inner text rebuilt from tokens.

        Rebuilding from tokens drops comments, so `derive(A, /* note */ B)`
        yields the same entries as `derive(A, B)`.
        """
        cursor = self._cursor
        hash_token = cursor.advance()
        first_inner = cursor.index + 1
        close_token = self._skip_group()
        last_inner = cursor.index - 1 if close_token is not None else cursor.index
        inner_tokens = [
            token
            for token in cursor.tokens[first_inner:last_inner]
            if token.kind != TokenKind.DOC
        ]
        return Attribute(text=self._join_tokens(inner_tokens), location=self._location(hash_token))

    def _join_tokens(self, tokens: list[Token]) -> str:
        parts: list[str] = []
        previous: Token | None = None
        for token in tokens:
            if previous is not None and token.start > previous.end:
                parts.append(" ")
            parts.append(self._source.text[token.start : token.end])
            previous = token
        return "".join(parts)

    def _skip_group_if_open(self) -> None:
        token = self._cursor.peek()
        if token is not None and token.kind == TokenKind.PUNCT and token.text in _OPENERS:
            self._skip_group()

    def _skip_group(self) -> Token | None:
        """Skip a balanced delimiter group and return its closing token."""
        cursor = self._cursor
        stack: list[str] = []
        while not cursor.at_end:
            token = cursor.advance()
            if token.kind != TokenKind.PUNCT:
                continue
            if token.text in _OPENERS:
                stack.append(_OPENERS[token.text])
            elif token.text in _CLOSERS:
                if stack and stack[-1] == token.text:
                    stack.pop()
                if not stack:
                    return token
        return None

    def _parse_item(self, attributes: list[Attribute], docs: list[str]) -> Declaration | None:
        keyword = self._cursor.advance()
        kind = DeclarationKind.STRUCT if keyword.text == "struct" else DeclarationKind.ENUM
        self._item_column = self._indent_column(keyword)
        try:
            return self._parse_item_body(keyword, kind, attributes, docs)
        except _MalformedDeclarationError as exc:
            offending = exc.token or keyword
            self.collector.report(
                DiagnosticKind.MALFORMED_DECLARATION,
                f"Malformed {kind.value} declaration: {exc}",
                location=self._location(offending),
                structure=self._name_after(keyword),
            )
            _LOGGER.debug("Skipping malformed %s at %s", kind.value, self._location(keyword))
            self._recover()
            return None

    def _indent_column(self, token: Token) -> int:
        """Return the column where the line holding `token` starts its code."""
        text = self._source.text
        line_start = text.rfind("\n", 0, token.start) + 1
        line = text[line_start : token.start]
        return len(line) - len(line.lstrip()) + 1

    def _name_after(self, keyword: Token) -> str | None:
        tokens = self._cursor.tokens
        position = tokens.index(keyword) + 1
        if position < len(tokens) and tokens[position].kind == TokenKind.IDENT:
            return tokens[position].text
        return None

    def _parse_item_body(
        self,
        keyword: Token,
        kind: DeclarationKind,
        attributes: list[Attribute],
        docs: list[str],
    ) -> Declaration:
        cursor = self._cursor
        name_token = cursor.peek()
        if name_token is None or name_token.kind != TokenKind.IDENT:
            raise _MalformedDeclarationError(f"expected a name after '{keyword.text}'", name_token)
        cursor.advance()

        generic_params: tuple[str, ...] = ()
        if _is_punct(cursor.peek(), "<"):
            generic_params = self._parse_generics()
        self._skip_where_clause()

        fields: tuple[RawField, ...] = ()
        body = cursor.peek()
        if body is None:
            raise _MalformedDeclarationError("unexpected end of input before the body", keyword)
        if body.is_punct("{"):
            if kind == DeclarationKind.ENUM:
                if self._skip_group() is None:
                    raise _MalformedDeclarationError("unterminated enum body", body)
                shape = DeclarationShape.NAMED
            else:
                cursor.advance()
                fields = self._parse_named_fields(body)
                shape = DeclarationShape.NAMED
        elif body.is_punct("(") and kind == DeclarationKind.STRUCT:
            if self._skip_group() is None:
                raise _MalformedDeclarationError("unterminated tuple structure body", body)
            self._skip_where_clause()
            if not _is_punct(cursor.peek(), ";"):
                raise _MalformedDeclarationError(
                    "expected ';' after tuple structure", cursor.peek()
                )
            cursor.advance()
            shape = DeclarationShape.TUPLE
        elif body.is_punct(";") and kind == DeclarationKind.STRUCT:
            cursor.advance()
            shape = DeclarationShape.UNIT
        else:
            raise _MalformedDeclarationError(f"unexpected token '{body.text}'", body)

        return Declaration(
            name=name_token.text,
            kind=kind,
            shape=shape,
            attributes=tuple(attributes),
            fields=fields,
            doc="\n".join(docs) if docs else None,
            location=self._location(keyword),
            generic_params=generic_params,
        )

    def _parse_generics(self) -> tuple[str, ...]:
        cursor = self._cursor
        open_token = cursor.advance()
        depth = 1
        close_token: Token | None = None
        while not cursor.at_end:
            token = cursor.advance()
            if token.is_punct("<"):
                depth += 1
            elif token.is_punct(">"):
                depth -= 1
                if depth == 0:
                    close_token = token
                    break
            elif token.is_punct("{") or token.is_punct(";"):
                break
        if close_token is None:
            raise _MalformedDeclarationError("unbalanced generic parameter list", open_token)
        text = self._source.text[open_token.end : close_token.start]
        return tuple(
            name for name in (_generic_param_name(part) for part in _split_top_level(text)) if name
        )

    def _skip_where_clause(self) -> None:
        cursor = self._cursor
        if not _is_ident(cursor.peek(), "where"):
            return
        depth = 0
        while True:
            token = cursor.peek()
            if token is None:
                return
            if depth == 0 and token.kind == TokenKind.PUNCT and token.text in "{;":
                return
            if token.is_punct("<") or token.is_punct("("):
                depth += 1
            elif token.is_punct(">") or token.is_punct(")"):
                depth = max(depth - 1, 0)
            cursor.advance()

    def _parse_named_fields(self, open_brace: Token) -> tuple[RawField, ...]:
        cursor = self._cursor
        fields: list[RawField] = []
        attributes: list[Attribute] = []
        docs: list[str] = []
        while True:
            token = cursor.peek()
            if token is None:
                raise _MalformedDeclarationError("unterminated structure body", open_brace)
            if token.is_punct("}"):
                cursor.advance()
                return tuple(fields)
            if self._starts_new_item(token):
                raise _MalformedDeclarationError("unterminated structure body", open_brace)
            if token.kind == TokenKind.DOC:
                docs.append(cursor.advance().text)
                continue
            if token.is_punct("#") and _is_punct(cursor.peek(1), "["):
                attributes.append(self._parse_attribute())
                continue
            fields.append(self._parse_field(attributes, docs))
            attributes, docs = [], []

    def _parse_field(self, attributes: list[Attribute], docs: list[str]) -> RawField:
        cursor = self._cursor
        if _is_ident(cursor.peek(), "pub"):
            cursor.advance()
            if _is_punct(cursor.peek(), "("):
                self._skip_group()
        name_token = cursor.peek()
        if name_token is None or name_token.kind != TokenKind.IDENT:
            raise _MalformedDeclarationError("expected a field name", name_token)
        cursor.advance()
        if not _is_punct(cursor.peek(), ":"):
            raise _MalformedDeclarationError(
                f"expected ':' after field '{name_token.text}'", cursor.peek() or name_token
            )
        cursor.advance()
        type_token = self._read_type_token(name_token)
        if _is_punct(cursor.peek(), ","):
            cursor.advance()
        return RawField(
            name=name_token.text,
            type_token=type_token,
            attributes=tuple(attributes),
            doc="\n".join(docs) if docs else None,
            location=self._location(name_token),
        )

    def _read_type_token(self, name_token: Token) -> str:
        cursor = self._cursor
        depth = 0
        first: Token | None = None
        last: Token | None = None
        while True:
            token = cursor.peek()
            if token is None:
                raise _MalformedDeclarationError("unterminated field type", name_token)
            if depth == 0 and (token.is_punct(",") or token.is_punct("}")):
                break
            if self._starts_new_item(token):
                raise _MalformedDeclarationError("unterminated field type", name_token)
            if token.kind == TokenKind.PUNCT:
                if token.text in "<([":
                    depth += 1
                elif token.text in ">)]":
                    depth -= 1
                    if depth < 0:
                        raise _MalformedDeclarationError(
                            f"unbalanced '{token.text}' in type of field '{name_token.text}'",
                            token,
                        )
                elif token.text == "{" or (token.text == ";" and depth == 0):
                    raise _MalformedDeclarationError(
                        f"unexpected '{token.text}' in type of field '{name_token.text}'", token
                    )
            if first is None:
                first = token
            last = cursor.advance()
        if first is None or last is None:
            raise _MalformedDeclarationError(
                f"missing type for field '{name_token.text}'", name_token
            )
        return self._source.text[first.start : last.end].strip()

    def _starts_new_item(self, token: Token) -> bool:
        """Return True when `token` (the cursor's current token) opens a sibling item.

        Only tokens at the indentation of the item being parsed qualify, and
        leading attributes and doc comments must be followed by an item keyword.
        """
        if token.column != self._item_column:
            return False
        offset = 0
        while True:
            current = self._cursor.peek(offset)
            if current is None:
                return False
            if current.kind == TokenKind.DOC:
                offset += 1
            elif current.is_punct("#") and _is_punct(self._cursor.peek(offset + 1), "["):
                offset = self._offset_after_group(offset + 1)
            else:
                break
        if _is_ident(current, "pub"):
            offset += 1
            if _is_punct(self._cursor.peek(offset), "("):
                offset = self._offset_after_group(offset)
            current = self._cursor.peek(offset)
        return self._is_item_keyword(current, self._cursor.peek(offset + 1))

    @staticmethod
    def _is_item_keyword(token: Token | None, following: Token | None) -> bool:
        if token is None or token.kind != TokenKind.IDENT or token.is_raw_identifier:
            return False
        return token.text in _ITEM_KEYWORDS and not _is_punct(following, ":")

    def _offset_after_group(self, offset: int) -> int:
        """Return the offset just past the delimiter group opening at `offset`."""
        depth = 0
        while True:
            token = self._cursor.peek(offset)
            if token is None:
                return offset
            if token.kind == TokenKind.PUNCT and token.text in _OPENERS:
                depth += 1
            elif token.kind == TokenKind.PUNCT and token.text in _CLOSERS:
                depth -= 1
                if depth <= 0:
                    return offset + 1
            offset += 1

    def _recover(self) -> None:
        """Advance past the broken declaration without swallowing following items."""
        cursor = self._cursor
        depth = 0
        while True:
            token = cursor.peek()
            if token is None:
                return
            if self._starts_new_item(token):
                return
            cursor.advance()
            if token.kind != TokenKind.PUNCT:
                continue
            if token.text in _OPENERS:
                depth += 1
            elif token.text in _CLOSERS:
                depth -= 1
                if token.text == "}" and depth <= 0:
                    return
            elif token.text == ";" and depth == 0:
                return


def _is_punct(token: Token | None, value: str) -> bool:
    return token is not None and token.is_punct(value)


def _is_ident(token: Token | None, value: str) -> bool:
    return token is not None and token.is_ident(value)


def _split_top_level(text: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in text:
        if char in "<([":
            depth += 1
        elif char in ">)]":
            depth -= 1
        if char == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return [part.strip() for part in parts if part.strip()]


def _generic_param_name(part: str) -> str | None:
    if part.startswith("'"):
        return None
    if part.startswith("const "):
        part = part[len("const ") :]
    for separator in (":", "="):
        part = part.split(separator, 1)[0]
    return part.strip() or None
