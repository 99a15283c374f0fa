"""Tokenizer tests."""

from __future__ import annotations

from synapse_codegen.source_scanning.rust_lexer import TokenKind, tokenize


def _kinds_and_text(text: str) -> list[tuple[TokenKind, str]]:
    tokens, _ = tokenize(text, "lexer.rs")
    return [(token.kind, token.text) for token in tokens]


def test_distinguishes_lifetimes_from_char_literals() -> None:
    assert _kinds_and_text("&'a str 'x' '\\n' b'y'") == [
        (TokenKind.PUNCT, "&"),
        (TokenKind.LIFETIME, "'a"),
        (TokenKind.IDENT, "str"),
        (TokenKind.LITERAL, "'x'"),
        (TokenKind.LITERAL, "'\\n'"),
        (TokenKind.LITERAL, "b'y'"),
    ]


def test_raw_strings_and_raw_identifiers() -> None:
    assert _kinds_and_text('r#"a "quoted" }"# r#match') == [
        (TokenKind.LITERAL, 'r#"a "quoted" }"#'),
        (TokenKind.IDENT, "match"),
    ]


def test_keeps_outer_docs_and_drops_other_comments() -> None:
    tokens = _kinds_and_text("//! inner\n/// outer\n//// not doc\n/* /* nested */ */ x")

    assert tokens == [(TokenKind.DOC, "outer"), (TokenKind.IDENT, "x")]


def test_multi_character_punctuation_and_positions() -> None:
    tokens, _ = tokenize("a::b\n  -> c", "lexer.rs")

    assert [token.text for token in tokens] == ["a", "::", "b", "->", "c"]
    arrow = tokens[3]
    assert (arrow.line, arrow.column) == (2, 3)
