"""Shared Swift emission constants."""

from __future__ import annotations

GENERATED_HEADER = "// Generated by synapse-codegen. DO NOT EDIT."

CODABLE_PROTOCOLS: frozenset[str] = frozenset({"Codable", "Encodable", "Decodable"})

# Identifiers that must be wrapped in backticks when used as property names.
SWIFT_RESERVED_WORDS: frozenset[str] = frozenset(
    {
        "associatedtype", "class", "deinit", "enum", "extension", "fileprivate", "func",
        "import", "init", "inout", "internal", "let", "open", "operator", "private",
        "precedencegroup", "protocol", "public", "rethrows", "static", "struct", "subscript",
        "typealias", "var", "break", "case", "catch", "continue", "default", "defer", "do",
        "else", "fallthrough", "for", "guard", "if", "in", "repeat", "return", "throw",
        "switch", "where", "while", "Any", "as", "await", "false", "is", "nil", "self",
        "Self", "super", "throws", "true", "try", "Type", "Protocol",
    }
)  # fmt: skip
