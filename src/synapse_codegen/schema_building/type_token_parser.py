"""Resolution of raw Rust type tokens into type descriptors."""

from __future__ import annotations

import re
from collections.abc import Collection
from dataclasses import dataclass

from .schema_models import (
    CompositeType,
    OptionalType,
    PrimitiveKind,
    PrimitiveType,
    SequenceType,
    StringType,
    TypeDescriptor,
    UnknownType,
)

_PRIMITIVES = {kind.value: kind for kind in PrimitiveKind}
_STRING_PATHS = frozenset({"String", "std::string::String", "alloc::string::String"})
_SEQUENCE_PATHS = frozenset(
    {
        "Vec",
        "std::vec::Vec",
        "alloc::vec::Vec",
        "VecDeque",
        "std::collections::VecDeque",
        "alloc::collections::VecDeque",
    }
)
_OPTIONAL_PATHS = frozenset({"Option", "std::option::Option", "core::option::Option"})

_TOKEN_PATTERN = re.compile(r"'[A-Za-z_]\w*|::|[A-Za-z_]\w*|\d+|\S")


class _TypeSyntaxError(Exception):
    """Raised when a type token is outside the supported grammar."""


@dataclass(frozen=True)
class _PathNode:
    segments: tuple[str, ...]
    arguments: tuple[_Node, ...]
    text: str


@dataclass(frozen=True)
class _ReferenceNode:
    inner: _Node
    text: str


@dataclass(frozen=True)
class _SliceNode:
    element: _Node
    text: str


@dataclass(frozen=True)
class _TupleNode:
    text: str


_Node = _PathNode | _ReferenceNode | _SliceNode | _TupleNode


class _TypeExpressionParser:
    def __init__(self, text: str) -> None:
        self._text = text
        self._matches = list(_TOKEN_PATTERN.finditer(text))
        self._index = 0

    def parse(self) -> _Node:
        node = self._type()
        if self._index != len(self._matches):
            raise _TypeSyntaxError(f"unexpected '{self._peek()}'")
        return node

    def _peek(self) -> str | None:
        if self._index < len(self._matches):
            return self._matches[self._index].group()
        return None

    def _take(self, expected: str | None = None) -> str:
        value = self._peek()
        if value is None or (expected is not None and value != expected):
            raise _TypeSyntaxError(f"expected {expected or 'a token'}")
        self._index += 1
        return value

    def _span(self, start_index: int) -> str:
        start = self._matches[start_index].start()
        end = self._matches[self._index - 1].end()
        return self._text[start:end]

    def _type(self) -> _Node:
        start_index = self._index
        token = self._peek()
        if token == "&":
            self._take()
            if (self._peek() or "").startswith("'"):
                self._take()
            if self._peek() == "mut":
                self._take()
            inner = self._type()
            return _ReferenceNode(inner=inner, text=self._span(start_index))
        if token == "[":
            self._take()
            element = self._type()
            if self._peek() == ";":
                self._take()
                self._skip_until_closing_bracket()
            self._take("]")
            return _SliceNode(element=element, text=self._span(start_index))
        if token == "(":
            self._skip_balanced("(", ")")
            return _TupleNode(text=self._span(start_index))
        return self._path(start_index)

    def _path(self, start_index: int) -> _PathNode:
        segments: list[str] = []
        if self._peek() == "::":
            self._take()
        segments.append(self._identifier())
        arguments: tuple[_Node, ...] = ()
        while True:
            token = self._peek()
            if token == "::":
                self._take()
                if self._peek() == "<":
                    arguments = self._generic_arguments()
                    break
                segments.append(self._identifier())
            elif token == "<":
                arguments = self._generic_arguments()
                break
            else:
                break
        return _PathNode(
            segments=tuple(segments), arguments=arguments, text=self._span(start_index)
        )

    def _identifier(self) -> str:
        token = self._take()
        if not (token[0].isalpha() or token[0] == "_") or token in ("dyn", "impl", "fn"):
            raise _TypeSyntaxError(f"unsupported type syntax '{token}'")
        return token

    def _generic_arguments(self) -> tuple[_Node, ...]:
        self._take("<")
        arguments: list[_Node] = []
        while self._peek() != ">":
            if (self._peek() or "").startswith("'"):
                self._take()
            else:
                arguments.append(self._type())
            if self._peek() == ",":
                self._take()
            elif self._peek() != ">":
                raise _TypeSyntaxError("expected ',' or '>' in generic arguments")
        self._take(">")
        return tuple(arguments)

    def _skip_until_closing_bracket(self) -> None:
        depth = 0
        while True:
            token = self._peek()
            if token is None:
                raise _TypeSyntaxError("unterminated array length")
            if token == "]" and depth == 0:
                return
            if token in "([{":
                depth += 1
            elif token in ")]}":
                depth -= 1
            self._take()

    def _skip_balanced(self, opener: str, closer: str) -> None:
        depth = 0
        while True:
            token = self._take()
            if token == opener:
                depth += 1
            elif token == closer:
                depth -= 1
                if depth == 0:
                    return


def resolve_type_token(token: str, known_names: Collection[str]) -> TypeDescriptor:
    """Classify a raw type token.

    `known_names` holds every declaration name scanned in the run, so a bare
    identifier that names one of them becomes a composite reference whether or
    not that declaration is marked; anything unrecognised becomes UnknownType.
    """
    try:
        node = _TypeExpressionParser(token).parse()
    except _TypeSyntaxError:
        return UnknownType(raw=token.strip())
    return _classify(node, known_names)


def _classify(node: _Node, known_names: Collection[str]) -> TypeDescriptor:
    if isinstance(node, _ReferenceNode):
        inner = node.inner
        if isinstance(inner, _PathNode) and inner.segments == ("str",) and not inner.arguments:
            return StringType()
        if isinstance(inner, _SliceNode):
            return _classify(inner, known_names)
        return UnknownType(raw=node.text)
    if isinstance(node, _SliceNode):
        return SequenceType(element=_classify(node.element, known_names))
    if isinstance(node, _TupleNode):
        return UnknownType(raw=node.text)
    return _classify_path(node, known_names)


def _classify_path(node: _PathNode, known_names: Collection[str]) -> TypeDescriptor:
    path = "::".join(node.segments)
    if not node.arguments:
        if path in _PRIMITIVES:
            return PrimitiveType(kind=_PRIMITIVES[path])
        if path in _STRING_PATHS or path == "str":
            return StringType()
        if len(node.segments) == 1 and path in known_names:
            return CompositeType(name=path)
        return UnknownType(raw=node.text)
    if len(node.arguments) == 1:
        if path in _SEQUENCE_PATHS:
            return SequenceType(element=_classify(node.arguments[0], known_names))
        if path in _OPTIONAL_PATHS:
            return OptionalType(inner=_classify(node.arguments[0], known_names))
    return UnknownType(raw=node.text)
