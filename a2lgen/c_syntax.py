"""A parser for the top-level structure of C source files.

It splits a file into comments, declarations, function definitions and
preprocessor directives. Conditional blocks (``#if``, ``#ifdef``,
``#ifndef``) keep their own items and their ``#elif``/``#else`` branches.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple


class CSyntaxError(ValueError):
    """Raised when C source cannot be split into top-level items."""


class NodeKind(Enum):
    """Kinds of syntax nodes, named as in common C grammars."""

    COMMENT = "comment"
    DECLARATION = "declaration"
    FUNCTION_DEFINITION = "function_definition"
    TYPE_DEFINITION = "type_definition"
    TYPE_SPECIFIER = "type_specifier"
    PREPROC_INCLUDE = "preproc_include"
    PREPROC_DEF = "preproc_def"
    PREPROC_CALL = "preproc_call"
    PREPROC_IF = "preproc_if"
    PREPROC_IFDEF = "preproc_ifdef"
    PREPROC_ELSE = "preproc_else"
    PREPROC_ELIF = "preproc_elif"
    INIT_DECLARATOR = "init_declarator"
    IDENTIFIER = "identifier"
    POINTER_DECLARATOR = "pointer_declarator"
    ARRAY_DECLARATOR = "array_declarator"
    FUNCTION_DECLARATOR = "function_declarator"
    PARENTHESIZED_DECLARATOR = "parenthesized_declarator"


@dataclass
class Node:
    """A piece of C source with its kind, text and byte offsets."""

    kind: NodeKind
    text: str
    start: int
    end: int
    children: list[Node] = field(default_factory=list)
    name: str | None = None
    alternative: Node | None = None

    @property
    def declarator(self) -> Node | None:
        """The first declarator of a declaration, or the inner one of an init declarator."""
        if self.kind in (NodeKind.DECLARATION, NodeKind.INIT_DECLARATOR) and self.children:
            return self.children[0]
        return None


class _Lexeme(NamedTuple):
    kind: str
    text: str
    start: int
    end: int


class _Terminator(NamedTuple):
    directive: str
    start: int


_LEXEME_PATTERN = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<comment>//[^\n]*|/\*.*?\*/)
  | (?P<unterminated>/\*)
  | (?P<string>L?"(?:\\.|[^"\\\n])*")
  | (?P<char>L?'(?:\\.|[^'\\\n])*')
  | (?P<number>\.?\d(?:[eEpP][-+]|[\w.])*)
  | (?P<ident>[A-Za-z_]\w*)
  | (?P<punct>\.\.\.|->|<<=|>>=|\#\#|[-+*/%&|^<>=!]=|&&|\|\||<<|>>|\+\+|--|[-{}()\[\];,.?:~!%^&|*/+<>=\#])
    """,
    re.VERBOSE | re.DOTALL,
)

_DIRECTIVE = re.compile(r"#\s*(\w*)\s*(\S*)")

_QUALIFIERS = frozenset(
    {
        "const",
        "volatile",
        "restrict",
        "__restrict",
        "static",
        "extern",
        "register",
        "auto",
        "inline",
        "__inline",
        "_Thread_local",
        "_Atomic",
        "_Noreturn",
    }
)
_TYPE_KEYWORDS = frozenset(
    {"void", "char", "short", "int", "long", "float", "double", "signed", "unsigned", "_Bool", "_Complex"}
)
_TAGS = frozenset({"struct", "union", "enum"})
_OPEN = {"(": ")", "[": "]", "{": "}"}
_CLOSE = frozenset(_OPEN.values())


def _matching(lexemes: list[_Lexeme], index: int) -> int:
    """Index of the bracket closing the one at ``index``."""
    depth = 0
    for position in range(index, len(lexemes)):
        lexeme = lexemes[position]
        if lexeme.kind != "punct":
            continue
        if lexeme.text in _OPEN:
            depth += 1
        elif lexeme.text in _CLOSE:
            depth -= 1
            if depth == 0:
                return position
    raise CSyntaxError(f"unbalanced {lexemes[index].text!r} at offset {lexemes[index].start}")


def _split(lexemes: list[_Lexeme], separator: str) -> list[list[_Lexeme]]:
    """Split lexemes at separators that are not inside brackets."""
    groups: list[list[_Lexeme]] = [[]]
    depth = 0
    for lexeme in lexemes:
        if lexeme.kind == "punct":
            if lexeme.text in _OPEN:
                depth += 1
            elif lexeme.text in _CLOSE:
                depth -= 1
            elif depth == 0 and lexeme.text == separator:
                groups.append([])
                continue
        groups[-1].append(lexeme)
    return groups


def _skip_specifiers(lexemes: list[_Lexeme]) -> tuple[int, bool]:
    """Return the index where declarators start and whether a tag type was seen."""
    index = 0
    typed = tagged = False
    while index < len(lexemes):
        lexeme = lexemes[index]
        if lexeme.text in _QUALIFIERS:
            index += 1
        elif lexeme.text in _TYPE_KEYWORDS:
            typed = True
            index += 1
        elif lexeme.text in _TAGS:
            typed = tagged = True
            index += 1
            if index < len(lexemes) and lexemes[index].kind == "ident":
                index += 1
            if index < len(lexemes) and lexemes[index].text == "{":
                index = _matching(lexemes, index) + 1
        elif lexeme.kind == "ident" and not typed:
            typed = True
            index += 1
        else:
            break
    if not typed:
        start = lexemes[0].start if lexemes else 0
        raise CSyntaxError(f"declaration without a type at offset {start}")
    return index, tagged


def _function_name(lexemes: list[_Lexeme]) -> str | None:
    last_identifier = None
    for lexeme in lexemes:
        if lexeme.kind == "ident" and lexeme.text not in _QUALIFIERS:
            last_identifier = lexeme.text
        elif lexeme.text == "(":
            return last_identifier
    return last_identifier


class _Parser:
    def __init__(self, code: str) -> None:
        self._code = code
        self._pos = 0

    def parse(self) -> list[Node]:
        nodes, _ = self._items(nested=False)
        return nodes

    def _skip_space(self) -> None:
        code = self._code
        while self._pos < len(code) and code[self._pos].isspace():
            self._pos += 1

    def _at_line_start(self, pos: int) -> bool:
        line_start = self._code.rfind("\n", 0, pos) + 1
        return not self._code[line_start:pos].strip()

    def _directive_end(self, pos: int) -> int:
        code = self._code
        while True:
            newline = code.find("\n", pos)
            if newline == -1:
                return len(code)
            if code[pos:newline].rstrip("\r").endswith("\\"):
                pos = newline + 1
                continue
            return newline

    def _items(self, nested: bool) -> tuple[list[Node], _Terminator | None]:
        code = self._code
        nodes: list[Node] = []
        while True:
            self._skip_space()
            if self._pos >= len(code):
                if nested:
                    raise CSyntaxError("missing #endif at end of input")
                return nodes, None
            if code.startswith(("//", "/*"), self._pos):
                nodes.append(self._comment())
            elif code[self._pos] == "#":
                start = self._pos
                if not self._at_line_start(start):
                    raise CSyntaxError(f"preprocessor directive not at line start, offset {start}")
                self._pos = self._directive_end(start)
                text = code[start:self._pos].rstrip()
                match = _DIRECTIVE.match(text)
                directive, argument = match.group(1), match.group(2)
                if directive in ("else", "elif", "endif"):
                    if not nested:
                        raise CSyntaxError(f"#{directive} without #if at offset {start}")
                    return nodes, _Terminator(directive, start)
                nodes.append(self._directive(directive, argument, text, start))
            else:
                nodes.append(self._statement())

    def _comment(self) -> Node:
        code = self._code
        start = self._pos
        if code.startswith("//", start):
            end = code.find("\n", start)
            if end == -1:
                end = len(code)
            text = code[start:end].rstrip("\r")
        else:
            close = code.find("*/", start + 2)
            if close == -1:
                raise CSyntaxError(f"unterminated comment at offset {start}")
            text = code[start:close + 2]
        self._pos = start + len(text)
        return Node(NodeKind.COMMENT, text, start, self._pos)

    def _directive(self, directive: str, argument: str, text: str, start: int) -> Node:
        if directive in ("ifdef", "ifndef"):
            if not argument:
                raise CSyntaxError(f"#{directive} without a name at offset {start}")
            return self._conditional(NodeKind.PREPROC_IFDEF, argument, start)
        if directive == "if":
            return self._conditional(NodeKind.PREPROC_IF, None, start)
        end = start + len(text)
        if directive == "include":
            return Node(NodeKind.PREPROC_INCLUDE, text, start, end)
        if directive == "define":
            name = re.match(r"\w*", argument).group() or None
            return Node(NodeKind.PREPROC_DEF, text, start, end, name=name)
        return Node(NodeKind.PREPROC_CALL, text, start, end, name=directive or None)

    def _conditional(self, kind: NodeKind, name: str | None, start: int) -> Node:
        children, terminator = self._items(nested=True)
        alternative = self._alternative(terminator)
        text = self._code[start:self._pos].rstrip()
        return Node(kind, text, start, start + len(text), children, name, alternative)

    def _alternative(self, terminator: _Terminator) -> Node | None:
        if terminator.directive == "endif":
            return None
        start = terminator.start
        children, following = self._items(nested=True)
        if terminator.directive == "else":
            if following.directive != "endif":
                raise CSyntaxError(f"#{following.directive} after #else at offset {following.start}")
            text = self._code[start:following.start].rstrip()
            return Node(NodeKind.PREPROC_ELSE, text, start, start + len(text), children)
        alternative = self._alternative(following)
        end = alternative.end if alternative is not None else following.start
        text = self._code[start:end].rstrip()
        return Node(NodeKind.PREPROC_ELIF, text, start, start + len(text), children, alternative=alternative)

    def _statement(self) -> Node:
        code = self._code
        start = pos = self._pos
        lexemes: list[_Lexeme] = []
        stack: list[tuple[str, int]] = []
        assigned = False
        body = False
        while True:
            if pos >= len(code):
                raise CSyntaxError(f"unexpected end of input in statement at offset {start}")
            match = _LEXEME_PATTERN.match(code, pos)
            if match is None:
                raise CSyntaxError(f"unexpected character {code[pos]!r} at offset {pos}")
            kind, text = match.lastgroup, match.group()
            pos = match.end()
            if kind == "unterminated":
                raise CSyntaxError(f"unterminated comment at offset {match.start()}")
            if kind == "ws":
                if "\n" in text and code.startswith("#", pos):
                    if not stack:
                        raise CSyntaxError(f"expected ';' before offset {pos}")
                    pos = self._directive_end(pos)
                continue
            if kind == "comment":
                continue
            lexeme = _Lexeme(kind, text, match.start(), pos)
            lexemes.append(lexeme)
            if kind != "punct":
                continue
            if text in _OPEN:
                stack.append((text, len(lexemes) - 1))
            elif text in _CLOSE:
                if not stack or _OPEN[stack[-1][0]] != text:
                    raise CSyntaxError(f"unbalanced {text!r} at offset {lexeme.start}")
                _, opener = stack.pop()
                if (
                    text == "}"
                    and not stack
                    and not assigned
                    and opener > 0
                    and lexemes[opener - 1].kind == "punct"
                    and lexemes[opener - 1].text == ")"
                ):
                    body = True
                    break
            elif not stack:
                if text == ";":
                    break
                if text == "=":
                    assigned = True
        end = lexemes[-1].end
        self._pos = end
        return self._classify(lexemes, start, end, body)

    def _classify(self, lexemes: list[_Lexeme], start: int, end: int, body: bool) -> Node:
        text = self._code[start:end]
        if lexemes[0].text == "typedef":
            return Node(NodeKind.TYPE_DEFINITION, text, start, end)
        if body:
            return Node(NodeKind.FUNCTION_DEFINITION, text, start, end, name=_function_name(lexemes))
        specifiers = lexemes[:-1]
        index, tagged = _skip_specifiers(specifiers)
        rest = specifiers[index:]
        if not rest:
            if tagged:
                return Node(NodeKind.TYPE_SPECIFIER, text, start, end)
            raise CSyntaxError(f"declaration without a declarator at offset {start}")
        groups = _split(rest, ",")
        if any(not group for group in groups):
            raise CSyntaxError(f"empty declarator at offset {start}")
        declarators = [self._declarator(group) for group in groups]
        return Node(NodeKind.DECLARATION, text, start, end, declarators, name=declarators[0].name)

    def _declarator(self, group: list[_Lexeme]) -> Node:
        parts = _split(group, "=")
        if not parts[0]:
            raise CSyntaxError(f"missing declarator at offset {group[0].start}")
        inner = self._plain_declarator(parts[0])
        if len(parts) == 1:
            return inner
        if len(parts) > 2 or not parts[1]:
            raise CSyntaxError(f"malformed initializer at offset {group[0].start}")
        start, end = group[0].start, group[-1].end
        return Node(NodeKind.INIT_DECLARATOR, self._code[start:end], start, end, [inner], name=inner.name)

    def _plain_declarator(self, lexemes: list[_Lexeme]) -> Node:
        start, end = lexemes[0].start, lexemes[-1].end
        name = next(
            (lexeme.text for lexeme in lexemes if lexeme.kind == "ident" and lexeme.text not in _QUALIFIERS),
            None,
        )
        if name is None:
            raise CSyntaxError(f"declarator without a name at offset {start}")
        first = lexemes[0]
        if first.text == "*":
            kind = NodeKind.POINTER_DECLARATOR
        elif first.text == "(":
            rest = lexemes[_matching(lexemes, 0) + 1:]
            kind = self._suffix_kind(rest, NodeKind.PARENTHESIZED_DECLARATOR, start)
        elif first.kind == "ident":
            kind = self._suffix_kind(lexemes[1:], NodeKind.IDENTIFIER, start)
        else:
            raise CSyntaxError(f"unexpected {first.text!r} in declarator at offset {first.start}")
        return Node(kind, self._code[start:end], start, end, name=name)

    @staticmethod
    def _suffix_kind(rest: list[_Lexeme], plain: NodeKind, start: int) -> NodeKind:
        if not rest:
            return plain
        if rest[0].text == "[":
            return NodeKind.ARRAY_DECLARATOR
        if rest[0].text == "(":
            return NodeKind.FUNCTION_DECLARATOR
        raise CSyntaxError(f"unexpected {rest[0].text!r} in declarator at offset {start}")


def parse_top_level(code: str) -> list[Node]:
    """Split C source into its top-level items; raise CSyntaxError on malformed input."""
    return _Parser(code).parse()