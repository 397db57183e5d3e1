"""
Element reader - turns an object-literal element back into a record.

Handles the subset of JS literal syntax the templates use: identifier or
quoted keys, string / number / boolean / null values, nested objects and
arrays, trailing commas, and // or /* */ comments.
"""

import re
import logging
from typing import Any, Dict, List, Type, TypeVar

from pydantic import BaseModel

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_IDENT = re.compile(r'[A-Za-z_$][\w$]*')
_NUMBER = re.compile(r'-?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
_ESCAPES = {'n': '\n', 't': '\t', 'r': '\r', 'b': '\b', 'f': '\f', 'v': '\v', '0': '\0'}
_KEYWORDS = {'true': True, 'false': False, 'null': None, 'undefined': None}


class ObjectLiteralError(ValueError):
    """Raised when element text is not a parseable object literal."""


class _Parser:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def fail(self, message: str):
        raise ObjectLiteralError(f"{message} at offset {self.pos}")

    def skip_ws(self):
        text = self.text
        while self.pos < len(text):
            if text[self.pos].isspace():
                self.pos += 1
            elif text.startswith('//', self.pos):
                newline = text.find('\n', self.pos)
                self.pos = len(text) if newline == -1 else newline + 1
            elif text.startswith('/*', self.pos):
                close = text.find('*/', self.pos + 2)
                if close == -1:
                    self.fail("Unterminated comment")
                self.pos = close + 2
            else:
                break

    def peek(self) -> str:
        self.skip_ws()
        return self.text[self.pos] if self.pos < len(self.text) else ''

    def expect(self, ch: str):
        if self.peek() != ch:
            self.fail(f"Expected '{ch}'")
        self.pos += 1

    def value(self) -> Any:
        ch = self.peek()
        if ch == '{':
            return self.obj()
        if ch == '[':
            return self.array()
        if ch in ('"', "'", '`'):
            return self.string()
        match = _NUMBER.match(self.text, self.pos)
        if match:
            self.pos = match.end()
            literal = match.group(0)
            return float(literal) if any(c in literal for c in '.eE') else int(literal)
        match = _IDENT.match(self.text, self.pos)
        if match and match.group(0) in _KEYWORDS:
            self.pos = match.end()
            return _KEYWORDS[match.group(0)]
        self.fail("Unsupported value")

    def string(self) -> str:
        quote = self.text[self.pos]
        self.pos += 1
        out: List[str] = []
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if ch == '\\':
                nxt = self.text[self.pos + 1:self.pos + 2]
                out.append(_ESCAPES.get(nxt, nxt))
                self.pos += 2
                continue
            if ch == quote:
                self.pos += 1
                return ''.join(out)
            out.append(ch)
            self.pos += 1
        self.fail("Unterminated string")

    def key(self) -> str:
        ch = self.peek()
        if ch in ('"', "'"):
            return self.string()
        match = _IDENT.match(self.text, self.pos)
        if not match:
            self.fail("Expected property name")
        self.pos = match.end()
        return match.group(0)

    def obj(self) -> Dict[str, Any]:
        self.expect('{')
        result: Dict[str, Any] = {}
        while self.peek() != '}':
            name = self.key()
            self.expect(':')
            result[name] = self.value()
            if self.peek() == ',':
                self.pos += 1
            elif self.peek() != '}':
                self.fail("Expected ',' or '}'")
        self.pos += 1
        return result

    def array(self) -> List[Any]:
        self.expect('[')
        items: List[Any] = []
        while self.peek() != ']':
            items.append(self.value())
            if self.peek() == ',':
                self.pos += 1
            elif self.peek() != ']':
                self.fail("Expected ',' or ']'")
        self.pos += 1
        return items


def parse_object_literal(text: str) -> Dict[str, Any]:
    """Parse a single object literal; trailing text other than whitespace is an error."""
    parser = _Parser(text)
    if parser.peek() != '{':
        parser.fail("Expected '{'")
    result = parser.obj()
    if parser.peek():
        parser.fail("Unexpected trailing text")
    return result


def read_record(text: str, record_type: Type[ModelT]) -> ModelT:
    """Parse element text and validate it as record_type."""
    return record_type.model_validate(parse_object_literal(text))
