"""
Tokenizer for [shortcode] markup

Splits raw text into literal text runs and tag boundaries without resolving
nesting. Tokenizing is total: every input produces tokens, and anything that
does not form a well-shaped tag is kept as literal text.

Syntax:
    [name]                     opening tag
    [/name]                    closing tag
    [name/]  [name a=1 /]      self-closing tag
    [name=value]               BBCode-style shorthand value
    [name key=value key2="quoted value" bare]
    [[  ]]                     literal "[" and "]"

Example:
    >>> tokens = Tokenizer("Hi [color=red]there[/color]").tokenize()
    >>> [type(t).__name__ for t in tokens]
    ['TextRun', 'TagBoundary', 'TextRun', 'TagBoundary']
    >>> tokens[1].bbcode
    'red'
"""

import re
from typing import Dict, List, Optional, Tuple

from ..models.shortcodes import TagBoundary, TextRun, Token
from .log import LOG

_NAME_RE = re.compile(r'[A-Za-z0-9-]+')
_SELF_CLOSING_RE = re.compile(r'(?:^|\s)/$')
_QUOTES = ('"', "'")

OPEN_BRACKET = '['
CLOSE_BRACKET = ']'


class Tokenizer:
    """
    Scanner turning shortcode markup into a flat token list

    Attributes:
        source: Text being scanned
        position: Current character position
    """

    def __init__(self, source: str):
        self.source = source
        self.position = 0

    def tokenize(self) -> List[Token]:
        """
        Scan the whole source.

        Returns:
            TextRun and TagBoundary tokens in document order. Adjacent
            literal characters are merged into one TextRun.
        """
        source = self.source
        tokens: List[Token] = []
        parts: List[str] = []
        run_start = 0
        self.position = 0

        while self.position < len(source):
            pos = self.position
            ch = source[pos]

            if ch == OPEN_BRACKET:
                if source.startswith('[[', pos):
                    parts.append(OPEN_BRACKET)
                    self.position += 2
                    continue

                boundary = self.tag_scan(pos)
                if boundary is None:
                    parts.append(ch)
                    self.position += 1
                    continue

                if pos > run_start:
                    tokens.append(TextRun(text=''.join(parts), raw=source[run_start:pos]))
                LOG(f"Tag {boundary.markup!r} at position {pos}", level=3)
                tokens.append(boundary)
                parts = []
                self.position = run_start = boundary.end
                continue

            if ch == CLOSE_BRACKET and source.startswith(']]', pos):
                parts.append(CLOSE_BRACKET)
                self.position += 2
                continue

            parts.append(ch)
            self.position += 1

        if len(source) > run_start:
            tokens.append(TextRun(text=''.join(parts), raw=source[run_start:]))

        return tokens

    def tag_scan(self, start: int) -> Optional[TagBoundary]:
        """
        Try to read one tag starting at an opening bracket.

        The candidate runs to the first "]". It is rejected (None) when a
        "[" appears first, when there is no "]" at all, or when the inside
        does not match the tag grammar.

        Args:
            start: Position of "[" in source

        Returns:
            TagBoundary, or None if the bracket is literal text
        """
        source = self.source
        close = source.find(CLOSE_BRACKET, start + 1)
        if close == -1:
            return None

        inner = source[start + 1:close]
        if OPEN_BRACKET in inner:
            return None

        closing = inner.startswith('/')
        body = inner[1:] if closing else inner

        match = _NAME_RE.match(body)
        if not match:
            return None

        name = match.group(0)
        rest = body[match.end():]
        markup = source[start:close + 1]

        if closing:
            if rest.strip():
                return None
            return TagBoundary(
                start=start,
                end=close + 1,
                name=name,
                closing=True,
                markup=markup,
            )

        if rest and rest[0] != '=' and not rest[0].isspace() and rest != '/':
            return None

        self_closing = False
        trimmed = rest.rstrip()
        if _SELF_CLOSING_RE.search(trimmed):
            self_closing = True
            trimmed = trimmed[:-1]

        parsed = self.params_parse(trimmed)
        if parsed is None:
            return None
        parameters, bbcode = parsed

        return TagBoundary(
            start=start,
            end=close + 1,
            name=name,
            raw_parameters=rest,
            parameters=parameters,
            bbcode=bbcode,
            self_closing=self_closing,
            markup=markup,
        )

    def params_parse(self, raw: str) -> Optional[Tuple[Dict[str, Optional[str]], Optional[str]]]:
        """
        Parse the text between a tag name and its closing bracket.

        Args:
            raw: Parameter text, e.g. "=red", ' href="x" bare', " l=2 r=3"

        Returns:
            (parameters, bbcode), or None on malformed input (unterminated
            quote, "=" without a key)

        Example:
            >>> Tokenizer("").params_parse('=red bold title="a b"')
            ({'bold': None, 'title': 'a b'}, 'red')
        """
        parameters: Dict[str, Optional[str]] = {}
        bbcode: Optional[str] = None
        pos = 0

        if raw.startswith('='):
            value, pos = self.value_read(raw, 1)
            if value is None:
                return None
            bbcode = value

        while pos < len(raw):
            if raw[pos].isspace():
                pos += 1
                continue

            if raw[pos] in _QUOTES:
                value, pos = self.value_read(raw, pos)
                if value is None:
                    return None
                if bbcode is None:
                    bbcode = value
                else:
                    parameters[value] = None
                continue

            key_end = pos
            while key_end < len(raw) and not raw[key_end].isspace() and raw[key_end] != '=':
                key_end += 1
            key = raw[pos:key_end]

            if key_end < len(raw) and raw[key_end] == '=':
                if not key:
                    return None
                value, pos = self.value_read(raw, key_end + 1)
                if value is None:
                    return None
                parameters[key] = value
                continue

            # Bare word: first one is the shorthand, later ones are flags
            if bbcode is None:
                bbcode = key
            else:
                parameters[key] = None
            pos = key_end

        return parameters, bbcode

    def value_read(self, raw: str, pos: int) -> Tuple[Optional[str], int]:
        """
        Read one parameter value, quoted or bare.

        Returns:
            (value, position after it); value is None for an unterminated quote
        """
        if pos >= len(raw) or raw[pos].isspace():
            return '', pos

        quote = raw[pos]
        if quote in _QUOTES:
            end = raw.find(quote, pos + 1)
            if end == -1:
                return None, pos
            return raw[pos + 1:end], end + 1

        end = pos
        while end < len(raw) and not raw[end].isspace():
            end += 1
        return raw[pos:end], end


def tokenize(source: str) -> List[Token]:
    """Tokenize source text (convenience wrapper)"""
    return Tokenizer(source).tokenize()
