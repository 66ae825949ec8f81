"""
Custom Pygments lexer for termage shortcode markup

Used by the CLI to show markup source with the tags highlighted.

Token types:
- Punctuation: Brackets, "/" and "="
- Name.Tag: Tag names (e.g., b, color, pl)
- Name.Attribute: Parameter keys (e.g., href, l)
- Literal.String: Parameter and shorthand values
- String.Escape: Doubled brackets ([[ and ]])
- Text: Everything else
"""

from pygments.lexer import RegexLexer, bygroups
from pygments.token import (
    Text,
    Punctuation,
    Name,
    String,
    Literal,
    Whitespace,
)


class TermageLexer(RegexLexer):
    """
    Lexer for termage shortcode markup

    Example:
        [color=red]Stay [b]RAD[/b]![/color]

    Tokens:
        [ → Punctuation
        color → Name.Tag
        = → Punctuation
        red → Literal.String
        ] → Punctuation
        Stay → Text
    """

    name = 'Termage'
    aliases = ['termage', 'shortcodes']
    filenames = ['*.tmg']

    tokens = {
        'root': [
            (r'\[\[|\]\]', String.Escape),

            # Closing tag
            (r'(\[)(/)([A-Za-z0-9-]+)(\])',
             bygroups(Punctuation, Punctuation, Name.Tag, Punctuation)),

            # Opening tag, BBCode shorthand
            (r'(\[)([A-Za-z0-9-]+)(=)("[^"\]]*"|\'[^\'\]]*\'|[^\s\]]*)',
             bygroups(Punctuation, Name.Tag, Punctuation, Literal.String), 'tag'),

            # Opening tag
            (r'(\[)([A-Za-z0-9-]+)', bygroups(Punctuation, Name.Tag), 'tag'),

            (r'[^\[\]]+', Text),
            (r'.', Text),
        ],

        'tag': [
            (r'\s+', Whitespace),
            (r'(/?)(\])', bygroups(Punctuation, Punctuation), '#pop'),

            # key=value
            (r'([^\s=\]]+)(=)("[^"\]]*"|\'[^\'\]]*\'|[^\s\]]*)',
             bygroups(Name.Attribute, Punctuation, Literal.String)),

            # Bare value
            (r'"[^"\]]*"|\'[^\'\]]*\'|[^\s\]/]+', Literal.String),

            # Anything else (e.g. stray "/") ends the tag lexing gracefully
            (r'.', Text, '#pop'),
        ],
    }


def get_lexer() -> TermageLexer:
    """
    Get the TermageLexer instance

    Returns:
        TermageLexer instance ready for use with Pygments
    """
    return TermageLexer()
