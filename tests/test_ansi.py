"""
ANSI codec tests
"""

import pytest

from termage.lib.ansi import AnsiCodec, DECORATION_CODES, codec, sgr
from termage.models.style import DECORATIONS, StyleAttributes


class TestColorResolve:
    """Color values to SGR parameters"""

    @pytest.mark.parametrize("value, background, expected", [
        ("red", False, "31"),
        ("red", True, "41"),
        ("bright-blue", False, "94"),
        ("bright-blue", True, "104"),
        ("grey", False, "90"),
        ("default", True, "49"),
        ("BRIGHT_RED", False, "91"),
        ("208", False, "38;5;208"),
        ("0", True, "48;5;0"),
        ("#ff8800", False, "38;2;255;136;0"),
        ("#f80", True, "48;2;255;136;0"),
    ])
    def test_known(self, value, background, expected):
        assert codec.color_resolve(value, background) == expected

    @pytest.mark.parametrize("value", [None, "", "nope", "256", "#ff88", "#gggggg", "-1"])
    def test_unknown(self, value):
        assert codec.color_resolve(value) is None


class TestPrefixSuffix:
    """Emission order and symmetric off codes"""

    def test_order(self):
        style = StyleAttributes(color="red", bg="blue", decorations=frozenset({"underline", "bold"}))

        assert codec.prefix_build(style) == "\x1b[44m\x1b[31m\x1b[1m\x1b[4m"
        assert codec.suffix_build(style) == "\x1b[24m\x1b[22m\x1b[39m\x1b[49m"

    def test_style_apply(self):
        style = StyleAttributes(color="red", decorations=frozenset({"bold"}))
        assert AnsiCodec().style_apply(style, "hi") == "\x1b[31m\x1b[1mhi\x1b[22m\x1b[39m"

    def test_empty_style(self):
        assert codec.style_apply(StyleAttributes(), "hi") == "hi"

    def test_unknown_color_emits_nothing(self):
        assert codec.style_apply(StyleAttributes(color="nope", bg="nada"), "x") == "x"

    def test_no_reset_code(self):
        """Code 0 is never emitted, every attribute has its own off code"""
        style = StyleAttributes(color="red", bg="green", decorations=frozenset(DECORATIONS))
        rendered = codec.style_apply(style, "x")

        assert sgr(0) not in rendered
        assert "\x1b[m" not in rendered
        for on, off in DECORATION_CODES.values():
            assert sgr(on) in rendered
            assert sgr(off) in rendered

    def test_decoration_wrap(self):
        assert codec.decoration_wrap("strikethrough", "x") == "\x1b[9mx\x1b[29m"
        assert codec.decoration_wrap("dim", "x") == "\x1b[2mx\x1b[22m"


class TestLinksAndStrip:
    """OSC-8 links and escape removal"""

    def test_link_wrap(self):
        assert codec.link_wrap("https://x.io", "site") == (
            "\x1b]8;;https://x.io\x1b\\site\x1b]8;;\x1b\\"
        )

    def test_strip_own_output(self):
        style = StyleAttributes(color="#ff0000", bg="208", decorations=frozenset({"italic"}))
        assert codec.escapes_strip(codec.style_apply(style, "Stay RAD!")) == "Stay RAD!"
        assert codec.escapes_strip(codec.link_wrap("https://x.io", "site")) == "site"

    def test_strip_foreign_sequences(self):
        assert codec.escapes_strip("\x1b]0;title\x07text") == "text"
        assert codec.escapes_strip("\x1b[2Ka\x1b[1;1Hb") == "ab"
        assert codec.escapes_strip("\x1bMx") == "x"

    def test_strip_plain(self):
        assert codec.escapes_strip("[b]plain[/b]") == "[b]plain[/b]"
