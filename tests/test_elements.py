"""
Element tests - fluent styling, alerts, headings and the Termage facade
"""

import io

import pytest

from termage.lib.elements import Alert, El, Link, Rule, alert, bold, div, el, heading, link, rule, span, strikethrough, underline
from termage.lib.layout import width_visible
from termage.lib.termage import Termage
from termage.lib.terminal import Terminal
from termage.lib.theme import Theme


class TestElement:
    """Inline and block elements"""

    def test_underline(self, theme):
        assert underline("RAD", theme=theme).render() == "\x1b[4mRAD\x1b[24m"

    def test_bold(self, theme):
        assert bold("x", theme=theme).render() == "\x1b[1mx\x1b[22m"

    def test_block(self, theme):
        assert div("x", theme=theme).render() == "x\n"

    def test_inline(self, theme):
        assert span("x", theme=theme).render() == "x"

    def test_color_and_padding(self, theme):
        rendered = el("hi", theme=theme).color("red").pl(1).pr(2).render()
        assert rendered == "\x1b[31m hi  \x1b[39m"

    def test_margin_outside_colors(self, theme):
        rendered = el("hi", theme=theme).bg("blue").ml(2).mr(1).render()
        assert rendered == "  \x1b[44mhi\x1b[49m "

    def test_px_mx(self, theme):
        rendered = el("hi", theme=theme).bg("red").px(4).mx(2).render()
        assert rendered == " \x1b[41m  hi  \x1b[49m "

    def test_odd_px(self, theme):
        """Odd totals split like [px=]"""
        assert el("x", theme=theme).px(3).render() == " x "

    def test_spacing_uses_global_multiplier(self):
        theme = Theme(variables={"padding": {"global": 2}, "margin": {"global": 3}})

        assert el("x", theme=theme).pl(1).render() == "  x"
        assert el("x", theme=theme).pr(1).render() == "x  "
        assert el("x", theme=theme).ml(1).render() == "   x"

    def test_spacing_uses_side_multipliers(self):
        theme = Theme(variables={"padding": {"right": 0.5}, "margin": {"left": 2}})

        assert el("x", theme=theme).px(4).render() == "  x "
        assert el("x", theme=theme).mx(2).render() == "  x "

    def test_spacing_matches_shortcodes(self):
        theme = Theme(variables={"padding": {"global": 2, "left": 1.5, "right": 0.5}})
        element = el("x", theme=theme).px(4)
        assert element.render() == element.shortcodes.parse("[px=4]x[/px]")

    def test_palette(self, theme):
        assert el("x", theme=theme).color("danger").render() == "\x1b[31mx\x1b[39m"

    def test_value_shortcodes(self, theme):
        rendered = el("[b]x[/b]", theme=theme).color("green").render()
        assert rendered == "\x1b[32m\x1b[1mx\x1b[22m\x1b[39m"

    def test_decorations_order(self, theme):
        rendered = el("x", theme=theme).underline().bold().render()
        assert rendered == "\x1b[1m\x1b[4mx\x1b[24m\x1b[22m"

    def test_str(self, theme):
        element = el("x", theme=theme).italic()
        assert str(element) == element.render()

    def test_invalid_display(self, theme):
        with pytest.raises(ValueError):
            el("x", theme=theme).d("grid")

    def test_strikethrough(self, theme):
        assert strikethrough("gone", theme=theme).render() == "\x1b[9mgone\x1b[29m"

    def test_strikethrough_block(self, theme):
        assert strikethrough("gone", theme=theme).d("block").render() == "\x1b[9mgone\x1b[29m\n"


class TestElementWidth:
    """Boxes sized in columns or to the terminal"""

    def test_width(self, theme, terminal):
        rendered = el("ab", theme=theme, terminal=terminal).bg("red").w(6).render()
        assert rendered == "\x1b[41mab    \x1b[49m"

    def test_width_right(self, theme, terminal):
        rendered = el("ab", theme=theme, terminal=terminal).bg("red").w(6).text_align_right().pr(1).render()
        assert rendered == "\x1b[41m   ab \x1b[49m"

    def test_width_full(self, theme):
        rendered = el("ab", theme=theme, terminal=Terminal(width=10)).w_full().render()
        assert rendered == "ab" + " " * 8

    def test_width_clamped(self, theme):
        rendered = el("ab", theme=theme, terminal=Terminal(width=10)).w(100).render()
        assert width_visible(rendered) == 10

    def test_width_counts_visible_text(self, theme, terminal):
        rendered = el("[b]ab[/b]", theme=theme, terminal=terminal).w(5).render()
        assert width_visible(rendered) == 5

    def test_width_truncates(self, theme, terminal):
        assert el("abcdefgh", theme=theme, terminal=terminal).w(5).render() == "abcde"
        assert el("abcdefgh", theme=theme, terminal=terminal).w(5).pl(1).render() == " abcd"

    def test_width_truncates_styled(self, theme, terminal):
        rendered = el("[b]abcdefgh[/b]", theme=theme, terminal=terminal).bg("red").w(4).render()
        assert rendered == "\x1b[41m\x1b[1mabcd\x1b[22m\x1b[49m"


class TestAlert:
    """Alert boxes"""

    def test_danger(self, theme):
        rendered = alert("Hi", theme=theme, terminal=Terminal(width=80)).danger().w(10).render()

        header = "\x1b[41m" + " " * 10 + "\x1b[49m"
        body = "\x1b[41m\x1b[37m  Hi      \x1b[39m\x1b[49m"
        assert rendered == f"{header}\n{body}\n{header}\n"

    def test_default_type_is_info(self, theme, terminal):
        rendered = alert("Hi", theme=theme, terminal=terminal).w(10).render()
        assert "\x1b[44m\x1b[30m  Hi      " in rendered

    def test_theme_width_clamped(self, terminal):
        theme = Theme(variables={"alert": {"width": 20}})
        lines = alert("Hi", theme=theme, terminal=Terminal(width=15)).render().splitlines()

        assert len(lines) == 3
        assert all(width_visible(line) == 15 for line in lines)

    def test_default_width(self, theme):
        lines = alert("Hi", theme=theme, terminal=Terminal(width=80)).render().splitlines()
        assert width_visible(lines[1]) == 50

    def test_full_width(self, theme):
        lines = alert("Hi", theme=theme, terminal=Terminal(width=64)).w_full().render().splitlines()
        assert width_visible(lines[0]) == 64

    def test_right_aligned(self, theme, terminal):
        rendered = alert("Hi", theme=theme, terminal=terminal).success().w(10).text_align_right().render()
        assert "      Hi  " in rendered

    def test_theme_type_colors(self, terminal):
        theme = Theme(variables={"alert": {"type": {"warning": {"bg": "magenta", "color": "white"}}}})
        rendered = alert("Hi", theme=theme, terminal=terminal).warning().w(6).render()
        assert "\x1b[45m\x1b[37m" in rendered

    def test_explicit_color_wins(self, theme, terminal):
        rendered = alert("Hi", theme=theme, terminal=terminal).danger().color("green").w(6).render()
        assert "\x1b[41m\x1b[32m" in rendered

    def test_long_body_fits_terminal(self, theme):
        rendered = alert("a very long alert body text", theme=theme, terminal=Terminal(width=10)).render()
        lines = rendered.splitlines()

        assert [width_visible(line) for line in lines] == [10, 10, 10]
        assert "  a very l" in lines[1]

    def test_invalid_type(self, theme):
        with pytest.raises(ValueError):
            Alert("Hi", theme=theme).type_set("shouting")


class TestHeading:
    """Heading sizes"""

    def test_box(self, theme):
        rendered = heading("Hi", theme=theme, terminal=Terminal(width=10)).size(1).render()
        lines = rendered.split("\n")

        assert rendered.startswith("\x1b[1m╔")
        assert rendered.endswith("\x1b[22m\n")
        assert "║Hi      ║" in rendered
        assert all(width_visible(line) == 10 for line in lines[:3])

    def test_single_box(self, theme):
        rendered = heading("Hi", theme=theme, terminal=Terminal(width=10)).size(2).render()
        assert "┌────────┐" in rendered

    @pytest.mark.parametrize("size", [3, 4])
    def test_bold(self, theme, size):
        assert heading("Hi", theme=theme).size(size).render() == "\x1b[1mHi\x1b[22m\n\n"

    def test_dim(self, theme):
        assert heading("Hi", theme=theme).size(5).render() == "\x1b[2mHi\x1b[22m\n\n"

    def test_clamped(self, theme):
        assert heading("Hi", theme=theme).size(9).render() == "\x1b[2mHi\x1b[22m\n\n"
        assert heading("Hi", theme=theme, terminal=Terminal(width=6)).size(0).render().startswith("\x1b[1m╔")

    def test_theme_size(self):
        theme = Theme(variables={"heading": {"size": 4}})
        assert heading("Hi", theme=theme).render() == "\x1b[1mHi\x1b[22m\n\n"

    @pytest.mark.parametrize("size", [1, 2])
    def test_long_value_fits_terminal(self, theme, size):
        rendered = heading("a long heading text", theme=theme, terminal=Terminal(width=10)).size(size).render()
        lines = rendered.split("\n")[:3]

        assert [width_visible(line) for line in lines] == [10, 10, 10]
        assert rendered.endswith("\x1b[22m\n")

class TestRule:
    """Horizontal rules"""

    def test_plain(self, theme):
        assert rule(theme=theme, terminal=Terminal(width=10)).render() == "─" * 10 + "\n"

    def test_label_left(self, theme):
        assert rule("Hi", theme=theme, terminal=Terminal(width=10)).render() == "── Hi ────\n"

    def test_label_right(self, theme):
        rendered = rule("Hi", theme=theme, terminal=Terminal(width=10)).text_align_right().render()
        assert rendered == "──── Hi ──\n"

    def test_label_truncated(self, theme):
        assert rule("a long label", theme=theme, terminal=Terminal(width=6)).render() == " a lon\n"

    def test_label_shortcodes(self, theme):
        rendered = rule("[b]Hi[/b]", theme=theme, terminal=Terminal(width=10)).render()
        assert rendered == "── \x1b[1mHi\x1b[22m ────\n"

    def test_margins(self, theme):
        rendered = rule(theme=theme, terminal=Terminal(width=10)).ml(2).mr(1).render()
        assert rendered == "  " + "─" * 7 + " \n"

    def test_theme(self):
        theme = Theme(variables={"rule": {"char": "=-", "color": "red", "text-align": "right"}})
        rendered = rule("x", theme=theme, terminal=Terminal(width=6)).render()
        assert rendered == "\x1b[31m= x ==\x1b[39m\n"

    def test_color_setter_wins(self):
        theme = Theme(variables={"rule": {"color": "red"}})
        rendered = rule(theme=theme, terminal=Terminal(width=3)).color("blue").render()
        assert rendered == "\x1b[34m───\x1b[39m\n"

    def test_empty_char_falls_back(self):
        theme = Theme(variables={"rule": {"char": ""}})
        assert rule(theme=theme, terminal=Terminal(width=2)).render() == "──\n"

    def test_is_element(self, theme):
        assert isinstance(rule(theme=theme), Rule)


class TestLink:
    """OSC-8 hyperlinks"""

    def test_href(self, theme):
        rendered = link("site", theme=theme).href("https://x.io").render()
        assert rendered == "\x1b]8;;https://x.io\x1b\\site\x1b]8;;\x1b\\"

    def test_text_is_target(self, theme):
        rendered = link("https://x.io", theme=theme).render()
        assert rendered == "\x1b]8;;https://x.io\x1b\\https://x.io\x1b]8;;\x1b\\"

    def test_styled_text_target(self, theme):
        rendered = link("[b]https://x.io[/b]", theme=theme).render()
        assert rendered == "\x1b]8;;https://x.io\x1b\\\x1b[1mhttps://x.io\x1b[22m\x1b]8;;\x1b\\"

    def test_empty(self, theme):
        assert link("", theme=theme).render() == ""

    def test_colored(self, theme):
        rendered = link("site", theme=theme).href("https://x.io").color("info").render()
        assert rendered == "\x1b[34m\x1b]8;;https://x.io\x1b\\site\x1b]8;;\x1b\\\x1b[39m"

    def test_visible_width(self, theme):
        assert width_visible(link("site", theme=theme).href("https://x.io").render()) == 4

    def test_is_element(self, theme):
        assert isinstance(link(theme=theme), Link)


class TestTermage:
    """Facade writing to a stream"""

    def test_write_element(self, theme):
        output = io.StringIO()
        t = Termage(output=output, theme=theme, terminal=Terminal(width=20))
        t.write(t.el("[b]ok[/b]").color("green"))

        assert output.getvalue() == "\x1b[32m\x1b[1mok\x1b[22m\x1b[39m"

    def test_write_text(self, theme):
        output = io.StringIO()
        t = Termage(output=output, theme=theme)
        t.write("[u]x[/u] ")
        t.write(t.div("y"))

        assert output.getvalue() == "\x1b[4mx\x1b[24m y\n"

    def test_elements_share_engine(self, theme):
        t = Termage(output=io.StringIO(), theme=theme, terminal=Terminal(width=12))
        created = [
            t.el(), t.div(), t.span(), t.alert(), t.heading(), t.strikethrough(), t.rule(), t.link(),
        ]

        assert all(element.shortcodes is t.shortcodes for element in created)
        assert all(element.terminal is t.terminal for element in created)
        assert isinstance(created[0], El)

    def test_theme_set(self, theme):
        t = Termage(output=io.StringIO(), theme=theme)
        t.theme_set(Theme(variables={"colors": {"danger": "magenta"}}))

        assert t.render("[color=danger]x[/color]") == "\x1b[35mx\x1b[39m"
        assert t.render(t.el("x").color("danger")) == "\x1b[35mx\x1b[39m"

    def test_rule_and_link(self, theme):
        output = io.StringIO()
        t = Termage(output=output, theme=theme, terminal=Terminal(width=8))
        t.write(t.rule("Hi"))
        t.write(t.link("site", href="https://x.io"))

        assert output.getvalue() == "── Hi ──\n\x1b]8;;https://x.io\x1b\\site\x1b]8;;\x1b\\"
