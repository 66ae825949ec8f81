"""
CLI pipeline tests

Stages are run directly on a ProgramState, the way main() chains them.
"""

from argparse import Namespace

import pytest
from pygments.token import Name, String

from termage.__main__ import (
    env_check,
    markup_render,
    results_report,
    results_write,
    source_read,
)
from termage.lib.lexer import TermageLexer, get_lexer
from termage.models import ProgramState, pipeline


def state_make(tmp_path, text="[color=red]Stay RAD![/color]", **options):
    (tmp_path / "motd.txt").write_text(text, encoding="utf-8")
    return ProgramState(
        inputdir=tmp_path,
        outputdir=tmp_path / "out",
        inputFile="motd.txt",
        **options,
    )


class TestStages:
    """Individual pipeline stages"""

    def test_env_check(self, tmp_path):
        state = env_check(state_make(tmp_path))

        assert state.envOK is True
        assert state.inputSourceFile == tmp_path / "motd.txt"
        assert state.outputFile == tmp_path / "out" / "motd.ansi"
        assert (tmp_path / "out").is_dir()

    def test_env_check_strip_suffix(self, tmp_path):
        state = env_check(state_make(tmp_path, strip=True))
        assert state.outputFile.name == "motd.txt"

    def test_env_check_missing_input(self, tmp_path):
        state = ProgramState(inputdir=tmp_path, outputdir=tmp_path / "out", inputFile="nope.txt")
        with pytest.raises(SystemExit):
            env_check(state)

    def test_stages_copy_state(self, tmp_path):
        initial = state_make(tmp_path)
        checked = env_check(initial)

        assert checked is not initial
        assert initial.envOK is False

    def test_bad_theme(self, tmp_path):
        state = pipeline(state_make(tmp_path, theme="nope"), env_check, source_read)
        with pytest.raises(SystemExit):
            markup_render(state)

    def test_report_without_result(self, tmp_path):
        with pytest.raises(SystemExit):
            results_report(ProgramState())

    def test_show_source(self, tmp_path, capsys):
        pipeline(state_make(tmp_path, showSource=True), env_check, source_read)
        assert "Stay RAD!" in capsys.readouterr().out


class TestPipeline:
    """Full render to disk"""

    def test_render(self, tmp_path):
        state = pipeline(
            state_make(tmp_path),
            env_check,
            source_read,
            markup_render,
            results_write,
            results_report,
        )

        output = (tmp_path / "out" / "motd.ansi").read_text(encoding="utf-8")
        assert output == "\x1b[31mStay RAD!\x1b[39m"
        assert state.renderResult["visible_width"] == 9
        assert state.renderResult["status"] is True

    def test_strip(self, tmp_path):
        pipeline(
            state_make(tmp_path, text="[b]Stay[/b] [[RAD]]", strip=True),
            env_check,
            source_read,
            markup_render,
            results_write,
        )

        output = (tmp_path / "out" / "motd.txt").read_text(encoding="utf-8")
        assert output == "Stay [[RAD]]"

    def test_custom_theme(self, tmp_path):
        theme_dir = tmp_path / "themes" / "loud"
        theme_dir.mkdir(parents=True)
        (theme_dir / "theme.yaml").write_text("colors:\n  red: magenta\n", encoding="utf-8")

        state = pipeline(
            state_make(tmp_path, theme="loud", themesDir=str(tmp_path / "themes")),
            env_check,
            source_read,
            markup_render,
        )
        assert state.renderedText == "\x1b[35mStay RAD!\x1b[39m"


class TestState:
    """ProgramState construction"""

    def test_from_namespace(self, tmp_path):
        options = Namespace(inputFile="a.txt", theme="default", verbosity=2, unrelated="x")
        state = ProgramState.state_createFromNamespace(options, tmp_path, tmp_path / "out")

        assert state.inputFile == "a.txt"
        assert state.verbosity == 2
        assert state.inputdir == tmp_path
        assert not hasattr(state, "unrelated")


class TestLexer:
    """Source highlighting"""

    def test_tag_tokens(self):
        tokens = list(TermageLexer().get_tokens('[a href="https://x.io"]site[/a] [[x]]'))

        assert (Name.Tag, "a") in tokens
        assert (Name.Attribute, "href") in tokens
        assert (String.Escape, "[[") in tokens

    def test_get_lexer(self):
        assert isinstance(get_lexer(), TermageLexer)
