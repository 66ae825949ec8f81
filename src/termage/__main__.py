#!/usr/bin/env python3
"""
termage - Terminal text styling with inline shortcodes

Renders a text file written with [shortcode] markup to ANSI-styled output.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Shortcodes:
    [b]bold[/b]  [i]italic[/i]  [u]underline[/u]  [s]strike[/s]  [d]dim[/d]
    [color=red]...[/color]  [bg=info]...[/bg]
    [a href=https://example.org]link[/a]
    [pl=2]...[/pl]  [px=4]...[/px]  [m l=1 r=3]...[/m]
    [[ and ]] for literal brackets

Usage:
    termage inputdir/ outputdir/ --inputFile notes.txt

    The rendered text is written to outputdir/ as <inputFile stem>.ansi
    (or .txt with --strip).

Examples:
    # Render with the default theme
    termage . out/ --inputFile motd.txt

    # Another theme from a custom themes directory
    termage . out/ --inputFile motd.txt --theme midnight --themesDir themes/

    # Plain text export and highlighted source display
    termage . out/ --inputFile motd.txt --strip --showSource -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from pygments import highlight
from pygments.formatters import TerminalFormatter

from .lib import Shortcodes, Theme, ThemeError, __version__, LOG, state_connectToLogger
from .lib.layout import width_visible
from .lib.lexer import TermageLexer
from .config import appsettings
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
  _
 | |_ ___ _ __ _ __ ___   __ _  __ _  ___
 | __/ _ \ '__| '_ ` _ \ / _` |/ _` |/ _ \
 | ||  __/ |  | | | | | | (_| | (_| |  __/
  \__\___|_|  |_| |_| |_|\__,_|\__, |\___|
                               |___/
  Terminal text styling with shortcodes
"""

# Define CLI arguments
parser = ArgumentParser(
    description="termage - render [shortcode] markup to ANSI-styled terminal text",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input markup file (relative to inputdir)"
)

parser.add_argument(
    "--theme",
    default=appsettings.theme_name,
    type=str,
    help="Theme name (a directory holding theme.yaml)",
)

parser.add_argument(
    "--themesDir",
    default=appsettings.themes_dir,
    type=str,
    help="Directory containing themes. Defaults to package themes/ dir",
)

parser.add_argument(
    "--strip",
    default=False,
    action="store_true",
    help="Write plain text with all shortcode markup removed",
)

parser.add_argument(
    "--showSource",
    default=False,
    action="store_true",
    help="Print the markup source with syntax highlighting",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the markup file
            - outputFile: Path the rendering will be written to
            - envOK: True if environment is valid

    Exits:
        1 if the input file is not found
    """

    state = inputstate.copy()

    if appsettings.debug_mode:
        state.verbosity = max(state.verbosity, 3)
        state_connectToLogger(state)

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile

    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    suffix = ".txt" if state.strip else ".ansi"
    state.outputFile = state.outputdir / (Path(state.inputFile).stem + suffix)
    LOG(f"Output file: {state.outputFile}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the markup source file.

    Returns:
        ProgramState with added field:
            - sourceText: Raw markup

    Exits:
        1 if file read fails
    """

    state = inputstate.copy()

    LOG("Reading source file...", level=1)

    try:
        state.sourceText = state.inputSourceFile.read_text(encoding="utf-8")
        LOG(f"Read {len(state.sourceText)} characters from {state.inputSourceFile.name}", level=2)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    if state.showSource:
        sys.stdout.write(highlight(state.sourceText, TermageLexer(), TerminalFormatter()))

    return state


def markup_render(inputstate: ProgramState) -> ProgramState:
    """
    Expand shortcodes (or strip them with --strip).

    Returns:
        ProgramState with added field:
            - renderedText: ANSI-styled or plain output

    Exits:
        1 if the theme can't be loaded
    """

    state = inputstate.copy()

    LOG("Rendering markup...", level=1)

    try:
        theme = Theme(state.theme, state.themesDir)
        LOG(f"Loaded theme: {theme.name}", level=2)
    except ThemeError as e:
        print(f"Theme error: {e}", file=sys.stderr)
        sys.exit(1)

    shortcodes = Shortcodes(theme)
    if state.strip:
        state.renderedText = shortcodes.strip(state.sourceText)
    else:
        state.renderedText = shortcodes.parse(state.sourceText)
    return state


def results_write(inputstate: ProgramState) -> ProgramState:
    """
    Write rendered text to the output file.

    Returns:
        ProgramState with added field:
            - renderResult: Dict containing output_file, characters and
              visible_width (widest rendered line)

    Exits:
        1 if the write fails
    """

    state = inputstate.copy()

    try:
        state.outputFile.write_text(state.renderedText, encoding="utf-8")
        LOG(f"Wrote {state.outputFile}", level=2)
    except OSError as e:
        print(f"Error writing output file: {e}", file=sys.stderr)
        sys.exit(1)

    lines = state.renderedText.splitlines() or [""]
    state.renderResult = {
        "status": True,
        "output_file": str(state.outputFile),
        "characters": len(state.renderedText),
        "visible_width": max(width_visible(line) for line in lines),
    }
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display rendering results to user.

    Exits:
        1 if renderResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.renderResult:
        print("Error: Rendering failed", file=sys.stderr)
        sys.exit(1)

    if state.verbosity >= 1:
        LOG("✓ Rendering successful!", level=1)
        LOG(f"  Output: {state.renderResult['output_file']}", level=1)
        LOG(f"  Widest line: {state.renderResult['visible_width']} columns", level=1)
        LOG("To view:", level=1)
        LOG(f"  cat {state.outputFile}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="termage - Terminal text styling with shortcodes",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - render a markup file to ANSI-styled text.

    Orchestrates the full pipeline:
        1. env_check: Validate paths and environment
        2. source_read: Read the markup file
        3. markup_render: Expand (or strip) shortcodes with the chosen theme
        4. results_write: Write the output file
        5. results_report: Display results to user

    Args:
        options: CLI arguments from argparse
        inputdir: Directory containing the markup file
        outputdir: Directory where the rendered file will be written

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, source_read, markup_render, results_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
