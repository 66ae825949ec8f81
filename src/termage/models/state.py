"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Optional, Type, TypeVar, Dict, Callable, Any
from dataclasses import dataclass, field, fields
from functools import reduce


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the rendering pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, theme, themesDir,
          strip, showSource
        - env_check: inputSourceFile, outputFile, envOK
        - source_read: sourceText
        - markup_render: renderedText
        - results_write: renderResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the markup source file
        outputdir: Base output directory for rendered files
        verbosity: Logging verbosity level (1-3)
        inputFile: Input markup filename (relative to inputdir)
        theme: Theme name
        themesDir: Optional directory holding themes
        strip: Write plain text (markup removed) instead of ANSI output
        showSource: Print the highlighted markup source to stdout
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the input file
        outputFile: Path of the rendered output file
        sourceText: Raw markup read from the input file
        renderedText: Rendered output
        renderResult: Summary (output_file, characters, visible_width)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    theme: str = field(default="default")
    themesDir: Optional[str] = field(default=None)
    strip: bool = field(default=False)
    showSource: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    outputFile: Path = field(default=Path("/"))
    sourceText: str = field(default="")
    renderedText: str = field(default="")
    renderResult: Optional[Dict[str, Any]] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputFile, theme, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for rendered output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        valid_fields = {f.name for f in fields(cls)}

        # Only keep options that exist in ProgramState
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}

        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_read,
            markup_render,
            results_write,
            results_report
        )
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
