"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the render pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as rendering progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, outputFile,
                   colorSystem, noParse, echo, preview
        - env_check: inputSourceFile, renderOutputFile, envOK
        - source_read: source
        - source_preview: (no additions)
        - tags_render: rendered, renderResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the tagged source file
        outputdir: Base output directory for rendered files
        verbosity: Logging verbosity level (1-3)
        inputFile: Input filename (relative to inputdir)
        outputFile: Output filename (relative to outputdir); derived when empty
        colorSystem: Optional override of the configured color system
        noParse: Render with tag parsing disabled
        echo: Also write rendered text to stdout
        preview: Print the highlighted markup source before rendering
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the input file
        renderOutputFile: Resolved path to the output file
        source: Raw tagged text read from inputSourceFile
        rendered: Text with tags converted to ANSI escape sequences
        renderResult: Render results (output_file, characters, tag_groups)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    outputFile: str = field(default="")
    colorSystem: Optional[str] = field(default=None)
    noParse: bool = field(default=False)
    echo: bool = field(default=False)
    preview: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    renderOutputFile: Path = field(default=Path("/"))
    source: Optional[str] = field(default=None)
    rendered: Optional[str] = field(default=None)
    renderResult: Optional[Dict[str, Any]] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Merges CLI options with explicitly provided directories to create
        the initial program state for the render pipeline.

        Args:
            options: Parsed CLI arguments (inputFile, outputFile, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for rendered output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Unknown CLI options (e.g. those added by chris_plugin) are dropped
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

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_read,
            tags_render,
            results_report
        )

    This is equivalent to:
        results_report(tags_render(source_read(env_check(initial_state))))
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
