#!/usr/bin/env python3
"""
tagtint - Inline tag markup for terminal styling

Renders text files written with <tag> markup into files containing ANSI
escape sequences, ready to be cat'ed to a terminal or embedded in other
tooling output.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Markup:
    <red bold>text</>          open several tags, close all
    <bg:bright:blue>x</bg>     qualifiers; close by prefix
    <#ff8800>orange</#>        hex colors
    ~<b>                       escaped tag, printed literally

Usage:
    tagtint inputdir/ outputdir/ --inputFile banner.txt

    The rendered text is written to outputdir/ as banner.txt.ansi unless
    --outputFile is given.

Examples:
    # Basic rendering
    tagtint . output/ --inputFile motd.txt

    # 256 color terminal, also print the result
    tagtint . output/ --inputFile motd.txt --colorSystem 256 --echo

    # Show highlighted markup first, verbose
    tagtint . output/ --inputFile motd.txt --preview -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from pygments import highlight
from pygments.formatters import TerminalFormatter

from .lib import TagParser, CapabilityRegistry, __version__, LOG, state_connectToLogger
from .lib.lexer import get_lexer
from .lib.parser import TAG_PATTERN
from .config import appsettings
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
  _             _   _       _
 | |_ __ _  __ _| |_(_)_ __ | |_
 | __/ _` |/ _` | __| | '_ \| __|
 | || (_| | (_| | |_| | | | | |_
  \__\__,_|\__, |\__|_|_| |_|\__|
           |___/

  Inline tag markup for terminal styling
"""

# Define CLI arguments
parser = ArgumentParser(
    description="tagtint - Render <tag> markup to ANSI styled text",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Tagged text file (relative to inputdir)"
)

parser.add_argument(
    "--outputFile",
    default="",
    type=str,
    help=f"Rendered file (relative to outputdir). Defaults to inputFile + '{appsettings.output_suffix}'",
)

parser.add_argument(
    "--colorSystem",
    default=None,
    choices=["truecolor", "256", "standard", "windows", "none"],
    help="Terminal color system. Defaults to TAGTINT_COLOR_SYSTEM or truecolor",
)

parser.add_argument(
    "--noParse",
    action="store_true",
    help="Copy the input without interpreting tags",
)

parser.add_argument(
    "--echo",
    action="store_true",
    help="Also write the rendered text to stdout",
)

parser.add_argument(
    "--preview",
    action="store_true",
    help="Print the markup source with syntax highlighting before rendering",
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
            - inputSourceFile: Resolved path to the tagged input file
            - renderOutputFile: Resolved path of the file to write
            - envOK: True if environment is valid

    Exits:
        1 if the input file is not found
    """

    state = inputstate.copy()

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

    output_name = state.outputFile or f"{Path(state.inputFile).name}{appsettings.output_suffix}"
    state.renderOutputFile = state.outputdir / output_name
    state.renderOutputFile.parent.mkdir(parents=True, exist_ok=True)
    LOG(f"Output file: {state.renderOutputFile}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the tagged source file.

    Args:
        inputstate: Program state with inputSourceFile path set

    Returns:
        ProgramState with added field:
            - source: Raw tagged text

    Exits:
        1 if the file cannot be read
    """

    state = inputstate.copy()

    LOG("Reading source file...", level=1)

    try:
        state.source = state.inputSourceFile.read_text(encoding="utf-8")
        LOG(f"Read {len(state.source)} characters from {state.inputSourceFile.name}", level=2)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    return state


def source_preview(inputstate: ProgramState) -> ProgramState:
    """
    Print the markup source with syntax highlighting when --preview is set.

    Args:
        inputstate: Program state with source populated

    Returns:
        ProgramState unchanged
    """
    state = inputstate.copy()
    if state.preview and state.source is not None:
        sys.stdout.write(highlight(state.source, get_lexer(), TerminalFormatter()))
    return state


def tags_render(inputstate: ProgramState) -> ProgramState:
    """
    Render tag markup in the source and write the output file.

    Args:
        inputstate: Program state with source and renderOutputFile set

    Returns:
        ProgramState with added fields:
            - rendered: Styled text
            - renderResult: Dict containing:
                - status: bool
                - output_file: str
                - characters: int (length of the rendered text)
                - tag_groups: int (number of <...> groups in the source)

    Exits:
        1 if source is missing or the output cannot be written
    """

    state = inputstate.copy()

    LOG("Rendering tags...", level=1)

    if state.source is None:
        print("Error: No source text available", file=sys.stderr)
        sys.exit(1)

    tag_parser = TagParser(
        registry=CapabilityRegistry.fromSettings(state.colorSystem),
        enabled=not state.noParse,
    )
    state.rendered = tag_parser.parse(state.source)

    try:
        state.renderOutputFile.write_text(state.rendered, encoding="utf-8")
    except OSError as e:
        print(f"Error writing output file: {e}", file=sys.stderr)
        sys.exit(1)
    LOG(f"Wrote {state.renderOutputFile}", level=2)

    state.renderResult = {
        "status": True,
        "output_file": str(state.renderOutputFile),
        "characters": len(state.rendered),
        "tag_groups": len(TAG_PATTERN.findall(state.source)),
    }
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display render results, and the rendered text itself with --echo.

    Args:
        inputstate: Program state with renderResult populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if renderResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.renderResult:
        print("Error: Rendering failed", file=sys.stderr)
        sys.exit(1)

    if state.echo and state.rendered is not None:
        sys.stdout.write(state.rendered)

    LOG("\n✓ Rendering successful!", level=1)
    LOG(f"  Output: {state.renderResult['output_file']}", level=1)
    LOG(f"  Tag groups: {state.renderResult['tag_groups']}", level=1)
    LOG(f"  Characters written: {state.renderResult['characters']}", level=2)
    return state


@chris_plugin(
    parser=parser,
    title="tagtint - Inline tag markup renderer",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - render a tagged text file to ANSI styled text.

    Orchestrates the render pipeline:
        1. env_check: Validate paths and environment
        2. source_read: Read the tagged source file
        3. source_preview: Optionally print highlighted markup
        4. tags_render: Parse tags and write the output file
        5. results_report: Display results to user

    Args:
        options: CLI arguments from argparse
        inputdir: Directory containing the tagged source file
        outputdir: Directory where the rendered file will be written

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, source_read, source_preview, tags_render, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
