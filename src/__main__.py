#!/usr/bin/env python3
"""
inkpage - Single-page builder for ink interactive fiction

Gathers the sources of an ink project (stylesheet, page template, runtime
script, compiled story and metadata) and merges them into one standalone
HTML document that can be opened or hosted anywhere.

Project layout:
    sources/
        defines.json      metadata available to the template as `defines`
        style.scss        compiled to CSS, available as `css`
        template.html     Jinja2 page template
        script.js         page script, available as `script`
        story.ink.json    inklecate export, available as `story`

    The built document is written to out.html in the working directory.

Usage:
    inkpage new [--force]
    inkpage build
    inkpage watch
    inkpage help

Examples:
    # Start a project, drop story.ink.json into sources/, then build
    inkpage new
    inkpage build

    # Rebuild whenever a source changes, with verbose output
    inkpage -v watch
"""

import sys
import asyncio
from typing import List, Optional
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from .lib import Builder, __version__, LOG, LOG_error, state_connectToLogger, scaffold_create, watch
from .lib.errors import InkpageError, ScaffoldExistsError
from .config import appsettings
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
  _       _
 (_)_ __ | | ___ __   __ _  __ _  ___
 | | '_ \| |/ / '_ \ / _` |/ _` |/ _ \
 | | | | |   <| |_) | (_| | (_| |  __/
 |_|_| |_|_|\_\ .__/ \__,_|\__, |\___|
              |_|          |___/

  Single-page builder for ink stories
"""

# Define CLI arguments
parser = ArgumentParser(
    prog="inkpage",
    description="inkpage - build a standalone HTML page from an ink project",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")

subparsers = parser.add_subparsers(dest="command", metavar="command")

new_parser = subparsers.add_parser("new", help="create a new project")
new_parser.add_argument(
    "-f",
    "--force",
    action="store_true",
    help="delete existing sources/ directory if any",
)

subparsers.add_parser("build", help="build the project in the current working directory")
subparsers.add_parser(
    "watch", help="watch for changes in sources/ and queue up a build when it happens"
)
subparsers.add_parser("help", help="show usage information")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Resolve the project paths for a build.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - sourcesDir: Resolved sources directory
            - outputFile: Resolved output document path
            - envOK: True once paths are resolved
    """
    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)
    state.sourcesDir = appsettings.sourcesDir_get(state.cwd)
    state.outputFile = appsettings.outputPath_get(state.cwd)
    LOG(f"Sources directory: {state.sourcesDir}", level=2)
    LOG(f"Output file: {state.outputFile}", level=2)
    LOG(f"Runtime bundle: {appsettings.runtimeBundle_get()}", level=2)

    state.envOK = True
    return state


def sources_build(inputstate: ProgramState) -> ProgramState:
    """
    Run one build of the project.

    Args:
        inputstate: Program state with resolved paths

    Returns:
        ProgramState with added fields:
            - missingSources: Required sources found absent
            - buildOK: True if the document was written
            - outputWritten: Path of the written document
    """
    state = inputstate.copy()
    if not state.envOK:
        return state

    builder = Builder(cwd=state.cwd)
    try:
        state.outputWritten = asyncio.run(builder.build())
        state.buildOK = True
    except InkpageError as e:
        LOG_error(f"Build failed: {e}")
        state.buildOK = False
    state.missingSources = builder.sources_missing_last
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display build results to the user.

    Args:
        inputstate: Program state with build results

    Returns:
        ProgramState unchanged (terminal pipeline stage)
    """
    state: ProgramState = inputstate.copy()
    if not state.buildOK:
        return state

    LOG("\n✓ Build successful!", level=1)
    LOG(f"  Output: {state.outputWritten}", level=1)
    if state.missingSources:
        LOG(f"  Missing sources: {', '.join(state.missingSources)}", level=1)
    return state


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point - dispatch a sub-command.

    Args:
        argv: Command line arguments (default: sys.argv[1:])

    Returns:
        Process exit code: 0 on success, 1 on a failed command
    """
    options: Namespace = parser.parse_args(argv)
    state: ProgramState = ProgramState.state_createFromNamespace(options=options)

    # Connect state to logger for the whole command
    state_connectToLogger(state)

    if state.command == "new":
        try:
            scaffold_create(cwd=state.cwd, force=state.force)
        except ScaffoldExistsError as e:
            LOG_error(str(e))
            return 1
        return 0

    if state.command == "build":
        final = pipeline(state, env_check, sources_build, results_report)
        return 0 if final.buildOK else 1

    if state.command == "watch":
        try:
            watch(cwd=state.cwd)
        except InkpageError as e:
            LOG_error(str(e))
            return 1
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
