"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing command stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for a CLI command (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the command progresses.

    Pipeline stages and their state additions (build command):
        - Initial: cwd, verbosity, command, force
        - env_check: sourcesDir, outputFile, missingSources, envOK
        - sources_build: buildOK, outputWritten
        - results_report: (no additions, terminal stage)

    Attributes:
        cwd: Working directory of the project
        verbosity: Logging verbosity level (1-3)
        command: Sub-command name (new, build, watch, help)
        force: Overwrite an existing sources directory (new only)
        envOK: Environment validation passed
        sourcesDir: Resolved sources directory
        outputFile: Resolved output document path
        missingSources: Required source files found absent
        buildOK: The build wrote its document
        outputWritten: Path of the written document
    """

    # CLI arguments
    cwd: Path = field(default_factory=Path.cwd)
    verbosity: int = field(default=1)
    command: Optional[str] = field(default=None)
    force: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    sourcesDir: Path = field(default=Path("/"))
    outputFile: Path = field(default=Path("/"))
    missingSources: List[str] = field(default_factory=list)
    buildOK: bool = field(default=False)
    outputWritten: Optional[Path] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, cwd: Optional[Path] = None
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and the working directory.

        Args:
            options: Parsed CLI arguments (command, verbosity, force)
            cwd: Project directory (default: process cwd)

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Filter options_dict to only include fields that exist in ProgramState
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args: dict[str, Any] = {**filtered_options, "cwd": Path(cwd) if cwd else Path.cwd()}
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
        final_state = pipeline(initial_state, env_check, sources_build, results_report)

    This is equivalent to:
        results_report(sources_build(env_check(initial_state)))
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
