"""Plan executor - executes a prepared dispatch plan."""

import logging
from pathlib import Path

from .exceptions import ExternalToolError
from .io_layer import IOLayer
from .models import DispatchPlan, DispatchResult, ErrorKind, ToolCommand

logger = logging.getLogger(__name__)


def execute_plan(plan: DispatchPlan, io_layer: IOLayer) -> DispatchResult:
    """
    Execute a prepared plan.

    Creates the output directory, runs the schema compiler once per
    discovered file and then the archiver once. The first failing tool
    aborts the run; the output directory is removed afterwards if this run
    created it and the plan doesn't ask to keep it.
    """
    result = DispatchResult(success=True, dry_run=plan.dry_run)
    output_dir = io_layer.root / plan.output_dir

    created = io_layer.create_directory(output_dir)
    result.created_dir = str(created) if created is not None else None

    try:
        for command in plan.compile_commands:
            _run(command, io_layer, result)

        if plan.archive_command is not None:
            _run(plan.archive_command, io_layer, result)

    except ExternalToolError as e:
        result.success = False
        result.errors.append(f"{ErrorKind.EXTERNAL_TOOL_FAILURE.value}: {e}")
        _cleanup_after_failure(plan, io_layer, result)
        return result

    result.artifact_path = plan.artifact_path
    return result


def _run(command: ToolCommand, io_layer: IOLayer, result: DispatchResult):
    """Run one command and record it."""
    io_layer.run_command(command)
    result.commands_run.append(command.argv)


def _cleanup_after_failure(plan: DispatchPlan, io_layer: IOLayer, result: DispatchResult):
    """Remove partial output unless it pre-existed or must be kept."""
    if plan.keep_output:
        logger.info(f"Keeping partial output in {plan.output_dir}")
        return

    if not result.created_output_dir:
        return

    result.cleaned_up = io_layer.remove_directory(Path(result.created_dir))
    if result.cleaned_up:
        logger.info(f"Removed partial output in {result.created_dir}")
