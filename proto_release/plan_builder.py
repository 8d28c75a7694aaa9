"""Plan builder - creates a dispatch plan from a validated tag."""

import logging

from .config import PROTO_EXTENSION
from .environment import BuildConfig
from .io_layer import IOLayer
from .models import DispatchPlan, Tag, ToolCommand

logger = logging.getLogger(__name__)


def build_compile_command(config: BuildConfig, tag: Tag, proto_file: str) -> ToolCommand:
    """Schema compiler invocation for a single interface definition file."""
    service_dir = config.proto_root_path / tag.service_path
    return ToolCommand(
        tool=config.protoc,
        args=[
            "-I",
            config.include_dir,
            f"--proto_path={service_dir}",
            f"--java_out={config.output_dir}",
            proto_file,
        ],
    )


def build_archive_command(config: BuildConfig, tag: Tag) -> ToolCommand:
    """Archiver invocation bundling the whole output directory."""
    return ToolCommand(tool=config.jar, args=["cf", tag.artifact_name, config.output_dir])


def build_dispatch_plan(tag: Tag, config: BuildConfig, io_layer: IOLayer) -> DispatchPlan:
    """
    Prepare a complete dispatch plan.

    Discovers the interface definition files of the tagged service and
    determines every external command to run, without running any.

    Args:
        tag: Validated tag
        config: Run configuration
        io_layer: IO layer used to list the service directory

    Returns:
        DispatchPlan with one compile command per discovered file
    """
    service_dir = config.proto_root_path / tag.service_path
    proto_files = [str(path) for path in io_layer.list_files(service_dir, PROTO_EXTENSION)]

    plan = DispatchPlan(
        tag=tag,
        output_dir=config.output_dir,
        proto_files=proto_files,
        compile_commands=[build_compile_command(config, tag, f) for f in proto_files],
        archive_command=build_archive_command(config, tag),
        artifact_path=str(config.root / tag.artifact_name),
        dry_run=config.dry_run,
        keep_output=config.keep_output,
    )

    if plan.has_sources():
        logger.info(f"Found {len(proto_files)} {PROTO_EXTENSION} file(s) in {service_dir}")
    else:
        logger.warning(f"No {PROTO_EXTENSION} files found in {service_dir}")

    return plan
