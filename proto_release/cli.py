#!/usr/bin/env python3

"""
Release Packaging Script for Protobuf Services

Validates a release tag, compiles the tagged service's interface
definitions and packages the generated sources into a jar.

Two entry points share the same pipeline:
    proto-release       <category>/<service>/release/<version>
    proto-release-flat  <service>/release/<version>
"""

import argparse
import logging
import os
import signal
import sys
from typing import List, NoReturn, Optional

from .environment import BuildConfig
from .exceptions import GitTagError, SettingsError
from .io_layer import IOLayer
from .models import TagShape
from .plan_builder import build_dispatch_plan
from .plan_executor import execute_plan
from .tag_validation import validate_tag
from .utils import format_error, get_palette, print_error, setup_logging

logger = logging.getLogger(__name__)


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit status 1."""

    def error(self, message: str) -> NoReturn:
        print_error(message)
        sys.exit(1)


def build_parser(shape: TagShape) -> ArgumentParser:
    """Create the argument parser for the given tag shape."""
    prog = "proto-release" if shape is TagShape.CATEGORIZED else "proto-release-flat"
    parser = ArgumentParser(
        prog=prog,
        description=f"Validate a release tag ({shape.template}) and package its generated sources.",
        allow_abbrev=False,
    )
    parser.add_argument("tag", nargs="?", help=f"Release tag, {shape.template}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Echo external commands")
    parser.add_argument("--no-color", action="store_true", help="Disable colored diagnostics")
    if shape is TagShape.CATEGORIZED:
        parser.add_argument(
            "-d", "--debug", action="store_true", help="Also allow the debug-only category"
        )
    parser.add_argument("--dry-run", action="store_true", help="Log commands instead of running them")
    parser.add_argument(
        "--keep-output", action="store_true", help="Keep partial output when a tool fails"
    )
    parser.add_argument(
        "--from-git", action="store_true", help="Use the git tag pointing at HEAD"
    )
    parser.add_argument("--root", default=".", help="Project root (default: current directory)")
    return parser


def parse_args(argv: Optional[List[str]], shape: TagShape) -> argparse.Namespace:
    """Parse command line arguments, rejecting unknown options and extra arguments."""
    parser = build_parser(shape)
    args, extras = parser.parse_known_args(argv)

    for extra in extras:
        if extra.startswith("-"):
            parser.error(f"Unknown option: {extra}")
    if extras:
        parser.error(f"Too many arguments: {' '.join(extras)}")

    if args.from_git and args.tag:
        parser.error("Pass either a tag or --from-git, not both")
    if not args.from_git and not args.tag:
        parser.error("Missing script arguments")

    return args


def _raise_interrupt(signum, frame):
    raise KeyboardInterrupt


def _cleanup() -> None:
    """Cleanup hook run when the process is interrupted."""
    logger.debug("Interrupted, nothing to clean up")


def run(argv: Optional[List[str]], shape: TagShape) -> int:
    """Run the full validate-compile-package pipeline.

    Args:
        argv: Command line arguments without the program name
        shape: Tag layout served by the calling entry point

    Returns:
        Process exit status
    """
    args = parse_args(argv, shape)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    previous_sigterm = signal.signal(signal.SIGTERM, _raise_interrupt)

    try:
        # Step 1: Build configuration
        try:
            config = BuildConfig.from_env(
                os.environ,
                root=args.root,
                debug=getattr(args, "debug", False),
                verbose=args.verbose,
                no_color=args.no_color,
                stderr_is_tty=sys.stderr.isatty(),
                dry_run=args.dry_run,
                keep_output=args.keep_output,
            )
        except SettingsError as e:
            print_error(str(e))
            return 1

        errors = config.validate()
        if errors:
            for error in errors:
                print_error(error)
            return 1

        palette = get_palette(config.color)
        io_layer = IOLayer(config.root, dry_run=config.dry_run, verbose=config.verbose)

        # Step 2: Resolve the tag
        raw_tag = args.tag
        if args.from_git:
            try:
                raw_tag = io_layer.resolve_head_tag()
            except GitTagError as e:
                print_error(str(e))
                return 1
            logger.info(f"Using tag from git: {raw_tag}")

        # Step 3: Validate
        validation = validate_tag(raw_tag, shape, config)
        if not validation.ok:
            print_error(format_error(validation.error, palette))
            return 1

        tag = validation.tag
        print(f"Packaging {tag.service_path} version {tag.version}")
        if config.dry_run:
            print("Dry run: True")

        # Step 4: Plan and execute
        plan = build_dispatch_plan(tag, config, io_layer)
        result = execute_plan(plan, io_layer)

        if not result.success:
            for error in result.errors:
                print_error(error)
            return 1

        if result.dry_run:
            print(f"Would create {tag.artifact_name}")
        else:
            stdout_palette = get_palette(config.color and sys.stdout.isatty())
            print(f"{stdout_palette.green}Created {result.artifact_path}{stdout_palette.reset}")
        return 0

    except KeyboardInterrupt:
        _cleanup()
        print_error("Interrupted")
        return 130
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        return 1
    finally:
        signal.signal(signal.SIGTERM, previous_sigterm)


def main(argv: Optional[List[str]] = None):
    """Entry point for `<category>/<service>/release/<version>` tags."""
    sys.exit(run(argv, TagShape.CATEGORIZED))


def main_flat(argv: Optional[List[str]] = None):
    """Entry point for `<service>/release/<version>` tags."""
    sys.exit(run(argv, TagShape.FLAT))


if __name__ == "__main__":
    main()
