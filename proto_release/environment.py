"""
Environment Configuration Module

Builds the immutable run configuration from command line options,
environment variables and the optional YAML settings file.
The configuration is constructed once at startup and then passed
explicitly to the validator and the dispatcher.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple
import logging

import yaml

from .config import (
    ALLOWED_CATEGORIES,
    DEBUG_CATEGORY,
    INCLUDE_DIR,
    JAR_BIN,
    OUTPUT_DIR,
    PROTO_ROOT,
    PROTOC_BIN,
    SETTINGS_FILE,
    SETTINGS_KEYS,
)
from .exceptions import SettingsError

logger = logging.getLogger(__name__)


def load_settings(path: Path) -> Dict[str, Any]:
    """Read the YAML settings file.

    Args:
        path: Path to the settings file

    Returns:
        Dictionary with the settings, empty if the file doesn't exist

    Raises:
        SettingsError: If the file is not valid YAML or not a mapping
    """
    if not path.exists():
        return {}

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SettingsError(f"Failed to parse settings file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {path} must contain a mapping")
    return data


@dataclass(frozen=True)
class BuildConfig:
    """Configuration for a single run."""

    root: Path
    debug: bool = False
    verbose: bool = False
    color: bool = True
    dry_run: bool = False
    keep_output: bool = False
    categories: Tuple[str, ...] = tuple(ALLOWED_CATEGORIES)
    debug_category: str = DEBUG_CATEGORY
    proto_root: str = PROTO_ROOT
    include_dir: str = INCLUDE_DIR
    output_dir: str = OUTPUT_DIR
    protoc: str = PROTOC_BIN
    jar: str = JAR_BIN
    settings_errors: Tuple[str, ...] = field(default=(), repr=False)

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str],
        root: str = ".",
        debug: bool = False,
        verbose: bool = False,
        no_color: bool = False,
        stderr_is_tty: bool = True,
        dry_run: bool = False,
        keep_output: bool = False,
    ) -> "BuildConfig":
        """Create configuration from environment variables and CLI options.

        Precedence, lowest first: built-in constants, settings file,
        environment variables.

        Args:
            env: Dictionary of environment variables (typically os.environ)
            root: Project root holding the proto tree
            debug: Allow the debug-only category
            verbose: Echo external commands
            no_color: Disable colored diagnostics
            stderr_is_tty: Whether the diagnostic stream is a terminal
            dry_run: Log commands instead of running them
            keep_output: Keep generated output after a failure

        Returns:
            BuildConfig instance

        Raises:
            SettingsError: If the settings file cannot be parsed
        """
        root_path = Path(root).resolve()
        settings_path = Path(env.get("PROTO_RELEASE_CONFIG", "") or root_path / SETTINGS_FILE)
        settings = load_settings(settings_path)
        if settings:
            logger.debug("Loaded settings from %s", settings_path)

        errors = [
            f"Unknown setting '{key}' in {settings_path.name}"
            for key in sorted(set(settings) - SETTINGS_KEYS)
        ]

        categories = settings.get("categories", ALLOWED_CATEGORIES)
        if not isinstance(categories, list) or not all(isinstance(c, str) for c in categories):
            errors.append("Setting 'categories' must be a list of strings")
            categories = ALLOWED_CATEGORIES

        color = (
            not no_color
            and stderr_is_tty
            and not env.get("NO_COLOR")
            and env.get("TERM") != "dumb"
        )

        return cls(
            root=root_path,
            debug=debug,
            verbose=verbose,
            color=color,
            dry_run=dry_run,
            keep_output=keep_output,
            categories=tuple(categories),
            debug_category=str(settings.get("debug_category", DEBUG_CATEGORY)),
            proto_root=str(settings.get("proto_root", PROTO_ROOT)),
            include_dir=str(settings.get("include_dir", INCLUDE_DIR)),
            output_dir=str(settings.get("output_dir", OUTPUT_DIR)),
            protoc=env.get("PROTOC_BIN") or str(settings.get("protoc", PROTOC_BIN)),
            jar=env.get("JAR_BIN") or str(settings.get("jar", JAR_BIN)),
            settings_errors=tuple(errors),
        )

    @property
    def proto_root_path(self) -> Path:
        return self.root / self.proto_root

    def allowed_categories(self) -> List[str]:
        """Categories accepted for this run."""
        categories = list(self.categories)
        if self.debug and self.debug_category not in categories:
            categories.append(self.debug_category)
        return categories

    def validate(self) -> List[str]:
        """Validate the configuration.

        Returns:
            List of error messages (empty if valid)
        """
        errors = list(self.settings_errors)

        if not self.root.is_dir():
            errors.append(f"Project root {self.root} is not a directory")

        if not self.protoc:
            errors.append("Schema compiler executable must not be empty")

        if not self.jar:
            errors.append("Archiver executable must not be empty")

        if Path(self.output_dir).is_absolute() or ".." in Path(self.output_dir).parts:
            errors.append(f"Output directory '{self.output_dir}' must stay inside the project root")

        return errors
