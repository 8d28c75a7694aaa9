"""Data models for validation and dispatch."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from .config import ARTIFACT_EXTENSION, ARTIFACT_INFIX


class TagShape(Enum):
    """Supported tag layouts, valued by their field count."""
    CATEGORIZED = 4  # <category>/<service>/release/<version>
    FLAT = 3         # <service>/release/<version>

    @property
    def arity(self) -> int:
        return self.value

    @property
    def template(self) -> str:
        if self is TagShape.CATEGORIZED:
            return "[category]/[service-name]/release/[version]"
        return "[service-name]/release/[version]"


class ErrorKind(Enum):
    """Kinds of errors that abort a run."""
    INVALID_FORMAT = "InvalidFormat"
    UNKNOWN_SERVICE = "UnknownService"
    INVALID_CATEGORY = "InvalidCategory"
    INVALID_MARKER = "InvalidMarker"
    INVALID_VERSION = "InvalidVersion"
    EXTERNAL_TOOL_FAILURE = "ExternalToolFailure"


@dataclass(frozen=True)
class CategorizedTag:
    """A validated `<category>/<service>/release/<version>` tag."""
    category: str
    service_name: str
    version: str

    @property
    def service_path(self) -> str:
        return f"{self.category}/{self.service_name}"

    @property
    def artifact_name(self) -> str:
        return (
            f"{self.category}-{self.service_name}-{ARTIFACT_INFIX}-"
            f"{self.version}.{ARTIFACT_EXTENSION}"
        )


@dataclass(frozen=True)
class FlatTag:
    """A validated `<service>/release/<version>` tag."""
    service_name: str
    version: str

    @property
    def service_path(self) -> str:
        return self.service_name

    @property
    def artifact_name(self) -> str:
        return f"{self.service_name}-{ARTIFACT_INFIX}-{self.version}.{ARTIFACT_EXTENSION}"


Tag = Union[CategorizedTag, FlatTag]


@dataclass(frozen=True)
class TagError:
    """A single validation failure."""
    kind: ErrorKind
    message: str
    value: str = ""


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a tag: either a tag or an error."""
    tag: Optional[Tag] = None
    error: Optional[TagError] = None

    @property
    def ok(self) -> bool:
        return self.tag is not None and self.error is None


@dataclass(frozen=True)
class ToolCommand:
    """One invocation of an external tool."""
    tool: str
    args: List[str] = field(default_factory=list)

    @property
    def argv(self) -> List[str]:
        return [self.tool, *self.args]


@dataclass
class DispatchPlan:
    """Everything needed to compile and package a validated tag."""
    tag: Tag
    output_dir: str
    proto_files: List[str] = field(default_factory=list)
    compile_commands: List[ToolCommand] = field(default_factory=list)
    archive_command: Optional[ToolCommand] = None
    artifact_path: str = ""
    dry_run: bool = False
    keep_output: bool = False

    def has_sources(self) -> bool:
        """Check if any interface definition file was found."""
        return bool(self.proto_files)


@dataclass
class DispatchResult:
    """Result of executing a dispatch plan."""
    success: bool
    artifact_path: Optional[str] = None
    errors: List[str] = field(default_factory=list)
    commands_run: List[List[str]] = field(default_factory=list)
    created_dir: Optional[str] = None
    cleaned_up: bool = False
    dry_run: bool = False

    @property
    def created_output_dir(self) -> bool:
        """Whether this run created any part of the output directory."""
        return self.created_dir is not None
