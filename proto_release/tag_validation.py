"""
Tag Validation Module

Parses release tags into named fields and validates them.
Apart from checking that the service directory exists, this module has no
side effects - errors are returned as values, never raised.
"""

from typing import List

from .config import RELEASE_MARKER, RESERVED_PATH_PARTS, SEMVER_PATTERN, TAG_DELIMITER
from .environment import BuildConfig
from .models import (
    CategorizedTag,
    ErrorKind,
    FlatTag,
    Tag,
    TagError,
    TagShape,
    ValidationResult,
)


def split_tag(raw: str) -> List[str]:
    """Split a raw tag into its fields."""
    return raw.split(TAG_DELIMITER)


def is_valid_version(version: str) -> bool:
    """
    Check a version string against the semantic version grammar.

    Args:
        version: Version field of a tag, e.g. "1.2.3-rc.1"

    Returns:
        True if the version is a valid semantic version
    """
    return SEMVER_PATTERN.match(version) is not None


def _escape(text: str) -> str:
    """Escape braces so `{value}` stays the only placeholder in a message."""
    return text.replace("{", "{{").replace("}", "}}")


def _failure(kind: ErrorKind, message: str, value: str) -> ValidationResult:
    return ValidationResult(error=TagError(kind=kind, message=message, value=value))


def validate_tag(raw: str, shape: TagShape, config: BuildConfig) -> ValidationResult:
    """
    Parse and validate a release tag.

    Checks run in a fixed order and the first failure wins:
    field count, service directory, category (categorized tags only),
    release marker, version.

    Args:
        raw: The tag string, e.g. "product/my-service/release/1.2.3"
        shape: Expected tag layout
        config: Run configuration (proto root, categories, debug flag)

    Returns:
        ValidationResult holding either the parsed tag or the first error
    """
    fields = split_tag(raw)

    if len(fields) != shape.arity:
        return _failure(
            ErrorKind.INVALID_FORMAT,
            f"The tag {{value}} has an invalid format. Expected {shape.template}.",
            raw,
        )

    if shape is TagShape.CATEGORIZED:
        category, service, marker, version = fields
        tag: Tag = CategorizedTag(category=category, service_name=service, version=version)
    else:
        service, marker, version = fields
        category = None
        tag = FlatTag(service_name=service, version=version)

    service_parts = tag.service_path.split(TAG_DELIMITER)
    if (
        not all(service_parts)
        or any(part in RESERVED_PATH_PARTS for part in service_parts)
        or not config.proto_root_path.joinpath(*service_parts).is_dir()
    ):
        return _failure(
            ErrorKind.UNKNOWN_SERVICE,
            "no service found with name: {value}",
            tag.service_path,
        )

    if category is not None and category not in config.allowed_categories():
        return _failure(
            ErrorKind.INVALID_CATEGORY,
            f"The category {{value}} is not allowed. Expected one of: "
            f"{_escape(', '.join(config.allowed_categories()))}",
            category,
        )

    if marker != RELEASE_MARKER:
        return _failure(
            ErrorKind.INVALID_MARKER,
            f"The tag {{value}} is invalid. Expected '{RELEASE_MARKER}' between service and version!",
            raw,
        )

    if not is_valid_version(version):
        return _failure(
            ErrorKind.INVALID_VERSION,
            "The version {value} specified in the tag is not valid!",
            version,
        )

    return ValidationResult(tag=tag)
