"""
Configuration Module for Proto Release

This module contains the constants that define the release tag grammar and
the repository layout the tool works against.

Constants:
    ALLOWED_CATEGORIES: Category names accepted in categorized tags
    DEBUG_CATEGORY: Extra category accepted only when debug mode is on
    RELEASE_MARKER: Literal expected right before the version in a tag
    TAG_DELIMITER: Separator between tag fields
    SEMVER_PATTERN: Semantic version grammar the version field must match
    PROTO_ROOT: Directory holding one sub-directory per service
    INCLUDE_DIR: Shared include path handed to the schema compiler
    OUTPUT_DIR: Directory receiving the generated sources
    PROTO_EXTENSION: Extension of the interface definition files
    ARTIFACT_INFIX: Fixed word placed between service and version in artifact names
    ARTIFACT_EXTENSION: Extension of the packaged artifact
    PROTOC_BIN / JAR_BIN: Default executables for compiler and archiver
    SETTINGS_FILE: Optional YAML settings file looked up in the project root
"""

import re

ALLOWED_CATEGORIES = ["product", "platform", "shared"]
DEBUG_CATEGORY = "sandbox"

RELEASE_MARKER = "release"
TAG_DELIMITER = "/"

SEMVER_PATTERN = re.compile(
    r"^(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)"
    r"(-[0-9A-Za-z-]+(\.[0-9A-Za-z-]+)*)?"
    r"(\+[0-9A-Za-z-]+(\.[0-9A-Za-z-]+)*)?$"
)

PROTO_ROOT = "proto"
INCLUDE_DIR = "proto/include"
OUTPUT_DIR = "dist/generated"
PROTO_EXTENSION = ".proto"

ARTIFACT_INFIX = "events"
ARTIFACT_EXTENSION = "jar"

PROTOC_BIN = "protoc"
JAR_BIN = "jar"

SETTINGS_FILE = "proto-release.yaml"

# Path segments that never name a service directory
RESERVED_PATH_PARTS = {".", ".."}

# Keys accepted in the YAML settings file
SETTINGS_KEYS = {
    "categories",
    "debug_category",
    "proto_root",
    "include_dir",
    "output_dir",
    "protoc",
    "jar",
}

ERROR_MARKER = "💀 - "
