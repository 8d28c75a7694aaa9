"""Release tag validation and protobuf packaging for CI pipelines."""

__version__ = "0.1.0"
