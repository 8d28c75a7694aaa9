"""Test suite for Proto Release.

This package contains test modules and fixtures for verifying the functionality
of the Proto Release tool. It includes tests for:
- Tag parsing and validation
- Configuration handling
- Dispatch planning and execution
- The command line entry points

The test suite uses pytest and provides fixtures for common test scenarios.
"""
