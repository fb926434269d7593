#!/usr/bin/env python3

"""
Custom exceptions for the GFF coordinate remapper.

Provides specific exception types for configuration, parsing and resource
failures. Per-feature classification outcomes are not errors and are never
raised.
"""

class RemapError(Exception):
    """Base exception for all remapper errors."""
    pass


class ConfigurationError(RemapError):
    """Fatal error in the remapper configuration or its inputs."""
    pass


class RecordParseError(RemapError):
    """A single AGP or GFF3 row could not be parsed."""

    def __init__(self, message: str, filename: str = "", line_number: int = 0):
        super().__init__(message)
        self.filename = filename
        self.line_number = line_number

    def __str__(self):
        if self.filename and self.line_number:
            return f"Parse error in {self.filename} at line {self.line_number}: {super().__str__()}"
        elif self.line_number:
            return f"Parse error at line {self.line_number}: {super().__str__()}"
        elif self.filename:
            return f"Parse error in {self.filename}: {super().__str__()}"
        return super().__str__()


class MemoryLimitError(RemapError):
    """Memory usage exceeded the configured limit."""

    def __init__(self, message: str, current_usage: float, limit: float):
        super().__init__(message)
        self.current_usage = current_usage
        self.limit = limit

    def __str__(self):
        return f"Memory error: {super().__str__()} (current: {self.current_usage:.1f}MB, limit: {self.limit:.1f}MB)"
