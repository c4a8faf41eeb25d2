#!/usr/bin/env python3
"""
PODWARDEN EXCEPTIONS
--------------------
Fatal failures that stop a manifest from being validated at all.
Schema violations are never raised; they are collected as ValidationError
values by the validators.

Author: PodWarden Team
Date: 2026-10-18
"""

from typing import Optional


class PodWardenError(Exception):
    """Base exception for PodWarden errors."""
    pass


class ManifestReadError(PodWardenError):
    """Raised when the manifest file cannot be read or decoded."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class ManifestParseError(PodWardenError):
    """Raised when the manifest is not well-formed YAML."""

    def __init__(self, problem: str, line: Optional[int] = None):
        super().__init__(problem if line is None else f"line {line}: {problem}")
        self.problem = problem
        self.line = line
