#!/usr/bin/env python3
"""
PODWARDEN CORE MODELS
---------------------
Defines the fundamental data structures used across the PodWarden engine.
A manifest is held as an immutable tree of Nodes; every rule violation
found while walking it is recorded as a ValidationError.

Author: PodWarden Team
Date: 2026-10-18
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

# Resolved tag the YAML resolver assigns to plain integer literals
INT_TAG = "tag:yaml.org,2002:int"


class NodeKind(Enum):
    SCALAR = "scalar"
    MAPPING = "mapping"
    SEQUENCE = "sequence"


@dataclass(frozen=True)
class Node:
    """
    A position in the parsed manifest tree.

    Scalars carry `value` and `tag`; mappings carry ordered `pairs` of
    (key, value) nodes; sequences carry ordered `items`.
    """
    kind: NodeKind
    line: int                               # 1-based source line, 0 when unknown
    value: Optional[str] = None             # Scalar text, None for collections
    tag: Optional[str] = None               # Resolved YAML tag (e.g. tag:yaml.org,2002:int)
    pairs: Tuple[Tuple["Node", "Node"], ...] = ()
    items: Tuple["Node", ...] = ()

    @property
    def is_scalar(self) -> bool:
        return self.kind is NodeKind.SCALAR

    @property
    def is_mapping(self) -> bool:
        return self.kind is NodeKind.MAPPING

    @property
    def is_sequence(self) -> bool:
        return self.kind is NodeKind.SEQUENCE

    @property
    def is_integer(self) -> bool:
        """True only for an unquoted integer literal, never for '"500"'."""
        return self.kind is NodeKind.SCALAR and self.tag == INT_TAG


@dataclass(frozen=True)
class ValidationError:
    """
    A single schema violation.

    `field` is the dotted/bracketed address of the offending value
    (e.g. spec.containers[0].image); `line` is 0 when no position applies.
    """
    line: int
    field: str
    message: str


@dataclass
class AuditReport:
    """Outcome of auditing one manifest file."""
    file_path: str
    status: str                                         # VALID, INVALID, READ_ERROR, PARSE_ERROR
    errors: List[ValidationError] = field(default_factory=list)
    fatal_error: Optional[str] = None                   # Read/parse failure reason
    fatal_line: Optional[int] = None                    # Parser position of a parse failure, if known

    @property
    def success(self) -> bool:
        return self.fatal_error is None and not self.errors
