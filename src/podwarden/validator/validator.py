#!/usr/bin/env python3
"""
PODWARDEN VALIDATOR - The Judge
-------------------------------
Walks a composed manifest tree against the fixed Pod schema and collects
every violation it finds. Sibling fields are always checked independently;
a branch is only abandoned when its own node has the wrong shape.

Author: PodWarden Team
Date: 2026-10-18
"""

import logging
from typing import List, Optional

from podwarden.core import schema
from podwarden.core.models import Node, NodeKind, ValidationError
from podwarden.core.nodes import child_by_key, expect_kind, is_blank, node_line, require
from podwarden.validator.containers import ContainerValidator

logger = logging.getLogger("podwarden.validator")


class PodValidator:
    """
    Enforces the Pod descriptor schema on a parsed document.
    Errors are returned in discovery order, never raised.
    """

    def __init__(self, containers: Optional[ContainerValidator] = None):
        self.containers = containers or ContainerValidator()

    def validate(self, root: Optional[Node]) -> List[ValidationError]:
        """
        The primary entry point. Returns all violations for the document.
        """
        errors: List[ValidationError] = []

        # --- TERMINAL: the document must be a mapping ---
        if root is None or root.kind is not NodeKind.MAPPING:
            errors.append(ValidationError(node_line(root), "root", "root must be a mapping"))
            return errors

        api_version = require(root, "apiVersion", "apiVersion", errors)
        if api_version is not None:
            self._validate_literal(api_version, "apiVersion", schema.API_VERSION, errors)

        kind = require(root, "kind", "kind", errors)
        if kind is not None:
            self._validate_literal(kind, "kind", schema.KIND, errors)

        metadata = require(root, "metadata", "metadata", errors)
        if metadata is not None:
            self._validate_metadata(metadata, errors)

        spec = require(root, "spec", "spec", errors)
        if spec is not None:
            self._validate_spec(spec, errors)

        logger.debug(f"Validation walk finished with {len(errors)} error(s).")
        return errors

    def _validate_literal(self, node: Node, field: str, allowed: str, errors: List[ValidationError]):
        """apiVersion and kind: a string equal to exactly one literal."""
        if not expect_kind(node, NodeKind.SCALAR, field, errors):
            return
        if node.value != allowed:
            errors.append(ValidationError(
                node.line, field, f"{field} has unsupported value '{node.value}'"
            ))

    def _validate_metadata(self, metadata: Node, errors: List[ValidationError]):
        if not expect_kind(metadata, NodeKind.MAPPING, "metadata", errors):
            return

        name = require(metadata, "name", "metadata.name", errors)
        if name is not None and expect_kind(name, NodeKind.SCALAR, "metadata.name", errors):
            if is_blank(name):
                errors.append(ValidationError(name.line, "name", "name is required"))

        namespace = child_by_key(metadata, "namespace")
        if namespace is not None:
            expect_kind(namespace, NodeKind.SCALAR, "metadata.namespace", errors)

        labels = child_by_key(metadata, "labels")
        if labels is not None and expect_kind(labels, NodeKind.MAPPING, "metadata.labels", errors):
            for _, value in labels.pairs:
                if value.kind is not NodeKind.SCALAR:
                    # One error for the whole map, at the first bad value
                    errors.append(ValidationError(
                        value.line, "metadata.labels", "metadata.labels has invalid format ''"
                    ))
                    break

    def _validate_spec(self, spec: Node, errors: List[ValidationError]):
        if not expect_kind(spec, NodeKind.MAPPING, "spec", errors):
            return

        containers = require(spec, "containers", "spec.containers", errors)
        if containers is not None:
            self.containers.validate_containers(containers, "spec.containers", errors)

        os_node = child_by_key(spec, "os")
        if os_node is not None:
            self._validate_os(os_node, errors)

    def _validate_os(self, os_node: Node, errors: List[ValidationError]):
        """
        `os` is either a bare name or a mapping with a `name` key.
        Names compare case-insensitively but are echoed as written.
        """
        if os_node.kind is NodeKind.SCALAR:
            self._validate_os_name(os_node, "spec.os", errors)
        elif os_node.kind is NodeKind.MAPPING:
            name = require(os_node, "name", "spec.os.name", errors)
            if name is not None and expect_kind(name, NodeKind.SCALAR, "spec.os.name", errors):
                self._validate_os_name(name, "spec.os.name", errors)
        else:
            errors.append(ValidationError(os_node.line, "spec.os", "spec.os must be object"))

    def _validate_os_name(self, node: Node, field: str, errors: List[ValidationError]):
        """Both shapes report against `spec.os` in the message."""
        if node.value.lower() not in schema.OS_NAMES:
            errors.append(ValidationError(
                node.line, field, f"spec.os has unsupported value '{node.value}'"
            ))
