#!/usr/bin/env python3
"""
PODWARDEN CONTAINER RULES
-------------------------
Validation of `spec.containers` and everything nested beneath it:
names, images, ports, HTTP probes and resource requests/limits.

Every method receives the field path of the node it checks so that
messages always name the exact offending element.

Author: PodWarden Team
Date: 2026-10-18
"""

from typing import Dict, List

from podwarden.core import schema
from podwarden.core.models import Node, NodeKind, ValidationError
from podwarden.core.nodes import child_by_key, expect_kind, is_blank, parse_int, require


class ContainerValidator:
    """Rules for the container list and its per-container fields."""

    def validate_containers(self, containers: Node, path: str, errors: List[ValidationError]):
        """
        Checks the container list, each container in it, and name uniqueness.
        An empty list is reported but does not stop the walk.
        """
        if not expect_kind(containers, NodeKind.SEQUENCE, path, errors):
            return

        if not containers.items:
            errors.append(ValidationError(
                containers.line, path, f"{path} must contain at least one container"
            ))

        first_seen: Dict[str, int] = {}
        for index, item in enumerate(containers.items):
            item_path = f"{path}[{index}]"
            if item.kind is not NodeKind.MAPPING:
                errors.append(ValidationError(item.line, item_path, f"{item_path} must be mapping"))
                continue

            self.validate_container(item, item_path, errors)

            name = child_by_key(item, "name")
            if name is None or name.kind is not NodeKind.SCALAR or is_blank(name):
                continue
            if name.value in first_seen:
                errors.append(ValidationError(
                    name.line,
                    f"{item_path}.name",
                    f"duplicate container name '{name.value}', "
                    f"first used at index {first_seen[name.value]}",
                ))
            else:
                first_seen[name.value] = index

    def validate_container(self, container: Node, path: str, errors: List[ValidationError]):
        """Unknown keys are accepted silently."""
        if not expect_kind(container, NodeKind.MAPPING, path, errors):
            return

        name = require(container, "name", f"{path}.name", errors)
        if name is not None:
            self._validate_name(name, f"{path}.name", errors)

        image = require(container, "image", f"{path}.image", errors)
        if image is not None:
            self._validate_image(image, f"{path}.image", errors)

        ports = child_by_key(container, "ports")
        if ports is not None:
            self.validate_ports(ports, f"{path}.ports", errors)

        for probe_field in schema.PROBE_FIELDS:
            probe = child_by_key(container, probe_field)
            if probe is not None:
                self.validate_probe(probe, f"{path}.{probe_field}", errors)

        resources = require(container, "resources", f"{path}.resources", errors)
        if resources is not None:
            self.validate_resources(resources, f"{path}.resources", errors)

    def _validate_name(self, name: Node, field: str, errors: List[ValidationError]):
        if not expect_kind(name, NodeKind.SCALAR, field, errors):
            return
        if is_blank(name):
            errors.append(ValidationError(name.line, "name", "name is required"))
        elif not schema.NAME_PATTERN.fullmatch(name.value):
            errors.append(ValidationError(
                name.line, field, f"{field} has invalid format '{name.value}'"
            ))

    def _validate_image(self, image: Node, field: str, errors: List[ValidationError]):
        if not expect_kind(image, NodeKind.SCALAR, field, errors):
            return
        if not schema.IMAGE_PATTERN.fullmatch(image.value):
            errors.append(ValidationError(
                image.line, field, f"{field} has invalid format '{image.value}'"
            ))

    # --- Ports ---

    def validate_ports(self, ports: Node, path: str, errors: List[ValidationError]):
        if not expect_kind(ports, NodeKind.SEQUENCE, path, errors):
            return

        for index, port in enumerate(ports.items):
            port_path = f"{path}[{index}]"
            if port.kind is not NodeKind.MAPPING:
                errors.append(ValidationError(port.line, port_path, f"{port_path} must be mapping"))
                continue

            container_port = require(port, "containerPort", f"{port_path}.containerPort", errors)
            if container_port is not None:
                self._validate_port_number(container_port, f"{port_path}.containerPort", errors)

            protocol = child_by_key(port, "protocol")
            if protocol is not None and expect_kind(protocol, NodeKind.SCALAR, f"{port_path}.protocol", errors):
                if protocol.value.upper() not in schema.PROTOCOLS:
                    errors.append(ValidationError(
                        protocol.line,
                        f"{port_path}.protocol",
                        f"{port_path}.protocol has unsupported value '{protocol.value}'",
                    ))

    def _validate_port_number(self, node: Node, field: str, errors: List[ValidationError]):
        """Shared by containerPort and httpGet.port."""
        value = parse_int(node)
        if value is None:
            errors.append(ValidationError(node.line, field, f"{field} must be integer"))
        elif not schema.PORT_MIN <= value <= schema.PORT_MAX:
            errors.append(ValidationError(node.line, field, f"{field} value out of range"))

    # --- Probes ---

    def validate_probe(self, probe: Node, path: str, errors: List[ValidationError]):
        """readinessProbe and livenessProbe share these rules."""
        if not expect_kind(probe, NodeKind.MAPPING, path, errors):
            return

        http_get = require(probe, "httpGet", f"{path}.httpGet", errors)
        if http_get is None or not expect_kind(http_get, NodeKind.MAPPING, f"{path}.httpGet", errors):
            return

        http_path = require(http_get, "path", f"{path}.httpGet.path", errors)
        if http_path is not None and expect_kind(http_path, NodeKind.SCALAR, f"{path}.httpGet.path", errors):
            if not http_path.value.startswith("/"):
                errors.append(ValidationError(
                    http_path.line,
                    f"{path}.httpGet.path",
                    f"{path}.httpGet.path has invalid format '{http_path.value}'",
                ))

        port = require(http_get, "port", f"{path}.httpGet.port", errors)
        if port is not None:
            self._validate_port_number(port, f"{path}.httpGet.port", errors)

    # --- Resources ---

    def validate_resources(self, resources: Node, path: str, errors: List[ValidationError]):
        if not expect_kind(resources, NodeKind.MAPPING, path, errors):
            return

        present = [key for key in schema.RESOURCE_MAPS if child_by_key(resources, key) is not None]
        if not present:
            errors.append(ValidationError(
                resources.line,
                path,
                f"{path} must contain at least one of: {', '.join(schema.RESOURCE_MAPS)}",
            ))
            return

        for key in present:
            self._validate_resource_map(child_by_key(resources, key), f"{path}.{key}", errors)

    def _validate_resource_map(self, resource_map: Node, path: str, errors: List[ValidationError]):
        """
        Only cpu and memory are recognised inside requests/limits.
        Keys are checked in document order; a repeated cpu or memory is skipped.
        """
        if not expect_kind(resource_map, NodeKind.MAPPING, path, errors):
            return

        seen = set()
        for key_node, value in resource_map.pairs:
            key = key_node.value if key_node.kind is NodeKind.SCALAR else ""
            if key in seen:
                continue
            if key == "cpu":
                seen.add(key)
                if not value.is_integer:
                    errors.append(ValidationError(value.line, f"{path}.cpu", f"{path}.cpu must be integer"))
            elif key == "memory":
                seen.add(key)
                if expect_kind(value, NodeKind.SCALAR, f"{path}.memory", errors) and \
                        not schema.MEMORY_PATTERN.fullmatch(value.value):
                    errors.append(ValidationError(
                        value.line, f"{path}.memory", f"{path}.memory has invalid format '{value.value}'"
                    ))
            else:
                errors.append(ValidationError(
                    key_node.line, f"{path}.{key}", f"{path}.{key} has unsupported value '{key}'"
                ))
