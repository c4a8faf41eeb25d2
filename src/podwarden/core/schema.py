#!/usr/bin/env python3
"""
PODWARDEN SCHEMA - The Rulebook
-------------------------------
Fixed constants of the Pod descriptor schema: required keys per level,
allowed enumerations, and the compiled format patterns shared by every
validator. Patterns are compiled once at import time.

Author: PodWarden Team
Date: 2026-10-18
"""

import re

# --- Required keys, in the order they are checked ---
TOP_LEVEL_REQUIRED = ("apiVersion", "kind", "metadata", "spec")
CONTAINER_REQUIRED = ("name", "image", "resources")
PROBE_REQUIRED = ("httpGet",)
HTTP_GET_REQUIRED = ("path", "port")

# Probe keys a container may carry
PROBE_FIELDS = ("readinessProbe", "livenessProbe")

# Resource maps, in the order they are checked
RESOURCE_MAPS = ("requests", "limits")

# --- Enumerations ---
API_VERSION = "v1"
KIND = "Pod"
OS_NAMES = frozenset({"linux", "windows"})       # compared lower-cased
PROTOCOLS = frozenset({"TCP", "UDP"})            # compared upper-cased

# --- Formats ---
NAME_PATTERN = re.compile(r"^[a-z]+(_[a-z]+)*$")
IMAGE_PATTERN = re.compile(r"^registry\.bigbrother\.io/[^:]+:.+$")
MEMORY_PATTERN = re.compile(r"^[0-9]+(Gi|Mi|Ki)$")
INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")

PORT_MIN = 1
PORT_MAX = 65535
