#!/usr/bin/env python3
"""
PODWARDEN LOADER - The Cartographer
-----------------------------------
Composes raw YAML text into ruamel.yaml's node graph and converts it into
PodWarden's immutable Node tree. Only the composer stage runs: values are
never constructed into Python objects, so every scalar keeps its source
text, its line and the tag the resolver gave it.

Author: PodWarden Team
Date: 2026-10-18
"""

import logging
from typing import Dict, Optional, Set

from ruamel.yaml import YAML, YAMLError
from ruamel.yaml.nodes import MappingNode, ScalarNode, SequenceNode

from podwarden.core.exceptions import ManifestParseError
from podwarden.core.models import Node, NodeKind

logger = logging.getLogger("podwarden.loader")


class ManifestLoader:
    """
    Turns manifest text into a single root Node.
    Multi-document streams are rejected by the composer.
    """

    def __init__(self):
        self.yaml = YAML(typ="rt")

    def load(self, text: str) -> Optional[Node]:
        """
        Parses `text` and returns the root Node, or None for an empty document.

        Raises:
            ManifestParseError: If the text is not well-formed YAML.
        """
        try:
            raw_root = self.yaml.compose(text)
            if raw_root is None:
                logger.debug("Document is empty; no root node composed.")
                return None

            # Aliases point at an already composed node; convert it once
            memo: Dict[int, Node] = {}
            return self._convert(raw_root, memo, set())
        except YAMLError as exc:
            raise self._parse_error(exc) from exc
        except RecursionError as exc:
            raise ManifestParseError("document is nested too deeply") from exc

    def _convert(self, raw, memo: Dict[int, Node], active: Set[int]) -> Node:
        cached = memo.get(id(raw))
        if cached is not None:
            return cached

        line = raw.start_mark.line + 1 if raw.start_mark is not None else 0

        # An alias back to one of its own ancestors would never terminate
        if id(raw) in active:
            raise ManifestParseError("recursive alias refers to its own anchor", line or None)
        active.add(id(raw))

        if isinstance(raw, MappingNode):
            pairs = tuple(
                (self._convert(key, memo, active), self._convert(value, memo, active))
                for key, value in raw.value
            )
            node = Node(NodeKind.MAPPING, line, pairs=pairs)
        elif isinstance(raw, SequenceNode):
            items = tuple(self._convert(item, memo, active) for item in raw.value)
            node = Node(NodeKind.SEQUENCE, line, items=items)
        elif isinstance(raw, ScalarNode):
            tag = str(raw.tag) if raw.tag is not None else None
            node = Node(NodeKind.SCALAR, line, value=str(raw.value), tag=tag)
        else:
            raise ManifestParseError(f"unsupported YAML node type '{type(raw).__name__}'", line or None)

        active.discard(id(raw))
        memo[id(raw)] = node
        return node

    @staticmethod
    def _parse_error(exc: YAMLError) -> ManifestParseError:
        """Extracts the problem text and 1-based line from a ruamel error."""
        problem = getattr(exc, "problem", None)
        mark = getattr(exc, "problem_mark", None)
        if problem:
            line = mark.line + 1 if mark is not None else None
            return ManifestParseError(problem, line)
        return ManifestParseError(str(exc).strip())
