#!/usr/bin/env python3
"""
PODWARDEN ENGINE - The High Orchestrator
----------------------------------------
The AuditEngine takes one manifest through its lifecycle: read, compose,
validate. Read and parse failures are fatal for the file and are captured
in the report instead of being raised to the caller.

Author: PodWarden Team
Date: 2026-10-18
"""

import logging
from pathlib import Path
from typing import Optional, Union

from podwarden.core.exceptions import ManifestParseError, ManifestReadError
from podwarden.core.models import AuditReport
from podwarden.parsing.loader import ManifestLoader
from podwarden.validator.validator import PodValidator

logger = logging.getLogger("podwarden.engine")


class AuditEngine:
    """
    Principal orchestrator for validating a Pod manifest.
    Collaborators can be injected for testing.
    """

    def __init__(self, loader: Optional[ManifestLoader] = None,
                 validator: Optional[PodValidator] = None):
        self.loader = loader or ManifestLoader()
        self.validator = validator or PodValidator()

    def audit_file(self, file_path: Union[str, Path]) -> AuditReport:
        """
        Performs a full audit of a single manifest on disk.
        """
        path = Path(file_path)
        try:
            # Phase 1: Read (BOM-aware)
            text = self.read_manifest(path)
        except ManifestReadError as e:
            logger.error(f"Unable to read {path}: {e.reason}")
            return AuditReport(str(path), "READ_ERROR", fatal_error=e.reason)

        return self.audit_text(text, str(path))

    def audit_text(self, text: str, file_path: str = "<string>") -> AuditReport:
        """
        Audits manifest content that is already in memory.
        """
        # Phase 2: Compose into the Node tree
        try:
            root = self.loader.load(text)
        except ManifestParseError as e:
            logger.warning(f"Malformed YAML in {file_path}: {e}")
            return AuditReport(file_path, "PARSE_ERROR", fatal_error=e.problem, fatal_line=e.line)

        # Phase 3: Schema walk
        errors = self.validator.validate(root)
        status = "INVALID" if errors else "VALID"
        logger.debug(f"{file_path}: {status} ({len(errors)} error(s))")
        return AuditReport(file_path, status, errors=errors)

    @staticmethod
    def read_manifest(path: Path) -> str:
        """
        Reads the manifest as UTF-8, dropping a leading BOM.

        Raises:
            ManifestReadError: If the file is missing, unreadable or not UTF-8.
        """
        try:
            return path.read_text(encoding="utf-8-sig")
        except OSError as e:
            raise ManifestReadError(str(path), e.strerror or str(e)) from e
        except UnicodeDecodeError as e:
            raise ManifestReadError(str(path), f"invalid UTF-8 content: {e.reason}") from e
