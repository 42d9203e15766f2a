"""mkvpropedit wrapper for attaching tag documents to Matroska files."""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from logger import get_logger

log = get_logger()


class ToolLocator(Protocol):
    """Capability check for external executables."""

    def exists(self, name: str) -> bool:
        """Return True if ``name`` can be invoked."""


class PathToolLocator:
    """Locate tools on the PATH (or by explicit path)."""

    def exists(self, name: str) -> bool:
        return shutil.which(name) is not None


@dataclass
class AttachResult:
    """Outcome of an attach attempt; failures are advisories."""

    attached: bool
    message: str


def _decode_stderr(proc: subprocess.CompletedProcess) -> str:
    output = proc.stderr or proc.stdout or ""
    if isinstance(output, (bytes, bytearray)):
        return output.decode("utf-8", errors="replace")
    return str(output)


def build_attach_command(mkvpropedit_path: str, container_path: Path, document_path: Path) -> list[str]:
    """Build the mkvpropedit command that sets global tags from a document."""
    return [mkvpropedit_path, str(container_path), "--tags", f"global:{document_path}"]


def mkvpropedit_attach_tags(
    mkvpropedit_path: str,
    container_path: Path,
    document_path: Path,
    locator: ToolLocator | None = None,
) -> AttachResult:
    """Embed a tag document into a Matroska container as global tags.

    Never raises for tool problems; the returned result says what happened.
    """
    locator = locator or PathToolLocator()
    if not locator.exists(mkvpropedit_path):
        return AttachResult(False, f"{mkvpropedit_path} not found on PATH; tags were not attached.")
    if not container_path.is_file():
        return AttachResult(False, f"Container not found: {container_path}; tags were not attached.")

    cmd = build_attach_command(mkvpropedit_path, container_path, document_path)
    log.debug(f"mkvpropedit cmd: {' '.join(cmd)}")
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as exc:
        return AttachResult(False, f"Could not run {mkvpropedit_path}: {exc}")
    if proc.returncode != 0:
        # mkvpropedit exits with 1 for warnings after a successful update.
        if proc.returncode == 1:
            return AttachResult(True, f"mkvpropedit reported warnings: {_decode_stderr(proc).strip()[:2000]}")
        return AttachResult(False, f"mkvpropedit failed for {container_path}: {_decode_stderr(proc).strip()[:2000]}")
    return AttachResult(True, f"Attached tags to {container_path}")
