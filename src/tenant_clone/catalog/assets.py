"""Mirror a tenant's upload tree into another tenant's upload tree.

The root tenant's upload directory also holds the ``sites`` container with
every other tenant's uploads. Any directory named ``sites`` is skipped, so
cloning the root tenant never copies other tenants' files and cloning into a
tenant never writes into a nested container.

The copy is not transactional. A file or directory that cannot be copied is
logged and recorded in the summary, and the mirror carries on with the rest of
the tree.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import validate_call

from tenant_clone.core.constants import SITES_DIR
from tenant_clone.core.logging_config import get_logger
from tenant_clone.core.validation import VALIDATION_CONFIG

logger = get_logger("assets")


@dataclass
class AssetMirrorSummary:
    """What an asset mirror did."""

    source: Path
    destination: Path
    files_copied: int = 0
    directories_created: int = 0
    skipped: list[Path] = field(default_factory=list)
    errors: dict[Path, str] = field(default_factory=dict)

    @property
    def complete(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": str(self.source),
            "destination": str(self.destination),
            "files_copied": self.files_copied,
            "directories_created": self.directories_created,
            "skipped": [str(p) for p in self.skipped],
            "errors": {str(p): e for p, e in self.errors.items()},
        }


@validate_call(config=VALIDATION_CONFIG)
def mirror_assets(source: Path, destination: Path) -> AssetMirrorSummary:
    """Recursively copy ``source`` into ``destination``.

    Existing destination files are overwritten; files only present in the
    destination are left alone. A missing ``source`` is treated as an empty
    tree.

    Args:
        source: Upload root of the source tenant.
        destination: Upload root of the target tenant. Created if absent.

    Returns:
        Summary of copied files, created directories, skipped ``sites``
        directories and errors.
    """
    summary = AssetMirrorSummary(source=source, destination=destination)
    if not summary.source.is_dir():
        logger.warning(f"Upload directory {summary.source} does not exist, no files to copy")
        return summary
    _copy_tree(summary.source, summary.destination, summary)
    if summary.errors:
        logger.error(f"{len(summary.errors)} entries could not be copied to {summary.destination}")
    return summary


def _copy_tree(source: Path, destination: Path, summary: AssetMirrorSummary) -> None:
    try:
        if not destination.is_dir():
            destination.mkdir(parents=True, exist_ok=True)
            summary.directories_created += 1
        entries = list(source.iterdir())
    except OSError as e:
        logger.error(f"Cannot copy {source} => {destination}: {e}")
        summary.errors[source] = str(e)
        return

    for entry in entries:
        if entry.is_dir():
            if entry.name == SITES_DIR:
                logger.debug(f"Skipping {entry}")
                summary.skipped.append(entry)
                continue
            _copy_tree(entry, destination / entry.name, summary)
        else:
            try:
                shutil.copyfile(entry, destination / entry.name)
                summary.files_copied += 1
            except OSError as e:
                logger.error(f"Cannot copy {entry}: {e}")
                summary.errors[entry] = str(e)
