"""Package skills as ZIP files for download.

The skill folder's contents are the root of the archive:
  <skill-id>.zip
    SKILL.md
    scripts/
    scripts/helper.py
"""

import logging
import shutil
import zipfile
from pathlib import Path

from .config import COLLECTION_DIR, SyncConfig
from .exceptions import PackagingError
from .models import Skill


logger = logging.getLogger(__name__)


def zip_skill(skill_dir: Path, out_zip: Path) -> None:
    """Write every directory and file under ``skill_dir`` into ``out_zip``.

    Args:
        skill_dir: Skill directory to archive
        out_zip: Destination archive path
    """
    out_zip.parent.mkdir(parents=True, exist_ok=True)

    with zipfile.ZipFile(out_zip, "w", compression=zipfile.ZIP_DEFLATED) as z:
        for path in sorted(skill_dir.rglob("*")):
            # Directories get their own entries with mode bits
            z.write(path, path.relative_to(skill_dir).as_posix())


class SkillPackager:
    """Build the per-skill download archives."""

    def __init__(self, config: SyncConfig):
        """Initialize the packager.

        Args:
            config: Sync configuration
        """
        self.config = config
        self.downloads_dir = config.downloads_dir

    def clean_downloads(self) -> int:
        """Delete archives left over from a previous run.

        Returns:
            Number of entries removed
        """
        self.downloads_dir.mkdir(parents=True, exist_ok=True)

        removed = 0
        for entry in self.downloads_dir.iterdir():
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()
            removed += 1

        logger.info(f"Removed {removed} stale download files")
        return removed

    def archive_path(self, skill: Skill) -> Path:
        return self.downloads_dir / f"{skill.id}.zip"

    def package(self, skill: Skill, repo_path: Path) -> int:
        """Archive one skill directory.

        Args:
            skill: Skill to package
            repo_path: Root of the skills repository

        Returns:
            Size of the written archive in bytes

        Raises:
            PackagingError: The archive could not be written
        """
        skill_dir = Path(repo_path) / COLLECTION_DIR / skill.id
        out_zip = self.archive_path(skill)

        try:
            zip_skill(skill_dir, out_zip)
            size = out_zip.stat().st_size
        except (OSError, zipfile.BadZipFile) as e:
            raise PackagingError(f"Failed to package {skill.id}: {e}") from e

        logger.info(f"Packaged: {out_zip.name} ({size / 1024:.1f} KB)")
        return size
