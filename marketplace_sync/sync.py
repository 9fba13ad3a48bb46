"""Main orchestration module for the marketplace sync."""

import logging
import sys
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path
from typing import Dict, List, Optional

from .config import SyncConfig
from .index_generator import IndexGenerator
from .metadata import read_skills_index, read_skills_json_dir
from .models import Skill
from .packager import SkillPackager
from .repo_locator import RepoLocator
from .scanner import SkillScanner


logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, log_dir: Optional[Path] = None) -> None:
    """Set up logging configuration.

    Args:
        verbose: Enable debug logging
        log_dir: Optional directory for a ``sync.log`` file
    """
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / "sync.log", encoding="utf-8"))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


class SyncStatus(Enum):
    """Outcome of a sync run."""

    COMPLETED = "completed"
    NO_SKILLS = "no_skills"
    FAILED = "failed"


class SyncExitCode(IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    FAILURE = 1


@dataclass
class SyncResult:
    """Summary of a sync run."""

    status: SyncStatus
    skills: List[Skill] = field(default_factory=list)
    tag_count: int = 0
    archive_sizes: Dict[str, int] = field(default_factory=dict)
    index_path: Optional[Path] = None
    contents_dir: Optional[Path] = None
    error: Optional[str] = None

    @property
    def total(self) -> int:
        return len(self.skills)

    @property
    def multi_file_count(self) -> int:
        return sum(1 for s in self.skills if s.has_multiple_files)

    @property
    def single_file_count(self) -> int:
        return self.total - self.multi_file_count

    @property
    def exit_code(self) -> SyncExitCode:
        if self.status == SyncStatus.FAILED:
            return SyncExitCode.FAILURE
        return SyncExitCode.SUCCESS


class SkillSync:
    """Run the sync pipeline from repository to catalog outputs.

    The steps run strictly in order: clean outputs, locate the repository,
    scan skills, package archives, write the index, write content files.
    Finding no skills stops the run early without failing it.
    """

    def __init__(self, config: SyncConfig):
        """Initialize the pipeline.

        Args:
            config: Sync configuration
        """
        self.config = config
        self.locator = RepoLocator(config)
        self.scanner = SkillScanner(config)
        self.packager = SkillPackager(config)
        self.index_generator = IndexGenerator(config)

    def run(self) -> SyncResult:
        """Run a complete sync.

        Returns:
            SyncResult; failures are reported through ``status`` rather than raised
        """
        logger.info("Starting skills sync")
        repo_path: Optional[Path] = None

        try:
            self.config.output_path.parent.mkdir(parents=True, exist_ok=True)
            logger.info("Cleaning old download files")
            self.packager.clean_downloads()

            repo_path = self.locator.locate()

            logger.info("Scanning skills directory")
            index_meta = read_skills_index(repo_path)
            json_meta = read_skills_json_dir(repo_path)
            skills = self.scanner.scan(repo_path, index_meta, json_meta)
            logger.info(f"Found {len(skills)} skills")

            if not skills:
                logger.warning("No skills found, nothing to sync. Check the skills repository")
                return SyncResult(status=SyncStatus.NO_SKILLS)

            logger.info("Packaging skills")
            sizes = {}
            for skill in skills:
                sizes[skill.id] = self.packager.package(skill, repo_path)

            logger.info("Generating index file")
            index = self.index_generator.build_index(skills)
            index_path = self.index_generator.write_index(index)
            contents_dir = self.index_generator.write_contents(skills)

            result = SyncResult(
                status=SyncStatus.COMPLETED,
                skills=skills,
                tag_count=len(index.tags),
                archive_sizes=sizes,
                index_path=index_path,
                contents_dir=contents_dir,
            )
            self._log_stats(result)
            logger.info("Sync complete")
            return result

        except Exception as e:
            logger.error(f"Sync failed: {e}", exc_info=True)
            return SyncResult(status=SyncStatus.FAILED, error=str(e))

        finally:
            if repo_path is not None:
                self.locator.cleanup(repo_path)

    def _log_stats(self, result: SyncResult) -> None:
        logger.info("Sync statistics:")
        logger.info(f"  Total skills: {result.total}")
        logger.info(f"  Total tags: {result.tag_count}")
        logger.info(f"  Multi-file skills: {result.multi_file_count}")
        logger.info(f"  Single-file skills: {result.single_file_count}")
