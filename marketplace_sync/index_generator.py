"""Generate the catalog index and per-skill content files."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional

from .config import SyncConfig
from .models import CatalogIndex, Skill
from .tags import calculate_tags


logger = logging.getLogger(__name__)


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


def _timestamp() -> str:
    # Millisecond precision with a Z suffix, as the site parses it
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


class IndexGenerator:
    """Assemble and persist the outputs read by the marketplace site."""

    def __init__(self, config: SyncConfig):
        """Initialize the generator.

        Args:
            config: Sync configuration
        """
        self.config = config

    def build_index(self, skills: List[Skill], source_repo: Optional[str] = None) -> CatalogIndex:
        """Build the catalog index for the scanned skills.

        Args:
            skills: Scanned skills, in catalog order
            source_repo: Repository identifier (defaults to the configured URL or "local")

        Returns:
            CatalogIndex
        """
        return CatalogIndex(
            generated_at=_timestamp(),
            source_repo=source_repo or self.config.source_repo,
            version=self.config.catalog_version,
            tags=calculate_tags(skills),
            skills=list(skills),
        )

    def write_index(self, index: CatalogIndex) -> Path:
        """Write the combined index file.

        Returns:
            Path of the written index
        """
        output_path = self.config.output_path
        _write_json(output_path, index.to_dict())
        logger.info(f"Index saved: {output_path}")
        return output_path

    def write_contents(self, skills: List[Skill]) -> Path:
        """Write one ``{content, files}`` file per skill.

        Returns:
            Directory holding the content files
        """
        contents_dir = self.config.contents_dir
        contents_dir.mkdir(parents=True, exist_ok=True)

        for skill in skills:
            _write_json(contents_dir / f"{skill.id}.json", skill.to_content())

        logger.info(f"Skill contents saved to: {contents_dir}")
        return contents_dir
