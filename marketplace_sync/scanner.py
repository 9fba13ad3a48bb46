"""Scan the skills collection and build Skill records."""

import logging
import re
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .config import COLLECTION_DIR, SKILL_FILENAME, SyncConfig
from .metadata import EMPTY_RECORD, MetadataRecord, resolve_scalar, resolve_tags
from .models import FileType, Skill, SkillFile


logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(r"^---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|$)", re.DOTALL)

FILE_TYPES = {
    ".md": FileType.MARKDOWN,
    ".mdx": FileType.MARKDOWN,
    ".js": FileType.CODE,
    ".ts": FileType.CODE,
    ".jsx": FileType.CODE,
    ".tsx": FileType.CODE,
    ".json": FileType.CODE,
    ".yaml": FileType.CODE,
    ".yml": FileType.CODE,
    ".sh": FileType.CODE,
    ".bash": FileType.CODE,
    ".py": FileType.CODE,
    ".rb": FileType.CODE,
    ".go": FileType.CODE,
    ".rs": FileType.CODE,
    ".java": FileType.CODE,
    ".c": FileType.CODE,
    ".cpp": FileType.CODE,
    ".h": FileType.CODE,
    ".css": FileType.CODE,
    ".scss": FileType.CODE,
    ".less": FileType.CODE,
    ".html": FileType.CODE,
    ".xml": FileType.CODE,
    ".txt": FileType.TEXT,
}


def get_file_type(filename: str) -> str:
    """Classify a file by extension; unknown extensions are text."""
    return FILE_TYPES.get(Path(filename).suffix.lower(), FileType.TEXT)


def parse_front_matter(content: str) -> Tuple[Dict[str, Any], str]:
    """Split a SKILL.md document into YAML front matter and body.

    Args:
        content: Raw file content

    Returns:
        Tuple of (front matter mapping, body without front matter)

    Raises:
        yaml.YAMLError: The front matter block is not valid YAML
    """
    if content.startswith("\ufeff"):
        content = content[1:]

    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return {}, content

    data = yaml.safe_load(match.group(1) or "")
    if not isinstance(data, dict):
        data = {}
    return data, content[match.end():]


def _file_sort_key(skill_file: SkillFile) -> Tuple[bool, str, str]:
    # Descriptor first, then ordinal by name
    return (skill_file.relative_path != SKILL_FILENAME, skill_file.name, skill_file.relative_path)


def scan_skill_files(skill_dir: Path, skill_id: str) -> List[SkillFile]:
    """List every file under a skill directory.

    Args:
        skill_dir: Skill directory
        skill_id: Skill identifier used to prefix ``path``

    Returns:
        Files with SKILL.md first, the rest sorted by name
    """
    files = []
    for file_path in skill_dir.rglob("*"):
        if file_path.is_dir():
            continue

        relative = file_path.relative_to(skill_dir).as_posix()
        files.append(SkillFile(
            name=file_path.name,
            path=f"{skill_id}/{relative}",
            type=get_file_type(file_path.name),
            relative_path=relative,
        ))

    return sorted(files, key=_file_sort_key)


class SkillScanner:
    """Walk ``skills-collection/`` and merge metadata into Skill records."""

    def __init__(self, config: SyncConfig):
        """Initialize the scanner.

        Args:
            config: Sync configuration
        """
        self.config = config

    def scan(
        self,
        repo_path: Path,
        index_meta: Dict[str, MetadataRecord],
        json_meta: Dict[str, MetadataRecord],
    ) -> List[Skill]:
        """Scan every skill directory in the collection.

        Args:
            repo_path: Root of the skills repository
            index_meta: Records from the combined index
            json_meta: Records from the per-skill JSON directory

        Returns:
            Skills in directory-name order; empty if the collection is missing
        """
        collection = Path(repo_path) / COLLECTION_DIR
        if not collection.is_dir():
            logger.error(f"{COLLECTION_DIR} directory not found in {repo_path}")
            return []

        skills = []
        for entry in sorted(collection.iterdir()):
            if not entry.is_dir() or self._is_excluded(entry.name):
                continue

            skill = self._load_skill(entry, index_meta, json_meta)
            if skill is None:
                continue

            tags_str = ", ".join(skill.tags) if skill.tags else "none"
            logger.info(f"Found skill: {skill.id} (tags: {tags_str})")
            skills.append(skill)

        return skills

    def _is_excluded(self, name: str) -> bool:
        return name.startswith(".") or name in self.config.excluded_dirs

    def _load_skill(
        self,
        skill_dir: Path,
        index_meta: Dict[str, MetadataRecord],
        json_meta: Dict[str, MetadataRecord],
    ) -> Optional[Skill]:
        """Build one Skill, or None if the directory is not a usable skill."""
        skill_id = skill_dir.name
        skill_md = skill_dir / SKILL_FILENAME

        try:
            raw = skill_md.read_text(encoding="utf-8")
            data, body = parse_front_matter(raw)
            files = scan_skill_files(skill_dir, skill_id)
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            logger.warning(f"Skipping {skill_id}: {e}")
            return None

        front = MetadataRecord.from_mapping(data)
        from_json = json_meta.get(skill_id, EMPTY_RECORD)
        from_index = index_meta.get(skill_id, EMPTY_RECORD)

        def scalar(field_name: str, default: str) -> str:
            return resolve_scalar(field_name, front, from_json, from_index, default)

        return Skill(
            id=skill_id,
            name=front.name or skill_id,
            path=skill_id,
            description=scalar("description", ""),
            tags=resolve_tags(from_json, from_index, front),
            version=scalar("version", self.config.default_version),
            author=scalar("author", self.config.default_author),
            updated_at=scalar("updated_at", date.today().isoformat()),
            stars=from_json.stars or 0,
            source_url=from_json.source_url or "",
            files=files,
            content=body,
            download_url=self.config.download_url_template.format(id=skill_id),
            install_command=self.config.install_command_template.format(id=skill_id),
        )
