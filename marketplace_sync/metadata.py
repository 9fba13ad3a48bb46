"""Auxiliary skill metadata and field precedence.

Two optional sources live in the skills repository next to the collection:

- ``skills.json``: one combined index, ``{"skills": [{"name": ...}, ...]}``
- ``skills-json/*.json``: one file per skill, the highest-priority source

Both readers are best-effort; a missing or broken source yields an empty
mapping and a warning.
"""

import json
import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import SKILLS_INDEX_FILE, SKILLS_JSON_DIR


logger = logging.getLogger(__name__)


def as_text(value: Any) -> Optional[str]:
    """Render a loosely-typed metadata value as text, or None if empty."""
    if value is None or value == "":
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def as_tags(value: Any) -> Optional[List[str]]:
    """Return a tag list, or None when the value is not a list."""
    if not isinstance(value, list):
        return None
    return [str(tag) for tag in value if tag is not None]


def as_stars(value: Any) -> Optional[int]:
    """Return a non-negative star count, or None when unusable."""
    if isinstance(value, bool):
        return None
    try:
        stars = int(value)
    except (TypeError, ValueError):
        return None
    return stars if stars >= 0 else None


@dataclass(frozen=True)
class MetadataRecord:
    """Metadata about one skill from a single source.

    Every field is optional; ``None`` means the source does not provide it.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    version: Optional[str] = None
    author: Optional[str] = None
    updated_at: Optional[str] = None
    stars: Optional[int] = None
    source_url: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "MetadataRecord":
        """Create a record from a parsed JSON object or front-matter mapping."""
        return cls(
            name=as_text(data.get("name")),
            description=as_text(data.get("description")),
            tags=as_tags(data.get("tags")),
            version=as_text(data.get("version")),
            author=as_text(data.get("author")),
            updated_at=as_text(data.get("updatedAt")),
            stars=as_stars(data.get("stars")),
            source_url=as_text(data.get("sourceUrl")),
        )


EMPTY_RECORD = MetadataRecord()


def resolve_tags(
    json_meta: MetadataRecord,
    index_meta: MetadataRecord,
    front_matter: MetadataRecord,
) -> List[str]:
    """Pick the tag list: per-skill JSON, then combined index, then front matter.

    The first non-empty list wins as a whole; lists are never merged.
    """
    for tags in (json_meta.tags, index_meta.tags):
        if tags:
            return list(tags)
    return list(front_matter.tags or [])


def resolve_scalar(
    field_name: str,
    front_matter: MetadataRecord,
    json_meta: MetadataRecord,
    index_meta: MetadataRecord,
    default: str,
) -> str:
    """Pick a scalar field: front matter, then per-skill JSON, then combined index."""
    for record in (front_matter, json_meta, index_meta):
        value = getattr(record, field_name)
        if value:
            return value
    return default


def read_skills_index(repo_path: Path) -> Dict[str, MetadataRecord]:
    """Read the combined ``skills.json`` index.

    Args:
        repo_path: Root of the skills repository

    Returns:
        Mapping of skill name to metadata (empty on any failure)
    """
    index_path = Path(repo_path) / SKILLS_INDEX_FILE
    records: Dict[str, MetadataRecord] = {}

    try:
        data = json.loads(index_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read {SKILLS_INDEX_FILE}, using SKILL.md data only: {e}")
        return records

    entries = data.get("skills") if isinstance(data, dict) else None
    if isinstance(entries, list):
        for entry in entries:
            if isinstance(entry, dict) and entry.get("name"):
                records[str(entry["name"])] = MetadataRecord.from_mapping(entry)

    logger.info(f"Loaded index metadata for {len(records)} skills")
    return records


def read_skills_json_dir(repo_path: Path) -> Dict[str, MetadataRecord]:
    """Read per-skill metadata files from ``skills-json/``.

    Args:
        repo_path: Root of the skills repository

    Returns:
        Mapping of skill name to metadata (empty if the directory is unreadable)
    """
    json_dir = Path(repo_path) / SKILLS_JSON_DIR
    records: Dict[str, MetadataRecord] = {}

    try:
        entries = sorted(json_dir.iterdir())
    except OSError as e:
        logger.warning(f"Could not read {SKILLS_JSON_DIR} directory: {e}")
        return records

    for json_path in entries:
        if not json_path.is_file() or json_path.suffix != ".json":
            continue

        try:
            data = json.loads(json_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Skipping unreadable metadata file {json_path.name}: {e}")
            continue

        if isinstance(data, dict) and data.get("name"):
            records[str(data["name"])] = MetadataRecord.from_mapping(data)

    logger.info(f"Loaded {SKILLS_JSON_DIR} metadata for {len(records)} skills")
    return records
