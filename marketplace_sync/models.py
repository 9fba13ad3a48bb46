"""Data models for skills and the generated catalog."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


class FileType:
    """File classifications understood by the marketplace site."""

    MARKDOWN = "markdown"
    CODE = "code"
    TEXT = "text"


@dataclass
class SkillFile:
    """A single file inside a skill directory."""

    name: str
    path: str
    type: str
    relative_path: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "name": self.name,
            "path": self.path,
            "type": self.type,
            "relativePath": self.relative_path,
        }


@dataclass
class Skill:
    """A skill discovered in the collection directory.

    ``id`` is the directory name; everything else is merged from the
    descriptor front matter and the auxiliary metadata sources.
    """

    id: str
    name: str
    path: str
    description: str
    version: str
    author: str
    updated_at: str
    download_url: str
    install_command: str
    tags: List[str] = field(default_factory=list)
    stars: int = 0
    source_url: str = ""
    files: List[SkillFile] = field(default_factory=list)
    content: str = ""

    @property
    def has_multiple_files(self) -> bool:
        return len(self.files) > 1

    def to_summary(self) -> Dict[str, Any]:
        """Catalog entry for this skill (everything except the body)."""
        return {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "description": self.description,
            "tags": list(self.tags),
            "version": self.version,
            "author": self.author,
            "updatedAt": self.updated_at,
            "stars": self.stars,
            "sourceUrl": self.source_url,
            "files": [f.to_dict() for f in self.files],
            "hasMultipleFiles": self.has_multiple_files,
            "downloadUrl": self.download_url,
            "installCommand": self.install_command,
        }

    def to_content(self) -> Dict[str, Any]:
        """Detail payload rendered on the skill page."""
        return {
            "content": self.content,
            "files": [f.to_dict() for f in self.files],
        }


@dataclass
class TagSummary:
    """Usage count of one tag across all skills."""

    name: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "count": self.count}


@dataclass
class CatalogIndex:
    """The combined index consumed by the site."""

    generated_at: str
    source_repo: str
    version: str
    tags: List[TagSummary] = field(default_factory=list)
    skills: List[Skill] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.skills)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "meta": {
                "generatedAt": self.generated_at,
                "sourceRepo": self.source_repo,
                "total": self.total,
                "version": self.version,
            },
            "tags": [t.to_dict() for t in self.tags],
            "skills": [s.to_summary() for s in self.skills],
        }
