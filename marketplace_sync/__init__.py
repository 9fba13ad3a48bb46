"""Marketplace Sync - builds the skills marketplace catalog from a skills repository."""

__version__ = "1.0.0"

from .config import SyncConfig
from .models import CatalogIndex, Skill, SkillFile, TagSummary
from .sync import SkillSync, SyncResult, SyncStatus

__all__ = [
    "SyncConfig",
    "CatalogIndex",
    "Skill",
    "SkillFile",
    "TagSummary",
    "SkillSync",
    "SyncResult",
    "SyncStatus",
]
