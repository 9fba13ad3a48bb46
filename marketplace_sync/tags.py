"""Tag usage statistics."""

from typing import Dict, Iterable, List

from .models import Skill, TagSummary


def calculate_tags(skills: Iterable[Skill]) -> List[TagSummary]:
    """Count tag usage across skills.

    Blank tags are ignored. The result is sorted by count, highest first;
    tags with equal counts keep the order in which they were first seen.

    Args:
        skills: Scanned skills

    Returns:
        Tag summaries
    """
    counts: Dict[str, int] = {}
    for skill in skills:
        for tag in skill.tags:
            if tag and tag.strip():
                counts[tag] = counts.get(tag, 0) + 1

    summaries = [TagSummary(name=name, count=count) for name, count in counts.items()]
    return sorted(summaries, key=lambda t: t.count, reverse=True)
