"""
Structured prep - Facts derived from journal entries without the LLM.
"""
from dataclasses import dataclass, field
from typing import Dict, List

from people_journal.models.briefing import PrepActionItem, ScorePoint, TagCount
from people_journal.models.journal import Entry


@dataclass
class StructuredPrep:
    open_items_mine: List[PrepActionItem] = field(default_factory=list)
    open_items_theirs: List[PrepActionItem] = field(default_factory=list)
    recent_tags: List[TagCount] = field(default_factory=list)
    unresolved_blockers: List[str] = field(default_factory=list)
    morale_scores: List[ScorePoint] = field(default_factory=list)
    growth_scores: List[ScorePoint] = field(default_factory=list)


def rank_tags(entries: List[Entry]) -> List[TagCount]:
    """
    Count tags across entries, highest count first.

    Equal counts keep the order in which tags were first seen.
    """
    counts: Dict[str, int] = {}
    for entry in entries:
        for tag in entry.tags:
            counts[tag] = counts.get(tag, 0) + 1

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [TagCount(tag=tag, count=count) for tag, count in ranked]


def compute_structured_prep(entries: List[Entry]) -> StructuredPrep:
    """
    Derive the journal sections of a briefing.

    Args:
        entries: Loaded entries, newest first

    Returns:
        Open items per owner (incomplete only, entry order), ranked tags,
        all blockers in entry order, and oldest-first score series
    """
    prep = StructuredPrep(recent_tags=rank_tags(entries))

    for entry in entries:
        prep.open_items_mine.extend(
            PrepActionItem(text=item.text, date=entry.date)
            for item in entry.action_items_mine
            if not item.completed
        )
        prep.open_items_theirs.extend(
            PrepActionItem(text=item.text, date=entry.date)
            for item in entry.action_items_theirs
            if not item.completed
        )
        prep.unresolved_blockers.extend(entry.blockers)

    for entry in reversed(entries):
        if entry.morale_score is not None:
            prep.morale_scores.append(ScorePoint(date=entry.date, score=entry.morale_score))
        if entry.growth_score is not None:
            prep.growth_scores.append(ScorePoint(date=entry.date, score=entry.growth_score))

    return prep
