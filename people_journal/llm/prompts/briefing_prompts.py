"""
Briefing Prompts - Prompt for the pre-1:1 narrative briefing.

The prompt has two variants:
1. Journal only: "Follow up on" and "Watch for" sections
2. Journal plus tracker activity: adds a "Bring up" section grounded in tickets
"""
from typing import List, Optional

from people_journal.models.journal import ActionItem, Entry
from people_journal.tracker.aggregator import ActivityContext


_HEADER_WITH_TRACKER = """You are helping an engineering manager prepare for a 1:1 meeting with {name}. Below are the last {count} meeting entries (newest first). Generate a concise bullet-point briefing with these three sections:

**Follow up on**
**Watch for**
**Bring up**

Follow up on = open action items and unresolved topics to revisit.
Watch for = morale/growth concerns or patterns worth probing.
Bring up = topics grounded in their current JIRA activity worth discussing.

When an action item from a previous 1:1 clearly maps to a JIRA ticket, reference the ticket status instead of treating it as a separate open item.

Keep bullets short and scannable. No narrative prose.
Use this exact format, section headers as **bold text** on their own line, bullets as - dashes:

**Follow up on**
- bullet one
- bullet two

**Watch for**
- bullet one

**Bring up**
- bullet one

"""

_HEADER_JOURNAL_ONLY = """You are helping an engineering manager prepare for a 1:1 meeting with {name}. Below are the last {count} meeting entries (newest first). Generate a concise bullet-point briefing with these two sections:

**Follow up on**
**Watch for**

Follow up on = open action items and unresolved topics to revisit.
Watch for = morale/growth concerns or patterns worth probing.

Keep bullets short and scannable. No narrative prose.
Use this exact format, section headers as **bold text** on their own line, bullets as - dashes:

**Follow up on**
- bullet one
- bullet two

**Watch for**
- bullet one

"""


def _score_line(label: str, score: Optional[int], rationale: Optional[str]) -> Optional[str]:
    if score is None:
        return None
    line = f"{label}: {score}/5"
    if rationale:
        line += f" ({rationale})"
    return line


def _action_lines(items: List[ActionItem]) -> List[str]:
    return [f"  {'[x]' if item.completed else '[ ]'} {item.text}" for item in items]


def _render_entry(index: int, entry: Entry, member_name: str) -> List[str]:
    lines = [f"--- Entry {index} ({entry.date}) ---"]
    if entry.summary:
        lines.append(f"Summary: {entry.summary}")

    for line in (
        _score_line("Morale", entry.morale_score, entry.morale_rationale),
        _score_line("Growth", entry.growth_score, entry.growth_rationale),
    ):
        if line:
            lines.append(line)

    if entry.tags:
        lines.append(f"Tags: {', '.join(entry.tags)}")
    if entry.action_items_mine:
        lines.append("My action items:")
        lines.extend(_action_lines(entry.action_items_mine))
    if entry.action_items_theirs:
        lines.append(f"{member_name}'s action items:")
        lines.extend(_action_lines(entry.action_items_theirs))
    if entry.blockers:
        lines.append(f"Blockers: {'; '.join(entry.blockers)}")
    if entry.wins:
        lines.append(f"Wins: {'; '.join(entry.wins)}")
    if entry.notable_quotes:
        lines.append(f"Notable quotes: {'; '.join(entry.notable_quotes)}")
    lines.append("")
    return lines


def _render_activity(activity: ActivityContext) -> List[str]:
    lines = ["--- Current JIRA Activity ---"]

    if activity.assigned:
        lines.append("Assigned tickets (current sprint):")
        for t in activity.assigned:
            line = f"  - {t.key}: {t.summary} [{t.status}{', flagged' if t.flagged else ''}]"
            if t.epic_name:
                line += f" (Epic: {t.epic_name})"
            lines.append(line)

    if activity.completed:
        lines.append("Recently completed:")
        for t in activity.completed:
            line = f"  - {t.key}: {t.summary}"
            if t.epic_name:
                line += f" (Epic: {t.epic_name})"
            lines.append(line)

    if activity.blocked:
        lines.append("Blocked/flagged:")
        lines.extend(f"  - {t.key}: {t.summary}" for t in activity.blocked)

    if activity.sprint_stats is not None:
        stats = activity.sprint_stats
        lines.append(f"Sprint stats: {stats.points_completed}/{stats.points_committed} points completed")

    lines.append("")
    return lines


def build_briefing_prompt(
    member_name: str,
    entries: List[Entry],
    activity: Optional[ActivityContext] = None,
) -> str:
    """
    Build the narrative briefing prompt.

    Args:
        member_name: Display name of the report
        entries: Loaded entries, newest first
        activity: Tracker activity; the tracker variant is used only when
            it contains at least one ticket
    """
    has_tracker = activity is not None and activity.has_tickets()
    header = _HEADER_WITH_TRACKER if has_tracker else _HEADER_JOURNAL_ONLY

    lines = [header.format(name=member_name, count=len(entries))]
    for i, entry in enumerate(entries, start=1):
        lines.extend(_render_entry(i, entry, member_name))
    if has_tracker:
        lines.extend(_render_activity(activity))

    return "\n".join(lines)
