"""
Briefing Service - Assemble the pre-1:1 briefing for a team member.

This service orchestrates the prep flow:
1. Load the member and their most recent entries
2. Fingerprint everything the briefing depends on and consult the cache
3. On a miss, combine structured journal facts, tracker activity and
   an LLM narrative
4. Store the combined payload under the fingerprint

Only journal store failures reach the caller. Tracker, cache and LLM
failures degrade the affected section of the payload.
"""
from datetime import date
from typing import Callable, List, Optional, Tuple

from pydantic import ValidationError as PayloadValidationError
from sqlalchemy.exc import SQLAlchemyError

from people_journal.cache.result_cache import ResultCache, fingerprint, get_result_cache
from people_journal.core.config import Settings, get_settings
from people_journal.core.exceptions import JournalException
from people_journal.core.logging_config import get_logger
from people_journal.database.repository import JournalRepository
from people_journal.llm.client import LLMClient, get_llm_client
from people_journal.llm.prompts import build_briefing_prompt
from people_journal.models.briefing import BriefingPayload
from people_journal.models.journal import Entry, TeamMember
from people_journal.services.structured_prep import compute_structured_prep
from people_journal.tracker.aggregator import ActivityAggregator, ActivityContext
from people_journal.tracker.client import TrackerClient

logger = get_logger(__name__)

BRIEFING_CATEGORY = "briefing"

NO_ENTRIES_MESSAGE = "No entries yet for this team member."
NO_LLM_MESSAGE = "No API key configured. Showing structured data only."
LLM_FAILED_MESSAGE = "Failed to generate AI briefing. Showing structured data only."


class BriefingService:
    """
    Builds and caches BriefingPayloads.

    Example:
        >>> service = BriefingService()
        >>> payload = service.build_briefing("member-1")
        >>> payload.recent_tags[0].tag
        'career growth'
    """

    def __init__(
        self,
        repository: Optional[JournalRepository] = None,
        cache: Optional[ResultCache] = None,
        llm_client: Optional[LLMClient] = None,
        tracker_client: Optional[TrackerClient] = None,
        settings: Optional[Settings] = None,
        today: Callable[[], date] = date.today,
    ):
        """
        Args:
            repository: Journal store. Uses the default database if not provided.
            cache: Result cache. Uses the process-wide cache if not provided.
            llm_client: Narrative generator with complete() and is_configured()
            tracker_client: Tracker client; built from settings when the
                tracker is configured and none is given
            settings: Application settings
            today: Returns the local calendar day used in the fingerprint
        """
        self.settings = settings or get_settings()
        self.repository = repository or JournalRepository()
        self.cache = cache or get_result_cache()
        self.llm = llm_client or get_llm_client()
        self._today = today

        if tracker_client is None and self.settings.tracker_configured():
            tracker_client = TrackerClient.from_settings(self.settings)
        self.tracker = tracker_client

    def build_briefing(self, member_id: str, force: bool = False) -> BriefingPayload:
        """
        Return the briefing for a member, from cache unless `force` is set.

        Raises:
            NotFoundError: If the member does not exist
            SQLAlchemyError: If the journal store fails
        """
        member = self.repository.get_member(member_id)
        entries = self.repository.list_recent_entries(member_id, self.settings.prep_entry_limit)

        if not entries:
            logger.info(f"[PREP] No entries for {member_id}, skipping cache and tracker")
            return BriefingPayload(briefing=NO_ENTRIES_MESSAGE)

        key = self.briefing_fingerprint(member, entries)

        if not force:
            cached = self._load_cached(key)
            if cached is not None:
                logger.info(f"[PREP] Cache hit for {member_id}")
                return cached

        with self.cache.single_flight(key, BRIEFING_CATEGORY):
            # Another request may have finished the same briefing while we waited
            if not force:
                cached = self._load_cached(key)
                if cached is not None:
                    return cached

            payload = self._assemble(member, entries)
            self.cache.set(key, BRIEFING_CATEGORY, payload.model_dump_json())
            return payload

    def briefing_fingerprint(self, member: TeamMember, entries: List[Entry]) -> str:
        """
        Cache key over every input the briefing depends on.

        The calendar day makes tracker sections refresh at least daily;
        entry updated_at makes any edit invalidate the briefing.
        """
        parts = [member.id, self._today().isoformat()]
        for entry in entries:
            parts.append(entry.id)
            if entry.updated_at is not None:
                parts.append(entry.updated_at.isoformat())
        if member.jira_account_id:
            parts.append(member.jira_account_id)
        return fingerprint(parts)

    def _load_cached(self, key: str) -> Optional[BriefingPayload]:
        value = self.cache.get(key, BRIEFING_CATEGORY)
        if value is None:
            return None
        try:
            return BriefingPayload.model_validate_json(value)
        except PayloadValidationError as e:
            logger.warning(f"[PREP] Discarding unreadable cached briefing: {e}")
            return None

    def _assemble(self, member: TeamMember, entries: List[Entry]) -> BriefingPayload:
        prep = compute_structured_prep(entries)
        activity, account_id = self._fetch_activity(member, entries)

        payload = BriefingPayload(
            briefing=self._narrate(member.name, entries, activity),
            open_items_mine=prep.open_items_mine,
            open_items_theirs=prep.open_items_theirs,
            recent_tags=prep.recent_tags,
            unresolved_blockers=prep.unresolved_blockers,
            morale_scores=prep.morale_scores,
            growth_scores=prep.growth_scores,
        )

        if activity is not None:
            payload.jira_assigned = activity.assigned or None
            payload.jira_completed = activity.completed or None
            payload.jira_blocked = activity.blocked or None
            payload.jira_sprint_stats = activity.sprint_stats
            payload.jira_board_url = self.tracker.board_url(account_id)

        return payload

    def _fetch_activity(
        self, member: TeamMember, entries: List[Entry]
    ) -> Tuple[Optional[ActivityContext], Optional[str]]:
        if self.tracker is None:
            logger.debug("[JIRA] Not configured, skipping")
            return None, None

        account_id = member.jira_account_id
        try:
            if account_id:
                logger.debug(f"[JIRA] Using cached account ID: {account_id}")
            else:
                logger.info(f"[JIRA] No cached account ID for {member.name}, resolving by name")
                account_id = self.tracker.resolve_identity(member.name)
                self._remember_account(member.id, account_id)

            schema = self.tracker.discover_field_schema()
            since_date = entries[-1].date
            logger.info(f"[JIRA] Fetching activity for account {account_id} since {since_date}")
            activity = ActivityAggregator(self.tracker).aggregate(account_id, since_date, schema)
        except JournalException as e:
            logger.warning(f"[JIRA] Continuing without tracker data: {e.message}")
            return None, None

        return activity, account_id

    def _remember_account(self, member_id: str, account_id: str) -> None:
        try:
            self.repository.set_tracker_account_id(member_id, account_id)
            logger.info(f"[JIRA] Cached account ID {account_id} for {member_id}")
        except (JournalException, SQLAlchemyError) as e:
            logger.warning(f"[JIRA] Could not store account ID for {member_id}: {e}")

    def _narrate(
        self, member_name: str, entries: List[Entry], activity: Optional[ActivityContext]
    ) -> str:
        if not self.llm.is_configured():
            return NO_LLM_MESSAGE

        prompt = build_briefing_prompt(member_name, entries, activity)
        try:
            return self.llm.complete(prompt).strip()
        except JournalException as e:
            logger.error(f"[PREP] Briefing generation failed: {e.message}")
            return LLM_FAILED_MESSAGE


# Module-level instance (singleton pattern)
_briefing_service: Optional[BriefingService] = None


def get_briefing_service() -> BriefingService:
    """Get or create the briefing service instance."""
    global _briefing_service
    if _briefing_service is None:
        _briefing_service = BriefingService()
    return _briefing_service


def reset_briefing_service() -> None:
    """Drop the singleton (for testing)."""
    global _briefing_service
    _briefing_service = None
