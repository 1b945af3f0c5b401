"""
Extraction Service - Structured entry drafts from 1:1 transcripts.

Results are cached under fingerprint([member_name, transcript]) in the
"extract" category, so re-submitting the same transcript is free.
"""
import json
from typing import Any, Dict, Optional

from people_journal.cache.result_cache import ResultCache, fingerprint, get_result_cache
from people_journal.core.exceptions import ConfigurationMissingError, ResponseParseError
from people_journal.core.logging_config import get_logger
from people_journal.llm.client import LLMClient, get_llm_client
from people_journal.llm.prompts import build_extraction_prompt

logger = get_logger(__name__)

EXTRACT_CATEGORY = "extract"


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` fence if the model added one."""
    clean = text.strip()
    if clean.startswith("```json"):
        clean = clean[len("```json"):]
    elif clean.startswith("```"):
        clean = clean[len("```"):]
    if clean.endswith("```"):
        clean = clean[:-len("```")]
    return clean.strip()


class ExtractionService:
    """
    Turns transcripts into entry fields through the LLM.

    Example:
        >>> service = ExtractionService()
        >>> draft = service.extract("Jane Doe", transcript)
        >>> draft["morale_score"]
        4
    """

    def __init__(
        self,
        cache: Optional[ResultCache] = None,
        llm_client: Optional[LLMClient] = None,
    ):
        self.cache = cache or get_result_cache()
        self.llm = llm_client or get_llm_client()

    def extract(self, member_name: str, transcript: str) -> Dict[str, Any]:
        """
        Extract summary, tags, action items, scores and highlights.

        Raises:
            ConfigurationMissingError: If no LLM provider is configured
            LLMError: If generation fails
            ResponseParseError: If the model did not return a JSON object
        """
        key = fingerprint([member_name, transcript])

        cached = self.cache.get(key, EXTRACT_CATEGORY)
        if cached is not None:
            try:
                return json.loads(cached)
            except ValueError:
                logger.warning("Discarding unreadable cached extraction")

        if not self.llm.is_configured():
            raise ConfigurationMissingError(
                "No API key configured. Set GROQ_API_KEY or GOOGLE_API_KEY in .env"
            )

        logger.info(f"Extracting transcript for {member_name} ({len(transcript)} chars)")
        text = self.llm.complete(build_extraction_prompt(member_name, transcript))
        clean = strip_code_fences(text)

        try:
            extracted = json.loads(clean)
        except ValueError as e:
            logger.error(f"Failed to parse extraction JSON: {e}")
            raise ResponseParseError("Failed to extract from transcript", details=str(e)) from e

        if not isinstance(extracted, dict):
            raise ResponseParseError("Failed to extract from transcript", details="expected a JSON object")

        self.cache.set(key, EXTRACT_CATEGORY, clean)
        return extracted


# Module-level instance (singleton pattern)
_extraction_service: Optional[ExtractionService] = None


def get_extraction_service() -> ExtractionService:
    """Get or create the extraction service instance."""
    global _extraction_service
    if _extraction_service is None:
        _extraction_service = ExtractionService()
    return _extraction_service


def reset_extraction_service() -> None:
    """Drop the singleton (for testing)."""
    global _extraction_service
    _extraction_service = None
