"""
Services module - Business logic and orchestration.

Services contain the core application logic:
- No HTTP concerns (those belong in api/)
- No SQL (that belongs in database/)
- Orchestrate between the journal store, cache, tracker and LLM
"""
from people_journal.services.briefing_service import (
    BriefingService,
    get_briefing_service,
    reset_briefing_service,
)
from people_journal.services.extraction_service import (
    ExtractionService,
    get_extraction_service,
    reset_extraction_service,
)
from people_journal.services.structured_prep import StructuredPrep, compute_structured_prep

__all__ = [
    "BriefingService",
    "get_briefing_service",
    "reset_briefing_service",
    "ExtractionService",
    "get_extraction_service",
    "reset_extraction_service",
    "StructuredPrep",
    "compute_structured_prep",
]
