"""
Prompts module - LLM prompt templates.
"""
from people_journal.llm.prompts.briefing_prompts import build_briefing_prompt
from people_journal.llm.prompts.extraction_prompts import TAGS, build_extraction_prompt

__all__ = [
    "build_briefing_prompt",
    "build_extraction_prompt",
    "TAGS",
]
