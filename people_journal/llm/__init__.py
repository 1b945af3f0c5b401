"""
LLM module - Language model integration.

This module handles all LLM interactions:
- Prompt construction
- API calls to Groq / Google Gemini
- Error handling for LLM failures
"""
from people_journal.llm.client import LLMClient, get_llm_client, reset_llm_client

__all__ = [
    "LLMClient",
    "get_llm_client",
    "reset_llm_client",
]
