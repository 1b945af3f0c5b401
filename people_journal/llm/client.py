"""
LLM Client - Text generation through Groq with Google Gemini as fallback.

The rest of the application only sees `complete(prompt) -> str`:
- ConfigurationMissingError when neither provider has an API key
- LLMError when every configured provider failed
"""
from typing import List, Optional, Tuple

import google.generativeai as genai
from groq import Groq

from people_journal.core.config import Settings, get_settings
from people_journal.core.exceptions import ConfigurationMissingError, LLMError
from people_journal.core.logging_config import get_logger

logger = get_logger(__name__)


class LLMClient:
    """
    Single-prompt completion client over the configured providers.

    Providers are tried in order (Groq, then Google), skipping any
    without a key. There is no retry beyond moving to the next provider.

    Example:
        >>> client = LLMClient()
        >>> client.complete("Summarize this 1:1 ...")
        '**Follow up on**\\n- ...'
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.temperature = self.settings.llm_temperature
        self.max_tokens = self.settings.llm_max_tokens

        self.groq_client = Groq(api_key=self.settings.groq_api_key) if self.settings.groq_api_key else None
        if self.settings.google_api_key:
            genai.configure(api_key=self.settings.google_api_key)

        logger.info(f"LLM client initialized (providers: {', '.join(p for p, _ in self._cascade()) or 'none'})")

    def is_configured(self) -> bool:
        return bool(self._cascade())

    def _cascade(self) -> List[Tuple[str, str]]:
        cascade = []
        if self.groq_client is not None:
            cascade.append(("groq", self.settings.llm_model))
        if self.settings.google_api_key:
            cascade.append(("google", self.settings.llm_model_fallback))
        return cascade

    def complete(self, prompt: str) -> str:
        """
        Generate a completion for a single user prompt.

        Raises:
            ConfigurationMissingError: If no provider is configured
            LLMError: If all configured providers failed
        """
        cascade = self._cascade()
        if not cascade:
            raise ConfigurationMissingError(
                "No API key configured. Set GROQ_API_KEY or GOOGLE_API_KEY in .env"
            )

        last_error = None
        for i, (provider, model) in enumerate(cascade):
            try:
                if i > 0:
                    logger.info(f"Falling back to {provider.title()} ({model})...")
                if provider == "google":
                    return self._complete_google(prompt, model)
                return self._complete_groq(prompt, model)
            except Exception as e:
                error_msg = str(e).lower()
                is_rate_limit = "429" in error_msg or "quota" in error_msg or "rate limit" in error_msg
                log_level = logger.warning if is_rate_limit else logger.error
                log_level(f"Provider failed ({provider}/{model}): {e}")
                last_error = e

        raise LLMError(f"All configured LLM providers failed. Last error: {last_error}")

    def _complete_groq(self, prompt: str, model: str) -> str:
        response = self.groq_client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        return response.choices[0].message.content or ""

    def _complete_google(self, prompt: str, model: str) -> str:
        model_instance = genai.GenerativeModel(model_name=model)
        response = model_instance.generate_content(
            prompt,
            generation_config=genai.types.GenerationConfig(
                temperature=self.temperature,
                max_output_tokens=self.max_tokens,
            ),
        )
        return response.text


# Module-level instance (singleton pattern)
_llm_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get or create the LLM client instance."""
    global _llm_client
    if _llm_client is None:
        _llm_client = LLMClient()
    return _llm_client


def reset_llm_client() -> None:
    """Drop the singleton (for testing)."""
    global _llm_client
    _llm_client = None
