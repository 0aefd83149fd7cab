"""
Phrase Generator
================
Asks the OpenAI chat completions API for a short brainrot-style phrase about
a code snippet.

One call is one request: no retries and no caching. A fresh client is built
for every call so a key changed through set-key takes effect immediately.
SDK exceptions are translated into the GenerationError taxonomy:

- no stored key            -> CredentialMissing
- 401 / 403                -> Unauthorized
- 429                      -> RateLimited
- anything else, or empty  -> ServiceError
"""

import logging
import time
from typing import Any, Callable, Optional

import openai
from openai import AsyncOpenAI
from pydantic import ValidationError

from .config import ConfigManager
from .credential_store import CredentialStore
from .errors import (
    CredentialMissing,
    GenerationError,
    RateLimited,
    ServiceError,
    Unauthorized,
)
from .models import MAX_WORDS, BrainrotPhrase, GenerationResult, truncate_words

PROMPT_TEMPLATE = """You are a Gen Z developer who writes code comments in brainrot slang.
Look at this {language} code and write ONE short, funny comment about it.
Use slang like "no cap", "fr fr", "lowkey", "it's giving", "bussin", "mid", "sigma", "rizz", "skibidi", "ate".
Keep it under 15 words. Reply with the comment text only: no comment symbols, no quotes, no explanation.

Code:
```{language}
{code}
```"""

ClientFactory = Callable[[str], Any]


def build_prompt(snippet: str, language: str) -> str:
    """Embed the snippet and language tag in the fixed instruction."""
    return PROMPT_TEMPLATE.format(language=language or 'plaintext', code=snippet)


class PhraseGenerator:
    """
    Generates comment phrases through the OpenAI API.

    The API key is read from the credential store on every call.
    """

    def __init__(self, config_manager: ConfigManager, credential_store: CredentialStore,
                 client_factory: Optional[ClientFactory] = None):
        """
        Initialize the generator.

        Args:
            config_manager: Configuration manager instance
            credential_store: Store holding the API key
            client_factory: Callable building an async OpenAI-compatible client
                from an API key; defaults to AsyncOpenAI for the configured endpoint
        """
        config_manager.validate_llm_config()

        self.config = config_manager
        self.credentials = credential_store
        self.logger = logging.getLogger('phrase_generator')

        self.endpoint = self.config.get('llm.endpoint')
        self.model = self.config.get('llm.model')
        self.max_tokens = self.config.get('llm.max_tokens')
        self.temperature = self.config.get('llm.temperature')
        self.timeout = self.config.get('llm.timeout')
        self.max_words = min(self.config.get('comments.max_words', MAX_WORDS), MAX_WORDS)

        self.client_factory = client_factory or self._default_client

    def _default_client(self, api_key: str) -> AsyncOpenAI:
        kwargs = {'api_key': api_key, 'base_url': self.endpoint, 'max_retries': 0}
        if self.timeout:
            kwargs['timeout'] = self.timeout
        return AsyncOpenAI(**kwargs)

    async def generate(self, snippet: str, language: str) -> str:
        """
        Generate one phrase for a snippet.

        Args:
            snippet: Code context, at most a couple of thousand characters
            language: Language tag used to label the code in the prompt

        Returns:
            Phrase of at most max_words words

        Raises:
            CredentialMissing: No API key is stored
            Unauthorized: The service rejected the API key
            RateLimited: The service is throttling requests
            ServiceError: Any other failure, including an empty completion
        """
        api_key = self.credentials.get()
        if not api_key:
            raise CredentialMissing()

        request = {
            'model': self.model,
            'max_tokens': self.max_tokens,
            'messages': [{'role': 'user', 'content': build_prompt(snippet, language)}],
        }
        if self.temperature is not None:
            request['temperature'] = self.temperature

        self.logger.info(f"Requesting phrase from {self.model} ({len(snippet)} characters of {language})")
        start_time = time.time()

        client = None
        try:
            client = self.client_factory(api_key)
            response = await client.chat.completions.create(**request)
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            self.logger.error(f"OpenAI rejected the API key: HTTP {e.status_code}")
            raise Unauthorized() from e
        except openai.RateLimitError as e:
            self.logger.error("OpenAI rate limit exceeded")
            raise RateLimited() from e
        except openai.APIStatusError as e:
            self.logger.error(f"OpenAI request failed: HTTP {e.status_code}")
            raise ServiceError(f"OpenAI request failed: HTTP {e.status_code}") from e
        except openai.OpenAIError as e:
            self.logger.error(f"OpenAI request failed: {e}")
            raise ServiceError(f"OpenAI request failed: {e}") from e
        finally:
            if client is not None:
                await client.close()

        self.logger.info(f"Phrase request completed in {time.time() - start_time:.2f} seconds")

        return self._parse_response(response)

    def _parse_response(self, response: Any) -> str:
        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            self.logger.error(f"Malformed completion response: {e}")
            raise ServiceError("Malformed response from OpenAI") from e

        try:
            phrase = BrainrotPhrase(text=truncate_words(content or "", self.max_words))
        except ValidationError as e:
            self.logger.error("OpenAI returned an empty completion")
            raise ServiceError("Empty response from OpenAI") from e

        self.logger.debug(f"Generated phrase: {phrase.text}")
        return phrase.text

    async def try_generate(self, snippet: str, language: str) -> GenerationResult:
        """
        Generate a phrase, capturing failures instead of raising them.

        Returns:
            GenerationResult holding the phrase or the GenerationError
        """
        try:
            text = await self.generate(snippet, language)
        except GenerationError as e:
            return GenerationResult.failure(e)
        return GenerationResult.success(BrainrotPhrase(text=text))
