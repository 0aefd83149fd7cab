import httpx
import openai
import pytest

from brainrot.credential_store import CredentialStore
from brainrot.errors import (
    ConfigError,
    CredentialMissing,
    RateLimited,
    ServiceError,
    Unauthorized,
)
from brainrot.models import BrainrotPhrase
from brainrot.phrase_generator import PhraseGenerator, build_prompt
from tests.conftest import API_KEY, COMPLETIONS_URL, FakeClientFactory, status_error


@pytest.mark.asyncio
async def test_generate_returns_phrase(generator, client_factory):
    phrase = await generator.generate("x = 1", "python")

    assert phrase == "no cap this code is bussin fr fr"
    assert client_factory.api_keys == [API_KEY]
    assert client_factory.clients[0].closed


@pytest.mark.asyncio
async def test_request_shape(generator, client_factory):
    await generator.generate("SELECT 1", "sql")

    assert len(client_factory.calls) == 1
    request = client_factory.calls[0]
    assert request["model"] == "gpt-4o-mini"
    assert request["max_tokens"] == 50
    assert len(request["messages"]) == 1
    message = request["messages"][0]
    assert message["role"] == "user"
    assert "SELECT 1" in message["content"]
    assert "sql" in message["content"]


def test_prompt_embeds_snippet_and_language():
    prompt = build_prompt("fn main() {}", "rust")
    assert "```rust\nfn main() {}\n```" in prompt
    assert "under 15 words" in prompt


@pytest.mark.asyncio
async def test_phrase_truncated_to_fifty_words(config, keyed_store):
    factory = FakeClientFactory(content=" ".join(f"w{i}" for i in range(80)))
    generator = PhraseGenerator(config, keyed_store, client_factory=factory)

    phrase = await generator.generate("code", "python")

    assert phrase.split() == [f"w{i}" for i in range(50)]


@pytest.mark.asyncio
async def test_whitespace_collapsed_and_quotes_stripped(config, keyed_store):
    factory = FakeClientFactory(content='  "this   loop\n is lowkey mid"  ')
    generator = PhraseGenerator(config, keyed_store, client_factory=factory)

    assert await generator.generate("code", "python") == "this loop is lowkey mid"


@pytest.mark.parametrize("raw, expected", [
    ("this loop be runnin' ", "this loop be runnin'"),
    ("`self` said no cap", "`self` said no cap"),
    ("'sigma' grindset, 'no' sleep", "'sigma' grindset, 'no' sleep"),
    ('"quoted"', "quoted"),
    ("'single'", "single"),
    ("“curly”", "curly"),
    ("‘curly single’", "curly single"),
    ('"unbalanced', '"unbalanced'),
])
def test_only_enclosing_quote_pair_is_stripped(raw, expected):
    assert BrainrotPhrase(text=raw).text == expected


@pytest.mark.asyncio
async def test_missing_credential(config, store, client_factory):
    generator = PhraseGenerator(config, store, client_factory=client_factory)

    with pytest.raises(CredentialMissing):
        await generator.generate("code", "python")
    assert client_factory.api_keys == []


@pytest.mark.asyncio
async def test_unreadable_secrets_file_is_missing_credential(config, tmp_path, client_factory):
    generator = PhraseGenerator(config, CredentialStore(str(tmp_path)), client_factory=client_factory)

    with pytest.raises(CredentialMissing):
        await generator.generate("code", "python")
    assert client_factory.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ["", "   ", None, '""'])
async def test_empty_completion_is_service_error(config, keyed_store, content):
    factory = FakeClientFactory(content=content)
    generator = PhraseGenerator(config, keyed_store, client_factory=factory)

    with pytest.raises(ServiceError):
        await generator.generate("code", "python")


@pytest.mark.asyncio
@pytest.mark.parametrize("error, expected", [
    (status_error(openai.AuthenticationError, 401), Unauthorized),
    (status_error(openai.PermissionDeniedError, 403), Unauthorized),
    (status_error(openai.RateLimitError, 429), RateLimited),
    (status_error(openai.InternalServerError, 500), ServiceError),
    (status_error(openai.BadRequestError, 400), ServiceError),
    (openai.APIConnectionError(request=httpx.Request("POST", COMPLETIONS_URL)), ServiceError),
    (openai.APITimeoutError(request=httpx.Request("POST", COMPLETIONS_URL)), ServiceError),
])
async def test_service_errors_are_mapped(config, keyed_store, error, expected):
    factory = FakeClientFactory(error=error)
    generator = PhraseGenerator(config, keyed_store, client_factory=factory)

    with pytest.raises(expected):
        await generator.generate("code", "python")
    assert factory.clients[0].closed
    assert len(factory.calls) == 1


def failing_factory(api_key):
    raise openai.OpenAIError("bad base_url")


@pytest.mark.asyncio
async def test_client_construction_failure_is_service_error(config, keyed_store):
    generator = PhraseGenerator(config, keyed_store, client_factory=failing_factory)

    with pytest.raises(ServiceError, match="bad base_url"):
        await generator.generate("code", "python")


@pytest.mark.asyncio
async def test_client_construction_failure_is_captured(config, keyed_store):
    generator = PhraseGenerator(config, keyed_store, client_factory=failing_factory)

    result = await generator.try_generate("code", "python")

    assert not result.ok
    assert isinstance(result.error, ServiceError)


@pytest.mark.asyncio
async def test_no_retry_after_failure(config, keyed_store):
    factory = FakeClientFactory(error=status_error(openai.InternalServerError, 503))
    generator = PhraseGenerator(config, keyed_store, client_factory=factory)

    with pytest.raises(ServiceError):
        await generator.generate("code", "python")
    assert len(factory.clients) == 1


@pytest.mark.asyncio
async def test_every_call_is_a_fresh_request(generator, client_factory):
    await generator.generate("a", "python")
    await generator.generate("a", "python")
    assert len(client_factory.calls) == 2


@pytest.mark.asyncio
async def test_try_generate_success(generator):
    result = await generator.try_generate("code", "python")
    assert result.ok
    assert result.phrase_or("fallback") == "no cap this code is bussin fr fr"


@pytest.mark.asyncio
async def test_try_generate_failure_carries_error(config, store, client_factory):
    generator = PhraseGenerator(config, store, client_factory=client_factory)

    result = await generator.try_generate("code", "python")

    assert not result.ok
    assert isinstance(result.error, CredentialMissing)
    assert result.phrase_or("Brainrot comment") == "Brainrot comment"


def test_invalid_llm_config_rejected(config, keyed_store):
    config.set('llm.endpoint', 'ftp://example.com')
    with pytest.raises(ConfigError):
        PhraseGenerator(config, keyed_store)


def test_non_numeric_temperature_rejected(config, keyed_store):
    config.set('llm.temperature', 'hot')
    with pytest.raises(ConfigError, match="temperature"):
        PhraseGenerator(config, keyed_store)
