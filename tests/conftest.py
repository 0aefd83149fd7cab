"""Shared fixtures: fake OpenAI client, recording notifier, isolated config."""

import json
from contextlib import contextmanager
from types import SimpleNamespace

import httpx
import pytest

from brainrot.config import ConfigManager
from brainrot.credential_store import CredentialStore
from brainrot.notifications import Notifier
from brainrot.phrase_generator import PhraseGenerator

API_KEY = "sk-test-1234567890abcdef"
COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def status_error(error_class, status):
    """Build an openai APIStatusError subclass as the SDK raises it."""
    request = httpx.Request("POST", COMPLETIONS_URL)
    response = httpx.Response(status, request=request)
    return error_class(f"HTTP {status}", response=response, body=None)


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return completion(self.content)


class FakeClient:
    def __init__(self, content=None, error=None):
        self.completions = FakeCompletions(content, error)
        self.chat = SimpleNamespace(completions=self.completions)
        self.closed = False

    async def close(self):
        self.closed = True


class FakeClientFactory:
    """Stands in for AsyncOpenAI; records the keys and clients it hands out."""

    def __init__(self, content="no cap this code is bussin fr fr", error=None):
        self.content = content
        self.error = error
        self.api_keys = []
        self.clients = []

    def __call__(self, api_key):
        self.api_keys.append(api_key)
        client = FakeClient(self.content, self.error)
        self.clients.append(client)
        return client

    @property
    def calls(self):
        return [call for client in self.clients for call in client.completions.calls]


class RecordingNotifier(Notifier):
    def __init__(self):
        super().__init__()
        self.infos = []
        self.warnings = []
        self.errors = []
        self.progress_titles = []

    def show_info(self, message):
        self.infos.append(message)

    def show_warning(self, message):
        self.warnings.append(message)

    def show_error(self, message):
        self.errors.append(message)

    @contextmanager
    def progress(self, title):
        self.progress_titles.append(title)
        yield


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "brainrot_config.json"
    path.write_text(json.dumps({
        "credentials": {"secrets_file": str(tmp_path / "secrets" / "secrets.json")}
    }), encoding="utf-8")
    return path


@pytest.fixture
def config(config_file):
    return ConfigManager(str(config_file))


@pytest.fixture
def store(config):
    return CredentialStore(config.get('credentials.secrets_file'), config.get('credentials.key_name'))


@pytest.fixture
def keyed_store(store):
    store.store(API_KEY)
    return store


@pytest.fixture
def client_factory():
    return FakeClientFactory()


@pytest.fixture
def generator(config, keyed_store, client_factory):
    return PhraseGenerator(config, keyed_store, client_factory=client_factory)


@pytest.fixture
def notifier():
    return RecordingNotifier()
