"""Tests for TavusClient configuration and the resource operations."""

import pytest

from tavus_cli import TavusClient, configure, get_configuration, reset_configuration
from tavus_cli.core.config import DEFAULT_BASE_URL, Configuration
from tavus_cli.core.errors import ArgumentError, ConfigurationError, RateLimitError

BASE = "https://api.test"


@pytest.fixture
def client(transport) -> TavusClient:
    return TavusClient(api_key="k", base_url=BASE)


# =============================================================================
# Configuration
# =============================================================================


class TestConfiguration:
    def test_missing_api_key(self, transport):
        with pytest.raises(ConfigurationError):
            TavusClient()
        assert transport.requests == []

    def test_empty_api_key(self, transport):
        with pytest.raises(ConfigurationError):
            TavusClient(api_key="")

    def test_defaults(self):
        client = TavusClient(api_key="k")
        assert client.configuration == Configuration(api_key="k", base_url=DEFAULT_BASE_URL, timeout=30)

    def test_configure_sets_process_defaults(self):
        configure(api_key="global", base_url="https://proxy.test/", timeout=5)
        client = TavusClient()
        assert client.configuration.api_key == "global"
        assert client.configuration.base_url == "https://proxy.test"
        assert client.configuration.timeout == 5

    def test_explicit_arguments_win_over_defaults(self):
        configure(api_key="global")
        assert TavusClient(api_key="local").configuration.api_key == "local"

    def test_reset_configuration(self):
        configure(api_key="global")
        reset_configuration()
        assert get_configuration() == Configuration()
        with pytest.raises(ConfigurationError):
            TavusClient()

    def test_environment_fallback(self, monkeypatch):
        monkeypatch.setenv("TAVUS_API_KEY", "env-key")
        monkeypatch.setenv("TAVUS_BASE_URL", "https://env.test")
        monkeypatch.setenv("TAVUS_TIMEOUT", "7.5")
        config = TavusClient().configuration
        assert config.api_key == "env-key"
        assert config.base_url == "https://env.test"
        assert config.timeout == 7.5

    def test_configure_wins_over_environment_even_with_default_values(self, monkeypatch):
        monkeypatch.setenv("TAVUS_BASE_URL", "https://env.test")
        monkeypatch.setenv("TAVUS_TIMEOUT", "5")
        configure(api_key="global", base_url=DEFAULT_BASE_URL, timeout=30)

        config = TavusClient().configuration
        assert (config.base_url, config.timeout) == (DEFAULT_BASE_URL, 30)

    def test_environment_applies_again_after_reset(self, monkeypatch):
        monkeypatch.setenv("TAVUS_BASE_URL", "https://env.test")
        configure(base_url=DEFAULT_BASE_URL)
        reset_configuration()
        assert TavusClient(api_key="k").configuration.base_url == "https://env.test"

    def test_bad_timeout_env(self, monkeypatch):
        monkeypatch.setenv("TAVUS_TIMEOUT", "soon")
        with pytest.raises(ConfigurationError):
            TavusClient(api_key="k")

    def test_configuration_object(self):
        config = Configuration(api_key="k", base_url=BASE, timeout=3)
        assert TavusClient(configuration=config).configuration is config

    def test_configuration_object_trailing_slash(self, transport):
        client = TavusClient(configuration=Configuration(api_key="k", base_url="https://x.test/"))
        assert client.configuration.base_url == "https://x.test"

        client.personas.list()
        assert transport.last.url == "https://x.test/v2/personas"

    def test_facades_are_identity_stable(self, client):
        assert client.personas is client.personas
        assert client.videos is client.videos


# =============================================================================
# End-to-end scenarios
# =============================================================================


class TestScenarios:
    def test_create_persona(self, client, transport):
        transport.respond(200, {"persona_id": "p123"})

        result = client.personas.create(system_prompt="p")

        assert result == {"persona_id": "p123"}
        assert transport.last.method == "POST"
        assert transport.last.url == f"{BASE}/v2/personas"
        assert transport.last.json == {"system_prompt": "p"}
        assert transport.last.header("x-api-key") == "k"

    def test_video_without_script_or_audio(self, client, transport):
        with pytest.raises(ArgumentError):
            client.videos.create(replica_id="r1")
        assert transport.requests == []

    def test_guardrails_patch(self, client, transport):
        transport.respond(200, {})
        operations = [{"op": "replace", "path": "/data/0/x", "value": "y"}]

        assert client.guardrails.patch("g1", operations) == {}
        assert transport.last.method == "PATCH"
        assert transport.last.url == f"{BASE}/v2/guardrails/g1"
        assert transport.last.json == operations

    def test_rate_limit(self, client, transport):
        transport.respond(429, {"error": "anything"})
        with pytest.raises(RateLimitError) as exc:
            client.conversations.list()
        assert exc.value.message == "Rate limit exceeded"


# =============================================================================
# Patchable resources
# =============================================================================


@pytest.mark.parametrize("resource", ["personas", "objectives", "guardrails"])
class TestPatchable:
    def test_update_field(self, client, transport, resource):
        getattr(client, resource).update_field("id1", "/name", "New")
        assert transport.last.method == "PATCH"
        assert transport.last.url == f"{BASE}/v2/{resource}/id1"
        assert transport.last.json == [{"op": "replace", "path": "/name", "value": "New"}]

    def test_invalid_operations_are_not_sent(self, client, transport, resource):
        with pytest.raises(ArgumentError):
            getattr(client, resource).patch("id1", [{"op": "bogus", "path": "/x"}])
        with pytest.raises(ArgumentError):
            getattr(client, resource).patch("id1", [])
        assert transport.requests == []

    def test_build_patch_operation(self, client, resource):
        operations = getattr(client, resource)
        assert operations.build_patch_operation("/x", 1, "remove") == {"op": "remove", "path": "/x"}

    def test_crud(self, client, transport, resource):
        operations = getattr(client, resource)

        operations.get("id1")
        assert (transport.last.method, transport.last.url) == ("GET", f"{BASE}/v2/{resource}/id1")

        operations.list(limit=5, page=2)
        assert transport.last.url == f"{BASE}/v2/{resource}?limit=5&page=2"

        operations.delete("id1")
        assert (transport.last.method, transport.last.url) == ("DELETE", f"{BASE}/v2/{resource}/id1")

    def test_empty_id(self, client, transport, resource):
        with pytest.raises(ArgumentError):
            getattr(client, resource).get("")
        assert transport.requests == []


# =============================================================================
# Conversations
# =============================================================================


class TestConversations:
    def test_create(self, client, transport):
        client.conversations.create(
            replica_id="r1",
            persona_id="p1",
            conversation_name="Demo",
            test_mode=True,
            extra={"custom_field": 1},
        )
        assert transport.last.url == f"{BASE}/v2/conversations"
        assert transport.last.json == {
            "replica_id": "r1",
            "persona_id": "p1",
            "conversation_name": "Demo",
            "test_mode": True,
            "custom_field": 1,
        }

    def test_create_without_fields_sends_no_body(self, client, transport):
        client.conversations.create()
        assert transport.last.method == "POST"
        assert transport.last.data is None

    def test_list_passes_query_through(self, client, transport):
        client.conversations.list(status="active", limit=10)
        assert transport.last.url == f"{BASE}/v2/conversations?status=active&limit=10"

    def test_end(self, client, transport):
        client.conversations.end("c1")
        assert (transport.last.method, transport.last.url) == ("POST", f"{BASE}/v2/conversations/c1/end")
        assert transport.last.data is None

    def test_delete(self, client, transport):
        transport.respond(204)
        assert client.conversations.delete("c1") == {"success": True}
        assert transport.last.url == f"{BASE}/v2/conversations/c1"


# =============================================================================
# Replicas
# =============================================================================


class TestReplicas:
    def test_create(self, client, transport):
        client.replicas.create("https://videos.test/train.mp4", replica_name="Me")
        assert transport.last.json == {"train_video_url": "https://videos.test/train.mp4", "replica_name": "Me"}

    def test_create_requires_video(self, client, transport):
        with pytest.raises(ArgumentError):
            client.replicas.create("")
        assert transport.requests == []

    def test_get_verbose_flag(self, client, transport):
        client.replicas.get("r1")
        assert transport.last.url == f"{BASE}/v2/replicas/r1"

        client.replicas.get("r1", verbose=True)
        assert transport.last.url == f"{BASE}/v2/replicas/r1?verbose=true"

    def test_delete_hard_flag(self, client, transport):
        client.replicas.delete("r1")
        assert transport.last.url == f"{BASE}/v2/replicas/r1"

        client.replicas.delete("r1", hard=True)
        assert transport.last.url == f"{BASE}/v2/replicas/r1?hard=true"

    def test_list(self, client, transport):
        client.replicas.list(replica_ids="r1,r2", verbose=True)
        assert transport.last.url == f"{BASE}/v2/replicas?replica_ids=r1%2Cr2&verbose=true"

    def test_rename(self, client, transport):
        client.replicas.rename("r1", "New")
        assert (transport.last.method, transport.last.url) == ("PATCH", f"{BASE}/v2/replicas/r1/name")
        assert transport.last.json == {"replica_name": "New"}


# =============================================================================
# Objectives / Guardrails create
# =============================================================================


class TestObjectives:
    def test_create(self, client, transport):
        data = [{"objective_name": "greet", "objective_prompt": "Say hello"}]
        client.objectives.create(data)
        assert transport.last.json == {"data": data}

    @pytest.mark.parametrize("data", [[], {}, "objectives", None])
    def test_create_requires_non_empty_list(self, client, transport, data):
        with pytest.raises(ArgumentError):
            client.objectives.create(data)
        assert transport.requests == []


class TestGuardrails:
    def test_create(self, client, transport):
        client.guardrails.create(name="Safety", data=[{"guardrails_prompt": "No medical advice"}])
        assert transport.last.json == {"name": "Safety", "data": [{"guardrails_prompt": "No medical advice"}]}

    def test_create_omits_empty_data(self, client, transport):
        client.guardrails.create(name="Safety", data=[])
        assert transport.last.json == {"name": "Safety"}


# =============================================================================
# Documents
# =============================================================================


class TestDocuments:
    def test_create(self, client, transport):
        client.documents.create("https://docs.test/a.pdf", tags=["faq"])
        assert transport.last.json == {"document_url": "https://docs.test/a.pdf", "tags": ["faq"]}

    def test_update_sends_mapping(self, client, transport):
        client.documents.update("d1", document_name="Renamed")
        assert (transport.last.method, transport.last.url) == ("PATCH", f"{BASE}/v2/documents/d1")
        assert transport.last.json == {"document_name": "Renamed"}

    def test_list(self, client, transport):
        client.documents.list(sort="ascending", tags="faq,help")
        assert transport.last.url == f"{BASE}/v2/documents?sort=ascending&tags=faq%2Chelp"


# =============================================================================
# Videos
# =============================================================================


class TestVideos:
    def test_create_from_script(self, client, transport):
        client.videos.create("r1", script="Hello", video_name="Intro")
        assert transport.last.url == f"{BASE}/v2/videos"
        assert transport.last.json == {"replica_id": "r1", "script": "Hello", "video_name": "Intro"}

    def test_audio_url_from_extra_counts(self, client, transport):
        client.videos.create("r1", extra={"audio_url": "https://audio.test/a.mp3"})
        assert transport.last.json == {"replica_id": "r1", "audio_url": "https://audio.test/a.mp3"}

    def test_generate_helpers(self, client, transport):
        client.videos.generate_from_text("r1", "Hello", fast=True)
        assert transport.last.json == {"replica_id": "r1", "script": "Hello", "fast": True}

        client.videos.generate_from_audio("r1", "https://audio.test/a.mp3")
        assert transport.last.json == {"replica_id": "r1", "audio_url": "https://audio.test/a.mp3"}

    def test_get_delete_rename(self, client, transport):
        client.videos.get("v1", verbose=True)
        assert transport.last.url == f"{BASE}/v2/videos/v1?verbose=true"

        client.videos.delete("v1", hard=True)
        assert (transport.last.method, transport.last.url) == ("DELETE", f"{BASE}/v2/videos/v1?hard=true")

        client.videos.rename("v1", "Outro")
        assert transport.last.url == f"{BASE}/v2/videos/v1/name"
        assert transport.last.json == {"video_name": "Outro"}
