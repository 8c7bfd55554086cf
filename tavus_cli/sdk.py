"""
Tavus SDK - High-level client with one operations object per resource.

Built on top of the core APIClient. Responses are returned as the API sends
them (parsed JSON); resource payloads are not interpreted here.
"""

import builtins
from typing import Any

from tavus_cli.core.client import APIClient
from tavus_cli.core.config import Configuration, resolve_configuration
from tavus_cli.core.errors import ArgumentError
from tavus_cli.core.patch import build_patch_operation, validate_patch_operations


def _body(extra: dict[str, Any] | None = None, **fields: Any) -> dict[str, Any]:
    """Merge named fields over the extra passthrough fields, dropping unset ones."""
    body: dict[str, Any] = dict(extra or {})
    body.update({k: v for k, v in fields.items() if v is not None})
    return body


class TavusClient:
    """
    High-level Tavus API client.

    Example:
        client = TavusClient(api_key="...")

        persona = client.personas.create(system_prompt="You are a helpful tutor")
        client.personas.update_field(persona["persona_id"], "/persona_name", "Tutor")

        conversation = client.conversations.create(
            replica_id="r123",
            persona_id=persona["persona_id"],
        )

    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        configuration: Configuration | None = None,
    ):
        """
        Initialize the Tavus client.

        Args:
            api_key: Tavus API key (or configure() default, or TAVUS_API_KEY env var)
            base_url: API base URL (or configure() default, or TAVUS_BASE_URL env var)
            timeout: Request timeout in seconds, for both connect and read
            configuration: A ready-made Configuration; overrides the other arguments

        Raises:
            ConfigurationError: If no API key is available

        """
        if configuration is None:
            configuration = resolve_configuration(api_key=api_key, base_url=base_url, timeout=timeout)
        self._client = APIClient(configuration)

        # Sub-clients for each resource. They hold no state of their own.
        self.conversations = ConversationOperations(self._client)
        self.personas = PersonaOperations(self._client)
        self.replicas = ReplicaOperations(self._client)
        self.objectives = ObjectiveOperations(self._client)
        self.guardrails = GuardrailOperations(self._client)
        self.documents = DocumentOperations(self._client)
        self.videos = VideoOperations(self._client)

    @property
    def configuration(self) -> Configuration:
        """Get the configuration this client was built with."""
        return self._client.configuration


# =============================================================================
# Shared resource behaviour
# =============================================================================


class ResourceOperations:
    """Get/list/delete for a `/v2/<resource>` collection."""

    path = ""

    def __init__(self, client: APIClient):
        self._client = client

    def _item_path(self, resource_id: str) -> str:
        if not resource_id:
            raise ArgumentError(f"{type(self).__name__}: resource ID is required")
        return f"{self.path}/{resource_id}"

    def get(self, resource_id: str) -> dict[str, Any]:
        """
        Get a single resource by ID.

        Args:
            resource_id: The resource ID

        Returns:
            Resource details

        """
        return self._client.get(self._item_path(resource_id))

    def list(self, **params: Any) -> dict[str, Any]:
        """
        List resources.

        Args:
            **params: Query parameters passed through verbatim (limit, page, ...)

        Returns:
            API response with the page of resources and total count

        """
        return self._client.get(self.path, params)

    def delete(self, resource_id: str) -> dict[str, Any]:
        """Delete a resource by ID."""
        return self._client.delete(self._item_path(resource_id))


class PatchableOperations(ResourceOperations):
    """Resources updated with JSON Patch operation lists."""

    def patch(self, resource_id: str, operations: builtins.list[dict[str, Any]]) -> dict[str, Any]:
        """
        Update a resource with JSON Patch operations.

        Args:
            resource_id: The resource ID
            operations: List of operations, e.g.
                [{"op": "replace", "path": "/persona_name", "value": "Wellness Advisor"},
                 {"op": "remove", "path": "/layers/stt/hotwords"}]

        Returns:
            API response

        Raises:
            ArgumentError: If the operations are malformed (nothing is sent)

        """
        path = self._item_path(resource_id)
        operations = validate_patch_operations(operations)
        return self._client.patch(path, operations)

    @staticmethod
    def build_patch_operation(path: str, value: Any = None, op: str = "replace") -> dict[str, Any]:
        """Build a single JSON Patch operation (see tavus_cli.core.patch)."""
        return build_patch_operation(path, value, op)

    def update_field(self, resource_id: str, path: str, value: Any) -> dict[str, Any]:
        """
        Replace a single field.

        Args:
            resource_id: The resource ID
            path: JSON Pointer to the field (e.g. "/persona_name")
            value: The new value

        Returns:
            API response

        """
        return self.patch(resource_id, [build_patch_operation(path, value, "replace")])


# =============================================================================
# Conversation Operations
# =============================================================================


class ConversationOperations(ResourceOperations):
    """Operations for real-time conversations with a replica."""

    path = "/v2/conversations"

    def create(
        self,
        replica_id: str | None = None,
        persona_id: str | None = None,
        *,
        audio_only: bool | None = None,
        callback_url: str | None = None,
        conversation_name: str | None = None,
        conversational_context: str | None = None,
        custom_greeting: str | None = None,
        memory_stores: builtins.list[str] | None = None,
        document_ids: builtins.list[str] | None = None,
        document_retrieval_strategy: str | None = None,
        document_tags: builtins.list[str] | None = None,
        test_mode: bool | None = None,
        properties: dict[str, Any] | None = None,
        extra: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Create a new conversation.

        Args:
            replica_id: The replica to talk to
            persona_id: The persona driving the replica
            audio_only: Voice-only interaction
            callback_url: URL that receives webhooks
            conversation_name: Name for the conversation
            conversational_context: Extra context for the conversation
            custom_greeting: Greeting spoken by the replica
            memory_stores: Memory stores to use
            document_ids: Documents the persona can access
            document_retrieval_strategy: speed, quality or balanced
            document_tags: Document tags the replica can access
            test_mode: Create the conversation without the replica joining
            properties: Conversation properties
            extra: Additional API fields passed through unchanged

        Returns:
            The created conversation

        """
        body = _body(
            extra,
            audio_only=audio_only,
            callback_url=callback_url,
            conversation_name=conversation_name,
            conversational_context=conversational_context,
            custom_greeting=custom_greeting,
            memory_stores=memory_stores,
            document_ids=document_ids,
            document_retrieval_strategy=document_retrieval_strategy,
            document_tags=document_tags,
            test_mode=test_mode,
            properties=properties,
            replica_id=replica_id,
            persona_id=persona_id,
        )
        return self._client.post(self.path, body)

    def end(self, conversation_id: str) -> dict[str, Any]:
        """
        End an active conversation.

        Args:
            conversation_id: The conversation ID

        Returns:
            API response

        """
        return self._client.post(f"{self._item_path(conversation_id)}/end")


# =============================================================================
# Persona Operations
# =============================================================================


class PersonaOperations(PatchableOperations):
    """Operations for managing personas."""

    path = "/v2/personas"

    def create(
        self,
        system_prompt: str | None = None,
        *,
        persona_name: str | None = None,
        pipeline_mode: str | None = None,
        context: str | None = None,
        default_replica_id: str | None = None,
        document_ids: builtins.list[str] | None = None,
        document_tags: builtins.list[str] | None = None,
        layers: dict[str, Any] | None = None,
        extra: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Create a new persona.

        Args:
            system_prompt: System prompt for the LLM (required in full pipeline mode)
            persona_name: Name for the persona
            pipeline_mode: full or echo
            context: Context for the LLM
            default_replica_id: Replica used when a conversation names none
            document_ids: Documents the persona can access
            document_tags: Document tags the persona can access
            layers: Perception, STT, LLM and TTS layer configuration
            extra: Additional API fields passed through unchanged

        Returns:
            The created persona

        """
        body = _body(
            extra,
            persona_name=persona_name,
            pipeline_mode=pipeline_mode,
            context=context,
            default_replica_id=default_replica_id,
            document_ids=document_ids,
            document_tags=document_tags,
            layers=layers,
            system_prompt=system_prompt,
        )
        return self._client.post(self.path, body)


# =============================================================================
# Replica Operations
# =============================================================================


class ReplicaOperations(ResourceOperations):
    """Operations for training and managing replicas."""

    path = "/v2/replicas"

    def create(
        self,
        train_video_url: str,
        *,
        consent_video_url: str | None = None,
        callback_url: str | None = None,
        replica_name: str | None = None,
        model_name: str | None = None,
        properties: dict[str, Any] | None = None,
        extra: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Start training a new replica.

        Args:
            train_video_url: Direct link to the training video
            consent_video_url: Direct link to the consent video
            callback_url: URL called when training completes
            replica_name: Name for the replica
            model_name: Model version (the API defaults to phoenix-3)
            properties: Additional properties
            extra: Additional API fields passed through unchanged

        Returns:
            The created replica

        Raises:
            ArgumentError: If train_video_url is empty

        """
        if not train_video_url:
            raise ArgumentError("train_video_url is required")
        body = _body(
            extra,
            consent_video_url=consent_video_url,
            callback_url=callback_url,
            replica_name=replica_name,
            model_name=model_name,
            properties=properties,
            train_video_url=train_video_url,
        )
        return self._client.post(self.path, body)

    def get(self, resource_id: str, verbose: bool = False) -> dict[str, Any]:
        """
        Get a replica by ID.

        Args:
            resource_id: The replica ID
            verbose: Include additional replica data

        Returns:
            Replica details

        """
        params = {"verbose": True} if verbose else None
        return self._client.get(self._item_path(resource_id), params)

    def delete(self, resource_id: str, hard: bool = False) -> dict[str, Any]:
        """
        Delete a replica.

        Args:
            resource_id: The replica ID
            hard: Also delete the replica's assets. This cannot be undone.

        Returns:
            API response

        """
        params = {"hard": True} if hard else None
        return self._client.delete(self._item_path(resource_id), params)

    def rename(self, replica_id: str, replica_name: str) -> dict[str, Any]:
        """Rename a replica."""
        return self._client.patch(f"{self._item_path(replica_id)}/name", {"replica_name": replica_name})


# =============================================================================
# Objective Operations
# =============================================================================


class ObjectiveOperations(PatchableOperations):
    """Operations for managing conversation objectives."""

    path = "/v2/objectives"

    def create(self, data: builtins.list[dict[str, Any]]) -> dict[str, Any]:
        """
        Create objectives.

        Args:
            data: List of objective definitions

        Returns:
            The created objectives

        Raises:
            ArgumentError: If data is not a non-empty list

        """
        if not isinstance(data, (builtins.list, tuple)):
            raise ArgumentError("data must be a list")
        if not data:
            raise ArgumentError("data cannot be empty")
        return self._client.post(self.path, {"data": builtins.list(data)})


# =============================================================================
# Guardrail Operations
# =============================================================================


class GuardrailOperations(PatchableOperations):
    """Operations for managing guardrails."""

    path = "/v2/guardrails"

    def create(
        self,
        name: str | None = None,
        data: builtins.list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """
        Create a set of guardrails.

        Args:
            name: Name for the collection of guardrails
            data: List of individual guardrails (omitted when empty)

        Returns:
            The created guardrails

        """
        body: dict[str, Any] = {}
        if name:
            body["name"] = name
        if data:
            body["data"] = builtins.list(data)
        return self._client.post(self.path, body)


# =============================================================================
# Document Operations
# =============================================================================


class DocumentOperations(ResourceOperations):
    """Operations for the knowledge base."""

    path = "/v2/documents"

    def create(
        self,
        document_url: str,
        *,
        document_name: str | None = None,
        callback_url: str | None = None,
        properties: dict[str, Any] | None = None,
        tags: builtins.list[str] | None = None,
        extra: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Add a document to the knowledge base.

        Args:
            document_url: URL of the document to process
            document_name: Name for the document
            callback_url: URL for processing status updates
            properties: Additional key-value properties
            tags: Tags to categorize the document
            extra: Additional API fields passed through unchanged

        Returns:
            The created document

        Raises:
            ArgumentError: If document_url is empty

        """
        if not document_url:
            raise ArgumentError("document_url is required")
        body = _body(
            extra,
            document_name=document_name,
            callback_url=callback_url,
            properties=properties,
            tags=tags,
            document_url=document_url,
        )
        return self._client.post(self.path, body)

    def update(
        self,
        document_id: str,
        *,
        document_name: str | None = None,
        tags: builtins.list[str] | None = None,
        extra: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Update a document's metadata.

        Args:
            document_id: The document ID
            document_name: New name
            tags: New tags (replaces the existing ones)
            extra: Additional API fields passed through unchanged

        Returns:
            The updated document

        """
        body = _body(extra, document_name=document_name, tags=tags)
        return self._client.patch(self._item_path(document_id), body)


# =============================================================================
# Video Operations
# =============================================================================


class VideoOperations(ResourceOperations):
    """Operations for generating videos with a replica."""

    path = "/v2/videos"

    def create(
        self,
        replica_id: str,
        *,
        script: str | None = None,
        audio_url: str | None = None,
        video_name: str | None = None,
        background_url: str | None = None,
        background_source_url: str | None = None,
        callback_url: str | None = None,
        fast: bool | None = None,
        transparent_background: bool | None = None,
        watermark_image_url: str | None = None,
        properties: dict[str, Any] | None = None,
        extra: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Generate a new video.

        Args:
            replica_id: The replica that speaks in the video
            script: Text script (required if no audio_url)
            audio_url: Audio file URL (required if no script)
            video_name: Name for the video
            background_url: Website to use as background
            background_source_url: Direct link to a background video
            callback_url: URL called when rendering completes
            fast: Use the fast rendering process
            transparent_background: Transparent background (requires fast=True)
            watermark_image_url: Watermark image URL
            properties: Additional properties
            extra: Additional API fields passed through unchanged

        Returns:
            The created video

        Raises:
            ArgumentError: If neither script nor audio_url is given (nothing is sent)

        """
        body = _body(
            extra,
            script=script,
            audio_url=audio_url,
            video_name=video_name,
            background_url=background_url,
            background_source_url=background_source_url,
            callback_url=callback_url,
            fast=fast,
            transparent_background=transparent_background,
            watermark_image_url=watermark_image_url,
            properties=properties,
            replica_id=replica_id,
        )
        if not body.get("replica_id"):
            raise ArgumentError("replica_id is required")
        if not body.get("script") and not body.get("audio_url"):
            raise ArgumentError("Either script or audio_url must be provided")
        return self._client.post(self.path, body)

    def generate_from_text(self, replica_id: str, script: str, **options: Any) -> dict[str, Any]:
        """Generate a video from a text script."""
        return self.create(replica_id, script=script, **options)

    def generate_from_audio(self, replica_id: str, audio_url: str, **options: Any) -> dict[str, Any]:
        """Generate a video from an audio file."""
        return self.create(replica_id, audio_url=audio_url, **options)

    def get(self, resource_id: str, verbose: bool = False) -> dict[str, Any]:
        """
        Get a video by ID.

        Args:
            resource_id: The video ID
            verbose: Include additional data such as thumbnails

        Returns:
            Video details

        """
        params = {"verbose": True} if verbose else None
        return self._client.get(self._item_path(resource_id), params)

    def delete(self, resource_id: str, hard: bool = False) -> dict[str, Any]:
        """
        Delete a video.

        Args:
            resource_id: The video ID
            hard: Also delete the video's assets. This cannot be undone.

        Returns:
            API response

        """
        params = {"hard": True} if hard else None
        return self._client.delete(self._item_path(resource_id), params)

    def rename(self, video_id: str, video_name: str) -> dict[str, Any]:
        """Rename a video."""
        return self._client.patch(f"{self._item_path(video_id)}/name", {"video_name": video_name})
