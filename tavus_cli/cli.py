"""
Tavus CLI - Opinionated command-line interface.

This layer provides the user-facing CLI commands, using the SDK layer
for all operations. It handles:
- Argument parsing
- TTY detection for human vs machine output
- JSON output for piping/automation
"""

import argparse
import json
import logging
import sys
from typing import Any

from dotenv import load_dotenv

from tavus_cli.core.errors import ArgumentError, TavusError
from tavus_cli.logging import configure_logging, get_logger
from tavus_cli.sdk import TavusClient

logger = get_logger(__name__)

# =============================================================================
# Output Helpers
# =============================================================================


def is_tty() -> bool:
    """Check if stdout is a TTY (human) or pipe (LLM/machine)."""
    return sys.stdout.isatty()


def json_output(data: Any, pretty: bool = False) -> None:
    """Print JSON output."""
    indent = 2 if pretty or is_tty() else None
    print(json.dumps(data, indent=indent, default=str))


def error_output(error: TavusError) -> None:
    """Print error and exit."""
    json_output(error.to_dict())
    sys.exit(1)


def success_output(data: Any) -> None:
    """Print success output."""
    json_output(data)


# =============================================================================
# Input Helpers
# =============================================================================


def load_json_arg(value: str | None, flag: str) -> Any:
    """Parse a JSON argument, reading stdin when the value is '-'."""
    if value is None:
        return None
    try:
        if value == "-":
            return json.load(sys.stdin)
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise ArgumentError(f"Invalid JSON in {flag}: {e}")


def parse_value(value: str) -> Any:
    """Parse a value as JSON, falling back to the raw string."""
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


def list_params(args: argparse.Namespace, *names: str) -> dict[str, Any]:
    """Collect list query parameters that were given on the command line."""
    params = {name: getattr(args, name, None) for name in ("limit", "page", *names)}
    return {k: v for k, v in params.items() if v is not None}


# =============================================================================
# Conversation Commands
# =============================================================================


def cmd_conversations_create(client: TavusClient, args: argparse.Namespace) -> None:
    """Create a conversation."""
    result = client.conversations.create(
        replica_id=args.replica_id,
        persona_id=args.persona_id,
        conversation_name=args.name,
        conversational_context=args.context,
        custom_greeting=args.greeting,
        callback_url=args.callback_url,
        audio_only=True if args.audio_only else None,
        test_mode=True if args.test_mode else None,
        extra=load_json_arg(args.extra, "--extra"),
    )
    success_output(result)


def cmd_conversations_get(client: TavusClient, args: argparse.Namespace) -> None:
    """Get a conversation by ID."""
    success_output(client.conversations.get(args.conversation_id))


def cmd_conversations_list(client: TavusClient, args: argparse.Namespace) -> None:
    """List conversations."""
    success_output(client.conversations.list(**list_params(args, "status")))


def cmd_conversations_end(client: TavusClient, args: argparse.Namespace) -> None:
    """End a conversation."""
    success_output(client.conversations.end(args.conversation_id))


def cmd_conversations_delete(client: TavusClient, args: argparse.Namespace) -> None:
    """Delete a conversation."""
    client.conversations.delete(args.conversation_id)
    success_output({"success": True, "message": f"Conversation {args.conversation_id} deleted"})


# =============================================================================
# Persona Commands
# =============================================================================


def cmd_personas_create(client: TavusClient, args: argparse.Namespace) -> None:
    """Create a persona."""
    result = client.personas.create(
        system_prompt=args.system_prompt,
        persona_name=args.name,
        pipeline_mode=args.pipeline_mode,
        context=args.context,
        default_replica_id=args.default_replica_id,
        layers=load_json_arg(args.layers, "--layers"),
        extra=load_json_arg(args.extra, "--extra"),
    )
    success_output(result)


def cmd_personas_get(client: TavusClient, args: argparse.Namespace) -> None:
    """Get a persona by ID."""
    success_output(client.personas.get(args.persona_id))


def cmd_personas_list(client: TavusClient, args: argparse.Namespace) -> None:
    """List personas."""
    success_output(client.personas.list(**list_params(args, "persona_type")))


def cmd_personas_update(client: TavusClient, args: argparse.Namespace) -> None:
    """Replace a single persona field."""
    success_output(client.personas.update_field(args.persona_id, args.path, parse_value(args.value)))


def cmd_personas_delete(client: TavusClient, args: argparse.Namespace) -> None:
    """Delete a persona."""
    client.personas.delete(args.persona_id)
    success_output({"success": True, "message": f"Persona {args.persona_id} deleted"})


# =============================================================================
# Replica Commands
# =============================================================================


def cmd_replicas_create(client: TavusClient, args: argparse.Namespace) -> None:
    """Start training a replica."""
    result = client.replicas.create(
        args.train_video_url,
        consent_video_url=args.consent_video_url,
        callback_url=args.callback_url,
        replica_name=args.name,
        model_name=args.model_name,
        extra=load_json_arg(args.extra, "--extra"),
    )
    success_output(result)


def cmd_replicas_get(client: TavusClient, args: argparse.Namespace) -> None:
    """Get a replica by ID."""
    success_output(client.replicas.get(args.replica_id, verbose=args.verbose))


def cmd_replicas_list(client: TavusClient, args: argparse.Namespace) -> None:
    """List replicas."""
    params = list_params(args, "replica_type", "replica_ids")
    if args.verbose:
        params["verbose"] = True
    success_output(client.replicas.list(**params))


def cmd_replicas_rename(client: TavusClient, args: argparse.Namespace) -> None:
    """Rename a replica."""
    success_output(client.replicas.rename(args.replica_id, args.name))


def cmd_replicas_delete(client: TavusClient, args: argparse.Namespace) -> None:
    """Delete a replica."""
    client.replicas.delete(args.replica_id, hard=args.hard)
    success_output({"success": True, "message": f"Replica {args.replica_id} deleted"})


# =============================================================================
# Objective / Guardrail Commands
# =============================================================================


def cmd_objectives_create(client: TavusClient, args: argparse.Namespace) -> None:
    """Create objectives from a JSON list."""
    success_output(client.objectives.create(load_json_arg(args.data, "data")))


def cmd_guardrails_create(client: TavusClient, args: argparse.Namespace) -> None:
    """Create guardrails."""
    data = load_json_arg(args.data, "--data")
    success_output(client.guardrails.create(name=args.name, data=data))


def cmd_resource_get(client: TavusClient, args: argparse.Namespace) -> None:
    """Get a patchable resource by ID."""
    success_output(getattr(client, args.resource).get(args.resource_id))


def cmd_resource_list(client: TavusClient, args: argparse.Namespace) -> None:
    """List a patchable resource."""
    success_output(getattr(client, args.resource).list(**list_params(args)))


def cmd_resource_patch(client: TavusClient, args: argparse.Namespace) -> None:
    """Apply JSON Patch operations to a resource."""
    operations = load_json_arg(args.operations, "operations")
    success_output(getattr(client, args.resource).patch(args.resource_id, operations))


def cmd_resource_delete(client: TavusClient, args: argparse.Namespace) -> None:
    """Delete a resource."""
    getattr(client, args.resource).delete(args.resource_id)
    success_output({"success": True, "message": f"{args.resource} {args.resource_id} deleted"})


# =============================================================================
# Document Commands
# =============================================================================


def cmd_documents_create(client: TavusClient, args: argparse.Namespace) -> None:
    """Add a document to the knowledge base."""
    result = client.documents.create(
        args.document_url,
        document_name=args.name,
        callback_url=args.callback_url,
        tags=args.tag or None,
        extra=load_json_arg(args.extra, "--extra"),
    )
    success_output(result)


def cmd_documents_get(client: TavusClient, args: argparse.Namespace) -> None:
    """Get a document by ID."""
    success_output(client.documents.get(args.document_id))


def cmd_documents_list(client: TavusClient, args: argparse.Namespace) -> None:
    """List documents."""
    success_output(client.documents.list(**list_params(args, "sort", "status", "name_or_uuid", "tags")))


def cmd_documents_update(client: TavusClient, args: argparse.Namespace) -> None:
    """Update a document's name or tags."""
    result = client.documents.update(args.document_id, document_name=args.name, tags=args.tag or None)
    success_output(result)


def cmd_documents_delete(client: TavusClient, args: argparse.Namespace) -> None:
    """Delete a document."""
    client.documents.delete(args.document_id)
    success_output({"success": True, "message": f"Document {args.document_id} deleted"})


# =============================================================================
# Video Commands
# =============================================================================


def cmd_videos_create(client: TavusClient, args: argparse.Namespace) -> None:
    """Generate a video."""
    result = client.videos.create(
        args.replica_id,
        script=args.script,
        audio_url=args.audio_url,
        video_name=args.name,
        background_url=args.background_url,
        callback_url=args.callback_url,
        fast=True if args.fast else None,
        extra=load_json_arg(args.extra, "--extra"),
    )
    success_output(result)


def cmd_videos_get(client: TavusClient, args: argparse.Namespace) -> None:
    """Get a video by ID."""
    success_output(client.videos.get(args.video_id, verbose=args.verbose))


def cmd_videos_list(client: TavusClient, args: argparse.Namespace) -> None:
    """List videos."""
    success_output(client.videos.list(**list_params(args)))


def cmd_videos_rename(client: TavusClient, args: argparse.Namespace) -> None:
    """Rename a video."""
    success_output(client.videos.rename(args.video_id, args.name))


def cmd_videos_delete(client: TavusClient, args: argparse.Namespace) -> None:
    """Delete a video."""
    client.videos.delete(args.video_id, hard=args.hard)
    success_output({"success": True, "message": f"Video {args.video_id} deleted"})


# =============================================================================
# Main CLI
# =============================================================================


def _add_list_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--limit", "-l", type=int, help="Results per page")
    parser.add_argument("--page", "-p", type=int, help="Page number")


def _add_patchable(subparsers: Any, resource: str, singular: str) -> argparse._SubParsersAction:
    """Register get/list/patch/delete for a JSON Patch resource."""
    parser = subparsers.add_parser(resource, help=f"Manage {resource}")
    parser.set_defaults(func=lambda _c, _a: parser.print_help(), resource=resource)
    sub = parser.add_subparsers(dest="subcommand")

    get = sub.add_parser("get", help=f"Get {singular} details")
    get.add_argument("resource_id", help=f"{singular.capitalize()} ID")
    get.set_defaults(func=cmd_resource_get)

    lst = sub.add_parser("list", help=f"List {resource}")
    _add_list_args(lst)
    lst.set_defaults(func=cmd_resource_list)

    patch = sub.add_parser("patch", help="Apply JSON Patch operations")
    patch.add_argument("resource_id", help=f"{singular.capitalize()} ID")
    patch.add_argument("operations", help="JSON array of operations (or - for stdin)")
    patch.set_defaults(func=cmd_resource_patch)

    delete = sub.add_parser("delete", help=f"Delete {singular}")
    delete.add_argument("resource_id", help=f"{singular.capitalize()} ID")
    delete.set_defaults(func=cmd_resource_delete)

    return sub


def create_parser() -> argparse.ArgumentParser:  # noqa: PLR0915
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tavus",
        description="Tavus CLI - Command-line interface for the Tavus API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tavus personas create --system-prompt "You are a helpful tutor" --name Tutor
  tavus personas update <persona_id> /persona_name "Wellness Advisor"
  tavus conversations create --replica <replica_id> --persona <persona_id>
  tavus videos create <replica_id> --script "Hello there"
  tavus guardrails patch <id> '[{"op": "replace", "path": "/data/0/guardrails_prompt", "value": "..."}]'
""",
    )
    parser.add_argument("--debug", action="store_true", help="Log requests to stderr")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # ========== Conversations ==========
    conv = subparsers.add_parser("conversations", help="Manage conversations")
    conv.set_defaults(func=lambda _c, _a: conv.print_help())
    conv_sub = conv.add_subparsers(dest="subcommand")

    c_create = conv_sub.add_parser("create", help="Create a conversation")
    c_create.add_argument("--replica", dest="replica_id", help="Replica ID")
    c_create.add_argument("--persona", dest="persona_id", help="Persona ID")
    c_create.add_argument("--name", help="Conversation name")
    c_create.add_argument("--context", help="Conversational context")
    c_create.add_argument("--greeting", help="Custom greeting")
    c_create.add_argument("--callback-url", help="Webhook URL")
    c_create.add_argument("--audio-only", action="store_true", help="Voice-only conversation")
    c_create.add_argument("--test-mode", action="store_true", help="Create without the replica joining")
    c_create.add_argument("--extra", help="JSON object of additional fields (or - for stdin)")
    c_create.set_defaults(func=cmd_conversations_create)

    c_get = conv_sub.add_parser("get", help="Get conversation details")
    c_get.add_argument("conversation_id", help="Conversation ID")
    c_get.set_defaults(func=cmd_conversations_get)

    c_list = conv_sub.add_parser("list", help="List conversations")
    _add_list_args(c_list)
    c_list.add_argument("--status", choices=["active", "ended"], help="Filter by status")
    c_list.set_defaults(func=cmd_conversations_list)

    c_end = conv_sub.add_parser("end", help="End a conversation")
    c_end.add_argument("conversation_id", help="Conversation ID")
    c_end.set_defaults(func=cmd_conversations_end)

    c_delete = conv_sub.add_parser("delete", help="Delete a conversation")
    c_delete.add_argument("conversation_id", help="Conversation ID")
    c_delete.set_defaults(func=cmd_conversations_delete)

    # ========== Personas ==========
    pers = subparsers.add_parser("personas", help="Manage personas")
    pers.set_defaults(func=lambda _c, _a: pers.print_help(), resource="personas")
    pers_sub = pers.add_subparsers(dest="subcommand")

    p_create = pers_sub.add_parser("create", help="Create a persona")
    p_create.add_argument("--system-prompt", help="System prompt for the LLM")
    p_create.add_argument("--name", help="Persona name")
    p_create.add_argument("--pipeline-mode", choices=["full", "echo"], help="Pipeline mode")
    p_create.add_argument("--context", help="Context for the LLM")
    p_create.add_argument("--default-replica-id", help="Default replica ID")
    p_create.add_argument("--layers", help="JSON object of layer configuration (or - for stdin)")
    p_create.add_argument("--extra", help="JSON object of additional fields (or - for stdin)")
    p_create.set_defaults(func=cmd_personas_create)

    p_get = pers_sub.add_parser("get", help="Get persona details")
    p_get.add_argument("persona_id", help="Persona ID")
    p_get.set_defaults(func=cmd_personas_get)

    p_list = pers_sub.add_parser("list", help="List personas")
    _add_list_args(p_list)
    p_list.add_argument("--type", dest="persona_type", choices=["user", "system"], help="Filter by type")
    p_list.set_defaults(func=cmd_personas_list)

    p_patch = pers_sub.add_parser("patch", help="Apply JSON Patch operations")
    p_patch.add_argument("resource_id", help="Persona ID")
    p_patch.add_argument("operations", help="JSON array of operations (or - for stdin)")
    p_patch.set_defaults(func=cmd_resource_patch)

    p_update = pers_sub.add_parser("update", help="Replace a single field")
    p_update.add_argument("persona_id", help="Persona ID")
    p_update.add_argument("path", help="Field path (e.g. /persona_name)")
    p_update.add_argument("value", help="Value (JSON or string)")
    p_update.set_defaults(func=cmd_personas_update)

    p_delete = pers_sub.add_parser("delete", help="Delete a persona")
    p_delete.add_argument("persona_id", help="Persona ID")
    p_delete.set_defaults(func=cmd_personas_delete)

    # ========== Replicas ==========
    rep = subparsers.add_parser("replicas", help="Manage replicas")
    rep.set_defaults(func=lambda _c, _a: rep.print_help())
    rep_sub = rep.add_subparsers(dest="subcommand")

    r_create = rep_sub.add_parser("create", help="Train a new replica")
    r_create.add_argument("train_video_url", help="Training video URL")
    r_create.add_argument("--consent-video-url", help="Consent video URL")
    r_create.add_argument("--callback-url", help="Completion callback URL")
    r_create.add_argument("--name", help="Replica name")
    r_create.add_argument("--model-name", help="Model version")
    r_create.add_argument("--extra", help="JSON object of additional fields (or - for stdin)")
    r_create.set_defaults(func=cmd_replicas_create)

    r_get = rep_sub.add_parser("get", help="Get replica details")
    r_get.add_argument("replica_id", help="Replica ID")
    r_get.add_argument("--verbose", action="store_true", help="Include additional replica data")
    r_get.set_defaults(func=cmd_replicas_get)

    r_list = rep_sub.add_parser("list", help="List replicas")
    _add_list_args(r_list)
    r_list.add_argument("--type", dest="replica_type", choices=["user", "system"], help="Filter by type")
    r_list.add_argument("--ids", dest="replica_ids", help="Comma-separated replica IDs")
    r_list.add_argument("--verbose", action="store_true", help="Include additional replica data")
    r_list.set_defaults(func=cmd_replicas_list)

    r_rename = rep_sub.add_parser("rename", help="Rename a replica")
    r_rename.add_argument("replica_id", help="Replica ID")
    r_rename.add_argument("name", help="New name")
    r_rename.set_defaults(func=cmd_replicas_rename)

    r_delete = rep_sub.add_parser("delete", help="Delete a replica")
    r_delete.add_argument("replica_id", help="Replica ID")
    r_delete.add_argument("--hard", action="store_true", help="Also delete assets (irreversible)")
    r_delete.set_defaults(func=cmd_replicas_delete)

    # ========== Objectives / Guardrails ==========
    obj_sub = _add_patchable(subparsers, "objectives", "objective")
    o_create = obj_sub.add_parser("create", help="Create objectives")
    o_create.add_argument("data", help="JSON array of objectives (or - for stdin)")
    o_create.set_defaults(func=cmd_objectives_create)

    guard_sub = _add_patchable(subparsers, "guardrails", "guardrails")
    g_create = guard_sub.add_parser("create", help="Create guardrails")
    g_create.add_argument("--name", help="Guardrails name")
    g_create.add_argument("--data", help="JSON array of guardrails (or - for stdin)")
    g_create.set_defaults(func=cmd_guardrails_create)

    # ========== Documents ==========
    docs = subparsers.add_parser("documents", help="Manage knowledge base documents")
    docs.set_defaults(func=lambda _c, _a: docs.print_help())
    docs_sub = docs.add_subparsers(dest="subcommand")

    d_create = docs_sub.add_parser("create", help="Add a document")
    d_create.add_argument("document_url", help="Document URL")
    d_create.add_argument("--name", help="Document name")
    d_create.add_argument("--callback-url", help="Status callback URL")
    d_create.add_argument("--tag", "-t", action="append", help="Tag (repeatable)")
    d_create.add_argument("--extra", help="JSON object of additional fields (or - for stdin)")
    d_create.set_defaults(func=cmd_documents_create)

    d_get = docs_sub.add_parser("get", help="Get document details")
    d_get.add_argument("document_id", help="Document ID")
    d_get.set_defaults(func=cmd_documents_get)

    d_list = docs_sub.add_parser("list", help="List documents")
    _add_list_args(d_list)
    d_list.add_argument("--sort", choices=["ascending", "descending"], help="Sort direction")
    d_list.add_argument("--status", help="Filter by status")
    d_list.add_argument("--search", dest="name_or_uuid", help="Search by name or UUID")
    d_list.add_argument("--tags", help="Comma-separated tags to filter by")
    d_list.set_defaults(func=cmd_documents_list)

    d_update = docs_sub.add_parser("update", help="Update document metadata")
    d_update.add_argument("document_id", help="Document ID")
    d_update.add_argument("--name", help="New name")
    d_update.add_argument("--tag", "-t", action="append", help="Tag (repeatable, replaces existing tags)")
    d_update.set_defaults(func=cmd_documents_update)

    d_delete = docs_sub.add_parser("delete", help="Delete a document")
    d_delete.add_argument("document_id", help="Document ID")
    d_delete.set_defaults(func=cmd_documents_delete)

    # ========== Videos ==========
    vid = subparsers.add_parser("videos", help="Generate and manage videos")
    vid.set_defaults(func=lambda _c, _a: vid.print_help())
    vid_sub = vid.add_subparsers(dest="subcommand")

    v_create = vid_sub.add_parser("create", help="Generate a video")
    v_create.add_argument("replica_id", help="Replica ID")
    v_create.add_argument("--script", "-s", help="Text script")
    v_create.add_argument("--audio-url", help="Audio file URL")
    v_create.add_argument("--name", help="Video name")
    v_create.add_argument("--background-url", help="Website to use as background")
    v_create.add_argument("--callback-url", help="Completion callback URL")
    v_create.add_argument("--fast", action="store_true", help="Use fast rendering")
    v_create.add_argument("--extra", help="JSON object of additional fields (or - for stdin)")
    v_create.set_defaults(func=cmd_videos_create)

    v_get = vid_sub.add_parser("get", help="Get video details")
    v_get.add_argument("video_id", help="Video ID")
    v_get.add_argument("--verbose", action="store_true", help="Include thumbnails and extra data")
    v_get.set_defaults(func=cmd_videos_get)

    v_list = vid_sub.add_parser("list", help="List videos")
    _add_list_args(v_list)
    v_list.set_defaults(func=cmd_videos_list)

    v_rename = vid_sub.add_parser("rename", help="Rename a video")
    v_rename.add_argument("video_id", help="Video ID")
    v_rename.add_argument("name", help="New name")
    v_rename.set_defaults(func=cmd_videos_rename)

    v_delete = vid_sub.add_parser("delete", help="Delete a video")
    v_delete.add_argument("video_id", help="Video ID")
    v_delete.add_argument("--hard", action="store_true", help="Also delete assets (irreversible)")
    v_delete.set_defaults(func=cmd_videos_delete)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    load_dotenv()
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    configure_logging(logging.DEBUG if args.debug else logging.WARNING)

    # A resource group with no subcommand only prints its help
    if not getattr(args, "subcommand", None):
        args.func(None, args)
        sys.exit(0)

    try:
        client = TavusClient()
        args.func(client, args)
    except TavusError as e:
        logger.debug("Command failed: %s", e.message)
        error_output(e)


if __name__ == "__main__":
    main()
