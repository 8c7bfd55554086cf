"""
JSON Patch (RFC 6902) helpers shared by every patch-capable resource.
"""

from collections.abc import Mapping
from typing import Any

from tavus_cli.core.errors import ArgumentError

PATCH_OPERATIONS = ("add", "remove", "replace", "copy", "move", "test")


def build_patch_operation(path: str, value: Any = None, op: str = "replace") -> dict[str, Any]:
    """
    Build a single JSON Patch operation.

    Args:
        path: JSON Pointer to the target field (e.g. "/persona_name", "/layers/llm/model")
        value: The value to set (ignored for "remove")
        op: Operation type (default: "replace")

    Returns:
        A JSON Patch operation dict. "remove" operations have no "value" key at all.

    """
    operation: dict[str, Any] = {"op": op, "path": path}
    if op != "remove":
        operation["value"] = value
    return operation


def validate_patch_operations(operations: Any) -> list[dict[str, Any]]:
    """
    Validate a sequence of JSON Patch operations before it is sent.

    Args:
        operations: List of operation dicts

    Returns:
        The operations as a list

    Raises:
        ArgumentError: On the first malformed operation

    """
    if not isinstance(operations, (list, tuple)):
        raise ArgumentError("Operations must be a list")
    if not operations:
        raise ArgumentError("Operations cannot be empty")

    for index, operation in enumerate(operations):
        if not isinstance(operation, Mapping):
            raise ArgumentError(f"Operation {index} must be an object")
        if not operation.get("op") or not operation.get("path"):
            raise ArgumentError(f"Operation {index} must have 'op' and 'path'")
        if operation["op"] not in PATCH_OPERATIONS:
            raise ArgumentError(
                f"Operation {index} 'op' must be one of: {', '.join(PATCH_OPERATIONS)}",
                details={"op": operation["op"]},
            )

    return list(operations)
