"""Tests for JSON Patch operation building and validation."""

import pytest

from tavus_cli.core.errors import ArgumentError
from tavus_cli.core.patch import PATCH_OPERATIONS, build_patch_operation, validate_patch_operations


class TestBuildPatchOperation:
    def test_replace_is_default(self):
        assert build_patch_operation("/persona_name", "Tutor") == {
            "op": "replace",
            "path": "/persona_name",
            "value": "Tutor",
        }

    def test_remove_has_no_value_key(self):
        operation = build_patch_operation("/layers/stt/hotwords", "ignored", op="remove")
        assert operation == {"op": "remove", "path": "/layers/stt/hotwords"}
        assert "value" not in operation

    def test_explicit_null_is_kept_for_other_ops(self):
        operation = build_patch_operation("/context", None, op="add")
        assert "value" in operation
        assert operation["value"] is None


class TestValidatePatchOperations:
    def test_valid_operations(self):
        operations = [{"op": "add", "path": "/x", "value": 1}]
        assert validate_patch_operations(operations) == operations

    def test_tuple_is_accepted(self):
        operations = ({"op": "remove", "path": "/x"},)
        assert validate_patch_operations(operations) == [{"op": "remove", "path": "/x"}]

    @pytest.mark.parametrize("op", PATCH_OPERATIONS)
    def test_every_known_op(self, op):
        validate_patch_operations([{"op": op, "path": "/x", "value": 1}])

    def test_empty_list(self):
        with pytest.raises(ArgumentError, match="cannot be empty"):
            validate_patch_operations([])

    @pytest.mark.parametrize("operations", [{}, {"op": "add", "path": "/x"}, "[]", None])
    def test_not_a_list(self, operations):
        with pytest.raises(ArgumentError, match="must be a list"):
            validate_patch_operations(operations)

    def test_missing_path(self):
        with pytest.raises(ArgumentError, match="'op' and 'path'"):
            validate_patch_operations([{"op": "replace"}])

    def test_missing_op(self):
        with pytest.raises(ArgumentError, match="'op' and 'path'"):
            validate_patch_operations([{"path": "/x", "value": 1}])

    def test_unknown_op(self):
        with pytest.raises(ArgumentError, match="must be one of"):
            validate_patch_operations([{"op": "bogus", "path": "/x"}])

    def test_element_not_an_object(self):
        with pytest.raises(ArgumentError, match="Operation 0 must be an object"):
            validate_patch_operations(["replace /x"])

    def test_reports_first_offending_index(self):
        operations = [
            {"op": "replace", "path": "/a", "value": 1},
            {"op": "bogus", "path": "/b"},
            {"op": "replace"},
        ]
        with pytest.raises(ArgumentError, match="Operation 1 "):
            validate_patch_operations(operations)

    def test_argument_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            validate_patch_operations([])
