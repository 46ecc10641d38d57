"""Tests for outcomes, descriptors and option coercion."""

import pytest
from pydantic import ValidationError

from globus_transfer import (
    AccessRuleCreate,
    DeleteTask,
    InvalidOptionsError,
    Outcome,
    RequestDescriptor,
    ServerUpdate,
)
from globus_transfer.options import coerce


class TestOutcome:
    def test_code_and_ok(self):
        outcome = Outcome("deactivate_endpoint", 200, body={"code": "Deactivated"})
        assert outcome.ok
        assert outcome.code == "Deactivated"
        assert outcome.accepted("Deactivated", "NotActivated")
        assert not outcome.accepted("Deleted")

    def test_error_status(self):
        outcome = Outcome("get_endpoint_by_id", 404, body={"code": "ClientError.NotFound"})
        assert not outcome.ok
        assert outcome.code == "ClientError.NotFound"

    def test_data_of_non_list_document(self):
        assert Outcome("x", 200, body=["not", "a", "document"]).data == []
        assert Outcome("x", 200, body=None).code is None

    def test_repr_mentions_code(self):
        assert "AccessRuleNotFound" in repr(Outcome("delete_access_rule", 404, body={"code": "AccessRuleNotFound"}))


class TestRequestDescriptor:
    def test_redacted_headers(self):
        request = RequestDescriptor("x", "GET", "https://t/x", headers={"Authorization": "Bearer secret"})
        assert request.redacted_headers() == {"Authorization": "Bearer ***"}
        assert request.headers["Authorization"] == "Bearer secret"

    def test_immutable(self):
        request = RequestDescriptor("x", "GET", "https://t/x")
        with pytest.raises(AttributeError):
            request.method = "POST"


class TestCoerce:
    def test_model_rejects_missing_fields_on_construction(self):
        with pytest.raises(ValidationError):
            AccessRuleCreate(endpoint_xid="e")

    def test_mapping_reports_missing_fields(self):
        with pytest.raises(InvalidOptionsError) as exc_info:
            coerce(AccessRuleCreate, {"endpoint_xid": "e"}, "create_access_rule")
        assert exc_info.value.missing == ["principal", "path"]
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_instance_passes_through(self):
        options = AccessRuleCreate(endpoint_xid="e", principal="p", path="/")
        assert coerce(AccessRuleCreate, options, "create_access_rule") is options

    def test_unknown_keys_reported(self):
        with pytest.raises(InvalidOptionsError) as exc_info:
            coerce(AccessRuleCreate, {"endpoint_xid": "e", "principal": "p", "path": "/", "userId": "u"}, "op")
        assert exc_info.value.unknown == ["userId"]
        assert exc_info.value.missing == []

    def test_server_update_does_not_need_hostname(self):
        options = coerce(ServerUpdate, {"endpoint_xid": "e", "server_id": 7}, "op")
        assert "hostname" not in options.to_body()

    def test_delete_task_has_no_required_fields(self):
        assert DeleteTask().items == []

    def test_mapping_gets_defaults(self):
        options = coerce(AccessRuleCreate, {"endpoint_xid": "e", "principal": "p", "path": "/"}, "op")
        assert options.permissions == "r"
        assert options.principal_type == "identity"

    def test_empty_string_counts_as_missing(self):
        with pytest.raises(InvalidOptionsError, match="path"):
            coerce(AccessRuleCreate, {"endpoint_xid": "e", "principal": "p", "path": ""}, "op")

    def test_error_message(self):
        error = InvalidOptionsError("rename", missing=["old_path"], unknown=["oldPath"], invalid=["new_path (bad)"])
        assert str(error) == (
            "rename: missing required option(s): old_path; unknown option(s): oldPath; "
            "invalid option(s): new_path (bad)"
        )
