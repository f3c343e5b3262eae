"""
Unit tests for the response normalizer.
"""

import httpx
import pytest

from ghostwriter_rpc.catalog import get_operation
from ghostwriter_rpc.clients.normalizer import normalize_response
from ghostwriter_rpc.errors import ApplicationError, SchemaError, TransportError
from ghostwriter_rpc.schemas.entities import GhostwriterBundle, ResourceContent
from ghostwriter_rpc.schemas.envelope import Page

from ..fakes import bundle_payload, fail, ok, resource_payload


@pytest.mark.unit
class TestSuccess:
    def test_unwraps_data(self):
        result = normalize_response(ok(bundle_payload()), get_operation("ghostwriter.create"))

        assert isinstance(result, GhostwriterBundle)
        assert result.ghostwriter.id == 1
        assert result.ghostwriter.name == "Alice Writer"
        assert result.psy_profile.ghostwriter_id == 1

    def test_paginated_keeps_meta(self):
        meta = {"page": 1, "limit": 20, "total": 45, "hasMore": True}
        response = ok([resource_payload(n) for n in range(1, 21)], meta=meta)

        page = normalize_response(response, get_operation("resources.list"))

        assert isinstance(page, Page)
        assert len(page.data) == 20
        assert isinstance(page.data[0], ResourceContent)
        assert page.has_more is True
        assert page.meta.model_dump(by_alias=True) == meta

    def test_partial_meta_keeps_only_sent_keys(self):
        meta = {"page": 1, "hasMore": True}
        page = normalize_response(ok([], meta=meta), get_operation("resources.list"))

        assert page.has_more is True
        assert page.meta.model_dump(by_alias=True, exclude_unset=True) == meta

    def test_draft_without_optional_fields(self):
        draft = {"content": "Remote work is...", "writingProfileId": "12", "psychologyProfileId": "11"}

        result = normalize_response(ok(draft), get_operation("content.generate"))

        assert result.topic is None
        assert result.model_dump(by_alias=True, exclude_unset=True) == draft

    def test_paginated_without_meta(self):
        page = normalize_response(ok([]), get_operation("resources.list"))
        assert page.data == []
        assert page.meta is None
        assert page.has_more is False

    def test_data_round_trips(self):
        payload = bundle_payload()
        payload["ghostwriter"]["archived"] = False

        result = normalize_response(ok(payload), get_operation("ghostwriter.create"))

        assert result.model_dump(mode="json", by_alias=True) == payload

    def test_untyped_output(self):
        result = normalize_response(ok({"deleted": True}), get_operation("ghostwriter.delete"))
        assert result == {"deleted": True}

    def test_idempotent(self):
        response = ok(bundle_payload())
        operation = get_operation("ghostwriter.create")
        assert normalize_response(response, operation) == normalize_response(response, operation)


@pytest.mark.unit
class TestApplicationFailures:
    def test_failure_envelope_with_200(self):
        response = fail("GHOSTWRITER_NOT_FOUND", "Ghostwriter not found", details="id=99")

        with pytest.raises(ApplicationError) as exc_info:
            normalize_response(response, get_operation("ghostwriter.get"))

        error = exc_info.value
        assert error.remote_code == "GHOSTWRITER_NOT_FOUND"
        assert error.message == "Ghostwriter not found"
        assert error.remote_details == "id=99"
        assert error.status_code == 200

    def test_failure_envelope_with_4xx(self):
        response = fail("VALIDATION", "Name is required", status_code=400)

        with pytest.raises(ApplicationError) as exc_info:
            normalize_response(response, get_operation("ghostwriter.create"))

        assert exc_info.value.status_code == 400

    def test_bare_error_body_with_non_200(self):
        response = httpx.Response(404, json={"error": {"code": "NOT_FOUND", "message": "No such persona"}})

        with pytest.raises(ApplicationError, match="No such persona"):
            normalize_response(response, get_operation("persona.get"))


@pytest.mark.unit
class TestTransportFailures:
    def test_500_unparseable_body(self):
        response = httpx.Response(500, text="<html>Internal Server Error</html>")

        with pytest.raises(TransportError) as exc_info:
            normalize_response(response, get_operation("listAll"))

        assert exc_info.value.status_code == 500

    def test_non_200_json_without_error_shape(self):
        response = httpx.Response(502, json={"detail": "bad gateway"})
        with pytest.raises(TransportError):
            normalize_response(response, get_operation("listAll"))

    def test_201_success_envelope_is_not_accepted(self):
        with pytest.raises(TransportError):
            normalize_response(ok([], status_code=201), get_operation("listAll"))


@pytest.mark.unit
class TestSchemaFailures:
    def test_200_not_json(self):
        response = httpx.Response(200, text="OK")
        with pytest.raises(SchemaError):
            normalize_response(response, get_operation("listAll"))

    def test_200_without_envelope(self):
        response = httpx.Response(200, json=[{"id": 1}])
        with pytest.raises(SchemaError, match="envelope"):
            normalize_response(response, get_operation("listAll"))

    def test_string_discriminant(self):
        response = httpx.Response(200, json={"success": "true", "data": []})
        with pytest.raises(SchemaError):
            normalize_response(response, get_operation("listAll"))

    def test_data_does_not_match_output(self):
        response = ok({"ghostwriter": {"id": "not-a-number"}})
        with pytest.raises(SchemaError, match="declared output"):
            normalize_response(response, get_operation("ghostwriter.create"))
