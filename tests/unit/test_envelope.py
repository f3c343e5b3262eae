"""
Unit tests for envelope parsing.
"""

import pytest
from pydantic import ValidationError

from ghostwriter_rpc.schemas.envelope import (
    ENVELOPE_ADAPTER,
    FailureEnvelope,
    Page,
    PageMeta,
    SuccessEnvelope,
)


@pytest.mark.unit
class TestEnvelope:
    def test_success(self):
        envelope = ENVELOPE_ADAPTER.validate_python({"success": True, "data": [1, 2], "message": "ok"})
        assert isinstance(envelope, SuccessEnvelope)
        assert envelope.data == [1, 2]
        assert envelope.message == "ok"

    def test_success_with_null_data(self):
        envelope = ENVELOPE_ADAPTER.validate_python({"success": True, "data": None})
        assert isinstance(envelope, SuccessEnvelope)
        assert envelope.data is None

    def test_success_requires_data_key(self):
        with pytest.raises(ValidationError):
            ENVELOPE_ADAPTER.validate_python({"success": True})

    def test_failure(self):
        envelope = ENVELOPE_ADAPTER.validate_python(
            {"success": False, "error": {"code": "NOT_FOUND", "message": "Missing", "details": "id=3"}}
        )
        assert isinstance(envelope, FailureEnvelope)
        assert envelope.error.code == "NOT_FOUND"
        assert envelope.error.details == "id=3"

    @pytest.mark.parametrize("tag", ["true", 1, 1.0, None, "false", 0, 0.0])
    def test_discriminant_must_be_boolean(self, tag):
        with pytest.raises(ValidationError):
            ENVELOPE_ADAPTER.validate_python({"success": tag, "data": {}})

    def test_not_an_object(self):
        with pytest.raises(ValidationError):
            ENVELOPE_ADAPTER.validate_python(["success", True])

    def test_meta_has_more_alias(self):
        envelope = ENVELOPE_ADAPTER.validate_python(
            {"success": True, "data": [], "meta": {"page": 2, "limit": 20, "total": 45, "hasMore": True}}
        )
        assert envelope.meta == PageMeta(page=2, limit=20, total=45, has_more=True)


@pytest.mark.unit
class TestPage:
    def test_has_more(self):
        assert Page[int](data=[1], meta=PageMeta(has_more=True)).has_more is True

    def test_missing_meta_means_no_more(self):
        assert Page[int](data=[1]).has_more is False

    def test_dumps_meta_by_alias(self):
        page = Page[int](data=[1, 2], meta=PageMeta(page=1, limit=2, total=4, has_more=True))
        assert page.model_dump(by_alias=True) == {
            "data": [1, 2],
            "meta": {"page": 1, "limit": 2, "total": 4, "hasMore": True},
        }
