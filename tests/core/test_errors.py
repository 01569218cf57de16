"""Error Hierarchy: status codes, categories and the REST envelope."""

from cms_core.core.errors import (
    CmsError, ConflictError, ErrorCategory, ErrorSeverity,
    ResourceNotFoundError, StoreFailureError,
)


def test_not_found_is_404_and_names_the_resource():
    err = ResourceNotFoundError("Article", "draft")
    assert err.http_status == 404
    assert err.code == "RESOURCE_NOT_FOUND"
    assert err.category is ErrorCategory.RESOURCE_NOT_FOUND
    assert str(err) == "Article 'draft' not found"
    assert err.context.resource_type == "Article"
    assert err.context.resource_id == "draft"


def test_conflict_is_409():
    err = ConflictError("Tag", "unique value already in use")
    assert err.http_status == 409
    assert err.category is ErrorCategory.CONFLICT
    assert err.resource_type == "Tag"


def test_store_failure_is_critical_503():
    err = StoreFailureError("Connection or operational error", "execute")
    assert err.http_status == 503
    assert err.severity is ErrorSeverity.CRITICAL
    assert err.operation == "execute"
    assert err.context.operation == "execute"


def test_all_errors_share_the_base():
    for err in (
        ResourceNotFoundError("Tag", "1"),
        ConflictError("Tag", "x"),
        StoreFailureError("x", "query"),
    ):
        assert isinstance(err, CmsError)


def test_to_response_envelope():
    body = ResourceNotFoundError("PortfolioItem", "42").to_response()["error"]
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["message"] == "PortfolioItem '42' not found"
    assert body["category"] == "resource_not_found"
    assert body["severity"] == "error"
    assert body["context"] == {"resource_type": "PortfolioItem", "resource_id": "42"}
    assert "timestamp" in body
