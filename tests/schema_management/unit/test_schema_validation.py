"""Schema validation tests."""

from __future__ import annotations

from universal_test_engine.schema_management import (
    SuiteKind,
    load_suite_schema,
    validate_against_schema,
    validate_suite_document,
)


def test_bundled_schemas_are_available_for_both_suite_kinds() -> None:
    assert load_suite_schema(SuiteKind.API)["title"] == "API test suite"
    assert load_suite_schema(SuiteKind.UI)["title"] == "UI test suite"


def test_valid_api_document_passes() -> None:
    result = validate_suite_document(
        "api",
        {
            "suite": "Users",
            "tests": [
                {"name": "list", "method": "GET", "endpoint": "/users", "expect": {"status": 200}}
            ],
        },
    )

    assert result.valid is True
    assert result.errors == ()


def test_unknown_suite_kind_is_reported_as_issue() -> None:
    result = validate_suite_document("grpc", {})

    assert result.valid is False
    assert result.errors[0].startswith('/ Unknown test type: "grpc"')


def test_invalid_regex_in_body_path_is_a_format_error() -> None:
    result = validate_suite_document(
        SuiteKind.API,
        {
            "suite": "Users",
            "tests": [
                {
                    "name": "regex",
                    "method": "GET",
                    "endpoint": "/",
                    "expect": {"bodyPath": [{"path": "id", "regex": "("}]},
                }
            ],
        },
    )

    assert result.valid is False
    assert result.issues[0].instance_path == "/tests/0/expect/bodyPath/0/regex"


def test_inline_schema_reports_missing_required_property() -> None:
    result = validate_against_schema({}, {"type": "object", "required": ["id"]})

    assert result.valid is False
    assert "'id' is a required property" in result.errors[0]


def test_inline_schema_collects_every_error() -> None:
    schema = {
        "type": "object",
        "properties": {"id": {"type": "integer"}, "name": {"type": "string"}},
        "required": ["id", "name"],
    }

    result = validate_against_schema({"id": "x"}, schema)

    assert len(result.issues) == 2


def test_invalid_inline_schema_is_reported_not_raised() -> None:
    result = validate_against_schema({}, {"type": "not-a-type"})

    assert result.valid is False
    assert result.issues[0].message.startswith("invalid schema")


def test_issue_paths_are_empty_at_the_root_and_slash_joined_below() -> None:
    schema = {
        "type": "object",
        "properties": {"items": {"type": "array", "items": {"type": "integer"}}},
        "required": ["id"],
    }

    result = validate_against_schema({"items": [1, "two"]}, schema)

    assert [issue.instance_path for issue in result.issues] == ["", "/items/1"]
