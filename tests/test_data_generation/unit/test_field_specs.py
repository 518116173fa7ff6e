"""Field spec loading tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from universal_test_engine.test_data_generation import (
    FieldSpec,
    FieldSpecError,
    FieldType,
    load_field_specs,
)


def test_loads_yaml_list_with_camel_and_snake_case_keys(tmp_path: Path) -> None:
    spec_path = tmp_path / "fields.yaml"
    spec_path.write_text(
        """
- name: name
  type: string
  minLength: 1
  max_length: 50
  required: true
- name: age
  type: integer
  min: 0
  max: 150
""",
        encoding="utf-8",
    )

    specs = load_field_specs(spec_path)

    assert specs == (
        FieldSpec(name="name", type=FieldType.STRING, min_length=1, max_length=50, required=True),
        FieldSpec(name="age", type=FieldType.INTEGER, min=0, max=150),
    )


def test_loads_json_mapping_with_fields_key(tmp_path: Path) -> None:
    spec_path = tmp_path / "fields.json"
    spec_path.write_text('{"fields": [{"name": "email", "type": "email"}]}', encoding="utf-8")

    specs = load_field_specs(spec_path)

    assert specs[0].type is FieldType.EMAIL


def test_rejects_unknown_types(tmp_path: Path) -> None:
    spec_path = tmp_path / "fields.yaml"
    spec_path.write_text("- name: when\n  type: date\n", encoding="utf-8")

    with pytest.raises(FieldSpecError, match="unsupported type 'date'"):
        load_field_specs(spec_path)


def test_rejects_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FieldSpecError, match="not found"):
        load_field_specs(tmp_path / "absent.yaml")
