from gcloud_mcp.utils.jsonschema import validate_payload


def test_validate_payload():
    schema = {"type": "object", "properties": {"a": {"type": "integer"}}, "required": ["a"]}

    # Valid
    assert validate_payload(schema, {"a": 1}) == []

    # Invalid
    errors = validate_payload(schema, {"a": "bad"})
    assert errors == ["a: 'bad' is not of type 'integer'"]


def test_validate_payload_root_errors_have_no_prefix():
    schema = {"type": "object", "required": ["a"], "additionalProperties": False}

    errors = validate_payload(schema, {"b": 1})

    assert len(errors) == 2
    assert any("'a' is a required property" == e for e in errors)
    assert all(not e.startswith(":") for e in errors)


def test_validate_payload_orders_by_path():
    schema = {
        "type": "object",
        "properties": {
            "limit": {"type": "integer", "minimum": 1},
            "labels": {"type": "object", "additionalProperties": {"type": "string"}},
        },
    }

    errors = validate_payload(schema, {"limit": 0, "labels": {"env": 1}})

    assert errors[0].startswith("labels.env: ")
    assert errors[1].startswith("limit: ")
