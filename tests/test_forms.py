import pytest

from core.errors import ValidationError
from core.forms import parse_string_list, require_fields


def test_require_fields_accepts_present_values():
    require_fields("title", "body", object())


@pytest.mark.parametrize("missing", [None, "", "   "])
def test_require_fields_rejects_missing(missing):
    with pytest.raises(ValidationError) as exc:
        require_fields("title", missing)
    assert exc.value.status_code == 400
    assert exc.value.detail == "All fields are required"


def test_parse_string_list_dedupes_in_order():
    assert parse_string_list('["b", "a", "b"]', "skills") == ["b", "a"]


@pytest.mark.parametrize("raw", ["not json", '{"a": 1}', "[1, 2]", '"s1"'])
def test_parse_string_list_rejects_other_shapes(raw):
    with pytest.raises(ValidationError):
        parse_string_list(raw, "skills")
