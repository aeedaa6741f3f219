"""
Tests for ThreadResponse schema validation.
"""
import pytest

from validator.thread_validator import ValidationError, validate, validate_json_string


def _response(**overrides):
    response = {
        "chunks":   ["1/2 first", "2/2 second"],
        "count":    2,
        "budget":   140,
        "overflow": [],
    }
    response.update(overrides)
    return response


def test_valid_response_passes():
    assert validate(_response()) == _response()


def test_empty_thread_is_valid():
    assert validate(_response(chunks=[], count=0))["chunks"] == []


def test_validation_error_is_a_value_error():
    assert issubclass(ValidationError, ValueError)


def test_missing_keys():
    response = _response()
    del response["overflow"]
    with pytest.raises(ValidationError, match="overflow"):
        validate(response)


@pytest.mark.parametrize("chunks", ["not a list", ["ok", ""], ["ok", "   "], ["ok", 3]])
def test_bad_chunks(chunks):
    with pytest.raises(ValidationError):
        validate(_response(chunks=chunks))


@pytest.mark.parametrize("count", [3, "2", True])
def test_count_must_match(count):
    with pytest.raises(ValidationError, match="count"):
        validate(_response(count=count))


@pytest.mark.parametrize("budget", [0, -5, "140", 1.5])
def test_budget_must_be_positive_integer(budget):
    with pytest.raises(ValidationError, match="budget"):
        validate(_response(budget=budget))


@pytest.mark.parametrize("overflow", [[1, 0], [0, 0], [2], [-1], "0", [0.5]])
def test_overflow_must_index_chunks(overflow):
    with pytest.raises(ValidationError, match="overflow"):
        validate(_response(overflow=overflow))


def test_overflow_with_valid_indices():
    assert validate(_response(overflow=[0, 1]))["overflow"] == [0, 1]


def test_validate_json_string():
    assert validate_json_string('{"count": 0}') == {"count": 0}
    with pytest.raises(ValidationError, match="Invalid JSON"):
        validate_json_string("{broken")
    with pytest.raises(ValidationError, match="object"):
        validate_json_string("[1, 2]")
