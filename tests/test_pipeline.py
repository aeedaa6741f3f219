"""
End-to-end tests for the segmentation pipeline in app.py.
"""
import pytest

from app import BUDGET, resolve_measurer, split_pipeline, widest_label
from segmenter.measure import code_point_length, weighted_length


def _strip_label(chunk):
    return chunk.split(" ", 1)[1]


def test_three_short_lines():
    response = split_pipeline("Line 1\nLine 2\nLine 3")

    assert response["chunks"] == ["1/3 Line 1", "2/3 Line 2", "3/3 Line 3"]
    assert response["count"] == 3
    assert response["budget"] == BUDGET
    assert response["overflow"] == []


@pytest.mark.parametrize("text", ["", "\n\n", "   \r\n\t"])
def test_blank_input_yields_no_chunks(text):
    response = split_pipeline(text)
    assert response["chunks"] == []
    assert response["count"] == 0


def test_long_line_is_split_within_budget():
    words = [f"word{i}" for i in range(60)]
    response = split_pipeline(" ".join(words))

    assert response["count"] > 1
    assert response["overflow"] == []
    assert all(weighted_length(chunk) <= BUDGET for chunk in response["chunks"])

    recovered = [w for chunk in response["chunks"] for w in _strip_label(chunk).split(" ")]
    assert recovered == words


def test_numbering_spans_all_lines():
    text = "intro\n" + " ".join(["lorem"] * 80) + "\noutro"
    response = split_pipeline(text)
    total = response["count"]

    assert total > 3
    assert response["chunks"][0] == f"1/{total} intro"
    assert response["chunks"][-1] == f"{total}/{total} outro"
    for i, chunk in enumerate(response["chunks"]):
        assert chunk.startswith(f"{i + 1}/{total} ")


def test_gigantic_word_is_kept_and_reported():
    word = "y" * 300
    response = split_pipeline(word)

    assert response["chunks"] == [f"1/1 {word}"]
    assert response["overflow"] == [0]


def test_suffix_is_optional():
    response = split_pipeline("a\nb", use_suffix=True)
    assert response["chunks"] == ["1/2 a (...)", "2/2 b (...)"]

    custom = split_pipeline("a", use_suffix=True, suffix_template=" [{{current}}]")
    assert custom["chunks"] == ["1/1 a [1]"]


def test_custom_budget_and_measurer():
    text = " ".join(["abcd"] * 10)
    response = split_pipeline(text, budget=20, measure=code_point_length)

    assert response["budget"] == 20
    assert all(len(chunk) <= 20 for chunk in response["chunks"])


def test_invalid_budget():
    with pytest.raises(ValueError):
        split_pipeline("some text", budget=0)


def test_measurer_failures_propagate():
    def broken(text):
        raise RuntimeError("measurer exploded")

    with pytest.raises(RuntimeError, match="exploded"):
        split_pipeline("some text", measure=broken)


def test_resolve_measurer():
    assert resolve_measurer("plain") is code_point_length
    assert resolve_measurer("weighted") is weighted_length
    assert resolve_measurer("weighted", url_length=10)("https://example.com") == 10
    with pytest.raises(ValueError):
        resolve_measurer("nope")


def test_labels_growing_to_three_digits_stay_within_budget():
    words = ["abcd"] * 330
    response = split_pipeline(" ".join(words), budget=20, measure=code_point_length)
    total = response["count"]

    assert total >= 100
    assert response["overflow"] == []
    assert all(len(chunk) <= 20 for chunk in response["chunks"])
    assert response["chunks"][0].startswith(f"1/{total} ")
    assert response["chunks"][-1].startswith(f"{total}/{total} ")

    recovered = [w for chunk in response["chunks"] for w in _strip_label(chunk).split(" ")]
    assert recovered == words


def test_many_lines_keep_every_multi_word_chunk_within_budget():
    line = "a" * 67 + " " + "b" * 66
    response = split_pipeline("\n".join([line] * 110), measure=code_point_length)

    assert response["count"] >= 110
    assert response["overflow"] == []
    for chunk in response["chunks"]:
        assert len(chunk) <= BUDGET


def test_widest_label():
    assert widest_label(0, "{{current}}/{{total}} ", None, code_point_length) == 0
    assert widest_label(9, "{{current}}/{{total}} ", None, code_point_length) == 4
    assert widest_label(100, "{{current}}/{{total}} ", None, code_point_length) == 8
    assert widest_label(100, "{{current}}/{{total}} ", " (...)", code_point_length) == 14
