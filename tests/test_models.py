import json

import pytest

from textanalyzer.models import (
    Analysis,
    CompareResponse,
    FileExistsResponse,
    FileStatusResponse,
)

ANALYSIS_KEYS = {
    "id",
    "paragraphs_amount",
    "sentences_amount",
    "words_amount",
    "symbols_amount",
    "average_sentences_per_paragraph",
    "average_words_per_sentence",
    "average_length_of_words",
}


def _sample():
    return Analysis(
        id=7,
        paragraphs_amount=2,
        sentences_amount=5,
        words_amount=20,
        symbols_amount=90,
        average_sentences_per_paragraph=2.5,
        average_words_per_sentence=4.0,
        average_length_of_words=4.5,
    )


def test_file_exists_response_keys():
    resp = FileExistsResponse(exists=True, id=3, status="File exists")
    assert resp.to_dict() == {"exists": True, "id": 3, "status": "File exists"}


def test_file_status_response_keys():
    resp = FileStatusResponse(id=-1, status="Cannot store file.")
    assert resp.to_dict() == {"id": -1, "status": "Cannot store file."}


def test_analysis_keys_match_wire_names():
    assert set(_sample().to_dict()) == ANALYSIS_KEYS


def test_analysis_round_trip_through_json():
    original = _sample()
    decoded = json.loads(json.dumps(original.to_dict()))
    assert Analysis.from_dict(decoded) == original


def test_analysis_from_dict_missing_fields_are_zero():
    result = Analysis.from_dict({"id": 4})
    assert result == Analysis(id=4)
    assert result.average_length_of_words == 0.0


def test_analysis_from_dict_null_is_zero():
    assert Analysis.from_dict({"words_amount": None}) == Analysis()


def test_analysis_from_dict_accepts_int_for_float_field():
    result = Analysis.from_dict({"average_words_per_sentence": 3})
    assert result.average_words_per_sentence == 3.0
    assert isinstance(result.average_words_per_sentence, float)


def test_analysis_from_dict_ignores_unknown_keys():
    assert Analysis.from_dict({"id": 2, "extra": "x"}) == Analysis(id=2)


@pytest.mark.parametrize(
    "data",
    [
        {"id": "x"},
        {"id": True},
        {"words_amount": 2.5},
        {"average_length_of_words": "long"},
    ],
)
def test_analysis_from_dict_rejects_wrong_types(data):
    with pytest.raises(ValueError):
        Analysis.from_dict(data)


@pytest.mark.parametrize("data", [[1, 2], "text", 5])
def test_analysis_from_dict_rejects_non_objects(data):
    with pytest.raises(ValueError):
        Analysis.from_dict(data)


def test_compare_response_keys():
    resp = CompareResponse(1, 2, 0, 1, 2, 3, 0.5, 1.5, 2.5)
    assert list(resp.to_dict()) == [
        "first_id",
        "second_id",
        "paragraphs_amount_diff",
        "sentences_amount_diff",
        "words_amount_diff",
        "symbols_amount_diff",
        "average_sentences_per_paragraph_diff",
        "average_words_per_sentence_diff",
        "average_length_of_words_diff",
    ]
    assert resp.to_dict()["second_id"] == 2