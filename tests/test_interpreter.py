"""Tests for turning face attributes into facts."""

from __future__ import annotations

import pytest

from face_insight.errors import InterpretationError
from face_insight.services.interpreter import (
    AnalysisFact,
    interpret_attributes,
    interpret_faces,
    strongest_emotion,
)


def _attributes(**overrides):
    attributes = {
        "age": 25,
        "gender": "male",
        "smile": 0.9,
        "hair": {"bald": 0.1, "hairColor": [{"color": "brown", "confidence": 0.9}]},
        "emotion": {"happiness": 0.8, "neutral": 0.1},
        "glasses": "NoGlasses",
    }
    attributes.update(overrides)
    return attributes


def _facts(attributes) -> dict[str, object]:
    return {fact.feature: fact.value for fact in interpret_attributes(attributes)}


def test_interpret_faces_full_record():
    facts = interpret_faces([{"faceAttributes": _attributes()}])
    assert [(fact.feature, fact.value) for fact in facts] == [
        ("Age", 25),
        ("Gender", "Male"),
        ("Smiling?", "Yes"),
        ("Hair Color", "Brown"),
        ("Emotion", "Happiness"),
    ]


def test_only_first_face_is_used():
    facts = interpret_faces(
        [
            {"faceAttributes": _attributes(age=40)},
            {"faceAttributes": _attributes(age=7)},
        ]
    )
    assert facts[0] == AnalysisFact("Age", 40)


def test_age_is_not_modified():
    assert _facts(_attributes(age=31.5))["Age"] == 31.5


def test_gender_is_capitalized():
    assert _facts(_attributes(gender="FEMALE"))["Gender"] == "Female"


@pytest.mark.parametrize(
    ("smile", "expected"),
    [(0.0, "No"), (0.5, "No"), (0.50001, "Yes"), (1.0, "Yes")],
)
def test_smile_threshold_is_exclusive(smile, expected):
    assert _facts(_attributes(smile=smile))["Smiling?"] == expected


@pytest.mark.parametrize("colors", [[], [{"color": "black", "confidence": 1.0}]])
def test_bald_suppresses_hair_color(colors):
    facts = _facts(_attributes(hair={"bald": 0.81, "hairColor": colors}))
    assert facts["Is Bald?"] == "Yes"
    assert "Hair Color" not in facts


def test_bald_at_threshold_reports_colour():
    facts = _facts(_attributes(hair={"bald": 0.8, "hairColor": [{"color": "GRAY"}]}))
    assert facts["Hair Color"] == "Gray"
    assert "Is Bald?" not in facts


def test_no_hair_fact_without_bald_or_colour():
    facts = interpret_attributes(_attributes(hair={"bald": 0.2, "hairColor": []}))
    assert [fact.feature for fact in facts] == ["Age", "Gender", "Smiling?", "Emotion"]


def test_emotion_picks_maximum():
    emotions = {"anger": 0.1, "surprise": 0.7, "neutral": 0.2}
    assert _facts(_attributes(emotion=emotions))["Emotion"] == "Surprise"


def test_emotion_tie_keeps_first_listed():
    assert strongest_emotion({"sadness": 0.0, "neutral": 0.4, "happiness": 0.4}) == "neutral"


def test_all_zero_emotions_emit_no_fact():
    emotions = {"anger": 0.0, "happiness": 0.0}
    assert strongest_emotion(emotions) is None
    facts = interpret_attributes(_attributes(emotion=emotions))
    assert "Emotion" not in [fact.feature for fact in facts]


def test_empty_response_is_rejected():
    with pytest.raises(InterpretationError):
        interpret_faces([])


def test_record_without_attributes_is_rejected():
    with pytest.raises(InterpretationError):
        interpret_faces([{"faceId": "abc"}])


def test_incomplete_attributes_are_rejected():
    attributes = _attributes()
    del attributes["hair"]
    with pytest.raises(InterpretationError):
        interpret_attributes(attributes)


def test_fact_as_dict():
    assert AnalysisFact("Age", 25).as_dict() == {"feature": "Age", "value": 25}


@pytest.mark.parametrize("record", [None, "face", ["faceAttributes"]])
def test_non_object_face_record_is_rejected(record):
    with pytest.raises(InterpretationError):
        interpret_faces([record])


def test_non_numeric_emotion_score_is_rejected():
    emotions = {"neutral": 0.1, "happiness": "high"}
    with pytest.raises(InterpretationError):
        interpret_attributes(_attributes(emotion=emotions))


def test_non_object_emotion_is_rejected():
    with pytest.raises(InterpretationError):
        interpret_attributes(_attributes(emotion=["happiness"]))


@pytest.mark.parametrize(
    "hair",
    [None, ["bald"], {"bald": 0.1, "hairColor": ["brown"]}, {"bald": 0.1, "hairColor": 3}],
)
def test_malformed_hair_is_rejected(hair):
    with pytest.raises(InterpretationError):
        interpret_attributes(_attributes(hair=hair))
