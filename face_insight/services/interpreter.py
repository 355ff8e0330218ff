"""Turns Azure face attribute payloads into human-readable facts."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from ..errors import InterpretationError
from ..utils.text import capitalize

logger = logging.getLogger(__name__)

SMILE_THRESHOLD = 0.5
BALD_THRESHOLD = 0.8


@dataclass(frozen=True, slots=True)
class AnalysisFact:
    """A single feature/value pair shown to the user."""

    feature: str
    value: str | float | int

    def as_dict(self) -> dict[str, Any]:
        return {"feature": self.feature, "value": self.value}


def interpret_faces(faces: Sequence[Mapping[str, Any]]) -> list[AnalysisFact]:
    """Interpret the first face record of a detect response; others are ignored."""
    if not faces:
        raise InterpretationError("The analysis response contains no faces.")
    record = faces[0]
    if not isinstance(record, Mapping):
        raise InterpretationError(f"The first face record is not an object: {record!r}")
    attributes = record.get("faceAttributes")
    if not isinstance(attributes, Mapping):
        raise InterpretationError("The first face record has no faceAttributes.")
    if len(faces) > 1:
        logger.debug("Ignoring %d additional face record(s).", len(faces) - 1)
    return interpret_attributes(attributes)


def interpret_attributes(attributes: Mapping[str, Any]) -> list[AnalysisFact]:
    """Derive facts in display order: age, gender, smile, hair, emotion."""
    try:
        facts = [
            AnalysisFact("Age", attributes["age"]),
            AnalysisFact("Gender", capitalize(attributes["gender"])),
            AnalysisFact("Smiling?", "Yes" if attributes["smile"] > SMILE_THRESHOLD else "No"),
        ]
        hair = _hair_fact(attributes["hair"])
    except (AttributeError, KeyError, TypeError) as exc:
        raise InterpretationError(f"Incomplete face attributes: {exc!r}") from exc
    if hair is not None:
        facts.append(hair)

    emotion = strongest_emotion(_emotion_scores(attributes.get("emotion") or {}))
    if emotion is None:
        logger.debug("No emotion has a non-zero intensity; skipping the Emotion fact.")
    else:
        facts.append(AnalysisFact("Emotion", capitalize(emotion)))
    return facts


def _emotion_scores(emotions: Any) -> Mapping[str, float]:
    if not isinstance(emotions, Mapping):
        raise InterpretationError(f"Emotion scores are not an object: {emotions!r}")
    for name, value in emotions.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InterpretationError(f"Emotion {name!r} has a non-numeric score: {value!r}")
    return emotions


def _hair_fact(hair: Mapping[str, Any]) -> AnalysisFact | None:
    if hair["bald"] > BALD_THRESHOLD:
        return AnalysisFact("Is Bald?", "Yes")
    colors = hair.get("hairColor") or []
    if colors:
        return AnalysisFact("Hair Color", capitalize(colors[0]["color"]))
    # Neither bald nor a detected colour: no hair fact.
    return None


def strongest_emotion(emotions: Mapping[str, float]) -> str | None:
    """Return the emotion with the strictly greatest non-zero intensity.

    Ties keep the emotion seen first. ``None`` when every intensity is zero.
    """
    best_name: str | None = None
    best_value = 0.0
    for name, value in emotions.items():
        if value and (best_name is None or value > best_value):
            best_name = name
            best_value = value
    return best_name
