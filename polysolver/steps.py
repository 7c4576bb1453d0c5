"""
PolySolver - Explanation step parser.

The computation service returns its explanation as one string where
segments are separated by ``➡`` and each segment may carry a marker:
``◆`` for a main step and ``▶`` for a sub-step.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict

SEGMENT_DELIMITER = "➡"
PRIMARY_MARKER = "◆"
SUB_MARKER = "▶"


class StepKind(str, Enum):
    PRIMARY = "primary"
    SUB = "sub"
    PLAIN = "plain"


class Step(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    kind: StepKind


def normalize_explanation(explanation: str) -> str:
    """Turn ``➡``-delimited segments into newline-separated lines."""
    return "\n".join(part.strip() for part in explanation.split(SEGMENT_DELIMITER))


def _classify(line: str) -> StepKind:
    if PRIMARY_MARKER in line:
        return StepKind.PRIMARY
    if SUB_MARKER in line:
        return StepKind.SUB
    return StepKind.PLAIN


def _strip_markers(line: str) -> str:
    return line.replace(PRIMARY_MARKER, "").replace(SUB_MARKER, "").strip()


def parse_steps(explanation: str) -> list[Step]:
    """Split *explanation* into classified steps, in source order.

    Blank lines are dropped. A line holding both markers counts as a main
    step. The function is pure, so parsing the same text twice gives
    equal lists.
    """
    steps: list[Step] = []
    for line in normalize_explanation(explanation).split("\n"):
        if not line.strip():
            continue
        steps.append(Step(text=_strip_markers(line), kind=_classify(line)))
    return steps
