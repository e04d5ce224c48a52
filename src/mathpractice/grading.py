"""
mathpractice.grading

Answer parsing and exact-equality grading shared by the controller and the API.
"""

from __future__ import annotations

import math

Number = int | float


def parse_answer(raw: str | Number) -> Number:
    """
    Parse user input into a number. Integers stay integers so large whole
    answers keep full precision; anything else goes through float().

    Raises ValueError for empty, non-numeric or non-finite input.
    """

    if isinstance(raw, bool):
        raise ValueError("answer must be a number")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        value: Number = raw
    else:
        text = raw.strip()
        if not text:
            raise ValueError("answer is empty")
        try:
            value = int(text)
        except ValueError:
            value = float(text)
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError("answer must be finite")
    return value


def is_correct(user_answer: Number, correct_answer: Number) -> bool:
    # Exact numeric equality, no tolerance: 3 == 3.0, 3 != 3.01.
    return user_answer == correct_answer
