"""Stateless text transforms behind the shout, mock and uwu commands."""

import random

UWU_FACES = (" owo", " uwu", " :3")


def shout(text: str) -> str:
    return text.upper()


def mock(text: str, rng: random.Random | None = None) -> str:
    """Randomly upper- or lower-case each character."""
    rng = rng or random.Random()
    return "".join(c.upper() if rng.random() < 0.5 else c.lower() for c in text)


def uwu(text: str, rng: random.Random | None = None) -> str:
    """r/l become w, "no"/"mo" become "nyo"/"myo", and a face is appended."""
    rng = rng or random.Random()
    out = []
    prev = ""
    for c in text:
        if c in "RL":
            out.append("W")
        elif c in "rl":
            out.append("w")
        elif c in "Oo" and prev in ("M", "m", "N", "n"):
            out.append("y" + c)
        else:
            out.append(c)
        prev = c
    return "".join(out) + rng.choice(UWU_FACES)
