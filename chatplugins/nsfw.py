"""Verdicts on image classification scores."""

from __future__ import annotations

from dataclasses import dataclass

HSO_IMAGE = "https://gchat.qpic.cn/gchatpic_new//--4234EDEC5F147A4C319A41149D7E0EA9/0"
THRESHOLD = 0.3


@dataclass(frozen=True)
class Picture:
    """Class probabilities reported by the image classifier."""

    drawings: float = 0.0
    hentai: float = 0.0
    neutral: float = 0.0
    porn: float = 0.0
    sexy: float = 0.0


def _tags(picture: Picture) -> list[str]:
    tags = []
    if picture.hentai > THRESHOLD:
        tags.append(" hentai")
    if picture.porn > THRESHOLD:
        tags.append(" porn")
    if picture.sexy > THRESHOLD:
        tags.append(" hso")
    return tags


def judge(picture: Picture) -> str:
    """Return the verdict for an explicit rating request."""
    if picture.neutral > THRESHOLD:
        return "普通哦"
    if picture.drawings > THRESHOLD or picture.neutral < THRESHOLD:
        kind = "二次元"
    else:
        kind = "三次元"
    return kind + "".join(_tags(picture))


def auto_judge(picture: Picture) -> str | None:
    """Return the automatic verdict, or None when nothing should be said."""
    if picture.neutral > THRESHOLD:
        return None
    kind = "二次元" if picture.drawings > THRESHOLD else "三次元"
    tags = _tags(picture)
    if not tags:
        return None
    return kind + "".join(tags) + "\n"