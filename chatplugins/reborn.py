"""Reincarnation lottery: a weighted country and gender pick."""

from __future__ import annotations

import bisect
import json
import random
from pathlib import Path
from typing import Any, Iterable

SUCCESS_TEMPLATE = "投胎成功！\n您出生在 {country}, 是 {gender}。"
FAILURE_TEXT = "投胎失败！\n您没能活到出生，祝您下次好运！"
_FAIL_THRESHOLD = 1 << 27
_INT31 = 1 << 31


class WeightedChooser:
    """Pick items at random with probability proportional to integer weights."""

    def __init__(self, choices: Iterable[tuple[Any, int]]) -> None:
        ordered = sorted(choices, key=lambda c: c[1])
        items: list[Any] = []
        totals: list[int] = []
        running = 0
        for item, weight in ordered:
            weight = int(weight)
            if weight < 0:
                raise ValueError("weights must not be negative")
            running += weight
            items.append(item)
            totals.append(running)
        if running < 1:
            raise ValueError("no valid choices")
        self._items = items
        self._totals = totals
        self.total = running

    def pick(self, rng=None) -> Any:
        """Return one item chosen by weight."""
        rng = rng if rng is not None else random
        r = rng.randrange(self.total) + 1
        return self._items[bisect.bisect_left(self._totals, r)]


GENDER = WeightedChooser([("男孩子", 50707), ("女孩子", 48292), ("雌雄同体", 1001)])


def load_rates(path) -> list[tuple[str, float]]:
    """Read a JSON list of {"name", "weight"} entries."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError("rate data must be a list")
    return [(str(entry["name"]), float(entry["weight"])) for entry in data]


def build_area_chooser(rates: Iterable[tuple[str, float]]) -> WeightedChooser:
    """Build a chooser over countries from fractional weights."""
    return WeightedChooser((name, int(weight * 1e9)) for name, weight in rates)


def reborn(area_chooser: WeightedChooser, rng=None) -> str:
    """Roll a reincarnation and return the reply text."""
    rng = rng if rng is not None else random
    if rng.randrange(_INT31) > _FAIL_THRESHOLD:
        country = area_chooser.pick(rng)
        gender = GENDER.pick(rng)
        return SUCCESS_TEMPLATE.format(country=country, gender=gender)
    return FAILURE_TEXT