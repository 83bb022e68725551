import json
import random

import pytest

from chatplugins.reborn import (
    FAILURE_TEXT,
    GENDER,
    WeightedChooser,
    build_area_chooser,
    load_rates,
    reborn,
)


class _MaxRng:
    """Always returns the largest value randrange may give."""

    def randrange(self, n):
        return n - 1


class _SeqRng:
    def __init__(self, values):
        self._values = list(values)

    def randrange(self, n):
        value = self._values.pop(0)
        assert 0 <= value < n
        return value


def test_single_choice_always_picked():
    chooser = WeightedChooser([("only", 3)])
    rng = random.Random(1)
    assert {chooser.pick(rng) for _ in range(50)} == {"only"}


def test_zero_weight_never_picked():
    chooser = WeightedChooser([("never", 0), ("always", 5)])
    rng = random.Random(2)
    assert {chooser.pick(rng) for _ in range(100)} == {"always"}


def test_no_valid_choices():
    with pytest.raises(ValueError):
        WeightedChooser([("a", 0)])
    with pytest.raises(ValueError):
        WeightedChooser([])


def test_negative_weight_rejected():
    with pytest.raises(ValueError):
        WeightedChooser([("a", -1), ("b", 5)])


def test_pick_extremes_follow_sorted_weights():
    chooser = WeightedChooser([("heavy", 10), ("light", 1)])
    assert chooser.pick(_SeqRng([0])) == "light"
    assert chooser.pick(_MaxRng()) == "heavy"
    assert chooser.total == 11


def test_gender_chooser_total_and_heaviest():
    assert GENDER.total == 50707 + 48292 + 1001
    assert GENDER.pick(_MaxRng()) == "男孩子"


def test_load_rates_and_build(tmp_path):
    path = tmp_path / "rate.json"
    path.write_text(
        json.dumps([{"name": "A", "weight": 0.25}, {"name": "B", "weight": 0.75}]),
        encoding="utf-8",
    )
    rates = load_rates(path)
    assert rates == [("A", 0.25), ("B", 0.75)]
    chooser = build_area_chooser(rates)
    assert chooser.total == int(0.25 * 1e9) + int(0.75 * 1e9)
    assert chooser.pick(_MaxRng()) == "B"


def test_load_rates_rejects_non_list(tmp_path):
    path = tmp_path / "rate.json"
    path.write_text(json.dumps({"name": "A"}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_rates(path)


def test_load_rates_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_rates(tmp_path / "missing.json")


def test_reborn_success():
    chooser = WeightedChooser([("Japan", 1)])
    assert reborn(chooser, _MaxRng()) == "投胎成功！\n您出生在 Japan, 是 男孩子。"


def test_reborn_failure():
    chooser = WeightedChooser([("Japan", 1)])
    assert reborn(chooser, _SeqRng([0])) == FAILURE_TEXT


def test_reborn_threshold_is_failure():
    chooser = WeightedChooser([("Japan", 1)])
    assert reborn(chooser, _SeqRng([1 << 27])) == FAILURE_TEXT
    assert reborn(chooser, _SeqRng([(1 << 27) + 1, 0, 0])).startswith("投胎成功！")