import datetime as dt

import pytest

from chatplugins.score import (
    LEVEL_ARRAY,
    SCORE_ADD,
    SCORE_MAX,
    ScoreDB,
    get_hour_word,
    get_level,
    next_level_score,
    sign_in,
)


@pytest.fixture
def db(tmp_path):
    database = ScoreDB(tmp_path / "score.db")
    yield database
    database.close()


NOW = dt.datetime(2022, 7, 15, 9, 30, 0)


@pytest.mark.parametrize(
    "hour,word",
    [(7, "早上好"), (12, "中午好"), (15, "下午好"), (20, "晚上好"), (3, "凌晨好")],
)
def test_hour_word(hour, word):
    assert get_hour_word(dt.datetime(2022, 1, 1, hour)) == word


def test_level_at_thresholds():
    for k, v in enumerate(LEVEL_ARRAY):
        assert get_level(v) == k


def test_level_between_thresholds():
    for k in range(len(LEVEL_ARRAY) - 1):
        for v in range(LEVEL_ARRAY[k] + 1, LEVEL_ARRAY[k + 1]):
            assert get_level(v) == k


def test_level_beyond_max():
    assert get_level(SCORE_MAX + 1) == -1


def test_next_level_score():
    for k in range(len(LEVEL_ARRAY) - 1):
        assert next_level_score(k) == LEVEL_ARRAY[k + 1]
    assert next_level_score(len(LEVEL_ARRAY) - 1) == SCORE_MAX


def test_score_roundtrip(db):
    assert db.get_score(42) == 0
    db.set_score(42, 17)
    assert db.get_score(42) == 17


def test_sign_in_record_roundtrip(db):
    assert db.get_sign_in(7).count == 0
    db.set_sign_in_count(7, 3, NOW)
    record = db.get_sign_in(7)
    assert (record.uid, record.count, record.updated_at) == (7, 3, NOW)


def test_top_scores_ordered_and_limited(db):
    for uid, score in [(1, 5), (2, 50), (3, 20), (4, 1)]:
        db.set_score(uid, score)
    top = db.top_scores(3)
    assert [uid for uid, _ in top] == [2, 3, 1]
    scores = [s for _, s in top]
    assert scores == sorted(scores, reverse=True)


def test_first_sign_in(db):
    result = sign_in(db, 10, NOW)
    assert not result.already_signed
    assert result.score == SCORE_ADD
    assert result.count == 1
    assert db.get_score(10) == SCORE_ADD
    assert result.level == get_level(SCORE_ADD)
    assert result.month_word == "07/15"
    assert result.hour_word == "早上好"


def test_second_sign_in_same_day(db):
    sign_in(db, 10, NOW)
    again = sign_in(db, 10, NOW + dt.timedelta(hours=2))
    assert again.already_signed
    assert again.score == SCORE_ADD
    assert db.get_score(10) == SCORE_ADD


def test_sign_in_next_day_adds_score(db):
    sign_in(db, 10, NOW)
    result = sign_in(db, 10, NOW + dt.timedelta(days=1))
    assert not result.already_signed
    assert result.score == 2 * SCORE_ADD
    assert db.get_sign_in(10).updated_at == NOW + dt.timedelta(days=1)


def test_sign_in_caps_at_max(db):
    db.set_score(5, SCORE_MAX)
    result = sign_in(db, 5, NOW)
    assert result.reached_max
    assert result.score == SCORE_MAX
    assert db.get_score(5) == SCORE_MAX
    assert result.next_level_score == SCORE_MAX
    assert result.progress == 1.0


def test_score_line_matches_fields(db):
    result = sign_in(db, 11, NOW)
    assert result.score_line == f"{result.score}/{result.next_level_score}"