"""Daily sign-in and score keeping in SQLite."""

from __future__ import annotations

import datetime as _dt
import sqlite3
import threading
from dataclasses import dataclass

SIGNIN_MAX = 1
SCORE_MAX = 120
SCORE_ADD = 1
LEVEL_ARRAY: tuple[int, ...] = (0, 1, 2, 5, 10, 20, 35, 55, 75, 100, 120)
DAY_FORMAT = "%Y%m%d"
MONTH_FORMAT = "%m/%d"

ALREADY_SIGNED_TEXT = "今天你已经签到过了！"
MAX_REACHED_TEXT = "你获得的小熊饼干已经达到上限"


@dataclass
class SignInRecord:
    """How many times a user signed in and when the count last changed."""

    uid: int
    count: int = 0
    updated_at: _dt.datetime | None = None


@dataclass
class SignInResult:
    """What a sign-in attempt produced."""

    already_signed: bool
    count: int
    score: int
    level: int
    next_level_score: int
    hour_word: str
    month_word: str
    reached_max: bool = False
    add: int = SCORE_ADD

    @property
    def progress(self) -> float:
        """Share of the way to the next level, as drawn on the progress bar."""
        if self.next_level_score == 0:
            return 0.0
        return self.score / self.next_level_score

    @property
    def score_line(self) -> str:
        """The "score/next" caption of the progress bar."""
        return f"{self.score}/{self.next_level_score}"


class ScoreDB:
    """Score and sign-in tables of one database file."""

    def __init__(self, path) -> None:
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.Lock()
        with self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS score ("
                "uid INTEGER PRIMARY KEY NOT NULL, score INTEGER NOT NULL DEFAULT 0)"
            )
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS sign_in ("
                "uid INTEGER PRIMARY KEY NOT NULL, count INTEGER NOT NULL DEFAULT 0, "
                "updated_at TEXT)"
            )

    def close(self) -> None:
        """Close the database."""
        self._conn.close()

    def __enter__(self) -> "ScoreDB":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def get_score(self, uid: int) -> int:
        """Return a user's score, creating a zero record if there is none."""
        with self._lock, self._conn:
            row = self._conn.execute("SELECT score FROM score WHERE uid = ?", (uid,)).fetchone()
            if row is None:
                self._conn.execute("INSERT INTO score (uid, score) VALUES (?, 0)", (uid,))
                return 0
            return row[0]

    def set_score(self, uid: int, score: int) -> None:
        """Insert or update a user's score."""
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT INTO score (uid, score) VALUES (?, ?) "
                "ON CONFLICT(uid) DO UPDATE SET score = excluded.score",
                (uid, score),
            )

    def get_sign_in(self, uid: int) -> SignInRecord:
        """Return a user's sign-in record, creating an empty one if needed."""
        with self._lock, self._conn:
            row = self._conn.execute(
                "SELECT count, updated_at FROM sign_in WHERE uid = ?", (uid,)
            ).fetchone()
            if row is None:
                self._conn.execute("INSERT INTO sign_in (uid, count) VALUES (?, 0)", (uid,))
                return SignInRecord(uid)
        count, updated = row
        return SignInRecord(uid, count, _dt.datetime.fromisoformat(updated) if updated else None)

    def set_sign_in_count(self, uid: int, count: int, now: _dt.datetime) -> None:
        """Insert or update a user's sign-in count, stamping it with ``now``."""
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT INTO sign_in (uid, count, updated_at) VALUES (?, ?, ?) "
                "ON CONFLICT(uid) DO UPDATE SET count = excluded.count, "
                "updated_at = excluded.updated_at",
                (uid, count, now.isoformat()),
            )

    def top_scores(self, n: int) -> list[tuple[int, int]]:
        """Return up to n (uid, score) pairs, highest score first."""
        with self._lock:
            rows = self._conn.execute(
                "SELECT uid, score FROM score ORDER BY score DESC, uid ASC LIMIT ?", (n,)
            ).fetchall()
        return [(uid, score) for uid, score in rows]


def get_hour_word(t: _dt.datetime) -> str:
    """Return the greeting for the hour of t."""
    h = t.hour
    if 6 <= h < 12:
        return "早上好"
    if 12 <= h < 14:
        return "中午好"
    if 14 <= h < 19:
        return "下午好"
    if 19 <= h < 24:
        return "晚上好"
    if 0 <= h < 6:
        return "凌晨好"
    return ""


def get_level(count: int) -> int:
    """Return the level reached with a score, or -1 beyond the last level."""
    for k, v in enumerate(LEVEL_ARRAY):
        if count == v:
            return k
        if count < v:
            return k - 1
    return -1


def next_level_score(level: int) -> int:
    """Return the score needed for the level after ``level``."""
    if level < len(LEVEL_ARRAY) - 1:
        return LEVEL_ARRAY[level + 1]
    return SCORE_MAX


def sign_in(db: ScoreDB, uid: int, now: _dt.datetime) -> SignInResult:
    """Sign a user in for the day of ``now`` and award the daily score."""
    today = now.strftime(DAY_FORMAT)
    record = db.get_sign_in(uid)
    record_day = record.updated_at.strftime(DAY_FORMAT) if record.updated_at else None
    hour_word = get_hour_word(now)
    month_word = now.strftime(MONTH_FORMAT)

    if record.count >= SIGNIN_MAX and record_day == today:
        score = db.get_score(uid)
        level = get_level(score)
        return SignInResult(
            already_signed=True,
            count=record.count,
            score=score,
            level=level,
            next_level_score=next_level_score(level),
            hour_word=hour_word,
            month_word=month_word,
        )

    if record_day != today:
        db.set_sign_in_count(uid, 0, now)
    count = record.count + 1
    db.set_sign_in_count(uid, count, now)

    score = db.get_score(uid) + SCORE_ADD
    reached_max = score > SCORE_MAX
    if reached_max:
        score = SCORE_MAX
    db.set_score(uid, score)
    level = get_level(score)
    return SignInResult(
        already_signed=False,
        count=count,
        score=score,
        level=level,
        next_level_score=next_level_score(level),
        hour_word=hour_word,
        month_word=month_word,
        reached_max=reached_max,
    )