"""Good-morning and good-night bookkeeping per group."""

from __future__ import annotations

import datetime as _dt
import sqlite3
import threading

_TS = "microseconds"
_HOUR = 3600 * 10**6
_MINUTE = 60 * 10**6
_SECOND = 10**6


def _stamp(t: _dt.datetime) -> str:
    return t.isoformat(timespec=_TS)


class SleepDB:
    """Last sleep or wake time of every group member."""

    def __init__(self, path) -> None:
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.Lock()
        with self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS sleep_manage ("
                "id INTEGER PRIMARY KEY AUTOINCREMENT, "
                "group_id INTEGER, user_id INTEGER, sleep_time TEXT)"
            )

    def close(self) -> None:
        """Close the database."""
        self._conn.close()

    def __enter__(self) -> "SleepDB":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _record(self, gid: int, uid: int, now: _dt.datetime, since: _dt.datetime):
        with self._lock, self._conn:
            row = self._conn.execute(
                "SELECT sleep_time FROM sleep_manage WHERE group_id = ? AND user_id = ? "
                "ORDER BY id LIMIT 1",
                (gid, uid),
            ).fetchone()
            elapsed = _dt.timedelta(0)
            if row is None:
                self._conn.execute(
                    "INSERT INTO sleep_manage (group_id, user_id, sleep_time) VALUES (?, ?, ?)",
                    (gid, uid, _stamp(now)),
                )
            else:
                elapsed = now - _dt.datetime.fromisoformat(row[0])
                self._conn.execute(
                    "UPDATE sleep_manage SET sleep_time = ? WHERE group_id = ? AND user_id = ?",
                    (_stamp(now), gid, uid),
                )
            position = self._conn.execute(
                "SELECT COUNT(*) FROM sleep_manage "
                "WHERE group_id = ? AND sleep_time <= ? AND sleep_time >= ?",
                (gid, _stamp(now), _stamp(since)),
            ).fetchone()[0]
        return position, elapsed

    def sleep(self, gid: int, uid: int, now: _dt.datetime) -> tuple[int, _dt.timedelta]:
        """Record going to bed; return the rank tonight and the time awake."""
        if now.hour >= 21:
            since = now.replace(hour=21, minute=0, second=0)
        elif now.hour <= 3:
            since = (now - _dt.timedelta(days=1)).replace(hour=21, minute=0, second=0)
        else:
            since = _dt.datetime.min
        return self._record(gid, uid, now, since)

    def get_up(self, gid: int, uid: int, now: _dt.datetime) -> tuple[int, _dt.timedelta]:
        """Record getting up; return the rank this morning and the time asleep."""
        since = now.replace(hour=6, minute=0, second=0)
        return self._record(gid, uid, now, since)


def _tdiv(a: int, b: int) -> int:
    q = abs(a) // b
    return q if a >= 0 else -q


def time_duration(delta: _dt.timedelta) -> tuple[int, int, int]:
    """Split a duration into whole hours, minutes and seconds."""
    total = (delta.days * 86400 + delta.seconds) * _SECOND + delta.microseconds
    hour = _tdiv(total, _HOUR)
    minute = _tdiv(total - hour * _HOUR, _MINUTE)
    second = _tdiv(total - hour * _HOUR - minute * _MINUTE, _SECOND)
    return hour, minute, second


def is_morning(hour: int) -> bool:
    """Good mornings count from 6 to 12 o'clock."""
    return 6 <= hour <= 12


def is_evening(hour: int) -> bool:
    """Good nights count from 21 o'clock to 3 in the morning."""
    return hour >= 21 or hour <= 3


def _unknown(h: int, m: int, s: int) -> bool:
    return (h == 0 and m == 0 and s == 0) or h >= 24


def good_morning_text(position: int, duration: _dt.timedelta) -> str:
    """Reply to a good morning."""
    h, m, s = time_duration(duration)
    if _unknown(h, m, s):
        return f"早安成功！你是今天第{position}个起床的"
    return f"早安成功！你的睡眠时长为{h}时{m}分{s}秒,你是今天第{position}个起床的"


def good_night_text(position: int, duration: _dt.timedelta) -> str:
    """Reply to a good night."""
    h, m, s = time_duration(duration)
    if _unknown(h, m, s):
        return f"晚安成功！你是今天第{position}个睡觉的"
    return f"晚安成功！你的清醒时长为{h}时{m}分{s}秒,你是今天第{position}个睡觉的"