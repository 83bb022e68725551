"""Word-guessing game with a rendered board."""

from __future__ import annotations

import io
from typing import Iterable

from PIL import Image, ImageDraw, ImageFont

MATCH, EXIST, NOTEXIST, UNDONE = range(4)

COLORS: tuple[tuple[int, int, int], ...] = (
    (125, 166, 108),
    (199, 183, 96),
    (123, 123, 123),
    (219, 219, 219),
)
WHITE = (255, 255, 255)

CLASS_DICT: dict[str, int] = {
    "": 5,
    "五阶": 5,
    "六阶": 6,
    "七阶": 7,
}

_SIDE = 20
_SPACE = 10
_STEP = _SIDE + 4


class WordleError(Exception):
    """Base class of the errors a guess can raise."""


class LengthNotEnough(WordleError):
    """The guess has a different length from the answer."""

    def __init__(self) -> None:
        super().__init__("length not enough")


class UnknownWord(WordleError):
    """The guess is not in the dictionary."""

    def __init__(self) -> None:
        super().__init__("unknown word")


class TimesRunOut(WordleError):
    """The last allowed guess was used without finding the answer."""

    def __init__(self) -> None:
        super().__init__("times run out")


class WordleGame:
    """One round: a target word, the accepted dictionary and the guesses so far."""

    def __init__(self, target: str, dictionary: Iterable[str]) -> None:
        self.target = target
        self.size = len(target)
        self.max_guesses = self.size + 1
        self.dictionary = frozenset(dictionary)
        self.guesses: list[str] = []

    def guess(self, word: str) -> bool:
        """Record a guess and return whether it is the answer.

        An empty guess records nothing. Raises LengthNotEnough or UnknownWord
        for rejected guesses, and TimesRunOut once the last guess is spent.
        """
        if not word:
            return False
        word = word.lower()
        win = word == self.target
        if not win:
            if len(word) != self.size:
                raise LengthNotEnough()
            if word not in self.dictionary:
                raise UnknownWord()
        self.guesses.append(word)
        if win:
            return True
        if len(self.guesses) >= self.max_guesses:
            raise TimesRunOut()
        return False

    def _color(self, guess: str, j: int) -> tuple[int, int, int]:
        ch = guess[j]
        if ch == self.target[j]:
            return COLORS[MATCH]
        if ch in self.target:
            return COLORS[EXIST]
        return COLORS[NOTEXIST]

    def render(self) -> bytes:
        """Draw the board and return it as PNG bytes."""
        width = _STEP * self.size + _SPACE * 2 - 4
        height = _STEP * (self.size + 1) + _SPACE * 2 - 4
        image = Image.new("RGB", (width, height), WHITE)
        draw = ImageDraw.Draw(image)
        font = ImageFont.load_default()
        for i in range(self.size + 1):
            for j in range(self.size):
                x = _SPACE + j * _STEP
                y = _SPACE + i * _STEP
                if i < len(self.guesses):
                    guess = self.guesses[i]
                    draw.rectangle(
                        [x, y, x + _SIDE - 1, y + _SIDE - 1], fill=self._color(guess, j)
                    )
                    draw.text((x + 7, y + 4), guess[j].upper(), fill=WHITE, font=font)
                else:
                    draw.rectangle(
                        [x + 1, y + 1, x + _SIDE - 2, y + _SIDE - 2],
                        outline=COLORS[UNDONE],
                        width=1,
                    )
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()


def load_word_list(text: str) -> list[str]:
    """Split a newline-separated word list and sort it."""
    return sorted(text.split("\n"))


def class_for(level_name: str) -> int:
    """Return the word length for a level name such as "六阶"."""
    try:
        return CLASS_DICT[level_name]
    except KeyError:
        raise ValueError(f"unknown level: {level_name!r}") from None