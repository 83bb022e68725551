"""Major Arcana tarot draws, meanings and spreads."""

from __future__ import annotations

import json
import random
from dataclasses import dataclass, field

BED = "https://gitcode.net/shudorcl/zbp-tarot/-/raw/master/"
MAJOR_ARCANA = 22
MAX_DRAW = 20

REASONS: tuple[str, ...] = (
    "您抽到的是~\n",
    "锵锵锵，塔罗牌的预言是~\n",
    "诶，让我看看您抽到了~\n",
)
POSITIONS: tuple[str, str] = ("正位", "逆位")
_REVERSE: tuple[str, str] = ("", "Reverse")


class TarotError(Exception):
    """Raised for bad draw requests or unknown cards and spreads."""


@dataclass(frozen=True)
class Card:
    """One card with its meanings."""

    name: str = ""
    description: str = ""
    reverse_description: str = ""
    img_url: str = ""


@dataclass(frozen=True)
class Formation:
    """A spread: how many cards and what each position stands for."""

    cards_num: int
    is_cut: bool = False
    represent: list[list[str]] = field(default_factory=list)


@dataclass(frozen=True)
class DrawnCard:
    """A card drawn upright or reversed."""

    index: int
    reversed_: bool
    card: Card
    reason: str = ""

    @property
    def position(self) -> str:
        """"正位" for upright, "逆位" for reversed."""
        return POSITIONS[int(self.reversed_)]

    @property
    def image(self) -> str:
        """URL of the card picture in its orientation."""
        return image_url(self.index, self.reversed_)

    @property
    def text(self) -> str:
        """The announcement sent with the picture."""
        return self.reason + self.position + " 的 " + self.card.name + "\n"


def image_url(index: int, reversed_: bool) -> str:
    """Return the picture URL of a Major Arcana card."""
    return f"{BED}MajorArcana{_REVERSE[int(bool(reversed_))]}/{index}.png"


def parse_draw_count(match: str, in_group: bool) -> int:
    """Turn a captured "n张" into a card count, checking the limits."""
    if not match:
        return 1
    digits = match[:-1] if match.endswith("张") else match
    try:
        n = int(digits)
    except ValueError as exc:
        raise TarotError(str(exc)) from exc
    if n <= 0:
        raise TarotError("张数必须为正")
    if n > 1 and not in_group:
        raise TarotError("抽取多张仅支持群聊")
    if n > MAX_DRAW:
        raise TarotError("抽取张数过多")
    return n


def _card_from(entry: dict) -> Card:
    info = entry.get("info") or {}
    return Card(
        name=str(entry.get("name", "")),
        description=str(info.get("description", "")),
        reverse_description=str(info.get("reverseDescription", "")),
        img_url=str(info.get("imgUrl", "")),
    )


class TarotDeck:
    """The loaded cards and spreads."""

    def __init__(self, cards: dict[str, Card], formations: dict[str, Formation]) -> None:
        self.cards = cards
        self.formations = formations
        self.info = {card.name.split("(")[0]: card for card in cards.values()}

    @classmethod
    def from_json(cls, cards_json, formations_json) -> "TarotDeck":
        """Build a deck from the card and spread JSON documents."""
        raw_cards = json.loads(cards_json)
        raw_forms = json.loads(formations_json)
        if not isinstance(raw_cards, dict) or not isinstance(raw_forms, dict):
            raise TarotError("tarot data must be JSON objects")
        cards = {str(key): _card_from(value) for key, value in raw_cards.items()}
        formations = {
            str(key): Formation(
                cards_num=int(value.get("cards_num", 0)),
                is_cut=bool(value.get("is_cut", False)),
                represent=[list(row) for row in value.get("represent", [])],
            )
            for key, value in raw_forms.items()
        }
        return cls(cards, formations)

    def _card(self, index: int) -> Card:
        return self.cards.get(str(index), Card())

    def _draw_distinct(self, n: int, rng, with_reason: bool) -> list[DrawnCard]:
        if n <= 0 or n > MAJOR_ARCANA:
            raise TarotError("抽取张数过多" if n > 0 else "张数必须为正")
        used: set[int] = set()
        drawn = []
        for _ in range(n):
            j = rng.randrange(MAJOR_ARCANA)
            while j in used:
                j = rng.randrange(MAJOR_ARCANA)
            used.add(j)
            p = rng.randrange(2)
            reason = REASONS[rng.randrange(len(REASONS))] if with_reason else ""
            drawn.append(DrawnCard(j, bool(p), self._card(j), reason))
        return drawn

    def draw(self, n: int, rng=None) -> list[DrawnCard]:
        """Draw n distinct cards, each upright or reversed."""
        return self._draw_distinct(n, rng if rng is not None else random, True)

    def explain(self, name: str) -> tuple[str, str]:
        """Return the picture URL and the meaning text of a card by name."""
        card = self.info.get(name)
        if card is None:
            raise TarotError("没有找到" + name + "噢~")
        text = (
            "\n" + name + "的含义是~"
            + "\n正位:" + card.description
            + "\n逆位:" + card.reverse_description
        )
        return BED + card.img_url, text

    def spread(self, name: str, rng=None, username: str = "") -> tuple[str, list[DrawnCard]]:
        """Lay out a named spread and return its summary text and the cards."""
        formation = self.formations.get(name)
        if formation is None:
            raise TarotError("没有找到" + name + "噢~")
        drawn = self._draw_distinct(
            formation.cards_num, rng if rng is not None else random, False
        )
        labels = formation.represent[0] if formation.represent else []
        lines = [username + "\n"]
        for i, card in enumerate(drawn):
            label = labels[i] if i < len(labels) else ""
            lines.append(label + ": " + card.position + " 的 " + card.card.name + "\n")
        return "".join(lines), drawn