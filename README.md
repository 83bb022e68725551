# chatplugins

Self-contained features for group chat bots. Each module holds the logic of
one feature and leaves message delivery to the bot that uses it: you pass in
ids, names, the current time and a random source, and you get back text,
records or rendered images.

## Modules

| Module | What it does |
| --- | --- |
| `chatplugins.reborn` | A weighted random "reincarnation" into a country or region and a gender (`WeightedChooser`, `load_rates`, `build_area_chooser`, `reborn`). |
| `chatplugins.nsfw` | Turns image-classifier scores into short verdicts (`Picture`, `judge`, `auto_judge`). |
| `chatplugins.score` | Daily sign-in with a score, levels and a top-N ranking, stored in SQLite (`ScoreDB`, `sign_in`, `get_level`, `next_level_score`, `get_hour_word`). |
| `chatplugins.wordle` | A word-guessing game with 5, 6 or 7 letter words and a PNG board (`WordleGame`, `load_word_list`, `class_for`). |
| `chatplugins.word_count` | Counts Chinese hot words in word slices, with stopword filtering and ranking. |
| `chatplugins.tarot` | Draws Major Arcana cards, explains cards and lays out spreads (`TarotDeck`, `parse_draw_count`, `image_url`). |
| `chatplugins.sleep` | Tracks good-night and good-morning times per group in SQLite (`SleepDB`). |

## Examples

Sign-in and levels:

```python
from datetime import datetime
from chatplugins.score import ScoreDB, sign_in, get_level

with ScoreDB("score.db") as db:
    result = sign_in(db, 12345, datetime.now())
    if result.already_signed:
        print("already signed in today")
    print(result.hour_word, result.month_word, result.score_line)
    print(db.top_scores(10))          # [(uid, score), ...], highest first

get_level(5)                          # 3
```

A wordle round:

```python
from chatplugins.wordle import WordleGame, UnknownWord, TimesRunOut, load_word_list

dictionary = load_word_list(open("dict_5.txt", encoding="utf-8").read())
game = WordleGame("apple", dictionary)
try:
    won = game.guess("angle")
except UnknownWord:
    ...
except TimesRunOut:
    ...
png = game.render()                   # PNG bytes of the board
```

A word has `len(target) + 1` tries; `LengthNotEnough` and `UnknownWord`
reject a guess without using up a try.

Sleep tracking:

```python
from datetime import datetime
from chatplugins.sleep import SleepDB, good_night_text, is_evening

now = datetime.now()
if is_evening(now.hour):
    with SleepDB("sleep.db") as db:
        position, awake = db.sleep(1001, 12345, now)
    print(good_night_text(position, awake))
```

Tarot:

```python
import random
from chatplugins.tarot import TarotDeck, TarotError, parse_draw_count

deck = TarotDeck.from_json(cards_json, formations_json)
for card in deck.draw(parse_draw_count("3张", in_group=True), random.Random()):
    print(card.text, card.image)
summary, cards = deck.spread("圣三角", username="Alice")
picture_url, meaning = deck.explain("愚者")   # raises TarotError if unknown
```

Hot words:

```python
from chatplugins.word_count import load_stopwords, count_words, rank_by_word_count

stopwords = load_stopwords(stopword_text)
counter = count_words(["今天", "天气", "的"], stopwords)
top = rank_by_word_count(counter)[:20]
```

Image verdicts and reincarnation:

```python
from chatplugins.nsfw import Picture, judge, auto_judge
from chatplugins.reborn import load_rates, build_area_chooser, reborn

judge(Picture(neutral=0.9))           # "普通哦"
auto_judge(Picture(neutral=0.9))      # None: nothing to say

areas = build_area_chooser(load_rates("rate.json"))
print(reborn(areas))
```

## What this package does not do

- It does not connect to any chat platform, parse commands or send
  messages; the calling bot does that and passes in ids, names and times.
- It does not call online services or download anything. Data files such as
  the tarot card and spread JSON, the reincarnation rates, the wordle word
  lists and the stopword list are not shipped; the caller supplies them.
- `chatplugins.word_count` does not split text into words; it counts word
  slices that the caller provides.
- It draws no charts or sign-in cards; only the wordle board is rendered.

## Requirements

Python 3.10 or newer, with `pillow`. The tests use `pytest` and
`responses`, listed in the `test` extra.