"""Group chat bot features: sign-in scores, sleep tracking, wordle, tarot, hot words, image verdicts and reincarnation."""

__version__ = "0.1.0"