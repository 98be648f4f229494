# src/contextcrafter/utils/tokenizer.py
from contextcrafter.config import CHARS_PER_TOKEN


class Tokenizer:
    """
    Character-ratio token estimator.

    Ceiling division keeps the estimate subadditive:
    count(a + b) <= count(a) + count(b) <= count(a + b) + 1.
    """

    chars_per_token = CHARS_PER_TOKEN

    @classmethod
    def count_chars(cls, length: int) -> int:
        if length <= 0:
            return 0
        return -(-length // cls.chars_per_token)

    @classmethod
    def count(cls, text: str) -> int:
        """Estimates token count for a given text."""
        return cls.count_chars(len(text))
