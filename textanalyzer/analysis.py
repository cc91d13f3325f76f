"""Text statistics and the word cloud request body."""

import json
import re

from .models import Analysis

_SENTENCE_END = re.compile(r"[.?!]")

_WORD_CLOUD_COLORS = ["#1f77b4", "#ff7f0e", "#2ca02c", "#d62728", "#9467bd"]


def _byte_length(text: str) -> int:
    return len(text.encode("utf-8", "surrogateescape"))


def count_symbols(text: str) -> int:
    """Number of UTF-8 bytes in the text, not counting spaces."""
    return sum(_byte_length(word) for word in text.split(" "))


def count_words(text: str) -> int:
    """Number of pieces the text splits into on single spaces."""
    return len(text.split(" "))


def count_sentences(text: str) -> int:
    """Number of pieces the text splits into on '.', '?' and '!'."""
    return len(_SENTENCE_END.split(text))


def count_paragraphs(text: str) -> int:
    """Number of lines in the text."""
    return len(text.split("\n"))


def analyze_text(text: str) -> Analysis:
    """Compute the statistics of a text; the result carries id -1."""
    paragraphs = count_paragraphs(text)
    sentences = count_sentences(text)
    words = count_words(text)
    symbols = count_symbols(text)
    if not text:
        averages = (0.0, 0.0, 0.0)
    else:
        averages = (sentences / paragraphs, words / sentences, symbols / words)
    return Analysis(
        id=-1,
        paragraphs_amount=paragraphs,
        sentences_amount=sentences,
        words_amount=words,
        symbols_amount=symbols,
        average_sentences_per_paragraph=averages[0],
        average_words_per_sentence=averages[1],
        average_length_of_words=averages[2],
    )


def word_cloud_request(text: str) -> bytes:
    """JSON body asking the word cloud service for a PNG of the text."""
    payload = {
        "text": text,
        "format": "png",
        "width": 800,
        "height": 400,
        "fontFamily": "sans-serif",
        "fontScale": 15,
        "scale": "linear",
        "padding": 5,
        "colors": _WORD_CLOUD_COLORS,
    }
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    for char, escape in (
        ("<", "\\u003c"),
        (">", "\\u003e"),
        ("&", "\\u0026"),
        ("\u2028", "\\u2028"),
        ("\u2029", "\\u2029"),
    ):
        encoded = encoded.replace(char, escape)
    return encoded.encode("utf-8", "replace")