"""
Text helpers for Russian-language content.
"""

import re


NON_TEXT_CHARS_RE = re.compile(r"[^\u0400-\u04FF\u0020-\u007E\n]")
REPEATED_PUNCTUATION_RE = re.compile(r"([.,!?;:])\s*\1+")
LETTER_RE = re.compile(r"[а-яА-Яa-zA-Z]")


def days_word(days: int) -> str:
    """
    Russian word for "days" agreeing with the number used in prompts.

        1 → "день", 2-4 → "дня", otherwise "дней"
    """
    if days == 1:
        return "день"
    if 2 <= days <= 4:
        return "дня"
    return "дней"


def clean_ocr_text(text: str) -> str:
    """
    Clean text recognized from a review screenshot.

    - Characters outside Cyrillic / printable ASCII become spaces
    - Whitespace is collapsed
    - Repeated punctuation ("!!!", ". .") is collapsed to one mark
    - Words longer than 2 characters that are mostly not letters are dropped
      (OCR noise such as "###", "|||1" or stray numbers)

    Example:
        >>> clean_ocr_text("Спасибо!!!  ### Всё супер")
        'Спасибо! Всё супер'
    """
    cleaned = NON_TEXT_CHARS_RE.sub(" ", text)
    cleaned = re.sub(r"\s+", " ", cleaned)
    cleaned = REPEATED_PUNCTUATION_RE.sub(r"\1", cleaned)
    cleaned = cleaned.strip()

    words = []
    for word in cleaned.split():
        if len(word) <= 2:
            words.append(word)
            continue
        letters = len(LETTER_RE.findall(word))
        if letters / len(word) > 0.5:
            words.append(word)

    return " ".join(words)
