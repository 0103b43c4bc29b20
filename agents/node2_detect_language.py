import logging
import re

from schemas.pipeline_schemas import Language

logger = logging.getLogger(__name__)

ARABIC_RE = re.compile("[\u0600-\u06FF]")
LETTER_RE = re.compile("[a-zA-Z\u0600-\u06FF]")

# Arabic share of all letters above which a document counts as Arabic.
ARABIC_THRESHOLD = 0.30


def detect_language(text: str) -> Language:
    """
    Two-way heuristic: Arabic when more than 30% of the Latin + Arabic
    letters are Arabic, otherwise English (including when there are no
    letters at all).
    """
    arabic = len(ARABIC_RE.findall(text or ""))
    letters = len(LETTER_RE.findall(text or ""))
    if letters == 0:
        return Language.ENGLISH

    ratio = arabic / letters
    language = Language.ARABIC if ratio > ARABIC_THRESHOLD else Language.ENGLISH
    logger.info("[Language] %d/%d Arabic letters (%.2f) -> %s", arabic, letters, ratio, language.value)
    return language
