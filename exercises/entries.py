"""Parsing of word-list entries into DictionaryEntry values.

Word lists spell the same fields differently (``lemma``/``word``/``term``,
``gender``/``genus``/``g``, ``plural``/``pl``/``plur``) and encode gender in
German, in English, as a single letter, or as the article itself. Everything
is mapped onto the canonical entry once, here.
"""

import logging
import re
from typing import Any, Mapping

from pydantic import ValidationError

from models import ARTICLE_TO_GENDER, DictionaryEntry, Gender

logger = logging.getLogger(__name__)


ENTRY_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id",),
    "lemma": ("lemma", "word", "term"),
    "gender": ("gender", "genus", "g"),
    "article": ("article", "artikel"),
    "plural": ("plural", "pl", "plur"),
    "translations": ("translations", "translation", "meanings"),
    "examples": ("examples", "example"),
    "part_of_speech": ("pos", "partOfSpeech", "part_of_speech"),
    "level": ("level",),
    "tags": ("tags",),
}

GENDER_ALIASES: dict[str, Gender] = {
    # masculine
    "m": Gender.MASCULINE,
    "mas": Gender.MASCULINE,
    "mask": Gender.MASCULINE,
    "masc": Gender.MASCULINE,
    "maskulin": Gender.MASCULINE,
    "maskulinum": Gender.MASCULINE,
    "männlich": Gender.MASCULINE,
    "masculine": Gender.MASCULINE,
    "der": Gender.MASCULINE,
    # feminine
    "f": Gender.FEMININE,
    "fem": Gender.FEMININE,
    "feminin": Gender.FEMININE,
    "femininum": Gender.FEMININE,
    "weiblich": Gender.FEMININE,
    "feminine": Gender.FEMININE,
    "die": Gender.FEMININE,
    # neuter
    "n": Gender.NEUTER,
    "neu": Gender.NEUTER,
    "neut": Gender.NEUTER,
    "neutr": Gender.NEUTER,
    "neutral": Gender.NEUTER,
    "neutrum": Gender.NEUTER,
    "sächlich": Gender.NEUTER,
    "neuter": Gender.NEUTER,
    "das": Gender.NEUTER,
}

NOUN_POS = {"noun", "n", "nomen", "substantiv", "subst"}


def _lookup(raw: Mapping[str, Any], field: str) -> Any:
    for alias in ENTRY_ALIASES[field]:
        value = raw.get(alias)
        if value is not None and value != "":
            return value
    return None


def parse_gender(value: Any) -> Gender:
    """Map any recognized gender spelling onto the three-way enum."""
    if not isinstance(value, str):
        return Gender.UNKNOWN
    return GENDER_ALIASES.get(value.strip().lower().rstrip("."), Gender.UNKNOWN)


def is_dictionary_entry(raw: Any) -> bool:
    """Word-list entries are recognized by carrying a lemma alias."""
    return isinstance(raw, Mapping) and _lookup(raw, "lemma") is not None


def _as_strings(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(str(v).strip() for v in value if v is not None and str(v).strip())


def _as_examples(value: Any) -> tuple[str, ...]:
    """Examples are either plain sentences or {"de": ..., "en": ...} pairs."""
    if isinstance(value, (str, Mapping)):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return ()
    sentences = []
    for example in value:
        if isinstance(example, Mapping):
            example = example.get("de") or example.get("text")
        if isinstance(example, str) and example.strip():
            sentences.append(example.strip())
    return tuple(sentences)


def _slugify(text: str) -> str:
    return re.sub(r"[^\w]+", "-", text.strip().lower()).strip("-")


def _resolve_gender_and_article(lemma: str, raw: Mapping[str, Any]) -> tuple[Gender, str | None]:
    gender = parse_gender(_lookup(raw, "gender"))
    article_value = _lookup(raw, "article")
    article = article_value.strip().lower() if isinstance(article_value, str) else None
    if article not in ARTICLE_TO_GENDER:
        article = None

    if article and gender != Gender.UNKNOWN and ARTICLE_TO_GENDER[article] != gender:
        logger.warning(
            "Entry %r: gender %s conflicts with article %r, ignoring both",
            lemma,
            gender.value,
            article,
        )
        return Gender.UNKNOWN, None
    return gender, article


def parse_entry(raw: Any) -> DictionaryEntry | None:
    """Build a DictionaryEntry from a raw word-list record.

    Returns:
        The entry, or None when the record has no usable lemma.
    """
    if not isinstance(raw, Mapping):
        return None
    lemma = _lookup(raw, "lemma")
    if not isinstance(lemma, str) or not lemma.strip():
        return None
    lemma = lemma.strip()

    gender, article = _resolve_gender_and_article(lemma, raw)
    plural = _lookup(raw, "plural")
    pos = _lookup(raw, "part_of_speech")
    level = _lookup(raw, "level")
    raw_id = _lookup(raw, "id")

    try:
        return DictionaryEntry(
            id=str(raw_id) if raw_id is not None else _slugify(lemma),
            lemma=lemma,
            gender=gender,
            article=article,
            plural=plural.strip() if isinstance(plural, str) and plural.strip() else None,
            translations=_as_strings(_lookup(raw, "translations")),
            examples=_as_examples(_lookup(raw, "examples")),
            part_of_speech=str(pos).strip().lower() if pos is not None else None,
            level=str(level) if level is not None else None,
            tags=frozenset(t.lower() for t in _as_strings(_lookup(raw, "tags"))),
        )
    except ValidationError as e:
        logger.warning("Skipping entry %r: %s", lemma, e)
        return None


def is_noun(entry: DictionaryEntry) -> bool:
    """Nouns are entries marked as such, or carrying gender or a plural."""
    if entry.part_of_speech is not None:
        return entry.part_of_speech in NOUN_POS
    return entry.gender != Gender.UNKNOWN or entry.plural is not None
