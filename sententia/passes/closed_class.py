"""
Tier 1: closed-class structure.

These passes need nothing but the word itself: a single lookup reading,
a form of *sum*, an infinitive, or the enclitic *-que*.
"""
import logging
from typing import List, Optional

from ..lexicon import COPULA_FORMS
from ..model import InferenceKind, PartOfSpeech, Word, inference_id
from ..morphology import is_infinitive
from .base import bounded, resolve

logger = logging.getLogger(__name__)

_INFINITIVE_COPULA_FORMS = {"esse", "fore", "fuisse"}


def apply_sole_reading(words: List[Word], span: Optional[range] = None) -> None:
    """Resolve words whose lookup offers exactly one interpretation."""
    for idx in bounded(words, span):
        word = words[idx]
        if word.is_resolved or len(word.candidates) != 1:
            continue
        parse = word.candidates[0]
        if len(parse.readings) > 1:
            continue
        reading = parse.readings[0] if parse.readings else None
        resolve(words, idx, parse, reading, InferenceKind.SOLE_READING,
                "Only one reading available")


def apply_copula(words: List[Word], span: Optional[range] = None) -> None:
    """Forms of *sum* are almost always the verb, whatever else the lookup offers."""
    for idx in bounded(words, span):
        word = words[idx]
        if word.is_resolved or word.clean not in COPULA_FORMS:
            continue
        verbs = [c for c in word.candidates if c.pos == PartOfSpeech.VERB and c.readings]
        if not verbs:
            continue
        parse = next((c for c in verbs if "sum" in (f.lower() for f in c.forms)), verbs[0])
        want_infinitive = word.clean in _INFINITIVE_COPULA_FORMS
        reading = next(
            (r for r in parse.readings if is_infinitive(r) == want_infinitive),
            parse.readings[0],
        )
        resolve(words, idx, parse, reading, InferenceKind.COPULA,
                'Form of "sum" (to be) - highly probable')


def apply_infinitive(words: List[Word], span: Optional[range] = None) -> None:
    """Prefer an infinitive reading whenever a verb candidate offers one."""
    for idx in bounded(words, span):
        word = words[idx]
        if word.is_resolved:
            continue
        for parse in word.candidates:
            if parse.pos != PartOfSpeech.VERB:
                continue
            reading = next((r for r in parse.readings if is_infinitive(r)), None)
            if reading is not None:
                resolve(words, idx, parse, reading, InferenceKind.INFINITIVE, "Infinitive form")
                break


def _carries_que(parse) -> bool:
    return any(
        m.kind == PartOfSpeech.TACKON and m.form.strip().lower().lstrip("-") == "que"
        for m in parse.modifications
    )


def apply_enclitic(words: List[Word], span: Optional[range] = None) -> None:
    """Mark words whose every interpretation carries *-que* as joined by 'and'."""
    for idx in bounded(words, span):
        word = words[idx]
        if word.has_et_prefix or not word.candidates:
            continue
        if inference_id(InferenceKind.ENCLITIC, idx) in word.rejected:
            continue
        if all(_carries_que(c) for c in word.candidates):
            word.has_et_prefix = True
            word.et_guessed = True
            logger.debug("Enclitic -que on %r (%d)", word.original, idx)
