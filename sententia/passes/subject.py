"""
Tier 5: subjects of third-person verbs.

The clause around a resolved 3rd-person finite verb runs back to the
previous verb or strong punctuation and forward to the next strong
punctuation. The first nominative noun of matching number in that clause is
taken as the subject. Failing a noun, the first adjective or participle that
could be nominative is taken as a substantive.
"""
import logging
from typing import List, Optional

from ..lexicon import is_adjectival, is_sentence_separator
from ..model import InferenceKind, PartOfSpeech, Word
from ..morphology import grammatical_number, is_finite_verb_reading, is_nominative, verb_person_number
from .base import bounded, relabel, resolve

logger = logging.getLogger(__name__)


def _third_person_verbs(words: List[Word], span: range) -> List[int]:
    return [
        i for i in span
        if words[i].pos == PartOfSpeech.VERB
        and is_finite_verb_reading(words[i].selected_reading)
        and verb_person_number(words[i].selected_reading).person == 3
    ]


def _clause(words: List[Word], span: range, verb_idx: int) -> range:
    start = span.start
    for i in range(verb_idx - 1, span.start - 1, -1):
        if is_sentence_separator(words[i]) or words[i].pos == PartOfSpeech.VERB:
            start = i + 1
            break
    stop = span.stop
    for i in range(verb_idx + 1, span.stop):
        if is_sentence_separator(words[i]):
            stop = i
            break
    return range(start, stop)


def find_subject(words: List[Word], span: range, verb_idx: int) -> Optional[int]:
    """Resolve (or claim) the subject of ``words[verb_idx]``. Returns its index."""
    verb = words[verb_idx]
    number = verb_person_number(verb.selected_reading).number
    heuristic = f'Subject of "{verb.original}" ({number.lower()} 3rd person)'
    substantive = None

    for i in _clause(words, span, verb_idx):
        if i == verb_idx:
            continue
        word = words[i]
        if word.is_resolved:
            reading = word.selected_reading
            if (word.pos == PartOfSpeech.NOUN and is_nominative(reading)
                    and grammatical_number(reading) == number
                    and relabel(words, i, InferenceKind.SUBJECT, heuristic, anchor=verb_idx)):
                return i
            continue
        if word.is_rejected(InferenceKind.SUBJECT, verb_idx):
            continue
        for parse in word.candidates:
            nominatives = [
                r for r in parse.readings
                if is_nominative(r) and grammatical_number(r) == number
            ]
            if not nominatives:
                continue
            if parse.pos == PartOfSpeech.NOUN:
                resolve(words, i, parse, nominatives[0], InferenceKind.SUBJECT, heuristic, anchor=verb_idx)
                return i
            if substantive is None and is_adjectival(parse):
                substantive = i, parse, nominatives[0]

    if substantive is not None:
        i, parse, reading = substantive
        resolve(words, i, parse, reading, InferenceKind.SUBJECT,
                f"{heuristic} - substantive {parse.pos.value.lower()}", anchor=verb_idx)
        return i
    return None


def apply_nominative_chunk(words: List[Word], span: Optional[range] = None) -> None:
    """Subject of the first 3rd-person finite verb."""
    span = bounded(words, span)
    verbs = _third_person_verbs(words, span)
    if verbs:
        find_subject(words, span, verbs[0])


def apply_clause_subjects(words: List[Word], span: Optional[range] = None) -> None:
    """Subjects of every later 3rd-person finite verb, each within its own clause."""
    span = bounded(words, span)
    for verb_idx in _third_person_verbs(words, span)[1:]:
        find_subject(words, span, verb_idx)
