"""
Tier 6: clause-level constructions.

Each pass looks for one construction among already-resolved words and links
its members with modify edges. None of them resolves a word; they only read
resolutions made by earlier tiers.
"""
import logging
from typing import List, Optional

from ..lexicon import (
    ACI_VERBS, AGENT_PREPOSITIONS, COMPLEMENTARY_VERBS, DATIVE_VERBS, LINKING_VERB_FORMS,
    PURPOSE_CONJUNCTIONS, TEMPORAL_CONJUNCTIONS, is_guaranteed_preposition, is_noun_like, is_pronoun,
    has_form_in, is_relative_pronoun_form, selected_cgn, selected_preposition_cases,
)
from ..model import AnnotationKind, InferenceKind, PartOfSpeech, Word, inference_id
from ..morphology import is_finite_verb_reading, is_infinitive, reading_mood, reading_voice
from .base import annotate, bounded, window

logger = logging.getLogger(__name__)

RELATIVE_WINDOW = 10
DATIVE_WINDOW = 8
ACI_WINDOW = 10
TEMPORAL_WINDOW = 8
COMPARATIVE_WINDOW = 5
MEANS_WINDOW = 10
AGENT_WINDOW_BEFORE = 10
AGENT_WINDOW_AFTER = 15
LINKING_WINDOW = 5
COMPLEMENT_WINDOW = 5
PURPOSE_WINDOW = 8


def _link(words: List[Word], owner: int, target: int, kind: InferenceKind, heuristic: str) -> bool:
    """Modify edge unless rejected. True when the edge exists afterwards."""
    if inference_id(kind, target) in words[owner].rejected:
        return False
    annotate(words, owner, AnnotationKind.MODIFY, kind, heuristic, target=target)
    return True


def _is_verb(word: Word) -> bool:
    return word.pos == PartOfSpeech.VERB and bool(word.selected_reading)


def _is_finite_verb(word: Word) -> bool:
    return _is_verb(word) and not is_infinitive(word.selected_reading)


def _is_infinitive_verb(word: Word) -> bool:
    return _is_verb(word) and is_infinitive(word.selected_reading)


def _is_substantive(word: Word) -> bool:
    return is_noun_like(word.selected_parse)


def _by_distance(span: range, idx: int, radius: int):
    """Indices around ``idx`` nearest first, earlier before later on ties."""
    for distance in range(1, radius + 1):
        for i in (idx - distance, idx + distance):
            if i in span:
                yield i


def apply_relative_pronoun(words: List[Word], span: Optional[range] = None) -> None:
    """A relative pronoun refers to the nearest preceding noun of its gender and number."""
    span = bounded(words, span)
    for idx in span:
        word = words[idx]
        if not is_relative_pronoun_form(word) or not is_pronoun(word.selected_parse):
            continue
        if "Pronoun" not in (word.selected_reading or ""):
            continue
        cgn = selected_cgn(word)
        if cgn is None:
            continue
        for i in range(idx - 1, max(span.start, idx - RELATIVE_WINDOW) - 1, -1):
            noun = words[i]
            noun_cgn = selected_cgn(noun)
            if noun.pos != PartOfSpeech.NOUN or noun_cgn is None:
                continue
            if noun_cgn.gender == cgn.gender and noun_cgn.number == cgn.number:
                if _link(words, idx, i, InferenceKind.RELATIVE_PRONOUN,
                         f'Relative pronoun referring to "{noun.original}" ({cgn.gender} {cgn.number})'):
                    break


def apply_dative_object(words: List[Word], span: Optional[range] = None) -> None:
    """Dative nouns and pronouns near a verb of giving, telling or pleasing."""
    span = bounded(words, span)
    for verb_idx in span:
        verb = words[verb_idx]
        if not _is_verb(verb) or not has_form_in(verb.selected_parse, DATIVE_VERBS):
            continue
        for i in window(span, verb_idx - DATIVE_WINDOW, verb_idx + DATIVE_WINDOW + 1):
            candidate = words[i]
            cgn = selected_cgn(candidate)
            if i == verb_idx or cgn is None or cgn.case != "Dative" or not _is_substantive(candidate):
                continue
            _link(words, i, verb_idx, InferenceKind.DATIVE_OBJECT,
                  f'Indirect object of "{verb.original}" (dative case)')


def apply_accusative_infinitive(words: List[Word], span: Optional[range] = None) -> None:
    """Accusative subject plus infinitive after a verb of saying, thinking or perceiving."""
    span = bounded(words, span)
    for verb_idx in span:
        verb = words[verb_idx]
        if not _is_finite_verb(verb) or not has_form_in(verb.selected_parse, ACI_VERBS):
            continue
        infinitive = next(
            (i for i in window(span, verb_idx + 1, verb_idx + ACI_WINDOW + 1) if _is_infinitive_verb(words[i])),
            None,
        )
        if infinitive is None:
            continue
        for j in range(verb_idx + 1, infinitive):
            subject = words[j]
            cgn = selected_cgn(subject)
            if cgn is None or cgn.case != "Accusative" or not _is_substantive(subject):
                continue
            _link(words, j, infinitive, InferenceKind.ACI_SUBJECT,
                  f'Subject of infinitive "{words[infinitive].original}" in ACI construction')
        _link(words, infinitive, verb_idx, InferenceKind.ACI_INFINITIVE,
              f'Infinitive in ACI construction with "{verb.original}"')


def apply_temporal_clause(words: List[Word], span: Optional[range] = None) -> None:
    """A temporal conjunction introduces the next finite verb."""
    span = bounded(words, span)
    for idx in span:
        word = words[idx]
        if word.clean not in TEMPORAL_CONJUNCTIONS or is_guaranteed_preposition(word):
            continue
        if word.is_resolved and word.pos not in (PartOfSpeech.OTHER, PartOfSpeech.ADVERB):
            continue
        verb_idx = next(
            (i for i in window(span, idx + 1, idx + TEMPORAL_WINDOW + 1) if _is_finite_verb(words[i])),
            None,
        )
        if verb_idx is None:
            continue
        mood = reading_mood(words[verb_idx].selected_reading) or "finite"
        _link(words, idx, verb_idx, InferenceKind.TEMPORAL,
              f'Temporal clause "{word.original}" with {mood.lower()} "{words[verb_idx].original}"')


def apply_comparative(words: List[Word], span: Optional[range] = None) -> None:
    """``quam`` after a comparative introduces the standard of comparison."""
    span = bounded(words, span)
    for idx in span:
        word = words[idx]
        if word.clean != "quam":
            continue
        for i in range(idx - 1, max(span.start, idx - COMPARATIVE_WINDOW) - 1, -1):
            candidate = words[i]
            if not candidate.is_resolved or "Comparative" not in (candidate.selected_reading or ""):
                continue
            if _link(words, idx, i, InferenceKind.COMPARATIVE,
                     f'Comparison with "{candidate.original}" (comparative)'):
                break


def _in_ablative_scope(words: List[Word], idx: int) -> bool:
    for owner in words:
        if "Ablative" not in selected_preposition_cases(owner):
            continue
        for annotation in owner.annotations:
            if (annotation.kind == AnnotationKind.PREPOSITION_SCOPE
                    and annotation.end_index is not None
                    and owner.index < idx <= annotation.end_index):
                return True
    return False


def apply_ablative_means(words: List[Word], span: Optional[range] = None) -> None:
    """An ablative noun outside any prepositional phrase goes with the nearest finite verb."""
    span = bounded(words, span)
    for idx in span:
        word = words[idx]
        cgn = selected_cgn(word)
        if word.pos != PartOfSpeech.NOUN or cgn is None or cgn.case != "Ablative":
            continue
        if idx - 1 >= 0 and is_guaranteed_preposition(words[idx - 1]):
            continue
        if _in_ablative_scope(words, idx):
            continue
        for i in _by_distance(span, idx, MEANS_WINDOW):
            if not _is_finite_verb(words[i]):
                continue
            if _link(words, idx, i, InferenceKind.ABLATIVE_MEANS,
                     f'Ablative of means with "{words[i].original}"'):
                break


def apply_ablative_agent(words: List[Word], span: Optional[range] = None) -> None:
    """``a``/``ab`` with an ablative marks the agent of a nearby passive verb."""
    span = bounded(words, span)
    for i in window(span, span.start, span.stop - 1):
        prep, noun = words[i], words[i + 1]
        if prep.clean not in AGENT_PREPOSITIONS or not prep.is_resolved:
            continue
        cgn = selected_cgn(noun)
        if cgn is None or cgn.case != "Ablative":
            continue
        for j in window(span, i - AGENT_WINDOW_BEFORE, i + AGENT_WINDOW_AFTER):
            verb = words[j]
            if not _is_verb(verb) or reading_voice(verb.selected_reading) != "Passive":
                continue
            if _link(words, i + 1, j, InferenceKind.ABLATIVE_AGENT,
                     f'Agent of passive verb "{verb.original}" (ab + ablative)'):
                break


def apply_ablative_absolute(words: List[Word], span: Optional[range] = None) -> None:
    """Ablative noun followed by an ablative participle of the same gender and number."""
    span = bounded(words, span)
    for i in window(span, span.start, span.stop - 1):
        noun, participle = words[i], words[i + 1]
        if noun.pos != PartOfSpeech.NOUN or participle.pos != PartOfSpeech.PARTICIPLE:
            continue
        first, second = selected_cgn(noun), selected_cgn(participle)
        if first is None or second is None or first.case != "Ablative" or second.case != "Ablative":
            continue
        if first.gender != second.gender or first.number != second.number:
            continue
        _link(words, i + 1, i, InferenceKind.ABLATIVE_ABSOLUTE,
              f'Ablative absolute: participle with "{noun.original}"')


def _is_linking_verb(verb: Word) -> bool:
    return _is_verb(verb) and (
        has_form_in(verb.selected_parse, ("sum", "fio")) or verb.clean in LINKING_VERB_FORMS
    )


def apply_linking_verb(words: List[Word], span: Optional[range] = None) -> None:
    """Nominative on the far side of *sum* or *fio* describes the nominative subject."""
    span = bounded(words, span)
    for verb_idx in span:
        verb = words[verb_idx]
        if not _is_linking_verb(verb):
            continue
        subject = None
        for i in window(span, verb_idx - LINKING_WINDOW, verb_idx + LINKING_WINDOW):
            candidate = words[i]
            cgn = selected_cgn(candidate)
            if i == verb_idx or candidate.pos not in (PartOfSpeech.NOUN, PartOfSpeech.ADJECTIVE):
                continue
            if cgn and cgn.case == "Nominative":
                subject = i, cgn
                break
        if subject is None:
            continue
        subject_idx, subject_cgn = subject
        if subject_idx < verb_idx:
            predicates = window(span, verb_idx + 1, verb_idx + LINKING_WINDOW)
        else:
            predicates = window(span, span.start, verb_idx)
        for i in predicates:
            if i == subject_idx:
                continue
            cgn = selected_cgn(words[i])
            if cgn is None or cgn.case != "Nominative":
                continue
            if cgn.gender == subject_cgn.gender and cgn.number == subject_cgn.number:
                if _link(words, i, subject_idx, InferenceKind.PREDICATE_NOMINATIVE,
                         f'Predicate nominative describing "{words[subject_idx].original}" '
                         f'via linking verb "{verb.original}"'):
                    break


def apply_complementary_infinitive(words: List[Word], span: Optional[range] = None) -> None:
    """An infinitive shortly before *possum*, *volo*, *debeo* and the like completes it."""
    span = bounded(words, span)
    for verb_idx in span:
        verb = words[verb_idx]
        if not _is_finite_verb(verb) or not has_form_in(verb.selected_parse, COMPLEMENTARY_VERBS):
            continue
        for i in range(verb_idx - 1, max(span.start, verb_idx - COMPLEMENT_WINDOW) - 1, -1):
            if not _is_infinitive_verb(words[i]):
                continue
            if _link(words, i, verb_idx, InferenceKind.COMPLEMENTARY_INFINITIVE,
                     f'Complementary infinitive completing "{verb.original}"'):
                break


def apply_vocative(words: List[Word], span: Optional[range] = None) -> None:
    """A vocative noun addresses the nearest imperative, else the nearest finite verb."""
    span = bounded(words, span)
    for idx in span:
        word = words[idx]
        cgn = selected_cgn(word)
        if word.pos != PartOfSpeech.NOUN or cgn is None or cgn.case != "Vocative":
            continue
        verbs = [i for i in span if i != idx and _is_finite_verb(words[i])]
        if not verbs:
            continue
        best = min(verbs, key=lambda i: (reading_mood(words[i].selected_reading) != "Imperative", abs(i - idx), i))
        imperative = reading_mood(words[best].selected_reading) == "Imperative"
        _link(words, idx, best, InferenceKind.VOCATIVE,
              f'Vocative address to "{words[best].original}"{" (imperative)" if imperative else ""}')


def apply_purpose_clause(words: List[Word], span: Optional[range] = None) -> None:
    """``ut``/``ne``/``quo`` with a subjunctive, which in turn points at the main verb."""
    span = bounded(words, span)
    for idx in span:
        word = words[idx]
        if word.clean not in PURPOSE_CONJUNCTIONS:
            continue
        if word.is_resolved and word.pos not in (PartOfSpeech.OTHER, PartOfSpeech.ADVERB):
            continue
        for i in window(span, idx + 1, idx + PURPOSE_WINDOW):
            verb = words[i]
            if not _is_verb(verb) or reading_mood(verb.selected_reading) != "Subjunctive":
                continue
            if not _link(words, idx, i, InferenceKind.PURPOSE,
                         f'Purpose conjunction "{word.original}" with subjunctive "{verb.original}"'):
                continue
            main = next(
                (j for j in range(idx - 1, max(span.start, idx - 10) - 1, -1)
                 if _is_finite_verb(words[j]) and is_finite_verb_reading(words[j].selected_reading)),
                None,
            )
            if main is not None:
                _link(words, i, main, InferenceKind.PURPOSE,
                      f'Purpose clause expressing goal of "{words[main].original}"')
            break
