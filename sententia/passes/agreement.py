"""
Tier 4: agreement.

Adjectives, participles and nouns in apposition agree with the word they
belong to in case and number, and in gender where both sides state one.
These passes turn that agreement into modify edges, and for adjectives the
lookup could not settle, into a resolution.
"""
import logging
from typing import List, Optional

from ..dependencies import track
from ..lexicon import can_be, guaranteed_pos, is_adjectival, is_noun, is_noun_like, readings, selected_cgn
from ..model import AnnotationKind, InferenceKind, PartOfSpeech, Word, inference_id
from ..morphology import CGN, agrees, case_gender_number
from .base import annotate, bounded, find_annotation, resolve, window

logger = logging.getLogger(__name__)

APPOSITION_WINDOW = 3
INFERENCE_WINDOW = 3
PARTICIPLE_WINDOW = 3
BRACE_WINDOW = 5


def _describe(cgn: CGN) -> str:
    return " ".join(part for part in (cgn.case, cgn.number, cgn.gender) if part)


def apply_adjective_case(words: List[Word], span: Optional[range] = None) -> None:
    """An open adjective or participle takes the reading that agrees with a resolved neighbour noun."""
    span = bounded(words, span)
    for idx in span:
        word = words[idx]
        if word.is_resolved or guaranteed_pos(word) not in (PartOfSpeech.ADJECTIVE, PartOfSpeech.PARTICIPLE):
            continue
        for noun_idx in (idx - 1, idx + 1):
            if noun_idx not in span:
                continue
            noun = words[noun_idx]
            noun_cgn = selected_cgn(noun)
            if noun.pos != PartOfSpeech.NOUN or noun_cgn is None:
                continue
            if word.is_rejected(InferenceKind.ADJECTIVE_CASE, noun_idx):
                continue
            match = next(
                ((p, r) for p, r in readings(word, is_adjectival) if agrees(case_gender_number(r), noun_cgn)),
                None,
            )
            if match is None:
                continue
            parse, reading = match
            if resolve(words, idx, parse, reading, InferenceKind.ADJECTIVE_CASE,
                       f'{parse.pos.value} agreeing with noun "{noun.original}" ({_describe(noun_cgn)})',
                       anchor=noun_idx):
                annotate(words, idx, AnnotationKind.MODIFY, InferenceKind.ADJECTIVE_CASE,
                         f'Agreeing with "{noun.original}"', target=noun_idx)
                break


def apply_adjective_noun(words: List[Word], span: Optional[range] = None) -> None:
    """Adjacent adjective and noun that agree: the adjective modifies the noun."""
    span = bounded(words, span)
    for i in window(span, span.start, span.stop - 1):
        first, second = words[i], words[i + 1]
        if not (first.is_resolved and second.is_resolved):
            continue
        if is_adjectival(first.selected_parse) and is_noun_like(second.selected_parse):
            source, target = i, i + 1
        elif is_noun_like(first.selected_parse) and is_adjectival(second.selected_parse):
            source, target = i + 1, i
        else:
            continue
        cgn = selected_cgn(words[source])
        if not agrees(cgn, selected_cgn(words[target])):
            continue
        annotate(words, source, AnnotationKind.MODIFY, InferenceKind.ADJECTIVE_NOUN,
                 f"Adjective/participle modifying noun: {_describe(cgn)}", target=target)


def apply_adjacent(words: List[Word], span: Optional[range] = None) -> None:
    """Any two adjacent resolved words that agree are connected."""
    span = bounded(words, span)
    for i in window(span, span.start, span.stop - 1):
        first, second = words[i], words[i + 1]
        if not (first.is_resolved and second.is_resolved):
            continue
        cgn = selected_cgn(first)
        if not agrees(cgn, selected_cgn(second)):
            continue
        if find_annotation(first, AnnotationKind.MODIFY, target=i + 1) is not None:
            continue
        if annotate(words, i, AnnotationKind.MODIFY, InferenceKind.ADJACENT,
                    f"Agreement: {_describe(cgn)}", target=i + 1):
            first.has_adjacent_connection = True
            first.adjacent_guessed = True
            track(words, on=i, dependent=i + 1)


def _noun_readings(word: Word):
    if word.is_resolved:
        if word.pos != PartOfSpeech.NOUN:
            return []
        return [word.selected_reading]
    return [r for _, r in readings(word, is_noun)]


def apply_adjective_agreement(words: List[Word], span: Optional[range] = None) -> None:
    """
    An open word that could be an adjective, near a word that could be a noun
    with matching case, gender and number, is taken to be that adjective.
    """
    span = bounded(words, span)
    for idx in span:
        word = words[idx]
        if word.is_resolved or not can_be(word, PartOfSpeech.ADJECTIVE, PartOfSpeech.PARTICIPLE):
            continue
        for other_idx in window(span, idx - INFERENCE_WINDOW, idx + INFERENCE_WINDOW + 1):
            if other_idx == idx:
                continue
            other = words[other_idx]
            noun_cgns = [c for c in map(case_gender_number, _noun_readings(other)) if c]
            if not noun_cgns:
                continue
            match = next(
                ((p, r, c) for p, r in readings(word, is_adjectival)
                 for c in [case_gender_number(r)]
                 if any(agrees(c, n, strict_gender=True) for n in noun_cgns)),
                None,
            )
            if match is None or word.is_rejected(InferenceKind.ADJECTIVE_AGREEMENT, other_idx):
                continue
            parse, reading, cgn = match
            if resolve(words, idx, parse, reading, InferenceKind.ADJECTIVE_AGREEMENT,
                       f'Inferred adjective agreeing with "{other.original}" ({_describe(cgn)})',
                       anchor=other_idx):
                annotate(words, idx, AnnotationKind.MODIFY, InferenceKind.ADJECTIVE_AGREEMENT,
                         f'Adjective modifying "{other.original}"', target=other_idx)
            break


def apply_apposition(words: List[Word], span: Optional[range] = None) -> None:
    """A noun closely followed by another noun in the same case stands in apposition to it."""
    span = bounded(words, span)
    for i in span:
        head = words[i]
        head_cgn = selected_cgn(head)
        if head.pos != PartOfSpeech.NOUN or head_cgn is None:
            continue
        for j in window(span, i + 1, i + APPOSITION_WINDOW + 1):
            other = words[j]
            if not other.is_resolved or is_adjectival(other.selected_parse):
                continue
            if other.pos != PartOfSpeech.NOUN:
                break
            other_cgn = selected_cgn(other)
            if other_cgn is None:
                continue
            if other_cgn.case == head_cgn.case:
                annotate(words, j, AnnotationKind.MODIFY, InferenceKind.APPOSITION,
                         f'Apposition to "{head.original}" (both {head_cgn.case})', target=i)
            break


def apply_participle_modifier(words: List[Word], span: Optional[range] = None) -> None:
    """A participle modifies the nearest noun, within three words, agreeing fully."""
    span = bounded(words, span)
    for idx in span:
        word = words[idx]
        cgn = selected_cgn(word)
        if word.pos != PartOfSpeech.PARTICIPLE or cgn is None:
            continue
        for i in window(span, idx - PARTICIPLE_WINDOW, idx + PARTICIPLE_WINDOW + 1):
            noun = words[i]
            if i == idx or noun.pos != PartOfSpeech.NOUN:
                continue
            if not agrees(cgn, selected_cgn(noun), strict_gender=True):
                continue
            if word.is_rejected(InferenceKind.PARTICIPLE_MODIFIER, i):
                continue
            if find_annotation(word, AnnotationKind.MODIFY, target=i) is None:
                annotate(words, idx, AnnotationKind.MODIFY, InferenceKind.PARTICIPLE_MODIFIER,
                         f'Participle modifying "{noun.original}" ({_describe(cgn)})', target=i)
            break


def apply_participle_brace(words: List[Word], span: Optional[range] = None) -> None:
    """Brace a participial phrase from its preceding noun to the participle."""
    span = bounded(words, span)
    for idx in span:
        word = words[idx]
        cgn = selected_cgn(word)
        if word.pos != PartOfSpeech.PARTICIPLE or cgn is None:
            continue
        for i in range(idx - 1, max(span.start, idx - BRACE_WINDOW) - 1, -1):
            noun = words[i]
            if noun.pos != PartOfSpeech.NOUN or not agrees(cgn, selected_cgn(noun), strict_gender=True):
                continue
            if inference_id(InferenceKind.PARTICIPLE_BRACE, idx) in noun.rejected:
                continue
            annotate(words, i, AnnotationKind.PREPOSITION_SCOPE, InferenceKind.PARTICIPLE_BRACE,
                     f'Participle "{word.original}" modifying noun "{noun.original}"', end=idx)
            break
