"""
Tier 3: genitive possession.

A resolved genitive noun is attached to the nearest word that can only be a
noun, searching backward first (Latin usually puts the possessor after the
thing possessed) and then forward. The search never crosses punctuation,
quotation marks, prepositions, conjunctions or forms of the relative pronoun.
"""
from typing import List, Optional

from ..lexicon import guaranteed_pos, is_traversal_blocker, selected_cgn
from ..model import AnnotationKind, InferenceKind, PartOfSpeech, Word, inference_id
from .base import annotate, bounded, find_annotation

GENITIVE_WINDOW = 5


def _attach(words: List[Word], idx: int, indices, direction: str) -> bool:
    word = words[idx]
    for i in indices:
        candidate = words[i]
        if is_traversal_blocker(candidate):
            return False
        if guaranteed_pos(candidate) != PartOfSpeech.NOUN:
            continue
        if inference_id(InferenceKind.POSSESSION, i) in word.rejected:
            continue
        if find_annotation(word, AnnotationKind.POSSESSION, target=i) is None:
            annotate(words, idx, AnnotationKind.POSSESSION, InferenceKind.POSSESSION,
                     f'Genitive noun modifying {direction}guaranteed noun "{candidate.original}"',
                     target=i)
        return True
    return False


def apply_genitive(words: List[Word], span: Optional[range] = None) -> None:
    span = bounded(words, span)
    for idx in span:
        word = words[idx]
        cgn = selected_cgn(word)
        if not word.is_resolved or word.pos != PartOfSpeech.NOUN or not cgn or cgn.case != "Genitive":
            continue
        backward = range(idx - 1, max(span.start, idx - GENITIVE_WINDOW) - 1, -1)
        if _attach(words, idx, backward, ""):
            continue
        forward = range(idx + 1, min(span.stop, idx + GENITIVE_WINDOW + 1))
        _attach(words, idx, forward, "following ")
