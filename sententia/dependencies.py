"""
Dependency tracking between words.

An edge ``B -> A`` is stored as ``A.index in words[B].dependents`` and means
"some guessed inference on A rests on B's current resolution". When B's
resolution changes, the invalidation step walks B's dependents.
"""
from typing import List

from .model import AnnotationKind, InferenceKind, Word


def track(words: List[Word], on: int, dependent: int) -> None:
    """Record that ``dependent`` rests on ``on``. Self and out-of-range edges are ignored."""
    if on == dependent:
        return
    if not (0 <= on < len(words) and 0 <= dependent < len(words)):
        return
    words[on].dependents.add(dependent)


def still_depends(words: List[Word], on: int, dependent: int) -> bool:
    """True while ``dependent`` still holds an inference that refers to ``on``."""
    word = words[dependent]
    if word.inference is not None and word.anchor == on:
        return True
    for annotation in word.annotations:
        if annotation.inference is None:
            continue
        if annotation.related_index == on:
            return True
        if (annotation.kind == AnnotationKind.PREPOSITION_SCOPE
                and annotation.end_index is not None
                and word.index < on <= annotation.end_index):
            return True
    # Adjacent connections are registered in both directions
    return any(
        a.inference == InferenceKind.ADJACENT and a.target_index == dependent
        for a in words[on].annotations
    )


def recompute_dependents(words: List[Word], index: int) -> None:
    """Drop dependents whose inferences no longer refer to ``index``."""
    words[index].dependents = {
        d for d in words[index].dependents
        if 0 <= d < len(words) and still_depends(words, index, d)
    }
