"""
Invalidation of guessed inferences after a manual change.

When the operator changes a word's resolution, every guessed inference that
rested on the old resolution may now be wrong. The change is first reduced to
the grammatical features that actually differ; each feature maps to the
InferenceKinds that depend on it. Guessed inferences of those kinds are
stripped from the changed word's dependents and from the changed word itself.

Manual resolutions and manual annotations are never touched, and neither is
the rejection ledger.
"""
import logging
from typing import FrozenSet, List, NamedTuple, Optional, Set, Tuple

from .dependencies import recompute_dependents
from .model import Annotation, AnnotationKind, InferenceKind, PartOfSpeech, Word
from .morphology import (
    grammatical_number, reading_case, reading_gender, reading_mood, reading_person, reading_voice,
)

logger = logging.getLogger(__name__)

# Kinds that come from the word's own lookup data rather than from another word
_SELF_KINDS = frozenset({
    InferenceKind.SOLE_READING, InferenceKind.COPULA,
    InferenceKind.INFINITIVE, InferenceKind.ENCLITIC,
})

_AGREEMENT_KINDS = frozenset({
    InferenceKind.ADJECTIVE_CASE, InferenceKind.ADJECTIVE_NOUN, InferenceKind.ADJACENT,
    InferenceKind.ADJECTIVE_AGREEMENT, InferenceKind.PARTICIPLE_MODIFIER,
    InferenceKind.PARTICIPLE_BRACE, InferenceKind.PREPOSITION_SCOPE,
})

INVALIDATED_BY = {
    "pos": frozenset(InferenceKind) - _SELF_KINDS,
    "case": _AGREEMENT_KINDS | {
        InferenceKind.PREPOSITION, InferenceKind.PREPOSITION_OBJECT, InferenceKind.POSSESSION,
        InferenceKind.APPOSITION, InferenceKind.SUBJECT, InferenceKind.DATIVE_OBJECT,
        InferenceKind.ACI_SUBJECT, InferenceKind.ABLATIVE_MEANS, InferenceKind.ABLATIVE_AGENT,
        InferenceKind.ABLATIVE_ABSOLUTE, InferenceKind.PREDICATE_NOMINATIVE, InferenceKind.VOCATIVE,
    },
    "gender": _AGREEMENT_KINDS | {
        InferenceKind.RELATIVE_PRONOUN, InferenceKind.ABLATIVE_ABSOLUTE,
        InferenceKind.PREDICATE_NOMINATIVE,
    },
    "number": _AGREEMENT_KINDS | {
        InferenceKind.SUBJECT, InferenceKind.RELATIVE_PRONOUN,
        InferenceKind.ABLATIVE_ABSOLUTE, InferenceKind.PREDICATE_NOMINATIVE,
    },
    "person": frozenset({InferenceKind.SUBJECT}),
    "mood": frozenset({
        InferenceKind.SUBJECT, InferenceKind.ACI_SUBJECT, InferenceKind.ACI_INFINITIVE,
        InferenceKind.COMPLEMENTARY_INFINITIVE, InferenceKind.PURPOSE, InferenceKind.TEMPORAL,
        InferenceKind.VOCATIVE, InferenceKind.ABLATIVE_MEANS,
    }),
    "voice": frozenset({InferenceKind.ABLATIVE_AGENT}),
}


class ResolutionState(NamedTuple):
    """The part of a word's state invalidation compares."""
    pos: Optional[PartOfSpeech]
    reading: Optional[str]

    @classmethod
    def of(cls, word: Word) -> 'ResolutionState':
        return cls(word.pos, word.selected_reading)


def detect_changes(old: ResolutionState, new: ResolutionState) -> FrozenSet[str]:
    """Names of the grammatical features that differ between two resolutions."""
    changes = set()
    if old.pos != new.pos:
        changes.add("pos")
    for feature, extract in (("case", reading_case), ("gender", reading_gender),
                             ("number", grammatical_number), ("person", reading_person),
                             ("mood", reading_mood), ("voice", reading_voice)):
        if extract(old.reading) != extract(new.reading):
            changes.add(feature)
    return frozenset(changes)


def invalidated_kinds(changes) -> FrozenSet[InferenceKind]:
    kinds: Set[InferenceKind] = set()
    for feature in changes:
        kinds |= INVALIDATED_BY.get(feature, frozenset())
    return frozenset(kinds)


def _recompute_adjacency(word: Word) -> None:
    remaining = [a for a in word.annotations if a.inference == InferenceKind.ADJACENT]
    if not remaining:
        word.has_adjacent_connection = False
        word.adjacent_guessed = False


def _refers_to(annotation: Annotation, owner: int, related_to: int) -> bool:
    if annotation.related_index == related_to:
        return True
    return (annotation.kind == AnnotationKind.PREPOSITION_SCOPE
            and annotation.end_index is not None
            and owner < related_to <= annotation.end_index)


def strip_inferences(words: List[Word], index: int, kinds,
                     related_to: Optional[int] = None) -> Tuple[bool, List[Annotation]]:
    """
    Remove guessed inferences of the given kinds from ``words[index]``.

    With ``related_to`` only inferences referring to that word are removed.
    Returns whether the resolution was removed, and the removed annotations.
    """
    word = words[index]
    resolution_removed = False
    if (word.guessed and word.inference in kinds
            and (related_to is None or word.anchor == related_to)):
        logger.debug("Clearing guessed resolution of %r (%d): %s", word.original, index, word.heuristic)
        word.clear_resolution()
        resolution_removed = True

    kept, removed = [], []
    for annotation in word.annotations:
        if (annotation.guessed and annotation.inference in kinds
                and (related_to is None or _refers_to(annotation, index, related_to))):
            removed.append(annotation)
        else:
            kept.append(annotation)
    if removed:
        logger.debug("Removing %d guessed edge(s) from %r (%d)", len(removed), word.original, index)
        word.annotations = kept
        _recompute_adjacency(word)
    return resolution_removed, removed


def invalidate_dependents(words: List[Word], index: int, old: ResolutionState,
                          _visited: Optional[Set[int]] = None) -> List[int]:
    """
    Strip inferences made stale by a change to ``words[index]``.

    ``old`` is the resolution the word had before the change. The word's own
    guessed edges and those of its recorded dependents are checked; a
    dependent that loses its resolution is invalidated in turn. Returns the
    indices of every word that lost state.
    """
    visited = _visited if _visited is not None else set()
    visited.add(index)
    kinds = invalidated_kinds(detect_changes(old, ResolutionState.of(words[index])))
    if not kinds:
        return []

    touched = []
    _, removed = strip_inferences(words, index, kinds)
    if removed:
        touched.append(index)
        for related in {a.related_index for a in removed if a.related_index is not None}:
            if 0 <= related < len(words):
                recompute_dependents(words, related)

    for dependent in sorted(words[index].dependents):
        if dependent in visited or not 0 <= dependent < len(words):
            continue
        before = ResolutionState.of(words[dependent])
        resolution_removed, removed = strip_inferences(words, dependent, kinds, related_to=index)
        if resolution_removed or removed:
            touched.append(dependent)
        if resolution_removed:
            touched.extend(invalidate_dependents(words, dependent, before, visited))

    recompute_dependents(words, index)
    return touched


def clear_guessed_state(word: Word, clear_rejections: bool = False) -> None:
    """Drop everything the passes inferred about ``word``; manual state stays."""
    if word.guessed:
        word.clear_resolution()
    word.annotations = [a for a in word.annotations if not a.guessed]
    if word.et_guessed:
        word.has_et_prefix = False
        word.et_guessed = False
    if word.adjacent_guessed:
        word.has_adjacent_connection = False
        word.adjacent_guessed = False
    if clear_rejections:
        word.rejected.clear()
