"""
Helpers shared by every heuristic pass.

A pass is a plain function ``apply_x(words, span=None)``. ``span`` is the
range of absolute indices the pass may visit and look at; neighbours outside
it are treated as absent. All writes to sentence state go through the
helpers below so that every pass honours the same rules:

- a manual resolution is never overwritten;
- an inference whose identifier is in the word's rejection ledger is not
  created again;
- an equivalent inference that already exists is not duplicated;
- every commit is marked guessed, carries a rationale and an InferenceKind,
  and registers the dependency edge it rests on.
"""
import logging
from typing import List, Optional

from ..dependencies import track
from ..model import (
    Annotation, AnnotationKind, CandidateParse, InferenceKind, Word, inference_id,
)

logger = logging.getLogger(__name__)


def bounded(words: List[Word], span: Optional[range] = None) -> range:
    """The span a pass works in, clipped to the sentence."""
    if span is None:
        return range(len(words))
    return range(max(span.start, 0), min(span.stop, len(words)))


def window(span: range, start: int, stop: int) -> range:
    """Indices in [start, stop) that also lie inside ``span``."""
    return range(max(start, span.start), min(stop, span.stop))


def resolve(words: List[Word], index: int, parse: CandidateParse, reading: Optional[str],
            kind: InferenceKind, heuristic: str, anchor: Optional[int] = None) -> bool:
    """
    Commit a guessed resolution.

    Returns True when state changed. ``anchor`` is the word the guess was
    derived from; it becomes part of the inference identifier and the word
    is registered as a dependent of it.
    """
    word = words[index]
    if word.is_manual:
        return False
    if word.is_rejected(kind, index if anchor is None else anchor):
        return False
    if (word.selected_parse == parse and word.selected_reading == reading
            and word.inference == kind and word.anchor == anchor):
        return False

    word.selected_parse = parse
    word.selected_reading = reading
    word.guessed = True
    word.heuristic = heuristic
    word.inference = kind
    word.anchor = anchor
    if anchor is not None:
        track(words, on=anchor, dependent=index)
    logger.debug("Resolved %r (%d) as %r: %s", word.original, index, reading, heuristic)
    return True


def relabel(words: List[Word], index: int, kind: InferenceKind, heuristic: str, anchor: int) -> bool:
    """
    Claim an existing resolution for a structural inference.

    A resolution made only because the lookup offered a single reading is
    taken over (new rationale, kind and anchor). A manual resolution is left
    as it is but still gains the dependency edge. Returns False when the word
    is owned by some other inference or the claim has been rejected.
    """
    word = words[index]
    if not word.is_resolved or word.is_rejected(kind, anchor):
        return False
    if word.guessed:
        if word.inference == InferenceKind.SOLE_READING:
            word.inference = kind
            word.heuristic = heuristic
            word.anchor = anchor
            logger.debug("Relabelled %r (%d): %s", word.original, index, heuristic)
        elif not (word.inference == kind and word.anchor == anchor):
            return False
    track(words, on=anchor, dependent=index)
    return True


def find_annotation(word: Word, kind: AnnotationKind, target: Optional[int] = None,
                    end: Optional[int] = None) -> Optional[Annotation]:
    for annotation in word.annotations:
        if annotation.kind != kind:
            continue
        if kind == AnnotationKind.PREPOSITION_SCOPE:
            if annotation.end_index == end:
                return annotation
        elif annotation.target_index == target:
            return annotation
    return None


def annotate(words: List[Word], owner: int, kind: AnnotationKind, inference: InferenceKind,
             heuristic: str, target: Optional[int] = None, end: Optional[int] = None,
             depends_on: Optional[int] = None) -> Optional[Annotation]:
    """
    Add a guessed edge owned by ``words[owner]``.

    Returns the new annotation, or None when the edge already exists, has been
    rejected, or points outside the sentence.
    """
    related = end if kind == AnnotationKind.PREPOSITION_SCOPE else target
    if related is None or not 0 <= related < len(words) or related == owner:
        return None
    word = words[owner]
    if inference_id(inference, related) in word.rejected:
        return None
    if find_annotation(word, kind, target=target, end=end) is not None:
        return None

    annotation = Annotation(
        kind=kind,
        target_index=target,
        end_index=end,
        guessed=True,
        heuristic=heuristic,
        inference=inference,
    )
    word.annotations.append(annotation)
    track(words, on=related if depends_on is None else depends_on, dependent=owner)
    logger.debug("Annotated %r (%d) -> %d [%s]: %s", word.original, owner, related, kind.value, heuristic)
    return annotation
