"""
Tier 2: prepositions.

The passes run in a fixed order within the tier:

1. identify prepositions whose case is certain or fixed by the next word;
2. infer the remaining ones from what the next word *can* be;
3. resolve the object each preposition governs;
4. bracket the whole prepositional phrase;
5. resolve a still-open preposition from an already-resolved following word.
"""
import logging
from typing import List, Optional, Tuple

from ..lexicon import (
    can_take_case, declinable_cases, first_reading_with_case, is_conjunction,
    is_declinable, is_preposition_parse, is_pronoun, possible_preposition_cases,
    preposition_cases, selected_cgn, selected_preposition_cases,
)
from ..model import AnnotationKind, CandidateParse, InferenceKind, Word, inference_id
from .base import annotate, bounded, relabel, resolve, window

logger = logging.getLogger(__name__)

# Words examined after a preposition when looking for its object
OBJECT_LOOKAHEAD = 8

# Used when the next word could satisfy more than one governed case
CASE_PREFERENCE = ("Accusative", "Ablative", "Genitive", "Dative")


def _preposition_reading(word: Word, case: Optional[str] = None) -> Optional[Tuple[CandidateParse, str]]:
    """First preposition reading of ``word``, optionally one governing ``case``."""
    for parse in word.candidates:
        if not is_preposition_parse(parse):
            continue
        for reading in parse.readings:
            if "Preposition" not in reading and not reading.upper().startswith("PREP"):
                continue
            if case is None or case in preposition_cases(reading):
                return parse, reading
    return None


def _object_case(parse: CandidateParse) -> bool:
    return is_declinable(parse) or is_pronoun(parse)


def _object_heuristic(prep: Word, case: str) -> str:
    return f'Object of preposition "{prep.original}" (requires {case})'


def apply_preposition_identification(words: List[Word], span: Optional[range] = None) -> None:
    span = bounded(words, span)
    for idx in span:
        word = words[idx]
        if word.is_resolved:
            continue
        cases = possible_preposition_cases(word)
        if not cases:
            continue
        only_preposition = all(is_preposition_parse(c) for c in word.candidates)

        if len(cases) == 1:
            found = _preposition_reading(word, cases[0])
            if found:
                resolve(words, idx, found[0], found[1], InferenceKind.PREPOSITION,
                        f'Guaranteed preposition "{word.original}" requires {cases[0]}')
            continue

        nxt = idx + 1
        if nxt in span:
            following = declinable_cases(words[nxt])
            if len(following) == 1 and following[0] in cases:
                found = _preposition_reading(word, following[0])
                if found:
                    resolve(words, idx, found[0], found[1], InferenceKind.PREPOSITION,
                            f'Preposition "{word.original}" disambiguated to {following[0]} by following word',
                            anchor=nxt)
                    if word.is_resolved:
                        continue
            # Inference can still choose from what the next word may be
            if any(can_take_case(words[nxt], case) for case in cases):
                continue

        if only_preposition and len(cases) <= 2:
            found = _preposition_reading(word)
            if found:
                resolve(words, idx, found[0], found[1], InferenceKind.PREPOSITION,
                        f'Likely preposition "{word.original}" (only interpretation)')


def apply_preposition_inference(words: List[Word], span: Optional[range] = None) -> None:
    span = bounded(words, span)
    for idx in span:
        word = words[idx]
        if word.is_resolved or idx + 1 not in span:
            continue
        cases = possible_preposition_cases(word)
        if not cases:
            continue
        following = words[idx + 1]
        viable = [case for case in CASE_PREFERENCE if case in cases and can_take_case(following, case)]
        if not viable:
            continue
        case = viable[0]
        found = _preposition_reading(word, case)
        if not found:
            continue
        if len(viable) == 1:
            heuristic = f"Inferred as {case} preposition (next word can be {case})"
        else:
            heuristic = (f"Inferred as {case} preposition "
                         f"(next word can be multiple cases, {case} preferred)")
        resolve(words, idx, found[0], found[1], InferenceKind.PREPOSITION, heuristic, anchor=idx + 1)


def apply_prepositional_object(words: List[Word], span: Optional[range] = None) -> None:
    """Resolve the word each resolved preposition governs."""
    span = bounded(words, span)
    for idx in span:
        prep = words[idx]
        required = selected_preposition_cases(prep)
        if not required:
            continue
        for i in window(span, idx + 1, idx + OBJECT_LOOKAHEAD):
            candidate = words[i]

            if candidate.is_resolved:
                cgn = selected_cgn(candidate)
                if cgn and cgn.case == "Genitive":
                    continue
                if cgn and cgn.case in required:
                    relabel(words, i, InferenceKind.PREPOSITION_OBJECT,
                            _object_heuristic(prep, cgn.case), anchor=idx)
                break

            if candidate.is_rejected(InferenceKind.PREPOSITION_OBJECT, idx):
                continue

            match = None
            for case in required:
                if can_take_case(candidate, case):
                    match = case, first_reading_with_case(candidate, case, accept=_object_case)
                    break
            if match and match[1]:
                case, (parse, reading) = match
                resolve(words, i, parse, reading, InferenceKind.PREPOSITION_OBJECT,
                        _object_heuristic(prep, case), anchor=idx)
            # Never jump over a word that cannot be the object
            break


def _scope_end(words: List[Word], span: range, obj: int, case: str, number: str) -> int:
    end = obj
    i = obj + 1
    stop = min(obj + OBJECT_LOOKAHEAD, span.stop)
    while i < stop:
        word = words[i]
        if not word.is_resolved:
            break
        cgn = selected_cgn(word)
        if cgn and cgn.case == case and cgn.number == number:
            end = i
        elif cgn and cgn.case == "Genitive":
            end = i
        elif is_conjunction(word) and i + 1 < span.stop:
            following = selected_cgn(words[i + 1])
            if not (words[i + 1].is_resolved and following and following.case == case):
                break
            end = i + 1
            i += 1
        else:
            break
        i += 1
    return end


def apply_prepositional_brackets(words: List[Word], span: Optional[range] = None) -> None:
    """Bracket a prepositional phrase from the preposition through its object and modifiers."""
    span = bounded(words, span)
    for idx in span:
        prep = words[idx]
        required = selected_preposition_cases(prep)
        if not required:
            continue

        obj = None
        for i in window(span, idx + 1, idx + OBJECT_LOOKAHEAD):
            cgn = selected_cgn(words[i])
            if words[i].is_resolved and cgn and cgn.case in required:
                obj = i, cgn
                break
        if obj is None:
            continue
        obj_index, cgn = obj
        end = _scope_end(words, span, obj_index, cgn.case, cgn.number)
        heuristic = f"Prepositional phrase: {prep.original} + {cgn.case} object"

        scopes = [a for a in prep.annotations if a.kind == AnnotationKind.PREPOSITION_SCOPE]
        if any(a.end_index == end for a in scopes) or any(a.inference is None for a in scopes):
            continue
        existing = next((a for a in scopes if a.inference == InferenceKind.PREPOSITION_SCOPE), None)
        if existing is not None:
            if inference_id(InferenceKind.PREPOSITION_SCOPE, end) not in prep.rejected:
                logger.debug("Extending scope of %r (%d) to %d", prep.original, idx, end)
                existing.end_index = end
                existing.heuristic = heuristic
            continue
        annotate(words, idx, AnnotationKind.PREPOSITION_SCOPE, InferenceKind.PREPOSITION_SCOPE,
                 heuristic, end=end, depends_on=obj_index)


def apply_preposition_before_case(words: List[Word], span: Optional[range] = None) -> None:
    """An open preposition directly before a resolved word in a case it governs."""
    span = bounded(words, span)
    for idx in span:
        word = words[idx]
        if word.is_resolved or idx + 1 not in span:
            continue
        cases = possible_preposition_cases(word)
        following = words[idx + 1]
        cgn = selected_cgn(following)
        if not cases or cgn is None or cgn.case not in cases:
            continue
        found = _preposition_reading(word, cgn.case)
        if found:
            resolve(words, idx, found[0], found[1], InferenceKind.PREPOSITION,
                    f'Preposition "{word.original}" before {cgn.case} "{following.original}"',
                    anchor=idx + 1)
