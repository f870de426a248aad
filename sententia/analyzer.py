"""
SentenceAnalyzer: the operator-facing control surface of the engine.

It owns one word array and exposes the operations an interactive front end
needs: bulk and partial re-runs, manual selection and override, rejection of
individual inferences, confirmation, manual annotations, and save/load.

Manual changes invalidate dependent guesses immediately. Re-running the
neighbourhood afterwards is a separate step, taken by default but
suppressible with ``rerun=False`` so that a front end can batch edits.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Sequence

from . import persistence
from .config import EngineConfig
from .dependencies import recompute_dependents
from .invalidation import ResolutionState, clear_guessed_state, invalidate_dependents
from .model import (
    Annotation, AnnotationKind, CandidateParse, InferenceKind, ManualOverride, PartOfSpeech, Word,
    inference_id,
)
from .orchestrator import PassOrchestrator
from .sentence import build_sentence, read_lookup_document, sentence_from_document, tokenize
from .trace import RunTrace

logger = logging.getLogger(__name__)


class SentenceAnalyzer:
    """Holds a sentence's words and applies operator controls to them."""

    def __init__(self, words: List[Word], text: Optional[str] = None,
                 config: EngineConfig | None = None,
                 orchestrator: PassOrchestrator | None = None):
        self.words = words
        self.text = text if text is not None else " ".join(w.original for w in words)
        self.config = config or EngineConfig()
        self.orchestrator = orchestrator or PassOrchestrator(self.config)

    @classmethod
    def from_lookups(cls, text: str, lookups: Mapping[str, Sequence[CandidateParse]],
                     config: EngineConfig | None = None) -> 'SentenceAnalyzer':
        return cls(build_sentence(tokenize(text), lookups), text=text, config=config)

    @classmethod
    def from_lookup_file(cls, path, text: Optional[str] = None,
                         config: EngineConfig | None = None) -> 'SentenceAnalyzer':
        data = read_lookup_document(path)
        text = text or data.get("input")
        return cls(sentence_from_document(data, text), text=text, config=config)

    # ------------------------------------------------------------------
    # Runs
    # ------------------------------------------------------------------

    def run_all(self) -> Optional[RunTrace]:
        """Bulk run. Rejected inferences stay rejected."""
        return self.orchestrator.run_all(self.words)

    def run_incremental(self, index: int) -> Optional[RunTrace]:
        self._word(index)
        return self.orchestrator.run_incremental(self.words, index)

    def run_range(self, start: int, end: int) -> Optional[RunTrace]:
        """Redo words ``start`` through ``end``: their guesses are dropped and re-derived."""
        self._word(start)
        self._word(end)
        if start > end:
            start, end = end, start
        for index in range(start, end + 1):
            word = self.words[index]
            old = ResolutionState.of(word)
            clear_guessed_state(word)
            invalidate_dependents(self.words, index, old)
        for word in self.words:
            recompute_dependents(self.words, word.index)
        return self.orchestrator.run_range(self.words, start, end)

    def rerun(self) -> Optional[RunTrace]:
        """Forget every rejection, then run all passes again."""
        for word in self.words:
            word.rejected.clear()
        logger.info("Rejections cleared; re-running all passes")
        return self.run_all()

    def reanalyze(self) -> Optional[RunTrace]:
        """Start over from the lookup data, keeping only manual decisions."""
        for word in self.words:
            clear_guessed_state(word, clear_rejections=True)
        for word in self.words:
            recompute_dependents(self.words, word.index)
        logger.info("Guessed state cleared; re-analyzing %d words", len(self.words))
        return self.run_all()

    # ------------------------------------------------------------------
    # Manual changes
    # ------------------------------------------------------------------

    def select(self, index: int, parse: CandidateParse, reading: Optional[str] = None,
               rerun: bool = True) -> List[int]:
        """
        Resolve a word to one of its candidate parses.

        Returns the indices of words whose guesses were invalidated.
        """
        word = self._word(index)
        if parse not in word.candidates:
            raise ValueError(f"{word.original!r} has no such candidate: {parse.pos.value}")
        if reading is None and parse.readings:
            reading = parse.readings[0]
        if reading is not None and reading not in parse.readings:
            raise ValueError(f"Reading {reading!r} does not belong to the chosen candidate")
        return self._set_manual(word, parse, reading, None, rerun)

    def override(self, index: int, pos, reading: str, rerun: bool = True) -> List[int]:
        """Resolve a word to a part of speech and reading not offered by the lookup."""
        word = self._word(index)
        if not isinstance(pos, PartOfSpeech):
            pos = PartOfSpeech(pos)
        manual = ManualOverride(pos, reading)
        return self._set_manual(word, manual.as_parse(), reading, manual, rerun)

    def deselect(self, index: int, rerun: bool = False) -> List[int]:
        """Return a word to the unresolved state."""
        word = self._word(index)
        old = ResolutionState.of(word)
        anchor = word.anchor
        word.clear_resolution()
        self._release(anchor)
        invalidated = invalidate_dependents(self.words, index, old)
        logger.info("Deselected %r (%d)", word.original, index)
        if rerun:
            self.run_incremental(index)
        return invalidated

    def _set_manual(self, word: Word, parse: CandidateParse, reading: Optional[str],
                    manual: Optional[ManualOverride], rerun: bool) -> List[int]:
        old = ResolutionState.of(word)
        anchor = word.anchor
        word.clear_resolution()
        self._release(anchor)
        word.selected_parse = parse
        word.selected_reading = reading
        word.override = manual
        invalidated = invalidate_dependents(self.words, word.index, old)
        logger.info("Manual %s for %r (%d): %s", "override" if manual else "selection",
                    word.original, word.index, reading)
        if invalidated:
            logger.debug("Invalidated guesses on words %s", invalidated)
        if rerun:
            self.run_incremental(word.index)
        return invalidated

    def confirm(self, index: int) -> bool:
        """Accept a guessed resolution as if the operator had chosen it."""
        word = self._word(index)
        if not word.guessed:
            return False
        anchor = word.anchor
        word.guessed = False
        word.inference = None
        word.anchor = None
        self._release(anchor)
        return True

    def annotate(self, index: int, kind, target: Optional[int] = None, end: Optional[int] = None) -> Annotation:
        """Draw a manual edge from ``index``."""
        word = self._word(index)
        if not isinstance(kind, AnnotationKind):
            kind = AnnotationKind(kind)
        related = end if kind == AnnotationKind.PREPOSITION_SCOPE else target
        if related is None:
            needed = "an end" if kind == AnnotationKind.PREPOSITION_SCOPE else "a target"
            raise ValueError(f"A {kind.value} annotation needs {needed} index")
        self._word(related)
        annotation = Annotation(kind=kind, target_index=target, end_index=end, guessed=False)
        word.annotations.append(annotation)
        logger.info("Manual %s edge %r (%d) -> %d", kind.value, word.original, index, related)
        return annotation

    def reject(self, index: int, rejected_id: str) -> bool:
        """
        Strip the guessed inference ``rejected_id`` from a word and record it
        in the word's ledger so no pass re-creates it.

        Returns True when something was stripped.
        """
        word = self._word(index)
        word.rejected.add(rejected_id)
        stripped = False

        if word.guessed and word.inference_id == rejected_id:
            old = ResolutionState.of(word)
            anchor = word.anchor
            word.clear_resolution()
            self._release(anchor)
            invalidate_dependents(self.words, index, old)
            stripped = True

        removed = [a for a in word.annotations if a.guessed and a.inference_id == rejected_id]
        if removed:
            word.annotations = [a for a in word.annotations if a not in removed]
            for annotation in removed:
                if annotation.inference == InferenceKind.ADJACENT:
                    word.has_adjacent_connection = False
                    word.adjacent_guessed = False
                recompute_dependents(self.words, annotation.related_index)
            stripped = True

        if word.et_guessed and rejected_id == inference_id(InferenceKind.ENCLITIC, index):
            word.has_et_prefix = False
            word.et_guessed = False
            stripped = True

        logger.info("Rejected %s on %r (%d)%s", rejected_id, word.original, index,
                    "" if stripped else " (nothing to strip)")
        return stripped

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_dict(self):
        return persistence.to_document(self.words, self.text)

    def save(self, path) -> None:
        persistence.save(self.words, path, self.text)

    @classmethod
    def load(cls, path, config: EngineConfig | None = None) -> 'SentenceAnalyzer':
        document = persistence.read_document(path)
        words = persistence.from_document(document)
        logger.info("Loaded %d words from %s", len(words), path)
        return cls(words, text=document.get("input"), config=config)

    def _release(self, anchor: Optional[int]) -> None:
        if anchor is not None and 0 <= anchor < len(self.words):
            recompute_dependents(self.words, anchor)

    def _word(self, index: int) -> Word:
        if not 0 <= index < len(self.words):
            raise IndexError(f"No word at index {index} (sentence has {len(self.words)})")
        return self.words[index]
