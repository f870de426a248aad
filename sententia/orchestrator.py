"""
Pass orchestrator.

Every entry point consumes the same ordered table of passes. Tier numbers
are priorities: a higher-priority tier may make commitments that a lower one
then relies on, never the reverse within one round. A run repeats the table
until a round changes nothing (bounded by ``EngineConfig.max_rounds``), so
running the same mode twice leaves the state as the first run left it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence

from .config import EngineConfig
from .logging_config import ProgressLogger, log_with_context
from .model import Word
from .passes import (
    apply_sole_reading, apply_copula, apply_infinitive, apply_enclitic,
    apply_preposition_identification, apply_preposition_inference,
    apply_prepositional_object, apply_prepositional_brackets, apply_preposition_before_case,
    apply_genitive,
    apply_adjective_case, apply_adjective_noun, apply_adjacent, apply_adjective_agreement,
    apply_apposition, apply_participle_modifier, apply_participle_brace,
    apply_nominative_chunk, apply_clause_subjects,
    apply_relative_pronoun, apply_dative_object, apply_accusative_infinitive,
    apply_temporal_clause, apply_comparative, apply_ablative_means, apply_ablative_agent,
    apply_ablative_absolute, apply_linking_verb, apply_complementary_infinitive,
    apply_vocative, apply_purpose_clause,
)
from .trace import RunTrace

logger = logging.getLogger(__name__)

TIER_NAMES = {
    1: "closed class",
    2: "prepositions",
    3: "possession",
    4: "agreement",
    5: "subjects",
    6: "constructions",
}


@dataclass(frozen=True)
class PassSpec:
    name: str
    func: Callable[[List[Word], Optional[range]], None]
    tier: int
    incremental: bool = False


PASSES: Sequence[PassSpec] = (
    PassSpec("sole-reading", apply_sole_reading, 1, incremental=True),
    PassSpec("copula", apply_copula, 1),
    PassSpec("infinitive", apply_infinitive, 1),
    PassSpec("enclitic", apply_enclitic, 1),

    PassSpec("preposition-identification", apply_preposition_identification, 2, incremental=True),
    PassSpec("preposition-inference", apply_preposition_inference, 2),
    PassSpec("prepositional-object", apply_prepositional_object, 2, incremental=True),
    PassSpec("prepositional-brackets", apply_prepositional_brackets, 2, incremental=True),
    PassSpec("preposition-before-case", apply_preposition_before_case, 2, incremental=True),

    PassSpec("genitive", apply_genitive, 3, incremental=True),

    PassSpec("adjective-case", apply_adjective_case, 4, incremental=True),
    PassSpec("adjective-noun", apply_adjective_noun, 4, incremental=True),
    PassSpec("adjacent", apply_adjacent, 4, incremental=True),
    PassSpec("adjective-agreement", apply_adjective_agreement, 4),
    PassSpec("apposition", apply_apposition, 4),
    PassSpec("participle-modifier", apply_participle_modifier, 4),
    PassSpec("participle-brace", apply_participle_brace, 4),

    PassSpec("nominative-chunk", apply_nominative_chunk, 5, incremental=True),
    PassSpec("clause-subjects", apply_clause_subjects, 5),

    PassSpec("relative-pronoun", apply_relative_pronoun, 6),
    PassSpec("dative-object", apply_dative_object, 6),
    PassSpec("accusative-infinitive", apply_accusative_infinitive, 6),
    PassSpec("temporal-clause", apply_temporal_clause, 6),
    PassSpec("comparative", apply_comparative, 6),
    PassSpec("ablative-means", apply_ablative_means, 6),
    PassSpec("ablative-agent", apply_ablative_agent, 6),
    PassSpec("ablative-absolute", apply_ablative_absolute, 6),
    PassSpec("linking-verb", apply_linking_verb, 6),
    PassSpec("complementary-infinitive", apply_complementary_infinitive, 6),
    PassSpec("vocative", apply_vocative, 6),
    PassSpec("purpose-clause", apply_purpose_clause, 6),
)

PASSES_BY_NAME = {spec.name: spec for spec in PASSES}


def _fingerprint(word: Word) -> dict:
    state = word.to_dict()
    del state["candidates"]
    return state


def _changed(before: List[dict], words: List[Word]) -> List[int]:
    return [i for i, word in enumerate(words) if _fingerprint(word) != before[i]]


def _sentence_text(words: List[Word]) -> str:
    return " ".join(w.original for w in words)


class PassOrchestrator:
    """Runs the pass table over a word array in one of several modes."""

    def __init__(self, config: EngineConfig | None = None, passes: Sequence[PassSpec] = PASSES):
        self.config = config or EngineConfig()
        self.passes = tuple(passes)
        self.last_trace: RunTrace | None = None

    def iter_run(self, words: List[Word], span: Optional[range] = None,
                 passes: Optional[Sequence[PassSpec]] = None,
                 trace: Optional[RunTrace] = None) -> Iterator[PassSpec]:
        """
        Run one round of the table, yielding after each pass.

        The caller may stop iterating at any point; passes already run keep
        their effect and the remaining ones simply do not run.
        """
        for spec in (self.passes if passes is None else passes):
            before = [_fingerprint(w) for w in words] if trace is not None else None
            spec.func(words, span)
            if trace is not None:
                trace.add_step(spec.name, spec.tier, _changed(before, words))
            yield spec

    def _run(self, words: List[Word], mode: str, span: Optional[range] = None,
             passes: Optional[Sequence[PassSpec]] = None) -> Optional[RunTrace]:
        passes = self.passes if passes is None else tuple(passes)
        trace = RunTrace(mode, _sentence_text(words), span) if self.config.trace_runs else None
        progress = None
        if self.config.log_progress:
            progress = ProgressLogger(len(passes), desc=f"{mode} run", logger=logger)

        rounds = 0
        try:
            while rounds < self.config.max_rounds:
                rounds += 1
                before = [_fingerprint(w) for w in words]
                for spec in self.iter_run(words, span, passes, trace):
                    if progress is not None and rounds == 1:
                        progress.update(1, item_desc=spec.name)
                if not _changed(before, words):
                    break
            else:
                logger.warning("%s run did not converge after %d rounds", mode, rounds)
        except Exception as exc:
            if trace is not None:
                trace.set_error(str(exc))
            raise

        if progress is not None:
            progress.close()
        if trace is not None:
            trace.finish(rounds)
            self.last_trace = trace

        resolved = sum(1 for w in words if w.is_resolved)
        log_with_context(
            f"{mode} run finished: {resolved}/{len(words)} words resolved",
            context={
                "rounds": rounds,
                "span": f"{span.start}-{span.stop}" if span is not None else "all",
                "changed": trace.changed_words if trace is not None else "untraced",
            },
            logger=logger,
        )
        return trace

    def run_all(self, words: List[Word]) -> Optional[RunTrace]:
        """Every pass over the whole sentence."""
        return self._run(words, "bulk")

    def run_one(self, words: List[Word], name: str) -> Optional[RunTrace]:
        """A single named pass over the whole sentence."""
        try:
            spec = PASSES_BY_NAME[name]
        except KeyError:
            raise KeyError(f"Unknown pass: {name!r}") from None
        return self._run(words, name, passes=[spec])

    def run_range(self, words: List[Word], start: int, end: int) -> Optional[RunTrace]:
        """Every pass, restricted to words ``start`` through ``end`` inclusive."""
        if start > end:
            start, end = end, start
        span = range(max(start, 0), min(end + 1, len(words)))
        return self._run(words, "range", span=span)

    def run_incremental(self, words: List[Word], changed_index: int,
                        radius: Optional[int] = None) -> Optional[RunTrace]:
        """The incremental subset of passes around one changed word."""
        radius = self.config.incremental_radius if radius is None else radius
        span = range(max(changed_index - radius, 0), min(changed_index + radius + 1, len(words)))
        passes = [spec for spec in self.passes if spec.incremental]
        return self._run(words, "incremental", span=span, passes=passes)
