"""
Sentence state shared by every heuristic pass.

A sentence is a plain list of Word objects addressed by index. Words never
hold references to each other: annotations and dependency edges store
integer indices into the list, so the whole state can be copied, compared,
and serialized without cycles.

Every inference a pass makes carries an InferenceKind. Invalidation and
rejection work from the kind and a derived identifier, never from the
human-readable rationale.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set, Tuple


class PartOfSpeech(Enum):
    """Part-of-speech tags produced by the dictionary lookup."""
    NOUN = "Noun"
    VERB = "Verb"
    ADJECTIVE = "Adjective"
    ADVERB = "Adverb"
    PARTICIPLE = "Participle"
    OTHER = "Other"
    TACKON = "Tackon"
    PREFIX = "Prefix"
    SUFFIX = "Suffix"


class AnnotationKind(Enum):
    """Kinds of directed edges between words."""
    MODIFY = "modify"
    POSSESSION = "possession"
    PREPOSITION_SCOPE = "preposition-scope"


class InferenceKind(Enum):
    """
    Closed set of inference categories.

    The value doubles as the prefix of the inference identifier that the
    rejection ledger records, e.g. ``possession-1``.
    """
    SOLE_READING = "sole-reading"
    COPULA = "sum"
    INFINITIVE = "infinitive"
    ENCLITIC = "et-prefix"
    PREPOSITION = "preposition"
    PREPOSITION_OBJECT = "prep-object"
    PREPOSITION_SCOPE = "preposition-scope"
    POSSESSION = "possession"
    ADJECTIVE_CASE = "adjective-case"
    ADJECTIVE_NOUN = "modify"
    ADJACENT = "adjacent"
    ADJECTIVE_AGREEMENT = "adj-agree"
    APPOSITION = "apposition"
    PARTICIPLE_MODIFIER = "participle-modifier"
    PARTICIPLE_BRACE = "part-brace"
    SUBJECT = "subject"
    RELATIVE_PRONOUN = "relative-pronoun"
    DATIVE_OBJECT = "dative-io"
    ACI_SUBJECT = "aci-subject"
    ACI_INFINITIVE = "aci-inf"
    TEMPORAL = "temporal"
    COMPARATIVE = "comparative-quam"
    ABLATIVE_MEANS = "abl-means"
    ABLATIVE_AGENT = "abl-agent"
    ABLATIVE_ABSOLUTE = "abl-abs"
    PREDICATE_NOMINATIVE = "predicate-nom"
    COMPLEMENTARY_INFINITIVE = "comp-inf"
    VOCATIVE = "vocative"
    PURPOSE = "purpose"


def inference_id(kind: InferenceKind, index: int) -> str:
    """Build the ledger identifier for an inference relating to ``index``."""
    return f"{kind.value}-{index}"


@dataclass(frozen=True)
class Modification:
    """An enclitic, prefix or suffix attached to a dictionary entry."""
    kind: PartOfSpeech
    form: str
    definition: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind.value, "form": self.form, "definition": self.definition}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Modification':
        return cls(
            kind=PartOfSpeech(data["type"]),
            form=data.get("form", ""),
            definition=data.get("definition", ""),
        )


@dataclass(frozen=True)
class CandidateParse:
    """
    One dictionary entry a token may belong to.

    ``readings`` holds the inflectional analyses the lookup offered for the
    token under this entry, e.g. ``"Noun Accusative Singular Feminine"``.
    ``forms`` holds the entry's principal parts, which lemma-triggered passes
    match against.
    """
    pos: PartOfSpeech
    readings: Tuple[str, ...] = ()
    forms: Tuple[str, ...] = ()
    modifications: Tuple[Modification, ...] = ()
    definition: str = ""

    @classmethod
    def create(cls, pos, *readings: str, forms=(), modifications=(), definition: str = "") -> 'CandidateParse':
        """Convenience constructor accepting a tag name and loose sequences."""
        if not isinstance(pos, PartOfSpeech):
            pos = PartOfSpeech(pos)
        return cls(
            pos=pos,
            readings=tuple(readings),
            forms=tuple(forms),
            modifications=tuple(modifications),
            definition=definition,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.pos.value,
            "readings": list(self.readings),
            "forms": list(self.forms),
            "modifications": [m.to_dict() for m in self.modifications],
            "definition": self.definition,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CandidateParse':
        readings = data.get("readings")
        if readings is None:
            readings = [m.get("analysis", "") for m in data.get("morphologies", [])]
        return cls(
            pos=PartOfSpeech(data["type"]),
            readings=tuple(readings),
            forms=tuple(data.get("forms", ())),
            modifications=tuple(Modification.from_dict(m) for m in data.get("modifications", ())),
            definition=data.get("definition", ""),
        )


@dataclass(frozen=True)
class ManualOverride:
    """A part of speech and reading typed in by the operator."""
    pos: PartOfSpeech
    reading: str

    def as_parse(self) -> CandidateParse:
        return CandidateParse(pos=self.pos, readings=(self.reading,))


@dataclass
class Annotation:
    """
    Directed edge from the word that owns it to another word.

    MODIFY and POSSESSION edges point at ``target_index``. PREPOSITION_SCOPE
    brackets run from the owner to ``end_index``.
    """
    kind: AnnotationKind
    target_index: Optional[int] = None
    end_index: Optional[int] = None
    guessed: bool = False
    heuristic: str = ""
    inference: Optional[InferenceKind] = None

    @property
    def related_index(self) -> Optional[int]:
        """The other word this edge is about."""
        if self.kind == AnnotationKind.PREPOSITION_SCOPE:
            return self.end_index
        return self.target_index

    @property
    def inference_id(self) -> Optional[str]:
        if self.inference is None or self.related_index is None:
            return None
        return inference_id(self.inference, self.related_index)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind.value,
            "target_index": self.target_index,
            "end_index": self.end_index,
            "guessed": self.guessed,
            "heuristic": self.heuristic,
            "inference": self.inference.value if self.inference else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Annotation':
        inference = data.get("inference")
        return cls(
            kind=AnnotationKind(data["type"]),
            target_index=data.get("target_index"),
            end_index=data.get("end_index"),
            guessed=data.get("guessed", False),
            heuristic=data.get("heuristic", ""),
            inference=InferenceKind(inference) if inference else None,
        )


@dataclass
class Word:
    """A token plus everything the engine and the operator know about it."""

    original: str
    clean: str
    index: int
    candidates: List[CandidateParse] = field(default_factory=list)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    # Resolution
    selected_parse: Optional[CandidateParse] = None
    selected_reading: Optional[str] = None
    guessed: bool = False
    heuristic: str = ""
    inference: Optional[InferenceKind] = None
    anchor: Optional[int] = None
    override: Optional[ManualOverride] = None

    # Relationships
    annotations: List[Annotation] = field(default_factory=list)
    has_et_prefix: bool = False
    et_guessed: bool = False
    has_adjacent_connection: bool = False
    adjacent_guessed: bool = False

    # Rejection ledger and dependents (indices of words whose inferences rest on this one)
    rejected: Set[str] = field(default_factory=set)
    dependents: Set[int] = field(default_factory=set)

    @property
    def is_resolved(self) -> bool:
        return self.selected_parse is not None

    @property
    def is_manual(self) -> bool:
        """True when the operator chose this word's resolution."""
        return self.is_resolved and not self.guessed

    @property
    def pos(self) -> Optional[PartOfSpeech]:
        return self.selected_parse.pos if self.selected_parse else None

    @property
    def inference_id(self) -> Optional[str]:
        """Ledger identifier of the current guessed resolution, if any."""
        if self.inference is None:
            return None
        return inference_id(self.inference, self.index if self.anchor is None else self.anchor)

    def is_rejected(self, kind: InferenceKind, index: int) -> bool:
        return inference_id(kind, index) in self.rejected

    def clear_resolution(self) -> None:
        self.selected_parse = None
        self.selected_reading = None
        self.guessed = False
        self.heuristic = ""
        self.inference = None
        self.anchor = None
        self.override = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "original": self.original,
            "clean": self.clean,
            "index": self.index,
            "candidates": [c.to_dict() for c in self.candidates],
            "selected_parse": self.selected_parse.to_dict() if self.selected_parse else None,
            "selected_reading": self.selected_reading,
            "guessed": self.guessed,
            "heuristic": self.heuristic,
            "inference": self.inference.value if self.inference else None,
            "anchor": self.anchor,
            "override": (
                {"type": self.override.pos.value, "reading": self.override.reading}
                if self.override else None
            ),
            "annotations": [a.to_dict() for a in self.annotations],
            "has_et_prefix": self.has_et_prefix,
            "et_guessed": self.et_guessed,
            "has_adjacent_connection": self.has_adjacent_connection,
            "adjacent_guessed": self.adjacent_guessed,
            "rejectedHeuristics": sorted(self.rejected),
            "dependentWords": sorted(self.dependents),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Word':
        selected = data.get("selected_parse")
        override = data.get("override")
        inference = data.get("inference")
        return cls(
            original=data["original"],
            clean=data.get("clean", ""),
            index=data["index"],
            candidates=[CandidateParse.from_dict(c) for c in data.get("candidates", [])],
            id=data.get("id") or str(uuid.uuid4()),
            selected_parse=CandidateParse.from_dict(selected) if selected else None,
            selected_reading=data.get("selected_reading"),
            guessed=data.get("guessed", False),
            heuristic=data.get("heuristic", ""),
            inference=InferenceKind(inference) if inference else None,
            anchor=data.get("anchor"),
            override=(
                ManualOverride(PartOfSpeech(override["type"]), override["reading"])
                if override else None
            ),
            annotations=[Annotation.from_dict(a) for a in data.get("annotations", [])],
            has_et_prefix=data.get("has_et_prefix", False),
            et_guessed=data.get("et_guessed", False),
            has_adjacent_connection=data.get("has_adjacent_connection", False),
            adjacent_guessed=data.get("adjacent_guessed", False),
            rejected=set(data.get("rejectedHeuristics", [])),
            dependents=set(data.get("dependentWords", [])),
        )
