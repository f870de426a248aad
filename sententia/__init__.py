"""
Sententia: heuristic disambiguation of Latin sentences.

Dictionary lookup results go in; a ranked, explainable set of guessed
resolutions and word-to-word relationships comes out, which an operator can
then confirm, reject or override.
"""

from sententia.analyzer import SentenceAnalyzer
from sententia.config import EngineConfig
from sententia.errors import LookupDataError, PersistenceError, SententiaError
from sententia.model import (
    Annotation, AnnotationKind, CandidateParse, InferenceKind, ManualOverride, Modification,
    PartOfSpeech, Word, inference_id,
)
from sententia.orchestrator import PASSES, PassOrchestrator
from sententia.sentence import build_sentence, load_lookup_file, tokenize

__version__ = "0.1.0"

__all__ = [
    "SentenceAnalyzer",
    "EngineConfig",
    "SententiaError",
    "LookupDataError",
    "PersistenceError",
    "Annotation",
    "AnnotationKind",
    "CandidateParse",
    "InferenceKind",
    "ManualOverride",
    "Modification",
    "PartOfSpeech",
    "Word",
    "inference_id",
    "PASSES",
    "PassOrchestrator",
    "build_sentence",
    "load_lookup_file",
    "tokenize",
]
