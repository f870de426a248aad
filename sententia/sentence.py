"""
Building a word array from tokens and dictionary lookup results.

The dictionary lookup itself lives outside this package. What arrives here is
its result: for every token, a list of candidate parses (possibly empty for an
unknown word). ``load_lookup_file`` reads the JSON form of those results.
"""
import json
import logging
import re
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from .errors import LookupDataError
from .lexicon import clean_word
from .model import CandidateParse, Word

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"[\w\-]+|[^\w\s]", re.UNICODE)


def tokenize(text: str) -> List[str]:
    """Split text into words and single punctuation marks."""
    return _TOKEN_RE.findall(text)


def build_sentence(tokens: Sequence[str],
                   lookups: Mapping[str, Sequence[CandidateParse]]) -> List[Word]:
    """
    Create one Word per token.

    ``lookups`` maps a cleaned token to its candidate parses. Tokens missing
    from it (punctuation, unknown words) get no candidates.
    """
    words = []
    for index, token in enumerate(tokens):
        clean = clean_word(token)
        candidates = list(lookups.get(clean, ())) if clean else []
        words.append(Word(original=token, clean=clean, index=index, candidates=candidates))
    unknown = [w.original for w in words if w.clean and not w.candidates]
    if unknown:
        logger.info("No lookup results for: %s", ", ".join(unknown))
    return words


def parse_lookup_results(data: Mapping) -> Dict[str, List[CandidateParse]]:
    """Convert the ``results`` list of a lookup document into a lookup table."""
    table: Dict[str, List[CandidateParse]] = {}
    results = data.get("results")
    if not isinstance(results, list):
        raise LookupDataError("Lookup data must contain a 'results' list")
    for position, result in enumerate(results):
        try:
            word = clean_word(result["word"])
            entries = [CandidateParse.from_dict(entry) for entry in result.get("entries", [])]
        except (KeyError, TypeError, ValueError) as e:
            raise LookupDataError(f"Malformed lookup result #{position}: {e}") from e
        table.setdefault(word, []).extend(entries)
    return table


def read_lookup_document(path) -> Dict:
    try:
        with open(Path(path), 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise LookupDataError(f"Cannot read lookup file {path}: {e}") from e
    if not isinstance(data, dict):
        raise LookupDataError(f"Lookup file {path} is not a JSON object")
    return data


def sentence_from_document(data: Mapping, text: Optional[str] = None) -> List[Word]:
    """
    Build the sentence a lookup document describes.

    The sentence text comes from ``text`` or the document's ``input`` field;
    failing both, the looked-up words are used in order.
    """
    lookups = parse_lookup_results(data)
    text = text or data.get("input")
    if text:
        tokens = tokenize(text)
    else:
        tokens = [result["word"] for result in data["results"]]
    return build_sentence(tokens, lookups)


def load_lookup_file(path, text: Optional[str] = None) -> List[Word]:
    """Read a lookup document and build its sentence."""
    return sentence_from_document(read_lookup_document(path), text)
