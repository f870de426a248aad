"""
Lexical classifiers over words and candidate parses.

These answer questions such as "is every interpretation of this word a
noun?" or "which cases can this preposition govern?". They combine the
reading predicates from :mod:`sententia.morphology` with a handful of
closed Latin word lists.
"""
import re
from typing import List, Optional, Sequence, Tuple

from .model import CandidateParse, PartOfSpeech, Word
from .morphology import case_gender_number, reading_case

# -----------------------------------------------------------------------------
# --- Closed word classes
# -----------------------------------------------------------------------------

KNOWN_CONJUNCTIONS = frozenset({
    "et", "ac", "atque", "que", "-que",
    "sed", "autem", "aut", "vel",
    "nam", "enim", "igitur", "ergo",
    "an", "ne", "nec", "neque",
    "quia", "quod", "quoniam", "cum", "si", "nisi", "ut",
})

RELATIVE_PRONOUN_FORMS = frozenset({
    "qui", "quae", "quod", "quem", "quam", "quo", "qua",
    "cuius", "cui", "quorum", "quarum", "quibus", "quos", "quas",
})

# Inflected forms of sum, esse
COPULA_FORMS = (
    "sum", "es", "est", "sumus", "estis", "sunt",
    "eram", "eras", "erat", "eramus", "eratis", "erant",
    "ero", "eris", "erit", "erimus", "eritis", "erunt",
    "fui", "fuisti", "fuit", "fuimus", "fuistis", "fuerunt", "fuere",
    "fueram", "fueras", "fuerat", "fueramus", "fueratis", "fuerant",
    "fuero", "fueris", "fuerit", "fuerimus", "fueritis", "fuerint",
    "sim", "sis", "sit", "simus", "sitis", "sint",
    "essem", "esses", "esset", "essemus", "essetis", "essent",
    "forem", "fores", "foret", "forent",
    "esse", "fore", "fuisse",
    "este", "esto", "estote", "sunto",
    "futurus", "futura", "futurum",
)

# Forms that trigger the predicate-nominative search (sum and fio)
LINKING_VERB_FORMS = frozenset(COPULA_FORMS) | frozenset({
    "fio", "fis", "fit", "fimus", "fitis", "fiunt",
    "fiebat", "fiebant", "fiet", "fient", "fieri",
    "factus", "facta", "factum", "facti", "factae",
})

# Lemmas (first principal part) of verbs taking an indirect object
DATIVE_VERBS = frozenset({
    "do", "dico", "mitto", "ostendo", "trado", "credo", "persuadeo",
    "impero", "noceo", "pareo", "placeo", "servio", "studeo", "faveo",
})

# Verbs of saying, thinking, perceiving and ordering (accusative + infinitive)
ACI_VERBS = frozenset({
    "dico", "puto", "credo", "video", "audio", "scio", "nescio", "sentio",
    "intellego", "cognosco", "spero", "promitto", "iubeo", "veto", "sino",
    "nego", "arbitror", "existimo",
})

# Verbs completed by an infinitive
COMPLEMENTARY_VERBS = frozenset({
    "possum", "debeo", "volo", "nolo", "malo", "soleo", "audeo", "conor",
    "cupio", "studeo", "incipio", "coepi", "desino", "pergo",
})

PURPOSE_CONJUNCTIONS = frozenset({"ut", "ne", "quo"})

TEMPORAL_CONJUNCTIONS = frozenset({
    "cum", "dum", "postquam", "ubi", "quando", "antequam", "priusquam",
    "simul", "donec",
})

AGENT_PREPOSITIONS = frozenset({"a", "ab", "abs"})

SENTENCE_SEPARATORS = frozenset({".", ";", ":", "?", "!"})
QUOTE_MARKS = frozenset({'"', "'", "“", "”", "‘", "’", "«", "»"})

_STRIP_RE = re.compile(r'[.,;?!:()"]')
_PREPOSITION_CASE_PATTERNS: Tuple[Tuple[str, "re.Pattern[str]"], ...] = (
    ("Accusative", re.compile(r"Accusative|\bACC\b", re.IGNORECASE)),
    ("Ablative", re.compile(r"Ablative|\bABL\b", re.IGNORECASE)),
    ("Genitive", re.compile(r"Genitive|\bGEN\b", re.IGNORECASE)),
    ("Dative", re.compile(r"Dative|\bDAT\b", re.IGNORECASE)),
)


def clean_word(text: str) -> str:
    """Strip punctuation and lowercase a token."""
    return _STRIP_RE.sub("", text).strip().lower()


# -----------------------------------------------------------------------------
# --- Candidate-parse classifiers
# -----------------------------------------------------------------------------

def is_adjectival(parse: Optional[CandidateParse]) -> bool:
    return parse is not None and parse.pos in (PartOfSpeech.ADJECTIVE, PartOfSpeech.PARTICIPLE)


def is_noun(parse: Optional[CandidateParse]) -> bool:
    return parse is not None and parse.pos == PartOfSpeech.NOUN


def is_pronoun(parse: Optional[CandidateParse]) -> bool:
    return (
        parse is not None
        and parse.pos == PartOfSpeech.OTHER
        and any("Pronoun" in r for r in parse.readings)
    )


def is_noun_like(parse: Optional[CandidateParse]) -> bool:
    """Nouns, and pronouns filed under Other."""
    return is_noun(parse) or is_pronoun(parse)


def is_declinable(parse: Optional[CandidateParse]) -> bool:
    return parse is not None and parse.pos in (
        PartOfSpeech.NOUN, PartOfSpeech.ADJECTIVE, PartOfSpeech.PARTICIPLE,
    )


def is_preposition_parse(parse: Optional[CandidateParse]) -> bool:
    return (
        parse is not None
        and parse.pos == PartOfSpeech.OTHER
        and any(_is_preposition_reading(r) for r in parse.readings)
    )


def _is_preposition_reading(reading: str) -> bool:
    return "Preposition" in reading or reading.upper().startswith("PREP")


def has_form_in(parse: Optional[CandidateParse], forms) -> bool:
    """True when any principal part of ``parse`` is one of ``forms``."""
    if parse is None:
        return False
    return any(form.strip().lower() in forms for form in parse.forms)


# -----------------------------------------------------------------------------
# --- Word classifiers
# -----------------------------------------------------------------------------

def guaranteed_pos(word: Word) -> Optional[PartOfSpeech]:
    """The part of speech shared by every candidate, if there is one."""
    if not word.candidates:
        return None
    first = word.candidates[0].pos
    if all(c.pos == first for c in word.candidates):
        return first
    return None


def can_be(word: Word, *pos: PartOfSpeech) -> bool:
    """True when some candidate of ``word`` has one of the given parts of speech."""
    return any(c.pos in pos for c in word.candidates)


def preposition_cases(reading: str) -> List[str]:
    """Cases named in a preposition reading, in canonical order."""
    return [case for case, pattern in _PREPOSITION_CASE_PATTERNS if pattern.search(reading)]


def _parse_preposition_cases(parse: CandidateParse) -> List[str]:
    found = []
    for reading in parse.readings:
        if not _is_preposition_reading(reading):
            continue
        for case in preposition_cases(reading):
            if case not in found:
                found.append(case)
    return found


def possible_preposition_cases(word: Word) -> List[str]:
    """Every case some preposition candidate of ``word`` can govern."""
    found = []
    for parse in word.candidates:
        if parse.pos != PartOfSpeech.OTHER:
            continue
        for case in _parse_preposition_cases(parse):
            if case not in found:
                found.append(case)
    return found


def selected_preposition_cases(word: Word) -> List[str]:
    """Cases governed by the word's selected preposition reading."""
    if not is_preposition_parse(word.selected_parse) or not word.selected_reading:
        return []
    if not _is_preposition_reading(word.selected_reading):
        return []
    return preposition_cases(word.selected_reading)


def is_guaranteed_preposition(word: Word) -> bool:
    """Resolved to a preposition."""
    return bool(word.selected_reading) and _is_preposition_reading(word.selected_reading) \
        and is_preposition_parse(word.selected_parse)


def is_potential_preposition(word: Word) -> bool:
    return any(is_preposition_parse(c) for c in word.candidates)


def is_conjunction(word: Word) -> bool:
    if word.clean in KNOWN_CONJUNCTIONS:
        return True
    if word.selected_reading and "Conjunction" in word.selected_reading:
        return True
    return any("Conjunction" in r for c in word.candidates for r in c.readings)


def is_relative_pronoun_form(word: Word) -> bool:
    return word.clean in RELATIVE_PRONOUN_FORMS


def is_quote(word: Word) -> bool:
    return word.original.strip() in QUOTE_MARKS


def is_sentence_separator(word: Word) -> bool:
    """Sentence-internal boundary: strong punctuation or a quotation mark."""
    token = word.original.strip()
    return token in SENTENCE_SEPARATORS or token in QUOTE_MARKS


def is_traversal_blocker(word: Word) -> bool:
    """Words a possession search may not look past."""
    return (
        not word.clean
        or is_quote(word)
        or is_guaranteed_preposition(word)
        or is_potential_preposition(word)
        or is_conjunction(word)
        or is_relative_pronoun_form(word)
    )


def can_take_case(word: Word, case: str) -> bool:
    """Some declinable or pronoun reading of ``word`` is in ``case``."""
    for parse in word.candidates:
        if not (is_declinable(parse) or is_pronoun(parse)):
            continue
        if any(reading_case(r) == case for r in parse.readings):
            return True
    return False


def first_reading_with_case(word: Word, case: str, accept=is_declinable) -> Optional[Tuple[CandidateParse, str]]:
    """First (parse, reading) in lookup order whose reading is in ``case``."""
    for parse in word.candidates:
        if not accept(parse):
            continue
        for reading in parse.readings:
            if reading_case(reading) == case:
                return parse, reading
    return None


def declinable_cases(word: Word) -> List[str]:
    """Distinct cases offered by the word's noun, adjective and participle readings."""
    found = []
    for parse in word.candidates:
        if not is_declinable(parse):
            continue
        for reading in parse.readings:
            case = reading_case(reading)
            if case and case not in found:
                found.append(case)
    return found


def selected_cgn(word: Word):
    return case_gender_number(word.selected_reading)


def readings(word: Word, accept=None) -> Sequence[Tuple[CandidateParse, str]]:
    """Flatten candidates into (parse, reading) pairs, optionally filtered by parse."""
    return [
        (parse, reading)
        for parse in word.candidates
        if accept is None or accept(parse)
        for reading in parse.readings
    ]
