"""
Morphological predicates over reading strings.

A reading is the free-text inflectional analysis the dictionary lookup
attaches to a candidate parse, for example::

    "Noun Accusative Singular Feminine"
    "Verb Present Active Indicative 3rd Person Singular"
    "Participle Perfect Passive Ablative Plural Masculine"

Every function here is total: a reading that lacks the feature asked for
yields None (or False), never an exception.
"""
import re
from typing import Iterable, List, NamedTuple, Optional

# -----------------------------------------------------------------------------
# --- Feature vocabularies
# -----------------------------------------------------------------------------

CASES = ("Nominative", "Genitive", "Dative", "Accusative", "Ablative", "Vocative", "Locative")
GENDERS = ("Masculine", "Feminine", "Neuter", "Common")
NUMBERS = ("Singular", "Plural")
MOODS = ("Indicative", "Subjunctive", "Imperative", "Infinitive")
VOICES = ("Active", "Passive")

_CASE_RE = re.compile(r"\b(" + "|".join(CASES) + r")\b")
_GENDER_RE = re.compile(r"\b(" + "|".join(GENDERS) + r")\b")
_NUMBER_RE = re.compile(r"\b(" + "|".join(NUMBERS) + r")\b")
_MOOD_RE = re.compile(r"\b(" + "|".join(MOODS) + r")\b")
_VOICE_RE = re.compile(r"\b(" + "|".join(VOICES) + r")\b")
_PERSON_RE = re.compile(r"\b(1st|2nd|3rd)\s+Person\b")

# Display ordering used when readings are sorted for output
_CASE_ORDER = {c: i for i, c in enumerate(CASES)}
_NUMBER_ORDER = {n: i for i, n in enumerate(NUMBERS)}
_MOOD_ORDER = {m: i for i, m in enumerate(MOODS)}
_VOICE_ORDER = {v: i for i, v in enumerate(VOICES)}


class CGN(NamedTuple):
    """Case, gender and number of a declinable reading. Gender may be empty."""
    case: str
    gender: str
    number: str


class PersonNumber(NamedTuple):
    person: int
    number: str


def _search(pattern, reading: Optional[str]) -> Optional[str]:
    if not reading:
        return None
    match = pattern.search(reading)
    return match.group(1) if match else None


def reading_case(reading: Optional[str]) -> Optional[str]:
    return _search(_CASE_RE, reading)


def reading_gender(reading: Optional[str]) -> Optional[str]:
    return _search(_GENDER_RE, reading)


def grammatical_number(reading: Optional[str]) -> Optional[str]:
    return _search(_NUMBER_RE, reading)


def reading_mood(reading: Optional[str]) -> Optional[str]:
    return _search(_MOOD_RE, reading)


def reading_voice(reading: Optional[str]) -> Optional[str]:
    return _search(_VOICE_RE, reading)


def reading_person(reading: Optional[str]) -> Optional[int]:
    person = _search(_PERSON_RE, reading)
    return int(person[0]) if person else None


def case_gender_number(reading: Optional[str]) -> Optional[CGN]:
    """
    Extract case, gender and number from a reading.

    Returns None unless both a case and a number are present. A reading
    with no gender (common for some pronouns and third-declension forms)
    gets an empty gender.
    """
    case = reading_case(reading)
    number = grammatical_number(reading)
    if case is None or number is None:
        return None
    return CGN(case, reading_gender(reading) or "", number)


def verb_person_number(reading: Optional[str]) -> Optional[PersonNumber]:
    """Extract person and number from a finite verb reading."""
    person = reading_person(reading)
    number = grammatical_number(reading)
    if person is None or number is None:
        return None
    return PersonNumber(person, number)


def is_nominative(reading: Optional[str]) -> bool:
    return reading_case(reading) == "Nominative"


def is_infinitive(reading: Optional[str]) -> bool:
    return bool(reading) and "Infinitive" in reading


def is_finite_verb_reading(reading: Optional[str]) -> bool:
    """A verb reading carrying person, i.e. not an infinitive or participle."""
    return verb_person_number(reading) is not None and not is_infinitive(reading)


def agrees(first: Optional[CGN], second: Optional[CGN], strict_gender: bool = False) -> bool:
    """
    Case and number must match exactly.

    Gender must match too, except that an unspecified gender on either side
    is accepted unless ``strict_gender`` is set.
    """
    if first is None or second is None:
        return False
    if first.case != second.case or first.number != second.number:
        return False
    if first.gender == second.gender:
        return True
    if strict_gender:
        return False
    return not first.gender or not second.gender


def _sort_key(reading: str):
    return (
        _CASE_ORDER.get(reading_case(reading), len(CASES)),
        _NUMBER_ORDER.get(grammatical_number(reading), len(NUMBERS)),
        _VOICE_ORDER.get(reading_voice(reading), len(VOICES)),
        _MOOD_ORDER.get(reading_mood(reading), len(MOODS)),
        reading_person(reading) or 4,
    )


def sort_readings(readings: Iterable[str], preferred: Optional[str] = None) -> List[str]:
    """
    Order readings case first, then number, voice, mood and person.

    ``preferred`` (typically the selected reading) is moved to the front.
    The sort is stable so readings with identical features keep lookup order.
    """
    ordered = sorted(readings, key=_sort_key)
    if preferred is not None and preferred in ordered:
        ordered.remove(preferred)
        ordered.insert(0, preferred)
    return ordered
