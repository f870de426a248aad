"""
Tests for the lexical classifiers.
"""
import unittest

from sententia.lexicon import (
    can_be, can_take_case, clean_word, declinable_cases, first_reading_with_case, guaranteed_pos,
    is_adjectival, is_conjunction, is_declinable, is_guaranteed_preposition, is_noun_like,
    has_form_in, is_potential_preposition, is_sentence_separator, is_traversal_blocker,
    possible_preposition_cases, preposition_cases, selected_preposition_cases,
)
from sententia.model import PartOfSpeech

from builders import PREP_ABL, PREP_ACC, adjective, noun, other, participle, sentence, verb


class TestParseClassifiers(unittest.TestCase):

    def test_adjectives_and_participles_are_adjectival(self):
        """Tests that adjectives and participles share one class."""
        self.assertTrue(is_adjectival(adjective("Adjective Nominative Singular Feminine")))
        self.assertTrue(is_adjectival(participle("Participle Perfect Passive Nominative Singular Feminine")))
        self.assertFalse(is_adjectival(noun("Noun Nominative Singular Feminine")))
        self.assertFalse(is_adjectival(None))

    def test_noun_like_includes_pronouns(self):
        """Tests that pronouns filed under Other count as noun-like."""
        self.assertTrue(is_noun_like(noun("Noun Dative Singular Masculine")))
        self.assertTrue(is_noun_like(other("Pronoun Dative Singular")))
        self.assertFalse(is_noun_like(other(PREP_ACC)))

    def test_declinable(self):
        """Tests that nouns, adjectives and participles are declinable, verbs are not."""
        self.assertTrue(is_declinable(noun("Noun Dative Singular Masculine")))
        self.assertFalse(is_declinable(verb("Verb Present Active Infinitive")))

    def test_form_match_covers_every_principal_part(self):
        """Tests that any lowercased principal part can match a verb list."""
        parse = verb("x", forms=("Dare", "do", "dedi", "datum"))
        self.assertTrue(has_form_in(parse, {"do"}))
        self.assertTrue(has_form_in(parse, {"dare"}))
        self.assertFalse(has_form_in(parse, {"dico"}))
        self.assertFalse(has_form_in(verb("x"), {"do"}))
        self.assertFalse(has_form_in(None, {"do"}))

    def test_clean_word(self):
        """Tests punctuation stripping and lowercasing."""
        self.assertEqual(clean_word("Romae,"), "romae")
        self.assertEqual(clean_word("."), "")
        self.assertEqual(clean_word('"Ave"'), "ave")


class TestWordClassifiers(unittest.TestCase):

    def test_guaranteed_pos_requires_every_candidate(self):
        """Tests that a part of speech is guaranteed only when all candidates share it."""
        words = sentence(
            ("puella", noun("Noun Nominative Singular Feminine"), noun("Noun Ablative Singular Feminine")),
            ("bona", adjective("Adjective Nominative Singular Feminine"), noun("Noun Nominative Singular Neuter")),
            "?",
        )
        self.assertEqual(guaranteed_pos(words[0]), PartOfSpeech.NOUN)
        self.assertIsNone(guaranteed_pos(words[1]))
        self.assertIsNone(guaranteed_pos(words[2]))

    def test_can_be(self):
        """Tests the possible-part-of-speech check."""
        words = sentence(("bona", adjective("Adjective Nominative Singular Feminine"), noun("Noun Nominative Plural Neuter")))
        self.assertTrue(can_be(words[0], PartOfSpeech.NOUN))
        self.assertTrue(can_be(words[0], PartOfSpeech.VERB, PartOfSpeech.ADJECTIVE))
        self.assertFalse(can_be(words[0], PartOfSpeech.VERB))

    def test_preposition_cases(self):
        """Tests reading which cases a preposition governs."""
        self.assertEqual(preposition_cases(PREP_ACC), ["Accusative"])
        self.assertEqual(preposition_cases("PREP ABL"), ["Ablative"])
        words = sentence(("in", other(PREP_ABL, PREP_ACC)))
        self.assertEqual(possible_preposition_cases(words[0]), ["Ablative", "Accusative"])
        self.assertTrue(is_potential_preposition(words[0]))
        self.assertFalse(is_guaranteed_preposition(words[0]))

    def test_selected_preposition_cases(self):
        """Tests that a resolved preposition reports its governed case."""
        words = sentence(("in", other(PREP_ACC, PREP_ABL)))
        word = words[0]
        word.selected_parse = word.candidates[0]
        word.selected_reading = PREP_ABL
        self.assertEqual(selected_preposition_cases(word), ["Ablative"])
        self.assertTrue(is_guaranteed_preposition(word))

    def test_case_queries(self):
        """Tests the questions asked about a possible object."""
        words = sentence(("puellam", noun("Noun Accusative Singular Feminine"),
                          verb("Verb Present Active Indicative 3rd Person Singular")))
        word = words[0]
        self.assertTrue(can_take_case(word, "Accusative"))
        self.assertFalse(can_take_case(word, "Ablative"))
        self.assertEqual(declinable_cases(word), ["Accusative"])
        parse, reading = first_reading_with_case(word, "Accusative")
        self.assertEqual(reading, "Noun Accusative Singular Feminine")
        self.assertIsNone(first_reading_with_case(word, "Dative"))

    def test_conjunctions(self):
        """Tests the closed list and conjunction readings."""
        words = sentence(("et", other("Conjunction")), ("atque",), ("tandem", other("Conjunction coordinating")))
        self.assertTrue(is_conjunction(words[0]))
        self.assertTrue(is_conjunction(words[1]))
        self.assertTrue(is_conjunction(words[2]))

    def test_traversal_blockers(self):
        """Tests which words stop a possession search."""
        words = sentence(
            ",",
            ("quae", other("Pronoun Nominative Singular Feminine")),
            ("in", other(PREP_ACC)),
            ("et", other("Conjunction")),
            ("puella", noun("Noun Nominative Singular Feminine")),
        )
        self.assertTrue(is_traversal_blocker(words[0]))
        self.assertTrue(is_traversal_blocker(words[1]))
        self.assertTrue(is_traversal_blocker(words[2]))
        self.assertTrue(is_traversal_blocker(words[3]))
        self.assertFalse(is_traversal_blocker(words[4]))

    def test_sentence_separators(self):
        """Tests that strong punctuation and quotes separate clauses, commas do not."""
        words = sentence(".", ";", '"', ",")
        self.assertTrue(is_sentence_separator(words[0]))
        self.assertTrue(is_sentence_separator(words[1]))
        self.assertTrue(is_sentence_separator(words[2]))
        self.assertFalse(is_sentence_separator(words[3]))


if __name__ == '__main__':
    unittest.main()
