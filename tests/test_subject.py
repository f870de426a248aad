"""
Tests for subject finding (tier 5).
"""
import unittest

from sententia.model import InferenceKind
from sententia.passes import apply_clause_subjects, apply_nominative_chunk, apply_sole_reading
from sententia.passes.subject import find_subject

from builders import VERB_3PL, VERB_3SG, adjective, noun, puella_ambulat, sentence, verb


def ambulat():
    return "ambulat", verb(VERB_3SG)


def currunt():
    return "currunt", verb(VERB_3PL)


class TestNominativeChunk(unittest.TestCase):

    def test_scenario_a_subject_claimed(self):
        """Tests that 'puella ambulat' makes puella the subject of ambulat."""
        words = puella_ambulat()
        apply_sole_reading(words)
        apply_nominative_chunk(words)
        puella = words[0]
        self.assertEqual(puella.selected_reading, "Noun Nominative Singular Feminine")
        self.assertEqual(puella.heuristic, 'Subject of "ambulat" (singular 3rd person)')
        self.assertEqual(puella.inference, InferenceKind.SUBJECT)
        self.assertEqual(puella.inference_id, "subject-1")
        self.assertIn(0, words[1].dependents)

    def test_open_noun_resolved_to_nominative(self):
        """Tests that an ambiguous noun takes its nominative reading."""
        words = sentence(("puella", noun("Noun Ablative Singular Feminine", "Noun Nominative Singular Feminine")),
                         ambulat())
        apply_sole_reading(words)
        apply_nominative_chunk(words)
        self.assertEqual(words[0].selected_reading, "Noun Nominative Singular Feminine")
        self.assertTrue(words[0].guessed)

    def test_number_must_match(self):
        """Tests that a plural nominative is not the subject of a singular verb."""
        words = sentence(("puellae", noun("Noun Nominative Plural Feminine", "Noun Genitive Singular Feminine")),
                         ambulat())
        apply_sole_reading(words)
        apply_nominative_chunk(words)
        self.assertFalse(words[0].is_resolved)

    def test_plural_verb(self):
        """Tests the plural rationale."""
        words = sentence(("puellae", noun("Noun Nominative Plural Feminine", "Noun Genitive Singular Feminine")),
                         currunt())
        apply_sole_reading(words)
        apply_nominative_chunk(words)
        self.assertEqual(words[0].selected_reading, "Noun Nominative Plural Feminine")
        self.assertEqual(words[0].heuristic, 'Subject of "currunt" (plural 3rd person)')

    def test_substantive_adjective_fallback(self):
        """Tests that an adjective serves as subject when no noun qualifies."""
        words = sentence(("boni", adjective("Adjective Nominative Plural Masculine",
                                            "Adjective Genitive Singular Masculine")),
                         currunt())
        apply_sole_reading(words)
        apply_nominative_chunk(words)
        self.assertEqual(words[0].selected_reading, "Adjective Nominative Plural Masculine")
        self.assertEqual(words[0].heuristic, 'Subject of "currunt" (plural 3rd person) - substantive adjective')

    def test_rejected_subject(self):
        """Tests that a rejected subject is neither claimed nor re-resolved."""
        words = puella_ambulat()
        apply_sole_reading(words)
        words[0].rejected.add("subject-1")
        self.assertIsNone(find_subject(words, range(2), 1))
        self.assertEqual(words[0].inference, InferenceKind.SOLE_READING)

    def test_manual_subject_keeps_its_state(self):
        """Tests that a manual subject only gains the dependency edge."""
        words = puella_ambulat()
        words[0].selected_parse = words[0].candidates[0]
        words[0].selected_reading = "Noun Nominative Singular Feminine"
        apply_sole_reading(words)
        apply_nominative_chunk(words)
        self.assertTrue(words[0].is_manual)
        self.assertEqual(words[0].heuristic, "")
        self.assertEqual(words[1].dependents, {0})


class TestClauseSubjects(unittest.TestCase):

    def build(self, *separator):
        return sentence(
            ("puella", noun("Noun Nominative Singular Feminine")),
            ambulat(),
            *separator,
            ("pueri", noun("Noun Nominative Plural Masculine", "Noun Genitive Singular Masculine")),
            currunt(),
        )

    def test_later_clause_after_punctuation(self):
        """Tests that the second clause gets its own subject."""
        words = self.build(";")
        apply_sole_reading(words)
        apply_nominative_chunk(words)
        self.assertFalse(words[3].is_resolved)
        apply_clause_subjects(words)
        self.assertEqual(words[3].selected_reading, "Noun Nominative Plural Masculine")
        self.assertEqual(words[3].anchor, 4)

    def test_previous_verb_bounds_clause(self):
        """Tests that a preceding verb closes the clause without punctuation."""
        words = self.build()
        apply_sole_reading(words)
        apply_nominative_chunk(words)
        apply_clause_subjects(words)
        self.assertEqual(words[0].anchor, 1)
        self.assertEqual(words[2].anchor, 3)


if __name__ == '__main__':
    unittest.main()
