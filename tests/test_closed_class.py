"""
Tests for the tier 1 closed-class passes and the shared commit helpers.
"""
import unittest

from sententia.model import AnnotationKind, InferenceKind, inference_id
from sententia.passes import apply_copula, apply_enclitic, apply_infinitive, apply_sole_reading
from sententia.passes.base import annotate, relabel, resolve

from builders import VERB_3SG, adverb, noun, puella_ambulat, sentence, verb, with_que

SUM_FORMS = ("sum", "esse", "fui", "futurus")


class TestSoleReading(unittest.TestCase):

    def test_single_reading_is_resolved(self):
        """Tests that a word with one candidate and one reading is resolved."""
        words = puella_ambulat()
        apply_sole_reading(words)
        for word in words:
            self.assertTrue(word.is_resolved)
            self.assertTrue(word.guessed)
            self.assertEqual(word.inference, InferenceKind.SOLE_READING)
            self.assertEqual(word.heuristic, "Only one reading available")
        self.assertEqual(words[0].selected_reading, "Noun Nominative Singular Feminine")

    def test_ambiguous_word_stays_open(self):
        """Tests that several readings leave the word unresolved."""
        words = sentence(("puellae", noun("Noun Genitive Singular Feminine", "Noun Dative Singular Feminine")))
        apply_sole_reading(words)
        self.assertFalse(words[0].is_resolved)

    def test_unknown_words_are_ignored(self):
        """Tests that words without lookup results and punctuation are skipped."""
        words = sentence("Xyzzy", ",")
        apply_sole_reading(words)
        self.assertFalse(any(w.is_resolved for w in words))

    def test_span_limits_the_pass(self):
        """Tests that words outside the span are not touched."""
        words = puella_ambulat()
        apply_sole_reading(words, range(1, 2))
        self.assertFalse(words[0].is_resolved)
        self.assertTrue(words[1].is_resolved)


class TestCopula(unittest.TestCase):

    def test_form_of_sum_resolves_to_verb(self):
        """Tests that 'est' is taken as the verb even when a noun reading exists."""
        words = sentence(("est", noun("Noun Nominative Singular Masculine"), verb(VERB_3SG, forms=SUM_FORMS)))
        apply_copula(words)
        word = words[0]
        self.assertEqual(word.selected_reading, VERB_3SG)
        self.assertEqual(word.inference, InferenceKind.COPULA)
        self.assertEqual(word.heuristic, 'Form of "sum" (to be) - highly probable')
        self.assertEqual(word.inference_id, "sum-0")

    def test_esse_prefers_infinitive_reading(self):
        """Tests that the infinitive forms of sum take the infinitive reading."""
        words = sentence(("esse", verb("Verb Present Active Subjunctive 3rd Person Singular",
                                       "Verb Present Active Infinitive", forms=SUM_FORMS)))
        apply_copula(words)
        self.assertEqual(words[0].selected_reading, "Verb Present Active Infinitive")

    def test_other_words_ignored(self):
        """Tests that only forms of sum are considered."""
        words = puella_ambulat()
        apply_copula(words)
        self.assertFalse(any(w.is_resolved for w in words))


class TestInfinitive(unittest.TestCase):

    def test_infinitive_reading_preferred(self):
        """Tests that a verb offering an infinitive is resolved to it."""
        words = sentence(("amare", verb("Verb Present Passive Imperative 2nd Person Singular",
                                        "Verb Present Active Infinitive")))
        apply_infinitive(words)
        self.assertEqual(words[0].selected_reading, "Verb Present Active Infinitive")
        self.assertEqual(words[0].heuristic, "Infinitive form")

    def test_finite_only_verb_untouched(self):
        """Tests that verbs without an infinitive reading are left alone."""
        words = sentence(("amat", verb(VERB_3SG, "Verb Present Active Subjunctive 3rd Person Singular")))
        apply_infinitive(words)
        self.assertFalse(words[0].is_resolved)


class TestEnclitic(unittest.TestCase):

    def test_que_on_every_candidate(self):
        """Tests that -que on every candidate marks the word."""
        words = sentence(("puellaque", with_que(noun("Noun Nominative Singular Feminine")),
                          with_que(noun("Noun Ablative Singular Feminine"))))
        apply_enclitic(words)
        self.assertTrue(words[0].has_et_prefix)
        self.assertTrue(words[0].et_guessed)

    def test_que_on_some_candidates_only(self):
        """Tests that a candidate without -que prevents the flag."""
        words = sentence(("quoque", with_que(noun("Noun Ablative Singular Masculine")),
                          adverb()))
        apply_enclitic(words)
        self.assertFalse(words[0].has_et_prefix)

    def test_rejected_enclitic_not_reapplied(self):
        """Tests that a rejected enclitic stays rejected."""
        words = sentence(("puellaque", with_que(noun("Noun Nominative Singular Feminine"))))
        words[0].rejected.add(inference_id(InferenceKind.ENCLITIC, 0))
        apply_enclitic(words)
        self.assertFalse(words[0].has_et_prefix)


class TestCommitHelpers(unittest.TestCase):

    def test_resolve_never_overwrites_manual(self):
        """Tests that a manual resolution is left as it is."""
        words = sentence(("puellae", noun("Noun Genitive Singular Feminine", "Noun Dative Singular Feminine")))
        word = words[0]
        word.selected_parse = word.candidates[0]
        word.selected_reading = "Noun Dative Singular Feminine"
        changed = resolve(words, 0, word.candidates[0], "Noun Genitive Singular Feminine",
                          InferenceKind.SOLE_READING, "test")
        self.assertFalse(changed)
        self.assertEqual(word.selected_reading, "Noun Dative Singular Feminine")
        self.assertFalse(word.guessed)

    def test_resolve_respects_rejection(self):
        """Tests that a rejected inference is not committed."""
        words = puella_ambulat()
        words[0].rejected.add("subject-1")
        changed = resolve(words, 0, words[0].candidates[0], "Noun Nominative Singular Feminine",
                          InferenceKind.SUBJECT, "test", anchor=1)
        self.assertFalse(changed)
        self.assertFalse(words[0].is_resolved)

    def test_resolve_registers_dependency(self):
        """Tests that an anchored resolution records the dependent."""
        words = puella_ambulat()
        self.assertTrue(resolve(words, 0, words[0].candidates[0], "Noun Nominative Singular Feminine",
                                InferenceKind.SUBJECT, "test", anchor=1))
        self.assertEqual(words[1].dependents, {0})
        self.assertFalse(resolve(words, 0, words[0].candidates[0], "Noun Nominative Singular Feminine",
                                 InferenceKind.SUBJECT, "test", anchor=1))

    def test_relabel_takes_over_sole_reading_only(self):
        """Tests that only lookup-uniqueness resolutions change owner."""
        words = puella_ambulat()
        apply_sole_reading(words)
        self.assertTrue(relabel(words, 0, InferenceKind.SUBJECT, "claimed", anchor=1))
        self.assertEqual(words[0].inference, InferenceKind.SUBJECT)
        self.assertFalse(relabel(words, 0, InferenceKind.PREPOSITION_OBJECT, "again", anchor=1))
        self.assertEqual(words[0].heuristic, "claimed")

    def test_annotate_is_idempotent(self):
        """Tests that an existing edge is not duplicated."""
        words = puella_ambulat()
        first = annotate(words, 0, AnnotationKind.MODIFY, InferenceKind.ADJACENT, "x", target=1)
        second = annotate(words, 0, AnnotationKind.MODIFY, InferenceKind.ADJACENT, "x", target=1)
        self.assertIsNotNone(first)
        self.assertIsNone(second)
        self.assertEqual(len(words[0].annotations), 1)

    def test_annotate_rejects_bad_targets(self):
        """Tests that self edges and out-of-range targets are refused."""
        words = puella_ambulat()
        self.assertIsNone(annotate(words, 0, AnnotationKind.MODIFY, InferenceKind.ADJACENT, "x", target=0))
        self.assertIsNone(annotate(words, 0, AnnotationKind.MODIFY, InferenceKind.ADJACENT, "x", target=7))
        self.assertEqual(words[0].annotations, [])


if __name__ == '__main__':
    unittest.main()
