"""
End-to-end tests of the operator controls on SentenceAnalyzer.
"""
import pytest

from sententia.analyzer import SentenceAnalyzer
from sententia.model import AnnotationKind, InferenceKind, PartOfSpeech

from builders import PREP_ACC, VERB_3SG, in_terram_venit, noun, puella_ambulat, romae_puella, verb

NOM = "Noun Nominative Singular Feminine"
ABL = "Noun Ablative Singular Feminine"

LOOKUPS = {
    "puella": [noun(NOM, forms=("puella", "puellae"))],
    "ambulat": [verb(VERB_3SG, forms=("ambulo", "ambulare"))],
}


@pytest.fixture
def analyzer():
    """'puella ambulat' after a bulk run."""
    result = SentenceAnalyzer(puella_ambulat())
    result.run_all()
    return result


class TestScenarios:

    def test_a_subject(self):
        """Test that the subject is found from raw lookup results."""
        analyzer = SentenceAnalyzer.from_lookups("Puella ambulat.", LOOKUPS)
        analyzer.run_all()
        puella = analyzer.words[0]
        assert [w.original for w in analyzer.words] == ["Puella", "ambulat", "."]
        assert puella.selected_reading == NOM
        assert puella.heuristic == 'Subject of "ambulat" (singular 3rd person)'
        assert analyzer.words[1].dependents == {0}

    def test_b_prepositional_phrase(self):
        """Test 'in terram venit'."""
        analyzer = SentenceAnalyzer(in_terram_venit())
        analyzer.run_all()
        prep, terram = analyzer.words[0], analyzer.words[1]
        assert prep.selected_reading == PREP_ACC
        assert [a.end_index for a in prep.annotations if a.kind == AnnotationKind.PREPOSITION_SCOPE] == [1]
        assert terram.inference == InferenceKind.PREPOSITION_OBJECT

    def test_c_possession(self):
        """Test 'Romae puella'."""
        analyzer = SentenceAnalyzer(romae_puella())
        analyzer.run_all()
        [edge] = analyzer.words[0].annotations
        assert edge.kind == AnnotationKind.POSSESSION
        assert edge.target_index == 1

    def test_d_rejection_survives_bulk_runs(self):
        """Test that a rejected possession stays away until the ledger is cleared."""
        analyzer = SentenceAnalyzer(romae_puella())
        analyzer.run_all()

        assert analyzer.reject(0, "possession-1") is True
        assert analyzer.words[0].annotations == []
        assert analyzer.words[1].dependents == set()

        analyzer.run_all()
        assert analyzer.words[0].annotations == []
        assert analyzer.words[0].rejected == {"possession-1"}

        analyzer.rerun()
        assert analyzer.words[0].rejected == set()
        assert [a.target_index for a in analyzer.words[0].annotations] == [1]

    def test_e_override_invalidates_subject(self, analyzer):
        """Test that turning the verb into an adverb re-derives the noun from its own reading."""
        invalidated = analyzer.override(1, "Adverb", "Adverb")
        puella, ambulat = analyzer.words
        assert invalidated == [0]
        assert ambulat.pos == PartOfSpeech.ADVERB
        assert ambulat.is_manual and ambulat.override is not None
        assert puella.selected_reading == NOM
        assert puella.inference == InferenceKind.SOLE_READING
        assert ambulat.dependents == set()

    def test_e_manual_subject_untouched(self):
        """Test that a manually chosen subject survives the override."""
        analyzer = SentenceAnalyzer(puella_ambulat())
        analyzer.select(0, analyzer.words[0].candidates[0])
        analyzer.run_all()
        assert analyzer.override(1, PartOfSpeech.ADVERB, "Adverb") == []
        assert analyzer.words[0].is_manual
        assert analyzer.words[0].selected_reading == NOM


class TestManualChanges:

    def test_select_default_reading(self):
        """Test that selecting a parse takes its first reading."""
        analyzer = SentenceAnalyzer(puella_ambulat())
        analyzer.select(0, analyzer.words[0].candidates[0], rerun=False)
        assert analyzer.words[0].selected_reading == NOM
        assert analyzer.words[0].is_manual
        assert not analyzer.words[1].is_resolved

    def test_manual_reading_kept_by_passes(self):
        """Test that passes never overwrite an operator's choice."""
        words = puella_ambulat()
        words[0].candidates = [noun(NOM, ABL)]
        analyzer = SentenceAnalyzer(words)
        analyzer.select(0, words[0].candidates[0], ABL)
        analyzer.run_all()
        assert words[0].selected_reading == ABL
        assert words[0].is_manual

    def test_select_rejects_foreign_parse(self, analyzer):
        """Test that only offered candidates can be selected."""
        with pytest.raises(ValueError):
            analyzer.select(0, noun(ABL))
        with pytest.raises(ValueError):
            analyzer.select(0, analyzer.words[0].candidates[0], ABL)

    def test_index_out_of_range(self, analyzer):
        """Test that every control validates its index."""
        with pytest.raises(IndexError):
            analyzer.select(5, analyzer.words[0].candidates[0])
        with pytest.raises(IndexError):
            analyzer.run_incremental(-1)
        with pytest.raises(IndexError):
            analyzer.reject(2, "subject-1")

    def test_deselect(self, analyzer):
        """Test that a deselected word is left unresolved until the next run."""
        analyzer.deselect(0)
        assert not analyzer.words[0].is_resolved
        assert analyzer.words[1].dependents == set()
        analyzer.run_all()
        assert analyzer.words[0].inference == InferenceKind.SUBJECT

    def test_confirm(self, analyzer):
        """Test that confirming turns a guess into a manual resolution."""
        assert analyzer.confirm(0) is True
        puella = analyzer.words[0]
        assert puella.is_manual
        assert puella.inference is None
        assert analyzer.words[1].dependents == set()
        assert analyzer.confirm(0) is False

    def test_manual_annotation(self, analyzer):
        """Test drawing a manual edge."""
        annotation = analyzer.annotate(1, "modify", target=0)
        assert annotation.guessed is False
        assert annotation.related_index == 0
        assert analyzer.words[1].annotations == [annotation]
        with pytest.raises(ValueError):
            analyzer.annotate(1, AnnotationKind.MODIFY)
        with pytest.raises(IndexError):
            analyzer.annotate(1, AnnotationKind.MODIFY, target=9)


class TestRejectionAndReruns:

    def test_reject_resolution(self, analyzer):
        """Test that rejecting the subject leaves the noun to other passes."""
        assert analyzer.reject(0, "subject-1") is True
        assert not analyzer.words[0].is_resolved
        analyzer.run_all()
        assert analyzer.words[0].inference == InferenceKind.SOLE_READING

    def test_reject_unknown_id(self, analyzer):
        """Test that an id matching nothing is still recorded."""
        assert analyzer.reject(0, "vocative-1") is False
        assert "vocative-1" in analyzer.words[0].rejected

    def test_run_range_keeps_rejections(self, analyzer):
        """Test that redoing a range re-derives guesses but respects the ledger."""
        analyzer.reject(0, "subject-1")
        analyzer.run_range(0, 1)
        assert analyzer.words[0].inference == InferenceKind.SOLE_READING
        assert analyzer.words[0].rejected == {"subject-1"}

    def test_reanalyze(self, analyzer):
        """Test that re-analysis forgets guesses and rejections but not manual edges."""
        analyzer.annotate(1, "modify", target=0)
        analyzer.reject(0, "subject-1")
        analyzer.reanalyze()
        puella = analyzer.words[0]
        assert puella.inference == InferenceKind.SUBJECT
        assert puella.rejected == set()
        assert [a.guessed for a in analyzer.words[1].annotations] == [False]
        assert analyzer.words[1].dependents == {0}

    def test_run_all_twice(self, analyzer):
        """Test that a repeated bulk run leaves the state unchanged."""
        before = analyzer.to_dict()["words"]
        analyzer.run_all()
        assert analyzer.to_dict()["words"] == before


class TestPersistence:

    def test_save_and_load(self, analyzer, tmp_path):
        """Test that a saved analysis loads back with its text and sets."""
        analyzer.reject(0, "possession-1")
        path = tmp_path / "state.json"
        analyzer.save(path)

        restored = SentenceAnalyzer.load(path)
        assert restored.text == "puella ambulat"
        assert restored.to_dict()["words"] == analyzer.to_dict()["words"]
        assert restored.words[0].rejected == {"possession-1"}
        assert restored.words[1].dependents == {0}

    def test_document_shape(self, analyzer):
        """Test the top-level fields of the saved form."""
        document = analyzer.to_dict()
        assert document["version"] == 1
        assert document["input"] == "puella ambulat"
        assert document["timestamp"].endswith("Z")
        assert len(document["words"]) == 2

    def test_word_sets_serialized_as_arrays(self, analyzer):
        """Test the ledger and dependents keys of a saved word."""
        analyzer.reject(1, "subject-0")
        ambulat = analyzer.to_dict()["words"][1]
        assert ambulat["rejectedHeuristics"] == ["subject-0"]
        assert ambulat["dependentWords"] == [0]
        assert "rejected" not in ambulat
        assert "dependents" not in ambulat
