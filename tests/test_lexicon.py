"""
Tests for the Lexicon.

This module tests:
1. The add path (normalization, stemming, rejection rules)
2. Index consistency and counts
3. Disambiguation and weighting
4. Provenance queries
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from lexindex.lex_types import LexicalType
from lexindex.lexicon import (
    NOT_FOUND,
    IdentityStemmer,
    LexicalEntry,
    Lexicon,
    LexiconSettings,
    Normalizer,
)


def build_heart_lexicon():
    lexicon = Lexicon()
    lexicon.add(1, "Heart", LexicalType.LABEL, "", 0.9)
    lexicon.add(1, "Cardiac Organ", LexicalType.EXACT_SYNONYM, "", 0.85)
    lexicon.add(2, "Lung", LexicalType.LABEL, "", 0.9)
    lexicon.add(2, "Heart", LexicalType.EXTERNAL_MATCH, "uberon", 0.7)
    return lexicon


class TestAdd:
    """Test the add path."""

    def test_name_is_normalized_and_stemmed(self):
        lexicon = Lexicon()
        assert lexicon.add(1, "Blood_Cells", LexicalType.LABEL, "", 0.9)
        assert lexicon.contains("blood cell")
        assert not lexicon.contains("blood cells")
        assert lexicon.get_names(1) == {"blood cell"}

    def test_stem_disabled(self):
        lexicon = Lexicon()
        lexicon.add(1, "Blood Cells", LexicalType.SYNONYM, "", 0.8, stem=False)
        assert lexicon.contains("blood cells")
        assert lexicon.name_count() == 1

    def test_empty_name_ignored(self):
        lexicon = Lexicon()
        assert not lexicon.add(1, "", LexicalType.LABEL, "", 0.9)
        assert not lexicon.add(1, " _ ", LexicalType.LABEL, "", 0.9)
        assert lexicon.size() == 0

    def test_english_name_without_latin_letters_ignored(self):
        lexicon = Lexicon()
        assert not lexicon.add(1, "心臓", LexicalType.LABEL, "", 0.9)
        assert not lexicon.add(1, "123", LexicalType.LABEL, "", 0.9)
        assert lexicon.size() == 0
        assert lexicon.class_count() == 0
        assert lexicon.get_language_count("en") == 0

    def test_other_language_keeps_name(self):
        lexicon = Lexicon()
        assert lexicon.add(1, "心臓", LexicalType.LABEL, "", 0.9, language="ja")
        assert lexicon.contains("心臓")
        assert lexicon.get_languages("心臓") == {"ja"}

    def test_other_language_not_lowercased_or_stemmed(self):
        lexicon = Lexicon()
        lexicon.add(1, "Rote_Blutkörperchen", LexicalType.SYNONYM, "", 0.8, language="de")
        assert lexicon.get_names(1) == {"Rote Blutkörperchen"}

    def test_formula_overrides_type(self):
        lexicon = Lexicon()
        lexicon.add(5, "H2O", LexicalType.LABEL, "", 0.9)
        assert lexicon.contains("H2O")
        assert lexicon.get_type("H2O", 5) is LexicalType.FORMULA
        assert lexicon.get_classes_of_type("H2O", LexicalType.FORMULA) == {5}
        # A formula is not a label, so the canonical label is untouched
        assert lexicon.get_corrected_name(5) is None

    def test_words_joined_by_operator_stay_names(self):
        lexicon = Lexicon()
        lexicon.add(1, "Research & Development", LexicalType.LABEL, "", 0.9)
        key = lexicon.name_key("Research & Development")
        assert key == lexicon.normalizer.stem_name("research development")
        assert lexicon.get_types(key, 1) == {LexicalType.LABEL}
        assert lexicon.get_corrected_name(1) == "research development"

    def test_weight_rounded(self):
        lexicon = Lexicon()
        lexicon.add(1, "Heart", LexicalType.LABEL, "", 0.123456)
        assert lexicon.get_weight("heart", 1) == 0.1235
        assert lexicon.get("heart", 1)[0].weight == 0.1235

    def test_duplicate_entries_accumulate(self):
        lexicon = Lexicon()
        lexicon.add(1, "Heart", LexicalType.LABEL, "", 0.9)
        lexicon.add(1, "heart", LexicalType.SYNONYM, "", 0.8)
        assert lexicon.size() == 2
        assert lexicon.name_count() == 1
        assert lexicon.class_count("heart") == 2
        assert lexicon.get_types("heart", 1) == {LexicalType.LABEL, LexicalType.SYNONYM}

    def test_add_entries(self):
        lexicon = Lexicon()
        added = lexicon.add_entries(
            [
                LexicalEntry(1, "Heart", LexicalType.LABEL, "", 0.9),
                LexicalEntry(1, "", LexicalType.SYNONYM, "", 0.8),
                LexicalEntry(1, "Coeur", LexicalType.LABEL, "", 0.9, "fr"),
            ]
        )
        assert added == 2
        assert lexicon.get_languages() == {"en", "fr"}

    def test_language_counts(self):
        lexicon = Lexicon()
        lexicon.add(1, "Heart", LexicalType.LABEL, "", 0.9)
        lexicon.add(2, "Lung", LexicalType.LABEL, "", 0.9)
        lexicon.add(1, "Coeur", LexicalType.LABEL, "", 0.9, language="fr")
        assert lexicon.get_language_count("en") == 2
        assert lexicon.get_language_count("fr") == 1
        assert lexicon.get_language_count("de") == 0

    def test_injected_normalizer(self):
        lexicon = Lexicon(normalizer=Normalizer(IdentityStemmer()))
        lexicon.add(1, "Blood Cells", LexicalType.LABEL, "", 0.9)
        assert lexicon.contains("blood cells")
        assert lexicon.name_key("Blood Cells") == "blood cells"


class TestIndexConsistency:
    """Test that both directions of the index agree."""

    def test_bidirectional(self):
        lexicon = build_heart_lexicon()
        lexicon.add(3, "Left Atrium (Heart)", LexicalType.LABEL, "", 0.9)
        lexicon.generate_parenthesis_synonyms()

        for name in lexicon.get_names():
            for class_id in lexicon.get_classes(name):
                assert name in lexicon.get_names(class_id)
                assert lexicon.contains_pair(class_id, name)
                assert lexicon.get(name, class_id)
        for class_id in lexicon.get_classes():
            for name in lexicon.get_names(class_id):
                assert class_id in lexicon.get_classes(name)

    def test_counts(self):
        lexicon = build_heart_lexicon()
        assert lexicon.name_count() == 3
        assert lexicon.class_count() == 2
        assert lexicon.size() == 4
        assert len(lexicon) == 4
        assert lexicon.name_count(1) == 2
        assert lexicon.class_count("heart") == 2
        assert "heart" in lexicon

    def test_name_count_of_type_counts_distinct_names(self):
        lexicon = Lexicon()
        lexicon.add(1, "Heart", LexicalType.LABEL, "", 0.9)
        lexicon.add(1, "Heart", LexicalType.LABEL, "src", 0.8)
        lexicon.add(1, "Cardiac Organ", LexicalType.LABEL, "", 0.9)
        lexicon.add(1, "Coeur", LexicalType.LABEL, "", 0.9, language="fr")
        assert lexicon.name_count_of_type(1, LexicalType.LABEL) == 3
        assert lexicon.name_count_of_type(1, LexicalType.LABEL, "en") == 2
        assert lexicon.name_count_of_type(1, LexicalType.SYNONYM) == 0

    def test_names_in_order(self):
        lexicon = build_heart_lexicon()
        assert lexicon.get_names_in_order() == [
            "heart",
            lexicon.name_key("Cardiac Organ"),
            "lung",
        ]

    def test_copy_is_independent(self):
        lexicon = build_heart_lexicon()
        snapshot = lexicon.copy()
        lexicon.add(3, "Brain", LexicalType.LABEL, "", 0.9)
        snapshot.add(4, "Blood", LexicalType.LABEL, "", 0.9)

        assert not snapshot.contains("brain")
        assert not lexicon.contains("blood")
        assert snapshot.get_corrected_name(4) == "blood"
        assert lexicon.get_corrected_name(4) is None
        assert snapshot.get_language_count("en") == 5
        assert lexicon.get_language_count("en") == 5
        assert lexicon.size() == snapshot.size() == 5


class TestLabels:
    """Test the canonical label maps."""

    def test_label_sets_corrected_name_unstemmed(self):
        lexicon = Lexicon()
        lexicon.add(1, "Blood Cells", LexicalType.LABEL, "", 0.9)
        assert lexicon.get_corrected_name(1) == "blood cells"
        assert lexicon.get_corrected_class("blood cells") == 1
        assert lexicon.contains("blood cell")

    def test_label_overwrite(self):
        lexicon = Lexicon()
        lexicon.add(1, "Heart", LexicalType.LABEL, "", 0.9)
        lexicon.add(1, "Cardiac Organ", LexicalType.LABEL, "", 0.9)
        assert lexicon.get_corrected_name(1) == "cardiac organ"
        assert lexicon.get_corrected_class("cardiac organ") == 1
        assert lexicon.get_corrected_class("heart") is None
        # Both labels remain in the index
        assert lexicon.contains("heart")

    def test_synonym_does_not_set_label(self):
        lexicon = Lexicon()
        lexicon.add(1, "Heart", LexicalType.SYNONYM, "", 0.8)
        assert lexicon.get_corrected_name(1) is None

    def test_add_synonym(self):
        lexicon = Lexicon()
        lexicon.add_synonym(1, "Blood Cells")
        lexicon.add_synonym(1, "Blood Cells")
        lexicon.add_synonym(2, "")
        assert lexicon.get_synonyms() == {1: ["blood cell"]}
        assert lexicon.size() == 0


class TestDisambiguation:
    """Test weights and best class / best name selection."""

    def test_best_class_tie_is_not_found(self):
        lexicon = Lexicon()
        lexicon.add(1, "Heart", LexicalType.SYNONYM, "", 0.8)
        lexicon.add(2, "Heart", LexicalType.SYNONYM, "", 0.8)
        assert lexicon.get_best_class("heart") is NOT_FOUND

        lexicon.add(2, "Heart", LexicalType.LABEL, "", 0.9)
        assert lexicon.get_best_class("heart") == 2

    def test_best_class_unknown_name(self):
        lexicon = build_heart_lexicon()
        assert lexicon.get_best_class("brain") is NOT_FOUND

    def test_best_class_internal(self):
        lexicon = Lexicon()
        lexicon.add(1, "Heart", LexicalType.SYNONYM, "", 0.8)
        lexicon.add(2, "Heart", LexicalType.EXTERNAL_MATCH, "uberon", 0.95)
        assert lexicon.get_best_class("heart") == 2
        assert lexicon.get_best_class("heart", internal=True) == 1

    def test_weight(self):
        lexicon = build_heart_lexicon()
        assert lexicon.get_weight("heart", 1) == 0.9
        assert lexicon.get_weight("heart", 2) == 0.7
        assert lexicon.get_weight("heart", 3) == 0.0
        assert lexicon.get_weight("heart", 1, "fr") == 0.0

    def test_corrected_weight(self):
        lexicon = Lexicon()
        lexicon.add(1, "Heart", LexicalType.LABEL, "", 0.9)
        lexicon.add(1, "Cardiac Organ", LexicalType.LABEL, "", 0.9)
        lexicon.add(1, "Cor", LexicalType.SYNONYM, "", 0.8)
        assert lexicon.get_corrected_weight("heart", 1) == pytest.approx(0.88)
        assert lexicon.get_corrected_weight("cor", 1) == pytest.approx(0.79)
        assert lexicon.get_corrected_weight("lung", 1) == 0.0

    def test_type_is_best_weighted(self):
        lexicon = Lexicon()
        lexicon.add(1, "Heart", LexicalType.SYNONYM, "", 0.8)
        lexicon.add(1, "Heart", LexicalType.LABEL, "", 0.9)
        lexicon.add(1, "Heart", LexicalType.EXACT_SYNONYM, "", 0.9)
        assert lexicon.get_type("heart", 1) is LexicalType.LABEL
        assert lexicon.get_type("heart", 2) is None

    def test_best_name_in_label_language(self):
        lexicon = Lexicon()
        lexicon.add(1, "Heart", LexicalType.LABEL, "", 0.9)
        lexicon.add(1, "Cardiac Organ", LexicalType.SYNONYM, "", 0.8)
        lexicon.add(1, "Coeur", LexicalType.LOCAL_NAME, "", 0.95, language="fr")
        assert lexicon.get_best_name(1) == "heart"

        french = Lexicon(LexiconSettings(label_language="fr"))
        french.add(1, "Heart", LexicalType.LABEL, "", 0.9)
        french.add(1, "Coeur", LexicalType.LABEL, "", 0.9, language="fr")
        assert french.get_best_name(1) == "Coeur"

    def test_best_name_falls_back_to_internal_names(self):
        lexicon = Lexicon({"label_language": "de"})
        lexicon.add(1, "Heart", LexicalType.LABEL, "", 0.9)
        lexicon.add(1, "Cor", LexicalType.EXTERNAL_MATCH, "uberon", 0.95)
        assert lexicon.get_best_name(1) == "heart"
        assert lexicon.get_best_name(9) == ""

    def test_best_name_first_wins_ties(self):
        lexicon = Lexicon()
        lexicon.add(1, "Heart", LexicalType.LABEL, "", 0.9)
        lexicon.add(1, "Cardiac Organ", LexicalType.LABEL, "", 0.9)
        assert lexicon.get_best_name(1) == "heart"


class TestProvenance:
    """Test external and internal classification."""

    def test_source_makes_entry_external(self):
        lexicon = Lexicon()
        lexicon.add(1, "Heart", LexicalType.SYNONYM, "uberon", 0.8)
        assert lexicon.is_external("heart", 1)
        assert lexicon.get_internal_classes("heart") == set()
        assert lexicon.get_extended_classes() == {1}

    def test_external_match_without_source(self):
        lexicon = Lexicon()
        lexicon.add(1, "Heart", LexicalType.EXTERNAL_MATCH, "", 0.7)
        assert lexicon.is_external("heart", 1)

    def test_pair_with_internal_provenance_is_internal(self):
        lexicon = Lexicon()
        lexicon.add(1, "Heart", LexicalType.LABEL, "", 0.9)
        lexicon.add(1, "heart", LexicalType.SYNONYM, "uberon", 0.8, language="fr")
        assert not lexicon.is_external("heart", 1)
        assert lexicon.is_external("heart", 1, "fr")
        assert not lexicon.is_external("heart", 1, "en")
        assert lexicon.get_internal_classes("heart") == {1}

    def test_absent_pair_is_not_external(self):
        lexicon = build_heart_lexicon()
        assert not lexicon.is_external("brain", 1)

    def test_sources(self):
        lexicon = build_heart_lexicon()
        assert lexicon.get_sources("heart", 2) == {"uberon"}
        assert lexicon.has_name_from_source(2, "uberon")
        assert not lexicon.has_name_from_source(1, "uberon")
        assert lexicon.get_classes_with_source("uberon") == [2]
        assert lexicon.has_external_name(2)
        assert not lexicon.has_external_name(1)

    def test_internal_names(self):
        lexicon = build_heart_lexicon()
        assert lexicon.get_internal_names(2) == {"lung"}
        assert lexicon.get_names_of_type(2, LexicalType.EXTERNAL_MATCH) == {"heart"}
        assert lexicon.get_names_with_language(1, "en") == lexicon.get_names(1)
        assert lexicon.get_classes_with_language("heart", "en") == {1, 2}


class TestFormulas:
    """Test formula handling in the lexicon."""

    def test_contains_non_small_formula(self):
        lexicon = Lexicon()
        lexicon.add(5, "H2O", LexicalType.SYNONYM, "", 0.8)
        assert not lexicon.contains_non_small_formula(5)

        lexicon.add(5, "Water", LexicalType.LABEL, "", 0.9)
        assert lexicon.contains_non_small_formula(5)

    def test_long_formula_is_not_small(self):
        lexicon = Lexicon(LexiconSettings(small_formula_length=5))
        lexicon.add(6, "C6H12O6", LexicalType.SYNONYM, "", 0.8)
        assert lexicon.contains_non_small_formula(6)

    def test_unknown_class(self):
        assert not Lexicon().contains_non_small_formula(1)
