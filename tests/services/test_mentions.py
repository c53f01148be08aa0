from __future__ import annotations

import unittest

import pytest

from GESTAMED.server.utils.services.clinical.dosage import DosageExtractor
from GESTAMED.server.utils.services.clinical.lexicon import (
    DrugLexicon,
    load_drug_lexicon,
)
from GESTAMED.server.utils.services.clinical.mentions import (
    Mention,
    MentionFinder,
    MergePolicy,
)

COMPATIBLE = {"first": "✅", "second": "✅", "third": "✅"}


# -----------------------------------------------------------------------------
def build_lexicon() -> DrugLexicon:
    return DrugLexicon.from_payload(
        {
            "drugs": [
                {"key": "azatioprina", "status": COMPATIBLE, "synonyms": ["imuran"]},
                {"key": "infliximab", "status": COMPATIBLE, "synonyms": ["remicade"]},
                {"key": "prednisona", "status": COMPATIBLE, "synonyms": []},
            ]
        }
    )


# -----------------------------------------------------------------------------
def build_finder(policy: MergePolicy | str = MergePolicy.OVERWRITE) -> MentionFinder:
    extractor = DosageExtractor(
        units=("mg", "g", "ml", "mcg"),
        frequency_terms=("veces", "al dia", "diario", "semanal", "mensual"),
    )
    return MentionFinder(build_lexicon(), dosage_extractor=extractor, merge_policy=policy)


class MentionFinderTests(unittest.TestCase):
    # ------------------------------------------------------------------
    def setUp(self) -> None:
        self.finder = build_finder()

    # ------------------------------------------------------------------
    def test_canonical_name_yields_single_mention(self) -> None:
        mentions = self.finder.find_mentions("Azatioprina")
        self.assertEqual(list(mentions), ["azatioprina"])
        self.assertEqual(mentions["azatioprina"].matched_name, "azatioprina")
        self.assertEqual(mentions["azatioprina"].dosage_phrases, [])

    # ------------------------------------------------------------------
    def test_synonym_maps_to_canonical_key(self) -> None:
        mentions = self.finder.find_mentions("Se indicó Remicade 100 mg.")
        self.assertEqual(list(mentions), ["infliximab"])
        mention = mentions["infliximab"]
        self.assertEqual(mention.matched_name, "remicade")
        self.assertEqual(mention.dosage_phrases, ["remicade 100 mg"])

    # ------------------------------------------------------------------
    def test_mentions_follow_lexicon_order(self) -> None:
        mentions = self.finder.find_mentions("prednisona, remicade e imuran")
        self.assertEqual(list(mentions), ["azatioprina", "infliximab", "prednisona"])

    # ------------------------------------------------------------------
    def test_text_without_drugs_yields_empty_mapping(self) -> None:
        self.assertEqual(self.finder.find_mentions("Paciente sin tratamiento."), {})
        self.assertEqual(self.finder.find_mentions(""), {})

    # ------------------------------------------------------------------
    def test_accents_and_case_are_ignored(self) -> None:
        mentions = self.finder.find_mentions("PREDNISONA 5 MG DIARIO")
        self.assertEqual(
            mentions["prednisona"].dosage_phrases, ["prednisona 5 mg diario"]
        )


# -----------------------------------------------------------------------------
MULTI_NAME_TEXT = "Infliximab 100 mg semanal. Cambio a remicade 200 mg."


# -----------------------------------------------------------------------------
def test_overwrite_policy_keeps_last_matching_name() -> None:
    mention = build_finder(MergePolicy.OVERWRITE).find_mentions(MULTI_NAME_TEXT)[
        "infliximab"
    ]
    assert mention.matched_name == "remicade"
    assert mention.dosage_phrases == ["remicade 200 mg"]


# -----------------------------------------------------------------------------
def test_keep_first_policy_keeps_first_matching_name() -> None:
    mention = build_finder("keep_first").find_mentions(MULTI_NAME_TEXT)["infliximab"]
    assert mention.matched_name == "infliximab"
    assert mention.dosage_phrases == ["infliximab 100 mg semanal"]


# -----------------------------------------------------------------------------
def test_union_policy_merges_dosage_phrases() -> None:
    mention = build_finder(MergePolicy.UNION_DOSAGES).find_mentions(MULTI_NAME_TEXT)[
        "infliximab"
    ]
    assert mention.matched_name == "infliximab"
    assert mention.dosage_phrases == ["infliximab 100 mg semanal", "remicade 200 mg"]


# -----------------------------------------------------------------------------
def test_union_policy_skips_repeated_phrases() -> None:
    finder = build_finder(MergePolicy.UNION_DOSAGES)
    current = Mention("aine", "aine", ["aine 400 mg"])
    candidate = Mention("aine", "ibuprofeno", ["aine 400 mg", "ibuprofeno 600 mg"])
    merged = finder.merge(current, candidate)
    assert merged.dosage_phrases == ["aine 400 mg", "ibuprofeno 600 mg"]
    assert current.dosage_phrases == ["aine 400 mg"]


# -----------------------------------------------------------------------------
def test_unknown_merge_policy_is_rejected() -> None:
    with pytest.raises(ValueError):
        MentionFinder(build_lexicon(), merge_policy="random")


# -----------------------------------------------------------------------------
def test_every_shipped_drug_is_found_by_canonical_name() -> None:
    lexicon = load_drug_lexicon()
    finder = MentionFinder(lexicon)
    for key in lexicon.drug_keys():
        mentions = finder.find_mentions(key)
        assert list(mentions) == [key]
        assert mentions[key].matched_name == key


if __name__ == "__main__":
    unittest.main()
