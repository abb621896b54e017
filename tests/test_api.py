import pytest

from spellnet import (
    SINK,
    SOURCE,
    MissingWeightError,
    AdjacencyScheme,
    Internal,
    Pitch,
    Preference,
    Tendency,
    WeightScheme,
    build_weight_scheme,
    spell,
)
from spellnet.api import build_from_corpus
from spellnet.spelling.corpus import Corpus, parse_corpus


def names(spelled):
    return [str(s) for s in spelled.values()]


@pytest.fixture(scope="module")
def db_eb_scheme():
    return build_weight_scheme(["Db", "Eb"])


class TestSpell:
    def test_sequence_input(self, learned_scheme):
        spelled = spell([61, 63], learned_scheme, "flats")
        assert list(spelled) == [0, 1]
        assert names(spelled) == ["D♭", "E♭"]

    def test_mapping_input_and_pitch_objects(self, learned_scheme):
        spelled = spell({10: Pitch(63), 20: 67}, learned_scheme)
        assert names(spelled) == ["E♭", "G"]
        assert spelled[20].pitch == Pitch(67)

    def test_default_scheme(self):
        assert names(spell([61, 63], preference=Preference.SHARPS)) == ["C♯", "D♯"]

    def test_tendency_as_preference(self, learned_scheme):
        assert names(spell([61, 63], learned_scheme, Tendency.DOWN)) == ["D♭", "E♭"]

    def test_masks(self, learned_scheme):
        spelled = spell([63, 67], learned_scheme, masks=[AdjacencyScheme.never()])
        assert names(spelled) == ["D♯", "F𝄪"]

    def test_mask_with_lens(self, learned_scheme):
        values = [63, 67]
        away_from_g = AdjacencyScheme(lambda a, b: a != 7 and b != 7)
        spelled = spell(
            values,
            learned_scheme,
            masks=[(away_from_g, lambda index: values[index] % 12)],
        )
        assert names(spelled) == ["E♭", "F𝄪"]

    def test_incomplete_scheme(self, db_eb_scheme):
        with pytest.raises(MissingWeightError):
            spell([60], db_eb_scheme)


class TestBuildWeightScheme:
    def test_flat_examples(self, db_eb_scheme):
        assert db_eb_scheme(SOURCE, Internal(1, Tendency.DOWN)) == 2.0
        assert names(spell([61, 63], db_eb_scheme)) == ["D♭", "E♭"]

    def test_grouped_examples_match_flat_for_one_group(self, db_eb_scheme):
        grouped = build_weight_scheme([["Db", "Eb"]])
        edge = (Internal(3, Tendency.DOWN), Internal(1, Tendency.UP))
        assert grouped.weight(edge) == db_eb_scheme.weight(edge) == 2.0

    def test_preset_weights(self):
        sink_edge = (Internal(1, Tendency.UP), SINK)
        scheme = build_weight_scheme(["Db", "Eb"], preset_weights={sink_edge: 10.0})
        assert scheme.weight(sink_edge) == 10.0

    def test_grouping_constraints(self):
        group = {
            (SOURCE, Internal(1, Tendency.DOWN)),
            (SOURCE, Internal(3, Tendency.DOWN)),
        }
        scheme = build_weight_scheme(["Db", "Eb"], grouping_constraints=[group])
        weights = {scheme.weight(edge) for edge in group}
        assert weights == {3.0}

    def test_build_from_corpus(self):
        corpus = parse_corpus({"examples": [["Db", "Eb"]]})
        scheme = build_from_corpus(corpus)
        assert isinstance(scheme, WeightScheme)
        assert scheme(SOURCE, Internal(3, Tendency.DOWN)) == 2.0

    def test_empty_corpus_gives_empty_scheme(self):
        scheme = build_from_corpus(Corpus(examples=()))
        assert scheme(SOURCE, Internal(0, Tendency.DOWN)) is None
