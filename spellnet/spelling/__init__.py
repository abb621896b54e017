"""Spelling networks: learning weights from examples and spelling pitches."""

from spellnet.spelling.adjacency import Connect
from spellnet.spelling.corpus import Corpus, default_corpus, dyad_examples, load_corpus
from spellnet.spelling.inverting import InvertingSpellingNetwork
from spellnet.spelling.pitch_network import PitchSpellingNetwork, Preference

__all__ = [
    "Connect",
    "Corpus",
    "default_corpus",
    "dyad_examples",
    "load_corpus",
    "InvertingSpellingNetwork",
    "PitchSpellingNetwork",
    "Preference",
]
