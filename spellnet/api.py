"""Public entry points.

Example:
    >>> from spellnet import default_weight_scheme, spell
    >>> weights = default_weight_scheme()
    >>> [str(p) for p in spell({0: 61, 1: 63}, weights, "flats").values()]
    ['D♭', 'E♭']
"""

from __future__ import annotations

from typing import (
    Dict,
    Iterable,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from spellnet.config import SolverConfig
from spellnet.graph.nodes import Tendency
from spellnet.graph.schemes import AdjacencyScheme, WeightScheme
from spellnet.logging import get_logger
from spellnet.notation.pitch import Pitch, SpelledPitch, Spelling
from spellnet.spelling.corpus import Corpus, default_corpus
from spellnet.spelling.inverting import InvertingSpellingNetwork, PitchedEdge, Preset
from spellnet.spelling.pitch_network import PitchSpellingNetwork, Preference

logger = get_logger(__name__)

PitchLike = Union[Pitch, int, float]
MaskSpec = Union[AdjacencyScheme, WeightScheme, Tuple[Union[AdjacencyScheme, WeightScheme], object]]


def _as_pitch(value: PitchLike) -> Pitch:
    return value if isinstance(value, Pitch) else Pitch(value)


def spell(
    pitches: Union[Mapping[int, PitchLike], Sequence[PitchLike]],
    weight_scheme: Optional[WeightScheme] = None,
    preference: Union[Preference, Tendency, str] = Preference.SHARPS,
    masks: Iterable[MaskSpec] = (),
    config: Optional[SolverConfig] = None,
) -> Dict[int, SpelledPitch]:
    """Spell indexed pitches.

    Args:
        pitches: Pitches by index, or a sequence indexed by position. Plain
            numbers are note numbers.
        weight_scheme: Capacities over pitched edges; defaults to the scheme
            learned from the bundled dyad corpus.
        preference: ``sharps`` or ``flats``.
        masks: Schemes, or ``(scheme, lens)`` pairs, applied before solving.
        config: Solver settings.

    Returns:
        Spelled pitch by index.

    Raises:
        MissingWeightError: If ``weight_scheme`` lacks a required capacity.
    """
    if not isinstance(pitches, Mapping):
        pitches = dict(enumerate(pitches))
    network = PitchSpellingNetwork(
        {index: _as_pitch(p) for index, p in pitches.items()},
        weight_scheme if weight_scheme is not None else default_weight_scheme(config),
        config=config,
    )
    for mask in masks:
        if isinstance(mask, tuple):
            network.mask(*mask)
        else:
            network.mask(mask)
    return network.spell(preference)


def _is_grouped(examples: Sequence) -> bool:
    return bool(examples) and all(
        not isinstance(e, (str, Spelling)) and isinstance(e, Iterable) for e in examples
    )


def build_weight_scheme(
    examples: Union[Sequence[Union[Spelling, str]], Sequence[Sequence[Union[Spelling, str]]]],
    grouping_constraints: Iterable[Iterable[PitchedEdge]] = (),
    preset_weights: Optional[Preset] = None,
    config: Optional[SolverConfig] = None,
) -> WeightScheme:
    """Learn a weight scheme from correctly spelled examples.

    Args:
        examples: Either a flat sequence of spellings, all of which relate to
            each other, or a sequence of groups where only spellings of one
            group relate (e.g. a list of dyads).
        grouping_constraints: Sets of pitched edges forced to share a weight.
        preset_weights: Fixed weights by pitched edge.
        config: Solver settings.
    """
    if _is_grouped(examples):
        network = InvertingSpellingNetwork.from_groups(examples)
    else:
        network = InvertingSpellingNetwork(list(examples))
    scheme = network.weight_scheme(preset_weights, grouping_constraints, config)
    logger.debug("Built weight scheme from %d spellings", len(network.spellings))
    return scheme


def build_from_corpus(corpus: Corpus, config: Optional[SolverConfig] = None) -> WeightScheme:
    """Learn a weight scheme from a `Corpus`."""
    return build_weight_scheme(
        [list(group) for group in corpus.examples], corpus.groups, config=config
    )


def default_weight_scheme(config: Optional[SolverConfig] = None) -> WeightScheme:
    """Weight scheme learned from the bundled dyad corpus.

    Recomputed on every call; keep the result to reuse it.
    """
    return build_from_corpus(default_corpus(), config)
