"""Training corpora of example spellings.

The bundled corpus pairs up spellings into dyads: consecutive entries of each
interval list (positions ``2k`` and ``2k + 1``) form one example. Corpora can
also be read from YAML::

    examples:            # groups of spellings that are spelled together
      - [C, Db]
      - [C#, D]
    groups:              # optional: pitched edges that share one weight
      - - [source, [3, down]]
        - [[1, up], sink]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, FrozenSet, List, Sequence, Tuple, Union

import yaml

from spellnet.graph.nodes import SINK, SOURCE, Internal, Node, Tendency
from spellnet.notation.pitch import Spelling

PitchedEdge = Tuple[Node, Node]

SEMITONES = (
    "C", "Db", "C#", "D", "D", "Eb", "D#", "E", "E", "F", "F", "Gb",
    "F#", "G", "G", "Ab", "G#", "A", "A", "Bb", "A#", "B", "B", "C",
)
TONES = (
    "C", "D", "Db", "Eb", "C#", "D#", "D", "E", "Eb", "F", "E", "F#",
    "F", "G", "Gb", "Ab", "F#", "G#", "G", "A", "Ab", "Bb", "G#", "A#",
    "A", "B", "Bb", "C", "B", "C#",
)
MINOR_THIRDS = (
    "C", "Eb", "C#", "E", "D", "F", "Eb", "Gb", "D#", "F#", "E", "G",
    "F", "Ab", "F#", "A", "G", "Bb", "G#", "B", "A", "C", "Bb", "Db",
    "A#", "C#", "B", "D",
)
MAJOR_THIRDS = (
    "C", "E", "Db", "F", "D", "F#", "Eb", "G", "E", "G#", "F", "A",
    "Gb", "Bb", "F#", "A#", "G", "B", "Ab", "C", "A", "C#", "Bb", "D",
    "B", "D#",
)
PERFECT_FOURTHS = (
    "C", "F", "Db", "Gb", "D", "G", "Eb", "Ab", "E", "A", "F", "Bb",
    "F#", "B", "G", "C", "Ab", "Db", "A", "D", "Bb", "Eb", "B", "E",
)

#: Interval name to its flat list of paired spellings.
DYAD_CORPUS = {
    "semitones": SEMITONES,
    "tones": TONES,
    "minor_thirds": MINOR_THIRDS,
    "major_thirds": MAJOR_THIRDS,
    "perfect_fourths": PERFECT_FOURTHS,
}


@dataclass(frozen=True)
class Corpus:
    """Example spelling groups plus optional shared-weight edge groups."""

    examples: Tuple[Tuple[Spelling, ...], ...]
    groups: Tuple[FrozenSet[PitchedEdge], ...] = field(default_factory=tuple)


def pair_up(spellings: Sequence[Union[Spelling, str]]) -> List[List[Spelling]]:
    """Split a flat list into consecutive pairs.

    Raises:
        ValueError: If the list has odd length.
    """
    if len(spellings) % 2:
        raise ValueError(f"Cannot pair up {len(spellings)} spellings")
    parsed = [Spelling.parse(s) for s in spellings]
    return [parsed[i : i + 2] for i in range(0, len(parsed), 2)]


def dyad_examples() -> List[List[Spelling]]:
    """The bundled dyad corpus as a list of two-spelling groups."""
    return [pair for dyads in DYAD_CORPUS.values() for pair in pair_up(dyads)]


def default_corpus() -> Corpus:
    return Corpus(examples=tuple(tuple(pair) for pair in dyad_examples()))


def parse_node(spec: Any) -> Node:
    """Parse ``source``, ``sink`` or ``[pitch_class, up|down]``."""
    if isinstance(spec, str):
        name = spec.strip().lower()
        if name == "source":
            return SOURCE
        if name == "sink":
            return SINK
        raise ValueError(f"Unknown terminal {spec!r}")
    try:
        pitch_class, tendency = spec
        return Internal(int(pitch_class) % 12, Tendency[str(tendency).upper()])
    except (TypeError, ValueError, KeyError):
        raise ValueError(f"Invalid node {spec!r}; expected [pitch_class, up|down]") from None


def parse_edge(spec: Any) -> PitchedEdge:
    try:
        source, target = spec
    except (TypeError, ValueError):
        raise ValueError(f"Invalid edge {spec!r}; expected [node, node]") from None
    return parse_node(source), parse_node(target)


def parse_corpus(data: Any) -> Corpus:
    """Validate and convert a decoded YAML document.

    Raises:
        ValueError: If the document does not follow the corpus layout.
    """
    if not isinstance(data, dict) or "examples" not in data:
        raise ValueError("Corpus must be a mapping with an 'examples' list")
    unknown = set(data) - {"examples", "groups"}
    if unknown:
        raise ValueError(f"Unknown corpus keys: {sorted(unknown)}")

    raw_examples = data["examples"] or []
    if not isinstance(raw_examples, list):
        raise ValueError("'examples' must be a list")
    examples = []
    for entry in raw_examples:
        if isinstance(entry, str):
            entry = entry.split()
        if not isinstance(entry, list):
            raise ValueError(
                f"Invalid example {entry!r}; expected a list of spellings or a string"
            )
        examples.append(tuple(Spelling.parse(s) for s in entry))

    raw_groups = data.get("groups") or []
    if not isinstance(raw_groups, list):
        raise ValueError("'groups' must be a list")
    groups = []
    for group in raw_groups:
        if not isinstance(group, list):
            raise ValueError(f"Invalid group {group!r}; expected a list of edges")
        groups.append(frozenset(parse_edge(edge) for edge in group))
    return Corpus(examples=tuple(examples), groups=tuple(groups))


def load_corpus(path: Union[str, Path]) -> Corpus:
    """Read a corpus from a YAML file."""
    with open(path, "r", encoding="utf-8") as fh:
        return parse_corpus(yaml.safe_load(fh))
