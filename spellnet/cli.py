"""Command-line interface for spellnet."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from spellnet.api import build_from_corpus, spell
from spellnet.exceptions import SpellingNetworkError
from spellnet.graph.nodes import Internal, Terminal
from spellnet.logging import get_logger, log_duration, set_global_log_level
from spellnet.notation.pitch import Pitch, Spelling
from spellnet.spelling.corpus import Corpus, default_corpus, load_corpus
from spellnet.spelling.inverting import InvertingSpellingNetwork
from spellnet.spelling.pitch_network import Preference

logger = get_logger(__name__)


def _format_table(headers: List[str], rows: List[List[str]], min_width: int = 6) -> str:
    """Format rows as a plain ASCII table."""
    if not rows:
        return ""

    all_data = [headers] + rows
    col_widths = [
        max(min_width, max(len(str(row[i])) for row in all_data))
        for i in range(len(headers))
    ]

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    lines.extend(format_row(row) for row in rows)
    return "\n".join(lines)


def _format_node(node: Any) -> str:
    if isinstance(node, Terminal):
        return node.value
    if isinstance(node, Internal):
        return f"{node.index}/{node.tendency.name.lower()}"
    return str(node)


def _parse_pitch(token: str) -> Pitch:
    """Read a note number (``63``) or a spelling name (``Eb``)."""
    try:
        value = float(token)
    except ValueError:
        return Pitch(Spelling.parse(token).pitch_class)
    return Pitch(value)


def _load(corpus_path: Optional[Path]) -> Corpus:
    if corpus_path is None:
        return default_corpus()
    logger.info(f"Loading corpus from: {corpus_path}")
    return load_corpus(corpus_path)


def _learn_weights(corpus: Corpus) -> Dict[Any, float]:
    network = InvertingSpellingNetwork.from_groups(corpus.examples)
    return network.generate_weights(groups=corpus.groups)


def _run_spell(
    tokens: List[str], prefer: str, corpus_path: Optional[Path], as_json: bool
) -> None:
    pitches = {i: _parse_pitch(token) for i, token in enumerate(tokens)}
    corpus = _load(corpus_path)
    with log_duration(logger, "Weight learning"):
        scheme = build_from_corpus(corpus)
    spelled = spell(pitches, scheme, Preference.from_string(prefer))

    if as_json:
        print(json.dumps({str(i): str(s) for i, s in spelled.items()}, ensure_ascii=False))
        return
    for index, spelled_pitch in spelled.items():
        print(f"{index}: {spelled_pitch}")


def _run_weights(corpus_path: Optional[Path], as_json: bool) -> None:
    weights = _learn_weights(_load(corpus_path))
    ordered = sorted(
        weights.items(), key=lambda item: (-item[1], [_format_node(n) for n in item[0]])
    )

    if as_json:
        payload = [
            {"source": _format_node(u), "target": _format_node(v), "weight": w}
            for (u, v), w in ordered
        ]
        print(json.dumps(payload, indent=2))
        return
    rows = [[_format_node(u), _format_node(v), f"{w:g}"] for (u, v), w in ordered]
    print(_format_table(["Source", "Target", "Weight"], rows))


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``spellnet`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="spellnet",
        description="Spell pitches with flow networks.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{spell,weights}",
        help="Available commands",
    )

    spell_parser = subparsers.add_parser("spell", help="Spell a set of pitches")
    spell_parser.add_argument(
        "pitches", nargs="+", help="Note numbers (e.g. 61) or spelling names (e.g. Db)"
    )
    spell_parser.add_argument(
        "--prefer",
        "-p",
        default="sharps",
        choices=["sharps", "flats", "up", "down"],
        help="Bias for ambiguous spellings (default: sharps)",
    )

    weights_parser = subparsers.add_parser(
        "weights", help="Print the weights learned from a corpus"
    )

    for p in (spell_parser, weights_parser):
        p.add_argument(
            "--corpus",
            "-c",
            type=Path,
            default=None,
            help="YAML corpus file (default: bundled dyad corpus)",
        )
        p.add_argument("--json", action="store_true", help="Print JSON output")

    effective_args = sys.argv[1:] if argv is None else argv
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    try:
        if args.command == "spell":
            _run_spell(args.pitches, args.prefer, args.corpus, args.json)
        elif args.command == "weights":
            _run_weights(args.corpus, args.json)
    except FileNotFoundError as e:
        logger.error(f"Corpus file not found: {e.filename}")
        print(f"ERROR: Corpus file not found: {e.filename}")
        sys.exit(1)
    except (SpellingNetworkError, ValueError, yaml.YAMLError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"ERROR: {type(e).__name__}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
