"""Global pytest configuration.

Conditionally registers the fixture plugin `tests.algorithms.sample_graphs`.
The plugin is not imported here so that pytest applies assertion rewriting to it.
"""

from __future__ import annotations

from importlib.util import find_spec

import pytest

from spellnet.api import default_weight_scheme
from spellnet.spelling.corpus import dyad_examples
from spellnet.spelling.inverting import InvertingSpellingNetwork

pytest_plugins: list[str] = []
if find_spec("tests.algorithms.sample_graphs") is not None:
    pytest_plugins = ["tests.algorithms.sample_graphs"]


@pytest.fixture(scope="session")
def learned_scheme():
    """Weight scheme learned from the bundled dyad corpus."""
    return default_weight_scheme()


@pytest.fixture(scope="session")
def dyad_network():
    return InvertingSpellingNetwork.from_groups(dyad_examples())
