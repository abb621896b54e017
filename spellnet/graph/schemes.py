"""Composable edge schemes.

An *adjacency scheme* is a boolean predicate on ordered node pairs; a *weight
scheme* maps an ordered node pair to an optional capacity (``None`` meaning
"no edge"). Both are immutable values wrapping pure functions and compose
algebraically:

- ``a + b``: union of adjacency schemes; sum of weight schemes.
- ``a * b``: intersection of adjacency schemes; product of weight schemes;
  ``weight * adjacency`` keeps weights only on accepted edges.
- ``c * a`` for a number ``c``: constant weight ``c`` on the edges ``a`` accepts.
- ``a.pullback(f)``: re-target a scheme over nodes ``N`` to nodes ``M`` through
  ``f: M -> N``. ``f`` sees internal values only; ``SOURCE`` and ``SINK`` map to
  themselves.

Example:
    >>> same = AdjacencyScheme(lambda a, b: a == b, name="same")
    >>> by_parity = same.pullback(lambda n: n % 2)
    >>> by_parity(1, 3), by_parity(1, 2)
    (True, False)
"""

from __future__ import annotations

from numbers import Real
from typing import Callable, Mapping, Optional, Union

from spellnet.graph.nodes import Edge, Node, lift

Predicate = Callable[[Node, Node], bool]
WeightFunction = Callable[[Node, Node], Optional[float]]


class AdjacencyScheme:
    """Boolean predicate over ordered node pairs."""

    __slots__ = ("_predicate", "name")

    def __init__(self, predicate: Predicate, name: Optional[str] = None) -> None:
        self._predicate = predicate
        self.name = name or getattr(predicate, "__name__", "scheme")

    def __call__(self, source: Node, target: Node) -> bool:
        return bool(self._predicate(source, target))

    def __repr__(self) -> str:
        return f"AdjacencyScheme({self.name})"

    def contains(self, edge: Edge) -> bool:
        """Return True if the scheme accepts ``edge``."""
        return self(edge[0], edge[1])

    @classmethod
    def always(cls) -> "AdjacencyScheme":
        return cls(lambda a, b: True, name="always")

    @classmethod
    def never(cls) -> "AdjacencyScheme":
        return cls(lambda a, b: False, name="never")

    def __add__(self, other: "AdjacencyScheme") -> "AdjacencyScheme":
        if not isinstance(other, AdjacencyScheme):
            return NotImplemented
        left, right = self, other
        return AdjacencyScheme(
            lambda a, b: left(a, b) or right(a, b), name=f"({left.name} + {right.name})"
        )

    def __mul__(self, other):
        if isinstance(other, AdjacencyScheme):
            left, right = self, other
            return AdjacencyScheme(
                lambda a, b: left(a, b) and right(a, b),
                name=f"({left.name} * {right.name})",
            )
        if isinstance(other, WeightScheme):
            return other * self
        if isinstance(other, Real):
            return self.__rmul__(other)
        return NotImplemented

    def __rmul__(self, value) -> "WeightScheme":
        if not isinstance(value, Real):
            return NotImplemented
        weight = float(value)
        scheme = self
        return WeightScheme(
            lambda a, b: weight if scheme(a, b) else None,
            name=f"({weight:g} * {scheme.name})",
        )

    def pullback(self, f: Callable, name: Optional[str] = None) -> "AdjacencyScheme":
        """Re-target this scheme through ``f``.

        The returned scheme accepts ``(a, b)`` iff this scheme accepts
        ``(f(a), f(b))``, with terminals left unchanged by ``f``.
        """
        mapped = lift(f)
        scheme = self
        return AdjacencyScheme(
            lambda a, b: scheme(mapped(a), mapped(b)), name=name or scheme.name
        )

    def as_weights(self, weight: float = 1.0) -> "WeightScheme":
        """Return the 0/1 weight scheme of this predicate (``None`` when rejected)."""
        return weight * self


class WeightScheme:
    """Optional capacity over ordered node pairs."""

    __slots__ = ("_weight", "name")

    def __init__(self, weight: WeightFunction, name: Optional[str] = None) -> None:
        self._weight = weight
        self.name = name or getattr(weight, "__name__", "weights")

    def __call__(self, source: Node, target: Node) -> Optional[float]:
        return self._weight(source, target)

    def __repr__(self) -> str:
        return f"WeightScheme({self.name})"

    def weight(self, edge: Edge) -> Optional[float]:
        """Return the capacity for ``edge`` or ``None``."""
        return self(edge[0], edge[1])

    @classmethod
    def constant(cls, value: float) -> "WeightScheme":
        weight = float(value)
        return cls(lambda a, b: weight, name=f"{weight:g}")

    @classmethod
    def from_mapping(
        cls, weights: Mapping[Edge, float], name: str = "table"
    ) -> "WeightScheme":
        """Look capacities up in a table keyed by ``(source, target)``."""
        table = dict(weights)
        return cls(lambda a, b: table.get((a, b)), name=name)

    def __add__(self, other: "WeightScheme") -> "WeightScheme":
        if not isinstance(other, WeightScheme):
            return NotImplemented
        left, right = self, other

        def summed(a: Node, b: Node) -> Optional[float]:
            x, y = left(a, b), right(a, b)
            if x is None:
                return y
            if y is None:
                return x
            return x + y

        return WeightScheme(summed, name=f"({left.name} + {right.name})")

    def __mul__(self, other: Union["WeightScheme", AdjacencyScheme, Real]):
        left = self
        if isinstance(other, AdjacencyScheme):
            accept = other
            return WeightScheme(
                lambda a, b: left(a, b) if accept(a, b) else None,
                name=f"({left.name} * {accept.name})",
            )
        if isinstance(other, WeightScheme):
            right = other

            def product(a: Node, b: Node) -> Optional[float]:
                x = left(a, b)
                if x is None:
                    return None
                y = right(a, b)
                if y is None:
                    return None
                return x * y

            return WeightScheme(product, name=f"({left.name} * {right.name})")
        if isinstance(other, Real):
            factor = float(other)

            def scaled(a: Node, b: Node) -> Optional[float]:
                x = left(a, b)
                return None if x is None else x * factor

            return WeightScheme(scaled, name=f"({factor:g} * {left.name})")
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Real):
            return self * other
        return NotImplemented

    def pullback(self, f: Callable, name: Optional[str] = None) -> "WeightScheme":
        """Re-target this scheme through ``f`` (terminals fixed)."""
        mapped = lift(f)
        scheme = self
        return WeightScheme(
            lambda a, b: scheme(mapped(a), mapped(b)), name=name or scheme.name
        )

    def support(self) -> AdjacencyScheme:
        """Adjacency scheme accepting exactly the edges with a capacity."""
        scheme = self
        return AdjacencyScheme(
            lambda a, b: scheme(a, b) is not None, name=f"support({scheme.name})"
        )
