from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
import logging
from typing import Iterable, Mapping, TypeAlias

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_SYMBOLS = 4_000_000
DEFAULT_MAX_GENERATIONS = 64

ProductionSet: TypeAlias = dict[str, str]


class SequenceTooLarge(RuntimeError):
    """Raised before expansion when the projected sequence would exceed the configured ceiling."""

    def __init__(self, projected_length: int | None, limit: int, generation: int) -> None:
        if projected_length is None:
            message = f"generation count {generation} exceeds the cap of {limit}"
        else:
            message = (
                f"expansion would produce more than {limit} symbols "
                f"(projected {projected_length} at generation {generation})"
            )
        super().__init__(message)
        self.projected_length = projected_length
        self.limit = limit
        self.generation = generation


@dataclass(frozen=True)
class Rule:
    symbol: str
    replacement: str

    def __post_init__(self) -> None:
        if not isinstance(self.symbol, str) or len(self.symbol) != 1:
            raise ValueError(f"rule symbol must be a single character, got {self.symbol!r}")
        if not isinstance(self.replacement, str):
            raise ValueError(f"rule replacement for {self.symbol!r} must be a string")


def build_production_set(rules: Iterable[Rule] | Mapping[str, str]) -> ProductionSet:
    if isinstance(rules, Mapping):
        rules = [Rule(symbol=symbol, replacement=replacement) for symbol, replacement in rules.items()]
    productions: ProductionSet = {}
    for rule in rules:
        if rule.symbol in productions:
            raise ValueError(f"duplicate production for symbol {rule.symbol!r}")
        productions[rule.symbol] = rule.replacement
    return productions


def expand_once(sequence: str, productions: Mapping[str, str]) -> str:
    return "".join(productions.get(ch, ch) for ch in sequence)


def projected_length(
    axiom: str,
    productions: Mapping[str, str],
    generations: int,
    *,
    stop_above: int | None = None,
) -> tuple[int, int]:
    """Length of the sequence after `generations` passes, computed from symbol counts.

    Returns (length, generation). When `stop_above` is given the walk stops at the
    first generation whose length exceeds it.
    """
    _validate_generations(generations)
    growth = {symbol: Counter(replacement) for symbol, replacement in productions.items()}
    counts = Counter(axiom)
    total = len(axiom)
    for generation in range(1, generations + 1):
        nxt: Counter[str] = Counter()
        for symbol, count in counts.items():
            produced = growth.get(symbol)
            if produced is None:
                nxt[symbol] += count
                continue
            for out_symbol, out_count in produced.items():
                nxt[out_symbol] += count * out_count
        counts = nxt
        total = sum(counts.values())
        if stop_above is not None and total > stop_above:
            return total, generation
    return total, generations


class GrammarEngine:
    """Iterated context-free rewriting with a symbol ceiling and a generation cap."""

    def __init__(
        self,
        max_symbols: int = DEFAULT_MAX_SYMBOLS,
        max_generations: int = DEFAULT_MAX_GENERATIONS,
    ) -> None:
        if max_symbols <= 0:
            raise ValueError("max_symbols must be > 0")
        if max_generations < 0:
            raise ValueError("max_generations must be >= 0")
        self.max_symbols = max_symbols
        self.max_generations = max_generations

    def check(self, axiom: str, productions: Mapping[str, str], generations: int) -> int:
        """Validate the request and return the projected final length without expanding."""
        _validate_generations(generations)
        if generations > self.max_generations:
            raise SequenceTooLarge(projected_length=None, limit=self.max_generations, generation=generations)
        length, generation = projected_length(axiom, productions, generations, stop_above=self.max_symbols)
        if length > self.max_symbols:
            raise SequenceTooLarge(projected_length=length, limit=self.max_symbols, generation=generation)
        return length

    def expand(self, axiom: str, rules: Iterable[Rule] | Mapping[str, str], generations: int) -> str:
        productions = build_production_set(rules)
        self.check(axiom, productions, generations)
        sequence = axiom
        for _ in range(generations):
            sequence = expand_once(sequence, productions)
        LOGGER.debug("expanded %d generations to %d symbols", generations, len(sequence))
        return sequence


def expand(
    axiom: str,
    rules: Iterable[Rule] | Mapping[str, str],
    generations: int,
    *,
    max_symbols: int = DEFAULT_MAX_SYMBOLS,
    max_generations: int = DEFAULT_MAX_GENERATIONS,
) -> str:
    return GrammarEngine(max_symbols=max_symbols, max_generations=max_generations).expand(axiom, rules, generations)


def _validate_generations(generations: int) -> None:
    if isinstance(generations, bool) or not isinstance(generations, int):
        raise ValueError("generations must be an integer")
    if generations < 0:
        raise ValueError("generations must be >= 0")
