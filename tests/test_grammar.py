from __future__ import annotations

import unittest

from lsystem_core.core.grammar import (
    GrammarEngine,
    Rule,
    SequenceTooLarge,
    build_production_set,
    expand,
    expand_once,
    projected_length,
)

PLANT_RULES = {"X": "F+[[X]-X]-F[-FX]+X", "F": "FF"}


class GrammarEngineTests(unittest.TestCase):
    def test_zero_generations_returns_axiom(self) -> None:
        self.assertEqual(expand("+++X", PLANT_RULES, 0), "+++X")
        self.assertEqual(expand("AB", {}, 0), "AB")

    def test_single_substitution(self) -> None:
        self.assertEqual(expand("X", {"X": "F"}, 1), "F")

    def test_absent_symbols_pass_through(self) -> None:
        self.assertEqual(expand("+X-", {"X": "F"}, 1), "+F-")

    def test_passes_are_flat_not_recursive(self) -> None:
        # A -> AB must not re-expand the A it just produced within the same pass.
        self.assertEqual(expand("A", {"A": "AB", "B": "A"}, 1), "AB")
        self.assertEqual(expand("A", {"A": "AB", "B": "A"}, 2), "ABA")
        self.assertEqual(expand("A", {"A": "AB", "B": "A"}, 3), "ABAAB")

    def test_plant_second_generation(self) -> None:
        once = expand("X", PLANT_RULES, 1)
        self.assertEqual(once, "F+[[X]-X]-F[-FX]+X")
        self.assertEqual(expand("X", PLANT_RULES, 2), expand_once(once, PLANT_RULES))

    def test_expand_is_deterministic(self) -> None:
        first = expand("+++X", PLANT_RULES, 4)
        second = expand("+++X", PLANT_RULES, 4)
        self.assertEqual(first, second)

    def test_accepts_rule_objects(self) -> None:
        rules = [Rule("F", "F+F-F-F+F")]
        self.assertEqual(expand("F", rules, 1), "F+F-F-F+F")

    def test_rule_symbol_must_be_single_character(self) -> None:
        with self.assertRaises(ValueError):
            Rule("FF", "F")
        with self.assertRaises(ValueError):
            Rule("", "F")

    def test_duplicate_rules_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            build_production_set([Rule("F", "FF"), Rule("F", "F")])

    def test_empty_replacement_is_not_validated(self) -> None:
        self.assertEqual(expand("AXA", {"X": ""}, 1), "AA")

    def test_negative_generations_rejected(self) -> None:
        with self.assertRaises(ValueError):
            expand("F", {"F": "FF"}, -1)
        with self.assertRaises(ValueError):
            expand("F", {"F": "FF"}, True)

    def test_projected_length_matches_expansion(self) -> None:
        for generations in range(6):
            length, generation = projected_length("+++X", PLANT_RULES, generations)
            self.assertEqual(length, len(expand("+++X", PLANT_RULES, generations)))
            self.assertEqual(generation, generations)

    def test_cap_enforced_before_allocation(self) -> None:
        engine = GrammarEngine(max_symbols=1000)
        with self.assertRaises(SequenceTooLarge) as ctx:
            engine.expand("F", {"F": "FF"}, 10)
        err = ctx.exception
        self.assertEqual(err.limit, 1000)
        self.assertEqual(err.generation, 10)
        self.assertEqual(err.projected_length, 1024)

    def test_cap_allows_exact_limit(self) -> None:
        engine = GrammarEngine(max_symbols=1024)
        self.assertEqual(len(engine.expand("F", {"F": "FF"}, 10)), 1024)

    def test_cap_rejects_huge_requests_without_building_them(self) -> None:
        with self.assertRaises(SequenceTooLarge) as ctx:
            expand("F", {"F": "FFFF"}, 60, max_symbols=10_000)
        self.assertEqual(ctx.exception.generation, 7)

    def test_generation_cap(self) -> None:
        engine = GrammarEngine(max_generations=3)
        with self.assertRaises(SequenceTooLarge):
            engine.expand("F", {"F": "F"}, 4)
        self.assertEqual(engine.expand("F", {"F": "F"}, 3), "F")

    def test_engine_rejects_invalid_limits(self) -> None:
        with self.assertRaises(ValueError):
            GrammarEngine(max_symbols=0)
        with self.assertRaises(ValueError):
            GrammarEngine(max_generations=-1)


if __name__ == "__main__":
    unittest.main()
