from __future__ import annotations

import math
import unittest

from lsystem_core.core.actions import MOVE, ActionTable, Pop, Push, Turn
from lsystem_core.core.turtle import LineSegment, PenState, PoseStack, PoseStackUnderflow, TurtleInterpreter


def _table() -> ActionTable:
    return ActionTable({"F": MOVE, "+": Turn(math.pi / 2), "-": Turn(-math.pi / 2), "[": Push(), "]": Pop()})


class TurtleInterpreterTests(unittest.TestCase):
    def test_moves_along_heading_zero(self) -> None:
        segments = TurtleInterpreter().render("FF", 2, 10.0, (5.0, 5.0), _table())
        self.assertEqual(segments, [LineSegment(5.0, 5.0, 15.0, 5.0), LineSegment(15.0, 5.0, 25.0, 5.0)])

    def test_branch_does_not_perturb_main_path(self) -> None:
        replay = TurtleInterpreter().replay("F[+F]F", 6, 1.0, (0.0, 0.0), _table())
        self.assertAlmostEqual(replay.pen.x, 2.0)
        self.assertAlmostEqual(replay.pen.y, 0.0)
        self.assertAlmostEqual(replay.pen.heading, 0.0)
        self.assertEqual(replay.stack_depth, 0)
        self.assertEqual(len(replay.segments), 3)
        branch = replay.segments[1]
        self.assertAlmostEqual(branch.x1, 1.0)
        self.assertAlmostEqual(branch.y1, 1.0)

    def test_pop_on_empty_stack_is_noop(self) -> None:
        interpreter = TurtleInterpreter()
        with_pop = interpreter.replay("]F", 2, 3.0, (1.0, 1.0), _table())
        without_pop = interpreter.replay("F", 1, 3.0, (1.0, 1.0), _table())
        self.assertEqual(with_pop.segments, without_pop.segments)
        self.assertEqual(with_pop.pen, without_pop.pen)

    def test_pop_turn_applies_even_when_stack_empty(self) -> None:
        table = ActionTable({"F": MOVE, "]": Pop(math.pi / 2)})
        replay = TurtleInterpreter().replay("]F", 2, 1.0, (0.0, 0.0), table)
        self.assertAlmostEqual(replay.pen.x, 0.0)
        self.assertAlmostEqual(replay.pen.y, 1.0)

    def test_push_turn_applies_after_saving(self) -> None:
        table = ActionTable({"F": MOVE, "[": Push(math.pi / 2), "]": Pop()})
        replay = TurtleInterpreter().replay("[F]F", 4, 1.0, (0.0, 0.0), table)
        self.assertAlmostEqual(replay.segments[0].y1, 1.0)
        self.assertAlmostEqual(replay.pen.x, 1.0)
        self.assertAlmostEqual(replay.pen.y, 0.0)

    def test_strict_stack_raises_on_underflow(self) -> None:
        with self.assertRaises(PoseStackUnderflow):
            TurtleInterpreter(strict_stack=True).render("F]", 2, 1.0, (0.0, 0.0), _table())

    def test_unbalanced_push_is_allowed(self) -> None:
        replay = TurtleInterpreter(strict_stack=True).replay("[[F", 3, 1.0, (0.0, 0.0), _table())
        self.assertEqual(replay.stack_depth, 2)

    def test_heading_wraps_to_one_turn(self) -> None:
        replay = TurtleInterpreter().replay("-----", 5, 1.0, (0.0, 0.0), _table())
        self.assertGreaterEqual(replay.pen.heading, 0.0)
        self.assertLess(replay.pen.heading, 2.0 * math.pi)
        self.assertAlmostEqual(replay.pen.heading, 1.5 * math.pi)

    def test_upto_limits_prefix_and_clamps(self) -> None:
        interpreter = TurtleInterpreter()
        self.assertEqual(len(interpreter.render("FFFF", 2, 1.0, (0.0, 0.0), _table())), 2)
        self.assertEqual(len(interpreter.render("FFFF", 100, 1.0, (0.0, 0.0), _table())), 4)
        self.assertEqual(interpreter.render("FFFF", 0, 1.0, (0.0, 0.0), _table()), [])
        with self.assertRaises(ValueError):
            interpreter.render("F", -1, 1.0, (0.0, 0.0), _table())

    def test_prefix_segments_are_prefix_of_longer_replay(self) -> None:
        commands = "F[+F[-F]F]-F[+F]F"
        interpreter = TurtleInterpreter()
        previous: list[LineSegment] = []
        for k in range(len(commands) + 1):
            current = interpreter.render(commands, k, 4.0, (10.0, 10.0), _table())
            self.assertEqual(current[: len(previous)], previous)
            previous = current

    def test_unknown_symbols_are_idle(self) -> None:
        segments = TurtleInterpreter().render("AFB", 3, 1.0, (0.0, 0.0), _table())
        self.assertEqual(len(segments), 1)

    def test_step_length_scales_moves(self) -> None:
        segments = TurtleInterpreter(step_length=2.5).render("F", 1, 2.0, (0.0, 0.0), _table())
        self.assertAlmostEqual(segments[0].x1, 5.0)
        with self.assertRaises(ValueError):
            TurtleInterpreter(step_length=0.0)


class PoseStackTests(unittest.TestCase):
    def test_lifo(self) -> None:
        stack = PoseStack()
        stack.push(PenState(1.0, 1.0))
        stack.push(PenState(2.0, 2.0))
        self.assertEqual(stack.pop(), PenState(2.0, 2.0))
        self.assertEqual(stack.pop(), PenState(1.0, 1.0))
        self.assertIsNone(stack.pop())
        self.assertEqual(len(stack), 0)


if __name__ == "__main__":
    unittest.main()
