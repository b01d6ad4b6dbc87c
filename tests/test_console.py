import argparse
import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from tetris_stack.console import (
    CLEAR_SEQUENCE,
    ConsoleSession,
    describe_result,
    format_pieces,
    main,
    parse_actions,
    parse_choice,
    parse_log_level,
    render_state,
)
from tetris_stack.config import Config
from tetris_stack.generator import PieceGenerator
from tetris_stack.manager import PieceManager
from tetris_stack.types import Action, ActionResult, FailureReason, Piece


def scripted_input(*answers):
    it = iter(answers)

    def _input(prompt: str) -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError

    return _input


class RenderingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.manager = PieceManager(generator=PieceGenerator(kinds="IOTLSZJ"))
        self.manager.initialize()

    def test_format_pieces(self) -> None:
        self.assertEqual(format_pieces(()), "[EMPTY]")
        self.assertEqual(format_pieces((("T", 3), ("I", 4))), "[T 3] [I 4]")

    def test_render_state_lists_queue_and_empty_reserve(self) -> None:
        text = render_state(self.manager)
        self.assertIn("Queue of pieces: [I 0] [O 1] [T 2] [L 3] [S 4]", text)
        self.assertIn("Reserve stack (Top -> Base): [EMPTY]", text)

    def test_describe_result(self) -> None:
        ok = ActionResult.ok(Action.PLAY, Piece("T", 3))
        self.assertEqual(describe_result(ok), "[ACTION] Piece played: [T 3]")
        full = ActionResult.failure(Action.RESERVE, FailureReason.STACK_FULL)
        self.assertEqual(
            describe_result(full), "[WARNING] Reserve stack is full, cannot reserve."
        )
        shallow = ActionResult.failure(
            Action.SWAP_TRIPLE, FailureReason.INSUFFICIENT_STACK_DEPTH, required=3
        )
        self.assertIn("(need 3)", describe_result(shallow))


class ParsingTests(unittest.TestCase):
    def test_parse_choice(self) -> None:
        self.assertEqual(parse_choice(" 2 "), 2)
        self.assertEqual(parse_choice("0"), 0)
        self.assertIsNone(parse_choice("7"))
        self.assertIsNone(parse_choice("abc"))

    def test_parse_actions(self) -> None:
        self.assertEqual(parse_actions("1,2, 4,"), [1, 2, 4])
        with self.assertRaises(argparse.ArgumentTypeError):
            parse_actions("1,0")
        with self.assertRaises(argparse.ArgumentTypeError):
            parse_actions("x")

    def test_parse_log_level(self) -> None:
        self.assertEqual(parse_log_level(" debug "), "DEBUG")
        self.assertEqual(parse_log_level("SUCCESS"), "SUCCESS")
        with self.assertRaises(argparse.ArgumentTypeError):
            parse_log_level("LOUD")


class SessionTests(unittest.TestCase):
    def make_session(self, *answers) -> tuple:
        manager = PieceManager(generator=PieceGenerator(kinds="IOTLSZJ"))
        manager.initialize()
        out = io.StringIO()
        session = ConsoleSession(
            manager,
            out=out,
            input_fn=scripted_input(*answers),
            clear_screen=False,
            pause=False,
        )
        return session, manager, out

    def test_run_applies_choices_until_exit(self) -> None:
        session, manager, out = self.make_session("2", "1", "0")
        session.run()
        text = out.getvalue()
        self.assertIn("[ACTION] Piece reserved: [I 0]", text)
        self.assertIn("[ACTION] Piece played: [O 1]", text)
        self.assertIn("Leaving Tetris Stack", text)
        self.assertEqual(manager.state_snapshot().stack, (("I", 0),))

    def test_run_reports_invalid_option_and_failures(self) -> None:
        session, manager, out = self.make_session("9", "3", "0")
        session.run()
        text = out.getvalue()
        self.assertIn("[ERROR] Invalid option", text)
        self.assertIn("[WARNING] Reserve stack is empty", text)

    def test_run_stops_on_eof(self) -> None:
        session, _, out = self.make_session("1")
        session.run()
        self.assertIn("Leaving Tetris Stack", out.getvalue())

    def test_show_state_clears_through_output_stream(self) -> None:
        session, _, out = self.make_session()
        session.clear_screen = True
        session.show_state()
        self.assertTrue(out.getvalue().startswith(CLEAR_SEQUENCE))
        session, _, out = self.make_session()
        session.show_state()
        self.assertNotIn(CLEAR_SEQUENCE, out.getvalue())

    def test_replay(self) -> None:
        session, manager, _ = self.make_session()
        results = session.replay([2, 2, 2, 5])
        self.assertTrue(all(results))
        self.assertEqual(results[-1].action, Action.SWAP_TRIPLE)
        self.assertEqual(len(manager.stack), 3)


class MainTests(unittest.TestCase):
    def test_main_replays_actions(self) -> None:
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = main(["--seed", "5", "--actions", "2,4,3", "--log-level", "ERROR"])
        self.assertEqual(code, 0)
        text = buf.getvalue()
        self.assertIn("TETRIS STACK", text)
        self.assertIn("[ACTION] Piece reserved", text)
        self.assertIn("[ACTION] Reserved piece used", text)

    def test_main_rejects_unknown_log_level(self) -> None:
        err = io.StringIO()
        with redirect_stderr(err), self.assertRaises(SystemExit) as ctx:
            main(["--log-level", "LOUD", "--actions", "1"])
        self.assertEqual(ctx.exception.code, 2)
        self.assertIn("invalid log level", err.getvalue())

    def test_main_rejects_unknown_log_level_from_environment(self) -> None:
        err = io.StringIO()
        loud = Config(LOG_LEVEL="LOUD")
        with patch("tetris_stack.console.config", loud), redirect_stderr(err):
            with self.assertRaises(SystemExit) as ctx:
                main(["--actions", "1"])
        self.assertEqual(ctx.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
