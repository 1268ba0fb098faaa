from __future__ import annotations

import types
import unittest

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import torch  # noqa: E402

from lsystem_core.platform.matplotlib_presenter import MatplotlibPresenter, PresenterState  # noqa: E402
from lsystem_core.targets.window_target import WindowTarget  # noqa: E402


class MatplotlibPresenterTests(unittest.TestCase):
    def tearDown(self) -> None:
        plt.close("all")

    def test_initialize_present_and_shutdown(self) -> None:
        presenter = MatplotlibPresenter(width=8, height=6, pyplot=plt, pause_s=0.0)
        presenter.initialize()
        self.assertEqual(presenter.state, PresenterState.READY)
        self.assertTrue(presenter.is_active())
        frame = torch.zeros((6, 8, 4), dtype=torch.uint8)
        frame[..., 3] = 255
        presenter.present_rgba(frame, revision=1)
        presenter.pump_events()
        presenter.shutdown()
        self.assertEqual(presenter.state, PresenterState.STOPPED)
        self.assertFalse(presenter.is_active())

    def test_present_requires_ready(self) -> None:
        presenter = MatplotlibPresenter(width=2, height=2, pyplot=plt)
        with self.assertRaises(RuntimeError):
            presenter.present_rgba(torch.zeros((2, 2, 4), dtype=torch.uint8), revision=1)

    def test_present_validates_frame(self) -> None:
        presenter = MatplotlibPresenter(width=2, height=2, pyplot=plt, pause_s=0.0)
        presenter.initialize()
        with self.assertRaises(ValueError):
            presenter.present_rgba(torch.zeros((3, 2, 4), dtype=torch.uint8), revision=1)
        with self.assertRaises(ValueError):
            presenter.present_rgba(torch.zeros((2, 2, 4), dtype=torch.float32), revision=1)

    def test_escape_key_requests_cancel(self) -> None:
        presenter = MatplotlibPresenter(width=4, height=4, pyplot=plt, pause_s=0.0)
        target = WindowTarget(presenter=presenter)
        target.start()
        presenter._on_key(types.SimpleNamespace(key="a"))
        self.assertFalse(target.should_close())
        presenter._on_key(types.SimpleNamespace(key="escape"))
        self.assertTrue(target.poll_cancel_signal())
        self.assertTrue(target.should_close())
        target.stop()

    def test_window_close_marks_inactive(self) -> None:
        presenter = MatplotlibPresenter(width=4, height=4, pyplot=plt, pause_s=0.0)
        presenter.initialize()
        presenter._on_close(None)
        self.assertFalse(presenter.is_active())
        presenter.shutdown()

    def test_initialize_failure_is_sticky(self) -> None:
        broken = types.SimpleNamespace(ion=lambda: None, subplots=_raise_display_error)
        presenter = MatplotlibPresenter(width=4, height=4, pyplot=broken)
        with self.assertRaises(RuntimeError):
            presenter.initialize()
        self.assertEqual(presenter.state, PresenterState.FAILED)
        self.assertIsInstance(presenter.last_error, OSError)
        with self.assertRaises(RuntimeError):
            presenter.initialize()

    def test_rejects_invalid_dimensions(self) -> None:
        with self.assertRaises(ValueError):
            MatplotlibPresenter(width=0, height=4)


def _raise_display_error(*_args, **_kwargs):
    raise OSError("no display")


if __name__ == "__main__":
    unittest.main()
