from unittest import mock

import pytest

from stripedsw.timing import Timer


def test_elapsed_measures_from_start():
    with mock.patch("stripedsw.timing.perf_counter", side_effect=[10.0, 12.5]):
        timer = Timer()
        timer.start()
        assert timer.elapsed() == pytest.approx(2.5)


def test_elapsed_keeps_same_start():
    with mock.patch("stripedsw.timing.perf_counter", side_effect=[1.0, 2.0, 4.0]):
        timer = Timer()
        timer.start()
        first = timer.elapsed()
        second = timer.elapsed()
    assert second > first
    assert second - first == pytest.approx(2.0)


def test_restart_resets_origin():
    with mock.patch("stripedsw.timing.perf_counter", side_effect=[0.0, 5.0, 5.5]):
        timer = Timer()
        timer.start()
        timer.start()
        assert timer.elapsed() == pytest.approx(0.5)


def test_real_clock_is_nonnegative():
    timer = Timer()
    timer.start()
    assert timer.elapsed() >= 0.0


def test_elapsed_before_start_raises():
    with pytest.raises(RuntimeError):
        Timer().elapsed()