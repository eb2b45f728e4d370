"""
Tests for Timer and timed().
"""

import pytest

from csvanalysis.core.compute import Timer, timed


class TestTimer:

    def test_sections_accumulate(self):
        timer = Timer()
        timer.start()
        with timer.section("solve"):
            pass
        with timer.section("solve"):
            pass
        timer.stop()
        result = timer.result()
        assert set(result) == {"total_seconds", "solve"}
        assert result["solve"] >= 0.0
        assert result["total_seconds"] >= result["solve"]

    def test_section_recorded_on_error(self):
        timer = Timer()
        with pytest.raises(ZeroDivisionError):
            with timer.section("bad"):
                1 / 0
        timer.start()
        timer.stop()
        assert "bad" in timer.result()

    def test_stop_before_start(self):
        with pytest.raises(RuntimeError):
            Timer().stop()

    def test_result_before_stop(self):
        timer = Timer()
        timer.start()
        with pytest.raises(RuntimeError):
            timer.result()


class TestTimed:

    def test_context_manager(self):
        with timed() as timer:
            with timer.section("work"):
                sum(range(100))
        assert "work" in timer.result()
        assert timer.result()["total_seconds"] >= 0.0
