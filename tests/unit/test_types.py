"""Unit tests for generator types."""

import pytest

from omniwave import Completion, SequencerState, WavePoint, WaveType


class TestWaveType:
    """Tests for the WaveType enum."""

    def test_values(self):
        assert [int(t) for t in WaveType] == [1, 2, 3, 4]

    def test_index(self):
        assert WaveType.KELLEY.index == 0
        assert WaveType.HUANG_TI.index == 3

    def test_unknown_value(self):
        with pytest.raises(ValueError):
            WaveType(5)


class TestSequencerState:

    @pytest.mark.parametrize("state, terminal", [
        (SequencerState.READY, False),
        (SequencerState.RUNNING, False),
        (SequencerState.COMPLETED, True),
        (SequencerState.FAILED, True),
        (SequencerState.CANCELLED, True),
    ])
    def test_terminal(self, state, terminal):
        assert state.terminal is terminal


class TestWavePoint:
    """Tests for the WavePoint record."""

    @pytest.fixture
    def point(self):
        return WavePoint(position=1.0, values=(0.5, 0.25, 0.0, 2.0))

    def test_accessors(self, point):
        assert point.kelley == 0.5
        assert point.watkins == 0.25
        assert point.sheliak == 0.0
        assert point.huang_ti == 2.0

    def test_value_by_type(self, point):
        assert point.value(WaveType.WATKINS) == 0.25
        assert point.value(4) == 2.0

    def test_as_tuple(self, point):
        assert point.as_tuple() == (1.0, 0.5, 0.25, 0.0, 2.0)

    def test_format_default_precision(self, point):
        """Sixteen fractional digits, comma separated."""
        assert point.format() == (
            "1.0000000000000000, 0.5000000000000000, 0.2500000000000000, "
            "0.0000000000000000, 2.0000000000000000")

    def test_format_custom_precision(self, point):
        assert point.format(2) == "1.00, 0.50, 0.25, 0.00, 2.00"

    def test_immutable(self, point):
        with pytest.raises(AttributeError):
            point.position = 3.0

    def test_equality(self, point):
        assert point == WavePoint(1.0, (0.5, 0.25, 0.0, 2.0))


class TestCompletion:

    def test_defaults(self):
        completion = Completion(successful=True)

        assert completion.error is None
        assert completion.points == 0
