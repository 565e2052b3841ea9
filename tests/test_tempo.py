import pytest

import barpatterns.combinators
import barpatterns.tempo
import barpatterns.tracker

from barpatterns.measure import M


def _bpm (timeline: dict, position: str = "0") -> float:

	events = timeline[M(position)]
	assert len(events) == 1
	return events[0].bpm


def test_additive_ramp_and_reset (track: barpatterns.tracker.Track) -> None:

	"""Three steps of +5 from 100 give 105, 110, 115; reset gives 100 and restarts."""

	span = barpatterns.tempo.seq_tempo(100, 5, barpatterns.tempo.step_add)
	step = span.set_tempo("0")
	reset = span.reset("0")

	assert [_bpm(step.events(i, track)) for i in range(3)] == [105.0, 110.0, 115.0]
	assert _bpm(reset.events(3, track)) == 100.0
	assert _bpm(step.events(4, track)) == 105.0


def test_multiplicative_ramp (track: barpatterns.tracker.Track) -> None:

	"""step_multiply scales the running tempo each call."""

	span = barpatterns.tempo.TempoSpan(100, 1.5, barpatterns.tempo.step_multiply)
	step = span.set_tempo("1/2")

	assert _bpm(step.events(0, track), "1/2") == pytest.approx(150.0)
	assert _bpm(step.events(0, track), "1/2") == pytest.approx(225.0)
	assert span.current == pytest.approx(225.0)


def test_custom_step_function (track: barpatterns.tracker.Track) -> None:

	"""Any numeric step function is allowed, monotonic or not."""

	span = barpatterns.tempo.TempoSpan(120, 10, lambda current, step: 240 - current + step)
	step = span.set_tempo("0")

	assert [_bpm(step.events(0, track)) for _ in range(3)] == [130.0, 120.0, 130.0]


def test_step_patterns_share_the_span (track: barpatterns.tracker.Track) -> None:

	"""Several step patterns from one span move the same running value."""

	span = barpatterns.tempo.seq_tempo(90, 10)
	ramp = barpatterns.combinators.Sequence(span.set_tempo("0"), span.set_tempo("1/2"), span.reset("0"))

	assert ramp.num_bars() == 3
	assert _bpm(ramp.events(0, track)) == 100.0
	assert _bpm(ramp.events(1, track), "1/2") == 110.0
	assert _bpm(ramp.events(2, track)) == 90.0


def test_tempo_patterns_span_one_bar () -> None:

	"""Step and reset patterns are one-bar patterns."""

	span = barpatterns.tempo.seq_tempo(100, 1)

	assert span.set_tempo("0").num_bars() == 1
	assert span.reset("0").num_bars() == 1


def test_bad_position_fails_early () -> None:

	"""Positions are parsed when the pattern is built."""

	span = barpatterns.tempo.seq_tempo(100, 1)

	with pytest.raises(ValueError):
		span.set_tempo("x")

	with pytest.raises(ValueError):
		span.reset("1/4 +")
