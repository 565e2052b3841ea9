"""Running tempo ramps expressed as ordinary tempo events.

A :class:`TempoSpan` holds a current BPM that moves by ``step`` each time
one of its step patterns is evaluated::

    span = seq_tempo(100, 5, step_add)
    ramp = Sequence(span.set_tempo("0"), span.set_tempo("0"), span.reset("0"))

Played bar by bar, ``ramp`` emits 105, 110, then 100.  The ramp lives in the
span, not in the bar index, so the patterns returned here are stateful.
"""

import typing

import barpatterns.event
import barpatterns.measure
import barpatterns.pattern
import barpatterns.tracker


StepFn = typing.Callable[[float, float], float]


def step_add (current: float, step: float) -> float:
	return current + step


def step_multiply (current: float, step: float) -> float:
	return current * step


class TempoSpan:

	"""
	A running tempo value with a pluggable step function.
	"""

	def __init__ (self, start: float, step: float, modifier: StepFn = step_add) -> None:

		self.start = float(start)
		self.current = float(start)
		self.step = float(step)
		self.modifier = modifier

	def set_tempo (self, position: barpatterns.pattern.PositionLike) -> barpatterns.pattern.Pattern:

		"""Return a pattern that steps the tempo and emits it at ``position``."""

		return _TempoStep(self, barpatterns.measure.Measure.of(position))

	def reset (self, position: barpatterns.pattern.PositionLike) -> barpatterns.pattern.Pattern:

		"""Return a pattern that restores the start tempo and emits it at ``position``."""

		pos = barpatterns.measure.Measure.of(position)

		def fn (bar_index: int, tracker: barpatterns.tracker.Tracker) -> barpatterns.pattern.Timeline:
			self.current = self.start
			return {pos: [barpatterns.event.bpm_event(self.current)]}

		return barpatterns.pattern.PatternFunc(fn)


class _TempoStep (barpatterns.pattern.Pattern):

	def __init__ (self, span: TempoSpan, position: barpatterns.measure.Measure) -> None:
		self.span = span
		self.position = position

	def events (self, bar_index: int, tracker: barpatterns.tracker.Tracker) -> barpatterns.pattern.Timeline:

		span = self.span
		span.current = span.modifier(span.current, span.step)

		return {self.position: [barpatterns.event.bpm_event(span.current)]}


def seq_tempo (start: float, step: float, modifier: StepFn = step_add) -> TempoSpan:
	return TempoSpan(start, step, modifier)
