"""The pattern contract and the one-shot primitive patterns.

A pattern answers one question: which events fire in bar ``bar_index``, and
where?  The answer is a :data:`Timeline`, a dict from bar position to the
ordered list of events at that position.  ``num_bars()`` tells combinators
how many bars the pattern spans before it repeats or hands over.

Some patterns keep state between calls (random choice, gates, tempo ramps),
so calling ``events()`` twice with the same bar index is not guaranteed to
give the same answer.
"""

import typing

import barpatterns.event
import barpatterns.measure
import barpatterns.tracker


Timeline = typing.Dict[barpatterns.measure.Measure, typing.List[barpatterns.event.Event]]

PatternFn = typing.Callable[[int, barpatterns.tracker.Tracker], Timeline]

PositionLike = typing.Union[str, barpatterns.measure.Measure]


class Pattern:

	"""
	Base class for everything that produces events bar by bar.
	"""

	def events (self, bar_index: int, tracker: barpatterns.tracker.Tracker) -> Timeline:
		raise NotImplementedError

	def num_bars (self) -> int:
		return 1


def clone_events (events: typing.Iterable[barpatterns.event.Event]) -> typing.List[barpatterns.event.Event]:

	"""Clone every template event for placement on a timeline."""

	return [e.clone() for e in events]


class PatternFunc (Pattern):

	"""
	Wrap a plain ``fn(bar_index, tracker) -> Timeline`` as a pattern.
	"""

	def __init__ (self, fn: PatternFn, num_bars: int = 1) -> None:

		if num_bars < 1:
			raise ValueError("num_bars must be at least 1")

		self.fn = fn
		self._num_bars = num_bars

	def events (self, bar_index: int, tracker: barpatterns.tracker.Tracker) -> Timeline:
		return self.fn(bar_index, tracker)

	def num_bars (self) -> int:
		return self._num_bars


class EventAt (Pattern):

	"""
	Emit a clone of one template event at a fixed position in every bar.
	"""

	def __init__ (self, position: PositionLike, template: barpatterns.event.Event) -> None:

		self.position = barpatterns.measure.Measure.of(position)
		self.template = template

	def events (self, bar_index: int, tracker: barpatterns.tracker.Tracker) -> Timeline:
		return {self.position: [self.template.clone()]}


class End (EventAt):

	"""Mark the end of the piece at ``position``."""

	def __init__ (self, position: PositionLike) -> None:
		super().__init__(position, barpatterns.event.end_event())


class Start (EventAt):

	"""Mark the start of the piece at ``position``."""

	def __init__ (self, position: PositionLike) -> None:
		super().__init__(position, barpatterns.event.start_event())


class SetTempo (EventAt):

	"""Change the tempo to ``bpm`` at ``position``."""

	def __init__ (self, position: PositionLike, bpm: float) -> None:
		super().__init__(position, barpatterns.event.bpm_event(bpm))
