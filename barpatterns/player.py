"""Reference bar-by-bar driver.

:func:`play` evaluates a pattern for bar 0, 1, 2, ... and yields each bar's
events sorted by position, ready for an output backend to dispatch.  It does
no timing of its own; turning positions into wall-clock time is the job of
whatever consumes the bars.
"""

import dataclasses
import logging
import typing

import barpatterns.event
import barpatterns.measure
import barpatterns.pattern
import barpatterns.tracker


logger = logging.getLogger(__name__)


@dataclasses.dataclass
class Bar:

	"""
	The resolved events of one played bar.

	Attributes:
		index: Position of this bar in playback order (0-indexed).
		pattern_bar: The bar index that was passed to the pattern.  Differs
			from ``index`` when looping.
		length: Bar length reported by the tracker for this bar.
		events: ``(position, event)`` pairs sorted by position.  Events sharing
			a position keep the order the pattern gave them.
	"""

	index: int
	pattern_bar: int
	length: barpatterns.measure.Measure
	events: typing.List[typing.Tuple[barpatterns.measure.Measure, barpatterns.event.Event]] = dataclasses.field(default_factory=list)

	@property
	def ended (self) -> bool:

		"""True if this bar holds an end marker."""

		return any(e.kind is barpatterns.event.EventKind.END for _, e in self.events)


def flatten (timeline: barpatterns.pattern.Timeline) -> typing.List[typing.Tuple[barpatterns.measure.Measure, barpatterns.event.Event]]:

	"""Turn a timeline into ``(position, event)`` pairs sorted by position."""

	pairs: typing.List[typing.Tuple[barpatterns.measure.Measure, barpatterns.event.Event]] = []

	for position in sorted(timeline):
		for event in timeline[position]:
			pairs.append((position, event))

	return pairs


def _truncate_at_end (pairs: typing.List[typing.Tuple[barpatterns.measure.Measure, barpatterns.event.Event]]) -> typing.List[typing.Tuple[barpatterns.measure.Measure, barpatterns.event.Event]]:

	"""Drop everything after the first end marker, keeping the marker itself."""

	for i, (_, event) in enumerate(pairs):
		if event.kind is barpatterns.event.EventKind.END:
			return pairs[:i + 1]

	return pairs


def play (
	pattern: barpatterns.pattern.Pattern,
	tracker: typing.Optional[barpatterns.tracker.Tracker] = None,
	bars: typing.Optional[int] = None,
	loop: bool = False
) -> typing.Iterator[Bar]:

	"""
	Evaluate ``pattern`` bar by bar.

	Parameters:
		pattern: The top-level pattern.
		tracker: Timing context; defaults to a 4/4 :class:`~barpatterns.tracker.Track`.
			A ``Track`` gets its scheduled bar changes applied as playback
			reaches them.
		bars: Maximum number of bars to play.  Without ``loop`` playback also
			stops at ``pattern.num_bars()``.
		loop: Repeat the pattern (bar indices wrap modulo ``num_bars()``).
			Requires ``bars``.

	Playback stops after any bar containing an end marker.
	"""

	if loop and bars is None:
		raise ValueError("Looping playback needs a bar limit")

	if bars is not None and bars < 0:
		raise ValueError("Bar limit cannot be negative")

	if tracker is None:
		tracker = barpatterns.tracker.Track()

	span = pattern.num_bars()
	total = bars if loop else (span if bars is None else min(bars, span))

	logger.info(f"Playing {total} bar{'s' if total != 1 else ''} (pattern spans {span}, loop={loop})")

	for index in range(total):

		if isinstance(tracker, barpatterns.tracker.Track):
			tracker.advance_to(index)

		pattern_bar = index % span if loop else index
		length = tracker.current_bar()
		pairs = _truncate_at_end(flatten(pattern.events(pattern_bar, tracker)))
		bar = Bar(index=index, pattern_bar=pattern_bar, length=length, events=pairs)

		logger.debug(f"Bar {index}: {len(pairs)} events over {length}")

		yield bar

		if bar.ended:
			logger.info(f"End marker reached in bar {index}")
			return

	logger.info("Playback finished")
