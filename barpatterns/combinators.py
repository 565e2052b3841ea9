"""Patterns built from other patterns.

- :class:`Sequence` plays its children one after another in bar space.
- :class:`Compose` (alias :class:`Mix`) layers its children in the same bars.
- :class:`RandomPattern` picks one of several equally long children per call.
- :class:`SeqSwitch` gates a child with a repeating on/off mask.

A child that carries state (a gate, a random choice, a tempo ramp) should be
given to one combinator only, otherwise its cursor advances for both.
"""

import logging
import random
import typing

import barpatterns.pattern
import barpatterns.tracker


logger = logging.getLogger(__name__)


class Sequence (barpatterns.pattern.Pattern):

	"""
	Chain patterns end to end: bar ``i`` is answered by exactly one child.
	"""

	def __init__ (self, *patterns: barpatterns.pattern.Pattern) -> None:

		if not patterns:
			raise ValueError("Sequence requires at least one pattern")

		self.patterns: typing.List[barpatterns.pattern.Pattern] = list(patterns)

	def num_bars (self) -> int:
		return sum(p.num_bars() for p in self.patterns)

	def events (self, bar_index: int, tracker: barpatterns.tracker.Tracker) -> barpatterns.pattern.Timeline:

		offset = 0

		for p in self.patterns:
			following = offset + p.num_bars()
			if bar_index < following:
				return p.events(bar_index - offset, tracker)
			offset = following

		return {}


class Compose (barpatterns.pattern.Pattern):

	"""
	Layer patterns on top of each other.

	Events from different layers landing on the same position are appended in
	layer order, never replaced.  ``None`` layers are ignored, which makes it
	easy to switch a layer off in place.
	"""

	def __init__ (self, *patterns: typing.Optional[barpatterns.pattern.Pattern]) -> None:
		self.patterns: typing.List[typing.Optional[barpatterns.pattern.Pattern]] = list(patterns)

	def num_bars (self) -> int:

		longest = 1

		for p in self.patterns:
			if p is not None:
				longest = max(longest, p.num_bars())

		return longest

	def events (self, bar_index: int, tracker: barpatterns.tracker.Tracker) -> barpatterns.pattern.Timeline:

		res: barpatterns.pattern.Timeline = {}

		for p in self.patterns:

			if p is None:
				continue

			for position, events in p.events(bar_index, tracker).items():
				res.setdefault(position, []).extend(events)

		return res


Mix = Compose


class RandomPattern (barpatterns.pattern.Pattern):

	"""
	Forward each call to one child chosen uniformly at random.

	All children must span the same number of bars, so the choice never
	changes the shape of an enclosing sequence.  Pass a seeded
	``random.Random`` as ``rng`` for repeatable choices.
	"""

	def __init__ (self, *patterns: barpatterns.pattern.Pattern, rng: typing.Optional[random.Random] = None) -> None:

		if not patterns:
			raise ValueError("RandomPattern requires at least one pattern")

		bars = patterns[0].num_bars()

		for i, p in enumerate(patterns[1:], start=1):
			if p.num_bars() != bars:
				raise ValueError(f"Pattern {i} spans {p.num_bars()} bars, pattern 0 spans {bars}")

		self.patterns: typing.List[barpatterns.pattern.Pattern] = list(patterns)
		self._bars = bars
		self.rng: random.Random = rng or random.Random()

	def num_bars (self) -> int:
		return self._bars

	def events (self, bar_index: int, tracker: barpatterns.tracker.Tracker) -> barpatterns.pattern.Timeline:

		index = self.rng.randrange(len(self.patterns))
		logger.debug(f"RandomPattern chose branch {index} of {len(self.patterns)} for bar {bar_index}")

		return self.patterns[index].events(bar_index, tracker)


class SeqSwitch (barpatterns.pattern.Pattern):

	"""
	Play or mute a pattern following a repeating boolean mask.

	Every call reads the mask at the cursor and then moves the cursor on by
	one, whether the gate was open or not.  This object is stateful: calling
	:meth:`events` twice for the same bar gives the next mask step, not the
	same answer.

	Example:
		```python
		# play the fill on every third bar only
		SeqSwitch(fill, False, False, True)
		```
	"""

	def __init__ (self, pattern: typing.Optional[barpatterns.pattern.Pattern], *mask: bool) -> None:

		if not mask:
			raise ValueError("SeqSwitch requires at least one mask value")

		self.pattern = pattern
		self.mask: typing.List[bool] = [bool(m) for m in mask]
		self._pos = 0

	@property
	def position (self) -> int:

		"""Index of the mask value the next call will read."""

		return self._pos

	def reset (self) -> None:
		self._pos = 0

	def num_bars (self) -> int:

		if self.pattern is None:
			return 1

		return self.pattern.num_bars()

	def events (self, bar_index: int, tracker: barpatterns.tracker.Tracker) -> barpatterns.pattern.Timeline:

		if self.pattern is None:
			return {}

		res: barpatterns.pattern.Timeline = {}

		if self.mask[self._pos]:
			res = self.pattern.events(bar_index, tracker)

		self._pos = (self._pos + 1) % len(self.mask)

		return res


BooleanGatedSequence = SeqSwitch
