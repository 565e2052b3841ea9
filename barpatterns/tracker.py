import typing

import barpatterns.measure


@typing.runtime_checkable
class Tracker (typing.Protocol):

	"""
	Ambient timing context handed to patterns on every evaluation.

	Patterns only read from a tracker and must not keep the value between
	calls, because the bar length may change from one bar to the next.
	"""

	def current_bar (self) -> barpatterns.measure.Measure:

		"""
		Return the duration of the bar being evaluated.
		"""

		...


class Track:

	"""
	A minimal tracker holding the current bar length.

	``bar_changes`` maps bar indices to new bar lengths; the player applies
	them through :meth:`advance_to` as it reaches each bar, so a pattern can be
	played through meter changes.
	"""

	def __init__ (
		self,
		bar: typing.Union[str, barpatterns.measure.Measure] = "1",
		bar_changes: typing.Optional[typing.Dict[int, typing.Union[str, barpatterns.measure.Measure]]] = None
	) -> None:

		self._bar = self._validate(barpatterns.measure.Measure.of(bar))
		self.bar_changes: typing.Dict[int, barpatterns.measure.Measure] = {}

		for index, length in (bar_changes or {}).items():
			self.bar_changes[index] = self._validate(barpatterns.measure.Measure.of(length))

	@staticmethod
	def _validate (bar: barpatterns.measure.Measure) -> barpatterns.measure.Measure:

		if bar <= barpatterns.measure.ZERO:
			raise ValueError(f"Bar length must be positive, got {bar}")

		return bar

	def current_bar (self) -> barpatterns.measure.Measure:
		return self._bar

	def set_bar (self, bar: typing.Union[str, barpatterns.measure.Measure]) -> None:
		self._bar = self._validate(barpatterns.measure.Measure.of(bar))

	def advance_to (self, bar_index: int) -> None:

		"""Apply the bar change scheduled for ``bar_index``, if any."""

		if bar_index in self.bar_changes:
			self._bar = self.bar_changes[bar_index]
