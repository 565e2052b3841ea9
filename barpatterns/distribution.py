"""Parameter and tempo ramps built from single-event patterns.

A distribution spreads ``n`` values between ``from_`` and ``to`` over the
duration ``dur``, one value every ``dur / n``.  Linear distributions move by a
constant difference, exponential ones by a constant ratio.  In both cases the
first event carries ``from_`` and the ramp stops one step short of ``to``::

    LinearDistribution("cutoff", 0, 10, 5, M("1")).modify_voice("0", synth)
    # cutoff 0, 2, 4, 6, 8 at 0, 1/5, 2/5, 3/5, 4/5

The resulting pattern is a plain :class:`~barpatterns.combinators.Compose`
of :class:`~barpatterns.pattern.EventAt` (or
:class:`~barpatterns.pattern.SetTempo`) patterns.
"""

import typing

import barpatterns.combinators
import barpatterns.event
import barpatterns.measure
import barpatterns.pattern


DurationLike = typing.Union[str, barpatterns.measure.Measure]


def _check_steps (n: int, dur: barpatterns.measure.Measure) -> None:

	if n < 1:
		raise ValueError(f"A distribution needs at least one step, got {n}")

	if dur <= barpatterns.measure.ZERO:
		raise ValueError(f"Distribution duration must be positive, got {dur}")


def linear_distributed_values (from_: float, to: float, n: int, dur: DurationLike) -> typing.Tuple[barpatterns.measure.Measure, float]:

	"""
	Return the spacing between events and the difference between their values.
	"""

	duration = barpatterns.measure.Measure.of(dur)
	_check_steps(n, duration)

	return duration / n, (to - from_) / n


def exponential_distributed_values (from_: float, to: float, n: int, dur: DurationLike) -> typing.Tuple[barpatterns.measure.Measure, typing.List[float]]:

	"""
	Return the spacing between events and the ``n`` geometric values.

	``values[i] == from_ * (to / from_) ** (i / n)``.
	"""

	duration = barpatterns.measure.Measure.of(dur)
	_check_steps(n, duration)

	if from_ == 0 or to == 0 or (from_ < 0) != (to < 0):
		raise ValueError(f"Exponential distribution needs non-zero bounds of the same sign, got {from_} and {to}")

	ratio = to / from_

	return duration / n, [from_ * ratio ** (i / n) for i in range(n)]


class _Distribution:

	def __init__ (self, param: str, from_: float, to: float, n: int, dur: DurationLike) -> None:

		self.param = param
		self.from_ = float(from_)
		self.to = float(to)
		self.steps = n
		self.dur = barpatterns.measure.Measure.of(dur)

		# validates n, dur and (for exponential) the bounds
		self._width, self._values = self._distribute()

	def _distribute (self) -> typing.Tuple[barpatterns.measure.Measure, typing.List[float]]:
		raise NotImplementedError

	def values (self) -> typing.List[float]:
		return list(self._values)

	def _positions (self, position: barpatterns.pattern.PositionLike) -> typing.Iterator[typing.Tuple[barpatterns.measure.Measure, float]]:

		pos = barpatterns.measure.Measure.of(position)

		for value in self._values:
			yield pos, value
			pos = pos + self._width

	def modify_voice (self, position: barpatterns.pattern.PositionLike, voice: barpatterns.event.Voice) -> barpatterns.pattern.Pattern:

		"""
		Return a pattern changing ``param`` on ``voice``, starting at ``position``.
		"""

		return barpatterns.combinators.Compose(*[
			barpatterns.pattern.EventAt(pos, barpatterns.event.change_event(voice, {self.param: value}))
			for pos, value in self._positions(position)
		])

	def _modify_tempo (self, position: barpatterns.pattern.PositionLike) -> barpatterns.pattern.Pattern:

		return barpatterns.combinators.Compose(*[
			barpatterns.pattern.SetTempo(pos, value)
			for pos, value in self._positions(position)
		])


class LinearDistribution (_Distribution):

	"""
	Change ``param`` from ``from_`` towards ``to`` in ``n`` equal steps over ``dur``.
	"""

	def _distribute (self) -> typing.Tuple[barpatterns.measure.Measure, typing.List[float]]:

		width, diff = linear_distributed_values(self.from_, self.to, self.steps, self.dur)

		return width, [self.from_ + i * diff for i in range(self.steps)]


class ExponentialDistribution (_Distribution):

	"""
	Change ``param`` from ``from_`` towards ``to`` in ``n`` steps of equal ratio over ``dur``.
	"""

	def _distribute (self) -> typing.Tuple[barpatterns.measure.Measure, typing.List[float]]:
		return exponential_distributed_values(self.from_, self.to, self.steps, self.dur)


class LinearTempoChange (LinearDistribution):

	def __init__ (self, from_: float, to: float, n: int, dur: DurationLike) -> None:
		super().__init__(barpatterns.event.TEMPO_PARAM, from_, to, n, dur)

	def modify_tempo (self, position: barpatterns.pattern.PositionLike) -> barpatterns.pattern.Pattern:
		return self._modify_tempo(position)


class ExponentialTempoChange (ExponentialDistribution):

	def __init__ (self, from_: float, to: float, n: int, dur: DurationLike) -> None:
		super().__init__(barpatterns.event.TEMPO_PARAM, from_, to, n, dur)

	def modify_tempo (self, position: barpatterns.pattern.PositionLike) -> barpatterns.pattern.Pattern:
		return self._modify_tempo(position)
