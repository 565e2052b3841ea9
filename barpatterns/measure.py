"""Exact bar positions and durations.

A :class:`Measure` is a rational number of whole notes.  The same type is
used for durations ("how long") and for positions ("how far from the start of
the bar"), so a 4/4 bar is ``Measure(1)`` and the third beat of it is
``Measure("1/2")``.

Literals are parsed with :func:`parse` (or the short alias :func:`M`)::

    M("3/4")          # three quarter notes
    M("1/4 + 1/16")   # a quarter plus a sixteenth
    M("1 - 1/8")      # an eighth before the end of a 4/4 bar
    M("0.375")        # decimals are exact too

Malformed literals raise :class:`MeasureError`.
"""

import dataclasses
import fractions
import re
import typing


Number = typing.Union[int, float, fractions.Fraction]

_TOKEN = re.compile(r"\s*(?:(\d+/\d+|\d+(?:\.\d+)?)|([+-]))")


class MeasureError (ValueError):
	pass


def _to_fraction (value: Number) -> fractions.Fraction:

	"""
	Convert a plain number to an exact fraction.

	Floats go through their shortest string form so that ``0.1`` becomes
	``1/10`` rather than the binary approximation.
	"""

	if isinstance(value, bool):
		raise TypeError("bool is not a valid measure value")

	if isinstance(value, float):
		return fractions.Fraction(str(value))

	if isinstance(value, (int, fractions.Fraction)):
		return fractions.Fraction(value)

	raise TypeError(f"cannot use {type(value).__name__} as a measure value")


def _tokenize (text: str) -> typing.List[str]:

	"""
	Split a literal into number and operator tokens.
	"""

	tokens: typing.List[str] = []
	pos = 0

	while pos < len(text):

		if not text[pos:].strip():
			break

		match = _TOKEN.match(text, pos)

		if match is None:
			raise MeasureError(f"Unexpected character {text[pos:].strip()[0]!r} in measure literal {text!r}")

		tokens.append(match.group(1) or match.group(2))
		pos = match.end()

	return tokens


def _parse_term (token: str, text: str) -> fractions.Fraction:

	try:
		return fractions.Fraction(token)
	except ZeroDivisionError:
		raise MeasureError(f"Zero denominator in measure literal {text!r}") from None


def _parse_fraction (text: str) -> fractions.Fraction:

	"""
	Parse ``[sign] term (op term)*`` into a single fraction.
	"""

	if not isinstance(text, str):
		raise MeasureError(f"Measure literal must be a string, got {type(text).__name__}")

	tokens = _tokenize(text)

	if not tokens:
		raise MeasureError("Empty measure literal")

	sign = 1
	i = 0

	if tokens[0] in ("+", "-"):
		sign = -1 if tokens[0] == "-" else 1
		i = 1

	total = fractions.Fraction(0)

	while True:

		if i >= len(tokens) or tokens[i] in ("+", "-"):
			raise MeasureError(f"Expected a number in measure literal {text!r}")

		total += sign * _parse_term(tokens[i], text)
		i += 1

		if i == len(tokens):
			return total

		if tokens[i] not in ("+", "-"):
			raise MeasureError(f"Expected '+' or '-' before {tokens[i]!r} in measure literal {text!r}")

		sign = -1 if tokens[i] == "-" else 1
		i += 1


@dataclasses.dataclass(frozen=True, order=True, init=False)
class Measure:

	"""
	An exact rational position or duration, in whole notes.

	Measures are immutable and hashable, so they serve as timeline keys.
	Arithmetic with other measures (``+``, ``-``) and with plain numbers
	(``*``, ``/``) always yields a new ``Measure``.
	"""

	value: fractions.Fraction

	def __init__ (self, value: typing.Union[str, Number, "Measure"] = 0) -> None:

		"""
		Build a measure from a number, a literal string or another measure.
		"""

		if isinstance(value, Measure):
			frac = value.value

		elif isinstance(value, str):
			frac = _parse_fraction(value)

		else:
			frac = _to_fraction(value)

		object.__setattr__(self, "value", frac)

	@classmethod
	def of (cls, value: typing.Union[str, Number, "Measure"]) -> "Measure":

		"""Return ``value`` unchanged if it is already a measure, otherwise convert it."""

		if isinstance(value, Measure):
			return value

		return cls(value)

	def is_zero (self) -> bool:
		return self.value == 0

	def __bool__ (self) -> bool:
		return self.value != 0

	def __add__ (self, other: "Measure") -> "Measure":

		if not isinstance(other, Measure):
			return NotImplemented

		return Measure(self.value + other.value)

	def __sub__ (self, other: "Measure") -> "Measure":

		if not isinstance(other, Measure):
			return NotImplemented

		return Measure(self.value - other.value)

	def __neg__ (self) -> "Measure":
		return Measure(-self.value)

	def __mul__ (self, factor: Number) -> "Measure":

		if isinstance(factor, Measure):
			return NotImplemented

		return Measure(self.value * _to_fraction(factor))

	__rmul__ = __mul__

	def __truediv__ (self, divisor: typing.Union[Number, "Measure"]) -> typing.Any:

		"""
		Divide by a number (giving a measure) or by a measure (giving a ratio).
		"""

		if isinstance(divisor, Measure):
			return self.value / divisor.value

		frac = _to_fraction(divisor)

		if frac == 0:
			raise ZeroDivisionError("Cannot divide a measure by zero")

		return Measure(self.value / frac)

	def __float__ (self) -> float:
		return float(self.value)

	def __str__ (self) -> str:
		return str(self.value)

	def __repr__ (self) -> str:
		return f"Measure({str(self.value)!r})"

	def scale (self, *ratios: Number) -> typing.List["Measure"]:

		"""
		Split this measure proportionally to ``ratios``.

		Each result is ``self * ratio / sum(ratios)``, so the results add up to
		this measure.  ``M("1").scale(1, 1, 2)`` gives quarter, quarter, half.
		"""

		if not ratios:
			raise ValueError("At least one ratio is required to scale a measure")

		fracs = [_to_fraction(r) for r in ratios]
		total = sum(fracs, fractions.Fraction(0))

		if total == 0:
			raise ValueError("Ratios must not sum to zero")

		return [Measure(self.value * r / total) for r in fracs]


ZERO = Measure(0)
BAR = Measure(1)


def parse (text: str) -> Measure:

	"""
	Parse a measure literal such as ``"3/8"`` or ``"1/4 + 1/16"``.

	Raises :class:`MeasureError` on malformed input.
	"""

	return Measure(_parse_fraction(text))


M = parse
