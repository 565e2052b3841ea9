import fractions

import pytest

import barpatterns.measure

from barpatterns.measure import M, Measure


def test_parse_simple_fraction () -> None:

	"""A plain fraction parses to the exact rational value."""

	assert M("3/4").value == fractions.Fraction(3, 4)


def test_parse_integer_and_decimal () -> None:

	"""Integers and decimals are exact too."""

	assert M("2").value == 2
	assert M("0.375").value == fractions.Fraction(3, 8)


def test_parse_additive_combination () -> None:

	"""Terms joined with + and - are summed."""

	assert M("1/4 + 1/8") == M("3/8")
	assert M("1 - 1/16") == M("15/16")
	assert M("1/2+1/4-1/8") == M("5/8")


def test_parse_leading_sign () -> None:

	"""A leading minus negates the first term only."""

	assert M("-1/8") == -M("1/8")
	assert M("-1/8 + 1/4") == M("1/8")


@pytest.mark.parametrize("text", ["", "   ", "abc", "1/", "1/4 +", "+", "1 2", "1/4 * 2", "3/0", "1.5/2"])
def test_parse_rejects_malformed_literals (text: str) -> None:

	"""Malformed literals raise MeasureError instead of defaulting."""

	with pytest.raises(barpatterns.measure.MeasureError):
		M(text)


def test_measure_error_is_value_error () -> None:

	"""Parse failures can be caught as ValueError."""

	with pytest.raises(ValueError):
		Measure("nope")


def test_arithmetic_is_closed () -> None:

	"""Adding, subtracting, negating and scaling give measures back."""

	a = M("1/4")
	b = M("1/8")

	assert isinstance(a + b, Measure)
	assert a + b == M("3/8")
	assert a - b == M("1/8")
	assert -a == M("-1/4")
	assert a * 3 == M("3/4")
	assert 2 * a == M("1/2")
	assert M("1") / 5 == M("1/5")


def test_division_by_measure_gives_ratio () -> None:

	"""Dividing two measures yields a plain fraction."""

	assert M("1") / M("1/4") == 4


def test_division_by_zero () -> None:

	"""Dividing by zero is an error."""

	with pytest.raises(ZeroDivisionError):
		M("1") / 0


def test_float_factor_is_exact () -> None:

	"""Float factors are converted via their decimal form."""

	assert M("1") * 0.1 == M("1/10")


def test_ordering_and_zero () -> None:

	"""Measures are totally ordered and know when they are zero."""

	values = [M("1/2"), M("0"), M("1/3"), M("-1/8")]

	assert sorted(values) == [M("-1/8"), M("0"), M("1/3"), M("1/2")]
	assert M("0").is_zero()
	assert not M("1/4").is_zero()
	assert not M("1/4 - 1/4")


def test_hashable_as_timeline_key () -> None:

	"""Equal measures built differently hash to the same key."""

	timeline = {M("1/2"): "a"}

	assert timeline[M("1/4 + 1/4")] == "a"
	assert timeline[Measure(fractions.Fraction(1, 2))] == "a"


def test_immutable () -> None:

	"""A built measure cannot be changed."""

	m = M("1/4")

	with pytest.raises(AttributeError):
		m.value = fractions.Fraction(1, 2)  # type: ignore[misc]


def test_scale_splits_proportionally () -> None:

	"""scale() splits the measure by ratio and the parts add back up."""

	parts = M("1").scale(1, 1, 2)

	assert parts == [M("1/4"), M("1/4"), M("1/2")]
	assert sum(parts, M("0")) == M("1")


def test_scale_equal_thirds () -> None:

	"""Three equal ratios give exact thirds."""

	assert M("1").scale(1, 1, 1) == [M("1/3")] * 3


def test_scale_rejects_bad_ratios () -> None:

	"""Empty or zero-sum ratios cannot be scaled."""

	with pytest.raises(ValueError):
		M("1").scale()

	with pytest.raises(ValueError):
		M("1").scale(1, -1)


def test_of_passes_measures_through () -> None:

	"""Measure.of returns measures unchanged and converts everything else."""

	m = M("1/4")

	assert Measure.of(m) is m
	assert Measure.of("1/4") == m
	assert Measure.of(fractions.Fraction(1, 4)) == m


def test_str_and_repr () -> None:

	"""Measures print as fractions."""

	assert str(M("6/8")) == "3/4"
	assert repr(M("1")) == "Measure('1')"
