import random

import pytest

import barpatterns.event
import barpatterns.tracker


@pytest.fixture
def track () -> barpatterns.tracker.Track:

	"""A tracker with a 4/4 bar."""

	return barpatterns.tracker.Track("1")


@pytest.fixture
def voice () -> barpatterns.event.Voice:

	"""A voice on MIDI channel 2."""

	return barpatterns.event.Voice("lead", channel=2)


@pytest.fixture
def rng () -> random.Random:

	"""A seeded generator for repeatable random choices."""

	return random.Random(1234)
