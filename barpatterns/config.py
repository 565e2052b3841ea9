import dataclasses
import logging
import os
import random
import typing

import yaml

import barpatterns.measure
import barpatterns.tracker


logger = logging.getLogger(__name__)


def load_config (config_path: str = 'barpatterns.yaml') -> dict:

	"""
	Load the YAML settings file and return it as a dict.

	Player settings live under its ``player:`` key (see :class:`PlayerConfig`).
	A missing file is logged and treated as empty, so every setting falls back
	to its default.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		return yaml.safe_load(f) or {}


@dataclasses.dataclass
class PlayerConfig:

	"""
	Settings for playing and exporting patterns.

	Read from the ``player:`` section of the config file::

		player:
		  bar: "3/4"
		  bars: 16
		  loop: true
		  seed: 42
		  initial_bpm: 96
		  ticks_per_beat: 480
	"""

	bar: barpatterns.measure.Measure = barpatterns.measure.BAR
	bars: typing.Optional[int] = None
	loop: bool = False
	seed: typing.Optional[int] = None
	initial_bpm: float = 120
	ticks_per_beat: int = 480

	@classmethod
	def from_dict (cls, config: typing.Mapping[str, typing.Any]) -> "PlayerConfig":

		section = config.get('player') or {}

		bars = section.get('bars')
		seed = section.get('seed')
		initial_bpm = float(section.get('initial_bpm', 120))
		ticks_per_beat = int(section.get('ticks_per_beat', 480))

		if initial_bpm <= 0:
			raise ValueError("initial_bpm must be positive")

		if ticks_per_beat <= 0:
			raise ValueError("ticks_per_beat must be positive")

		return cls(
			bar = barpatterns.measure.Measure.of(str(section.get('bar', '1'))),
			bars = int(bars) if bars is not None else None,
			loop = bool(section.get('loop', False)),
			seed = int(seed) if seed is not None else None,
			initial_bpm = initial_bpm,
			ticks_per_beat = ticks_per_beat
		)

	@classmethod
	def load (cls, config_path: str = 'barpatterns.yaml') -> "PlayerConfig":
		return cls.from_dict(load_config(config_path))

	def make_rng (self) -> random.Random:

		"""Return a generator for ``RandomPattern``, seeded when a seed is configured."""

		return random.Random(self.seed)

	def make_track (self) -> barpatterns.tracker.Track:
		return barpatterns.tracker.Track(self.bar)
