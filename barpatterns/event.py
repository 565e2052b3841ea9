import dataclasses
import enum
import typing


TEMPO_PARAM = "bpm"

Params = typing.Dict[str, float]


class EventKind (enum.Enum):

	"""
	The kinds of action an event can schedule.
	"""

	NOTE_ON = "note_on"
	NOTE_OFF = "note_off"
	CHANGE = "change"
	TEMPO = "tempo"
	START = "start"
	END = "end"


@dataclasses.dataclass(frozen=True)
class Voice:

	"""
	A named target for note and parameter events.

	Only the identity matters to patterns; the player or an exporter decides
	what a voice means (a synth node, a MIDI channel, ...).
	"""

	name: str
	channel: int = 0


@dataclasses.dataclass
class Event:

	"""
	A single schedulable action.

	Events built by the factory functions are templates.  Patterns never put a
	template on a timeline directly; they place a :meth:`clone` so that two
	firings of the same template never share a params dict.
	"""

	kind: EventKind
	voice: typing.Optional[Voice] = None
	params: Params = dataclasses.field(default_factory=dict)
	tags: typing.Set[str] = dataclasses.field(default_factory=set)

	def clone (self) -> "Event":

		"""
		Return an independent copy. The voice is a reference and stays shared.
		"""

		return Event(
			kind = self.kind,
			voice = self.voice,
			params = dict(self.params),
			tags = set(self.tags)
		)

	def tag (self, *names: str) -> "Event":

		"""Add tags to this event and return it for chaining."""

		self.tags.update(names)
		return self

	def has_tag (self, name: str) -> bool:
		return name in self.tags

	@property
	def bpm (self) -> typing.Optional[float]:

		"""The tempo carried by a tempo event, ``None`` for other kinds."""

		if self.kind is not EventKind.TEMPO:
			return None

		return self.params.get(TEMPO_PARAM)


def merge_params (*maps: typing.Optional[typing.Mapping[str, float]]) -> Params:

	"""
	Merge named parameters left to right, later values winning.

	``None`` entries are skipped and every value is coerced to ``float``.
	"""

	merged: Params = {}

	for m in maps:
		if m is None:
			continue
		for key, value in m.items():
			merged[key] = float(value)

	return merged


def on_event (voice: Voice, params: typing.Optional[typing.Mapping[str, float]] = None) -> Event:
	return Event(EventKind.NOTE_ON, voice, merge_params(params))


def off_event (voice: Voice, params: typing.Optional[typing.Mapping[str, float]] = None) -> Event:

	"""
	Release a note on ``voice``.

	With a ``note`` param only that note is released. Without one, exporters
	release every note still sounding on the voice's channel.
	"""

	return Event(EventKind.NOTE_OFF, voice, merge_params(params))


def change_event (voice: Voice, params: typing.Mapping[str, float]) -> Event:
	return Event(EventKind.CHANGE, voice, merge_params(params))


def bpm_event (bpm: float) -> Event:

	if bpm <= 0:
		raise ValueError("BPM must be positive")

	return Event(EventKind.TEMPO, params={TEMPO_PARAM: float(bpm)})


def start_event () -> Event:
	return Event(EventKind.START)


def end_event () -> Event:
	return Event(EventKind.END)
