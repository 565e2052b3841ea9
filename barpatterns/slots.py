import dataclasses
import typing

import barpatterns.event
import barpatterns.measure
import barpatterns.pattern
import barpatterns.tracker


@dataclasses.dataclass
class SingleEvent:

	"""A slot holding one event."""

	event: barpatterns.event.Event

	def templates (self) -> typing.List[barpatterns.event.Event]:
		return [self.event]


@dataclasses.dataclass
class EventGroup:

	"""A slot holding several events that fire together."""

	events: typing.List[barpatterns.event.Event]

	def templates (self) -> typing.List[barpatterns.event.Event]:
		return self.events


class Empty:

	"""A rest: the slot fires nothing and does not advance the position."""

	def templates (self) -> typing.List[barpatterns.event.Event]:
		return []

	def __repr__ (self) -> str:
		return "EMPTY"


EMPTY = Empty()

Slot = typing.Union[SingleEvent, EventGroup, Empty]

SlotLike = typing.Union[
	Slot,
	barpatterns.event.Event,
	typing.Sequence[barpatterns.event.Event],
	None
]


def to_slot (item: SlotLike) -> Slot:

	"""
	Normalise an event, an event group or ``None`` into a slot.

	Raises ``TypeError`` for anything else, including groups that contain
	non-events.
	"""

	if item is None:
		return EMPTY

	if isinstance(item, (SingleEvent, EventGroup, Empty)):
		return item

	if isinstance(item, barpatterns.event.Event):
		return SingleEvent(item)

	if isinstance(item, (list, tuple)):
		for e in item:
			if not isinstance(e, barpatterns.event.Event):
				raise TypeError(f"type {type(e).__name__} not allowed in an event group, just Event")
		return EventGroup(list(item))

	raise TypeError(f"type {type(item).__name__} not allowed as event in slot patterns, just Event and lists of Event")


class SlotPattern (barpatterns.pattern.Pattern):

	"""
	Place events on slots obtained by scaling ``relations`` to a base length.

	The base defaults to the tracker's current bar and can be fixed with
	:meth:`set_base`.  The first slot sits at :meth:`at` (default 0) and each
	following slot is offset by the next scaled relation.

	When there are at least as many event slots as relations, the events drive
	the loop and the scaled offsets rotate (``i % len(offsets)``).  With fewer
	events than relations the offsets drive and the events rotate.  Empty
	slots are skipped without advancing the position.

	Example:
		```python
		# kick, snare, kick on three equal thirds of the bar
		SlotPattern(1, 1, 1).set_events(kick, snare)
		```
	"""

	def __init__ (self, *relations: barpatterns.measure.Number) -> None:

		if not relations:
			raise ValueError("SlotPattern requires at least one relation")

		# fails now on ratios that could never be scaled
		barpatterns.measure.BAR.scale(*relations)

		self.relations: typing.List[barpatterns.measure.Number] = list(relations)
		self.base: typing.Optional[barpatterns.measure.Measure] = None
		self.slots: typing.List[Slot] = []
		self.start = barpatterns.measure.ZERO

	def set_events (self, *events: SlotLike) -> "SlotPattern":
		self.slots = [to_slot(e) for e in events]
		return self

	def set_events_at (self, idx: int, *events: barpatterns.event.Event) -> "SlotPattern":

		"""Put ``events`` into slot ``idx``, padding with empty slots as needed."""

		self._put(idx, to_slot(list(events)))
		return self

	def map_events (self, mapping: typing.Mapping[int, SlotLike]) -> "SlotPattern":

		"""Set several slots at once from ``{idx: event_or_group}``."""

		for idx, item in mapping.items():
			self._put(idx, to_slot(item))

		return self

	def _put (self, idx: int, slot: Slot) -> None:

		while len(self.slots) < idx + 1:
			self.slots.append(EMPTY)

		self.slots[idx] = slot

	def change_events_at (self, idx: int, fn: typing.Callable[..., typing.Any]) -> "SlotPattern":

		"""
		Call ``fn(*events)`` on the templates of slot ``idx`` (wrapping).

		Changes affect every later evaluation since the templates themselves are
		modified.
		"""

		if not self.slots:
			raise IndexError("SlotPattern has no events to change")

		templates = self.slots[idx % len(self.slots)].templates()

		if templates:
			fn(*templates)

		return self

	def change_all_events (self, fn: typing.Callable[..., typing.Any]) -> "SlotPattern":

		"""Call ``fn(idx, *events)`` for every non-empty slot."""

		for idx, slot in enumerate(self.slots):
			templates = slot.templates()
			if templates:
				fn(idx, *templates)

		return self

	def clone (self) -> "SlotPattern":

		"""Return a new slot pattern sharing relations and slot templates."""

		other = SlotPattern.__new__(SlotPattern)
		other.relations = self.relations
		other.base = self.base
		other.slots = self.slots
		other.start = self.start
		return other

	def set_base (self, base: barpatterns.pattern.PositionLike) -> "SlotPattern":
		self.base = barpatterns.measure.Measure.of(base)
		return self

	def at (self, position: barpatterns.pattern.PositionLike) -> "SlotPattern":
		self.start = barpatterns.measure.Measure.of(position)
		return self

	def events (self, bar_index: int, tracker: barpatterns.tracker.Tracker) -> barpatterns.pattern.Timeline:

		res: barpatterns.pattern.Timeline = {}

		if not self.slots:
			return res

		base = self.base if self.base is not None else tracker.current_bar()
		ms = base.scale(*self.relations)
		last = -ms[0] + self.start

		if len(self.slots) >= len(ms):

			for i, slot in enumerate(self.slots):
				if isinstance(slot, Empty):
					continue
				last = ms[i % len(ms)] + last
				res[last] = barpatterns.pattern.clone_events(slot.templates())

			return res

		for i, m in enumerate(ms):
			slot = self.slots[i % len(self.slots)]
			if isinstance(slot, Empty):
				continue
			last = m + last
			res[last] = barpatterns.pattern.clone_events(slot.templates())

		return res
