"""Write played bars to a Standard MIDI File.

Positions are whole-note measures, so one whole note is
``4 * ticks_per_beat`` ticks.  Event kinds map as follows:

- note on: ``note_on`` on the voice's channel, using the ``note``
  (default 60) and ``velocity`` (default 100) params.
- note off: ``note_off`` for its ``note`` param, or for every note still
  sounding on that channel when it has none.
- tempo: a ``set_tempo`` meta message.
- parameter change: one ``control_change`` per param listed in ``cc_map``
  (param name -> controller number); other params are skipped.
- end marker: the track ends there.
"""

import logging
import typing

import mido

import barpatterns.event
import barpatterns.measure
import barpatterns.player


logger = logging.getLogger(__name__)

DEFAULT_NOTE = 60
DEFAULT_VELOCITY = 100


def _clamp_7bit (value: float) -> int:
	return max(0, min(127, int(round(value))))


def _to_messages (
	event: barpatterns.event.Event,
	cc_map: typing.Mapping[str, int],
	sounding: typing.Dict[int, typing.List[int]]
) -> typing.List[typing.Union[mido.Message, mido.MetaMessage]]:

	channel = event.voice.channel if event.voice is not None else 0
	kind = event.kind

	if kind is barpatterns.event.EventKind.NOTE_ON:
		note = _clamp_7bit(event.params.get('note', DEFAULT_NOTE))
		velocity = _clamp_7bit(event.params.get('velocity', DEFAULT_VELOCITY))
		sounding.setdefault(channel, []).append(note)
		return [mido.Message('note_on', channel=channel, note=note, velocity=velocity)]

	if kind is barpatterns.event.EventKind.NOTE_OFF:
		held = sounding.get(channel, [])

		if 'note' in event.params:
			note = _clamp_7bit(event.params['note'])
			sounding[channel] = [n for n in held if n != note]
			return [mido.Message('note_off', channel=channel, note=note, velocity=0)]

		if not held:
			logger.debug(f"Note off on channel {channel} with nothing sounding, skipped")
			return []

		sounding[channel] = []
		# each pitch once, in the order it started
		released = list(dict.fromkeys(held))
		return [mido.Message('note_off', channel=channel, note=n, velocity=0) for n in released]

	if kind is barpatterns.event.EventKind.TEMPO:
		return [mido.MetaMessage('set_tempo', tempo=mido.bpm2tempo(event.params[barpatterns.event.TEMPO_PARAM]))]

	if kind is barpatterns.event.EventKind.CHANGE:
		messages: typing.List[typing.Union[mido.Message, mido.MetaMessage]] = []
		for name, value in event.params.items():
			if name not in cc_map:
				logger.debug(f"No controller mapped for param {name!r}, skipped")
				continue
			messages.append(mido.Message('control_change', channel=channel, control=cc_map[name], value=_clamp_7bit(value)))
		return messages

	return []


def bars_to_midi (
	bars: typing.Iterable[barpatterns.player.Bar],
	initial_bpm: float = 120,
	ticks_per_beat: int = 480,
	cc_map: typing.Optional[typing.Mapping[str, int]] = None
) -> mido.MidiFile:

	"""
	Convert played bars into a type 1 MIDI file with a single track.
	"""

	cc_map = cc_map or {}
	ticks_per_whole = 4 * ticks_per_beat

	timed: typing.List[typing.Tuple[int, typing.Union[mido.Message, mido.MetaMessage]]] = [
		(0, mido.MetaMessage('set_tempo', tempo=mido.bpm2tempo(initial_bpm)))
	]

	bar_start = barpatterns.measure.ZERO
	end_tick: typing.Optional[int] = None
	sounding: typing.Dict[int, typing.List[int]] = {}

	for bar in bars:

		for position, event in bar.events:

			tick = max(0, int(round(float(bar_start + position) * ticks_per_whole)))

			if event.kind is barpatterns.event.EventKind.END:
				end_tick = tick
				break

			for message in _to_messages(event, cc_map, sounding):
				timed.append((tick, message))

		if end_tick is not None:
			break

		bar_start = bar_start + bar.length

	# stable sort keeps same-tick messages in pattern order
	timed.sort(key=lambda x: x[0])

	mid = mido.MidiFile(type=1)
	mid.ticks_per_beat = ticks_per_beat
	track = mido.MidiTrack()
	mid.tracks.append(track)

	last_tick = 0

	for tick, message in timed:
		message.time = tick - last_tick
		track.append(message)
		last_tick = tick

	final_tick = end_tick if end_tick is not None else int(round(float(bar_start) * ticks_per_whole))
	track.append(mido.MetaMessage('end_of_track', time=max(0, final_tick - last_tick)))

	return mid


def save_midi (
	bars: typing.Iterable[barpatterns.player.Bar],
	filename: str,
	initial_bpm: float = 120,
	ticks_per_beat: int = 480,
	cc_map: typing.Optional[typing.Mapping[str, int]] = None
) -> mido.MidiFile:

	"""Write played bars to ``filename`` and return the MIDI file."""

	mid = bars_to_midi(bars, initial_bpm=initial_bpm, ticks_per_beat=ticks_per_beat, cc_map=cc_map)

	logger.info(f"Saving MIDI file ({len(mid.tracks[0])} messages) to {filename}...")
	mid.save(filename)
	logger.info(f"Saved {filename}")

	return mid
