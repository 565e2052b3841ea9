import logging

import barpatterns
import barpatterns.config
import barpatterns.midi_export

from barpatterns import M

logging.basicConfig(level=logging.INFO)

config = barpatterns.config.PlayerConfig.load("examples/barpatterns.yaml")
rng = config.make_rng()

drums = barpatterns.Voice("drums", channel=9)
bass = barpatterns.Voice("bass", channel=1)

kick = barpatterns.on_event(drums, {"note": 36, "velocity": 110})
snare = barpatterns.on_event(drums, {"note": 38, "velocity": 95})
hat = barpatterns.on_event(drums, {"note": 42, "velocity": 60})
root = barpatterns.on_event(bass, {"note": 40, "velocity": 100})
fifth = barpatterns.on_event(bass, {"note": 47, "velocity": 90})

# Four on the floor with a snare backbeat, hats on every eighth
beat = barpatterns.Compose(
	barpatterns.SlotPattern(1, 1, 1, 1).set_events(kick),
	barpatterns.SlotPattern(1, 1).set_events(snare).at("1/4"),
	barpatterns.SlotPattern(*[1] * 8).set_events(hat),
)

# The bass alternates between a tresillo and a straight line, chosen per bar
bassline = barpatterns.RandomPattern(
	barpatterns.SlotPattern(2, 3, 3).set_events(root, root, fifth),
	barpatterns.SlotPattern(1, 1, 1, 1).set_events(root, fifth),
	rng = rng
)

# An open hat every fourth bar
fill = barpatterns.SeqSwitch(
	barpatterns.SlotPattern(1).set_events(barpatterns.on_event(drums, {"note": 46})).at("1/2"),
	False, False, False, True
)

# Filter opens over every fourth bar
sweep = barpatterns.SeqSwitch(
	barpatterns.LinearDistribution("cutoff", 20, 120, 8, M("1")).modify_voice("0", bass),
	False, False, False, True
)

# Tempo creeps up for three bars, then snaps back
tempo = barpatterns.seq_tempo(config.initial_bpm, 1, barpatterns.step_add)
tempo_line = barpatterns.Sequence(tempo.set_tempo("0"), tempo.set_tempo("0"), tempo.set_tempo("0"), tempo.reset("0"))

song = barpatterns.Compose(beat, bassline, fill, sweep, tempo_line)

bars = list(barpatterns.play(song, config.make_track(), bars=config.bars or 16, loop=True))

for bar in bars:
	for position, event in bar.events:
		logging.info(f"bar {bar.index} @ {position}: {event.kind.value} {event.params}")

barpatterns.midi_export.save_midi(
	bars,
	"groove.mid",
	initial_bpm = config.initial_bpm,
	ticks_per_beat = config.ticks_per_beat,
	cc_map = {"cutoff": 74}
)
