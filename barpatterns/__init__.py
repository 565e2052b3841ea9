"""
barpatterns - a pattern algebra for bar-based musical event timelines.

A pattern is asked, once per bar, which events fire in that bar and where.
Small patterns that place a few events are combined into larger ones with a
handful of operators, and the result is itself a pattern, so compositions
nest to any depth.

Building blocks:

- **Measure.** Exact rational positions and durations in whole notes,
  parsed from literals like ``"3/8"`` or ``"1/4 + 1/16"``.
- **Events.** Note on/off, parameter changes, tempo changes and start/end
  markers.  Templates are cloned every time they are placed, so no two
  timeline entries ever share a payload.
- **Slot patterns.** ``SlotPattern(3, 3, 2).set_events(kick, kick, snare)``
  places events on slots obtained by scaling ratios to the bar.
- **Combinators.** ``Sequence`` (one after another), ``Compose``/``Mix``
  (layered), ``RandomPattern`` (pick one per bar), ``SeqSwitch`` (gate with a
  repeating on/off mask).
- **Ramps.** ``LinearDistribution``/``ExponentialDistribution`` for
  parameter sweeps, ``LinearTempoChange``/``ExponentialTempoChange`` for
  accelerando and ritardando, ``TempoSpan`` for a tempo that moves every
  time it is played.

Playing and export:

- ``play(pattern, tracker, bars=..., loop=...)`` yields each bar's events
  sorted by position.
- ``barpatterns.midi_export.save_midi()`` writes played bars to a MIDI file.
- ``barpatterns.config.PlayerConfig.load()`` reads player settings from YAML.

Minimal example:

    ```python
    import barpatterns
    from barpatterns import M

    bass = barpatterns.Voice("bass", channel=1)
    hit = barpatterns.on_event(bass, {"note": 36})

    groove = barpatterns.Sequence(
        barpatterns.SlotPattern(1, 1, 1, 1).set_events(hit),
        barpatterns.Compose(
            barpatterns.SlotPattern(3, 3, 2).set_events(hit),
            barpatterns.LinearDistribution("cutoff", 20, 100, 4, M("1")).modify_voice("0", bass),
        ),
        barpatterns.End("1/2"),
    )

    for bar in barpatterns.play(groove):
        for position, event in bar.events:
            print(bar.index, position, event.kind.value, event.params)
    ```
"""

import barpatterns.combinators
import barpatterns.distribution
import barpatterns.event
import barpatterns.measure
import barpatterns.pattern
import barpatterns.player
import barpatterns.slots
import barpatterns.tempo
import barpatterns.tracker


Measure = barpatterns.measure.Measure
MeasureError = barpatterns.measure.MeasureError
M = barpatterns.measure.M

Event = barpatterns.event.Event
EventKind = barpatterns.event.EventKind
Voice = barpatterns.event.Voice
on_event = barpatterns.event.on_event
off_event = barpatterns.event.off_event
change_event = barpatterns.event.change_event
bpm_event = barpatterns.event.bpm_event
merge_params = barpatterns.event.merge_params

Tracker = barpatterns.tracker.Tracker
Track = barpatterns.tracker.Track

Pattern = barpatterns.pattern.Pattern
PatternFunc = barpatterns.pattern.PatternFunc
EventAt = barpatterns.pattern.EventAt
End = barpatterns.pattern.End
Start = barpatterns.pattern.Start
SetTempo = barpatterns.pattern.SetTempo

SlotPattern = barpatterns.slots.SlotPattern

Sequence = barpatterns.combinators.Sequence
Compose = barpatterns.combinators.Compose
Mix = barpatterns.combinators.Mix
RandomPattern = barpatterns.combinators.RandomPattern
SeqSwitch = barpatterns.combinators.SeqSwitch

TempoSpan = barpatterns.tempo.TempoSpan
seq_tempo = barpatterns.tempo.seq_tempo
step_add = barpatterns.tempo.step_add
step_multiply = barpatterns.tempo.step_multiply

LinearDistribution = barpatterns.distribution.LinearDistribution
LinearTempoChange = barpatterns.distribution.LinearTempoChange
ExponentialDistribution = barpatterns.distribution.ExponentialDistribution
ExponentialTempoChange = barpatterns.distribution.ExponentialTempoChange

play = barpatterns.player.play
