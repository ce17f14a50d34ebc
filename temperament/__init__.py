
"""
Temperament - a tuning engine for a virtual piano.

Temperament maps note names to sounding frequencies under alternate tuning
systems. A single anchor, A4 at a user-chosen base frequency (440 Hz by
default), fixes every pitch; a 12-entry table of ratios or cents over the
tonic C gives each pitch class its colour; pure octaves repeat that table
across the keyboard.

Tuning systems:

- **Equal temperament.** Twelve 100-cent semitones.
- **Just intonation.** 5-limit ratios (C-E-G is 1/1, 5/4, 3/2).
- **Pythagorean.** Stacked pure fifths, 81/64 thirds.
- **Historical temperaments.** Quarter-comma meantone (pure thirds,
  696.6-cent fifths), Werckmeister III and Kirnberger III.
- **7-limit systems.** La Monte Young's Well-Tuned Piano (transposed to C)
  and Kraig Grady's Centaur.
- **Your own.** ``register_tuning_system()`` adds a 12-tone table by ratios
  or cents.

Engine pieces:

- **Note names.** ``temperament.notes`` parses ``"C#4"``, numbers notes
  MIDI-style (A4 = 69) and lists keyboard ranges.
- **Ratios and cents.** ``temperament.ratios`` converts both ways, with a
  bounded continued-fraction rationalizer and a lenient ratio-text parser.
- **Frequencies.** ``temperament.frequency`` applies a pitch class's ratio
  or cents with octave equivalence.
- **Keyboard tables.** ``temperament.keyboard.populate()`` builds the A2-C6
  note table; edits and base-frequency changes return fresh snapshots.

Around the engine: an in-memory store for saved configurations
(``temperament.storage``), a JSON HTTP API (``temperament.web_api``) and a
command line (``python -m temperament``).

Minimal example:

    ```python
    import temperament

    notes = temperament.populate(440.0, "just")

    notes["A4"].frequency   # 440.0 - the reference is pinned
    notes["G4"].ratio       # "3/2"
    notes["G4"].frequency   # 392.44
    ```

Package-level exports: ``populate``, ``calculate_frequency``,
``generate_tuning_table``, ``register_tuning_system``, ``TuningSystem``,
``ratio_to_cents``, ``cents_to_ratio``, ``parse_ratio_string``.
"""

import temperament.frequency
import temperament.keyboard
import temperament.ratios
import temperament.tuning_systems


populate = temperament.keyboard.populate
calculate_frequency = temperament.frequency.calculate_frequency
generate_tuning_table = temperament.tuning_systems.generate_tuning_table
register_tuning_system = temperament.tuning_systems.register_tuning_system
TuningSystem = temperament.tuning_systems.TuningSystem
ratio_to_cents = temperament.ratios.ratio_to_cents
cents_to_ratio = temperament.ratios.cents_to_ratio
parse_ratio_string = temperament.ratios.parse_ratio_string
