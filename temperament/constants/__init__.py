"""Constants for Temperament.

This package contains two sets of constants:

- ``temperament.constants.reference`` - Reference pitch, keyboard bounds and
  the persistence defaults (base frequency, decay length)
- ``temperament.constants.tunings`` - Per-pitch-class tables for the built-in
  tuning systems, tonic C

The most common reference values are re-exported here, so
``temperament.constants.DEFAULT_BASE_FREQUENCY`` works without importing
the submodule.
"""

# Re-exported reference values.
# These match the values in temperament.constants.reference.

CENTS_PER_OCTAVE = 1200.0
SEMITONES_PER_OCTAVE = 12
DEFAULT_BASE_FREQUENCY = 440.0
DEFAULT_DECAY_LENGTH = 3.0
REFERENCE_NOTE = "A4"
TONIC_NOTE = "C4"
