"""Reference pitch and keyboard constants.

All frequencies are derived from a single anchor: **A4** bound to a base
frequency (440 Hz unless the user types something else, typically 400-480).
Tuning tables are anchored on the tonic **C**, so the engine converts the
anchor to C4 once using the equal-tempered relationship ``C4 = A4 * 2^(-9/12)``.

Note numbering follows the MIDI convention: ``C4 = 60``, ``A4 = 69``.
"""

CENTS_PER_OCTAVE = 1200.0
CENTS_PER_SEMITONE = 100.0
SEMITONES_PER_OCTAVE = 12

# ── Reference pitch ──
REFERENCE_NOTE = "A4"
REFERENCE_MIDI_NUMBER = 69
DEFAULT_BASE_FREQUENCY = 440.0

# ── Tonic ──
TONIC_NOTE = "C4"
TONIC_OFFSET_FROM_REFERENCE = -9  # C4 is nine semitones below A4

# ── Keyboard ── (A2 to C6, 40 keys)
KEYBOARD_LOW = "A2"
KEYBOARD_HIGH = "C6"

# ── Persistence defaults ──
DEFAULT_DECAY_LENGTH = 3.0
DEFAULT_SYSTEM = "equal"

# ── Rationalizer ──
RATIO_TOLERANCE = 1e-6
CONTINUED_FRACTION_MAX_TERMS = 10
CONTINUED_FRACTION_LIMIT = 10.0
