"""Frequency calculation from a tuning parameter.

The calculator is anchored on a reference note whose pitch class is the tonic
of the tuning table (C4 for every built-in table). For any other note it
takes the semitone distance to the reference, splits it into octaves and a
pitch class, and applies that pitch class's ratio or cents once per octave:

    frequency = reference_frequency * multiplier * 2 ** octaves

Every tuning repeats identically in each octave. Results are plain doubles
with no rounding or clamping; callers driving an oscillator should reject
non-positive or non-finite values themselves.
"""

import math

import temperament.constants.reference
import temperament.notes
import temperament.tuning_systems


def a4_to_c4_frequency (a4_frequency: float) -> float:

	"""
	Return the equal-tempered C4 below a given A4 (440 Hz → 261.63 Hz).
	"""

	return a4_frequency * 2.0 ** (temperament.constants.reference.TONIC_OFFSET_FROM_REFERENCE / 12.0)


def tuning_multiplier (ratio_numerator: int, ratio_denominator: int, cents: float) -> float:

	"""
	Return the pitch-class multiplier over the tonic.

	A ratio other than ``1/1`` wins; otherwise the cents value is used.
	"""

	if ratio_numerator != 1 or ratio_denominator != 1:
		return ratio_numerator / ratio_denominator

	return 2.0 ** (cents / temperament.constants.reference.CENTS_PER_OCTAVE)


def calculate_frequency (
	note_name: str,
	reference_frequency: float,
	ratio_numerator: int,
	ratio_denominator: int,
	cents: float,
	reference_note: str = temperament.constants.reference.TONIC_NOTE
) -> float:

	"""
	Compute the sounding frequency of a note.

	Parameters:
		note_name: Note to compute (e.g. ``"G4"``).
		reference_frequency: Frequency of ``reference_note`` in Hz.
		ratio_numerator: Ratio numerator for the note's pitch class.
		ratio_denominator: Ratio denominator for the note's pitch class.
		cents: Cents offset for the note's pitch class, used when the ratio is
			``1/1``.
		reference_note: Note sounding at ``reference_frequency``. Its pitch class
			is the tonic the ratio or cents value is measured from (default C4).

	Returns:
		Frequency in Hz.

	Raises:
		InvalidNoteName: If ``note_name`` or ``reference_note`` is malformed.

	Example:
		```python
		calculate_frequency("G4", 261.63, 3, 2, 0)    # → 392.445
		calculate_frequency("G4", 261.63, 1, 1, 700)  # → 391.99...
		calculate_frequency("C5", 261.63, 1, 1, 0)    # → 523.26
		```
	"""

	steps = temperament.notes.semitone_offset_from_reference(note_name, reference_note)
	multiplier = tuning_multiplier(ratio_numerator, ratio_denominator, cents)

	if steps == 0 and multiplier == 1.0:
		return reference_frequency

	octaves = math.floor(steps / temperament.constants.reference.SEMITONES_PER_OCTAVE)

	return reference_frequency * multiplier * 2.0 ** octaves


def note_frequency (
	note_name: str,
	base_frequency: float = temperament.constants.reference.DEFAULT_BASE_FREQUENCY,
	system: temperament.tuning_systems.SystemKey = temperament.tuning_systems.TuningSystem.EQUAL,
	pin_reference: bool = True
) -> float:

	"""
	Return the frequency of one note for a base frequency and tuning system.

	Uses the same reference policy as the keyboard: with ``pin_reference`` the
	reference note A4 sounds at ``base_frequency`` exactly.
	"""

	if pin_reference and note_name == temperament.constants.reference.REFERENCE_NOTE:
		return base_frequency

	note = temperament.notes.parse_note_name(note_name)
	parameter = temperament.tuning_systems.generate_tuning_table(system)[note.pitch_class]

	return calculate_frequency(
		note_name,
		a4_to_c4_frequency(base_frequency),
		parameter.ratio_numerator,
		parameter.ratio_denominator,
		parameter.cents
	)
