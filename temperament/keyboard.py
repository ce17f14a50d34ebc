"""Keyboard population and note-table snapshots.

`populate` expands a 12-entry tuning table across a range of keys and
returns a mapping of note name to `NoteConfiguration`. The mapping is a
snapshot: nothing in this module mutates one. Editing a pitch class,
changing the base frequency or switching between ratio and cents produces a
new mapping with every affected frequency recomputed, so a caller replaces
its whole table at once.

Reference policy: the reference note A4 always sounds at the base frequency
the user typed, whatever the tuning system would compute for it. Pass
``pin_reference=False`` to compute A4 from the tonic like any other note.
"""

import dataclasses
import enum
import logging
import typing

import temperament.constants.reference
import temperament.frequency
import temperament.notes
import temperament.ratios
import temperament.tuning_systems


logger = logging.getLogger(__name__)


class TuningMethod (enum.Enum):

	"""
	Which encoding is authoritative when editing a table.
	"""

	RATIO = "ratio"
	CENTS = "cents"


@dataclasses.dataclass(frozen=True)
class NoteConfiguration:

	"""
	The tuning and sounding frequency of one key.
	"""

	name: str
	base_name: str
	ratio_numerator: int
	ratio_denominator: int
	cents: float
	frequency: float


	@property
	def ratio (self) -> str:

		return temperament.ratios.format_ratio(self.ratio_numerator, self.ratio_denominator)


	@property
	def parameter (self) -> temperament.tuning_systems.TuningParameter:

		return temperament.tuning_systems.TuningParameter(self.ratio_numerator, self.ratio_denominator, self.cents)


	def to_dict (self) -> typing.Dict[str, typing.Any]:

		"""
		Return the flat JSON record stored in a saved configuration's ``notes``.
		"""

		return {
			"name": self.name,
			"baseName": self.base_name,
			"ratioNumerator": self.ratio_numerator,
			"ratioDenominator": self.ratio_denominator,
			"ratio": self.ratio,
			"cents": self.cents,
			"frequency": self.frequency,
		}


	@classmethod
	def from_dict (
		cls,
		data: typing.Mapping[str, typing.Any],
		base_frequency: float = temperament.constants.reference.DEFAULT_BASE_FREQUENCY
	) -> "NoteConfiguration":

		"""
		Rebuild a note from its JSON record.

		``baseName`` is derived from ``name`` when absent. A missing
		``frequency`` is computed from ``base_frequency``.
		"""

		name = data["name"]
		numerator = int(data.get("ratioNumerator", 1))
		denominator = int(data.get("ratioDenominator", 1))
		cents = float(data.get("cents", 0.0))
		frequency = data.get("frequency")

		if frequency is None:
			frequency = _frequency_for(name, temperament.tuning_systems.TuningParameter(numerator, denominator, cents), base_frequency, True)

		return cls(
			name = name,
			base_name = data.get("baseName") or temperament.notes.base_note_name(name),
			ratio_numerator = numerator,
			ratio_denominator = denominator,
			cents = cents,
			frequency = float(frequency)
		)


NoteMap = typing.Dict[str, NoteConfiguration]


def _frequency_for (
	name: str,
	parameter: temperament.tuning_systems.TuningParameter,
	base_frequency: float,
	pin_reference: bool
) -> float:

	if pin_reference and name == temperament.constants.reference.REFERENCE_NOTE:
		return base_frequency

	return temperament.frequency.calculate_frequency(
		name,
		temperament.frequency.a4_to_c4_frequency(base_frequency),
		parameter.ratio_numerator,
		parameter.ratio_denominator,
		parameter.cents
	)


def _configure (
	name: str,
	parameter: temperament.tuning_systems.TuningParameter,
	base_frequency: float,
	pin_reference: bool
) -> NoteConfiguration:

	return NoteConfiguration(
		name = name,
		base_name = temperament.notes.parse_note_name(name).pitch_class.label,
		ratio_numerator = parameter.ratio_numerator,
		ratio_denominator = parameter.ratio_denominator,
		cents = parameter.cents,
		frequency = _frequency_for(name, parameter, base_frequency, pin_reference)
	)


def populate (
	base_frequency: float = temperament.constants.reference.DEFAULT_BASE_FREQUENCY,
	system: temperament.tuning_systems.SystemKey = temperament.tuning_systems.TuningSystem.EQUAL,
	low: str = temperament.constants.reference.KEYBOARD_LOW,
	high: str = temperament.constants.reference.KEYBOARD_HIGH,
	pin_reference: bool = True
) -> NoteMap:

	"""
	Build the note table for every key from ``low`` to ``high``.

	Parameters:
		base_frequency: Frequency of A4 in Hz.
		system: Tuning system (see :func:`temperament.tuning_systems.generate_tuning_table`).
		low: Lowest key, inclusive (default A2).
		high: Highest key, inclusive (default C6).
		pin_reference: When True (default), A4 is exactly ``base_frequency``.

	Returns:
		A new dict of note name to `NoteConfiguration`, lowest key first.

	Raises:
		InvalidNoteName: If ``low`` or ``high`` is malformed.
		UnknownTuningSystem: If ``system`` cannot be resolved.

	Example:
		```python
		notes = populate(440.0, "just")
		notes["A4"].frequency            # → 440.0
		round(notes["G4"].frequency, 2)  # → 392.44
		```
	"""

	table = temperament.tuning_systems.generate_tuning_table(system)
	lowest = temperament.notes.parse_note_name(low)
	highest = temperament.notes.parse_note_name(high)

	notes: NoteMap = {}

	for octave in range(lowest.octave, highest.octave + 1):

		for pitch_class in temperament.notes.PitchClass:

			if octave == lowest.octave and pitch_class < lowest.pitch_class:
				continue

			if octave == highest.octave and pitch_class > highest.pitch_class:
				continue

			name = f"{pitch_class.label}{octave}"

			try:
				notes[name] = _configure(name, table[pitch_class], base_frequency, pin_reference)
			except temperament.notes.InvalidNoteName as exc:
				logger.warning(f"Skipping {name}: {exc}")

	logger.debug(f"Populated {len(notes)} notes ({low}-{high}) at {base_frequency} Hz")

	return notes


def retune (notes: typing.Mapping[str, NoteConfiguration], base_frequency: float, pin_reference: bool = True) -> NoteMap:

	"""
	Recompute every frequency from each note's own ratio and cents.

	Used when the base frequency changes or after a table is loaded. Entries
	whose name does not parse are kept unchanged.
	"""

	retuned: NoteMap = {}

	for name, note in notes.items():

		try:
			retuned[name] = dataclasses.replace(note, frequency = _frequency_for(name, note.parameter, base_frequency, pin_reference))
		except temperament.notes.InvalidNoteName as exc:
			logger.warning(f"Keeping {name} untuned: {exc}")
			retuned[name] = note

	return retuned


def update_pitch_class (
	notes: typing.Mapping[str, NoteConfiguration],
	base_name: str,
	base_frequency: float,
	ratio: typing.Optional[str] = None,
	cents: typing.Optional[float] = None,
	pin_reference: bool = True
) -> NoteMap:

	"""
	Change the tuning of one pitch class in every octave.

	Parameters:
		notes: Current table.
		base_name: Pitch class label to edit (e.g. ``"E"``).
		base_frequency: Frequency of A4 in Hz.
		ratio: New ratio text (``"5/4"``). Parsed leniently: malformed text
			becomes ``1/1``.
		cents: New cents value.
		pin_reference: As for :func:`populate`.

	Returns:
		A new table. Notes of other pitch classes are carried over unchanged.
	"""

	numerator_denominator = temperament.ratios.parse_ratio_string(ratio) if ratio is not None else None
	updated: NoteMap = {}

	for name, note in notes.items():

		if note.base_name != base_name:
			updated[name] = note
			continue

		changes: typing.Dict[str, typing.Any] = {}

		if numerator_denominator is not None:
			changes["ratio_numerator"], changes["ratio_denominator"] = numerator_denominator

		if cents is not None:
			changes["cents"] = float(cents)

		edited = dataclasses.replace(note, **changes)

		try:
			updated[name] = dataclasses.replace(edited, frequency = _frequency_for(name, edited.parameter, base_frequency, pin_reference))
		except temperament.notes.InvalidNoteName as exc:
			logger.warning(f"Keeping {name} unchanged: {exc}")
			updated[name] = note

	return updated


def convert_tuning_method (
	notes: typing.Mapping[str, NoteConfiguration],
	method: typing.Union[TuningMethod, str],
	base_frequency: float,
	pin_reference: bool = True
) -> NoteMap:

	"""
	Switch every note to ratio- or cents-authoritative encoding.

	- ``cents``: a non-trivial ratio becomes its exact cents value and the
	  ratio resets to ``1/1``, so the pitch does not move.
	- ``ratio``: a non-zero cents value on a ``1/1`` note becomes the
	  approximate ratio from :func:`temperament.ratios.cents_to_ratio`; the
	  cents value is kept for display.

	Frequencies are recomputed. Only the switch to ``ratio`` can move a
	pitch, by the error of the approximation.
	"""

	method = TuningMethod(method)
	converted: NoteMap = {}

	for name, note in notes.items():

		parameter = note.parameter

		if method is TuningMethod.CENTS and parameter.is_ratio:
			parameter = temperament.tuning_systems.TuningParameter.from_cents(
				temperament.ratios.ratio_to_cents(note.ratio_numerator, note.ratio_denominator)
			)

		elif method is TuningMethod.RATIO and not parameter.is_ratio and parameter.cents != 0:
			numerator, denominator = temperament.ratios.cents_to_ratio(parameter.cents)
			parameter = temperament.tuning_systems.TuningParameter(numerator, denominator, parameter.cents)

		if parameter == note.parameter:
			converted[name] = note
			continue

		try:
			frequency = _frequency_for(name, parameter, base_frequency, pin_reference)
		except temperament.notes.InvalidNoteName as exc:
			logger.warning(f"Keeping {name} unchanged: {exc}")
			converted[name] = note
			continue

		converted[name] = dataclasses.replace(
			note,
			ratio_numerator = parameter.ratio_numerator,
			ratio_denominator = parameter.ratio_denominator,
			cents = parameter.cents,
			frequency = frequency
		)

	return converted


def notes_to_dict (notes: typing.Mapping[str, NoteConfiguration]) -> typing.Dict[str, typing.Dict[str, typing.Any]]:

	return {name: note.to_dict() for name, note in notes.items()}


def notes_from_dict (
	data: typing.Mapping[str, typing.Mapping[str, typing.Any]],
	base_frequency: float = temperament.constants.reference.DEFAULT_BASE_FREQUENCY
) -> NoteMap:

	return {name: NoteConfiguration.from_dict(record, base_frequency) for name, record in data.items()}
