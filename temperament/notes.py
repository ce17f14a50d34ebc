"""Note names, pitch classes and semitone arithmetic.

This module owns the textual form of a note, ``<PitchClass><Octave>``
(e.g. ``"C#4"``), and its numeric position on the keyboard.

Module-level constants:
- `PC_TO_NOTE_NAME`: Pitch class labels in chromatic order from C
- `NOTE_NAME_TO_PC`: Maps labels (e.g. ``"F#"``) to `PitchClass` members

Two policies for malformed input live side by side:

- The strict path (`parse_note_name`, `note_to_midi`,
  `semitone_offset_from_reference`) raises `InvalidNoteName`. It is used for
  frequency computation, where a bad name means an internal bug.
- The display helpers (`base_note_name`, `note_octave`) return ``""`` and
  ``4`` instead of raising, because they run while a user is typing.
"""

import dataclasses
import enum
import re
import typing

import temperament.constants.reference


NOTE_NAME_PATTERN = re.compile(r"([A-G]#?)([0-9])")

PC_TO_NOTE_NAME: typing.List[str] = [
	"C",
	"C#",
	"D",
	"D#",
	"E",
	"F",
	"F#",
	"G",
	"G#",
	"A",
	"A#",
	"B",
]


class InvalidNoteName (ValueError):
	pass


class PitchClass (enum.IntEnum):

	"""
	The 12 chromatic pitch classes, numbered from C = 0.
	"""

	C = 0
	C_SHARP = 1
	D = 2
	D_SHARP = 3
	E = 4
	F = 5
	F_SHARP = 6
	G = 7
	G_SHARP = 8
	A = 9
	A_SHARP = 10
	B = 11


	@property
	def label (self) -> str:

		"""
		Return the note label used in note names (``"C#"`` rather than ``C_SHARP``).
		"""

		return PC_TO_NOTE_NAME[self.value]


	@property
	def is_black (self) -> bool:

		"""
		True for the five sharps, which sit on the black keys.
		"""

		return "#" in self.label


	def transpose (self, semitones: int) -> "PitchClass":

		"""
		Return the pitch class ``semitones`` above this one, wrapping at the octave.
		"""

		return PitchClass((self.value + semitones) % 12)


NOTE_NAME_TO_PC: typing.Dict[str, PitchClass] = {pc.label: pc for pc in PitchClass}


@dataclasses.dataclass(frozen=True)
class NoteName:

	"""
	A pitch class in a specific octave. Octave 4 contains the reference A.
	"""

	pitch_class: PitchClass
	octave: int


	@classmethod
	def parse (cls, text: str) -> "NoteName":

		"""
		Parse ``"<PitchClass><Octave>"`` strictly. See :func:`parse_note_name`.
		"""

		return parse_note_name(text)


	@property
	def midi_number (self) -> int:

		"""
		MIDI-style index of the note: ``C4 = 60``, ``A4 = 69``.
		"""

		return int(self.pitch_class) + (self.octave + 1) * temperament.constants.reference.SEMITONES_PER_OCTAVE


	def __str__ (self) -> str:

		return f"{self.pitch_class.label}{self.octave}"


@dataclasses.dataclass(frozen=True)
class PianoKey:

	"""
	One key of the on-screen keyboard.
	"""

	note: str
	is_black: bool


def pitch_class_from_label (label: str) -> PitchClass:

	"""Return the pitch class for a label such as ``"C"`` or ``"F#"``.

	Raises:
		InvalidNoteName: If the label is not one of the 12 sharp-spelled names.
	"""

	if label not in NOTE_NAME_TO_PC:
		raise InvalidNoteName(f"Unknown pitch class: {label!r}. Expected one of {PC_TO_NOTE_NAME}.")

	return NOTE_NAME_TO_PC[label]


def parse_note_name (text: str) -> NoteName:

	"""
	Parse a note name of the form ``<PitchClass><Octave>``.

	The pitch class is a letter A-G optionally followed by ``#``; the octave
	is a single decimal digit.

	Parameters:
		text: Note name such as ``"A4"`` or ``"C#3"``.

	Returns:
		The parsed `NoteName`.

	Raises:
		InvalidNoteName: If ``text`` does not match the pattern (``"H4"``,
			``"C"``, ``"invalid"``).

	Example:
		```python
		parse_note_name("F#3")  # → NoteName(pitch_class=PitchClass.F_SHARP, octave=3)
		str(parse_note_name("F#3"))  # → "F#3"
		```
	"""

	match = NOTE_NAME_PATTERN.fullmatch(text) if isinstance(text, str) else None

	if match is None:
		raise InvalidNoteName(f"Invalid note format: {text!r}. Use format like 'A4' or 'C#5'")

	return NoteName(NOTE_NAME_TO_PC[match.group(1)], int(match.group(2)))


def note_to_midi (text: str) -> int:

	"""
	Return the MIDI-style index of a note name (``"A4"`` → 69, ``"C4"`` → 60).
	"""

	return parse_note_name(text).midi_number


def semitone_offset_from_reference (text: str, reference: str = temperament.constants.reference.REFERENCE_NOTE) -> int:

	"""
	Return the signed distance in semitones from ``reference`` (A4 by default).

	Example:
		```python
		semitone_offset_from_reference("C4")  # → -9
		semitone_offset_from_reference("C5")  # → 3
		```
	"""

	return note_to_midi(text) - note_to_midi(reference)


def base_note_name (text: str) -> str:

	"""
	Return the pitch class label of a note name, or ``""`` if it does not parse.
	"""

	try:
		return parse_note_name(text).pitch_class.label
	except InvalidNoteName:
		return ""


def note_octave (text: str) -> int:

	"""
	Return the octave of a note name, or 4 if it does not parse.
	"""

	try:
		return parse_note_name(text).octave
	except InvalidNoteName:
		return 4


def is_black_key (pitch_class: typing.Union[PitchClass, int]) -> bool:

	return PitchClass(pitch_class).is_black


def note_range (start: str, end: str) -> typing.List[PianoKey]:

	"""
	List every key from ``start`` to ``end`` inclusive, lowest first.

	Parameters:
		start: Lowest note name (e.g. ``"A2"``).
		end: Highest note name (e.g. ``"C6"``).

	Returns:
		One `PianoKey` per semitone. ``note_range("A2", "C6")`` has 40 keys.

	Raises:
		InvalidNoteName: If either bound is malformed.
	"""

	low = parse_note_name(start).midi_number
	high = parse_note_name(end).midi_number

	keys: typing.List[PianoKey] = []

	for number in range(low, high + 1):
		octave, pc = divmod(number, 12)
		pitch_class = PitchClass(pc)
		keys.append(PianoKey(note=f"{pitch_class.label}{octave - 1}", is_black=is_black_key(pitch_class)))

	return keys
