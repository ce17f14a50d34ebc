import unittest

import pytest

import temperament.notes


class NoteNameTests (unittest.TestCase):

	"""
	Tests for strict note-name parsing.
	"""

	def test_parse_sharp (self) -> None:

		"""
		A sharp pitch class and single-digit octave should parse.
		"""

		note = temperament.notes.parse_note_name("C#4")

		self.assertEqual(note.pitch_class, temperament.notes.PitchClass.C_SHARP)
		self.assertEqual(note.octave, 4)


	def test_round_trip (self) -> None:

		"""
		Every canonical name should survive parse then str.
		"""

		for octave in range(10):
			for label in temperament.notes.PC_TO_NOTE_NAME:
				text = f"{label}{octave}"
				self.assertEqual(str(temperament.notes.parse_note_name(text)), text)


	def test_classmethod_matches_function (self) -> None:

		"""
		NoteName.parse should agree with parse_note_name.
		"""

		self.assertEqual(temperament.notes.NoteName.parse("G#2"), temperament.notes.parse_note_name("G#2"))


@pytest.mark.parametrize("text", ["invalid", "H4", "C", "", "c4", "Db4", "C10", "4C", "A\u0664", "C\uff14"])
def test_parse_rejects_malformed (text: str) -> None:

	"""Malformed names raise InvalidNoteName, which is a ValueError."""

	with pytest.raises(temperament.notes.InvalidNoteName):
		temperament.notes.parse_note_name(text)

	with pytest.raises(ValueError):
		temperament.notes.note_to_midi(text)


@pytest.mark.parametrize("text, expected", [
	("A4", 69),
	("C4", 60),
	("C5", 72),
	("C3", 48),
	("G4", 67),
	("F#3", 54),
	("C0", 12),
])
def test_note_to_midi (text: str, expected: int) -> None:

	"""Notes are numbered MIDI-style with C4 = 60."""

	assert temperament.notes.note_to_midi(text) == expected


@pytest.mark.parametrize("text, expected", [
	("A4", 0),
	("C4", -9),
	("C5", 3),
	("A3", -12),
	("A5", 12),
])
def test_semitone_offset_from_reference (text: str, expected: int) -> None:

	"""Offsets are measured from A4 by default."""

	assert temperament.notes.semitone_offset_from_reference(text) == expected


def test_semitone_offset_custom_reference () -> None:

	"""Any note can serve as the reference."""

	assert temperament.notes.semitone_offset_from_reference("B3", reference="C4") == -1


def test_semitone_offset_raises_for_invalid () -> None:

	"""The frequency path does not swallow bad names."""

	with pytest.raises(temperament.notes.InvalidNoteName):
		temperament.notes.semitone_offset_from_reference("invalid")


def test_base_note_name () -> None:

	"""The display helper extracts the pitch class label."""

	assert temperament.notes.base_note_name("C4") == "C"
	assert temperament.notes.base_note_name("F#3") == "F#"
	assert temperament.notes.base_note_name("G#5") == "G#"


def test_base_note_name_lenient () -> None:

	"""Unparseable names give an empty label instead of raising."""

	assert temperament.notes.base_note_name("invalidNote") == ""
	assert temperament.notes.base_note_name("") == ""


def test_note_octave () -> None:

	"""The display helper extracts the octave, defaulting to 4."""

	assert temperament.notes.note_octave("F#3") == 3
	assert temperament.notes.note_octave("G#5") == 5
	assert temperament.notes.note_octave("invalidNote") == 4
	assert temperament.notes.note_octave("") == 4


def test_pitch_class_labels () -> None:

	"""There are exactly 12 pitch classes in chromatic order from C."""

	labels = [pc.label for pc in temperament.notes.PitchClass]

	assert labels == ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
	assert temperament.notes.pitch_class_from_label("A") == 9


def test_pitch_class_from_label_rejects_flats () -> None:

	"""Only sharp spellings are pitch class labels."""

	with pytest.raises(temperament.notes.InvalidNoteName):
		temperament.notes.pitch_class_from_label("Bb")


def test_transpose_wraps () -> None:

	"""Pitch classes are cyclic."""

	assert temperament.notes.PitchClass.B.transpose(1) is temperament.notes.PitchClass.C
	assert temperament.notes.PitchClass.C.transpose(-3) is temperament.notes.PitchClass.A


def test_note_range_single_octave () -> None:

	"""A short range lists every key with its colour."""

	keys = temperament.notes.note_range("C4", "E4")

	assert [key.note for key in keys] == ["C4", "C#4", "D4", "D#4", "E4"]
	assert [key.is_black for key in keys] == [False, True, False, True, False]


def test_note_range_crosses_octave () -> None:

	"""Ranges continue across the B-C boundary."""

	keys = temperament.notes.note_range("A3", "C4")

	assert [key.note for key in keys] == ["A3", "A#3", "B3", "C4"]


def test_note_range_full_keyboard () -> None:

	"""A2 to C6 is 40 keys."""

	keys = temperament.notes.note_range("A2", "C6")

	assert len(keys) == 40
	assert keys[0] == temperament.notes.PianoKey(note="A2", is_black=False)
	assert keys[-1] == temperament.notes.PianoKey(note="C6", is_black=False)


def test_note_range_rejects_invalid_bounds () -> None:

	"""Malformed bounds raise."""

	with pytest.raises(temperament.notes.InvalidNoteName):
		temperament.notes.note_range("invalid", "C4")

	with pytest.raises(temperament.notes.InvalidNoteName):
		temperament.notes.note_range("C4", "invalid")


def test_is_black_key () -> None:

	"""Only the five sharps are black keys."""

	black = [pc for pc in temperament.notes.PitchClass if temperament.notes.is_black_key(pc)]

	assert [pc.label for pc in black] == ["C#", "D#", "F#", "G#", "A#"]
	assert temperament.notes.is_black_key(1) is True
