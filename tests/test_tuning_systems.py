import threading
import typing

import pytest

import temperament.notes
import temperament.ratios
import temperament.tuning_systems


PC = temperament.notes.PitchClass
TuningSystem = temperament.tuning_systems.TuningSystem


@pytest.fixture
def custom_system () -> typing.Iterator[str]:

	"""Register a throwaway system and remove it afterwards."""

	name = "test_septimal"
	ratios = [(1, 1), (15, 14), (8, 7), (6, 5), (5, 4), (4, 3), (7, 5), (3, 2), (8, 5), (5, 3), (7, 4), (15, 8)]

	temperament.tuning_systems.register_tuning_system(name, ratios=ratios, title="Test Septimal")

	yield name

	temperament.tuning_systems.unregister_tuning_system(name)


def _ratios (system: TuningSystem) -> typing.Dict[str, str]:

	table = temperament.tuning_systems.generate_tuning_table(system)

	return {pc.label: parameter.ratio for pc, parameter in table.items()}


@pytest.mark.parametrize("system", list(TuningSystem))
def test_every_system_covers_twelve_pitch_classes (system: TuningSystem) -> None:

	"""Each table has one entry per pitch class, in chromatic order."""

	table = temperament.tuning_systems.generate_tuning_table(system)

	assert list(table.keys()) == list(PC)


@pytest.mark.parametrize("system", list(TuningSystem))
def test_tonic_is_unison (system: TuningSystem) -> None:

	"""C is always 1/1 and 0 cents."""

	tonic = temperament.tuning_systems.generate_tuning_table(system)[PC.C]

	assert tonic == temperament.tuning_systems.TuningParameter(1, 1, 0.0)
	assert tonic.ratio == "1/1"


def test_equal_temperament () -> None:

	"""Equal temperament is 100 cents per semitone, driven by cents."""

	table = temperament.tuning_systems.generate_tuning_table(TuningSystem.EQUAL)

	assert [parameter.cents for parameter in table.values()] == [100.0 * i for i in range(12)]
	assert all(not parameter.is_ratio for parameter in table.values())


def test_just_intonation_ratios () -> None:

	"""The diatonic 5-limit ratios over C."""

	ratios = _ratios(TuningSystem.JUST)

	assert ratios["C"] == "1/1"
	assert ratios["D"] == "9/8"
	assert ratios["E"] == "5/4"
	assert ratios["F"] == "4/3"
	assert ratios["G"] == "3/2"
	assert ratios["A"] == "5/3"
	assert ratios["B"] == "15/8"


def test_pythagorean_ratios () -> None:

	"""Stacked fifths give 81/64 thirds and a 243/128 leading tone."""

	ratios = _ratios(TuningSystem.PYTHAGOREAN)

	assert ratios["C"] == "1/1"
	assert ratios["D"] == "9/8"
	assert ratios["E"] == "81/64"
	assert ratios["F"] == "4/3"
	assert ratios["G"] == "3/2"
	assert ratios["A"] == "27/16"
	assert ratios["B"] == "243/128"


def test_quarter_comma_meantone_fixed_points () -> None:

	"""Pure major third and the narrowed fifth."""

	table = temperament.tuning_systems.generate_tuning_table(TuningSystem.QUARTER_COMMA_MEANTONE)

	assert table[PC.E].cents == pytest.approx(386.3)
	assert table[PC.G].cents == pytest.approx(696.6)
	assert table[PC.E].ratio == "1/1"


def test_well_temperaments_are_cents_driven () -> None:

	"""Werckmeister and Kirnberger carry trivial ratios and ascending cents."""

	for system in (TuningSystem.WERCKMEISTER_III, TuningSystem.KIRNBERGER_III):

		table = temperament.tuning_systems.generate_tuning_table(system)
		cents = [parameter.cents for parameter in table.values()]

		assert cents == sorted(cents)
		assert all(parameter.ratio == "1/1" for parameter in table.values())


def test_kirnberger_pure_third () -> None:

	"""Kirnberger III keeps C-E pure."""

	table = temperament.tuning_systems.generate_tuning_table(TuningSystem.KIRNBERGER_III)

	assert table[PC.E].cents == pytest.approx(temperament.ratios.ratio_to_cents(5, 4), abs=0.1)


def test_centaur_fixed_points () -> None:

	"""Centaur's septimal semitone and harmonic seventh."""

	ratios = _ratios(TuningSystem.CENTAUR)

	assert ratios["C#"] == "21/20"
	assert ratios["A#"] == "7/4"
	assert ratios["G#"] == "14/9"


def test_young_well_tuned_fixed_points () -> None:

	"""Young's 7-limit tritone and seventh after transposition to C."""

	ratios = _ratios(TuningSystem.YOUNG_WELL_TUNED)

	assert ratios["F#"] == "189/128"
	assert ratios["A#"] == "441/256"


@pytest.mark.parametrize("system", [TuningSystem.JUST, TuningSystem.PYTHAGOREAN, TuningSystem.YOUNG_WELL_TUNED, TuningSystem.CENTAUR])
def test_ratio_systems_show_derived_cents (system: TuningSystem) -> None:

	"""Cents carried by ratio systems are exactly 1200 * log2(n / d)."""

	for pitch_class, parameter in temperament.tuning_systems.generate_tuning_table(system).items():

		expected = temperament.ratios.ratio_to_cents(parameter.ratio_numerator, parameter.ratio_denominator)

		assert parameter.cents == expected

		if pitch_class is not PC.C:
			assert parameter.is_ratio


def test_tables_are_fresh_copies () -> None:

	"""Callers may modify a table without affecting the next one."""

	first = temperament.tuning_systems.generate_tuning_table("just")
	first.clear()

	assert len(temperament.tuning_systems.generate_tuning_table("just")) == 12


@pytest.mark.parametrize("name, expected", [
	("equal", TuningSystem.EQUAL),
	("quarterCommaMeantone", TuningSystem.QUARTER_COMMA_MEANTONE),
	("quarter", TuningSystem.QUARTER_COMMA_MEANTONE),
	("werckmeister3", TuningSystem.WERCKMEISTER_III),
	("kirnberger3", TuningSystem.KIRNBERGER_III),
	("Young's Well-Tuned Piano (C)", TuningSystem.YOUNG_WELL_TUNED),
	("7-limit Centaur", TuningSystem.CENTAUR),
	(TuningSystem.JUST, TuningSystem.JUST),
])
def test_resolve_tuning_system (name: typing.Any, expected: TuningSystem) -> None:

	"""Keys, aliases, titles and members all resolve."""

	assert temperament.tuning_systems.resolve_tuning_system(name) is expected


def test_resolve_unknown_system () -> None:

	"""Unknown names raise UnknownTuningSystem."""

	with pytest.raises(temperament.tuning_systems.UnknownTuningSystem, match="bohlen"):
		temperament.tuning_systems.generate_tuning_table("bohlen")


def test_available_systems_order () -> None:

	"""Built-ins are listed in selector order."""

	keys = [key for key, _ in temperament.tuning_systems.available_tuning_systems()]

	assert keys[:8] == [member.value for member in TuningSystem]
	assert temperament.tuning_systems.system_title("werckmeisterIII") == "Werckmeister III"


def test_register_custom_system (custom_system: str) -> None:

	"""A registered system behaves like a built-in."""

	table = temperament.tuning_systems.generate_tuning_table(custom_system)

	assert table[PC.C].ratio == "1/1"
	assert table[PC.A_SHARP].ratio == "7/4"
	assert (custom_system, "Test Septimal") in temperament.tuning_systems.available_tuning_systems()
	assert temperament.tuning_systems.system_title(custom_system) == "Test Septimal"


def test_register_custom_cents_system () -> None:

	"""Cents-based custom systems keep a 1/1 ratio."""

	temperament.tuning_systems.register_tuning_system("test_cents", cents=[i * 100.0 + 5 * (i % 2) for i in range(12)])

	try:
		table = temperament.tuning_systems.generate_tuning_table("test_cents")
		assert table[PC.C_SHARP].cents == pytest.approx(105.0)
		assert table[PC.C_SHARP].ratio == "1/1"
	finally:
		temperament.tuning_systems.unregister_tuning_system("test_cents")


@pytest.mark.parametrize("kwargs", [
	{"ratios": [(1, 1)] * 11},
	{"ratios": [(2, 1)] + [(1, 1)] * 11},
	{"ratios": [(1, 1)] + [(0, 1)] * 11},
	{"cents": [1.0] + [0.0] * 11},
	{},
	{"ratios": [(1, 1)] * 12, "cents": [0.0] * 12},
])
def test_register_rejects_bad_definitions (kwargs: typing.Dict[str, typing.Any]) -> None:

	"""Incomplete or inconsistent tables are refused."""

	with pytest.raises(ValueError):
		temperament.tuning_systems.register_tuning_system("test_bad", **kwargs)


def test_register_cannot_replace_builtin () -> None:

	"""Built-in keys and aliases are reserved."""

	with pytest.raises(ValueError, match="built-in"):
		temperament.tuning_systems.register_tuning_system("just", cents=[0.0] * 12)


def test_unregister_unknown () -> None:

	"""Removing a system that was never registered raises."""

	with pytest.raises(temperament.tuning_systems.UnknownTuningSystem):
		temperament.tuning_systems.unregister_tuning_system("never_registered")


def test_just_fifth_keeps_exact_cents () -> None:

	"""The just fifth carries 701.955 cents, not a rounded 702."""

	table = temperament.tuning_systems.generate_tuning_table("just")

	assert table[PC.G].cents == temperament.ratios.ratio_to_cents(3, 2)
	assert table[PC.G].cents == pytest.approx(701.955, abs=1e-3)
	assert table[PC.G].cents != 702.0


def test_registry_is_safe_across_threads () -> None:

	"""Listing and generating while another thread registers never fails."""

	errors: typing.List[BaseException] = []
	done = threading.Event()

	def churn () -> None:

		try:
			for i in range(200):
				name = f"test_churn_{i}"
				temperament.tuning_systems.register_tuning_system(name, cents=[100.0 * j for j in range(12)])
				temperament.tuning_systems.unregister_tuning_system(name)
		except BaseException as exc:
			errors.append(exc)
		finally:
			done.set()

	worker = threading.Thread(target=churn)
	worker.start()

	while not done.is_set():
		temperament.tuning_systems.available_tuning_systems()
		assert len(temperament.tuning_systems.generate_tuning_table("just")) == 12

	worker.join(timeout=5)

	assert errors == []
	assert not any(key.startswith("test_churn_") for key, _ in temperament.tuning_systems.available_tuning_systems())
