"""Tuning systems and the per-pitch-class table generator.

A tuning table maps each of the 12 pitch classes to a `TuningParameter`
describing its interval above the tonic C. The tonic is always ``1/1`` and
0 cents; the generator writes it directly rather than reading it from a table.

Each system picks one authoritative encoding:

- Ratio systems (``just``, ``pythagorean``, ``youngWellTuned``, ``centaur``)
  carry the ratio, plus cents derived from it for display.
- Cents systems (``equal`` and the well-temperaments) carry cents with a
  trivial ``1/1`` ratio.

User-defined 12-tone tables can be added with :func:`register_tuning_system`
and are then accepted anywhere a built-in system name is.
"""

import dataclasses
import enum
import logging
import threading
import typing

import temperament.constants.reference
import temperament.constants.tunings
import temperament.notes
import temperament.ratios


logger = logging.getLogger(__name__)


class UnknownTuningSystem (ValueError):
	pass


class TuningSystem (enum.Enum):

	"""
	The built-in tuning systems, valued by their persistence keys.
	"""

	EQUAL = "equal"
	JUST = "just"
	PYTHAGOREAN = "pythagorean"
	QUARTER_COMMA_MEANTONE = "quarterCommaMeantone"
	WERCKMEISTER_III = "werckmeisterIII"
	KIRNBERGER_III = "kirnbergerIII"
	YOUNG_WELL_TUNED = "youngWellTuned"
	CENTAUR = "centaur"


	@property
	def title (self) -> str:

		"""
		Human-readable name, as shown on the tuning selector.
		"""

		return SYSTEM_TITLES[self]


SYSTEM_TITLES: typing.Dict[TuningSystem, str] = {
	TuningSystem.EQUAL: "Equal Temperament",
	TuningSystem.JUST: "Just Intonation",
	TuningSystem.PYTHAGOREAN: "Pythagorean",
	TuningSystem.QUARTER_COMMA_MEANTONE: "Quarter-comma Meantone",
	TuningSystem.WERCKMEISTER_III: "Werckmeister III",
	TuningSystem.KIRNBERGER_III: "Kirnberger III",
	TuningSystem.YOUNG_WELL_TUNED: "Young's Well-Tuned Piano (C)",
	TuningSystem.CENTAUR: "7-limit Centaur",
}

# Short keys used by earlier saved configurations and the preset buttons.
SYSTEM_ALIASES: typing.Dict[str, TuningSystem] = {
	"quarter": TuningSystem.QUARTER_COMMA_MEANTONE,
	"meantone": TuningSystem.QUARTER_COMMA_MEANTONE,
	"werckmeister3": TuningSystem.WERCKMEISTER_III,
	"kirnberger3": TuningSystem.KIRNBERGER_III,
}


@dataclasses.dataclass(frozen=True)
class TuningParameter:

	"""
	The interval of one pitch class above the tonic.

	``ratio_numerator/ratio_denominator`` is authoritative whenever it is not
	``1/1``; otherwise ``cents`` is.
	"""

	ratio_numerator: int = 1
	ratio_denominator: int = 1
	cents: float = 0.0


	@classmethod
	def unison (cls) -> "TuningParameter":

		return cls(1, 1, 0.0)


	@classmethod
	def from_ratio (cls, numerator: int, denominator: int) -> "TuningParameter":

		"""
		Build a ratio-authoritative parameter carrying the exact cents of the ratio.
		"""

		return cls(numerator, denominator, temperament.ratios.ratio_to_cents(numerator, denominator))


	@classmethod
	def from_cents (cls, cents: float) -> "TuningParameter":

		return cls(1, 1, float(cents))


	@property
	def ratio (self) -> str:

		return temperament.ratios.format_ratio(self.ratio_numerator, self.ratio_denominator)


	@property
	def is_ratio (self) -> bool:

		"""
		True when the ratio, not the cents value, drives the pitch.
		"""

		return self.ratio_numerator != 1 or self.ratio_denominator != 1


TuningTable = typing.Dict[temperament.notes.PitchClass, TuningParameter]
SystemKey = typing.Union[TuningSystem, str]


@dataclasses.dataclass(frozen=True)
class _RegisteredSystem:

	title: str
	table: typing.Tuple[TuningParameter, ...]


_RATIO_TABLES: typing.Dict[TuningSystem, temperament.constants.tunings.RatioTable] = {
	TuningSystem.JUST: temperament.constants.tunings.JUST_RATIOS,
	TuningSystem.PYTHAGOREAN: temperament.constants.tunings.PYTHAGOREAN_RATIOS,
	TuningSystem.YOUNG_WELL_TUNED: temperament.constants.tunings.YOUNG_WELL_TUNED_RATIOS,
	TuningSystem.CENTAUR: temperament.constants.tunings.CENTAUR_RATIOS,
}

_CENTS_TABLES: typing.Dict[TuningSystem, temperament.constants.tunings.CentsTable] = {
	TuningSystem.QUARTER_COMMA_MEANTONE: temperament.constants.tunings.QUARTER_COMMA_MEANTONE_CENTS,
	TuningSystem.WERCKMEISTER_III: temperament.constants.tunings.WERCKMEISTER_III_CENTS,
	TuningSystem.KIRNBERGER_III: temperament.constants.tunings.KIRNBERGER_III_CENTS,
}

_REGISTERED_SYSTEMS: typing.Dict[str, _RegisteredSystem] = {}
_REGISTRY_LOCK = threading.Lock()


def _registered_system (name: str) -> _RegisteredSystem:

	with _REGISTRY_LOCK:
		registered = _REGISTERED_SYSTEMS.get(name)

	if registered is None:
		raise UnknownTuningSystem(f"Tuning system {name!r} is not registered")

	return registered


def resolve_tuning_system (system: SystemKey) -> SystemKey:

	"""
	Resolve an enum member, persistence key, alias or display title.

	Returns the `TuningSystem` member for built-ins, or the registered name for
	systems added with :func:`register_tuning_system`.

	Raises:
		UnknownTuningSystem: If nothing matches.

	Example:
		```python
		resolve_tuning_system("just")              # → TuningSystem.JUST
		resolve_tuning_system("werckmeister3")     # → TuningSystem.WERCKMEISTER_III
		resolve_tuning_system("7-limit Centaur")   # → TuningSystem.CENTAUR
		```
	"""

	if isinstance(system, TuningSystem):
		return system

	with _REGISTRY_LOCK:
		if system in _REGISTERED_SYSTEMS:
			return system

	for member in TuningSystem:
		if system == member.value or system == member.title:
			return member

	if system in SYSTEM_ALIASES:
		return SYSTEM_ALIASES[system]

	raise UnknownTuningSystem(
		f"Unknown tuning system: {system!r}. Available: {[key for key, _ in available_tuning_systems()]}"
	)


def system_title (system: SystemKey) -> str:

	resolved = resolve_tuning_system(system)

	if isinstance(resolved, TuningSystem):
		return resolved.title

	return _registered_system(resolved).title


def available_tuning_systems () -> typing.List[typing.Tuple[str, str]]:

	"""
	Return ``(key, title)`` pairs, built-in systems first in selector order.
	"""

	systems = [(member.value, member.title) for member in TuningSystem]
	with _REGISTRY_LOCK:
		systems.extend((name, registered.title) for name, registered in _REGISTERED_SYSTEMS.items())

	return systems


def _builtin_parameter (system: TuningSystem, pitch_class: temperament.notes.PitchClass) -> TuningParameter:

	if system is TuningSystem.EQUAL:
		return TuningParameter.from_cents(temperament.constants.reference.CENTS_PER_SEMITONE * int(pitch_class))

	if system in _RATIO_TABLES:
		return TuningParameter.from_ratio(*_RATIO_TABLES[system][pitch_class])

	return TuningParameter.from_cents(_CENTS_TABLES[system][pitch_class])


def generate_tuning_table (system: SystemKey = TuningSystem.EQUAL) -> TuningTable:

	"""
	Build the 12-entry tuning table for a system, relative to the tonic C.

	Parameters:
		system: A `TuningSystem`, its key (``"just"``), an alias, a display
			title, or the name of a registered custom system.

	Returns:
		A new dict with one `TuningParameter` per `PitchClass`, in chromatic
		order. ``table[PitchClass.C]`` is always the unison.

	Raises:
		UnknownTuningSystem: If ``system`` cannot be resolved.

	Example:
		```python
		table = generate_tuning_table("just")
		table[PitchClass.G].ratio  # → "3/2"
		table[PitchClass.G].cents  # → 701.955...
		```
	"""

	resolved = resolve_tuning_system(system)
	registered = None if isinstance(resolved, TuningSystem) else _registered_system(resolved)
	table: TuningTable = {temperament.notes.PitchClass.C: TuningParameter.unison()}

	for pitch_class in temperament.notes.PitchClass:

		if pitch_class is temperament.notes.PitchClass.C:
			continue

		if isinstance(resolved, TuningSystem):
			table[pitch_class] = _builtin_parameter(resolved, pitch_class)

		elif registered is not None:
			table[pitch_class] = registered.table[pitch_class]

	return table


def register_tuning_system (
	name: str,
	ratios: typing.Optional[typing.Sequence[typing.Tuple[int, int]]] = None,
	cents: typing.Optional[typing.Sequence[float]] = None,
	title: typing.Optional[str] = None
) -> None:

	"""
	Register a custom 12-tone tuning so it can be selected by name.

	Give exactly one of ``ratios`` or ``cents``, listing the 12 pitch classes
	from C. The first entry is the tonic and must be the unison.

	Parameters:
		name: Key used to select the system. Must not clash with a built-in key
			or alias.
		ratios: 12 ``(numerator, denominator)`` pairs of positive integers.
		cents: 12 offsets from C in cents.
		title: Display name (defaults to ``name``).

	Raises:
		ValueError: If the definition is incomplete or inconsistent.

	Example:
		```python
		register_tuning_system("partch_subset", ratios=[(1, 1), (16, 15), ...])
		generate_tuning_table("partch_subset")
		```
	"""

	if not name:
		raise ValueError("Tuning system name must not be empty")

	if any(name == member.value for member in TuningSystem) or name in SYSTEM_ALIASES:
		raise ValueError(f"Cannot replace built-in tuning system {name!r}")

	if (ratios is None) == (cents is None):
		raise ValueError("Provide exactly one of ratios or cents")

	entries: typing.Sequence[typing.Any] = ratios if ratios is not None else cents  # type: ignore[assignment]

	if len(entries) != temperament.constants.reference.SEMITONES_PER_OCTAVE:
		raise ValueError(f"A tuning table needs 12 entries, got {len(entries)}")

	parameters: typing.List[TuningParameter] = [TuningParameter.unison()]

	if ratios is not None:

		if tuple(ratios[0]) != (1, 1):
			raise ValueError("The first entry (C) must be 1/1")

		for numerator, denominator in ratios[1:]:
			if numerator <= 0 or denominator <= 0:
				raise ValueError(f"Ratio terms must be positive, got {numerator}/{denominator}")
			parameters.append(TuningParameter.from_ratio(int(numerator), int(denominator)))

	else:

		if cents[0] != 0:  # type: ignore[index]
			raise ValueError("The first entry (C) must be 0 cents")

		parameters.extend(TuningParameter.from_cents(value) for value in cents[1:])  # type: ignore[index]

	with _REGISTRY_LOCK:
		_REGISTERED_SYSTEMS[name] = _RegisteredSystem(title=title or name, table=tuple(parameters))

	logger.info(f"Registered tuning system {name!r}")


def unregister_tuning_system (name: str) -> None:

	"""
	Remove a custom system. Raises ``UnknownTuningSystem`` if it was never registered.
	"""

	with _REGISTRY_LOCK:

		if name not in _REGISTERED_SYSTEMS:
			raise UnknownTuningSystem(f"Tuning system {name!r} is not registered")

		del _REGISTERED_SYSTEMS[name]
