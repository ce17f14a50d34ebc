"""Saved tuning configurations.

A `TuningConfig` bundles a name, the base frequency, the playback decay
length and a full note table. `MemStorage` keeps configurations in memory
behind a lock so the threaded HTTP API can share one instance.

Payloads arrive as JSON-shaped dicts with camelCase keys and are checked by
:func:`validate_config_payload` before they reach the store.
"""

import dataclasses
import logging
import math
import numbers
import threading
import typing

import temperament.constants.reference
import temperament.keyboard
import temperament.notes


logger = logging.getLogger(__name__)


class ConfigValidationError (ValueError):
	pass


@dataclasses.dataclass
class TuningConfig:

	"""
	A saved tuning configuration.
	"""

	id: int
	name: str
	notes: temperament.keyboard.NoteMap
	base_frequency: float = temperament.constants.reference.DEFAULT_BASE_FREQUENCY
	decay_length: float = temperament.constants.reference.DEFAULT_DECAY_LENGTH
	created_by: typing.Optional[str] = None


	def to_dict (self) -> typing.Dict[str, typing.Any]:

		return {
			"id": self.id,
			"name": self.name,
			"baseFrequency": self.base_frequency,
			"decayLength": self.decay_length,
			"notes": temperament.keyboard.notes_to_dict(self.notes),
			"createdBy": self.created_by,
		}


	@classmethod
	def from_dict (cls, data: typing.Mapping[str, typing.Any]) -> "TuningConfig":

		base_frequency = float(data.get("baseFrequency", temperament.constants.reference.DEFAULT_BASE_FREQUENCY))

		return cls(
			id = int(data["id"]),
			name = data["name"],
			notes = temperament.keyboard.notes_from_dict(data["notes"], base_frequency),
			base_frequency = base_frequency,
			decay_length = float(data.get("decayLength", temperament.constants.reference.DEFAULT_DECAY_LENGTH)),
			created_by = data.get("createdBy")
		)


def _is_number (value: typing.Any) -> bool:

	return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def _is_positive_int (value: typing.Any) -> bool:

	return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _validate_note (key: str, record: typing.Any) -> None:

	if not isinstance(record, dict):
		raise ConfigValidationError(f"notes.{key}: expected an object")

	if not isinstance(record.get("name"), str):
		raise ConfigValidationError(f"notes.{key}.name: expected a string")

	try:
		temperament.notes.parse_note_name(record["name"])
	except temperament.notes.InvalidNoteName as exc:
		raise ConfigValidationError(f"notes.{key}.name: {exc}")

	if record["name"] != key:
		raise ConfigValidationError(f"notes.{key}.name: does not match its key")

	for field in ("ratioNumerator", "ratioDenominator"):
		if not _is_positive_int(record.get(field)):
			raise ConfigValidationError(f"notes.{key}.{field}: expected a positive integer")

	if not _is_number(record.get("cents")):
		raise ConfigValidationError(f"notes.{key}.cents: expected a number")

	if record.get("frequency") is not None and not _is_number(record["frequency"]):
		raise ConfigValidationError(f"notes.{key}.frequency: expected a number")


def validate_config_payload (data: typing.Any, partial: bool = False) -> typing.Dict[str, typing.Any]:

	"""
	Check a create or update payload and return the accepted fields.

	Parameters:
		data: Decoded JSON body.
		partial: When True (updates), every field is optional and no defaults
			are filled in.

	Returns:
		A new dict holding only the recognised keys (``name``,
		``baseFrequency``, ``decayLength``, ``notes``, ``createdBy``). For
		full payloads, ``baseFrequency`` defaults to 440 and ``decayLength``
		to 3.0.

	Raises:
		ConfigValidationError: Naming the first offending field.
	"""

	if not isinstance(data, dict):
		raise ConfigValidationError("Expected a JSON object")

	accepted: typing.Dict[str, typing.Any] = {}

	if "name" in data or not partial:
		if not isinstance(data.get("name"), str) or not data["name"].strip():
			raise ConfigValidationError("name: required non-empty string")
		accepted["name"] = data["name"]

	for field, default in (
		("baseFrequency", temperament.constants.reference.DEFAULT_BASE_FREQUENCY),
		("decayLength", temperament.constants.reference.DEFAULT_DECAY_LENGTH),
	):

		if data.get(field) is None:
			if not partial:
				accepted[field] = default
			continue

		if not _is_number(data[field]) or data[field] <= 0:
			raise ConfigValidationError(f"{field}: expected a positive number")

		accepted[field] = float(data[field])

	if "notes" in data or not partial:

		notes = data.get("notes")

		if not isinstance(notes, dict):
			raise ConfigValidationError("notes: required object of note configurations")

		for key, record in notes.items():
			_validate_note(key, record)

		accepted["notes"] = notes

	if data.get("createdBy") is not None:
		if not isinstance(data["createdBy"], str):
			raise ConfigValidationError("createdBy: expected a string")
		accepted["createdBy"] = data["createdBy"]

	return accepted


class MemStorage:

	"""
	In-memory tuning configuration store. Ids start at 1 and are never reused.
	"""

	def __init__ (self) -> None:

		self._configs: typing.Dict[int, TuningConfig] = {}
		self._next_id = 1
		self._lock = threading.Lock()


	def get_configs (self) -> typing.List[TuningConfig]:

		with self._lock:
			return list(self._configs.values())


	def get_config (self, config_id: int) -> typing.Optional[TuningConfig]:

		with self._lock:
			return self._configs.get(config_id)


	def create_config (self, payload: typing.Mapping[str, typing.Any]) -> TuningConfig:

		"""
		Validate and store a new configuration, returning it with its id.
		"""

		accepted = validate_config_payload(dict(payload))

		with self._lock:

			config = TuningConfig.from_dict({**accepted, "id": self._next_id})
			self._configs[config.id] = config
			self._next_id += 1

		logger.info(f"Saved tuning configuration {config.id} ({config.name!r}, {len(config.notes)} notes)")

		return config


	def update_config (self, config_id: int, payload: typing.Mapping[str, typing.Any]) -> typing.Optional[TuningConfig]:

		"""
		Apply a partial update. Returns None if the id is unknown.

		A supplied ``notes`` table replaces the stored one entirely.
		"""

		accepted = validate_config_payload(dict(payload), partial=True)

		with self._lock:

			existing = self._configs.get(config_id)

			if existing is None:
				return None

			updated = TuningConfig.from_dict({**existing.to_dict(), **accepted})
			self._configs[config_id] = updated

		logger.info(f"Updated tuning configuration {config_id}")

		return updated


	def delete_config (self, config_id: int) -> bool:

		with self._lock:
			deleted = self._configs.pop(config_id, None) is not None

		if deleted:
			logger.info(f"Deleted tuning configuration {config_id}")

		return deleted
