import argparse
import json
import logging
import os
import time
import typing

import yaml

import temperament.constants.reference
import temperament.keyboard
import temperament.tuning_systems
import temperament.web_api


logger = logging.getLogger(__name__)


DEFAULT_CONFIG: typing.Dict[str, typing.Dict[str, typing.Any]] = {
	"tuning": {
		"base_frequency": temperament.constants.reference.DEFAULT_BASE_FREQUENCY,
		"system": temperament.constants.reference.DEFAULT_SYSTEM,
		"decay_length": temperament.constants.reference.DEFAULT_DECAY_LENGTH,
	},
	"keyboard": {
		"low": temperament.constants.reference.KEYBOARD_LOW,
		"high": temperament.constants.reference.KEYBOARD_HIGH,
	},
	"server": {
		"host": "127.0.0.1",
		"port": 5000,
	},
}


def load_config (config_path: str = 'config.yaml') -> dict:

	"""
	Load configuration from a YAML file, filling in defaults section by section.
	"""

	config = {section: dict(values) for section, values in DEFAULT_CONFIG.items()}

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return config

	with open(config_path, 'r') as f:
		loaded = yaml.safe_load(f) or {}

	for section, values in loaded.items():
		if isinstance(values, dict):
			config.setdefault(section, {}).update(values)

	return config


def build_parser () -> argparse.ArgumentParser:

	parser = argparse.ArgumentParser(prog="temperament", description="Piano tuning engine")
	parser.add_argument("--config", default="config.yaml", help="YAML config file (default: config.yaml)")

	commands = parser.add_subparsers(dest="command", required=True)

	commands.add_parser("systems", help="List the available tuning systems")

	table = commands.add_parser("table", help="Print the note table for a tuning system")
	table.add_argument("--system", help="Tuning system key, alias or title")
	table.add_argument("--base-frequency", type=float, help="Frequency of A4 in Hz")
	table.add_argument("--low", help="Lowest key (e.g. A2)")
	table.add_argument("--high", help="Highest key (e.g. C6)")
	table.add_argument("--json", action="store_true", help="Emit the table as JSON")

	serve = commands.add_parser("serve", help="Run the tuning configuration API")
	serve.add_argument("--host", help="Bind address")
	serve.add_argument("--port", type=int, help="Port")

	return parser


def format_table (notes: temperament.keyboard.NoteMap) -> str:

	"""
	Render a note table as aligned text, frequencies to 2 decimals.
	"""

	lines = [f"{'Note':<5} {'Ratio':>10} {'Cents':>8} {'Frequency':>10}"]

	for note in notes.values():
		lines.append(f"{note.name:<5} {note.ratio:>10} {note.cents:>8.1f} {note.frequency:>10.2f}")

	return "\n".join(lines)


def run_table (args: argparse.Namespace, config: dict) -> None:

	base_frequency = args.base_frequency or config["tuning"]["base_frequency"]
	system = args.system or config["tuning"]["system"]

	notes = temperament.keyboard.populate(
		base_frequency,
		system,
		low = args.low or config["keyboard"]["low"],
		high = args.high or config["keyboard"]["high"]
	)

	if args.json:
		print(json.dumps(temperament.keyboard.notes_to_dict(notes), indent=2))
		return

	print(f"{temperament.tuning_systems.system_title(system)} at A4 = {base_frequency} Hz")
	print(format_table(notes))


def run_server (args: argparse.Namespace, config: dict) -> None:

	server = temperament.web_api.TuningApiServer(
		host = args.host or config["server"]["host"],
		port = args.port if args.port is not None else config["server"]["port"]
	)

	server.start()

	try:
		while True:
			time.sleep(1)
	except KeyboardInterrupt:
		logger.info("Stopping...")
	finally:
		server.stop()


def main (argv: typing.Optional[typing.List[str]] = None) -> None:

	"""
	Main entry point for the temperament command line.
	"""

	logging.basicConfig(level=logging.INFO)

	args = build_parser().parse_args(argv)
	config = load_config(args.config)

	if args.command == "systems":
		for key, title in temperament.tuning_systems.available_tuning_systems():
			print(f"{key:<22} {title}")

	elif args.command == "table":
		run_table(args, config)

	else:
		run_server(args, config)


if __name__ == "__main__":
	main()
