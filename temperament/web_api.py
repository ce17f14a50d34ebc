"""JSON HTTP API for saved tunings and the tuning engine.

Routes (all under ``/api``):

- ``GET    /tuning-configs``            - list saved configurations
- ``POST   /tuning-configs``            - create one (201)
- ``GET    /tuning-configs/<id>``       - fetch one
- ``PUT    /tuning-configs/<id>``       - partial update
- ``DELETE /tuning-configs/<id>``       - delete (204)
- ``GET    /tuning-systems``            - built-in and registered systems
- ``GET    /tuning-table?system=just&baseFrequency=440`` - a populated keyboard

Errors are returned as ``{"message": ...}`` with status 400, 404 or 500.
The server runs in a daemon thread so it never blocks the caller.
"""

import http.server
import json
import logging
import re
import threading
import typing
import urllib.parse

import temperament.constants.reference
import temperament.keyboard
import temperament.notes
import temperament.storage
import temperament.tuning_systems


logger = logging.getLogger(__name__)

CONFIG_ROUTE = re.compile(r"^/api/tuning-configs/([^/]+)$")


class _ApiError (Exception):

	def __init__ (self, status: int, message: str) -> None:

		super().__init__(message)
		self.status = status
		self.message = message


def _parse_id (raw: str) -> int:

	try:
		return int(raw)
	except ValueError:
		raise _ApiError(400, "Invalid ID format")


class TuningApiHandler (http.server.BaseHTTPRequestHandler):

	"""
	Request handler. The owning server provides ``storage``.
	"""

	server: "_ApiHTTPServer"

	def log_message (self, format: str, *args: typing.Any) -> None:

		logger.debug(f"{self.address_string()} {format % args}")


	def do_GET (self) -> None:

		self._dispatch("GET")


	def do_POST (self) -> None:

		self._dispatch("POST")


	def do_PUT (self) -> None:

		self._dispatch("PUT")


	def do_DELETE (self) -> None:

		self._dispatch("DELETE")


	def _dispatch (self, method: str) -> None:

		url = urllib.parse.urlsplit(self.path)
		path = url.path.rstrip("/")
		storage = self.server.storage
		self._body = b""

		try:

			self._body = self._read_body()

			if path == "/api/tuning-configs" and method == "GET":
				self._send_json(200, [config.to_dict() for config in storage.get_configs()])

			elif path == "/api/tuning-configs" and method == "POST":
				config = storage.create_config(self._read_json())
				self._send_json(201, config.to_dict())

			elif CONFIG_ROUTE.match(path) and method in ("GET", "PUT", "DELETE"):
				self._handle_config(method, _parse_id(CONFIG_ROUTE.match(path).group(1)))  # type: ignore[union-attr]

			elif path == "/api/tuning-systems" and method == "GET":
				systems = temperament.tuning_systems.available_tuning_systems()
				self._send_json(200, [{"key": key, "title": title} for key, title in systems])

			elif path == "/api/tuning-table" and method == "GET":
				self._send_json(200, self._tuning_table(urllib.parse.parse_qs(url.query)))

			else:
				raise _ApiError(404, "Not found")

		except _ApiError as exc:
			self._send_json(exc.status, {"message": exc.message})

		except temperament.storage.ConfigValidationError as exc:
			logger.warning(f"Rejected {method} {path}: {exc}")
			self._send_json(400, {"message": str(exc)})

		except Exception as exc:
			logger.error(f"{method} {path} failed: {exc}")
			self._send_json(500, {"message": _FAILURE_MESSAGES.get(method, "Request failed")})


	def _handle_config (self, method: str, config_id: int) -> None:

		storage = self.server.storage

		if method == "GET":
			config = storage.get_config(config_id)

		elif method == "PUT":
			config = storage.update_config(config_id, self._read_json())

		else:
			if not storage.delete_config(config_id):
				raise _ApiError(404, "Tuning configuration not found")
			self._send_empty(204)
			return

		if config is None:
			raise _ApiError(404, "Tuning configuration not found")

		self._send_json(200, config.to_dict())


	def _tuning_table (self, query: typing.Dict[str, typing.List[str]]) -> typing.Dict[str, typing.Any]:

		system = query.get("system", [temperament.constants.reference.DEFAULT_SYSTEM])[0]

		try:
			base_frequency = float(query.get("baseFrequency", [temperament.constants.reference.DEFAULT_BASE_FREQUENCY])[0])
		except ValueError:
			raise _ApiError(400, "baseFrequency must be a number")

		if not base_frequency > 0:
			raise _ApiError(400, "baseFrequency must be positive")

		try:
			notes = temperament.keyboard.populate(base_frequency, system)
		except temperament.tuning_systems.UnknownTuningSystem as exc:
			raise _ApiError(400, str(exc))

		return {
			"system": system,
			"baseFrequency": base_frequency,
			"notes": temperament.keyboard.notes_to_dict(notes),
		}


	def _read_body (self) -> bytes:

		try:
			length = int(self.headers.get("Content-Length") or 0)
		except ValueError:
			raise _ApiError(400, "Invalid Content-Length header")

		if length < 0:
			raise _ApiError(400, "Invalid Content-Length header")

		return self.rfile.read(length) if length else b""


	def _read_json (self) -> typing.Any:

		try:
			return json.loads(self._body or b"null")
		except ValueError:
			raise _ApiError(400, "Request body must be JSON")


	def _send_json (self, status: int, payload: typing.Any) -> None:

		body = json.dumps(payload).encode("utf-8")

		self.send_response(status)
		self.send_header("Content-Type", "application/json")
		self.send_header("Content-Length", str(len(body)))
		self.end_headers()
		self.wfile.write(body)


	def _send_empty (self, status: int) -> None:

		self.send_response(status)
		self.send_header("Content-Length", "0")
		self.end_headers()


_FAILURE_MESSAGES: typing.Dict[str, str] = {
	"GET": "Failed to fetch tuning configurations",
	"POST": "Failed to create tuning configuration",
	"PUT": "Failed to update tuning configuration",
	"DELETE": "Failed to delete tuning configuration",
}


class _ApiHTTPServer (http.server.ThreadingHTTPServer):

	daemon_threads = True
	allow_reuse_address = True

	def __init__ (self, address: typing.Tuple[str, int], storage: temperament.storage.MemStorage) -> None:

		super().__init__(address, TuningApiHandler)
		self.storage = storage


class TuningApiServer:

	"""
	Background HTTP server exposing a `MemStorage` and the tuning engine.

	Example:
		```python
		server = TuningApiServer(MemStorage(), port=5000)
		server.start()
		...
		server.stop()
		```
	"""

	def __init__ (self, storage: typing.Optional[temperament.storage.MemStorage] = None, host: str = "127.0.0.1", port: int = 5000) -> None:

		self.storage = storage if storage is not None else temperament.storage.MemStorage()
		self.host = host
		self.port = port
		self._httpd: typing.Optional[_ApiHTTPServer] = None
		self._thread: typing.Optional[threading.Thread] = None


	def start (self) -> None:

		"""
		Bind and start serving. With ``port=0`` the chosen port is stored in ``self.port``.
		"""

		if self._thread and self._thread.is_alive():
			return

		self._httpd = _ApiHTTPServer((self.host, self.port), self.storage)
		self.port = self._httpd.server_address[1]

		self._thread = threading.Thread(target=self._httpd.serve_forever, daemon=True)
		self._thread.start()

		logger.info(f"Tuning API listening on http://{self.host}:{self.port}/api")


	def stop (self) -> None:

		if self._httpd is None:
			return

		self._httpd.shutdown()
		self._httpd.server_close()

		if self._thread is not None:
			self._thread.join(timeout=5)

		self._httpd = None
		self._thread = None

		logger.info("Tuning API stopped")
