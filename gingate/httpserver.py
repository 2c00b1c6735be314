"""HTTP server exposing health, users and members endpoints."""

from __future__ import annotations

import socket
import threading
from typing import Optional

from flask import Flask, jsonify
from werkzeug.serving import make_server

from .repository import MemberRepository, UserRepository

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080


def _listing(items: list) -> object:
    # An empty result is rendered as JSON null.
    return jsonify([item.to_dict() for item in items] if items else None)


def create_app(
    user_repository: Optional[UserRepository] = None,
    member_repository: Optional[MemberRepository] = None,
) -> Flask:
    """Build the WSGI application with its routes."""
    app = Flask(__name__)

    @app.get("/health")
    def health():
        return jsonify({"status": "ok"})

    @app.get("/users")
    def users():
        try:
            found = user_repository.find_users()
        except Exception as exc:
            return jsonify({"error": str(exc)}), 500
        return _listing(found)

    @app.get("/members")
    def members():
        try:
            found = member_repository.find_members()
        except Exception as exc:
            return jsonify({"error": str(exc)}), 500
        return _listing(found)

    return app


class HttpServer:
    """Serves the application on a listening socket until closed."""

    def __init__(
        self,
        listener: Optional[socket.socket] = None,
        user_repository: Optional[UserRepository] = None,
        member_repository: Optional[MemberRepository] = None,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
    ) -> None:
        self.app = create_app(user_repository, member_repository)
        self._listener = listener
        if listener is not None:
            host, port = listener.getsockname()[:2]
            self._server = make_server(
                host, port, self.app, threaded=True, fd=listener.fileno()
            )
        else:
            self._server = make_server(host, port, self.app, threaded=True)
        self._lock = threading.Lock()
        self._running = threading.Event()
        self._closed = threading.Event()

    def run(self, stop_event: Optional[threading.Event] = None) -> None:
        """Serve requests until :meth:`close` is called or ``stop_event`` is set."""
        with self._lock:
            if self._closed.is_set():
                raise RuntimeError("http: Server closed")
            self._running.set()
        if stop_event is not None:
            threading.Thread(
                target=self._close_when_set, args=(stop_event,), daemon=True
            ).start()
        self._server.serve_forever()

    def _close_when_set(self, stop_event: threading.Event) -> None:
        stop_event.wait()
        self.close()

    def close(self) -> None:
        """Stop serving and release the listening socket."""
        with self._lock:
            if self._closed.is_set():
                return
            self._closed.set()
            if self._running.is_set():
                self._server.shutdown()
        self._server.server_close()
        if self._listener is not None:
            self._listener.close()