"""Application wiring and the command-line entry point."""

from __future__ import annotations

import argparse
import os
import socket
import threading
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import create_engine

from .envconfig import EnvError, LoadEnvOptions, load_env
from .httpserver import DEFAULT_HOST, DEFAULT_PORT, HttpServer
from .repository import SqlRepository

ENV_PREFIX = "GO_GIN_"
DATABASE_URL_ENV = ENV_PREFIX + "DATABASE_URL"


@dataclass
class Cmd:
    """The assembled application: its configuration, server and database."""

    dotenv: bool = True
    env_prefix: str = ENV_PREFIX
    server: Optional[HttpServer] = None
    repository: Optional[SqlRepository] = None

    def run(self, stop_event: Optional[threading.Event] = None) -> None:
        """Run the HTTP server until it is stopped."""
        if self.server is None:
            raise RuntimeError("no http server configured")
        self.server.run(stop_event)


def provide_database(url: str) -> SqlRepository:
    """Create the repository for the database at ``url``."""
    if not url:
        raise EnvError("failed to init postgres: database url is required")
    return SqlRepository(create_engine(url))


def provide_listener(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> socket.socket:
    """Open the TCP listening socket."""
    return socket.create_server((host, port))


def provide_http_server(repository: SqlRepository, listener: socket.socket) -> HttpServer:
    """Build the HTTP server on ``listener`` backed by ``repository``."""
    return HttpServer(
        listener=listener,
        user_repository=repository,
        member_repository=repository,
    )


def provide_cmd(server: HttpServer, repository: SqlRepository) -> Cmd:
    """Assemble the command and load its environment."""
    cmd = Cmd(dotenv=True, env_prefix=ENV_PREFIX, server=server, repository=repository)
    load_env(cmd, LoadEnvOptions(dotenv=cmd.dotenv, env_prefix=cmd.env_prefix))
    return cmd


def initialize_cmd(database_url: Optional[str] = None) -> Cmd:
    """Build the whole application from its providers."""
    url = database_url or os.environ.get(DATABASE_URL_ENV, "")
    repository = provide_database(url)
    listener = provide_listener()
    try:
        server = provide_http_server(repository, listener)
    except BaseException:
        listener.close()
        raise
    try:
        return provide_cmd(server, repository)
    except BaseException:
        server.close()
        raise


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Serve users and members over HTTP.")
    parser.add_argument(
        "--database-url",
        default=None,
        help=f"database URL (default: ${DATABASE_URL_ENV})",
    )
    args = parser.parse_args(argv)
    initialize_cmd(args.database_url).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())