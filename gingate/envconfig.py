"""Fill dataclass fields from environment variables and an optional .env file."""

from __future__ import annotations

import dataclasses
import logging
import os
import typing
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DOTENV_FILE = ".env"

_KINDS: dict[str, type] = {"str": str, "bool": bool, "int": int, "float": float}
_BOOLS = {word: True for word in ("1", "t", "T", "TRUE", "true", "True")}
_BOOLS.update({word: False for word in ("0", "f", "F", "FALSE", "false", "False")})


class EnvError(Exception):
    """Raised when the environment cannot be loaded or parsed."""


@dataclass(frozen=True)
class LoadEnvOptions:
    """How :func:`load_env` reads the environment."""

    dotenv: bool = False
    env_prefix: str = ""


def env_field(name: str, default: Any = None, required: bool = False) -> Any:
    """Declare a dataclass field read from the variable ``name``."""
    return dataclasses.field(default=default, metadata={"env": name, "required": required})


def _kind(annotation: Any) -> Any:
    """Reduce an annotation, possibly a string or an Optional, to a plain type."""
    if isinstance(annotation, str):
        text = annotation.replace("typing.", "").replace("builtins.", "")
        if text.startswith("Optional[") and text.endswith("]"):
            text = text[len("Optional["):-1]
        names = [name.strip() for name in text.split("|") if name.strip() != "None"]
        return _KINDS.get(names[0], annotation) if len(names) == 1 else annotation
    members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
    return members[0] if len(members) == 1 else annotation


def _convert(raw: str, annotation: Any, field_name: str) -> Any:
    kind = _kind(annotation)
    if kind is bool:
        if raw in _BOOLS:
            return _BOOLS[raw]
        problem = f"invalid boolean {raw!r}"
    elif kind in (str, int, float):
        try:
            return kind(raw)
        except ValueError as exc:
            problem = str(exc)
    else:
        raise EnvError(f'failed to parse env: unsupported type for field "{field_name}": {kind!r}')
    raise EnvError(f'failed to parse env: parse error on field "{field_name}": {problem}')


def load_env(target: Any, options: LoadEnvOptions | None = None) -> None:
    """Fill the ``env_field`` fields of the dataclass instance ``target``.

    With ``options.dotenv`` set, ``.env`` is loaded first; variables already
    in the environment are kept.
    """
    options = options or LoadEnvOptions()
    if options.dotenv:
        if not Path(DOTENV_FILE).is_file():
            error = EnvError(f"failed to load env: open {DOTENV_FILE}: no such file or directory")
            logger.error("%s", error)
            raise error
        load_dotenv(DOTENV_FILE, override=False)

    if not dataclasses.is_dataclass(target) or isinstance(target, type):
        raise EnvError("failed to parse env: expected a dataclass instance")

    for field in dataclasses.fields(target):
        name = field.metadata.get("env")
        if name is None:
            continue
        key = options.env_prefix + name
        raw = os.environ.get(key)
        if raw is None:
            if field.metadata.get("required"):
                raise EnvError(f'failed to parse env: required environment variable "{key}" is not set')
            continue
        setattr(target, field.name, _convert(raw, field.type, field.name))

    logger.info("env loaded")