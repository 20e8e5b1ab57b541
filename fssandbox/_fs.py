"""Temp-directory allocation shared by the sandbox factories."""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from .config import SandboxOptions, load_options
from .errors import SandboxCreationError

logger = logging.getLogger(__name__)

OptionsLike = Union[SandboxOptions, Mapping[str, Any], None]


def coerce_options(options: OptionsLike, overrides: Mapping[str, Any],
                   config_path: Optional[str] = None) -> SandboxOptions:
    """Turn a factory's arguments into :class:`SandboxOptions`.

    ``config_path`` (and the environment) only feed the defaults, so it
    cannot be combined with an explicit ``options`` object or mapping.
    """
    try:
        if options is None:
            return load_options(config_path, **overrides)
        if config_path is not None:
            raise ValueError("config_path cannot be combined with an options object")
        if isinstance(options, SandboxOptions):
            data = options.model_dump()
        else:
            data = dict(options)
        data.update({k: v for k, v in overrides.items() if v is not None})
        return SandboxOptions(**data)
    except (ValidationError, ValueError, TypeError, OSError, yaml.YAMLError) as exc:
        raise SandboxCreationError("invalid sandbox options", exc) from exc


def make_temp_dir(options: SandboxOptions) -> Path:
    """Create the sandbox directory and return its canonical path."""
    try:
        path = Path(tempfile.mkdtemp(suffix=options.suffix, prefix=options.prefix, dir=options.dir)).resolve()
    except OSError as exc:
        raise SandboxCreationError("failed to create sandbox directory", exc) from exc
    logger.debug("created sandbox directory %s", path)
    return path


def remove_tree(path: Path) -> None:
    shutil.rmtree(path)


def discard_tree(path: Path) -> None:
    """Remove ``path`` ignoring every error; used to roll back a failed setup."""
    try:
        shutil.rmtree(path)
    except Exception as exc:  # pylint: disable=broad-except
        logger.debug("rollback removal of %s failed: %s", path, exc)
