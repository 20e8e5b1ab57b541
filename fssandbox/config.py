import os
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict


ENV_PREFIX = "FSSANDBOX_"
_TRUE = ("1", "true", "yes", "on")


class SandboxOptions(BaseModel):
    """Options shared by every sandbox factory.

    ``dir``, ``prefix`` and ``suffix`` are passed straight to
    :func:`tempfile.mkdtemp`.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    dir: Optional[str] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    debug: bool = False


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field in ("dir", "prefix", "suffix"):
        value = os.environ.get(ENV_PREFIX + field.upper())
        if value:
            out[field] = value
    debug = os.environ.get(ENV_PREFIX + "DEBUG")
    if debug is not None:
        out["debug"] = debug.strip().lower() in _TRUE
    return out


def load_options(config_path: Optional[str] = None, **overrides: Any) -> SandboxOptions:
    """Build :class:`SandboxOptions` from YAML, the environment and overrides.

    Precedence, lowest first: defaults, the YAML file (``config_path`` or
    ``$FSSANDBOX_CONFIG``), ``FSSANDBOX_*`` environment variables, keyword
    overrides. YAML format::

        dir: /var/tmp
        prefix: test-
        debug: true
    """
    path = config_path or os.environ.get(ENV_PREFIX + "CONFIG")
    data: Dict[str, Any] = {}
    if path and os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"sandbox config must be a mapping: {path}")

    data.update(_env_overrides())
    data.update({k: v for k, v in overrides.items() if v is not None})
    return SandboxOptions(**data)
