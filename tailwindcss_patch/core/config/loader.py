"""Reads and initializes ``tailwindcss-mangle.config.yaml``."""

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from ..errors import ConfigFileError
from ..options import from_legacy_options, from_unified_config, merge_options
from .defaults import CONFIG_FILE, get_default_user_config
from .schema import UserConfig

logger = logging.getLogger(__name__)


@dataclass
class ConfigResult:
    """Loaded config.

    Attributes:
        config: User values merged over the defaults
        config_file: Path of the file read, None when defaults were used
        user_config: Raw values from the file
    """

    config: Dict[str, Any]
    config_file: Optional[str] = None
    user_config: Dict[str, Any] = field(default_factory=dict)


def get_config_path(cwd: Optional[str] = None) -> str:
    return os.path.join(os.path.abspath(cwd or os.getcwd()), CONFIG_FILE)


def _to_yaml_value(value: Any) -> Any:
    if isinstance(value, re.Pattern):
        return value.pattern
    if isinstance(value, dict):
        return {key: _to_yaml_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_to_yaml_value(item) for item in value]
    return value


def _compile_patterns(patterns: Any, key: str) -> Any:
    if not isinstance(patterns, list):
        return patterns
    compiled = []
    for pattern in patterns:
        if isinstance(pattern, re.Pattern):
            compiled.append(pattern)
            continue
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise ConfigFileError(f"Invalid regex in transformer.sources.{key}: {pattern!r} ({e})") from e
    return compiled


def init_config(cwd: Optional[str] = None) -> str:
    """Write the default config to ``cwd``; an existing file is kept.

    Returns:
        Path of the config file
    """
    path = get_config_path(cwd)
    if os.path.exists(path):
        logger.info(f"Config already exists at {path}")
        return path

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(_to_yaml_value(get_default_user_config()), f, default_flow_style=False, sort_keys=False)
    logger.info(f"Wrote default config to {path}")
    return path


def get_config(cwd: Optional[str] = None) -> ConfigResult:
    """Load the config of a project, falling back to the defaults.

    Raises:
        ConfigFileError: The file is not valid YAML or has the wrong shape
    """
    path = get_config_path(cwd)
    user_config: Dict[str, Any] = {}
    config_file = None

    if os.path.exists(path):
        try:
            with open(path, "r", encoding="utf-8") as f:
                user_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigFileError(f"Cannot read {path}: {e}") from e
        if not isinstance(user_config, dict):
            raise ConfigFileError(f"{path} must contain a mapping at the top level")
        try:
            UserConfig.model_validate(user_config)
        except ValidationError as e:
            raise ConfigFileError(f"Invalid config in {path}:\n{e}") from e
        config_file = path
        logger.debug(f"Loaded config from {path}")
    else:
        logger.debug(f"No config file at {path}; using defaults")

    config = merge_options(user_config, get_default_user_config())
    sources = (config.get("transformer") or {}).get("sources")
    if isinstance(sources, dict):
        for key in ("include", "exclude"):
            if key in sources:
                sources[key] = _compile_patterns(sources[key], key)

    return ConfigResult(config=config, config_file=config_file, user_config=user_config)


def load_patch_options(
    cwd: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Patcher options for a project: config file values under ``overrides``.

    A legacy ``patch`` section is used only when the file has no ``registry``.
    """
    cwd = os.path.abspath(cwd or os.getcwd())
    result = get_config(cwd)

    if "registry" not in result.user_config and result.user_config.get("patch"):
        base = from_legacy_options({"patch": result.user_config["patch"]})
    elif result.config.get("registry"):
        base = from_unified_config(result.config["registry"])
    else:
        base = {}

    return merge_options(overrides, base, {"cwd": cwd})
