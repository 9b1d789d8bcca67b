"""Registry document loading.

A registry document is a JSON object mapping scope keys to lists of plugin
definitions::

    {
      "iipax.generic.plugin.broker.Mail": [
        {
          "name": "com.example.MailPushPlugin",
          "description": "Pushes mail",
          "arguments": {
            "SmtpPort": {"type": "int"},
            "Attachment": {"type": "string", "multivalued": true}
          }
        }
      ]
    }
"""

from __future__ import annotations

import json
import time
from importlib import resources
from pathlib import Path

from plugcfg.logging import get_logger
from plugcfg.registry.catalog import PluginRegistry
from plugcfg.registry.types import ArgType, ArgumentDef, PluginDef

__all__ = [
    "RegistryFormatError",
    "load_default_registry",
    "load_registry",
    "parse_registry",
]

_logger = get_logger("registry.loader")

_ARG_TYPES = {arg_type.value: arg_type for arg_type in ArgType}


class RegistryFormatError(ValueError):
    """Raised when a registry document does not have the expected shape."""

    def __init__(self, path: str, problem: str) -> None:
        super().__init__(f"{path}: {problem}")
        self.path = path
        self.problem = problem


def _parse_argument(path: str, raw: object) -> ArgumentDef:
    if not isinstance(raw, dict):
        raise RegistryFormatError(path, "argument definition must be an object")

    type_name = raw.get("type", "string")
    arg_type = _ARG_TYPES.get(type_name) if isinstance(type_name, str) else None
    if arg_type is None:
        raise RegistryFormatError(
            path, f"unsupported type {type_name!r} (expected string, int or boolean)"
        )

    description = raw.get("description")
    if description is not None and not isinstance(description, str):
        raise RegistryFormatError(path, "description must be a string")

    multivalued = raw.get("multivalued", False)
    if not isinstance(multivalued, bool):
        raise RegistryFormatError(path, "multivalued must be a boolean")

    return ArgumentDef(type=arg_type, description=description, multivalued=multivalued)


def _parse_plugin(path: str, raw: object) -> PluginDef:
    if not isinstance(raw, dict):
        raise RegistryFormatError(path, "plugin definition must be an object")

    name = raw.get("name")
    if not isinstance(name, str) or not name:
        raise RegistryFormatError(path, "plugin name must be a non-empty string")

    raw_arguments = raw.get("arguments", {})
    if not isinstance(raw_arguments, dict):
        raise RegistryFormatError(f"{path}.arguments", "must be an object")

    arguments = {
        key: _parse_argument(f"{path}.arguments.{key}", value)
        for key, value in raw_arguments.items()
    }

    description = raw.get("description")
    if description is not None and not isinstance(description, str):
        raise RegistryFormatError(path, "description must be a string")

    return PluginDef(name=name, arguments=arguments, description=description)


def parse_registry(data: object) -> PluginRegistry:
    """
    Build a PluginRegistry from a decoded registry document.

    Raises:
        RegistryFormatError: If the document does not have the expected shape.
    """
    if not isinstance(data, dict):
        raise RegistryFormatError("$", "registry must be an object of scope keys")

    scopes: dict[str, list[PluginDef]] = {}
    for scope, plugin_list in data.items():
        if not isinstance(plugin_list, list):
            raise RegistryFormatError(f"$.{scope}", "must be a list of plugins")
        scopes[scope] = [
            _parse_plugin(f"$.{scope}[{index}]", raw)
            for index, raw in enumerate(plugin_list)
        ]
    return PluginRegistry(scopes)


def load_registry(path: Path) -> PluginRegistry:
    """
    Load a registry document from a JSON file.

    Raises:
        OSError: If the file cannot be read.
        RegistryFormatError: If the file is not valid JSON or has the wrong shape.
    """
    _logger.debug("Loading plugin registry from %s", path)
    start_time = time.time()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise RegistryFormatError(str(path), f"invalid JSON: {e}") from e

    registry = parse_registry(data)
    _logger.debug(
        "Loaded %d plugins in %d scopes in %.2fms",
        len(registry),
        len(registry.scope_keys()),
        (time.time() - start_time) * 1000,
    )
    return registry


def load_default_registry() -> PluginRegistry:
    """Load the registry bundled with the package."""
    source = resources.files("plugcfg.registry").joinpath("data/default_registry.json")
    return parse_registry(json.loads(source.read_text(encoding="utf-8")))
