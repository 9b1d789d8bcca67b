"""Shared fixtures: a small registry around a demo plugin."""

from __future__ import annotations

import pytest

from tests.helpers.plugins import DEMO_PLUGIN, MAIL_PLUGIN
from plugcfg.registry.catalog import PluginRegistry
from plugcfg.registry.resolver import make_static_resolver
from plugcfg.registry.types import ArgType, ArgumentDef, PluginDef, PluginResolver


@pytest.fixture
def demo_plugin() -> PluginDef:
    return PluginDef(
        name=DEMO_PLUGIN,
        description="Demo plugin for completion tests",
        arguments={
            "Alpha": ArgumentDef(type=ArgType.STRING, description="First"),
            "Beta": ArgumentDef(type=ArgType.INT),
            "Gamma": ArgumentDef(type=ArgType.BOOLEAN),
        },
    )


@pytest.fixture
def mail_plugin() -> PluginDef:
    return PluginDef(
        name=MAIL_PLUGIN,
        description="Sends mail",
        arguments={
            "SmtpHost": ArgumentDef(type=ArgType.STRING),
            "SmtpPort": ArgumentDef(type=ArgType.INT, description="SMTP port"),
            "Attachment": ArgumentDef(type=ArgType.STRING, multivalued=True),
        },
    )


@pytest.fixture
def registry(demo_plugin: PluginDef, mail_plugin: PluginDef) -> PluginRegistry:
    return PluginRegistry({"demo": [demo_plugin], "mail": [mail_plugin]})


@pytest.fixture
def resolver(registry: PluginRegistry) -> PluginResolver:
    return make_static_resolver(registry)
