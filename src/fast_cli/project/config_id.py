"""Parsing of platform config ids such as ``vivo@main#acme``."""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class ConfigInfo:
    """Components of a config id ``platform[@channel[#publisher]]``."""

    platform: str
    channel: str = ""
    publisher: str = ""


def parse_config_id(config_id: str) -> ConfigInfo:
    """Split a config id into platform, channel and publisher.

    Example:
        >>> parse_config_id("vivo@main#acme")
        ConfigInfo(platform='vivo', channel='main', publisher='acme')

    """
    platform, _, rest = config_id.partition("@")
    channel, _, publisher = rest.partition("#")
    return ConfigInfo(platform=platform, channel=channel, publisher=publisher)


def normalize_name(config_id: str) -> str:
    """Make a config id safe for file names (``vivo@main#acme`` -> ``vivo-main-acme``)."""
    return re.sub(r"[@#]", "-", config_id)
