"""Helpers for xyx game projects: config ids, project files, cleanup and release text."""

from fast_cli.project.cleanup import Cleanup
from fast_cli.project.config_id import ConfigInfo, normalize_name, parse_config_id
from fast_cli.project.release import build_links, render, render_release
from fast_cli.project.xyx_config import (
    PlatformConfig,
    TemplateData,
    XYXConfig,
    find_project_root,
    get_template_path,
    load_template_data,
    load_xyx_config,
)

__all__ = [
    "Cleanup",
    "ConfigInfo",
    "PlatformConfig",
    "TemplateData",
    "XYXConfig",
    "build_links",
    "find_project_root",
    "get_template_path",
    "load_template_data",
    "load_xyx_config",
    "normalize_name",
    "parse_config_id",
    "render",
    "render_release",
]
