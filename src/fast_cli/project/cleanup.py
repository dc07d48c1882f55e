"""Removal of stale entries from a platform directory."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from fast_cli.constants import PROJECT_CONFIG_FILE
from fast_cli.errors import ProjectConfigError
from fast_cli.project.config_id import parse_config_id
from fast_cli.project.xyx_config import find_project_root, get_template_path

# Platforms whose template content lives in a nested "game" directory
NESTED_GAME_PLATFORMS = frozenset({"hippoo"})


class Cleanup:
    """Diff a platform directory against the template and drop extra entries.

    Only top-level entries are compared. Anything in
    ``<project>/platform/<configId>`` whose name does not appear in the
    template's ``common/<platform>`` directory is removed, files and
    directories alike.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    def resolve_paths(
        self, config_id: str, project_root: Path, template_path: Path
    ) -> tuple[Path, Path]:
        """Return ``(target_dir, template_dir)`` for a config id."""
        platform = parse_config_id(config_id).platform
        target_dir = project_root / "platform" / config_id
        template_dir = template_path / "common" / platform

        if platform in NESTED_GAME_PLATFORMS:
            target_dir = target_dir / "game"
            template_dir = template_dir / "game"

        return target_dir, template_dir

    def stale_entries(self, target_dir: Path, template_dir: Path) -> list[Path]:
        """List entries of ``target_dir`` that the template does not ship.

        Raises:
            ProjectConfigError: If either directory does not exist

        """
        for directory in (template_dir, target_dir):
            if not directory.is_dir():
                raise ProjectConfigError(f"Directory not found: {directory}")

        template_names = {entry.name for entry in template_dir.iterdir()}
        return sorted(
            entry for entry in target_dir.iterdir() if entry.name not in template_names
        )

    def clean(
        self,
        config_id: str,
        cwd: Path,
        template_path: Path | None = None,
        dry_run: bool = False,
    ) -> list[Path]:
        """Remove stale entries for ``config_id`` and return their paths.

        Args:
            config_id: Platform config id, e.g. ``vivo@main``
            cwd: Directory to start searching for ``xyx.config.json`` from
            template_path: Template root; defaults to the cached template
            dry_run: Report the entries without deleting anything

        Raises:
            ProjectConfigError: If the project, template or directories are missing

        """
        self.logger.info("Project cleanup started for config ID: %s", config_id)

        project_root = find_project_root(cwd)
        if project_root is None:
            raise ProjectConfigError(
                f"Could not find {PROJECT_CONFIG_FILE} in {cwd} or any parent directory"
            )

        if template_path is None:
            template_path = get_template_path()

        target_dir, template_dir = self.resolve_paths(
            config_id, project_root, template_path
        )
        self.logger.debug("Target: %s, template: %s", target_dir, template_dir)

        stale = self.stale_entries(target_dir, template_dir)
        for entry in stale:
            if dry_run:
                self.logger.info("Would remove: %s", entry)
                continue
            self.logger.info("Remove: %s", entry)
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()

        self.logger.info("Project cleanup completed (%d entries).", len(stale))
        return stale
