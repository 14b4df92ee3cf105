"""Persisted target folder configuration.

The configuration is a small JSON document holding the folder names
the scanner searches for:

    {"targets": ["node_modules"]}

Loading never fails: a missing, unreadable or invalid file yields the
default configuration.
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Annotated

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from nodecleaner.core.paths import ensure_dir, get_config_path
from nodecleaner.scanner.targets import DEFAULT_TARGET, TargetSet

logger = logging.getLogger(__name__)


def _default_targets() -> list[str]:
    return [DEFAULT_TARGET]


class AppConfig(BaseModel):
    """Target folder configuration.

    Attributes:
        targets: Folder names to search for. Names are unique ignoring case.
    """

    model_config = ConfigDict(extra="ignore")

    targets: Annotated[
        list[str],
        Field(
            default_factory=_default_targets,
            validation_alias=AliasChoices("targets", "Targets"),
            description="Folder names to search for",
        ),
    ]

    @field_validator("targets", mode="after")
    @classmethod
    def normalize_targets(cls, value: list[str]) -> list[str]:
        """Strip whitespace, drop blanks and case-insensitive duplicates."""
        seen: set[str] = set()
        result: list[str] = []
        for name in value:
            stripped = name.strip()
            if not stripped or stripped.casefold() in seen:
                continue
            seen.add(stripped.casefold())
            result.append(stripped)
        return result


class ConfigService:
    """Loads and saves the target folder configuration.

    Args:
        config_path: Explicit config file. Defaults to the XDG location
            (or the NODECLEANER_CONFIG override).
    """

    def __init__(self, config_path: Path | None = None) -> None:
        self._config_path = config_path if config_path is not None else get_config_path()

    @property
    def config_path(self) -> Path:
        """Path of the config file (may not exist yet)."""
        return self._config_path

    def load(self) -> AppConfig:
        """Load the configuration, falling back to defaults on any problem.

        Returns:
            Loaded AppConfig, or the default AppConfig if the file is
            missing, unreadable, not JSON, or fails validation.
        """
        if not self._config_path.exists():
            return AppConfig()

        try:
            data = json.loads(self._config_path.read_text(encoding="utf-8"))
            return AppConfig.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning("Could not load config from %s, using defaults: %s", self._config_path, e)
            return AppConfig()

    def save(self, config: AppConfig) -> None:
        """Write the configuration as indented JSON, replacing the file.

        Args:
            config: Configuration to persist.

        Raises:
            RuntimeError: If the config directory cannot be created.
            OSError: If the file cannot be written.
        """
        ensure_dir(self._config_path.parent, "config")
        self._config_path.write_text(
            json.dumps(config.model_dump(mode="json"), indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
        logger.debug("Saved config to %s", self._config_path)

    def add_targets(self, names: Iterable[str]) -> list[str]:
        """Add folder names to the persisted targets.

        Args:
            names: Names to add; names already present (ignoring case) are skipped.

        Returns:
            The names that were actually added.
        """
        config = self.load()
        existing = {t.casefold() for t in config.targets}
        added: list[str] = []

        for name in names:
            stripped = name.strip()
            if stripped and stripped.casefold() not in existing:
                config.targets.append(stripped)
                existing.add(stripped.casefold())
                added.append(stripped)

        self.save(config)
        return added

    def remove_targets(self, names: Iterable[str]) -> int:
        """Remove folder names (ignoring case) from the persisted targets.

        Returns:
            Number of targets removed.
        """
        config = self.load()
        doomed = {n.strip().casefold() for n in names}
        kept = [t for t in config.targets if t.casefold() not in doomed]
        removed = len(config.targets) - len(kept)

        config.targets = kept
        self.save(config)
        return removed

    def reset(self) -> AppConfig:
        """Overwrite the config file with the defaults and return them."""
        config = AppConfig()
        self.save(config)
        return config


def resolve_targets(override: Iterable[str] | None = None, service: ConfigService | None = None) -> TargetSet:
    """Decide which folder names a scan should search for.

    A non-empty override wins and is never written back to the config.
    Otherwise the persisted targets are used; an empty persisted list
    falls back to the default target.

    Args:
        override: Folder names given on the command line, if any.
        service: Config service to read from. Defaults to the standard location.

    Returns:
        TargetSet for the scan.
    """
    override_names = [n for n in (override or ()) if n.strip()]
    if override_names:
        return TargetSet(override_names)

    config = (service or ConfigService()).load()
    return TargetSet(config.targets)
