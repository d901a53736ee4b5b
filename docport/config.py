"""Configuration loading for docport (.docport.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError
from .namespaces import NamespaceMap

CONFIG_FILENAME = ".docport.yml"
DEFAULT_WORKERS = 8


@dataclass
class ProjectConfig:
    """One source tree and the docs tree its references point into."""

    root: Path
    docs_root: Path
    legacy_namespace: str
    current_namespace: str

    @property
    def namespace_map(self) -> NamespaceMap:
        return NamespaceMap(self.legacy_namespace, self.current_namespace)


@dataclass
class PublishConfig:
    """Publish strategy for the edited files."""

    mode: Optional[str] = None
    message: str = "docs: reference shared XML docs via docport"


@dataclass(frozen=True)
class RunContext:
    """Everything one project run needs, built once and passed down explicitly."""

    project: ProjectConfig
    legacy_docs_root: Path
    workers: int = DEFAULT_WORKERS
    exclude_paths: Sequence[str] = ()

    @property
    def namespace_map(self) -> NamespaceMap:
        return self.project.namespace_map


@dataclass
class DocportConfig:
    """Represents the settings defined in .docport.yml."""

    root: Path
    legacy_docs_root: Path
    projects: List[ProjectConfig]
    workers: int = DEFAULT_WORKERS
    exclude_paths: List[str] = field(default_factory=list)
    publish: Optional[PublishConfig] = None

    def contexts(self) -> List[RunContext]:
        return [
            RunContext(
                project=project,
                legacy_docs_root=self.legacy_docs_root,
                workers=self.workers,
                exclude_paths=tuple(self.exclude_paths),
            )
            for project in self.projects
        ]


def load_config(config_path: Path) -> DocportConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(Path(config_path))
    if not config_file.exists():
        raise ConfigError(f"Configuration file not found: {config_file}")
    root = config_file.parent.resolve()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    legacy = _as_str(data.get("legacy_docs_root"))
    if not legacy:
        raise ConfigError("legacy_docs_root is required")

    projects_data = data.get("projects")
    if not isinstance(projects_data, list) or not projects_data:
        raise ConfigError("projects must be a non-empty list")
    projects = [_parse_project(root, entry, index) for index, entry in enumerate(projects_data)]

    workers = _as_int(data.get("workers"))
    if workers is None:
        workers = DEFAULT_WORKERS
    if workers < 1:
        raise ConfigError("workers must be at least 1")

    publish_data = _as_dict(data.get("publish"))
    publish = None
    if publish_data:
        publish = PublishConfig(mode=_as_str(publish_data.get("mode")))
        message = _as_str(publish_data.get("message"))
        if message:
            publish.message = message
        if publish.mode not in (None, "commit"):
            raise ConfigError(f"Unsupported publish mode: {publish.mode}")

    return DocportConfig(
        root=root,
        legacy_docs_root=_resolve_path(root, legacy),
        projects=projects,
        workers=workers,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        publish=publish,
    )


def _parse_project(root: Path, entry: Any, index: int) -> ProjectConfig:
    data = _as_dict(entry)
    values = {
        key: _as_str(data.get(key))
        for key in ("root", "docs_root", "legacy_namespace", "current_namespace")
    }
    missing = sorted(key for key, value in values.items() if not value)
    if missing:
        raise ConfigError(f"projects[{index}] is missing {', '.join(missing)}")
    try:
        NamespaceMap(values["legacy_namespace"], values["current_namespace"])  # type: ignore[arg-type]
    except ValueError as exc:
        raise ConfigError(f"projects[{index}]: {exc}") from exc
    return ProjectConfig(
        root=_resolve_path(root, values["root"]),  # type: ignore[arg-type]
        docs_root=_resolve_path(root, values["docs_root"]),  # type: ignore[arg-type]
        legacy_namespace=values["legacy_namespace"],  # type: ignore[arg-type]
        current_namespace=values["current_namespace"],  # type: ignore[arg-type]
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return config_path / CONFIG_FILENAME
    return config_path


def _resolve_path(root: Path, value: str) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = root / path
    return path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DocportConfig",
    "ProjectConfig",
    "PublishConfig",
    "RunContext",
    "load_config",
]
