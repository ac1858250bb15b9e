"""Configuration loading and management for Orbyt.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.orbyt.toml)
    3. Project config (./orbyt.toml)
    4. Explicit config file
    5. Environment variables (ORBYT_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(verbose=True, top_n=10)
    >>> config.verbosity
    'verbose'
    >>> config.top_n
    10
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError
from .scanning.languages import EXCLUDED_DIRS, SOURCE_EXTENSIONS

Verbosity = Literal["quiet", "normal", "verbose"]
ChurnMode = Literal["history", "per_file", "off"]

_CHURN_MODES = ("history", "per_file", "off")
_VERBOSITIES = ("quiet", "normal", "verbose")


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for one graph build.

    Attributes:
        File selection:
            extensions: File extensions turned into nodes (case-insensitive)
            excluded_dirs: Directory names always pruned
            ignore_file: Gitignore-style file read from the scan root
            respect_ignore_file: Apply ignore_file patterns when present

        Graph shape:
            include_folders: Emit folder nodes, hierarchy and rollup edges
            relative_first: Resolve ./ and ../ specifiers against the
                importing file's directory before the basename index

        Churn:
            churn_mode: "history" (one repository-wide git log),
                "per_file" (one git log per file in a worker pool) or "off"
            git_timeout_seconds: Timeout for each git invocation
            workers: Worker pool size for per_file churn (None = auto)

        Output:
            top_n: Number of most-churned files reported in stats
            verbosity: Logging verbosity level

        Explanations:
            explain_model: Gemini model used by the explanation service
            explain_max_chars: Source prefix sent along with the prompt
    """

    extensions: tuple[str, ...] = SOURCE_EXTENSIONS
    excluded_dirs: tuple[str, ...] = EXCLUDED_DIRS
    ignore_file: str = ".gitignore"
    respect_ignore_file: bool = True

    include_folders: bool = True
    relative_first: bool = False

    churn_mode: ChurnMode = "history"
    git_timeout_seconds: int = 10
    workers: Optional[int] = None

    top_n: int = 5
    verbosity: Verbosity = "normal"

    explain_model: str = "gemini-2.5-flash"
    explain_max_chars: int = 3000

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        # TOML arrays arrive as lists; keep the frozen config hashable
        object.__setattr__(self, "extensions", _normalize_extensions(self.extensions))
        object.__setattr__(self, "excluded_dirs", tuple(self.excluded_dirs))

        if not self.extensions:
            raise InvalidConfigError("extensions", self.extensions, "at least one is required")
        if self.churn_mode not in _CHURN_MODES:
            raise InvalidConfigError(
                "churn_mode", self.churn_mode, f"expected one of {', '.join(_CHURN_MODES)}"
            )
        if self.verbosity not in _VERBOSITIES:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"expected one of {', '.join(_VERBOSITIES)}"
            )
        if self.git_timeout_seconds < 1:
            raise InvalidConfigError(
                "git_timeout_seconds", self.git_timeout_seconds, "must be at least 1"
            )
        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.top_n < 1:
            raise InvalidConfigError("top_n", self.top_n, "must be at least 1")
        if self.explain_max_chars < 1:
            raise InvalidConfigError("explain_max_chars", self.explain_max_chars, "must be positive")

    @property
    def effective_workers(self) -> int:
        """Worker count for the per-file churn pool."""
        if self.workers is not None:
            return self.workers
        return min(os.cpu_count() or 4, 8)


def _normalize_extensions(extensions: Any) -> tuple[str, ...]:
    normalized = []
    for ext in extensions:
        ext = str(ext).strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        normalized.append(ext)
    return tuple(normalized)


DEFAULT_CONFIG = AnalysisConfig()


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``verbose``
            and ``quiet`` booleans are folded into ``verbosity``; ``None``
            values are ignored so unset CLI options keep lower-priority values.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".orbyt.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / "orbyt.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"
    merged.update(overrides)

    try:
        return AnalysisConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from ORBYT_* environment variables.

    Supported environment variables:
        ORBYT_INCLUDE_FOLDERS: bool (true/false/1/0)
        ORBYT_RELATIVE_FIRST: bool
        ORBYT_RESPECT_IGNORE_FILE: bool
        ORBYT_CHURN_MODE: history/per_file/off
        ORBYT_GIT_TIMEOUT_SECONDS: int
        ORBYT_WORKERS: int
        ORBYT_TOP_N: int
        ORBYT_VERBOSITY: quiet/normal/verbose
        ORBYT_EXPLAIN_MODEL: str
        ORBYT_EXPLAIN_MAX_CHARS: int
        ORBYT_IGNORE_FILE: str

    Returns:
        Dict of field_name -> parsed_value for any ORBYT_* vars found.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"ORBYT_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns None for types that cannot be expressed as a single variable
    (tuples such as ``extensions``).

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is tuple or type_hint is tuple:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Accepts either top-level keys or an ``[orbyt]`` table.
    """
    try:
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        data = tomllib.load(f)

    section = data.get("orbyt")
    if isinstance(section, dict):
        return dict(section)
    return data


__all__ = ["AnalysisConfig", "DEFAULT_CONFIG", "load_config"]
