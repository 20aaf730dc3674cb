"""TOML config loader and validation."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from docsieve.constants import (
    CONFIG_DIR_NAME,
    DEFAULT_CACHE_KEY,
    DEFAULT_CACHE_TTL_SECONDS,
    DEFAULT_DOCS_BASE_URL,
    DEFAULT_DOCS_URL,
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_MAX_HEADING_DEPTH,
    DEFAULT_SEARCH_LIMIT,
)
from docsieve.sources.cache import CACHE_KEY_RE


@dataclass
class Settings:
    """Resolved settings for one search session."""

    url: str = DEFAULT_DOCS_URL
    docs_base_url: str = DEFAULT_DOCS_BASE_URL
    timeout: float = DEFAULT_FETCH_TIMEOUT
    cache_key: str = DEFAULT_CACHE_KEY
    cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS
    max_heading_depth: int = DEFAULT_MAX_HEADING_DEPTH
    normalize_callouts: bool = True
    search_limit: int = DEFAULT_SEARCH_LIMIT

    def __post_init__(self):
        if not self.url:
            raise ValueError("[source] url must be non-empty")
        if self.timeout <= 0:
            raise ValueError(f"[source] timeout must be > 0, got {self.timeout}")
        if not isinstance(self.cache_key, str) or not CACHE_KEY_RE.match(self.cache_key):
            raise ValueError(
                "[cache] key must start with a letter or digit and use only letters, "
                f"digits, '.', '_' or '-', got {self.cache_key!r}"
            )
        if self.cache_ttl_seconds < 0:
            raise ValueError(f"[cache] ttl_seconds must be >= 0, got {self.cache_ttl_seconds}")
        if not isinstance(self.normalize_callouts, bool):
            raise ValueError(
                f"[index] normalize_callouts must be true or false, got {self.normalize_callouts!r}"
            )
        if not 1 <= self.max_heading_depth <= 6:
            raise ValueError(
                f"[index] max_heading_depth must be in 1..6, got {self.max_heading_depth}"
            )
        if self.search_limit <= 0:
            raise ValueError(f"[search] limit must be > 0, got {self.search_limit}")


def config_dir(base_path: Path) -> Path:
    return base_path / CONFIG_DIR_NAME


def cache_dir(base_path: Path) -> Path:
    return config_dir(base_path) / "cache"


def load_config(base_path: Path) -> dict | None:
    """Load .docsieve/config.toml. Returns None if the file doesn't exist."""
    config_file = config_dir(base_path) / "config.toml"
    if not config_file.exists():
        return None
    with open(config_file, "rb") as f:
        return tomllib.load(f)


def _optional_section(config: dict | None, section: str) -> dict:
    """Extract an optional config section; absent means empty."""
    if config is None:
        return {}
    value = config.get(section, {})
    if not isinstance(value, dict):
        raise RuntimeError(
            f"[{section}] in config.toml must be a table, got {type(value).__name__}"
        )
    return value


def resolve_settings(config: dict | None) -> Settings:
    """Build Settings from a loaded config dict. Missing keys take defaults."""
    source = _optional_section(config, "source")
    cache = _optional_section(config, "cache")
    index = _optional_section(config, "index")
    search = _optional_section(config, "search")

    defaults = Settings()
    return Settings(
        url=source.get("url", defaults.url),
        docs_base_url=source.get("docs_base_url", defaults.docs_base_url),
        timeout=float(source.get("timeout", defaults.timeout)),
        cache_key=cache.get("key", defaults.cache_key),
        cache_ttl_seconds=int(cache.get("ttl_seconds", defaults.cache_ttl_seconds)),
        max_heading_depth=int(index.get("max_heading_depth", defaults.max_heading_depth)),
        normalize_callouts=index.get("normalize_callouts", defaults.normalize_callouts),
        search_limit=int(search.get("limit", defaults.search_limit)),
    )


def create_default_config(base_path: Path) -> Path:
    """Create a default config.toml in .docsieve/. Returns the path."""
    directory = config_dir(base_path)
    directory.mkdir(parents=True, exist_ok=True)
    config_path = directory / "config.toml"
    if config_path.exists():
        raise FileExistsError(f"Config already exists: {config_path}")
    config_path.write_text(
        '[source]\n'
        f'url = "{DEFAULT_DOCS_URL}"\n'
        f'docs_base_url = "{DEFAULT_DOCS_BASE_URL}"\n'
        f'timeout = {DEFAULT_FETCH_TIMEOUT}\n'
        '\n'
        '[cache]\n'
        f'# key = "{DEFAULT_CACHE_KEY}"\n'
        f'ttl_seconds = {DEFAULT_CACHE_TTL_SECONDS}  # 0 disables reuse of the cached copy\n'
        '\n'
        '[index]\n'
        '# 1 = only "#" headings start sections; 3 = "#", "##" and "###"\n'
        f'max_heading_depth = {DEFAULT_MAX_HEADING_DEPTH}\n'
        'normalize_callouts = true\n'
        '\n'
        '[search]\n'
        f'limit = {DEFAULT_SEARCH_LIMIT}\n'
    )
    return config_path
