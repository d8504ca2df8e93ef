"""Configuration management for mdpreview.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

CONFIG_FILENAME = "mdpreview.toml"

GITHUB_API_URL = "https://api.github.com"

# Seconds between two live-update polls of the same file
DEFAULT_POLL_INTERVAL = 1.0


@dataclass(frozen=True)
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 4000


@dataclass(frozen=True)
class DocsConfig:
    """Served folder configuration."""

    root: Path = field(default_factory=lambda: Path("."))


@dataclass(frozen=True)
class RendererConfig:
    """Markdown renderer configuration."""

    offline: bool = False
    api_url: str = GITHUB_API_URL
    context: str | None = None


@dataclass(frozen=True)
class LiveUpdateConfig:
    """Live update configuration."""

    interval: float = DEFAULT_POLL_INTERVAL


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    docs: DocsConfig = field(default_factory=DocsConfig)
    renderer: RendererConfig = field(default_factory=RendererConfig)
    live_update: LiveUpdateConfig = field(default_factory=LiveUpdateConfig)
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for mdpreview.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as err:
                raise ValueError(f"Invalid TOML in {path}: {err}") from err

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            docs=cls._parse_docs(data.get("docs"), config_dir),
            renderer=cls._parse_renderer(data.get("renderer")),
            live_update=cls._parse_live_update(data.get("live_update")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section.

        Args:
            data: Raw server section data

        Returns:
            ServerConfig instance
        """
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 4000)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_docs(cls, data: object, config_dir: Path) -> DocsConfig:
        """Parse docs configuration section.

        Args:
            data: Raw docs section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            DocsConfig instance
        """
        if data is None:
            return DocsConfig(root=config_dir)

        if not isinstance(data, dict):
            raise ValueError("docs section must be a dictionary")

        root = data.get("root", ".")
        if not isinstance(root, str):
            raise ValueError("docs.root must be a string")

        return DocsConfig(root=config_dir / root)

    @classmethod
    def _parse_renderer(cls, data: object) -> RendererConfig:
        """Parse renderer configuration section.

        Args:
            data: Raw renderer section data

        Returns:
            RendererConfig instance
        """
        if data is None:
            return RendererConfig()

        if not isinstance(data, dict):
            raise ValueError("renderer section must be a dictionary")

        offline = data.get("offline", False)
        if not isinstance(offline, bool):
            raise ValueError("renderer.offline must be a boolean")

        api_url = data.get("api_url", GITHUB_API_URL)
        if not isinstance(api_url, str):
            raise ValueError("renderer.api_url must be a string")

        context = data.get("context")
        if context is not None and not isinstance(context, str):
            raise ValueError("renderer.context must be a string")

        return RendererConfig(offline=offline, api_url=api_url, context=context)

    @classmethod
    def _parse_live_update(cls, data: object) -> LiveUpdateConfig:
        """Parse live_update configuration section.

        Args:
            data: Raw live_update section data

        Returns:
            LiveUpdateConfig instance
        """
        if data is None:
            return LiveUpdateConfig()

        if not isinstance(data, dict):
            raise ValueError("live_update section must be a dictionary")

        interval = data.get("interval", DEFAULT_POLL_INTERVAL)
        if not isinstance(interval, int | float) or isinstance(interval, bool):
            raise ValueError("live_update.interval must be a number")
        if interval <= 0:
            raise ValueError("live_update.interval must be positive")

        return LiveUpdateConfig(interval=float(interval))

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        root: Path | None = None,
        offline: bool | None = None,
        context: str | None = None,
        interval: float | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            root: Override docs.root
            offline: Override renderer.offline
            context: Override renderer.context
            interval: Override live_update.interval

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        docs = self.docs
        if root is not None:
            docs = replace(self.docs, root=root)

        renderer = self.renderer
        if offline is not None or context is not None:
            renderer = replace(
                self.renderer,
                offline=offline if offline is not None else self.renderer.offline,
                context=context if context is not None else self.renderer.context,
            )

        live_update = self.live_update
        if interval is not None:
            if interval <= 0:
                raise ValueError("live_update.interval must be positive")
            live_update = replace(self.live_update, interval=interval)

        return replace(
            self,
            server=server,
            docs=docs,
            renderer=renderer,
            live_update=live_update,
        )
