"""Settings file loading for logging and runtime profile"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

DEFAULT_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


@dataclass
class LoggingConfig:
    """Logging configuration settings"""
    level: str = "WARNING"
    file: Optional[str] = None
    format: str = DEFAULT_LOG_FORMAT


@dataclass
class RuntimeProfile:
    """Startup behaviour toggles resolved once per process"""
    randomize_label: bool = False
    force_capabilities: bool = False
    socket_prefix: str = "tmate"
    fallback_shell: str = "/bin/sh"


@dataclass
class Config:
    """Complete settings for one invocation"""
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    runtime: RuntimeProfile = field(default_factory=RuntimeProfile)


class ConfigLoader:
    """Loads and parses settings from YAML files"""

    ENV_VAR = "TMATEBOOT_CONFIG"

    DEFAULT_CONFIG_PATHS = [
        "~/.config/tmateboot/config.yml",
        "/etc/tmateboot/config.yml",
    ]

    @staticmethod
    def configFile_find(environ: Optional[Mapping[str, str]] = None) -> Optional[Path]:
        """
        Find settings file, honouring $TMATEBOOT_CONFIG first

        Args:
            environ: Environment to consult (defaults to os.environ)

        Returns:
            Path to settings file, or None if not found
        """
        env = os.environ if environ is None else environ
        candidates = list(ConfigLoader.DEFAULT_CONFIG_PATHS)
        override = env.get(ConfigLoader.ENV_VAR, "")
        if override:
            candidates.insert(0, override)
        for config_path in candidates:
            path = Path(config_path).expanduser()
            if path.exists() and path.is_file():
                return path
        return None

    @staticmethod
    def yaml_load(file_path: Path) -> Dict[str, Any]:
        """
        Load YAML settings file

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed settings dictionary

        Raises:
            FileNotFoundError: If file does not exist
            yaml.YAMLError: If file is not valid YAML
            ValueError: If the document is not a mapping
        """
        with open(file_path, "r") as f:
            data = yaml.safe_load(f)

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {file_path} must contain a YAML dictionary")

        return data

    @staticmethod
    def config_parse(data: Dict[str, Any]) -> Config:
        """
        Parse settings dictionary into Config object; missing keys keep defaults

        Args:
            data: Raw settings dictionary

        Returns:
            Parsed Config object

        Raises:
            ValueError: If a section is not a mapping
        """
        logging_data = ConfigLoader._section_get(data, "logging")
        defaults = LoggingConfig()
        logging = LoggingConfig(
            level=str(logging_data.get("level", defaults.level)),
            file=logging_data.get("file", defaults.file),
            format=str(logging_data.get("format", defaults.format)),
        )

        runtime_data = ConfigLoader._section_get(data, "runtime")
        profile = RuntimeProfile()
        runtime = RuntimeProfile(
            randomize_label=bool(runtime_data.get("randomize_label", profile.randomize_label)),
            force_capabilities=bool(
                runtime_data.get("force_capabilities", profile.force_capabilities)
            ),
            socket_prefix=str(runtime_data.get("socket_prefix", profile.socket_prefix)),
            fallback_shell=str(runtime_data.get("fallback_shell", profile.fallback_shell)),
        )

        return Config(logging=logging, runtime=runtime)

    @staticmethod
    def _section_get(data: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = data.get(name) or {}
        if not isinstance(section, dict):
            raise ValueError(f"Config section '{name}' must be a dictionary")
        return section

    @staticmethod
    def config_load(
        file_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> Config:
        """
        Load settings from file, falling back to built-in defaults

        Args:
            file_path: Optional path to settings file. If None, searches standard locations.
            environ: Environment used for the $TMATEBOOT_CONFIG lookup

        Returns:
            Parsed Config object

        Raises:
            FileNotFoundError: If an explicit file_path does not exist
            ValueError: If settings file is invalid
        """
        if file_path is None:
            file_path = ConfigLoader.configFile_find(environ)
            if file_path is None:
                return Config()

        data = ConfigLoader.yaml_load(file_path)
        return ConfigLoader.config_parse(data)
