#!/usr/bin/env python3
"""
Configuration Management for the beat grid converter
Loads converter and plugin settings from an INI file, falling back to defaults
"""

import configparser
import os
from typing import Optional, Dict, Any

from ma3beatgrid.core.logger import log_info, log_warning, log_error


SECTION = "BEATGRID"
DEFAULT_CONFIG_FILE = "beatgrid.ini"

DEFAULTS: Dict[str, str] = {
    # Conversion
    "default_ppq": "480",
    "default_bpm": "120",
    "round_bpm": "false",
    # Export
    "chunk_size": "1024",
    "preview_rows": "200",
    "plugin_author": "PJ Carruth",
    "plugin_version": "0.0.0.0",
    "data_version": "2.3.1.1",
    "plugin_guid": "E8 D2 CD 55 D4 92 10 02 8F EA DF B5 EA 2C DA 1F",
    "component_guid": "E8 D2 CD 55 50 D7 10 02 25 FD 30 BF 10 7D 65 1E",
    # Logging
    "enable_system_logging": "false",
}


class ConfigurationError(Exception):
    """Raised when configuration loading fails"""

    pass


class ConfigManager:
    """Central configuration manager for the converter"""

    def __init__(self, config_file: Optional[str] = None):
        self.config = configparser.ConfigParser()
        self.config_file = config_file
        self.loaded_from: Optional[str] = None
        self.load_configuration()

    def load_configuration(self) -> None:
        """Load configuration from the given file, ./beatgrid.ini, or defaults"""
        self.config[SECTION] = dict(DEFAULTS)

        # Try specified config file
        if self.config_file and os.path.exists(self.config_file):
            self._read(self.config_file)
            return

        # An explicit path that does not exist yet gets a default file
        if self.config_file:
            log_warning(
                f"Config file {self.config_file} not found. Creating default config.",
                component="config",
            )
            self._write_default_config(self.config_file)
            return

        if os.path.exists(DEFAULT_CONFIG_FILE):
            self._read(DEFAULT_CONFIG_FILE)
            return

        log_info("No config file found, using defaults", component="config")

    def _read(self, path: str) -> None:
        try:
            self.config.read(path, encoding="utf-8")
        except configparser.Error as e:
            log_error(f"Could not parse config file {path}: {e}", component="config")
            raise ConfigurationError(f"Invalid config file {path}: {e}") from e
        self.loaded_from = path
        log_info(f"Loaded config from: {path}", component="config")

    def _write_default_config(self, path: str) -> None:
        """Write the default configuration to ``path``"""
        try:
            with open(path, "w", encoding="utf-8") as f:
                self.config.write(f)
            log_info(f"Created default config file: {path}", component="config")
        except IOError as e:
            log_error(f"Could not write default config file: {e}", component="config")

    def set(self, key: str, value: Any, section: str = SECTION) -> None:
        """Override a value for this run (not saved)"""
        if section not in self.config:
            self.config.add_section(section)
        self.config.set(section, key, str(value))

    def get(self, key: str, default: Any = None, section: str = SECTION) -> Any:
        """Get configuration value"""
        try:
            if section in self.config:
                return self.config.get(section, key, fallback=default)
            return default
        except Exception:
            return default

    def getboolean(self, key: str, default: bool = False, section: str = SECTION) -> bool:
        """Get boolean configuration value"""
        try:
            if section in self.config:
                return self.config.getboolean(section, key, fallback=default)
            return default
        except ValueError:
            log_warning(f"Invalid boolean for {key}, using {default}", component="config")
            return default

    def getint(self, key: str, default: int = 0, section: str = SECTION) -> int:
        """Get integer configuration value"""
        try:
            if section in self.config:
                return self.config.getint(section, key, fallback=default)
            return default
        except ValueError:
            log_warning(f"Invalid integer for {key}, using {default}", component="config")
            return default

    def getfloat(self, key: str, default: float = 0.0, section: str = SECTION) -> float:
        """Get float configuration value"""
        try:
            if section in self.config:
                return self.config.getfloat(section, key, fallback=default)
            return default
        except ValueError:
            log_warning(f"Invalid number for {key}, using {default}", component="config")
            return default

    @property
    def default_ppq(self) -> int:
        """PPQ used when a file declares none"""
        return self.getint("default_ppq", 480)

    @property
    def default_bpm(self) -> float:
        """Tempo used when a file has no tempo events"""
        return self.getfloat("default_bpm", 120.0)

    @property
    def round_bpm(self) -> bool:
        return self.getboolean("round_bpm", False)

    @property
    def chunk_size(self) -> int:
        """Characters per base64 block in the plugin XML"""
        return self.getint("chunk_size", 1024)

    @property
    def preview_rows(self) -> int:
        return self.getint("preview_rows", 200)

    @property
    def enable_system_logging(self) -> bool:
        """Check if detailed system logging is enabled"""
        return self.getboolean("enable_system_logging", False)

    @property
    def plugin_options(self) -> Dict[str, str]:
        """Keyword arguments for build_plugin_xml"""
        return {
            "author": self.get("plugin_author", DEFAULTS["plugin_author"]),
            "version": self.get("plugin_version", DEFAULTS["plugin_version"]),
            "data_version": self.get("data_version", DEFAULTS["data_version"]),
            "plugin_guid": self.get("plugin_guid", DEFAULTS["plugin_guid"]),
            "component_guid": self.get("component_guid", DEFAULTS["component_guid"]),
        }

    @property
    def conversion_options(self) -> Dict[str, Any]:
        """Keyword arguments for convert()"""
        return {
            "default_ppq": self.default_ppq,
            "default_bpm": self.default_bpm,
            "round_bpm": self.round_bpm,
        }
