"""
sodix Configuration Management

Handles loading and validation of configuration from a TOML file.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass

import toml

from .crypto.provider import available_providers


# Default configuration path
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "sodix" / "config.toml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _expect(data: Dict[str, Any], key: str, kind: type) -> Any:
    value = data[key]
    if not isinstance(value, kind):
        raise ValueError(f"Invalid {key}: {value!r} (expected {kind.__name__})")
    return value


@dataclass
class Config:
    """
    Complete sodix configuration.
    """
    # Key directory (None = current working directory)
    key_dir: Optional[Path] = None
    
    # Primitive provider name
    provider: str = "sodium"
    
    # Generate the key set when key files are missing
    auto_generate: bool = True
    
    # Logging
    log_level: str = "WARNING"
    log_file: Optional[Path] = None
    
    # Where this configuration came from
    config_path: Optional[Path] = None
    
    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'Config':
        """
        Load configuration from file.
        
        Args:
            config_path: Path to config file (default: ~/.config/sodix/config.toml)
            
        Returns:
            Loaded configuration; defaults if the file does not exist
            
        Raises:
            ValueError: If the file exists but cannot be parsed
        """
        path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        config = cls()
        config.config_path = path
        
        if not path.exists():
            return config
        
        try:
            data = toml.load(path)
        except (toml.TomlDecodeError, OSError) as e:
            raise ValueError(f"Cannot read {path}: {e}")
        
        config._apply_dict(data)
        return config
    
    def _apply_dict(self, data: Dict[str, Any]) -> None:
        """
        Apply dictionary data to config.

        Raises:
            ValueError: If a known key holds a value of the wrong type
        """
        if "key_dir" in data:
            self.key_dir = Path(_expect(data, "key_dir", str)).expanduser()
        if "provider" in data:
            self.provider = _expect(data, "provider", str).lower()
        if "auto_generate" in data:
            self.auto_generate = _expect(data, "auto_generate", bool)
        if "log_level" in data:
            self.log_level = _expect(data, "log_level", str).upper()
        if "log_file" in data:
            self.log_file = Path(_expect(data, "log_file", str)).expanduser()
    
    def validate(self) -> None:
        """
        Validate configuration.
        
        Raises:
            ValueError: If configuration is invalid
        """
        providers = available_providers()
        if self.provider not in providers:
            raise ValueError(
                f"Invalid provider: {self.provider} (choose from {', '.join(sorted(providers))})"
            )
        
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level}")

        if self.log_file is not None and not self.log_file.parent.is_dir():
            raise ValueError(f"Log file directory does not exist: {self.log_file.parent}")
    
    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)
