"""
Configuration for the schema generator command line.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class GeneratorConfig:
    """Configuration options for schema generation and JSON output."""

    # Describe values after transforms instead of the accepted input
    use_output: bool = False

    # JSON indentation (None = compact)
    indent: int | None = 2

    # Sort keys in the JSON output
    sort_keys: bool = False

    # Level passed to logging.basicConfig by the CLI
    log_level: str = "WARNING"

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary. Unknown keys are ignored."""
        config = GeneratorConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "use_output": self.use_output,
            "indent": self.indent,
            "sort_keys": self.sort_keys,
            "log_level": self.log_level,
        }
