"""Input sources that supply flag values from YAML, TOML and JSON data."""

__version__ = "0.1.0"