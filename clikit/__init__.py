"""Building blocks for command line applications: arguments, command categories and input sources."""

__version__ = "0.1.0"