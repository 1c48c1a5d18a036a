# SitemapKit — Error types
# Author: Sachin Chhetri
# Year: 2025
# License: MIT


class SitemapError(Exception):
	"""Base class for every error raised by SitemapKit."""


class ValidationError(SitemapError, ValueError):
	"""A URL entry could not be built: bad location, timestamp, priority or frequency."""


class ConfigError(SitemapError):
	"""The runner is missing configuration or was given an invalid value."""


class OutputDirError(ConfigError, OSError):
	"""The output directory cannot be created or is not writable."""


__all__ = [
	"SitemapError",
	"ValidationError",
	"ConfigError",
	"OutputDirError",
]
