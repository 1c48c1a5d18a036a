# SitemapKit — URL utilities: validation and normalization
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import re
from urllib.parse import urlparse


ALLOWED_SCHEMES = {"http", "https"}

_WHITESPACE = re.compile(r"\s")


def is_valid_url(url: str, require_path: bool = True) -> bool:
	"""Return True for an absolute http(s) URL with a host and, by default, a path.

	"https://example.com" has no path and is rejected; "https://example.com/" is accepted.
	"""
	if not isinstance(url, str) or not url or _WHITESPACE.search(url):
		return False
	try:
		p = urlparse(url)
		# accessing .port raises ValueError on a malformed port
		p.port
	except ValueError:
		return False
	if p.scheme.lower() not in ALLOWED_SCHEMES:
		return False
	if not p.hostname:
		return False
	if require_path and not p.path:
		return False
	return True


def with_trailing_slash(url: str) -> str:
	"""Collapse any trailing slashes to exactly one."""
	return url.rstrip("/") + "/"


def join_url(base: str, filename: str) -> str:
	return with_trailing_slash(base) + filename.lstrip("/")


__all__ = [
	"ALLOWED_SCHEMES",
	"is_valid_url",
	"with_trailing_slash",
	"join_url",
]
