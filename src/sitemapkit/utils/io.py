# SitemapKit — IO helpers (directories, whole-file writes)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import os


def ensure_dirs(*paths: str) -> None:
	for p in paths:
		os.makedirs(p, exist_ok=True)


def is_writable_dir(path: str) -> bool:
	return os.path.isdir(path) and os.access(path, os.W_OK | os.X_OK)


def with_trailing_sep(path: str) -> str:
	"""Collapse any trailing separators to exactly one (the filesystem root stays as is)."""
	stripped = path.rstrip(os.sep)
	if not stripped:
		return os.sep
	return stripped + os.sep


def write_text(path: str, content: str) -> str:
	"""Write the whole buffer at once, replacing any existing file. Returns the path."""
	with open(path, "w", encoding="utf-8") as f:
		f.write(content)
	return path
