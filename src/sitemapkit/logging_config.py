# SitemapKit — Logging configuration (rotating file + stdout)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
import logging.handlers
import os
from typing import Optional


LOG_FORMAT = "%(asctime)s\t%(levelname)s\t%(name)s\t%(message)s"


def configure_logging(
	level: str = "INFO",
	log_dir: Optional[str] = "logs",
	log_file: str = "sitemapkit.log",
	max_bytes: int = 2 * 1024 * 1024,
	backup_count: int = 3,
) -> Optional[str]:
	"""Send SitemapKit logs to stdout and, when log_dir is set, to a rotating file.

	Returns the log file path, or None for stdout-only logging. Retry chatter
	from urllib3 is held at WARNING unless DEBUG was asked for.
	"""
	numeric_level = getattr(logging, level.upper(), logging.INFO)
	root = logging.getLogger()
	root.setLevel(numeric_level)

	# Clear existing handlers in case of re-init
	for h in list(root.handlers):
		root.removeHandler(h)

	formatter = logging.Formatter(LOG_FORMAT)
	stream = logging.StreamHandler()
	stream.setFormatter(formatter)
	root.addHandler(stream)

	logging.getLogger("urllib3").setLevel(logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING)

	if not log_dir:
		return None
	os.makedirs(log_dir, exist_ok=True)
	log_path = os.path.join(log_dir, log_file)
	file_handler = logging.handlers.RotatingFileHandler(
		log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
	)
	file_handler.setFormatter(formatter)
	root.addHandler(file_handler)
	return log_path
