# SitemapKit — Reading URL lists (plain text or JSONL) into Url entries
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import json
import logging
from typing import Any, Dict, Iterator, Optional

from .record import Frequency, PRIORITY_AVERAGE, Url, convert_date_to_iso8601, convert_timestamp_to_iso8601, time_now, valid_iso8601
from ..errors import ValidationError


logger = logging.getLogger(__name__)


def _lastmod_from(value: Any, default: str) -> str:
	if value is None or value == "":
		return default
	if isinstance(value, bool):
		raise ValidationError(f"Invalid lastmod {value!r}")
	if isinstance(value, (int, float)):
		return convert_timestamp_to_iso8601(value)
	if isinstance(value, str) and valid_iso8601(value):
		return value
	return convert_date_to_iso8601(value)


def _mobile_from(value: Any) -> bool:
	if value is None:
		return False
	if not isinstance(value, bool):
		raise ValidationError(f"Invalid mobile flag {value!r}, expected true or false")
	return value


def url_from_dict(
	obj: Dict[str, Any],
	lastmod: Optional[str] = None,
	priority: float = PRIORITY_AVERAGE,
	frequency=Frequency.DAILY,
) -> Url:
	"""Build a Url from {"loc", "lastmod", "priority", "frequency", "mobile", "alternates"}.

	Only loc is required. lastmod may be ISO-8601, any date convert_date_to_iso8601()
	understands, or a Unix timestamp. alternates is {lang: url} or [[lang, url], ...].
	"""
	if not isinstance(obj, dict):
		raise ValidationError(f"Expected an object, got {type(obj).__name__}")
	loc = obj.get("loc") or obj.get("url")
	if not loc:
		raise ValidationError('Missing "loc"')
	return Url(
		loc,
		_lastmod_from(obj.get("lastmod"), lastmod or time_now()),
		obj.get("priority", priority),
		obj.get("frequency", obj.get("changefreq", frequency)),
		_mobile_from(obj.get("mobile", obj.get("has_mobile", False))),
		obj.get("alternates") or (),
	)


def load_urls(
	path: str,
	priority: float = PRIORITY_AVERAGE,
	frequency=Frequency.DAILY,
	lastmod: Optional[str] = None,
) -> Iterator[Url]:
	"""Yield Url entries from a .jsonl file (one object per line) or a plain list of URLs.

	Blank lines and lines starting with # are skipped. Entries without a
	lastmod get the time of the call.
	"""
	default_lastmod = lastmod or time_now()
	as_jsonl = path.lower().endswith((".jsonl", ".ndjson"))
	try:
		with open(path, "r", encoding="utf-8") as f:
			for lineno, line in enumerate(f, 1):
				line = line.strip()
				if not line or line.startswith("#"):
					continue
				try:
					if as_jsonl:
						try:
							obj = json.loads(line)
						except json.JSONDecodeError as e:
							raise ValidationError(f"Invalid JSON: {e}") from None
						yield url_from_dict(obj, default_lastmod, priority, frequency)
					else:
						yield Url(line, default_lastmod, priority, frequency)
				except ValidationError as e:
					raise ValidationError(f"{path}:{lineno}: {e}") from e
	except UnicodeDecodeError as e:
		raise ValidationError(f"{path}: not valid UTF-8 text ({e.reason} at byte {e.start})") from e
	logger.debug("Finished reading %s", path)
