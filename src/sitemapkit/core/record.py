# SitemapKit — URL entries, alternate-language links and date helpers
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import calendar
import re
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from email.utils import parsedate_to_datetime
from enum import Enum
from typing import Iterable, Mapping, Tuple, Union
from xml.sax.saxutils import escape

from ..errors import ValidationError
from ..utils.urls import is_valid_url


PRIORITY_HIGHEST = 1.0
PRIORITY_HIGHER = 0.9
PRIORITY_HIGH = 0.7
PRIORITY_AVERAGE = 0.5
PRIORITY_LOW = 0.3
PRIORITY_LOWER = 0.2
PRIORITY_LOWEST = 0.1

MIN_PRIORITY = PRIORITY_LOWEST
MAX_PRIORITY = PRIORITY_HIGHEST


class Frequency(str, Enum):
	ALWAYS = "always"
	HOURLY = "hourly"
	DAILY = "daily"
	WEEKLY = "weekly"
	MONTHLY = "monthly"
	YEARLY = "yearly"
	NEVER = "never"


URL_ELEMENT_XML = """
	<url>
		<loc>{loc}</loc>
		<lastmod>{lastmod}</lastmod>
		<changefreq>{frequency}</changefreq>
		<priority>{priority}</priority>{mobile}{langs}
	</url>"""

MOBILE_XML = "\n\t\t<mobile:mobile/>"

ALTERNATE_XML = '\n\t\t<xhtml:link rel="alternate" hreflang="{lang}" href="{url}"/>'

# date-time part, then an optional offset: Z, +HH:MM, +HHMM, -HH:MM, -HHMM
_ISO8601_RE = re.compile(r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(Z|[+-](\d{2}):?(\d{2}))?$")
_ISO8601_FMT = "%Y-%m-%dT%H:%M:%S"

_FALLBACK_DATE_FORMATS = [
	"%Y-%m-%d %H:%M:%S",
	"%Y-%m-%d %H:%M",
	"%Y/%m/%d %H:%M:%S",
	"%Y/%m/%d",
	"%d %B %Y",
	"%d %b %Y",
	"%B %d, %Y",
	"%b %d, %Y",
	"%d.%m.%Y",
]


def _attr(value: str) -> str:
	return escape(value, {'"': "&quot;"})


def valid_iso8601(value: str) -> bool:
	"""Check a W3C/ISO-8601 date-time such as 2025-03-01T10:00:00+01:00.

	The date-time part must survive a parse/format round trip, so impossible
	dates (2025-02-30) and unpadded fields are rejected. The offset is optional.
	"""
	if not isinstance(value, str):
		return False
	m = _ISO8601_RE.match(value)
	if not m:
		return False
	try:
		parsed = datetime.strptime(m.group(1), _ISO8601_FMT)
	except ValueError:
		return False
	if parsed.strftime(_ISO8601_FMT) != m.group(1):
		return False
	if m.group(3) is not None:
		if int(m.group(3)) > 23 or int(m.group(4)) > 59:
			return False
	return True


def _to_iso(dt: datetime) -> str:
	if dt.tzinfo is None:
		dt = dt.astimezone()
	return dt.replace(microsecond=0).isoformat()


def _now() -> datetime:
	return datetime.now().astimezone()


def _months_ago(dt: datetime, months: int) -> datetime:
	m0 = dt.month - 1 - months
	year = dt.year + m0 // 12
	month = m0 % 12 + 1
	day = min(dt.day, calendar.monthrange(year, month)[1])
	return dt.replace(year=year, month=month, day=day)


def convert_date_to_iso8601(value: Union[str, date, datetime]) -> str:
	"""Convert a parseable date to ISO-8601 with an offset.

	Accepts datetime/date objects, ISO-8601 strings, RFC 2822 strings
	(HTTP Last-Modified headers) and a few common human formats. Naive
	values are taken as local time.
	"""
	if isinstance(value, datetime):
		return _to_iso(value)
	if isinstance(value, date):
		return _to_iso(datetime(value.year, value.month, value.day))
	text = (value or "").strip()
	if not text:
		raise ValidationError("Cannot convert an empty date to ISO-8601")
	iso_text = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
	try:
		return _to_iso(datetime.fromisoformat(iso_text))
	except ValueError:
		pass
	try:
		return _to_iso(parsedate_to_datetime(text))
	except (TypeError, ValueError, IndexError):
		pass
	for fmt in _FALLBACK_DATE_FORMATS:
		try:
			return _to_iso(datetime.strptime(text, fmt))
		except ValueError:
			continue
	raise ValidationError(f'Cannot convert "{value}" to ISO-8601')


def convert_timestamp_to_iso8601(timestamp: Union[int, float]) -> str:
	return _to_iso(datetime.fromtimestamp(timestamp, tz=timezone.utc).astimezone())


def time_now() -> str:
	return _to_iso(_now())


def time_yesterday() -> str:
	"""24 hours ago."""
	return _to_iso(_now() - timedelta(days=1))


def time_one_week() -> str:
	return _to_iso(_now() - timedelta(weeks=1))


def time_one_month() -> str:
	"""One calendar month ago; the day is clamped (31 March -> 28/29 February)."""
	return _to_iso(_months_ago(_now(), 1))


class AlternateLink:
	"""A localized variant of a URL, rendered as an hreflang xhtml:link."""

	__slots__ = ("_lang", "_url")

	def __init__(self, lang: str, url: str) -> None:
		if not isinstance(lang, str) or not lang.strip():
			raise ValidationError("The alternate language code cannot be empty")
		if not is_valid_url(url):
			raise ValidationError(f'The specified url "{url}" is not a valid URL')
		self._lang = lang.strip()
		self._url = url

	@property
	def lang(self) -> str:
		return self._lang

	@property
	def url(self) -> str:
		return self._url

	def to_xml(self) -> str:
		return ALTERNATE_XML.format(lang=_attr(self._lang), url=_attr(self._url))

	def __eq__(self, other) -> bool:
		if not isinstance(other, AlternateLink):
			return NotImplemented
		return (self._lang, self._url) == (other._lang, other._url)

	def __hash__(self) -> int:
		return hash((self._lang, self._url))

	def __repr__(self) -> str:
		return f"AlternateLink({self._lang!r}, {self._url!r})"


AlternatesInput = Union[
	Mapping[str, str],
	Iterable[Union[AlternateLink, Tuple[str, str]]],
]


def _coerce_alternates(alternates: AlternatesInput) -> Tuple[AlternateLink, ...]:
	if alternates is None:
		return ()
	if isinstance(alternates, Mapping):
		items = alternates.items()
	else:
		items = alternates
	links = []
	for item in items:
		if isinstance(item, AlternateLink):
			links.append(item)
			continue
		try:
			lang, url = item
		except (TypeError, ValueError):
			raise ValidationError(f"Invalid alternate language entry: {item!r}") from None
		links.append(AlternateLink(lang, url))
	return tuple(links)


def _coerce_priority(priority) -> float:
	if isinstance(priority, bool):
		raise ValidationError("Invalid Priority. Priority must be a number between 0.1 and 1")
	try:
		value = float(priority)
	except (TypeError, ValueError):
		raise ValidationError(f'Invalid Priority "{priority}". Priority must be a number between 0.1 and 1') from None
	if not (MIN_PRIORITY <= value <= MAX_PRIORITY):
		raise ValidationError(f"Invalid Priority {priority}. Priority must be a value between 0.1 and 1")
	# halves round away from zero on the decimal text, so 0.25 -> 0.3 and 0.95 -> 1.0
	return float(Decimal(repr(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _coerce_frequency(frequency) -> Frequency:
	try:
		return Frequency(frequency)
	except ValueError:
		valid = ", ".join(f.value for f in Frequency)
		raise ValidationError(f'Invalid frequency "{frequency}". Valid values are: {valid}') from None


class Url:
	"""One sitemap entry. Validated on construction and read-only afterwards.

	- loc: absolute http(s) URL including a path
	- lastmod: ISO-8601 date-time, see valid_iso8601()
	- priority: 0.1..1.0, stored rounded to one decimal
	- frequency: one of Frequency
	- alternates: hreflang variants, kept in the given order
	"""

	__slots__ = ("_loc", "_lastmod", "_priority", "_frequency", "_has_mobile", "_alternates")

	def __init__(
		self,
		loc: str,
		lastmod: str,
		priority: float = PRIORITY_AVERAGE,
		frequency: Union[str, Frequency] = Frequency.DAILY,
		has_mobile: bool = False,
		alternates: AlternatesInput = (),
	) -> None:
		if not is_valid_url(loc):
			raise ValidationError(f'The specified location "{loc}" is not a valid URL')
		if not valid_iso8601(lastmod):
			raise ValidationError(
				f'Invalid lastmod "{lastmod}" format. Date must be in ISO-8601 format. '
				"Use convert_date_to_iso8601() or convert_timestamp_to_iso8601()."
			)
		self._loc = loc
		self._lastmod = lastmod
		self._priority = _coerce_priority(priority)
		self._frequency = _coerce_frequency(frequency)
		self._has_mobile = bool(has_mobile)
		self._alternates = _coerce_alternates(alternates)

	@property
	def loc(self) -> str:
		return self._loc

	@property
	def lastmod(self) -> str:
		return self._lastmod

	@property
	def priority(self) -> float:
		return self._priority

	@property
	def frequency(self) -> Frequency:
		return self._frequency

	@property
	def has_mobile(self) -> bool:
		return self._has_mobile

	@property
	def alternates(self) -> Tuple[AlternateLink, ...]:
		return self._alternates

	def with_alternate(self, lang: str, url: str) -> "Url":
		"""Return a copy of this entry with one more alternate-language link."""
		return Url(
			self._loc,
			self._lastmod,
			self._priority,
			self._frequency,
			self._has_mobile,
			self._alternates + (AlternateLink(lang, url),),
		)

	def to_xml(self) -> str:
		return URL_ELEMENT_XML.format(
			loc=escape(self._loc),
			lastmod=self._lastmod,
			frequency=self._frequency.value,
			priority=f"{self._priority:.1f}",
			mobile=MOBILE_XML if self._has_mobile else "",
			langs="".join(a.to_xml() for a in self._alternates),
		)

	def __eq__(self, other) -> bool:
		if not isinstance(other, Url):
			return NotImplemented
		return (
			self._loc == other._loc
			and self._lastmod == other._lastmod
			and self._priority == other._priority
			and self._frequency == other._frequency
			and self._has_mobile == other._has_mobile
			and self._alternates == other._alternates
		)

	def __hash__(self) -> int:
		return hash((self._loc, self._lastmod, self._priority, self._frequency, self._has_mobile, self._alternates))

	def __repr__(self) -> str:
		return f"Url({self._loc!r}, lastmod={self._lastmod!r}, priority={self._priority}, frequency={self._frequency.value!r})"
