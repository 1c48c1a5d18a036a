import xml.etree.ElementTree as ET
from datetime import datetime, timezone

import pytest
from sitemapkit.core import record
from sitemapkit.core.record import (
	AlternateLink,
	Frequency,
	Url,
	convert_date_to_iso8601,
	convert_timestamp_to_iso8601,
	time_now,
	time_one_month,
	time_one_week,
	time_yesterday,
	valid_iso8601,
)
from sitemapkit.core.sitemap import SITEMAP_XML
from sitemapkit.errors import ValidationError


NS = {
	"sm": "http://www.sitemaps.org/schemas/sitemap/0.9",
	"xhtml": "http://www.w3.org/1999/xhtml",
	"mobile": "http://www.google.com/schemas/sitemap-mobile/1.0",
}
LASTMOD = "2025-03-01T10:00:00+01:00"


def parse_entry(url):
	doc = SITEMAP_XML.format(elements=url.to_xml())
	root = ET.fromstring(doc.encode("utf-8"))
	entries = root.findall("sm:url", NS)
	assert len(entries) == 1
	return entries[0]


@pytest.mark.parametrize(
	"p, expected",
	[(0.1, 0.1), (0.14, 0.1), (0.5, 0.5), (0.66, 0.7), (0.97, 1.0), (1.0, 1.0), (1, 1.0)],
)
def test_priority_is_rounded(p, expected):
	assert Url("https://example.com/", LASTMOD, p).priority == expected


@pytest.mark.parametrize("p, expected", [(0.15, 0.2), (0.25, 0.3), (0.35, 0.4), (0.95, 1.0), ("0.45", 0.5)])
def test_priority_halves_round_up(p, expected):
	assert Url("https://example.com/", LASTMOD, p).priority == expected


@pytest.mark.parametrize("p", [0.0, 0.09, 1.01, 1.5, -1, float("nan")])
def test_priority_out_of_range_is_rejected(p):
	with pytest.raises(ValidationError):
		Url("https://example.com/", LASTMOD, p)


def test_priority_scenarios():
	with pytest.raises(ValidationError):
		Url("https://example.com/", LASTMOD, 1.5)
	assert Url("https://example.com/", LASTMOD, 0.97).priority == 1.0


def test_priority_must_be_numeric():
	with pytest.raises(ValidationError):
		Url("https://example.com/", LASTMOD, "high")
	with pytest.raises(ValidationError):
		Url("https://example.com/", LASTMOD, True)


@pytest.mark.parametrize("loc", ["not a url", "https://example.com", "mailto:me@example.com", "example.com/a"])
def test_invalid_location(loc):
	with pytest.raises(ValidationError):
		Url(loc, LASTMOD)


def test_validation_error_is_value_error():
	with pytest.raises(ValueError):
		Url("not a url", LASTMOD)


@pytest.mark.parametrize(
	"value",
	[
		"2025-03-01T10:00:00+01:00",
		"2025-03-01T10:00:00+0100",
		"2025-03-01T10:00:00-05:00",
		"2025-03-01T10:00:00Z",
		"2025-03-01T10:00:00",
	],
)
def test_valid_lastmod(value):
	assert valid_iso8601(value)
	assert Url("https://example.com/", value).lastmod == value


@pytest.mark.parametrize(
	"value",
	[
		"2025-02-30T10:00:00+01:00",
		"2025-3-1T10:00:00+01:00",
		"2025-03-01 10:00:00",
		"2025-03-01",
		"yesterday",
		"2025-03-01T25:00:00+01:00",
		"2025-03-01T10:00:00+25:00",
		"",
	],
)
def test_invalid_lastmod(value):
	assert not valid_iso8601(value)
	with pytest.raises(ValidationError):
		Url("https://example.com/", value)


def test_frequency():
	assert Url("https://example.com/", LASTMOD, frequency="weekly").frequency is Frequency.WEEKLY
	assert Url("https://example.com/", LASTMOD).frequency is Frequency.DAILY
	with pytest.raises(ValidationError):
		Url("https://example.com/", LASTMOD, frequency="fortnightly")


def test_xml_round_trip_core_fields():
	url = Url("https://example.com/a?x=1&y=2", LASTMOD, 0.66, Frequency.MONTHLY)
	entry = parse_entry(url)
	assert entry.find("sm:loc", NS).text == "https://example.com/a?x=1&y=2"
	assert entry.find("sm:lastmod", NS).text == LASTMOD
	assert entry.find("sm:changefreq", NS).text == "monthly"
	assert float(entry.find("sm:priority", NS).text) == 0.7
	assert entry.find("mobile:mobile", NS) is None
	assert entry.findall("xhtml:link", NS) == []


def test_priority_text_has_one_decimal():
	assert "<priority>1.0</priority>" in Url("https://example.com/", LASTMOD, 1).to_xml()


def test_mobile_marker():
	entry = parse_entry(Url("https://example.com/", LASTMOD, has_mobile=True))
	assert entry.find("mobile:mobile", NS) is not None


def test_alternates_rendered_in_order():
	url = Url(
		"https://example.com/",
		LASTMOD,
		alternates=[("en", "https://example.com/en"), AlternateLink("fr", "https://example.com/fr")],
	)
	url = url.with_alternate("de", "https://example.com/de")
	links = parse_entry(url).findall("xhtml:link", NS)
	assert [(l.get("hreflang"), l.get("href")) for l in links] == [
		("en", "https://example.com/en"),
		("fr", "https://example.com/fr"),
		("de", "https://example.com/de"),
	]
	assert all(l.get("rel") == "alternate" for l in links)


def test_alternates_from_mapping():
	url = Url("https://example.com/", LASTMOD, alternates={"es": "https://example.com/es"})
	assert url.alternates == (AlternateLink("es", "https://example.com/es"),)


def test_with_alternate_returns_new_entry():
	url = Url("https://example.com/", LASTMOD)
	other = url.with_alternate("it", "https://example.com/it")
	assert url.alternates == ()
	assert len(other.alternates) == 1
	assert other.loc == url.loc


def test_invalid_alternate():
	with pytest.raises(ValidationError):
		AlternateLink("en", "/en")
	with pytest.raises(ValidationError):
		AlternateLink("", "https://example.com/en")
	with pytest.raises(ValidationError):
		Url("https://example.com/", LASTMOD, alternates=["en"])


def test_url_is_read_only():
	url = Url("https://example.com/", LASTMOD)
	with pytest.raises(AttributeError):
		url.loc = "https://example.com/other"
	with pytest.raises(AttributeError):
		url.extra = 1


def test_time_helpers_produce_valid_lastmods():
	for value in (time_now(), time_yesterday(), time_one_week(), time_one_month()):
		assert valid_iso8601(value)


def test_time_helpers_order():
	yesterday = datetime.fromisoformat(time_yesterday())
	week = datetime.fromisoformat(time_one_week())
	month = datetime.fromisoformat(time_one_month())
	now = datetime.fromisoformat(time_now())
	assert (now - yesterday).days == 1
	assert (now - week).days == 7
	assert 28 <= (now - month).days <= 31


def test_months_ago_clamps_day():
	dt = datetime(2024, 3, 31, 12, 0, 0)
	assert record._months_ago(dt, 1) == datetime(2024, 2, 29, 12, 0, 0)
	assert record._months_ago(datetime(2025, 1, 15), 1) == datetime(2024, 12, 15)


def test_convert_date_to_iso8601():
	assert convert_date_to_iso8601("2025-03-01T10:00:00Z") == "2025-03-01T10:00:00+00:00"
	assert convert_date_to_iso8601("Sat, 01 Mar 2025 10:00:00 GMT") == "2025-03-01T10:00:00+00:00"
	assert convert_date_to_iso8601(datetime(2025, 3, 1, 10, tzinfo=timezone.utc)) == "2025-03-01T10:00:00+00:00"
	assert convert_date_to_iso8601("1 March 2025").startswith("2025-03-01T00:00:00")
	assert valid_iso8601(convert_date_to_iso8601("2025-03-01"))


def test_convert_date_to_iso8601_rejects_garbage():
	with pytest.raises(ValidationError):
		convert_date_to_iso8601("not a date")
	with pytest.raises(ValidationError):
		convert_date_to_iso8601("")


def test_convert_timestamp_to_iso8601():
	value = convert_timestamp_to_iso8601(1700000000)
	assert valid_iso8601(value)
	assert datetime.fromisoformat(value).timestamp() == 1700000000
