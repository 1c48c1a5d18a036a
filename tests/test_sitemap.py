import xml.etree.ElementTree as ET

import pytest
from sitemapkit.core.record import Url
from sitemapkit.core.sitemap import Sitemap, check_filenames
from sitemapkit.errors import ConfigError


NS = {"sm": "http://www.sitemaps.org/schemas/sitemap/0.9"}
LASTMOD = "2025-03-01T10:00:00+01:00"
HTTP_DIR = "https://example.com/sitemaps/"


def make_sitemap(tmp_path, index=1, **kwargs):
	return Sitemap(str(tmp_path) + "/", HTTP_DIR, index, **kwargs)


def test_filename_rule():
	sm = Sitemap("/tmp/", HTTP_DIR, 1)
	assert sm.generate_filename(1, False) == "sitemap.xml"
	assert sm.generate_filename(1, True) == "sitemap_1.xml"
	assert sm.generate_filename(2, False) == "sitemap_2.xml"
	assert sm.generate_filename(7, True) == "sitemap_7.xml"


def test_custom_filenames():
	sm = Sitemap("/tmp/", HTTP_DIR, 3, single_filename="map.xml", multi_filename="map-%d.xml")
	assert sm.generate_filename(1, False) == "map.xml"
	assert sm.filename(False) == "map-3.xml"
	assert sm.web_address(False) == "https://example.com/sitemaps/map-3.xml"


def test_add_and_size():
	sm = Sitemap("/tmp/", HTTP_DIR, 1)
	assert sm.size() == 0
	for i in range(3):
		sm.add_url(Url(f"https://example.com/{i}", LASTMOD))
	assert sm.size() == 3
	assert len(sm) == 3
	assert [u.loc for u in sm.urls] == ["https://example.com/0", "https://example.com/1", "https://example.com/2"]


def test_write_single(tmp_path):
	sm = make_sitemap(tmp_path)
	sm.add_url(Url("https://example.com/a", LASTMOD, 0.8))
	sm.add_url(Url("https://example.com/b", LASTMOD, 0.3))
	path = sm.write(False)
	assert path == str(tmp_path / "sitemap.xml")
	root = ET.parse(path).getroot()
	assert root.tag == "{http://www.sitemaps.org/schemas/sitemap/0.9}urlset"
	locs = [e.text for e in root.findall("sm:url/sm:loc", NS)]
	assert locs == ["https://example.com/a", "https://example.com/b"]
	assert [e.text for e in root.findall("sm:url/sm:priority", NS)] == ["0.8", "0.3"]


def test_write_with_more_uses_numbered_name(tmp_path):
	sm = make_sitemap(tmp_path)
	sm.add_url(Url("https://example.com/a", LASTMOD))
	path = sm.write(True)
	assert path == str(tmp_path / "sitemap_1.xml")
	assert sm.web_address(True) == "https://example.com/sitemaps/sitemap_1.xml"
	assert not (tmp_path / "sitemap.xml").exists()


def test_write_empty(tmp_path):
	path = make_sitemap(tmp_path).write(False)
	root = ET.parse(path).getroot()
	assert root.findall("sm:url", NS) == []


def test_verbose_write(tmp_path, capsys):
	make_sitemap(tmp_path, verbose=True).write(False)
	assert "Writing Sitemap 1" in capsys.readouterr().out


@pytest.mark.parametrize(
	"single, multi",
	[
		("sitemap.xml", "sitemap.xml"),
		("sitemap.xml", "sitemap_%s.xml"),
		("sitemap.xml", "sitemap_%d_%d.xml"),
		("sitemap.xml", "sitemap_%d_100%.xml"),
		("", "sitemap_%d.xml"),
		("sub/sitemap.xml", "sitemap_%d.xml"),
	],
)
def test_bad_filenames(single, multi):
	with pytest.raises(ConfigError):
		check_filenames(single, multi)


def test_good_filenames():
	check_filenames("sitemap.xml", "sitemap_%d.xml")
	check_filenames("index.xml", "part%d.xml")
	check_filenames("sitemap.xml", "sitemap_%05d.xml")
	check_filenames("sitemap.xml", "sitemap-%x.xml")
	check_filenames("sitemap.xml", "100%%_sitemap_%d.xml")


@pytest.mark.parametrize("multi", ["sitemap_%s.xml", "sitemap_%(n)d.xml", "sitemap_%*d.xml", "sitemap_%.1f.xml"])
def test_non_integer_placeholders_rejected(multi):
	with pytest.raises(ConfigError):
		check_filenames("sitemap.xml", multi)


def test_padded_pattern_names_files():
	sm = Sitemap("/tmp/", HTTP_DIR, 12, multi_filename="sitemap_%05d.xml")
	assert sm.filename(False) == "sitemap_00012.xml"
	assert sm.generate_filename(1, True) == "sitemap_00001.xml"
