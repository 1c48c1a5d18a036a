# SitemapKit — Single sitemap file (urlset) writer
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
import os
import re
from typing import List

from .record import Url
from ..errors import ConfigError
from ..utils.io import write_text
from ..utils.urls import join_url


logger = logging.getLogger(__name__)


# Max number of URLs per sitemap file allowed by the sitemaps.org protocol
MAX_URLS = 50000

SINGLE_FILENAME = "sitemap.xml"
MULTI_FILENAME = "sitemap_%d.xml"
INTEGER_CONVERSIONS = frozenset("diouxX")

# printf-style conversion specifier: flags, width, precision, then the conversion character
_CONVERSION_RE = re.compile(r"%(?:\([^)]*\))?[#0 +-]*(?:\*|\d+)?(?:\.(?:\*|\d+))?[hlL]?(.)", re.S)

SITEMAP_XML = """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9" xmlns:mobile="http://www.google.com/schemas/sitemap-mobile/1.0" xmlns:xhtml="http://www.w3.org/1999/xhtml">{elements}
</urlset>
"""


def check_filenames(single_filename: str, multi_filename: str) -> None:
	"""Raise ConfigError unless both names are usable and the multi-file pattern takes one integer.

	Any printf-style integer conversion works: sitemap_%d.xml, sitemap_%05d.xml, part-%x.xml.
	"""
	for name in (single_filename, multi_filename):
		if not isinstance(name, str) or not name.strip():
			raise ConfigError("Sitemap filenames cannot be empty")
		if os.sep in name or "/" in name:
			raise ConfigError(f'Sitemap filename "{name}" must not contain a path separator')
	conversions = [m.group(1) for m in _CONVERSION_RE.finditer(multi_filename) if m.group(1) != "%"]
	if len(conversions) != 1 or conversions[0] not in INTEGER_CONVERSIONS:
		raise ConfigError(
			f'The multi-sitemap filename "{multi_filename}" must contain exactly one integer placeholder such as "%d"'
		)
	try:
		first, second = multi_filename % 1, multi_filename % 2
	except (TypeError, ValueError) as e:
		raise ConfigError(f'The multi-sitemap filename "{multi_filename}" cannot be formatted: {e}') from None
	if first == second:
		raise ConfigError(f'The multi-sitemap filename "{multi_filename}" gives the same name for every sitemap')
	if single_filename in (first, second):
		raise ConfigError("The multi-sitemap filenames must differ from the single sitemap filename")


class Sitemap:
	"""URLs collected in memory for one sitemap file, written to disk in one go.

	The first sitemap of a run is written as the single-file name unless the
	runner says more files follow; every later one uses the numbered pattern.
	"""

	def __init__(
		self,
		output_dir: str,
		http_dir: str,
		index: int,
		single_filename: str = SINGLE_FILENAME,
		multi_filename: str = MULTI_FILENAME,
		verbose: bool = False,
	) -> None:
		self.output_dir = output_dir
		self.http_dir = http_dir
		self.index = index
		self.single_filename = single_filename
		self.multi_filename = multi_filename
		self.verbose = verbose
		self._urls: List[Url] = []

	def add_url(self, url: Url) -> None:
		self._urls.append(url)

	def size(self) -> int:
		return len(self._urls)

	def __len__(self) -> int:
		return len(self._urls)

	@property
	def urls(self) -> List[Url]:
		return list(self._urls)

	def generate_filename(self, index: int, has_more: bool) -> str:
		"""sitemap.xml when this is the only file, sitemap_<index>.xml otherwise."""
		if has_more or index > 1:
			return self.multi_filename % index
		return self.single_filename

	def filename(self, has_more: bool) -> str:
		return self.generate_filename(self.index, has_more)

	def path(self, has_more: bool) -> str:
		return os.path.join(self.output_dir, self.filename(has_more))

	def web_address(self, has_more: bool) -> str:
		return join_url(self.http_dir, self.filename(has_more))

	def to_xml(self) -> str:
		return SITEMAP_XML.format(elements="".join(u.to_xml() for u in self._urls))

	def write(self, has_more: bool) -> str:
		"""Render every URL and write the file. Returns the local path."""
		path = self.path(has_more)
		if self.verbose:
			print(f"\tWriting Sitemap {self.index} to {path}")
		write_text(path, self.to_xml())
		logger.debug("Wrote sitemap %d (%d URLs) to %s", self.index, len(self._urls), path)
		return path
