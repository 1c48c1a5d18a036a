# SitemapKit — Sitemap index writer
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
import os
from typing import Iterable, List
from xml.sax.saxutils import escape

from .record import time_now
from .sitemap import SINGLE_FILENAME
from ..utils.io import write_text


logger = logging.getLogger(__name__)


SITEMAP_INDEX_XML = """<?xml version="1.0" encoding="UTF-8"?>
<sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{elements}
</sitemapindex>
"""

SITEMAP_INDEX_ELEMENT_XML = """
	<sitemap>
		<loc>{loc}</loc>
		<lastmod>{lastmod}</lastmod>
	</sitemap>"""


class SitemapIndex:
	"""Index file pointing at every sitemap generated in a run.

	Each entry's lastmod is the time the index is written, not the
	lastmod of the URLs inside the referenced sitemap.
	"""

	def __init__(self, locations: Iterable[str], output_dir: str, filename: str = SINGLE_FILENAME) -> None:
		self.locations: List[str] = list(locations)
		self.output_dir = output_dir
		self.filename = filename

	@property
	def path(self) -> str:
		return os.path.join(self.output_dir, self.filename)

	def to_xml(self) -> str:
		lastmod = time_now()
		elements = "".join(
			SITEMAP_INDEX_ELEMENT_XML.format(loc=escape(loc), lastmod=lastmod)
			for loc in self.locations
		)
		return SITEMAP_INDEX_XML.format(elements=elements)

	def write(self) -> str:
		path = self.path
		write_text(path, self.to_xml())
		logger.debug("Wrote sitemap index with %d sitemaps to %s", len(self.locations), path)
		return path
