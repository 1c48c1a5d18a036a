# SitemapKit — Runner: batches URLs into sitemap files and writes the index
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
import os
from typing import List, Optional

import requests

from .ping import GOOGLE_PING_ENDPOINT, ping_search_engine
from .record import AlternatesInput, Frequency, PRIORITY_AVERAGE, Url
from .sitemap import MAX_URLS, MULTI_FILENAME, SINGLE_FILENAME, Sitemap, check_filenames
from .sitemap_index import SitemapIndex
from ..errors import ConfigError, OutputDirError
from ..utils.io import ensure_dirs, is_writable_dir, with_trailing_sep
from ..utils.urls import is_valid_url, join_url, with_trailing_slash


logger = logging.getLogger(__name__)


PROGRESS_EVERY = 10000


class RunnerOptions:
	def __init__(
		self,
		verbose: bool = False,
		allow_relative_paths: bool = False,
		relative_root: Optional[str] = None,
		max_urls: int = MAX_URLS,
		single_filename: str = SINGLE_FILENAME,
		multi_filename: str = MULTI_FILENAME,
		ping_endpoint: str = GOOGLE_PING_ENDPOINT,
	):
		if isinstance(max_urls, bool) or not isinstance(max_urls, int) or max_urls < 1:
			raise ConfigError(f"max_urls must be a positive integer, got {max_urls!r}")
		if max_urls > MAX_URLS:
			logger.warning("max_urls=%d exceeds the protocol limit of %d URLs per sitemap", max_urls, MAX_URLS)
		check_filenames(single_filename, multi_filename)
		if not is_valid_url(ping_endpoint):
			raise ConfigError(f'The ping endpoint "{ping_endpoint}" is not a valid URL')
		self.verbose = bool(verbose)
		self.allow_relative_paths = bool(allow_relative_paths)
		self.relative_root = relative_root
		self.max_urls = max_urls
		self.single_filename = single_filename
		self.multi_filename = multi_filename
		self.ping_endpoint = ping_endpoint


class RunSummary:
	def __init__(
		self,
		pages_count: int,
		urls_count: int,
		sitemap_paths: List[str],
		page_locations: List[str],
		index_path: Optional[str] = None,
	) -> None:
		self.pages_count = pages_count
		self.urls_count = urls_count
		self.sitemap_paths = list(sitemap_paths)
		self.page_locations = list(page_locations)
		self.index_path = index_path

	@property
	def files(self) -> List[str]:
		if self.index_path:
			return self.sitemap_paths + [self.index_path]
		return list(self.sitemap_paths)

	def as_dict(self) -> dict:
		return {
			"pages": self.pages_count,
			"urls": self.urls_count,
			"sitemaps": self.sitemap_paths,
			"locations": self.page_locations,
			"index": self.index_path,
		}


class Runner:
	"""Collects URLs into sitemaps of at most max_urls entries.

	Set the output directory and its public URL (constructor or setters),
	push URLs, then call end() once. When a sitemap is full it is written
	straight away as sitemap_<n>.xml and a new one is started; end() writes
	the last one and, if there was more than one, a sitemap.xml index.
	"""

	def __init__(self, output_dir: str = "", http_dir: str = "", options: Optional[RunnerOptions] = None) -> None:
		self.options = options or RunnerOptions()
		self._output_dir: Optional[str] = None
		self._http_dir: Optional[str] = None
		self._page_count = 0
		self._url_count = 0
		self._current: Optional[Sitemap] = None
		self._page_locations: List[str] = []
		self._written: List[str] = []
		self._summary: Optional[RunSummary] = None
		if output_dir:
			self.set_output_dir(output_dir)
		if http_dir:
			self.set_http_dir(http_dir)

	@property
	def verbose(self) -> bool:
		return self.options.verbose

	@property
	def output_dir(self) -> Optional[str]:
		return self._output_dir

	@property
	def http_dir(self) -> Optional[str]:
		return self._http_dir

	@property
	def page_count(self) -> int:
		return self._page_count

	@property
	def url_count(self) -> int:
		return self._url_count

	@property
	def page_locations(self) -> List[str]:
		return list(self._page_locations)

	@property
	def written_files(self) -> List[str]:
		return list(self._written)

	@property
	def current_sitemap(self) -> Optional[Sitemap]:
		return self._current

	@property
	def is_configured(self) -> bool:
		return bool(self._output_dir and self._http_dir)

	@property
	def is_finalized(self) -> bool:
		return self._summary is not None

	@property
	def sitemap_url(self) -> str:
		"""Public URL of sitemap.xml: the only sitemap, or the index."""
		if not self._http_dir:
			raise ConfigError("Please set the HTTP directory of the sitemaps with set_http_dir() first")
		return join_url(self._http_dir, self.options.single_filename)

	def _say(self, msg: str) -> None:
		logger.debug(msg.strip())
		if self.verbose:
			print(msg)

	def _check_mutable(self) -> None:
		if self.is_finalized:
			raise ConfigError("The runner has already been ended; start a new Runner for another run")
		if self._url_count:
			raise ConfigError("The sitemap directories cannot change after URLs have been pushed")

	def set_output_dir(self, output_dir: str) -> None:
		"""Use output_dir for the sitemap files, creating it if needed.

		Must be absolute unless allow_relative_paths is set, in which case a
		relative path is resolved against relative_root (default: the cwd).
		"""
		self._check_mutable()
		if not output_dir:
			raise ConfigError("The output directory cannot be empty")
		if not os.path.isabs(output_dir):
			if not self.options.allow_relative_paths:
				raise ConfigError(
					f'Please provide an absolute path instead of "{output_dir}". '
					"Relative paths (discouraged) need the allow_relative_paths option."
				)
			root = self.options.relative_root or os.getcwd()
			output_dir = os.path.join(root, output_dir)
		output_dir = os.path.normpath(output_dir)
		if not os.path.isdir(output_dir):
			if os.path.exists(output_dir):
				raise OutputDirError(f'"{output_dir}" exists and is not a directory')
			try:
				ensure_dirs(output_dir)
			except OSError as e:
				raise OutputDirError(
					f'The "{output_dir}" path was not found and could not be created: {e}'
				) from e
		if not is_writable_dir(output_dir):
			raise OutputDirError(f'You don\'t have the permissions to write to "{output_dir}"')
		self._output_dir = with_trailing_sep(output_dir)
		logger.debug("Sitemaps will be written to %s", self._output_dir)

	def set_http_dir(self, url: str) -> None:
		"""Public URL of the output directory, e.g. https://example.com/sitemaps/."""
		self._check_mutable()
		if not is_valid_url(url):
			raise ConfigError(f'The specified location "{url}" is not a valid URL, e.g. https://yourdomain.com/sitemaps/')
		self._http_dir = with_trailing_slash(url)

	def _require_configured(self) -> None:
		if not self._output_dir:
			raise ConfigError("Please set the output directory with set_output_dir() before populating the sitemap")
		if not self._http_dir:
			raise ConfigError("Please set the HTTP directory with set_http_dir() before populating the sitemap")

	def _start_sitemap(self) -> None:
		self._page_count += 1
		self._current = Sitemap(
			self._output_dir,
			self._http_dir,
			self._page_count,
			single_filename=self.options.single_filename,
			multi_filename=self.options.multi_filename,
			verbose=self.verbose,
		)
		self._say(f"Starting Sitemap {self._page_count}")

	def _flush_current(self, has_more: bool) -> None:
		path = self._current.write(has_more)
		self._written.append(path)
		self._page_locations.append(self._current.web_address(has_more))

	def push(self, url: Url) -> None:
		"""Add a prebuilt Url, rotating to a new sitemap when the current one is full."""
		if not isinstance(url, Url):
			raise TypeError(f"push() expects a Url, got {type(url).__name__}")
		if self.is_finalized:
			raise ConfigError("The runner has already been ended; no more URLs can be pushed")
		self._require_configured()
		if self._current is None:
			self._start_sitemap()
		if self._current.size() >= self.options.max_urls:
			self._flush_current(has_more=True)
			self._start_sitemap()
		size = self._current.size()
		if size and size % PROGRESS_EVERY == 0:
			self._say(f"\t\tAdded {size:,} URLs")
		self._current.add_url(url)
		self._url_count += 1

	def push_url(
		self,
		loc: str,
		lastmod: str,
		priority: float = PRIORITY_AVERAGE,
		frequency=Frequency.DAILY,
		has_mobile: bool = False,
		alternates: AlternatesInput = (),
	) -> Url:
		"""Build a Url from fields and push it. Returns the new Url."""
		url = Url(loc, lastmod, priority, frequency, has_mobile, alternates)
		self.push(url)
		return url

	def end(self) -> RunSummary:
		"""Write the last sitemap and, for multi-file runs, the index.

		Calling end() again returns the first summary without writing anything.
		"""
		if self._summary is not None:
			logger.warning("Runner.end() called more than once; files were already written")
			return self._summary
		self._require_configured()
		if self._current is None:
			self._start_sitemap()
		self._flush_current(has_more=False)
		index_path = None
		if self._page_count > 1:
			index = SitemapIndex(self._page_locations, self._output_dir, self.options.single_filename)
			self._say(f"Writing Sitemap Index to {index.path}")
			index_path = index.write()
		self._say("Remember to reference the sitemap from your robots.txt for easier discovery")
		self._summary = RunSummary(
			self._page_count,
			self._url_count,
			self._written,
			self._page_locations,
			index_path,
		)
		logger.info(
			"Generated %d sitemap(s) with %d URLs in %s",
			self._page_count,
			self._url_count,
			self._output_dir,
		)
		return self._summary

	def ping(self, session: Optional[requests.Session] = None) -> bool:
		"""Notify the search engine about sitemap.xml. Independent of end()."""
		if not self._http_dir:
			raise ConfigError("Please set the HTTP directory with set_http_dir() before pinging")
		sitemap_url = self.sitemap_url
		self._say(f"*** PINGING {self.options.ping_endpoint} FOR {sitemap_url}")
		return ping_search_engine(sitemap_url, self.options.ping_endpoint, session=session)
