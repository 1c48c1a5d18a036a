# SitemapKit — Search engine ping
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
from typing import Optional
from urllib.parse import urlencode

import requests

from ..utils.net import build_session


logger = logging.getLogger(__name__)


GOOGLE_PING_ENDPOINT = "https://www.google.com/webmasters/tools/ping"


def build_ping_url(sitemap_url: str, endpoint: str = GOOGLE_PING_ENDPOINT) -> str:
	return f"{endpoint}?{urlencode({'sitemap': sitemap_url})}"


def ping_search_engine(
	sitemap_url: str,
	endpoint: str = GOOGLE_PING_ENDPOINT,
	session: Optional[requests.Session] = None,
	timeout: float = 10,
) -> bool:
	"""Tell a search engine the sitemap at sitemap_url changed.

	Fire-and-forget: the response body is ignored and failures are logged,
	never raised. Returns True when the endpoint answered below 400.
	"""
	ping_url = build_ping_url(sitemap_url, endpoint)
	s = session or build_session()
	try:
		r = s.get(ping_url, timeout=timeout)
		r.raise_for_status()
	except requests.RequestException as e:
		logger.warning("Ping for %s failed: %s", sitemap_url, e)
		return False
	logger.info("Pinged %s for %s", endpoint, sitemap_url)
	return True
