# SitemapKit — Configuration via Pydantic BaseSettings
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.ping import GOOGLE_PING_ENDPOINT
from .core.record import Frequency, PRIORITY_AVERAGE
from .core.runner import RunnerOptions
from .core.sitemap import MAX_URLS, MULTI_FILENAME, SINGLE_FILENAME
from .utils.net import DEFAULT_USER_AGENT


class Settings(BaseSettings):
	"""Application settings with sane defaults.

	Environment variables are prefixed with SITEMAPKIT_. CLI flags can override.
	"""

	model_config = SettingsConfigDict(env_prefix="SITEMAPKIT_", env_file=".env", extra="ignore")

	output_dir: Optional[str] = Field(default=None)
	http_dir: Optional[str] = Field(default=None)
	max_urls: int = Field(default=MAX_URLS, gt=0)
	single_filename: str = Field(default=SINGLE_FILENAME)
	multi_filename: str = Field(default=MULTI_FILENAME)
	verbose: bool = Field(default=False)
	allow_relative_paths: bool = Field(default=False)
	ping: bool = Field(default=False)
	ping_endpoint: str = Field(default=GOOGLE_PING_ENDPOINT)
	user_agent: str = Field(default=DEFAULT_USER_AGENT)
	retries: int = Field(default=3)
	backoff: float = Field(default=0.5)
	log_level: str = Field(default="INFO")
	log_dir: Optional[str] = Field(default="logs")
	log_file: str = Field(default="sitemapkit.log")
	log_max_bytes: int = Field(default=2 * 1024 * 1024, gt=0)
	log_backups: int = Field(default=3, ge=0)
	default_priority: float = Field(default=PRIORITY_AVERAGE)
	default_frequency: Frequency = Field(default=Frequency.DAILY)

	def runner_options(self) -> RunnerOptions:
		return RunnerOptions(
			verbose=self.verbose,
			allow_relative_paths=self.allow_relative_paths,
			max_urls=self.max_urls,
			single_filename=self.single_filename,
			multi_filename=self.multi_filename,
			ping_endpoint=self.ping_endpoint,
		)
