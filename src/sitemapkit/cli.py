# SitemapKit — CLI (Typer)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import typer
from pathlib import Path
from typing import Optional
from rich import print

from .config import Settings
from .core.loader import load_urls
from .core.runner import Runner
from .errors import SitemapError
from .logging_config import configure_logging
from .utils.net import build_session

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.command()
def generate(
	input_file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="URL list (.txt) or records (.jsonl)"),
	output_dir: Optional[str] = typer.Option(None, help="Directory the sitemaps are written to"),
	http_dir: Optional[str] = typer.Option(None, help="Public URL of the output directory"),
	max_urls: Optional[int] = typer.Option(None, help="Maximum URLs per sitemap file"),
	single_filename: Optional[str] = typer.Option(None, help="Name of the single sitemap / index file"),
	multi_filename: Optional[str] = typer.Option(None, help="Numbered sitemap name with one integer placeholder, e.g. sitemap_%d.xml"),
	verbose: bool = typer.Option(None, help="Print progress while writing"),
	allow_relative_paths: bool = typer.Option(None, help="Accept a relative output directory"),
	ping: bool = typer.Option(None, help="Ping the search engine when done"),
	log_level: Optional[str] = typer.Option(None, help="Log level"),
	log_dir: Optional[str] = typer.Option(None, help="Directory for the rotating log file"),
):
	"""Generate sitemap.xml (plus numbered sitemaps and an index when needed) from INPUT_FILE."""
	overrides = {
		"output_dir": output_dir,
		"http_dir": http_dir,
		"max_urls": max_urls,
		"single_filename": single_filename,
		"multi_filename": multi_filename,
		"verbose": verbose,
		"allow_relative_paths": allow_relative_paths,
		"ping": ping,
		"log_level": log_level,
		"log_dir": log_dir,
	}
	cfg = Settings().model_copy(update={k: v for k, v in overrides.items() if v is not None})
	configure_logging(
		level=cfg.log_level,
		log_dir=cfg.log_dir,
		log_file=cfg.log_file,
		max_bytes=cfg.log_max_bytes,
		backup_count=cfg.log_backups,
	)
	if not cfg.output_dir or not cfg.http_dir:
		print("[red]Error:[/red] both --output-dir and --http-dir are required (or SITEMAPKIT_OUTPUT_DIR / SITEMAPKIT_HTTP_DIR)")
		raise typer.Exit(code=1)
	try:
		runner = Runner(cfg.output_dir, cfg.http_dir, cfg.runner_options())
		for url in load_urls(str(input_file), priority=cfg.default_priority, frequency=cfg.default_frequency):
			runner.push(url)
		summary = runner.end()
	except SitemapError as e:
		print(f"[red]Error:[/red] {e}")
		raise typer.Exit(code=1)
	print(summary.as_dict())
	print(f"[bold]Sitemap:[/bold] {runner.sitemap_url}")
	if cfg.ping:
		session = build_session(user_agent=cfg.user_agent, retries=cfg.retries, backoff=cfg.backoff)
		ok = runner.ping(session=session)
		print({"ping": "ok" if ok else "failed"})


@app.command("print-config")
def print_config():
	"""Print effective configuration from environment."""
	cfg = Settings()
	print(cfg.model_dump(mode="json"))


def main():
	app()


if __name__ == "__main__":
	main()
