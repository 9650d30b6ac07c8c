"""
Run a catalog search from the console and page through it to the end.

This script:
1) Loads settings (OMDB_API_KEY etc.) from the environment / .env
2) Starts a search for the given term
3) Keeps "scrolling" (triggering the pager) until every result is rendered
4) Logs every card and the final count

Usage:
    python -m scripts.search_cli dune --max-pages 5
"""

import argparse  # command line flags
import sys  # exit codes

from loguru import logger  # console logging

from movie_finder.config import load_settings  # environment settings
from movie_finder.catalog_client import CatalogClient  # OMDb client
from movie_finder.search_controller import SearchController  # paging + rendering


def main(argv=None) -> int:
	parser = argparse.ArgumentParser(description="Search the movie catalog and page through all results.")
	parser.add_argument('term', help="title search term")
	parser.add_argument('--max-pages', type=int, default=100, help="stop after this many continuation pages")
	args = parser.parse_args(argv)

	settings = load_settings()
	client = CatalogClient(settings.omdb_base_url, settings.omdb_api_key, timeout=settings.omdb_timeout_s)
	controller = SearchController(client)

	logger.info("=" * 60)
	logger.info(f"[CLI] Searching for '{args.term}'")
	logger.info("=" * 60)

	controller.start_search(args.term)
	session = controller.run_to_exhaustion(max_pages=args.max_pages)
	view = controller.view

	if view.heading:
		logger.info(f"[CLI] {view.heading}")
	for i, card in enumerate(view.cards, start=1):
		logger.info(f"  {i}. {card.title} ({card.year_range}) - {card.poster_url}")

	if session is not None and session.halted:
		return 1  # catalog error already shown in the heading
	if view.load_more_text:
		logger.info(f"[CLI] {view.load_more_text}")
	return 0


if __name__ == '__main__':
	sys.exit(main())
