"""
Unit tests for SearchController + ScrollPager: paging to exhaustion, zero results,
terminal errors, and discarding responses that belong to an older search.
A scripted catalog replaces the network.
Run: python tests/test_search_controller.py
"""

from movie_finder.catalog_client import CatalogError
from movie_finder.formatting import NO_MORE_RESULTS
from movie_finder.models import CatalogPage, LoadMoreState
from movie_finder.pager import ScrollPager
from movie_finder.search_controller import SearchController


def assert_equal(actual, expected, msg):
	if actual != expected:
		raise AssertionError(f"{msg} | expected={expected}, actual={actual}")


def assert_true(cond, msg):
	if not cond:
		raise AssertionError(msg)


def movie(title, year='1999', poster='https://img/p.jpg'):
	return {'Title': title, 'Year': year, 'Poster': poster}


class ScriptedCatalog:
	"""Answers fetch_page from a {(term, page): CatalogPage | Exception | callable} script."""

	def __init__(self, script):
		self.script = script
		self.calls = []

	def fetch_page(self, term, page=1):
		self.calls.append((term, page))
		answer = self.script[(term, page)]
		if callable(answer):
			answer = answer()
		if isinstance(answer, Exception):
			raise answer
		return answer


def paged(term, total, *pages):
	"""Script for a term whose results arrive in the given page sizes."""
	script = {}
	n = 0
	for i, size in enumerate(pages, start=1):
		records = [movie(f"{term} {n + k + 1}") for k in range(size)]
		n += size
		script[(term, i)] = CatalogPage(term=term, page=i, total_results=total, records=records)
	return script


def test_three_results_over_two_pages():
	catalog = ScriptedCatalog(paged('dune', 3, 2, 1))
	controller = SearchController(catalog)

	session = controller.start_search('dune')
	assert_equal(session.rendered_count, 2, "after page 1")
	assert_equal(session.total_results, 3, "total known")
	assert_equal(session.page, 2, "next page queued")
	assert_true(controller.pager.is_armed, "pager armed after page 1")
	assert_equal(controller.pager.target, 1, "sentinel is newest card")
	assert_equal(controller.view.load_more, LoadMoreState.VISIBLE, "load more shown")
	assert_equal(controller.view.heading, "3 results for dune", "heading")

	fired = controller.pager.notify_visible(controller.pager.target)
	assert_true(fired, "visibility triggered continuation")
	assert_equal(session.rendered_count, 3, "after page 2")
	assert_true(session.exhausted, "session exhausted")
	assert_true(not controller.pager.is_armed, "pager disconnected")
	assert_equal(controller.view.load_more_text, NO_MORE_RESULTS, "terminal indicator")
	assert_equal([c.title for c in controller.view.cards], ['dune 1', 'dune 2', 'dune 3'], "API order kept")

	# Further visibility events are ignored
	assert_true(not controller.pager.notify_visible(2), "no callbacks after exhaustion")
	assert_equal(catalog.calls, [('dune', 1), ('dune', 2)], "exactly two fetches")


def test_run_to_exhaustion_terminates():
	catalog = ScriptedCatalog(paged('alien', 25, 10, 10, 5))
	controller = SearchController(catalog)
	controller.start_search('alien')
	session = controller.run_to_exhaustion()
	assert_equal(session.rendered_count, 25, "all results rendered")
	assert_equal(len(catalog.calls), 3, "one fetch per page")
	assert_true(not controller.pager.is_armed, "pager stopped")


def test_no_total_means_zero_results():
	catalog = ScriptedCatalog({('qqqq', 1): CatalogPage(term='qqqq', page=1, total_results=None)})
	controller = SearchController(catalog)
	session = controller.start_search('qqqq')
	assert_equal(controller.view.heading, "0 results for qqqq", "zero heading")
	assert_equal(controller.view.cards, [], "no cards")
	assert_true(not controller.pager.is_armed, "pager never armed")
	assert_equal(controller.view.load_more, LoadMoreState.HIDDEN, "load more stays hidden")
	assert_equal(session.total_results, 0, "total treated as zero")


def test_error_halts_session():
	catalog = ScriptedCatalog({('dune', 1): CatalogError("Invalid API key!")})
	controller = SearchController(catalog)
	session = controller.start_search('dune')
	assert_equal(controller.view.heading, "Error: Invalid API key!", "error heading")
	assert_true(session.halted, "session halted")
	assert_true(not controller.pager.is_armed, "pager not armed")
	controller.fetch_page()
	assert_equal(len(catalog.calls), 1, "no retry after failure")


def test_error_on_continuation_keeps_cards():
	script = paged('dune', 20, 10)
	script[('dune', 2)] = CatalogError("Request limit reached!")
	controller = SearchController(ScriptedCatalog(script))
	controller.start_search('dune')
	controller.pager.notify_visible(controller.pager.target)
	assert_equal(len(controller.view.cards), 10, "page 1 cards kept")
	assert_equal(controller.view.heading, "Error: Request limit reached!", "error replaces heading")
	assert_true(controller.session.halted, "halted")
	assert_equal(controller.view.load_more, LoadMoreState.HIDDEN, "load more hidden after halt")
	assert_true(not controller.pager.is_armed, "pager disarmed after halt")


def test_continuation_past_end_exhausts():
	script = paged('dune', 20, 10)
	script[('dune', 2)] = CatalogPage(term='dune', page=2, total_results=None)
	controller = SearchController(ScriptedCatalog(script))
	controller.start_search('dune')
	controller.pager.notify_visible(controller.pager.target)
	assert_true(controller.session.exhausted, "exhausted")
	assert_equal(controller.view.heading, "20 results for dune", "heading not reset to zero")
	assert_equal(controller.view.load_more_text, NO_MORE_RESULTS, "terminal indicator")


def test_new_search_resets_state():
	script = paged('dune', 3, 2, 1)
	script.update(paged('alien', 1, 1))
	controller = SearchController(ScriptedCatalog(script))
	first = controller.start_search('dune')
	second = controller.start_search('alien')
	assert_true(first is not second, "session replaced")
	assert_true(second.session_id > first.session_id, "new identity")
	assert_equal([c.title for c in controller.view.cards], ['alien 1'], "old cards cleared")
	assert_equal(controller.view.heading, "1 results for alien", "new heading")


def test_stale_page_is_discarded():
	script = paged('dune', 20, 10)
	script.update(paged('alien', 2, 2))
	controller = SearchController(ScriptedCatalog(script))

	def late_page():
		# The user starts a new search while page 2 of the old one is in flight
		controller.start_search('alien')
		return CatalogPage(term='dune', page=2, total_results=20, records=[movie('stale')])

	script[('dune', 2)] = late_page
	controller.start_search('dune')
	controller.pager.notify_visible(controller.pager.target)

	assert_equal([c.title for c in controller.view.cards], ['alien 1', 'alien 2'], "stale cards dropped")
	assert_equal(controller.view.heading, "2 results for alien", "heading belongs to new search")
	assert_equal(controller.session.term, 'alien', "current session is the new one")
	assert_equal(controller.session.rendered_count, 2, "counts untouched by stale page")


def test_stale_error_is_discarded():
	script = paged('dune', 20, 10)
	script.update(paged('alien', 2, 2))
	controller = SearchController(ScriptedCatalog(script))

	def late_error():
		controller.start_search('alien')
		return CatalogError("timed out")

	script[('dune', 2)] = late_error
	controller.start_search('dune')
	controller.pager.notify_visible(controller.pager.target)
	assert_equal(controller.view.heading, "2 results for alien", "stale error not rendered")
	assert_true(not controller.session.halted, "new session not halted")


def test_pager_single_target():
	calls = []
	pager = ScrollPager(on_visible=lambda: calls.append('fire'))
	pager.observe(3)
	pager.observe(7)
	assert_true(not pager.notify_visible(3), "old target ignored")
	assert_true(pager.notify_visible(7), "current target fires")
	assert_true(not pager.notify_visible(7), "fires once per arm")
	assert_equal(calls, ['fire'], "exactly one callback")
	pager.observe(9)
	pager.disconnect()
	assert_true(not pager.notify_visible(9), "disconnected pager is silent")


def test_empty_page_before_total_stops_paging():
	script = paged('dune', 20, 10)
	script[('dune', 2)] = CatalogPage(term='dune', page=2, total_results=20, records=[])
	controller = SearchController(ScriptedCatalog(script))
	controller.start_search('dune')
	session = controller.run_to_exhaustion()
	assert_true(session.exhausted, "empty page ends the session")
	assert_equal(session.rendered_count, 10, "count unchanged")


def test_more_records_than_total_exhausts():
	script = {('dune', 1): CatalogPage(term='dune', page=1, total_results=3, records=[movie(f"dune {i}") for i in range(4)])}
	catalog = ScriptedCatalog(script)
	controller = SearchController(catalog)
	session = controller.start_search('dune')
	assert_equal(session.rendered_count, 4, "all delivered records rendered")
	assert_true(session.exhausted, "over-delivery exhausts the session")
	assert_true(not controller.pager.is_armed, "pager disarmed")
	assert_equal(controller.view.load_more_text, NO_MORE_RESULTS, "terminal indicator")
	assert_equal(catalog.calls, [('dune', 1)], "no second page requested")


def main():
	print("Running SearchController tests...")
	test_three_results_over_two_pages()
	test_run_to_exhaustion_terminates()
	test_no_total_means_zero_results()
	test_error_halts_session()
	test_error_on_continuation_keeps_cards()
	test_continuation_past_end_exhausts()
	test_new_search_resets_state()
	test_stale_page_is_discarded()
	test_stale_error_is_discarded()
	test_pager_single_target()
	test_empty_page_before_total_stops_paging()
	test_more_records_than_total_exhausts()
	print("All SearchController tests passed!")


if __name__ == '__main__':
	main()
