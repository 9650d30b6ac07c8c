"""
Search controller.
Owns the current SearchSession, fetches pages from the catalog, renders cards into the view,
and arms the scroll pager for the next page until the session is exhausted.
"""

from typing import Optional, Tuple  # type annotations for clarity

# Import project modules for data structures and components
from .models import CatalogPage, SearchSession  # session state and decoded pages
from .catalog_client import CatalogClient, CatalogError  # catalog access
from .formatting import to_result_item  # raw record -> card
from .pager import ScrollPager  # sentinel observer
from .view import ResultsView  # page model

# Import loguru for console logging
from loguru import logger  # simple structured logger


class SearchController:
	"""
	Drives one search at a time.
	start_search() replaces the session and loads page 1; each time the pager's sentinel becomes
	visible, fetch_page() loads the next page. Pages within a session are strictly sequential:
	the pager is unarmed while a fetch is in flight and re-armed only after rendering.
	"""

	def __init__(
		self,
		client: CatalogClient,  # anything with fetch_page(term, page) -> CatalogPage
		view: Optional[ResultsView] = None,  # page model to render into
		pager: Optional[ScrollPager] = None,  # sentinel observer; one is created if omitted
	):
		self.client = client
		self.view = view or ResultsView()
		self.pager = pager or ScrollPager()
		if self.pager.on_visible is None:
			self.pager.on_visible = self.fetch_page  # continuation hook
		self.session: Optional[SearchSession] = None  # no search yet
		self._next_session_id = 0  # increases with every start_search

	def start_search(self, term: str) -> SearchSession:
		"""Discard the previous search, clear the page, and load page 1 for term."""
		self._next_session_id += 1
		self.session = SearchSession(term=term, session_id=self._next_session_id)
		logger.info(f"[Controller] Starting search #{self.session.session_id} for '{term}'")
		self.pager.disconnect()  # the old sentinel belongs to the old results
		self.view.clear()
		self.fetch_page()
		return self.session

	def fetch_page(self):
		"""Fetch and render the session's current page."""
		session = self.session
		if session is None:
			logger.debug("[Controller] fetch_page called before any search; ignoring")
			return
		if session.finished:
			logger.debug(f"[Controller] Search #{session.session_id} is finished; ignoring fetch")
			return

		tag = (session.session_id, session.page)  # identity of this request
		self.pager.disconnect()  # no second fetch while this one is in flight

		try:
			page = self.client.fetch_page(session.term, session.page)
		except CatalogError as e:
			if self._is_stale(tag):
				logger.warning(f"[Controller] Dropping error for stale request {tag}: {e.message}")
				return
			logger.error(f"[Controller] Search #{session.session_id} halted: {e.message}")
			session.halted = True  # failures are terminal for the session
			self.view.show_error(e.message)
			self.view.hide_load_more()  # nothing left to load
			return

		if self._is_stale(tag):
			logger.warning(f"[Controller] Dropping stale page {tag[1]} of search #{tag[0]}")
			return

		self._render(session, page)

	def _is_stale(self, tag: Tuple[int, int]) -> bool:
		"""True when the response no longer belongs to the current session and page."""
		current = self.session
		return current is None or (current.session_id, current.page) != tag

	def _render(self, session: SearchSession, page: CatalogPage):
		if page.total_results is None:
			if session.page > 1:
				# Continuation ran past the end; keep the existing heading and cards
				self._exhaust(session)
				return
			session.total_results = 0
			session.exhausted = True  # nothing to page
			self.view.show_count(0, session.term)
			logger.info(f"[Controller] 0 results for '{session.term}'")
			return

		session.total_results = page.total_results
		self.view.show_count(page.total_results, session.term)

		items = [to_result_item(r) for r in page.records]  # preserve API order
		sentinel = self.view.append(items)
		session.rendered_count += len(items)
		logger.info(
			f"[Controller] Page {session.page} of '{session.term}': +{len(items)} cards "
			f"({session.rendered_count}/{session.total_results})"
		)

		# An empty page can never advance the count, so it ends the session too
		if session.rendered_count >= session.total_results or not items:
			self._exhaust(session)
			return

		session.page += 1
		self.pager.observe(sentinel)
		self.view.show_load_more()

	def _exhaust(self, session: SearchSession):
		session.exhausted = True
		self.pager.disconnect()
		self.view.show_no_more()
		logger.info(f"[Controller] Search #{session.session_id} exhausted after {session.rendered_count} results")

	def run_to_exhaustion(self, max_pages: int = 100) -> Optional[SearchSession]:
		"""
		Keep delivering sentinel visibility until the pager stops re-arming.
		Used by the CLI and tests to simulate a user scrolling to the bottom repeatedly.
		"""
		pages = 0
		while self.pager.is_armed and pages < max_pages:
			self.pager.notify_visible(self.pager.target)
			pages += 1
		if self.pager.is_armed:
			logger.warning(f"[Controller] Stopped after {max_pages} continuation pages")
		return self.session
