"""
Results view.
An in-memory model of the search page: heading, result cards, and the load-more control.
UIs (Streamlit, CLI) render from it; the controller only ever mutates it.
"""

from typing import List, Optional  # type hints

from .models import LoadMoreState, ResultItem  # card and control state
from .formatting import NO_MORE_RESULTS, error_heading, results_heading  # display text


class ResultsView:
	"""Holds everything the page shows for the current search."""

	def __init__(self):
		self.heading: Optional[str] = None  # "<n> results for <term>" or "Error: ..."
		self.cards: List[ResultItem] = []  # rendered cards in API order
		self.load_more: LoadMoreState = LoadMoreState.HIDDEN

	def clear(self):
		"""Remove the heading, every card, and hide the load-more control."""
		self.heading = None
		self.cards = []
		self.load_more = LoadMoreState.HIDDEN

	def show_count(self, total: int, term: str):
		self.heading = results_heading(total, term)

	def show_error(self, message: str):
		"""Replace the heading with an error message."""
		self.heading = error_heading(message)

	def append(self, items: List[ResultItem]) -> Optional[int]:
		"""Append cards and return the index of the newest one (the sentinel)."""
		self.cards.extend(items)
		return self.last_card_index

	@property
	def last_card_index(self) -> Optional[int]:
		return len(self.cards) - 1 if self.cards else None

	def show_load_more(self):
		self.load_more = LoadMoreState.VISIBLE

	def hide_load_more(self):
		self.load_more = LoadMoreState.HIDDEN

	def show_no_more(self):
		self.load_more = LoadMoreState.EXHAUSTED

	@property
	def load_more_text(self) -> Optional[str]:
		"""Text for the load-more control, or None while it is hidden or still loading."""
		if self.load_more is LoadMoreState.EXHAUSTED:
			return NO_MORE_RESULTS
		return None
