"""
Persistence adapter for the "remember my search" checkbox.
It is the only writer of the remembered term.
"""

from typing import Callable, Optional  # type hints

from .storage import KeyValueStore  # get/set/delete capability

from loguru import logger  # console logging

# Storage key for the remembered term
REMEMBERED_TERM_KEY = 'search term'


class PersistenceAdapter:
	def __init__(
		self,
		store: KeyValueStore,
		start_search: Callable[[str], object],  # usually SearchController.start_search
		seed_search_box: Optional[Callable[[str], None]] = None,  # puts the term back in the input
	):
		self.store = store
		self.start_search = start_search
		self.seed_search_box = seed_search_box

	def remembered(self) -> Optional[str]:
		return self.store.get(REMEMBERED_TERM_KEY)

	def on_toggle_changed(self, checked: bool, current_term: str):
		"""Save the current term while the box is checked; forget it when unchecked."""
		if checked:
			logger.info(f"[Persistence] Remembering search '{current_term}'")
			self.store.set(REMEMBERED_TERM_KEY, current_term)
		else:
			logger.info("[Persistence] Forgetting remembered search")
			self.store.delete(REMEMBERED_TERM_KEY)

	def on_page_load(self) -> Optional[str]:
		"""
		Restore a remembered search: seed the search box and start the search at page 1.
		Returns the restored term, or None when nothing was remembered.
		"""
		term = self.remembered()
		if not term:
			return None
		logger.info(f"[Persistence] Restoring remembered search '{term}'")
		if self.seed_search_box is not None:
			self.seed_search_box(term)
		self.start_search(term)
		return term
