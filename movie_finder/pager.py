"""
Scroll-triggered pager.
Watches a single sentinel (the newest result card) and fires once when it becomes visible.
The UI delivers visibility events; the search controller re-targets the pager after each page.
"""

from typing import Callable, Hashable, Optional  # type hints

from loguru import logger  # console logging


class ScrollPager:
	"""
	Single-sentinel viewport observer.
	- observe(target) replaces whatever was being watched (at most one target)
	- notify_visible(target) fires on_visible once, then unarms until observe() is called again
	- disconnect() stops all callbacks until the next observe()
	"""

	def __init__(self, on_visible: Optional[Callable[[], None]] = None):
		self.on_visible = on_visible  # usually SearchController.fetch_page
		self._target: Optional[Hashable] = None  # currently observed sentinel

	@property
	def target(self) -> Optional[Hashable]:
		return self._target

	@property
	def is_armed(self) -> bool:
		return self._target is not None

	def observe(self, target: Hashable):
		"""Start watching a new sentinel, dropping any previous one."""
		logger.debug(f"[Pager] Observing sentinel {target!r}")
		self._target = target

	def disconnect(self):
		if self._target is not None:
			logger.debug(f"[Pager] Disconnected from sentinel {self._target!r}")
		self._target = None

	def notify_visible(self, target: Hashable) -> bool:
		"""
		Deliver a "became visible" event for target.
		Returns True if it triggered a continuation, False if it was ignored.
		"""
		if self._target is None or target != self._target:
			logger.debug(f"[Pager] Ignoring visibility of {target!r} (watching {self._target!r})")
			return False
		self._target = None  # one callback per arm; the controller re-arms after rendering
		if self.on_visible is not None:
			self.on_visible()
		return True
