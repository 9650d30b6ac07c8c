"""
Data models for the Movie Finder.
Defines the search session state, rendered result cards, and contact form records.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
# Enum gives the load-more control a closed set of states
from enum import Enum  # named constants
# Import typing helpers for precise and self-documenting types
from typing import Dict, List, Optional  # dicts, lists and optional values


@dataclass
class SearchSession:
	"""
	One user-initiated search and all of its paginated continuations.
	Replaced wholesale when a new search starts; mutated in place as pages load.
	"""
	term: str  # search term exactly as the user typed it
	session_id: int  # identity used to recognise responses that belong to an older search
	page: int = 1  # next page to request (>= 1)
	total_results: Optional[int] = None  # unknown until the first response arrives
	rendered_count: int = 0  # number of cards appended so far for this session
	exhausted: bool = False  # True once every available result has been rendered
	halted: bool = False  # True after a terminal catalog error

	@property
	def finished(self) -> bool:
		"""True when no further page may be fetched for this session."""
		return self.exhausted or self.halted


@dataclass
class ResultItem:
	"""A single movie card ready for display."""
	title: str  # movie title as returned by the catalog
	year_range: str  # raw year, or "<year>–present" for open ranges
	poster_url: str  # poster image, or the placeholder when none is available

	@property
	def alt_text(self) -> str:
		return f"A poster for the movie {self.title}."


@dataclass
class CatalogPage:
	"""
	One decoded response from the movie catalog.
	total_results is None when the response carried no total (the zero-results case).
	"""
	term: str  # term the page was requested for
	page: int  # page number that was requested
	total_results: Optional[int]  # total across all pages, if reported
	records: List[Dict] = field(default_factory=list)  # raw catalog records in API order


class LoadMoreState(Enum):
	HIDDEN = "hidden"
	VISIBLE = "visible"
	EXHAUSTED = "exhausted"


@dataclass
class ContactSubmission:
	"""A contact form post after every field has been sanitized."""
	name: str
	email: str
	subject: str
	message: str
	website: str = ''  # honeypot; real visitors never see or fill it


@dataclass
class RelayOutcome:
	"""
	Result of handling one contact form post.
	Exactly one of redirect_to / error_message is set.
	"""
	redirect_to: Optional[str] = None  # where to send the browser on success (or honeypot)
	error_message: Optional[str] = None  # text for the inline error page
	sent: bool = False  # True only if the mail transport accepted the message
	honeypot: bool = False  # True when the post was discarded as a bot submission
