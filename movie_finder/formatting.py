"""
Formatting helpers that turn raw catalog records into display-ready cards and headings.
"""

# Typing hints for clarity of public API
from typing import Dict, Optional  # type hints

# Import our ResultItem data class used by the view
from .models import ResultItem  # display-ready movie card

# Shown when the catalog has no poster for a movie
PLACEHOLDER_POSTER = "https://placehold.co/150x200?text=No+Poster"
# The catalog's marker for a missing value
NOT_AVAILABLE = "N/A"
# Terminal text for the load-more control
NO_MORE_RESULTS = "No more results"


def format_year(year: str) -> str:
	"""
	Render the catalog's year field for display.
	A 5-character value such as "2019–" is an ongoing range and becomes "2019–present";
	anything else is returned unchanged.
	"""
	if year is not None and len(year) == 5:  # open range marker, e.g. a series still airing
		return f"{year[:4]}–present"
	return year or ''  # None becomes empty


def resolve_poster(poster: Optional[str]) -> str:
	"""Return the poster URL, or the placeholder when it is missing or marked N/A."""
	if not poster or poster == NOT_AVAILABLE:
		return PLACEHOLDER_POSTER
	return poster


def to_result_item(record: Dict) -> ResultItem:
	"""Convert one raw catalog record ({Title, Year, Poster}) into a ResultItem."""
	return ResultItem(
		title=str(record.get('Title') or ''),  # keep API title verbatim
		year_range=format_year(str(record.get('Year') or '')),  # apply open-range rule
		poster_url=resolve_poster(record.get('Poster')),  # apply placeholder rule
	)


def results_heading(total: int, term: str) -> str:
	return f"{total} results for {term}"


def error_heading(message: str) -> str:
	return f"Error: {message}"
