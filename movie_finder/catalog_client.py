"""
Movie catalog client.
Fetches one page of search results from the OMDb API and decodes it into a CatalogPage.
"""

# Typing hints for clarity of public API
from typing import Dict, Optional  # type hints

# HTTP client for the catalog API
import requests  # make web requests to the catalog

# Import our page data class
from .models import CatalogPage  # decoded catalog response

# Console logging
from loguru import logger  # console logger

# The catalog serves search results in fixed pages of this size
CATALOG_PAGE_SIZE = 10
# The catalog answers an unknown term with this error and no total
NOT_FOUND_ERROR = "Movie not found!"


class CatalogError(Exception):
	"""Raised when the catalog cannot answer; message is safe to show to the user."""

	def __init__(self, message: str):
		super().__init__(message)
		self.message = message  # human-readable text from the server or transport


class CatalogClient:
	"""
	Thin wrapper around the catalog's search endpoint.
	Every call is a single GET; there is no retry.
	"""

	def __init__(
		self,
		base_url: str,  # e.g. 'http://www.omdbapi.com/'
		api_key: str,  # OMDb API key
		timeout: float = 10.0,  # seconds before a request is abandoned
		session: Optional[requests.Session] = None,  # injectable for connection reuse
	):
		self.base_url = base_url
		self.api_key = api_key
		self.timeout = timeout
		self.http = session or requests.Session()  # reuse connections across pages

	def fetch_page(self, term: str, page: int = 1) -> CatalogPage:
		"""
		Request one page of results for a term.
		Raises CatalogError on transport failure, non-2xx status, or a declared API error.
		"""
		params = {'apikey': self.api_key, 's': term, 'page': page}  # term passed through as-is
		logger.debug(f"[Catalog] GET {self.base_url} s='{term}' page={page}")

		try:
			resp = self.http.get(self.base_url, params=params, timeout=self.timeout)
		except requests.RequestException as e:  # DNS, connection, timeout...
			logger.error(f"[Catalog] Request failed for s='{term}' page={page}: {e}")
			raise CatalogError(str(e)) from e

		payload = self._decode(resp)  # dict or None when body isn't JSON

		if not resp.ok:
			message = (payload or {}).get('Error') or resp.reason or f"HTTP {resp.status_code}"
			logger.error(f"[Catalog] HTTP {resp.status_code} for s='{term}' page={page}: {message}")
			raise CatalogError(message)

		if payload is None:
			logger.error(f"[Catalog] Non-JSON body for s='{term}' page={page}")
			raise CatalogError("Invalid response from the movie catalog")

		return self._parse_page(term, page, payload)

	def _decode(self, resp: requests.Response) -> Optional[Dict]:
		"""Return the JSON body as a dict, or None if it is not a JSON object."""
		try:
			data = resp.json()
		except ValueError:  # requests' JSONDecodeError subclasses ValueError
			return None
		return data if isinstance(data, dict) else None

	def _parse_page(self, term: str, page: int, payload: Dict) -> CatalogPage:
		"""Map the catalog's {Search, totalResults, Response, Error} shape onto a CatalogPage."""
		raw_total = payload.get('totalResults')

		if raw_total is None:
			error = payload.get('Error')
			# Declared failure other than "nothing matched" is an error, not an empty result
			if payload.get('Response') == 'False' and error and error != NOT_FOUND_ERROR:
				logger.error(f"[Catalog] API error for s='{term}' page={page}: {error}")
				raise CatalogError(error)
			logger.info(f"[Catalog] No total reported for s='{term}' page={page}")
			return CatalogPage(term=term, page=page, total_results=None, records=[])

		try:
			total = int(raw_total)  # the API sends the total as a string
		except (TypeError, ValueError) as e:
			raise CatalogError(f"Invalid result count from the movie catalog: {raw_total!r}") from e

		records = payload.get('Search') or []  # keep API order
		logger.debug(f"[Catalog] s='{term}' page={page} -> {len(records)} records of {total}")
		return CatalogPage(term=term, page=page, total_results=total, records=list(records))
