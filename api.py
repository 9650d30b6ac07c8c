"""
FastAPI server for the Movie Finder.
Endpoints:
- GET /health: basic health check
- GET /search?s=...&page=1: one page of catalog results as display-ready cards
- POST /contact: contact form relay (redirects on success, inline error page otherwise)
- any other method on /contact: redirect back to the form page

Startup reads settings from the environment (.env supported) and builds the catalog client
and the contact relay once.
"""

# Import standard libraries for timing
import time  # measure startup and request latencies
from typing import List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import FastAPI, HTTPException, Query, Request  # FastAPI primitives
from fastapi.responses import HTMLResponse, RedirectResponse  # contact relay responses
from pydantic import BaseModel  # response schema definitions

# Import our internal modules for catalog access and the contact relay
from movie_finder.config import Settings, load_settings  # environment settings
from movie_finder.catalog_client import CATALOG_PAGE_SIZE, CatalogClient, CatalogError  # OMDb client
from movie_finder.contact_relay import ContactRelay, SmtpTransport, render_error_page  # mail relay
from movie_finder.formatting import to_result_item  # raw record -> card

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Instantiate the FastAPI application with metadata
app = FastAPI(title="Movie Finder API", version="1.0.0")  # web app

# Globals populated at startup (tests may assign their own before the first request)
SETTINGS: Optional[Settings] = None  # loaded configuration
CLIENT: Optional[CatalogClient] = None  # catalog client
RELAY: Optional[ContactRelay] = None  # contact form relay
STARTUP_TIME_S: float = 0.0  # measures how long startup took


# Pydantic model that describes one rendered result card
class ResultItemOut(BaseModel):
	title: str  # movie title
	year_range: str  # year or "<year>–present"
	poster_url: str  # poster or placeholder URL
	alt_text: str  # accessible description for the poster


# Pydantic model for one page of search results
class SearchPageResponse(BaseModel):
	term: str  # term exactly as requested
	page: int  # page number served
	total_results: int  # 0 when the catalog reported no total
	items: List[ResultItemOut]  # cards in catalog order
	has_more: bool  # True if another page would return more results


def get_settings() -> Settings:
	global SETTINGS
	if SETTINGS is None:
		SETTINGS = load_settings()
	return SETTINGS


def get_client() -> CatalogClient:
	global CLIENT
	if CLIENT is None:
		s = get_settings()
		CLIENT = CatalogClient(s.omdb_base_url, s.omdb_api_key, timeout=s.omdb_timeout_s)
	return CLIENT


def get_relay() -> ContactRelay:
	global RELAY
	if RELAY is None:
		s = get_settings()
		RELAY = ContactRelay(s, SmtpTransport(s))
	return RELAY


# FastAPI startup hook to initialize shared components once
@app.on_event("startup")
async def startup_event():
	"""Load settings and build the catalog client and contact relay."""
	global STARTUP_TIME_S  # refer to module-level global
	start = time.time()  # start timer for startup latency

	logger.info("[API] Startup: loading settings...")  # log intent
	settings = get_settings()
	if not settings.omdb_api_key:
		logger.warning("[API] OMDB_API_KEY is not set; catalog requests will be rejected")
	get_client()
	get_relay()

	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s")  # summary log


# Simple health endpoint for readiness checks
@app.get("/health")
async def health():
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",  # constant indicator
		"catalog_ready": CLIENT is not None,  # True if client initialized
		"relay_ready": RELAY is not None,  # True if relay initialized
		"startup_seconds": round(STARTUP_TIME_S, 2)  # startup latency
	}


# One page of catalog results
@app.get("/search", response_model=SearchPageResponse)
def search(s: str = Query("", description="Movie title search term"), page: int = Query(1, ge=1)):
	"""Fetch one catalog page and return it as display-ready cards."""
	start = time.time()  # start timer
	logger.debug(f"[API] /search s='{s}' page={page}")  # debug log of input

	try:
		result = get_client().fetch_page(s, page)
	except CatalogError as e:
		logger.error(f"[API] /search failed for s='{s}' page={page}: {e.message}")
		raise HTTPException(status_code=502, detail=e.message)

	items = [to_result_item(r) for r in result.records]  # preserve catalog order
	total = result.total_results or 0
	seen = (page - 1) * CATALOG_PAGE_SIZE + len(items)  # results up to and including this page
	elapsed_ms = (time.time() - start) * 1000  # compute ms
	logger.info(f"[API] /search served {len(items)} results in {elapsed_ms:.2f} ms")  # summary

	return SearchPageResponse(
		term=s,
		page=page,
		total_results=total,
		items=[
			ResultItemOut(
				title=i.title,
				year_range=i.year_range,
				poster_url=i.poster_url,
				alt_text=i.alt_text,
			)
			for i in items
		],
		has_more=bool(items) and seen < total,
	)


# Contact form relay
@app.post("/contact")
async def contact(request: Request):
	"""Relay a contact form post; redirect on success, inline error page on failure."""
	form = await request.form()
	fields = {k: v for k, v in form.items() if isinstance(v, str)}  # ignore file uploads
	host = request.headers.get('host', '')
	ip = request.client.host if request.client else ''

	relay = get_relay()
	outcome = relay.handle(fields, host=host, ip=ip)
	if outcome.redirect_to is not None:
		return RedirectResponse(outcome.redirect_to, status_code=303)
	return HTMLResponse(render_error_page(outcome.error_message or 'An error occurred.', relay.settings))


@app.api_route("/contact", methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"])
async def contact_not_post():
	"""Only POST is accepted; everything else goes back to the form."""
	return RedirectResponse(get_settings().contact_form_url, status_code=303)
