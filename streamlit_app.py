"""
Streamlit UI for the Movie Finder.
Searches the OMDb catalog page by page; the "Load more" button stands in for the newest
card scrolling into view. An optional "Remember my search" box restores the last term on reload.

The remembered term lives in one JSON file (REMEMBER_FILE) on the server, so every browser
session served by this process shares it. Run one instance per user, or point REMEMBER_FILE
at a per-user path, when that matters.

Run UI:                streamlit run streamlit_app.py
"""

# Streamlit framework to build a simple interactive UI
import streamlit as st  # UI primitives

# Local imports for the search flow
from movie_finder.config import load_settings  # environment settings
from movie_finder.catalog_client import CatalogClient  # OMDb client
from movie_finder.models import LoadMoreState  # load-more control state
from movie_finder.persistence import PersistenceAdapter  # remembered term
from movie_finder.search_controller import SearchController  # paging + rendering
from movie_finder.storage import JsonFileStore  # durable key-value file

# Console logging
from loguru import logger  # console logger

# Number of cards per row in the results grid
GRID_COLUMNS = 5

# Configure Streamlit page (title and layout width)
st.set_page_config(page_title="Movie Finder", layout="wide")  # wide layout

# Main page title
st.title("🎬 Movie Finder")  # friendly header


def seed_search_box(term: str):
	"""Put a restored term back into the search input before it is drawn."""
	st.session_state['search_box'] = term


# Build the controller and persistence adapter once per browser session
if 'controller' not in st.session_state:
	settings = load_settings()
	client = CatalogClient(settings.omdb_base_url, settings.omdb_api_key, timeout=settings.omdb_timeout_s)
	controller = SearchController(client)
	adapter = PersistenceAdapter(JsonFileStore(settings.remember_file), controller.start_search, seed_search_box)
	st.session_state['controller'] = controller
	st.session_state['adapter'] = adapter
	st.session_state['remember'] = adapter.remembered() is not None  # reflect stored state
	logger.info("[UI] New browser session")
	adapter.on_page_load()  # seeds the box and runs the remembered search, if any

controller: SearchController = st.session_state['controller']
adapter: PersistenceAdapter = st.session_state['adapter']
view = controller.view


def on_remember_toggled():
	adapter.on_toggle_changed(st.session_state['remember'], st.session_state.get('search_box', ''))


def on_search_submitted():
	term = st.session_state.get('search_box', '')
	adapter.on_toggle_changed(st.session_state['remember'], term)  # keep the stored term current
	controller.start_search(term)


def on_load_more():
	controller.pager.notify_visible(controller.pager.target)  # sentinel reached


# Search form: text box + submit
with st.form('search_form'):
	st.text_input("Search for a movie", key='search_box', placeholder="e.g., dune")
	st.form_submit_button("Search", type="primary", on_click=on_search_submitted)

st.checkbox("Remember my search", key='remember', on_change=on_remember_toggled)

# Heading: "<n> results for <term>" or "Error: ..."
if view.heading:
	if view.heading.startswith("Error:"):
		st.error(view.heading)
	else:
		st.subheader(view.heading)

# Render result cards in a grid, preserving catalog order
for row_start in range(0, len(view.cards), GRID_COLUMNS):
	cols = st.columns(GRID_COLUMNS)
	for col, card in zip(cols, view.cards[row_start:row_start + GRID_COLUMNS]):
		with col:
			st.image(card.poster_url, caption=card.alt_text, width='stretch')
			st.markdown(f"**{card.title}**")
			st.caption(f"Year released: {card.year_range}")

# Load-more control: visible while more pages exist, terminal text once exhausted
if view.load_more is LoadMoreState.VISIBLE and controller.pager.is_armed:
	st.button("Load more", on_click=on_load_more)
elif view.load_more is LoadMoreState.EXHAUSTED:
	st.caption(view.load_more_text)
