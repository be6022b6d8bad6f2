"""
Streamlit UI for the Comic Catalog.
Browse comics with the title search and the category filters, open a detail view,
or unlock the admin area to edit comics, categories and site branding.

Run UI:                streamlit run streamlit_app.py
"""

# Streamlit framework to build a simple interactive UI
import streamlit as st  # UI primitives

# Catalog facade and the errors the admin forms report
from comicdb.catalog import BrowseState, Catalog  # per-session filters; stores + persistence
from comicdb.errors import DuplicateOptionError, ProtectedCategoryError  # user-facing failures
from comicdb.editors import choices_with_current  # edit widgets keep values the schema dropped
from comicdb.images import to_data_uri  # uploaded logo -> data URI
from comicdb.models import SINGLE, MULTIPLE  # selection arities

# Configure Streamlit page (title and layout width)
st.set_page_config(page_title="IP Data Base", layout="wide")  # wide layout


# Cache the catalog so stores are loaded once per server process
@st.cache_resource(show_spinner=True)
def init_catalog() -> Catalog:
	"""Create the catalog from COMICDB_* settings."""
	return Catalog.from_settings()


catalog = init_catalog()  # shared catalog instance
config = catalog.site_config  # header branding

# Header with logo and titles
c_logo, c_title = st.columns([1, 8])
with c_logo:
	if config.logo_image_url:
		st.image(config.logo_image_url, width=80)  # uploaded logo
	else:
		st.markdown(f"## {config.logo_text[:2]}")  # text logo
with c_title:
	st.title(config.main_title)
	st.caption(config.sub_title)

# Sidebar: view switch and (in list view) the category filters
with st.sidebar:
	view = st.radio("View", ["Catalog", "Admin"], horizontal=True)


def render_detail(comic_id: str):
	"""Full page for a single comic."""
	comic = catalog.get_comic(comic_id)
	if comic is None:
		st.warning("Comic not found.")
		return
	if st.button("← Back to list"):
		st.session_state.pop('detail_id', None)
		st.rerun()
	c1, c2 = st.columns([1, 3])
	with c1:
		if comic.image_url:
			st.image(comic.image_url, width='stretch')
	with c2:
		st.header(comic.title)
		if comic.original_title:
			st.caption(comic.original_title)
		st.write(comic.description)
		st.write(f"Company: {comic.company}")
		st.write(f"Genre: {', '.join(comic.genre)}")
		st.write(f"Age: {comic.age} | Status: {comic.status}")
		if comic.format:
			st.write(f"Format: {comic.format}")
		if comic.distribution_type:
			st.write(f"Distribution: {comic.distribution_type}")
		if comic.target_demographic:
			st.write(
				f"Target: {comic.target_demographic.gender} | {', '.join(comic.target_demographic.age_ranges)}"
			)
		for label, value in (("Authors", comic.authors), ("Since", comic.start_year), ("Platform", comic.platform), ("Link", comic.promotional_link)):
			if value:
				st.write(f"{label}: {value}")
		st.write(f"Countries: {', '.join(comic.countries)}")
		# custom categories still defined in the schema
		for definition in catalog.schema_store.list_definitions():
			values = comic.custom_values.get(definition.id)
			if not definition.is_system and values:
				st.write(f"{definition.label}: {', '.join(values)}")


def browse_state() -> BrowseState:
	"""This session's filters; the cached catalog is shared by every session."""
	if 'browse' not in st.session_state:
		st.session_state['browse'] = BrowseState()
	return st.session_state['browse']


def clear_filters():
	"""Reset the session's filters and the widgets that mirror them."""
	browse_state().clear_filters()
	for key in [k for k in st.session_state if k.startswith('filter_') or k == 'query']:
		del st.session_state[key]


def render_list():
	"""Search box, filter sidebar and the grid of matching comics."""
	state = browse_state()
	with st.sidebar:
		st.header("Filters")
		if state.has_active_filters() and st.button("Reset All"):
			clear_filters()
			st.rerun()
		for definition in catalog.sidebar_definitions():
			options = catalog.schema_store.get_options(definition.id)
			if not options:
				continue
			selected = st.multiselect(
				definition.label,
				options,
				default=[o for o in state.selection.get(definition.id, []) if o in options],
				key=f"filter_{definition.id}",
			)
			state.set_filter(definition.id, selected)

	state.set_query(st.text_input("Search titles...", value=state.query, key='query'))
	comics = catalog.visible_comics(state)
	st.subheader("IP Data Base")
	st.caption(f"Displaying {len(comics)} titles")

	if not comics:
		st.info("No comics found")
		if st.button("Clear Filters"):
			clear_filters()
			st.rerun()
		return

	columns = st.columns(5)  # grid
	for i, comic in enumerate(comics):
		with columns[i % 5]:
			if comic.image_url:
				st.image(comic.image_url, width='stretch')
			if st.button(comic.title, key=f"open_{comic.id}"):
				st.session_state['detail_id'] = comic.id
				st.rerun()
			st.caption(f"{comic.company} | {comic.age}")


def render_login():
	secret = st.text_input("Enter Password", type="password")
	if st.button("Login"):
		if catalog.login(secret):
			st.session_state['admin'] = True
			st.rerun()
		else:
			st.error("Incorrect password.")


def render_comic_form(draft):
	"""Edit form for one comic draft (new or existing)."""
	schema = catalog.schema_store
	editor = catalog.record_editor
	is_new = catalog.get_comic(draft.id) is None
	st.subheader("New Comic" if is_new else "Edit Comic")

	def pick_one(label, category_id, current):
		options = choices_with_current(schema.get_options(category_id), [current])
		index = options.index(current) if current in options else 0
		return st.selectbox(label, options, index=index) if options else current

	def pick_many(label, options, current):
		return st.multiselect(label, choices_with_current(options, current), default=current)

	with st.form(f"comic_{draft.id}"):
		draft.title = st.text_input("Title", draft.title)
		draft.original_title = st.text_input("Original Title", draft.original_title or '') or None
		draft.description = st.text_area("Description", draft.description)
		draft.company = pick_one("Company", 'companies', draft.company)
		draft.genre = pick_many("Genre", schema.get_options('genres'), draft.genre)
		draft.status = pick_one("Status", 'statuses', draft.status)
		draft.age = pick_one("Age Rating", 'ages', draft.age)
		draft.format = pick_one("Format", 'formats', draft.format)
		draft.distribution_type = pick_one("Distribution", 'distributions', draft.distribution_type)
		demographic = draft.target_demographic
		gender = pick_one("Target Gender", 'genders', demographic.gender if demographic else '')
		age_ranges = pick_many("Target Age", schema.get_options('targetAges'), demographic.age_ranges if demographic else [])
		editor.set_demographic(draft, gender=gender, age_ranges=age_ranges)
		draft.countries = [c.strip() for c in st.text_input("Countries (comma separated)", ', '.join(draft.countries)).split(',') if c.strip()]
		draft.authors = st.text_input("Authors", draft.authors or '') or None
		draft.start_year = st.text_input("Start Year", draft.start_year or '') or None
		draft.platform = st.text_input("Platform", draft.platform or '') or None
		draft.promotional_link = st.text_input("Promotional Link", draft.promotional_link or '') or None
		draft.image_url = st.text_input("Image URL", draft.image_url)
		upload = st.file_uploader("Upload cover", type=['png', 'jpg', 'jpeg', 'gif', 'webp'])

		# Custom categories
		for definition in schema.list_definitions():
			if definition.is_system:
				continue
			options = schema.get_options(definition.id)
			current = draft.custom_values.get(definition.id, [])
			if definition.selection_arity == SINGLE:
				choices = [''] + choices_with_current(options, current[:1])
				choice = st.selectbox(definition.label, choices, index=choices.index(current[0]) if current else 0)
				editor.set_custom_values(draft, definition.id, [choice] if choice else [])
			else:
				editor.set_custom_values(draft, definition.id, pick_many(definition.label, options, current))

		submitted = st.form_submit_button("Save")

	if submitted:
		if upload is not None:
			editor.attach_image(draft, upload.getvalue(), mime_type=upload.type, filename=upload.name)
		try:
			editor.save(draft)
		except ValueError as e:
			st.error(str(e))
			return
		st.session_state.pop('draft', None)
		st.success("Saved.")
		st.rerun()
	if st.button("Cancel"):
		st.session_state.pop('draft', None)
		st.rerun()


def render_content_tab():
	if 'draft' in st.session_state:
		render_comic_form(st.session_state['draft'])
		return
	if st.button("Add New Comic", type="primary"):
		st.session_state['draft'] = catalog.record_editor.new_comic()
		st.rerun()
	for comic in catalog.record_store.list():
		c1, c2, c3 = st.columns([6, 1, 1])
		c1.write(f"**{comic.title}** | {comic.company} | {comic.status}")
		if c2.button("Edit", key=f"edit_{comic.id}"):
			st.session_state['draft'] = catalog.record_editor.edit(comic.id)
			st.rerun()
		if c3.button("Delete", key=f"delete_{comic.id}"):
			catalog.record_editor.delete(comic.id)
			st.rerun()


def render_categories_tab():
	schema_editor = catalog.schema_editor
	schema = catalog.schema_store
	definitions = schema.list_definitions()
	ids = [d.id for d in definitions]
	labels = {d.id: d.label + (" (system)" if d.is_system else "") for d in definitions}

	left, right = st.columns([1, 2])
	with left:
		if ids:
			index = ids.index(schema_editor.active_category_id) if schema_editor.active_category_id in ids else 0
			schema_editor.select_category(st.radio("Categories", ids, index=index, format_func=labels.get))
		with st.form("new_category", clear_on_submit=True):
			name = st.text_input("New category name")
			arity = st.selectbox("Selection", [MULTIPLE, SINGLE])
			if st.form_submit_button("Add Category") and name.strip():
				schema_editor.add_category(name, arity)
				st.rerun()

	active = schema.get_definition(schema_editor.active_category_id)
	if active is None:
		return
	with right:
		new_label = st.text_input("Label", active.label, key=f"label_{active.id}")
		c1, c2 = st.columns(2)
		if c1.button("Rename") and new_label != active.label:
			schema_editor.rename_category(active.id, new_label)
			st.rerun()
		if c2.button("Delete Category", disabled=active.is_system):
			try:
				schema_editor.delete_category(active.id)
			except ProtectedCategoryError as e:
				st.error(str(e))
			else:
				st.rerun()

		with st.form(f"new_option_{active.id}", clear_on_submit=True):
			value = st.text_input("New option")
			if st.form_submit_button("Add Option"):
				try:
					schema_editor.add_option(value, active.id)
				except DuplicateOptionError:
					st.error("Exists!")
				else:
					st.rerun()
		for option in schema.get_options(active.id):
			o1, o2 = st.columns([5, 1])
			o1.write(option)
			if o2.button("✕", key=f"rm_{active.id}_{option}"):
				schema_editor.remove_option(option, active.id)
				st.rerun()


def render_settings_tab():
	with st.form("site_config"):
		main_title = st.text_input("Main Title", config.main_title)
		sub_title = st.text_input("Sub Title", config.sub_title)
		logo_text = st.text_input("Logo Text", config.logo_text)
		logo = st.file_uploader("Logo Image", type=['png', 'jpg', 'jpeg', 'svg'])
		if st.form_submit_button("Save Settings"):
			changes = {'main_title': main_title, 'sub_title': sub_title, 'logo_text': logo_text}
			if logo is not None:
				changes['logo_image_url'] = to_data_uri(logo.getvalue(), mime_type=logo.type, filename=logo.name)
			catalog.update_site_config(**changes)
			st.rerun()
	if st.button("Reset all data to defaults", type="secondary"):
		catalog.reset()
		clear_filters()
		st.rerun()


def render_admin():
	if not st.session_state.get('admin'):
		render_login()
		return
	content, categories, settings = st.tabs(["Content", "Categories", "Settings"])
	with content:
		render_content_tab()
	with categories:
		render_categories_tab()
	with settings:
		render_settings_tab()


if view == "Admin":
	render_admin()
elif st.session_state.get('detail_id'):
	render_detail(st.session_state['detail_id'])
else:
	render_list()
