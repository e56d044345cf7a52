"""
Document assembly: fetch everything concurrently, compose pages, write the PDF.
"""

# Standard Library
import concurrent.futures
import dataclasses
import io
import logging
import os
import pathlib
import tempfile

# PIP3 modules
import pypdf

# local repo modules
import product_spec_sheet as pss
import product_spec_sheet.api_client
import product_spec_sheet.assets
import product_spec_sheet.compose
import product_spec_sheet.config
import product_spec_sheet.gallery
import product_spec_sheet.geometry
import product_spec_sheet.records
import product_spec_sheet.resolver


ApiClient = pss.api_client.ApiClient
AssetImage = pss.assets.AssetImage
CollectionItem = pss.resolver.CollectionItem
CompanyRecord = pss.resolver.CompanyRecord
ProductView = pss.records.ProductView
PageBuilder = pss.geometry.PageBuilder
SheetChrome = pss.compose.SheetChrome
GridLayout = pss.gallery.GridLayout
SheetOptions = pss.config.SheetOptions
SheetResult = pss.config.SheetResult

PAGE_WIDTH = pss.config.PAGE_WIDTH
PAGE_HEIGHT = pss.config.PAGE_HEIGHT
FALLBACK_FILE_NAME = pss.config.FALLBACK_FILE_NAME
LOGO_CANDIDATES = pss.config.LOGO_CANDIDATES

LOGGER = logging.getLogger(__name__)


@dataclasses.dataclass
class FetchedAssets:
	company: CompanyRecord
	siblings: list[CollectionItem]
	hero: AssetImage | None = None
	logo: AssetImage | None = None
	qr: AssetImage | None = None


#============================================
def logo_candidates(options: SheetOptions) -> list[str]:
	"""
	List the well-known logo URLs on the storefront.

	Args:
		options: Sheet options.

	Returns:
		Candidate URLs, empty without a site origin.
	"""
	return [pss.assets.resolve_asset_url(path, options.site_origin) for path in LOGO_CANDIDATES if options.site_origin]


#============================================
def fetch_logo(options: SheetOptions) -> AssetImage | None:
	"""
	Load the header logo.

	The explicit logo option may be a local file; the storefront
	candidates are tried after it.

	Args:
		options: Sheet options.

	Returns:
		Logo image or None.
	"""
	explicit = pss.records.clean_str(options.logo_url)
	if explicit:
		logo = pss.assets.fetch_image(explicit, allow_local=True)
		if logo is not None:
			return logo
		LOGGER.warning("Logo %s could not be loaded; trying site candidates", explicit)
	candidates = logo_candidates(options)
	if not candidates:
		return None
	return pss.assets.fetch_first_image(candidates)


#============================================
def fetch_metadata(
	client: ApiClient,
	view: ProductView,
	options: SheetOptions,
) -> tuple[CompanyRecord, list[CollectionItem]]:
	"""
	Fetch the company record and the collection siblings in sequence.

	Both calls share the client session, so they run on one thread.

	Args:
		client: API client.
		view: Canonical product view.
		options: Sheet options.

	Returns:
		Tuple of (company, siblings).
	"""
	company = pss.resolver.fetch_company(client, options)
	siblings = pss.resolver.fetch_siblings(client, view)
	return (company, siblings)


#============================================
def qr_source(options: SheetOptions) -> str:
	payload = pss.records.clean_str(options.qr_payload)
	if payload:
		return payload
	return pss.assets.normalize_url(options.product_url)


#============================================
def fetch_assets(
	view: ProductView,
	options: SheetOptions,
	client: ApiClient,
	logger: logging.Logger = LOGGER,
) -> FetchedAssets:
	"""
	Fetch company, siblings, hero image, logo and QR concurrently.

	Each task fills its own slot; every slot falls back on failure. Image
	fetches use module-level requests calls so no session is shared
	between threads.

	Args:
		view: Canonical product view.
		options: Sheet options.
		client: API client.
		logger: Logger for progress messages.

	Returns:
		FetchedAssets with card images not yet attached.
	"""
	hero_url = pss.assets.resolve_asset_url(view.primary_image_url, options.site_origin)
	with concurrent.futures.ThreadPoolExecutor(max_workers=max(1, options.max_workers)) as executor:
		metadata_future = executor.submit(fetch_metadata, client, view, options)
		hero_future = executor.submit(pss.assets.fetch_image, hero_url)
		logo_future = executor.submit(fetch_logo, options)
		qr_future = executor.submit(pss.assets.fetch_qr_image, qr_source(options))
		company, siblings = metadata_future.result()
		fetched = FetchedAssets(
			company=company,
			siblings=siblings,
			hero=hero_future.result(),
			logo=logo_future.result(),
			qr=qr_future.result(),
		)
	logger.info(
		"Fetched assets: hero=%s logo=%s qr=%s siblings=%d",
		fetched.hero is not None,
		fetched.logo is not None,
		fetched.qr is not None,
		len(fetched.siblings),
	)
	return fetched


#============================================
def attach_card_images(
	siblings: list[CollectionItem],
	site_origin: str = "",
	max_workers: int = pss.config.DEFAULT_MAX_WORKERS,
) -> list[CollectionItem]:
	"""
	Fetch sibling card images concurrently, keeping sibling order.

	Args:
		siblings: Siblings without images.
		site_origin: Origin for relative image URLs.
		max_workers: Thread pool size.

	Returns:
		New CollectionItem list with images attached where they loaded.
	"""
	if not siblings:
		return []
	urls = [
		pss.assets.resolve_asset_url(item.view.card_image_url or item.view.primary_image_url, site_origin)
		for item in siblings
	]
	with concurrent.futures.ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
		futures = [executor.submit(pss.assets.fetch_image, url) for url in urls]
		images = [future.result() for future in futures]
	return [dataclasses.replace(item, image=image) for item, image in zip(siblings, images)]


#============================================
def merge_pages(page_blobs: list[bytes]) -> bytes:
	"""
	Merge sealed one-page PDFs into one document.

	Args:
		page_blobs: PDF bytes per page, in order.

	Returns:
		Merged PDF bytes.
	"""
	writer = pypdf.PdfWriter()
	for blob in page_blobs:
		reader = pypdf.PdfReader(io.BytesIO(blob))
		for page in reader.pages:
			writer.add_page(page)
	buffer = io.BytesIO()
	writer.write(buffer)
	return buffer.getvalue()


#============================================
def build_document(
	view: ProductView,
	chrome: SheetChrome,
	hero: AssetImage | None = None,
	qr: AssetImage | None = None,
	siblings: list[CollectionItem] | None = None,
	layout: GridLayout | None = None,
	logger: logging.Logger = LOGGER,
) -> bytes:
	"""
	Compose the title page and gallery pages into PDF bytes.

	Args:
		view: Canonical product view.
		chrome: Company record and logo.
		hero: Hero image or None.
		qr: QR image or None.
		siblings: Collection siblings with card images.
		layout: Gallery grid; derived from the page size by default.
		logger: Logger for progress messages.

	Returns:
		PDF bytes of the whole document.
	"""
	siblings = siblings or []
	if layout is None:
		layout = pss.gallery.compute_grid_layout(PAGE_WIDTH, PAGE_HEIGHT)

	page_blobs: list[bytes] = []
	page = PageBuilder(PAGE_WIDTH, PAGE_HEIGHT)
	report = pss.compose.compose_title_page(page, view, chrome, hero, qr, len(siblings))
	page_blobs.append(page.seal())
	logger.debug(
		"Title page: badge=%r stars=%s table=%s qr=%s uses=%s",
		report.badge_text,
		report.stars_drawn,
		report.table_box is not None,
		report.qr_box is not None,
		report.uses_sections,
	)

	chunks = pss.gallery.paginate(siblings, layout.capacity)
	for index, chunk in enumerate(chunks, start=1):
		page = PageBuilder(PAGE_WIDTH, PAGE_HEIGHT)
		pss.gallery.draw_gallery_page(page, chunk, layout, chrome)
		page_blobs.append(page.seal())
		logger.debug("Gallery page %d/%d with %d cards", index, len(chunks), len(chunk))

	return merge_pages(page_blobs)


#============================================
def output_file_name(view: ProductView) -> str:
	stem = pss.records.sanitize_file_stem(view.code)
	if not stem:
		return FALLBACK_FILE_NAME
	return f"{stem}.pdf"


#============================================
def write_atomic(path: pathlib.Path, data: bytes) -> None:
	"""
	Write bytes through a temp file in the same directory, then replace.

	Args:
		path: Final file path.
		data: File content.
	"""
	path.parent.mkdir(parents=True, exist_ok=True)
	handle, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
	try:
		with os.fdopen(handle, "wb") as temp_file:
			temp_file.write(data)
		os.replace(temp_name, path)
	except BaseException:
		pathlib.Path(temp_name).unlink(missing_ok=True)
		raise


#============================================
def resolve_view(
	record: dict,
	options: SheetOptions,
	client: ApiClient,
	logger: logging.Logger = LOGGER,
) -> ProductView:
	"""
	Resolve the product, filling gaps from the slug lookup when enabled.

	Args:
		record: Product mapping.
		options: Sheet options.
		client: API client.
		logger: Logger.

	Returns:
		Canonical ProductView.
	"""
	view = pss.resolver.resolve_product(record)
	if not options.lookup_slug or not view.slug:
		return view
	full_record = client.fetch_product_by_slug(view.slug)
	if full_record is None:
		logger.info("Slug lookup for %s found nothing; using record as given", view.slug)
		return view
	return pss.resolver.resolve_product(pss.resolver.enrich_record(record, full_record))


#============================================
def generate_spec_sheet(
	record: dict,
	options: SheetOptions | None = None,
	client: ApiClient | None = None,
	logger: logging.Logger | None = None,
) -> SheetResult:
	"""
	Generate the specification sheet PDF for one product.

	Network and asset problems degrade the output; composition and write
	errors propagate and leave no file behind.

	Args:
		record: Product mapping.
		options: Sheet options.
		client: API client; built from the environment by default.
		logger: Logger; module logger by default.

	Returns:
		SheetResult describing the written file.
	"""
	if options is None:
		options = SheetOptions()
	if client is None:
		client = ApiClient()
	if logger is None:
		logger = LOGGER

	view = resolve_view(record, options, client, logger)
	logger.info("Building spec sheet for %s", view.code or "<no code>")
	fetched = fetch_assets(view, options, client, logger)
	siblings = attach_card_images(fetched.siblings, options.site_origin, options.max_workers)

	chrome = SheetChrome(company=fetched.company, logo=fetched.logo)
	layout = pss.gallery.compute_grid_layout(PAGE_WIDTH, PAGE_HEIGHT)
	data = build_document(view, chrome, fetched.hero, fetched.qr, siblings, layout, logger)

	file_name = output_file_name(view)
	path = pathlib.Path(options.output_dir) / file_name
	write_atomic(path, data)
	gallery_pages = len(pss.gallery.paginate(siblings, layout.capacity))
	logger.info("Wrote %s (%d pages)", path, 1 + gallery_pages)
	return SheetResult(
		success=True,
		file_name=file_name,
		path=str(path),
		pages=1 + gallery_pages,
		gallery_pages=gallery_pages,
		sibling_count=len(siblings),
	)
