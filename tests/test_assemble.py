import io
import pathlib

import PIL.Image
import fitz
import pypdf
import pytest
import requests

import product_spec_sheet.api_client
import product_spec_sheet.assemble
import product_spec_sheet.assets
import product_spec_sheet.compose
import product_spec_sheet.config
import product_spec_sheet.records
import product_spec_sheet.resolver


SheetOptions = product_spec_sheet.config.SheetOptions
DEFAULT_COMPANY = product_spec_sheet.config.DEFAULT_COMPANY


class FakeClient:
	"""
	Stand-in for ApiClient; no network, canned listings.
	"""

	def __init__(self, companies: list | None = None, listing: list | None = None, by_slug: dict | None = None) -> None:
		self.session = None
		self.companies = companies or []
		self.listing = listing or []
		self.by_slug = by_slug or {}
		self.slug_calls: list[str] = []

	def fetch_company_entries(self) -> list:
		return list(self.companies)

	def fetch_product_listing(self, limit: int = 150) -> list:
		return list(self.listing)

	def fetch_product_by_slug(self, slug: str) -> dict | None:
		self.slug_calls.append(slug)
		return self.by_slug.get(slug)


#============================================
def _record(code: str = "AGE-101", collection: str = "col-1") -> dict:
	return {
		"_id": f"id-{code}",
		"fabricCode": code,
		"productTitle": "Indigo Twill Shirting",
		"category": {"name": "Woven"},
		"content": ["Cotton"],
		"gsm": 120,
		"collectionId": collection,
		"productslug": code.lower(),
	}


#============================================
def _options(tmp_path: pathlib.Path, **overrides) -> SheetOptions:
	"""
	Options that keep the run offline.
	"""
	values = {
		"output_dir": str(tmp_path),
		"site_origin": "",
		"product_url": "example.com/product/age-101",
		"max_workers": 4,
	}
	values.update(overrides)
	return SheetOptions(**values)


#============================================
def _png_bytes(size: tuple[int, int] = (24, 16)) -> bytes:
	buffer = io.BytesIO()
	PIL.Image.new("RGB", size, "navy").save(buffer, format="PNG")
	return buffer.getvalue()


#============================================
def _pdf_text(path: pathlib.Path) -> list[str]:
	document = fitz.open(path)
	pages = [page.get_text() for page in document]
	document.close()
	return pages


#============================================
def test_single_page_without_siblings(tmp_path: pathlib.Path) -> None:
	"""
	No siblings: one page, no options badge, default contact block.
	"""
	result = product_spec_sheet.assemble.generate_spec_sheet(
		_record(),
		_options(tmp_path),
		FakeClient(),
	)
	assert result.success
	assert result.file_name == "AGE-101.pdf"
	assert result.pages == 1
	assert result.gallery_pages == 0
	path = pathlib.Path(result.path)
	assert path.is_file()
	assert len(pypdf.PdfReader(str(path)).pages) == 1
	text = _pdf_text(path)[0]
	assert "Option" not in text
	assert DEFAULT_COMPANY["name"] in text
	assert DEFAULT_COMPANY["phone"] in text
	assert DEFAULT_COMPANY["email"] in text
	assert "Ahmedabad" in text
	assert "AGE-101" in text
	assert "Scan for details" in text


#============================================
def test_gallery_pages_for_siblings(tmp_path: pathlib.Path) -> None:
	"""
	Five siblings at four per page give two gallery pages in listing order.
	"""
	listing = [_record()] + [_record(f"SIB-{index}") for index in range(5)] + [_record("ZZZ-9", "col-2")]
	result = product_spec_sheet.assemble.generate_spec_sheet(
		_record(),
		_options(tmp_path),
		FakeClient(listing=listing),
	)
	assert result.sibling_count == 5
	assert result.gallery_pages == 2
	assert result.pages == 3
	pages = _pdf_text(pathlib.Path(result.path))
	assert len(pages) == 3
	assert "+5 Options" in pages[0]
	assert "SIB-0" in pages[1]
	assert "SIB-3" in pages[1]
	assert "SIB-4" in pages[2]
	assert "ZZZ-9" not in "".join(pages[1:])
	for page_text in pages:
		assert DEFAULT_COMPANY["email"] in page_text


#============================================
def test_company_from_api_and_options(tmp_path: pathlib.Path) -> None:
	companies = [{"name": "AGE", "legalName": "Amrita Test Mills", "phone1": "+91-1111", "versionNumber": 2}]
	result = product_spec_sheet.assemble.generate_spec_sheet(
		_record(),
		_options(tmp_path, email="sales@example.com"),
		FakeClient(companies=companies),
	)
	text = _pdf_text(pathlib.Path(result.path))[0]
	assert "Amrita Test Mills" in text
	assert "+91-1111" in text
	assert "sales@example.com" in text


#============================================
def test_fallback_file_name(tmp_path: pathlib.Path) -> None:
	result = product_spec_sheet.assemble.generate_spec_sheet({}, _options(tmp_path, product_url=None), FakeClient())
	assert result.file_name == product_spec_sheet.config.FALLBACK_FILE_NAME
	assert pathlib.Path(result.path).is_file()
	assert list(tmp_path.iterdir()) == [pathlib.Path(result.path)]


#============================================
def test_output_file_name_sanitized() -> None:
	view = product_spec_sheet.records.ProductView(code="AB 12/34")
	assert product_spec_sheet.assemble.output_file_name(view) == "AB_12_34.pdf"


#============================================
def test_slug_lookup_fills_gaps(tmp_path: pathlib.Path) -> None:
	record = {"fabricCode": "A1", "productslug": "a1"}
	client = FakeClient(by_slug={"a1": {"fabricCode": "IGNORED", "design": "Dobby"}})
	view = product_spec_sheet.assemble.resolve_view(record, _options(tmp_path, lookup_slug=True), client)
	assert view.code == "A1"
	assert view.design == "Dobby"
	plain = product_spec_sheet.assemble.resolve_view(record, _options(tmp_path), FakeClient())
	assert plain.design == ""


#============================================
def test_logo_candidates_order(tmp_path: pathlib.Path) -> None:
	options = _options(tmp_path, logo_url="/tmp/logo.png", site_origin="https://shop.example.com/")
	candidates = product_spec_sheet.assemble.logo_candidates(options)
	assert candidates[0] == "https://shop.example.com/assets/img/logo/my_logo.png"
	assert len(candidates) == len(product_spec_sheet.config.LOGO_CANDIDATES)
	assert product_spec_sheet.assemble.logo_candidates(_options(tmp_path)) == []


#============================================
def test_logo_option_reads_local_file(tmp_path: pathlib.Path) -> None:
	path = tmp_path / "logo.png"
	path.write_bytes(_png_bytes())
	logo = product_spec_sheet.assemble.fetch_logo(_options(tmp_path, logo_url=str(path)))
	assert logo is not None
	assert logo.source == str(path)
	assert product_spec_sheet.assemble.fetch_logo(_options(tmp_path)) is None


class RecordingResponse:
	def __init__(self, content: bytes) -> None:
		self.content = content
		self.status_code = 200


#============================================
def test_relative_image_urls_fetched_from_site_origin(tmp_path: pathlib.Path, monkeypatch) -> None:
	"""
	Root-relative hero and card image URLs are requested from the storefront.
	"""
	requested: list[str] = []
	png = _png_bytes()

	def fake_get(url: str, **kwargs) -> RecordingResponse:
		requested.append(url)
		return RecordingResponse(png)

	monkeypatch.setattr(product_spec_sheet.assets.requests, "get", fake_get)
	record = dict(_record(), image1CloudUrl="/uploads/fabric-101.jpg")
	sibling = dict(_record("SIB-1"), image1ThumbUrl="uploads/thumbs/sib-1.jpg")
	result = product_spec_sheet.assemble.generate_spec_sheet(
		record,
		_options(tmp_path, site_origin="https://shop.example.com"),
		FakeClient(listing=[record, sibling]),
	)
	assert result.sibling_count == 1
	assert "https://shop.example.com/uploads/fabric-101.jpg" in requested
	assert "https://shop.example.com/uploads/thumbs/sib-1.jpg" in requested
	assert all(url.startswith("https://shop.example.com/") for url in requested)


#============================================
def test_record_image_path_not_read_from_disk(tmp_path: pathlib.Path) -> None:
	path = tmp_path / "hero.png"
	path.write_bytes(_png_bytes())
	record = dict(_record(), image1CloudUrl=str(path))
	fetched = product_spec_sheet.assemble.fetch_assets(
		product_spec_sheet.resolver.resolve_product(record),
		_options(tmp_path),
		FakeClient(),
	)
	assert fetched.hero is None


class ForbiddenSession:
	"""
	Session that must not be used for image downloads.
	"""

	def get(self, url: str, **kwargs):
		raise AssertionError(f"client session used for {url}")


#============================================
def test_image_fetches_do_not_use_client_session(tmp_path: pathlib.Path, monkeypatch) -> None:
	requested: list[str] = []
	png = _png_bytes()

	def fake_get(url: str, **kwargs) -> RecordingResponse:
		requested.append(url)
		return RecordingResponse(png)

	monkeypatch.setattr(product_spec_sheet.assets.requests, "get", fake_get)
	client = FakeClient()
	client.session = ForbiddenSession()
	view = product_spec_sheet.resolver.resolve_product(dict(_record(), image1CloudUrl="https://cdn.example.com/hero.png"))
	fetched = product_spec_sheet.assemble.fetch_assets(view, _options(tmp_path, site_origin="https://shop.example.com"), client)
	assert fetched.hero is not None
	assert fetched.logo is not None
	assert "https://cdn.example.com/hero.png" in requested


#============================================
def test_qr_source_prefers_payload(tmp_path: pathlib.Path) -> None:
	assert product_spec_sheet.assemble.qr_source(_options(tmp_path, qr_payload="hello")) == "hello"
	assert product_spec_sheet.assemble.qr_source(_options(tmp_path)) == "https://example.com/product/age-101"


#============================================
def test_build_document_pages() -> None:
	company = product_spec_sheet.resolver.resolve_company(None)
	chrome = product_spec_sheet.compose.SheetChrome(company=company)
	view = product_spec_sheet.records.ProductView(code="X")
	siblings = [product_spec_sheet.resolver.CollectionItem(view=product_spec_sheet.records.ProductView(code=f"S{index}")) for index in range(9)]
	data = product_spec_sheet.assemble.build_document(view, chrome, siblings=siblings)
	assert len(pypdf.PdfReader(io.BytesIO(data)).pages) == 1 + 3


#============================================
def test_composition_error_writes_nothing(tmp_path: pathlib.Path, monkeypatch) -> None:
	"""
	A failure while drawing propagates and leaves no output file.
	"""
	def explode(*args, **kwargs):
		raise RuntimeError("draw failed")

	monkeypatch.setattr(product_spec_sheet.compose, "compose_title_page", explode)
	with pytest.raises(RuntimeError):
		product_spec_sheet.assemble.generate_spec_sheet(_record(), _options(tmp_path), FakeClient())
	assert list(tmp_path.iterdir()) == []


#============================================
def test_write_atomic_replaces(tmp_path: pathlib.Path) -> None:
	path = tmp_path / "nested" / "out.pdf"
	product_spec_sheet.assemble.write_atomic(path, b"one")
	product_spec_sheet.assemble.write_atomic(path, b"two")
	assert path.read_bytes() == b"two"
	assert [item.name for item in path.parent.iterdir()] == ["out.pdf"]


class DownSession:
	"""
	Session whose every request fails at the network level.
	"""

	def get(self, url: str, **kwargs):
		raise requests.ConnectionError(f"unreachable: {url}")


#============================================
def test_network_failure_uses_default_contact_block(tmp_path: pathlib.Path) -> None:
	settings = product_spec_sheet.api_client.ApiSettings(base_url="https://api.example.com")
	client = product_spec_sheet.api_client.ApiClient(settings, DownSession())
	result = product_spec_sheet.assemble.generate_spec_sheet(_record(), _options(tmp_path), client)
	assert result.success
	assert result.pages == 1
	text = _pdf_text(pathlib.Path(result.path))[0]
	assert DEFAULT_COMPANY["name"] in text
	assert DEFAULT_COMPANY["phone"] in text
	assert DEFAULT_COMPANY["email"] in text
	assert DEFAULT_COMPANY["address"] in text
