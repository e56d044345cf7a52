import PIL.Image

import product_spec_sheet.assets
import product_spec_sheet.compose
import product_spec_sheet.config
import product_spec_sheet.geometry
import product_spec_sheet.records
import product_spec_sheet.resolver


ProductView = product_spec_sheet.records.ProductView


#============================================
def _chrome() -> product_spec_sheet.compose.SheetChrome:
	company = product_spec_sheet.resolver.resolve_company(None)
	logo = product_spec_sheet.assets.image_to_asset(PIL.Image.new("RGB", (120, 80), "navy"), "logo")
	return product_spec_sheet.compose.SheetChrome(company=company, logo=logo)


#============================================
def _full_view(rating: object = 4.5) -> ProductView:
	return ProductView(
		code="AGE-101",
		category="Woven Fabrics",
		supply_model="Ready-to-ship",
		content=("Cotton", "Elastane"),
		width_cm=147.0,
		width_inch=58.0,
		gsm=120.0,
		oz=3.5,
		design="Twill",
		structure="Woven",
		colors=("Indigo",),
		motif="Solid",
		finish=("FIN-Peach=Peach Finish", "Soft-Wash"),
		moq="500",
		unit="Meter",
		rating=rating,
	)


#============================================
def test_options_badge_text() -> None:
	assert product_spec_sheet.compose.options_badge_text(0) == ""
	assert product_spec_sheet.compose.options_badge_text(1) == "+1 Option"
	assert product_spec_sheet.compose.options_badge_text(7) == "+7 Options"


#============================================
def test_table_cells_order() -> None:
	cells = product_spec_sheet.compose.table_cells(_full_view())
	labels = [label for label, _value in cells]
	assert labels == ["Content", "Width", "Weight", "Design", "Structure", "Colors", "Motif", "Sales MOQ"]
	assert dict(cells)["Sales MOQ"] == "500 Meter"


#============================================
def test_footer_items_skip_blank() -> None:
	company = product_spec_sheet.resolver.CompanyRecord("ACME", "123", "", "a@b.c", "")
	items = product_spec_sheet.compose.footer_items(company)
	assert [text for text, _color, _glyph in items] == ["123", "a@b.c"]


#============================================
def test_footer_row_fits_between_margins() -> None:
	"""
	Long contact entries shrink the gap, then ellipsize to stay inside the margins.
	"""
	company = product_spec_sheet.resolver.CompanyRecord(
		"ACME",
		"+91 98765 43210 / +91 79 2658 0000",
		"+91 99999 88888 (export desk)",
		"international.wholesale.enquiries@amrita-fashions-export.example.com",
		"",
	)
	available = product_spec_sheet.config.PAGE_WIDTH - 2.0 * product_spec_sheet.config.PAGE_MARGIN
	row, gap = product_spec_sheet.compose.layout_footer_row(product_spec_sheet.compose.footer_items(company), available)
	assert len(row) == 3
	assert gap == product_spec_sheet.compose.FOOTER_MIN_GAP
	total = sum(width for _text, _color, _glyph, width in row) + gap * (len(row) - 1)
	assert total <= available + 1e-6
	assert row[2][0].endswith(product_spec_sheet.geometry.ELLIPSIS)
	page = product_spec_sheet.geometry.PageBuilder()
	assert product_spec_sheet.compose.draw_footer(page, company) < product_spec_sheet.config.PAGE_HEIGHT


#============================================
def test_footer_row_short_entries_unchanged() -> None:
	company = product_spec_sheet.resolver.CompanyRecord("ACME", "123", "", "a@b.c", "")
	row, gap = product_spec_sheet.compose.layout_footer_row(product_spec_sheet.compose.footer_items(company), 182.0)
	assert [text for text, _color, _glyph, _width in row] == ["123", "a@b.c"]
	assert gap == product_spec_sheet.compose.FOOTER_GAP


#============================================
def test_title_page_full_record() -> None:
	"""
	Every optional block is drawn and stays above the footer boundary.
	"""
	page = product_spec_sheet.geometry.PageBuilder()
	hero = product_spec_sheet.assets.image_to_asset(PIL.Image.new("RGB", (300, 200), "gray"), "hero")
	qr = product_spec_sheet.assets.fetch_qr_image("https://example.com/p/age-101")
	report = product_spec_sheet.compose.compose_title_page(page, _full_view(), _chrome(), hero, qr, 3)
	assert report.badge_text == "+3 Options"
	assert report.stars_drawn
	assert report.table_box is not None
	assert report.qr_box is not None
	assert report.qr_box.y >= report.table_box.bottom
	assert report.qr_box.bottom <= report.content_max_y
	assert report.table_box.bottom <= report.content_max_y
	assert report.content_max_y == product_spec_sheet.config.content_max_y()
	assert "apparel" in report.uses_sections
	assert page.seal().startswith(b"%PDF")


#============================================
def test_title_page_sparse_record() -> None:
	"""
	Missing image, rating, QR and siblings leave their blocks out.
	"""
	page = product_spec_sheet.geometry.PageBuilder()
	report = product_spec_sheet.compose.compose_title_page(page, ProductView(), _chrome(), None, None, 0)
	assert report.badge_text == ""
	assert not report.stars_drawn
	assert report.qr_box is None
	assert report.table_box is not None
	page.seal()


#============================================
def test_spec_table_omitted_without_room() -> None:
	page = product_spec_sheet.geometry.PageBuilder()
	table = product_spec_sheet.compose.draw_spec_table(page, _full_view(), 230.0, 257.0)
	assert table is None


#============================================
def test_qr_card_omitted_without_room() -> None:
	page = product_spec_sheet.geometry.PageBuilder()
	qr = product_spec_sheet.assets.fetch_qr_image("hello")
	assert product_spec_sheet.compose.draw_qr_card(page, qr, 230.0, 257.0) is None
	card = product_spec_sheet.compose.draw_qr_card(page, qr, 150.0, 257.0)
	assert card is not None
	assert card.y == 159.0


#============================================
def test_suggested_uses_need_space() -> None:
	page = product_spec_sheet.geometry.PageBuilder()
	assert product_spec_sheet.compose.draw_suggested_uses(page, 220.0, 257.0, None) == []
	assert product_spec_sheet.compose.draw_suggested_uses(page, 120.0, 257.0, None) == ["apparel", "home"]
