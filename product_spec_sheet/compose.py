"""
Title page composition: header, hero block, attribute table, QR card,
suggested uses and footer.
"""

# Standard Library
import dataclasses

# local repo modules
import product_spec_sheet as pss
import product_spec_sheet.assets
import product_spec_sheet.config
import product_spec_sheet.geometry
import product_spec_sheet.records
import product_spec_sheet.resolver
import product_spec_sheet.stars


PageBuilder = pss.geometry.PageBuilder
LayoutBox = pss.geometry.LayoutBox
AssetImage = pss.assets.AssetImage
ProductView = pss.records.ProductView
CompanyRecord = pss.resolver.CompanyRecord

draw_text = pss.geometry.draw_text
measure_text = pss.geometry.measure_text
line_height = pss.geometry.line_height

PAGE_MARGIN = pss.config.PAGE_MARGIN
HEADER_TOP = pss.config.HEADER_TOP
FOOTER_RULE_OFFSET = pss.config.FOOTER_RULE_OFFSET
FOOTER_CONTENT_GAP = pss.config.FOOTER_CONTENT_GAP
DEFAULT_FONT_REGULAR = pss.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = pss.config.DEFAULT_FONT_BOLD
DEFAULT_FONT_TITLE = pss.config.DEFAULT_FONT_TITLE
LOGO_BOX_WIDTH = pss.config.LOGO_BOX_WIDTH
LOGO_BOX_HEIGHT = pss.config.LOGO_BOX_HEIGHT
HERO_IMAGE_SIZE = pss.config.HERO_IMAGE_SIZE
TITLE_MAX_LINES = pss.config.TITLE_MAX_LINES
TAGLINE_MAX_LINES = pss.config.TAGLINE_MAX_LINES
DESCRIPTION_MAX_LINES = pss.config.DESCRIPTION_MAX_LINES
ADDRESS_MAX_LINES = pss.config.ADDRESS_MAX_LINES
TABLE_ROW_HEIGHT = pss.config.TABLE_ROW_HEIGHT
TABLE_FINISH_HEIGHT = pss.config.TABLE_FINISH_HEIGHT
QR_CARD_WIDTH = pss.config.QR_CARD_WIDTH
QR_CARD_HEIGHT = pss.config.QR_CARD_HEIGHT
QR_IMAGE_SIZE = pss.config.QR_IMAGE_SIZE
STAR_SIZE = pss.config.STAR_SIZE
STAR_GAP = pss.config.STAR_GAP
APPAREL_USES = pss.config.APPAREL_USES
HOME_USES = pss.config.HOME_USES
PILL_CATEGORY = pss.config.PILL_CATEGORY
PILL_SUPPLY = pss.config.PILL_SUPPLY

COLOR_BLACK = pss.config.COLOR_BLACK
COLOR_WHITE = pss.config.COLOR_WHITE
COLOR_BORDER = pss.config.COLOR_BORDER
COLOR_TEXT = pss.config.COLOR_TEXT
COLOR_TEXT_MUTED = pss.config.COLOR_TEXT_MUTED
COLOR_TEXT_BODY = pss.config.COLOR_TEXT_BODY
COLOR_TEXT_FOOTER = pss.config.COLOR_TEXT_FOOTER
COLOR_LABEL = pss.config.COLOR_LABEL
COLOR_SHADOW = pss.config.COLOR_SHADOW
COLOR_PANEL = pss.config.COLOR_PANEL
COLOR_PLACEHOLDER = pss.config.COLOR_PLACEHOLDER
COLOR_AMBER_BG = pss.config.COLOR_AMBER_BG
COLOR_GOLD_LINE = pss.config.COLOR_GOLD_LINE
COLOR_GOLD_LINE_DARK = pss.config.COLOR_GOLD_LINE_DARK
COLOR_BADGE = pss.config.COLOR_BADGE
COLOR_PHONE = pss.config.COLOR_PHONE
COLOR_WHATSAPP = pss.config.COLOR_WHATSAPP
COLOR_EMAIL = pss.config.COLOR_EMAIL

PILL_GAP = 4.0
RATING_PILL_WIDTH = 44.0
TABLE_LABEL_SIZE = 8.2
TABLE_VALUE_SIZE = 9.2
FINISH_LABEL_WIDTH = 24.0
USES_SECTION_MIN_SPACE = 60.0
USES_ITEM_STEP = 5.0
FOOTER_ICON_RADIUS = 4.0
FOOTER_TEXT_SIZE = 12.0
FOOTER_GAP = 10.0
FOOTER_MIN_GAP = 4.0


@dataclasses.dataclass(frozen=True)
class SheetChrome:
	company: CompanyRecord
	logo: AssetImage | None = None


@dataclasses.dataclass
class TitlePageReport:
	header_bottom: float = 0.0
	content_max_y: float = 0.0
	badge_text: str = ""
	stars_drawn: bool = False
	table_box: LayoutBox | None = None
	qr_box: LayoutBox | None = None
	uses_sections: list[str] = dataclasses.field(default_factory=list)
	bottom: float = 0.0


#============================================
def draw_header(page: PageBuilder, company_name: str, logo: AssetImage | None) -> float:
	"""
	Draw the logo, centred company name and double gold rule.

	Args:
		page: Page to draw on.
		company_name: Name shown beside the logo.
		logo: Logo image or None.

	Returns:
		Y of the lower rule in millimetres.
	"""
	gap = 5.0
	font_size = 23.0
	side_margin = 10.0
	name_budget = page.page_width - 2.0 * side_margin - LOGO_BOX_WIDTH - gap
	name = pss.geometry.fit_single_line(company_name, name_budget, DEFAULT_FONT_BOLD, font_size)
	name_width = measure_text(name or " ", DEFAULT_FONT_BOLD, font_size)
	total_width = LOGO_BOX_WIDTH + gap + name_width
	start_x = max(side_margin, (page.page_width - total_width) / 2.0)

	if logo is not None:
		slot = LayoutBox(start_x, HEADER_TOP, LOGO_BOX_WIDTH, LOGO_BOX_HEIGHT)
		target = pss.geometry.contain_box(logo.width, logo.height, slot)
		pss.geometry.draw_image(page, logo.reader, target)

	if name:
		draw_text(page, start_x + LOGO_BOX_WIDTH + gap, HEADER_TOP + 11.0, name, DEFAULT_FONT_BOLD, font_size, COLOR_BLACK)

	rule_y = HEADER_TOP + 17.2
	pss.geometry.draw_line(page, 12.0, rule_y, page.page_width - 12.0, rule_y, COLOR_GOLD_LINE, 0.9)
	pss.geometry.draw_line(page, 12.0, rule_y + 1.1, page.page_width - 12.0, rule_y + 1.1, COLOR_GOLD_LINE_DARK, 0.2)
	return rule_y + 1.1


#============================================
def footer_items(company: CompanyRecord) -> list[tuple[str, str, str]]:
	"""
	List the footer contact entries.

	Args:
		company: Company record.

	Returns:
		List of (text, icon color, icon glyph).
	"""
	items: list[tuple[str, str, str]] = []
	if company.phone:
		items.append((company.phone, COLOR_PHONE, "T"))
	if company.whatsapp:
		items.append((company.whatsapp, COLOR_WHATSAPP, "W"))
	if company.email:
		items.append((company.email, COLOR_EMAIL, "@"))
	return items


#============================================
def layout_footer_row(
	items: list[tuple[str, str, str]],
	available_width: float,
) -> tuple[list[tuple[str, str, str, float]], float]:
	"""
	Fit the footer contact entries into one row.

	The gap shrinks first; when the row is still too wide every entry is
	ellipsized to an equal share of the width.

	Args:
		items: Entries from footer_items.
		available_width: Row width in millimetres.

	Returns:
		Tuple of (entries as (text, color, glyph, width), gap).
	"""
	if not items:
		return ([], FOOTER_GAP)
	icon_width = FOOTER_ICON_RADIUS * 2.0 + 3.0
	gaps = len(items) - 1

	def measure(text: str) -> float:
		return icon_width + measure_text(text, DEFAULT_FONT_BOLD, FOOTER_TEXT_SIZE)

	widths = [measure(text) for text, _color, _glyph in items]
	gap_x = FOOTER_GAP
	if sum(widths) + gap_x * gaps > available_width:
		gap_x = FOOTER_MIN_GAP
	if sum(widths) + gap_x * gaps > available_width:
		share = (available_width - gap_x * gaps) / len(items) - icon_width
		fitted: list[tuple[str, str, str]] = []
		for text, color, glyph in items:
			fitted.append((pss.geometry.fit_single_line(text, share, DEFAULT_FONT_BOLD, FOOTER_TEXT_SIZE), color, glyph))
		items = fitted
		widths = [measure(text) for text, _color, _glyph in items]
	row = [(text, color, glyph, width) for (text, color, glyph), width in zip(items, widths)]
	return (row, gap_x)


#============================================
def draw_footer(page: PageBuilder, company: CompanyRecord) -> float:
	"""
	Draw the footer rule, contact row and address.

	Args:
		page: Page to draw on.
		company: Company record.

	Returns:
		Lowest Y body content may use.
	"""
	rule_y = page.page_height - FOOTER_RULE_OFFSET
	pss.geometry.draw_line(page, PAGE_MARGIN, rule_y, page.page_width - PAGE_MARGIN, rule_y, COLOR_BORDER, 0.35)

	baseline = rule_y + 10.0
	icon_radius = FOOTER_ICON_RADIUS
	row, gap_x = layout_footer_row(footer_items(company), page.page_width - PAGE_MARGIN * 2.0)
	total = sum(width for _text, _color, _glyph, width in row) + gap_x * max(0, len(row) - 1)
	cursor = max(PAGE_MARGIN, (page.page_width - total) / 2.0)
	for text, color, glyph, width in row:
		center_y = baseline - 2.0
		pss.geometry.draw_circle(page, cursor + icon_radius, center_y, icon_radius, color)
		glyph_baseline = pss.geometry.baseline_for_center(center_y, DEFAULT_FONT_BOLD, 8.0)
		draw_text(page, cursor + icon_radius, glyph_baseline, glyph, DEFAULT_FONT_BOLD, 8.0, COLOR_WHITE, align="CENTER")
		draw_text(page, cursor + icon_radius * 2.0 + 3.0, baseline, text, DEFAULT_FONT_BOLD, FOOTER_TEXT_SIZE, COLOR_TEXT_FOOTER)
		cursor += width + gap_x

	if company.address:
		lines = pss.geometry.wrap_lines(
			company.address,
			page.page_width - PAGE_MARGIN * 2.0,
			ADDRESS_MAX_LINES,
			DEFAULT_FONT_REGULAR,
			10.0,
		)
		draw_text(page, page.page_width / 2.0, page.page_height - 10.0, lines, DEFAULT_FONT_REGULAR, 10.0, COLOR_TEXT_MUTED, align="CENTER")

	return rule_y - FOOTER_CONTENT_GAP


#============================================
def draw_page_chrome(page: PageBuilder, chrome: SheetChrome) -> tuple[float, float]:
	"""
	Draw the repeating header and footer.

	Returns:
		Tuple of (header rule Y, content max Y).
	"""
	header_bottom = draw_header(page, chrome.company.name, chrome.logo)
	content_max_y = draw_footer(page, chrome.company)
	return (header_bottom, content_max_y)


#============================================
def draw_product_code(page: PageBuilder, code: str, x: float, top: float) -> None:
	if not code:
		return
	draw_text(page, x, top + 7.2, code, DEFAULT_FONT_BOLD, 12.6, COLOR_BLACK)
	code_width = measure_text(code, DEFAULT_FONT_BOLD, 12.6)
	pss.geometry.draw_line(page, x, top + 8.9, x + min(code_width, 34.0), top + 8.9, COLOR_GOLD_LINE_DARK, 0.4)


#============================================
def draw_image_placeholder(page: PageBuilder, box: LayoutBox) -> None:
	baseline = pss.geometry.baseline_for_center(box.y + box.height / 2.0, DEFAULT_FONT_BOLD, 10.0)
	draw_text(page, box.x + box.width / 2.0, baseline, "IMAGE", DEFAULT_FONT_BOLD, 10.0, COLOR_PLACEHOLDER, align="CENTER")


#============================================
def options_badge_text(sibling_count: int) -> str:
	if sibling_count <= 0:
		return ""
	if sibling_count == 1:
		return "+1 Option"
	return f"+{sibling_count} Options"


#============================================
def draw_options_badge(page: PageBuilder, card: LayoutBox, sibling_count: int) -> str:
	"""
	Overlay the sibling count badge near the bottom of the image card.

	Args:
		page: Page to draw on.
		card: Image card box.
		sibling_count: Number of collection siblings.

	Returns:
		Badge text, empty when no badge was drawn.
	"""
	text = options_badge_text(sibling_count)
	if not text:
		return ""
	font_size = 7.9
	badge_height = 7.0
	badge_width = max(34.0, measure_text(text, DEFAULT_FONT_BOLD, font_size) + 11.0)
	badge_x = card.x + (card.width - badge_width) / 2.0
	badge_y = card.bottom - badge_height - 7.0
	pss.geometry.fill_rounded_box(page, LayoutBox(badge_x, badge_y, badge_width, badge_height), COLOR_BADGE, 2.4)

	# gear-ish glyph: box with a roof
	icon_x = badge_x + 5.0
	icon_y = badge_y + badge_height / 2.0 + 0.25
	pss.geometry.stroke_rounded_box(page, LayoutBox(icon_x - 1.25, icon_y - 1.25, 2.5, 2.5), COLOR_WHITE, 0.0, 0.45)
	pss.geometry.draw_line(page, icon_x - 1.25, icon_y - 1.25, icon_x, icon_y - 2.1, COLOR_WHITE, 0.45)
	pss.geometry.draw_line(page, icon_x, icon_y - 2.1, icon_x + 1.25, icon_y - 1.25, COLOR_WHITE, 0.45)

	baseline = pss.geometry.baseline_for_center(badge_y + badge_height / 2.0, DEFAULT_FONT_BOLD, font_size)
	draw_text(page, badge_x + 8.2, baseline, text, DEFAULT_FONT_BOLD, font_size, COLOR_WHITE)
	return text


#============================================
def draw_image_card(page: PageBuilder, image: AssetImage | None, card: LayoutBox) -> None:
	"""
	Draw the hero image card with the product image contained inside.

	Args:
		page: Page to draw on.
		image: Product image or None for a placeholder.
		card: Card box.
	"""
	pss.geometry.draw_card_shell(page, card, COLOR_BORDER, 2.8, shadow=COLOR_SHADOW)
	inner = card.inset(2.0)
	if image is None:
		draw_image_placeholder(page, inner)
		return
	target = pss.geometry.contain_box(image.width, image.height, inner)
	pss.geometry.draw_image(page, image.reader, target)


#============================================
def draw_pill_row(page: PageBuilder, view: ProductView, x: float, y: float, right: float) -> tuple[float, bool]:
	"""
	Draw category, supply and rating pills left to right.

	Pills that would cross the right edge wrap onto a second row.

	Args:
		page: Page to draw on.
		view: Canonical product view.
		x: Left edge.
		y: Top of the row.
		right: Right edge of the column.

	Returns:
		Tuple of (bottom of the last pill row, stars drawn).
	"""
	cursor = x
	row_top = y
	row_height = PILL_CATEGORY.height
	for text, style in (
		(pss.records.to_upper_label(view.category), PILL_CATEGORY),
		(pss.records.hyphen_to_space(view.supply_model), PILL_SUPPLY),
	):
		if not text:
			continue
		budget = right - x - 2.0 * style.pad_x
		label = pss.geometry.fit_single_line(text, budget, DEFAULT_FONT_BOLD, style.font_size)
		width = pss.geometry.measure_text(label, DEFAULT_FONT_BOLD, style.font_size) + 2.0 * style.pad_x
		if cursor > x and cursor + width > right:
			cursor = x
			row_top += row_height + 2.0
		cursor += pss.geometry.draw_pill(page, cursor, row_top, label, style) + PILL_GAP

	stars_drawn = False
	if pss.stars.normalize_rating(view.rating) is not None:
		if cursor > x and cursor + RATING_PILL_WIDTH > right:
			cursor = x
			row_top += row_height + 2.0
		pill = LayoutBox(cursor, row_top, RATING_PILL_WIDTH, row_height)
		pss.geometry.fill_rounded_box(page, pill, COLOR_AMBER_BG, 3.6)
		stars_x = cursor + (RATING_PILL_WIDTH - pss.stars.stars_width(STAR_SIZE, STAR_GAP)) / 2.0
		stars_drawn = pss.stars.draw_stars(page, stars_x, row_top + row_height / 2.0 + 0.2, view.rating, STAR_SIZE, STAR_GAP)
	return (row_top + row_height, stars_drawn)


#============================================
def draw_title_block(page: PageBuilder, title: str, tagline: str, x: float, y: float, width: float) -> float:
	"""
	Draw the wrapped title and the tagline anchored beneath it.

	Args:
		page: Page to draw on.
		title: Title text.
		tagline: Tagline text.
		x: Left edge.
		y: Baseline of the first title line.
		width: Column width.

	Returns:
		Bottom Y of the block.
	"""
	title_size = 16.0
	title_lines = pss.geometry.wrap_lines(title, width, TITLE_MAX_LINES, DEFAULT_FONT_TITLE, title_size)
	last = draw_text(page, x, y, title_lines, DEFAULT_FONT_TITLE, title_size, COLOR_BLACK)
	bottom = last + 2.0
	if tagline and title_lines:
		tag_lines = pss.geometry.wrap_lines(tagline, width, TAGLINE_MAX_LINES, DEFAULT_FONT_REGULAR, 9.5)
		tag_last = draw_text(page, x, last + 9.5, tag_lines, DEFAULT_FONT_REGULAR, 9.5, COLOR_TEXT_MUTED)
		if tag_lines:
			bottom = tag_last + 1.5
	return bottom


#============================================
def draw_description(page: PageBuilder, text: str, y: float) -> float:
	"""
	Draw the short description paragraph.

	Args:
		page: Page to draw on.
		text: Paragraph text.
		y: Baseline of the first line.

	Returns:
		Number of lines drawn.
	"""
	width = page.page_width - PAGE_MARGIN * 2.0
	lines = pss.geometry.wrap_lines(text, width, DESCRIPTION_MAX_LINES, DEFAULT_FONT_REGULAR, 9.8)
	draw_text(page, PAGE_MARGIN, y, lines, DEFAULT_FONT_REGULAR, 9.8, COLOR_TEXT_BODY)
	return len(lines)


#============================================
def draw_table_cell(page: PageBuilder, x: float, y: float, width: float, label: str, value: str) -> None:
	"""
	Draw one label/value cell of the attribute table.

	The value is centred at 65% of the cell and ellipsized so it never
	runs into the label or the next cell.
	"""
	label_text = pss.records.to_upper_label(label)
	draw_text(page, x + 8.0, y + 7.6, label_text, DEFAULT_FONT_BOLD, TABLE_LABEL_SIZE, COLOR_LABEL)
	if not value:
		return
	label_right = 8.0 + measure_text(label_text, DEFAULT_FONT_BOLD, TABLE_LABEL_SIZE) + 3.0
	center = width * 0.65
	half = min(center - label_right, width - center - 3.0)
	if half <= 0.0:
		return
	fitted = pss.geometry.fit_single_line(value, half * 2.0, DEFAULT_FONT_REGULAR, TABLE_VALUE_SIZE)
	draw_text(page, x + center, y + 7.6, fitted, DEFAULT_FONT_REGULAR, TABLE_VALUE_SIZE, COLOR_TEXT, align="CENTER")


#============================================
def table_cells(view: ProductView) -> list[tuple[str, str]]:
	"""
	List the eight attribute cells, row by row, left then right.
	"""
	return [
		("Content", pss.records.join_values(view.content)),
		("Width", pss.records.width_text(view)),
		("Weight", pss.records.weight_text(view)),
		("Design", view.design),
		("Structure", view.structure),
		("Colors", pss.records.join_values(view.colors)),
		("Motif", view.motif),
		("Sales MOQ", pss.records.moq_text(view)),
	]


#============================================
def draw_spec_table(page: PageBuilder, view: ProductView, y: float, content_max_y: float) -> LayoutBox | None:
	"""
	Draw the 4x2 attribute table and the full-width finish row.

	Args:
		page: Page to draw on.
		view: Canonical product view.
		y: Top of the table.
		content_max_y: Lowest Y the table may reach.

	Returns:
		Table box, or None when it does not fit.
	"""
	table = LayoutBox(
		PAGE_MARGIN,
		y,
		page.page_width - PAGE_MARGIN * 2.0,
		TABLE_ROW_HEIGHT * 4.0 + TABLE_FINISH_HEIGHT,
	)
	if table.bottom > content_max_y:
		return None
	pss.geometry.draw_card_shell(page, table, COLOR_BORDER, 2.8, fill=COLOR_PANEL, shadow=COLOR_SHADOW)

	cell_width = table.width / 2.0
	grid_bottom = table.y + TABLE_ROW_HEIGHT * 4.0
	pss.geometry.draw_line(page, table.x + cell_width, table.y, table.x + cell_width, grid_bottom, COLOR_BORDER, 0.25)
	for row in range(1, 5):
		row_y = table.y + TABLE_ROW_HEIGHT * row
		pss.geometry.draw_line(page, table.x, row_y, table.right, row_y, COLOR_BORDER, 0.25)

	for index, (label, value) in enumerate(table_cells(view)):
		row = index // 2
		col = index % 2
		draw_table_cell(
			page,
			table.x + col * cell_width,
			table.y + row * TABLE_ROW_HEIGHT,
			cell_width,
			label,
			value,
		)

	draw_text(page, table.x + 8.0, grid_bottom + 8.0, "FINISH", DEFAULT_FONT_BOLD, TABLE_LABEL_SIZE, COLOR_LABEL)
	finish = pss.records.join_finish(view.finish)
	if finish:
		value_width = table.width - FINISH_LABEL_WIDTH
		lines = pss.geometry.wrap_lines(finish, value_width - 10.0, 2, DEFAULT_FONT_REGULAR, 8.8)
		draw_text(page, table.x + FINISH_LABEL_WIDTH + 6.0, grid_bottom + 8.0, lines, DEFAULT_FONT_REGULAR, 8.8, COLOR_TEXT, leading=3.8)
	return table


#============================================
def draw_qr_card(page: PageBuilder, qr: AssetImage, table_bottom: float, content_max_y: float) -> LayoutBox | None:
	"""
	Draw the QR card at the right edge below the table.

	Args:
		page: Page to draw on.
		qr: QR image.
		table_bottom: Bottom of the previous block.
		content_max_y: Lowest Y the card may reach.

	Returns:
		Card box, or None when there is no room.
	"""
	card_x = page.page_width - PAGE_MARGIN - QR_CARD_WIDTH
	card_y = min(table_bottom + 9.0, content_max_y - QR_CARD_HEIGHT)
	if card_y < table_bottom + 2.0:
		return None
	card = LayoutBox(card_x, card_y, QR_CARD_WIDTH, QR_CARD_HEIGHT)
	pss.geometry.draw_card_shell(page, card, COLOR_BORDER, 2.8, shadow=COLOR_SHADOW, shadow_offset=0.8)
	image_box = LayoutBox(card_x + (QR_CARD_WIDTH - QR_IMAGE_SIZE) / 2.0, card_y + 6.0, QR_IMAGE_SIZE, QR_IMAGE_SIZE)
	pss.geometry.draw_image(page, qr.reader, pss.geometry.contain_box(qr.width, qr.height, image_box))
	draw_text(
		page,
		card_x + QR_CARD_WIDTH / 2.0,
		image_box.bottom + 7.2,
		"Scan for details",
		DEFAULT_FONT_BOLD,
		8.6,
		COLOR_TEXT_FOOTER,
		align="CENTER",
	)
	return card


#============================================
def draw_uses_section(
	page: PageBuilder,
	heading: str,
	items: tuple[str, ...],
	y: float,
	width: float,
	item_limit_y: float,
) -> float:
	"""
	Draw a heading and its bullets while they stay above a limit.

	Args:
		page: Page to draw on.
		heading: Section heading.
		items: Bullet texts.
		y: Heading baseline.
		width: Text column width.
		item_limit_y: Bullets start only above this Y.

	Returns:
		Baseline Y for whatever comes next.
	"""
	draw_text(page, PAGE_MARGIN, y, heading, DEFAULT_FONT_BOLD, 12.0, COLOR_BLACK)
	cursor = y + 6.0
	leading = line_height(9.0)
	for item in items:
		if cursor >= item_limit_y:
			break
		lines = pss.geometry.wrap_lines(f"• {item}", width - 4.0, 2, DEFAULT_FONT_REGULAR, 9.0)
		room = int((item_limit_y - cursor) // leading) + 1
		lines = lines[:max(1, room)]
		last = draw_text(page, PAGE_MARGIN + 4.0, cursor, lines, DEFAULT_FONT_REGULAR, 9.0, COLOR_TEXT_BODY, leading=leading)
		cursor = last + USES_ITEM_STEP
	return cursor


#============================================
def draw_suggested_uses(page: PageBuilder, y: float, content_max_y: float, qr_box: LayoutBox | None) -> list[str]:
	"""
	Draw the apparel and home & accessories lists if space remains.

	Args:
		page: Page to draw on.
		y: Baseline of the first heading.
		content_max_y: Lowest Y body content may use.
		qr_box: QR card box, to keep text clear of it.

	Returns:
		Names of the sections drawn.
	"""
	drawn: list[str] = []
	if y >= content_max_y - USES_SECTION_MIN_SPACE:
		return drawn
	width = page.page_width - PAGE_MARGIN * 2.0
	if qr_box is not None:
		width = qr_box.x - 4.0 - PAGE_MARGIN
	cursor = draw_uses_section(page, "Apparel :", APPAREL_USES, y, width, content_max_y - 35.0)
	drawn.append("apparel")
	if cursor - USES_ITEM_STEP + 4.0 >= content_max_y - 25.0:
		return drawn
	heading_y = cursor - USES_ITEM_STEP + 9.0
	draw_uses_section(page, "Home & Accessories :", HOME_USES, heading_y, width, content_max_y - 5.0)
	drawn.append("home")
	return drawn


#============================================
def compose_title_page(
	page: PageBuilder,
	view: ProductView,
	chrome: SheetChrome,
	hero_image: AssetImage | None,
	qr_image: AssetImage | None,
	sibling_count: int,
) -> TitlePageReport:
	"""
	Compose the title page of the specification sheet.

	Args:
		page: Fresh page to draw on.
		view: Canonical product view.
		chrome: Company record and logo for header and footer.
		hero_image: Product image or None.
		qr_image: QR image or None.
		sibling_count: Number of collection siblings.

	Returns:
		TitlePageReport describing which optional blocks were drawn.
	"""
	report = TitlePageReport()
	report.header_bottom, report.content_max_y = draw_page_chrome(page, chrome)
	hero_top = report.header_bottom + 2.2

	draw_product_code(page, view.code, PAGE_MARGIN + 2.5, hero_top)

	card = LayoutBox(PAGE_MARGIN, hero_top + 10.0, HERO_IMAGE_SIZE, HERO_IMAGE_SIZE)
	draw_image_card(page, hero_image, card)
	report.badge_text = draw_options_badge(page, card, sibling_count)

	right_x = card.right + 12.0
	right_edge = page.page_width - PAGE_MARGIN
	pills_bottom, report.stars_drawn = draw_pill_row(page, view, right_x, card.y, right_edge)

	title = pss.resolver.display_title(view)
	tagline = pss.resolver.display_tagline(view)
	title_bottom = draw_title_block(page, title, tagline, right_x, pills_bottom + 9.3, right_edge - right_x)

	paragraph_y = max(card.bottom, title_bottom) + 10.0
	description = view.short_description or tagline
	description_lines = draw_description(page, description, paragraph_y)
	table_y = paragraph_y + (10.0 if description_lines else 0.0)

	report.table_box = draw_spec_table(page, view, table_y, report.content_max_y)
	if report.table_box is None:
		report.bottom = paragraph_y
		return report
	table_bottom = report.table_box.bottom
	report.bottom = table_bottom

	if qr_image is not None:
		report.qr_box = draw_qr_card(page, qr_image, table_bottom, report.content_max_y)
		if report.qr_box is not None:
			report.bottom = max(report.bottom, report.qr_box.bottom)

	report.uses_sections = draw_suggested_uses(page, table_bottom + 8.0, report.content_max_y, report.qr_box)
	return report
