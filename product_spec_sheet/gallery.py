"""
Collection gallery pages: sibling products as a card grid.
"""

# Standard Library
import dataclasses
import math

# local repo modules
import product_spec_sheet as pss
import product_spec_sheet.compose
import product_spec_sheet.config
import product_spec_sheet.geometry
import product_spec_sheet.records
import product_spec_sheet.resolver


PageBuilder = pss.geometry.PageBuilder
LayoutBox = pss.geometry.LayoutBox
ProductView = pss.records.ProductView
CollectionItem = pss.resolver.CollectionItem
SheetChrome = pss.compose.SheetChrome

draw_text = pss.geometry.draw_text

PAGE_MARGIN = pss.config.PAGE_MARGIN
GRID_COLUMNS = pss.config.GRID_COLUMNS
GRID_GAP_X = pss.config.GRID_GAP_X
GRID_GAP_Y = pss.config.GRID_GAP_Y
GRID_TOP = pss.config.GRID_TOP
GRID_MIN_CARD_HEIGHT = pss.config.GRID_MIN_CARD_HEIGHT
CARD_ROW_HEIGHT = pss.config.CARD_ROW_HEIGHT
CARD_MIN_ROW_HEIGHT = pss.config.CARD_MIN_ROW_HEIGHT
CARD_MIN_TABLE_HEIGHT = pss.config.CARD_MIN_TABLE_HEIGHT
DEFAULT_FONT_BOLD = pss.config.DEFAULT_FONT_BOLD
PILL_CODE = pss.config.PILL_CODE
COLOR_BORDER = pss.config.COLOR_BORDER
COLOR_PANEL = pss.config.COLOR_PANEL
COLOR_SHADOW = pss.config.COLOR_SHADOW
COLOR_LABEL = pss.config.COLOR_LABEL
COLOR_TEXT = pss.config.COLOR_TEXT

CARD_RADIUS = 7.0
CARD_PAD = 7.0
IMAGE_BOX_MIN_HEIGHT = 38.0
IMAGE_BOX_SHARE = 0.40
IMAGE_INSET = 3.0
MINI_CELL_PAD = 4.0
MINI_VALUE_LEADING = 4.2


@dataclasses.dataclass(frozen=True)
class GridLayout:
	columns: int
	rows: int
	left: float
	top: float
	card_width: float
	card_height: float
	gap_x: float = GRID_GAP_X
	gap_y: float = GRID_GAP_Y

	@property
	def capacity(self) -> int:
		return self.columns * self.rows

	def card_box(self, index: int) -> LayoutBox:
		"""
		Box of the card at a slot index, filled row-major.
		"""
		row = index // self.columns
		col = index % self.columns
		return LayoutBox(
			self.left + col * (self.card_width + self.gap_x),
			self.top + row * (self.card_height + self.gap_y),
			self.card_width,
			self.card_height,
		)


#============================================
def compute_grid_layout(
	page_width: float = pss.config.PAGE_WIDTH,
	page_height: float = pss.config.PAGE_HEIGHT,
	rows: int | None = None,
) -> GridLayout:
	"""
	Compute the card grid for a gallery page.

	When rows is not given it is the largest count whose cards still meet
	the minimum card height between the header rule and the footer.

	Args:
		page_width: Page width in millimetres.
		page_height: Page height in millimetres.
		rows: Fixed row count, or None to derive it.

	Returns:
		GridLayout.

	Raises:
		ValueError: When the rows cannot meet the minimum card height.
	"""
	available = pss.config.content_max_y(page_height) - GRID_TOP
	if rows is None:
		rows = max(1, int((available + GRID_GAP_Y) // (GRID_MIN_CARD_HEIGHT + GRID_GAP_Y)))
	if rows < 1:
		raise ValueError(f"grid needs at least one row, got {rows}")
	needed = rows * GRID_MIN_CARD_HEIGHT + (rows - 1) * GRID_GAP_Y
	if needed > available:
		raise ValueError(
			f"{rows} rows need {needed:.1f} mm but only {available:.1f} mm fit above the footer"
		)
	card_height = (available - GRID_GAP_Y * (rows - 1)) / rows
	card_width = (page_width - PAGE_MARGIN * 2.0 - GRID_GAP_X * (GRID_COLUMNS - 1)) / GRID_COLUMNS
	return GridLayout(
		columns=GRID_COLUMNS,
		rows=rows,
		left=PAGE_MARGIN,
		top=GRID_TOP,
		card_width=card_width,
		card_height=card_height,
	)


#============================================
def paginate(items: list, capacity: int) -> list[list]:
	"""
	Split items into page-sized chunks in order.

	Args:
		items: Items to place.
		capacity: Cards per page.

	Returns:
		ceil(len(items) / capacity) chunks.
	"""
	if capacity < 1:
		raise ValueError(f"page capacity must be at least 1, got {capacity}")
	page_count = math.ceil(len(items) / capacity)
	return [list(items[index * capacity:(index + 1) * capacity]) for index in range(page_count)]


#============================================
def card_row_heights(
	height: float,
	base: float = CARD_ROW_HEIGHT,
	minimum: float = CARD_MIN_ROW_HEIGHT,
) -> list[float]:
	"""
	Split a card table height into four rows.

	Three rows get the base height and the last takes the rest; when the
	rest would be under the minimum all four rows are equal.

	Args:
		height: Table height in millimetres.
		base: Preferred row height.
		minimum: Smallest acceptable last row.

	Returns:
		Four heights summing to height.
	"""
	last = height - base * 3.0
	if last < minimum:
		each = height / 4.0
		return [each, each, each, each]
	return [base, base, base, last]


#============================================
def draw_mini_cell(page: PageBuilder, box: LayoutBox, label: str, value: str) -> None:
	draw_text(
		page,
		box.x + MINI_CELL_PAD,
		box.y + 5.2,
		pss.records.to_upper_label(label),
		DEFAULT_FONT_BOLD,
		7.0,
		COLOR_LABEL,
	)
	if not value:
		return
	value_top = box.y + 9.8
	value_bottom = box.bottom - 2.8
	max_width = box.width - MINI_CELL_PAD * 2.0
	max_lines = max(1, int((value_bottom - value_top) // MINI_VALUE_LEADING))
	if max_lines <= 1:
		lines = [pss.geometry.fit_single_line(value, max_width, DEFAULT_FONT_BOLD, 9.1)]
	else:
		lines = pss.geometry.wrap_lines(value, max_width, max_lines, DEFAULT_FONT_BOLD, 9.1)
	draw_text(page, box.x + MINI_CELL_PAD, value_top, lines, DEFAULT_FONT_BOLD, 9.1, COLOR_TEXT, leading=MINI_VALUE_LEADING)


#============================================
def card_cells(view: ProductView) -> list[tuple[str, str]]:
	return [
		("Category", view.category),
		("Width", pss.records.width_text(view)),
		("Design", view.design),
		("Weight", pss.records.weight_text(view)),
		("Structure", view.structure),
		("Colors", pss.records.join_values(view.colors)),
		("Content", pss.records.join_values(view.content)),
		("Motif", view.motif),
	]


#============================================
def draw_card_specs_table(page: PageBuilder, view: ProductView, box: LayoutBox) -> None:
	"""
	Draw the 4x2 mini table of a gallery card.

	Args:
		page: Page to draw on.
		view: Sibling product view.
		box: Table box.
	"""
	pss.geometry.fill_rounded_box(page, box, COLOR_PANEL, 4.5)
	pss.geometry.stroke_rounded_box(page, box, COLOR_BORDER, 4.5, 0.25)
	col_width = box.width / 2.0
	heights = card_row_heights(box.height)
	pss.geometry.draw_line(page, box.x + col_width, box.y, box.x + col_width, box.bottom, COLOR_BORDER, 0.22)
	row_tops = [box.y]
	for row_height in heights[:-1]:
		row_tops.append(row_tops[-1] + row_height)
	for row_top in row_tops[1:]:
		pss.geometry.draw_line(page, box.x, row_top, box.right, row_top, COLOR_BORDER, 0.22)

	for index, (label, value) in enumerate(card_cells(view)):
		row = index // 2
		col = index % 2
		cell = LayoutBox(box.x + col * col_width, row_tops[row], col_width, heights[row])
		draw_mini_cell(page, cell, label, value)


#============================================
def draw_card(page: PageBuilder, item: CollectionItem, box: LayoutBox) -> bool:
	"""
	Draw one sibling product card.

	Args:
		page: Page to draw on.
		item: Sibling view and its card image.
		box: Card box.

	Returns:
		True when the specs table was drawn.
	"""
	pss.geometry.draw_card_shell(page, box, COLOR_BORDER, CARD_RADIUS, shadow=COLOR_SHADOW)

	image_box = LayoutBox(
		box.x + CARD_PAD,
		box.y + CARD_PAD,
		box.width - CARD_PAD * 2.0,
		max(IMAGE_BOX_MIN_HEIGHT, box.height * IMAGE_BOX_SHARE),
	)
	pss.geometry.fill_rounded_box(page, image_box, COLOR_PANEL, 6.0)
	pss.geometry.stroke_rounded_box(page, image_box, COLOR_BORDER, 6.0, 0.25)
	if item.image is None:
		pss.compose.draw_image_placeholder(page, image_box)
	else:
		target = pss.geometry.contain_box(item.image.width, item.image.height, image_box.inset(IMAGE_INSET))
		pss.geometry.draw_image(page, item.image.reader, target)

	if item.view.code:
		budget = image_box.width - 12.0 - PILL_CODE.pad_x * 2.0
		code = pss.geometry.fit_single_line(item.view.code, budget, DEFAULT_FONT_BOLD, PILL_CODE.font_size)
		pss.geometry.draw_pill(page, image_box.x + 6.0, image_box.y + 6.0, code, PILL_CODE)

	table_top = image_box.bottom + 8.0
	table = LayoutBox(box.x + CARD_PAD, table_top, box.width - CARD_PAD * 2.0, box.bottom - CARD_PAD - table_top)
	if table.height <= CARD_MIN_TABLE_HEIGHT:
		return False
	draw_card_specs_table(page, item.view, table)
	return True


#============================================
def draw_gallery_page(
	page: PageBuilder,
	items: list[CollectionItem],
	layout: GridLayout,
	chrome: SheetChrome,
) -> int:
	"""
	Draw one gallery page: header, cards in row-major order, footer.

	Args:
		page: Fresh page to draw on.
		items: At most layout.capacity siblings.
		layout: Card grid.
		chrome: Company record and logo.

	Returns:
		Number of cards drawn.
	"""
	if len(items) > layout.capacity:
		raise ValueError(f"{len(items)} cards do not fit a page of {layout.capacity}")
	pss.compose.draw_page_chrome(page, chrome)
	for index, item in enumerate(items):
		draw_card(page, item, layout.card_box(index))
	return len(items)
