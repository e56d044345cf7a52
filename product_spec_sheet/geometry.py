"""
Geometry primitives: boxes, pills, text fitting and image fitting.

All layout math is done in millimetres with the origin at the top-left
corner of the page and Y growing downward. PageBuilder converts to the
bottom-up point space of reportlab at the moment of drawing.
"""

# Standard Library
import dataclasses
import io

# PIP3 modules
import reportlab.lib.units
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfgen.canvas

# local repo modules
import product_spec_sheet as pss
import product_spec_sheet.config


PAGE_WIDTH = pss.config.PAGE_WIDTH
PAGE_HEIGHT = pss.config.PAGE_HEIGHT
DEFAULT_FONT_REGULAR = pss.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = pss.config.DEFAULT_FONT_BOLD
ELLIPSIS = pss.config.ELLIPSIS
LINE_HEIGHT_FACTOR = pss.config.LINE_HEIGHT_FACTOR
COLOR_WHITE = pss.config.COLOR_WHITE
PillStyle = pss.config.PillStyle

MM = reportlab.lib.units.mm


@dataclasses.dataclass(frozen=True)
class LayoutBox:
	x: float
	y: float
	width: float
	height: float

	@property
	def right(self) -> float:
		return self.x + self.width

	@property
	def bottom(self) -> float:
		return self.y + self.height

	def inset(self, amount: float) -> "LayoutBox":
		return LayoutBox(
			self.x + amount,
			self.y + amount,
			max(0.0, self.width - 2.0 * amount),
			max(0.0, self.height - 2.0 * amount),
		)

	def offset(self, dx: float, dy: float) -> "LayoutBox":
		return LayoutBox(self.x + dx, self.y + dy, self.width, self.height)


@dataclasses.dataclass(frozen=True)
class ContainFit:
	width: float
	height: float
	dx: float
	dy: float


class PageBuilder:
	"""
	Drawing handle for a single page.

	Each page owns its own canvas and in-memory buffer. Once sealed the
	page is a finished one-page PDF and accepts no further drawing.
	"""

	def __init__(self, page_width: float = PAGE_WIDTH, page_height: float = PAGE_HEIGHT) -> None:
		self.page_width = page_width
		self.page_height = page_height
		self.buffer = io.BytesIO()
		self.pdf = reportlab.pdfgen.canvas.Canvas(
			self.buffer,
			pagesize=(page_width * MM, page_height * MM),
		)
		self.sealed = False
		fill_rounded_box(self, LayoutBox(0.0, 0.0, page_width, page_height), COLOR_WHITE)

	def px(self, x: float) -> float:
		return x * MM

	def py(self, y: float) -> float:
		return (self.page_height - y) * MM

	def seal(self) -> bytes:
		"""
		Finish the page.

		Returns:
			PDF bytes holding exactly this page.
		"""
		if self.sealed:
			raise RuntimeError("page already sealed")
		self.pdf.showPage()
		self.pdf.save()
		self.sealed = True
		return self.buffer.getvalue()


#============================================
def parse_hex_color(value: str) -> tuple[float, float, float]:
	"""
	Parse a hex color string into RGB floats.

	Args:
		value: Color string like "#AABBCC".

	Returns:
		Tuple of (r, g, b) in 0.0-1.0 range.
	"""
	if not value or not value.startswith("#") or len(value) != 7:
		return (0.0, 0.0, 0.0)
	red = int(value[1:3], 16) / 255.0
	green = int(value[3:5], 16) / 255.0
	blue = int(value[5:7], 16) / 255.0
	return (red, green, blue)


#============================================
def set_fill(page: PageBuilder, color: str) -> None:
	red, green, blue = parse_hex_color(color)
	page.pdf.setFillColorRGB(red, green, blue)


#============================================
def set_stroke(page: PageBuilder, color: str, line_width: float) -> None:
	red, green, blue = parse_hex_color(color)
	page.pdf.setStrokeColorRGB(red, green, blue)
	page.pdf.setLineWidth(line_width * MM)


#============================================
def measure_text(text: str, font_name: str, font_size: float) -> float:
	"""
	Measure a string.

	Args:
		text: Text to measure.
		font_name: ReportLab font name.
		font_size: Font size in points.

	Returns:
		Width in millimetres.
	"""
	if not text:
		return 0.0
	return reportlab.pdfbase.pdfmetrics.stringWidth(text, font_name, font_size) / MM


#============================================
def line_height(font_size: float) -> float:
	"""
	Line advance in millimetres for a font size in points.
	"""
	return font_size * LINE_HEIGHT_FACTOR / MM


#============================================
def baseline_for_center(center_y: float, font_name: str, font_size: float) -> float:
	"""
	Compute the baseline that vertically centres a line of text.

	Args:
		center_y: Target centre Y in millimetres.
		font_name: ReportLab font name.
		font_size: Font size in points.

	Returns:
		Baseline Y in millimetres.
	"""
	ascent = reportlab.pdfbase.pdfmetrics.getAscent(font_name) * font_size / 1000.0
	descent = reportlab.pdfbase.pdfmetrics.getDescent(font_name) * font_size / 1000.0
	return center_y + (ascent + descent) / 2.0 / MM


#============================================
def fill_rounded_box(page: PageBuilder, box: LayoutBox, color: str, radius: float = 0.0) -> None:
	"""
	Fill a box, optionally with rounded corners.

	Args:
		page: Page to draw on.
		box: Box in millimetres.
		color: Fill color.
		radius: Corner radius; 0 draws a plain rectangle.
	"""
	set_fill(page, color)
	x = page.px(box.x)
	y = page.py(box.bottom)
	if radius > 0.0:
		page.pdf.roundRect(x, y, box.width * MM, box.height * MM, radius * MM, stroke=0, fill=1)
		return
	page.pdf.rect(x, y, box.width * MM, box.height * MM, stroke=0, fill=1)


#============================================
def stroke_rounded_box(
	page: PageBuilder,
	box: LayoutBox,
	color: str,
	radius: float = 0.0,
	line_width: float = 0.2,
) -> None:
	"""
	Outline a box, optionally with rounded corners.

	Args:
		page: Page to draw on.
		box: Box in millimetres.
		color: Stroke color.
		radius: Corner radius; 0 draws a plain rectangle.
		line_width: Line width in millimetres.
	"""
	set_stroke(page, color, line_width)
	x = page.px(box.x)
	y = page.py(box.bottom)
	if radius > 0.0:
		page.pdf.roundRect(x, y, box.width * MM, box.height * MM, radius * MM, stroke=1, fill=0)
		return
	page.pdf.rect(x, y, box.width * MM, box.height * MM, stroke=1, fill=0)


#============================================
def draw_card_shell(
	page: PageBuilder,
	box: LayoutBox,
	border: str,
	radius: float,
	fill: str = COLOR_WHITE,
	shadow: str | None = None,
	shadow_offset: float = 1.0,
) -> None:
	"""
	Draw a card: optional offset shadow, filled body and thin outline.
	"""
	if shadow is not None:
		fill_rounded_box(page, box.offset(shadow_offset, shadow_offset), shadow, radius)
	fill_rounded_box(page, box, fill, radius)
	stroke_rounded_box(page, box, border, radius, 0.25)


#============================================
def draw_line(
	page: PageBuilder,
	x1: float,
	y1: float,
	x2: float,
	y2: float,
	color: str,
	line_width: float = 0.2,
) -> None:
	set_stroke(page, color, line_width)
	page.pdf.line(page.px(x1), page.py(y1), page.px(x2), page.py(y2))


#============================================
def draw_circle(page: PageBuilder, cx: float, cy: float, radius: float, color: str) -> None:
	set_fill(page, color)
	page.pdf.circle(page.px(cx), page.py(cy), radius * MM, stroke=0, fill=1)


#============================================
def build_polygon_path(page: PageBuilder, points: list[tuple[float, float]]):
	"""
	Build a closed reportlab path from millimetre points.

	Args:
		page: Page the path belongs to.
		points: Polygon vertices.

	Returns:
		ReportLab PDFPathObject.
	"""
	path = page.pdf.beginPath()
	first_x, first_y = points[0]
	path.moveTo(page.px(first_x), page.py(first_y))
	for point_x, point_y in points[1:]:
		path.lineTo(page.px(point_x), page.py(point_y))
	path.close()
	return path


#============================================
def fill_polygon(page: PageBuilder, points: list[tuple[float, float]], color: str) -> None:
	set_fill(page, color)
	path = build_polygon_path(page, points)
	page.pdf.drawPath(path, stroke=0, fill=1)


#============================================
def draw_text(
	page: PageBuilder,
	x: float,
	y: float,
	text: str | list[str],
	font_name: str,
	font_size: float,
	color: str,
	align: str = "LEFT",
	leading: float | None = None,
) -> float:
	"""
	Draw one or more lines of text from a baseline position.

	Args:
		page: Page to draw on.
		x: Anchor X in millimetres.
		y: Baseline Y of the first line in millimetres.
		text: A string or a list of lines.
		font_name: ReportLab font name.
		font_size: Font size in points.
		color: Text color.
		align: LEFT, CENTER or RIGHT.
		leading: Line advance in millimetres; defaults from the font size.

	Returns:
		Baseline Y of the last drawn line, or y when nothing was drawn.
	"""
	lines = [text] if isinstance(text, str) else list(text)
	lines = [line for line in lines if line]
	if not lines:
		return y
	if leading is None:
		leading = line_height(font_size)
	page.pdf.setFont(font_name, font_size)
	set_fill(page, color)
	normalized = align.strip().upper()
	baseline = y
	for index, line in enumerate(lines):
		baseline = y + index * leading
		if normalized == "CENTER":
			page.pdf.drawCentredString(page.px(x), page.py(baseline), line)
		elif normalized == "RIGHT":
			page.pdf.drawRightString(page.px(x), page.py(baseline), line)
		else:
			page.pdf.drawString(page.px(x), page.py(baseline), line)
	return baseline


#============================================
def draw_image(page: PageBuilder, reader, box: LayoutBox) -> None:
	"""
	Draw an image reader stretched to a box.

	Callers compute the box with fit_contain so no distortion occurs.
	"""
	page.pdf.drawImage(
		reader,
		page.px(box.x),
		page.py(box.bottom),
		width=box.width * MM,
		height=box.height * MM,
		mask="auto",
		preserveAspectRatio=False,
	)


#============================================
def draw_pill(page: PageBuilder, x: float, y: float, text: str, style: PillStyle) -> float:
	"""
	Draw a rounded badge sized to its text.

	Args:
		page: Page to draw on.
		x: Left edge in millimetres.
		y: Top edge in millimetres.
		text: Badge label.
		style: Pill style.

	Returns:
		Drawn width in millimetres; 0 when text is empty.
	"""
	label = (text or "").strip()
	if not label:
		return 0.0
	font_name = DEFAULT_FONT_BOLD if style.bold else DEFAULT_FONT_REGULAR
	width = measure_text(label, font_name, style.font_size) + style.pad_x * 2.0
	fill_rounded_box(page, LayoutBox(x, y, width, style.height), style.background, style.radius)
	baseline = baseline_for_center(y + style.height / 2.0, font_name, style.font_size)
	draw_text(page, x + style.pad_x, baseline, label, font_name, style.font_size, style.foreground)
	return width


#============================================
def fit_single_line(text: str, max_width: float, font_name: str, font_size: float) -> str:
	"""
	Fit text on one line, ellipsizing when it is too wide.

	Args:
		text: Source text.
		max_width: Width budget in millimetres.
		font_name: ReportLab font name.
		font_size: Font size in points.

	Returns:
		The text unchanged when it fits, a prefix plus ellipsis otherwise,
		or an empty string when not even the ellipsis fits.
	"""
	source = (text or "").strip()
	if not source:
		return ""
	if measure_text(source, font_name, font_size) <= max_width:
		return source
	ellipsis_width = measure_text(ELLIPSIS, font_name, font_size)
	if ellipsis_width > max_width:
		return ""
	low = 0
	high = len(source)
	best = ""
	while low <= high:
		middle = (low + high) // 2
		prefix = source[:middle].rstrip()
		if measure_text(prefix, font_name, font_size) + ellipsis_width <= max_width:
			best = prefix
			low = middle + 1
		else:
			high = middle - 1
	return best + ELLIPSIS


#============================================
def split_long_word(word: str, max_width: float, font_name: str, font_size: float) -> list[str]:
	"""
	Break a word wider than the budget into character chunks.
	"""
	chunks: list[str] = []
	remaining = word
	while remaining and measure_text(remaining, font_name, font_size) > max_width:
		cut = 1
		while cut < len(remaining) and measure_text(remaining[:cut + 1], font_name, font_size) <= max_width:
			cut += 1
		chunks.append(remaining[:cut])
		remaining = remaining[cut:]
	if remaining:
		chunks.append(remaining)
	return chunks


#============================================
def wrap_lines(
	text: str,
	max_width: float,
	max_lines: int,
	font_name: str,
	font_size: float,
) -> list[str]:
	"""
	Greedy word wrap bounded by a line count.

	Lines past max_lines are dropped without an ellipsis.

	Args:
		text: Source text.
		max_width: Width budget in millimetres.
		max_lines: Maximum number of lines.
		font_name: ReportLab font name.
		font_size: Font size in points.

	Returns:
		List of lines.
	"""
	if max_lines <= 0:
		return []
	lines: list[str] = []
	current = ""
	for word in (text or "").split():
		candidate = f"{current} {word}" if current else word
		if measure_text(candidate, font_name, font_size) <= max_width:
			current = candidate
			continue
		if current:
			lines.append(current)
		chunks = split_long_word(word, max_width, font_name, font_size)
		lines.extend(chunks[:-1])
		current = chunks[-1]
		if len(lines) >= max_lines:
			return lines[:max_lines]
	if current:
		lines.append(current)
	return lines[:max_lines]


#============================================
def fit_contain(
	src_width: float | None,
	src_height: float | None,
	box_width: float,
	box_height: float,
) -> ContainFit:
	"""
	Scale a source into a box preserving aspect ratio, centred.

	Args:
		src_width: Source width; zero or None when unknown.
		src_height: Source height; zero or None when unknown.
		box_width: Box width.
		box_height: Box height.

	Returns:
		ContainFit with draw size and centring offsets.
	"""
	if not src_width or not src_height or src_width <= 0 or src_height <= 0:
		return ContainFit(box_width, box_height, 0.0, 0.0)
	scale = min(box_width / src_width, box_height / src_height)
	width = min(box_width, src_width * scale)
	height = min(box_height, src_height * scale)
	return ContainFit(width, height, (box_width - width) / 2.0, (box_height - height) / 2.0)


#============================================
def contain_box(src_width: float | None, src_height: float | None, box: LayoutBox) -> LayoutBox:
	fit = fit_contain(src_width, src_height, box.width, box.height)
	return LayoutBox(box.x + fit.dx, box.y + fit.dy, fit.width, fit.height)
