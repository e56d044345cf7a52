"""
Star rating rendering with fractional fills.
"""

# Standard Library
import math

# local repo modules
import product_spec_sheet as pss
import product_spec_sheet.config
import product_spec_sheet.geometry
import product_spec_sheet.records


PageBuilder = pss.geometry.PageBuilder
LayoutBox = pss.geometry.LayoutBox

STAR_COUNT = pss.config.STAR_COUNT
STAR_INNER_RATIO = pss.config.STAR_INNER_RATIO
STAR_SIZE = pss.config.STAR_SIZE
STAR_GAP = pss.config.STAR_GAP
COLOR_STAR_FILLED = pss.config.COLOR_STAR_FILLED
COLOR_STAR_EMPTY = pss.config.COLOR_STAR_EMPTY


#============================================
def normalize_rating(value: object) -> float | None:
	"""
	Normalize a rating of unknown scale to the 0-5 range.

	Values up to 5 are already five-point, up to 10 are ten-point, up to
	100 are percentages; anything larger clamps to 5.

	Args:
		value: Raw rating value.

	Returns:
		Rating in 0-5, or None when the value is not numeric.
	"""
	number = pss.records.to_number(value)
	if number is None:
		return None
	if number <= 5.0:
		return max(0.0, min(5.0, number))
	if number <= 10.0:
		return max(0.0, min(5.0, number / 2.0))
	if number <= 100.0:
		return max(0.0, min(5.0, number * 5.0 / 100.0))
	return 5.0


#============================================
def star_fill_fractions(rating: float) -> list[float]:
	"""
	Compute the filled fraction of each star.

	Args:
		rating: Normalized rating.

	Returns:
		One fraction in 0-1 per star, left to right.
	"""
	fractions: list[float] = []
	for index in range(1, STAR_COUNT + 1):
		if rating >= index:
			fractions.append(1.0)
		elif rating > index - 1:
			fractions.append(rating - (index - 1))
		else:
			fractions.append(0.0)
	return fractions


#============================================
def build_star_points(
	center_x: float,
	center_y: float,
	diameter: float,
) -> tuple[list[tuple[float, float]], float]:
	"""
	Build a five-pointed star polygon with one point facing up.

	Args:
		center_x: Centre X in millimetres.
		center_y: Centre Y in millimetres (Y grows downward).
		diameter: Outer diameter in millimetres.

	Returns:
		Tuple of (ten alternating outer/inner vertices, outer radius).
	"""
	outer = diameter / 2.0
	inner = outer * STAR_INNER_RATIO
	points: list[tuple[float, float]] = []
	for index in range(5):
		outer_angle = math.pi / 2.0 + index * 2.0 * math.pi / 5.0
		points.append((
			center_x + outer * math.cos(outer_angle),
			center_y - outer * math.sin(outer_angle),
		))
		inner_angle = outer_angle + math.pi / 5.0
		points.append((
			center_x + inner * math.cos(inner_angle),
			center_y - inner * math.sin(inner_angle),
		))
	return (points, outer)


#============================================
def draw_star(
	page: PageBuilder,
	center_x: float,
	center_y: float,
	diameter: float,
	fraction: float,
	filled_color: str = COLOR_STAR_FILLED,
	empty_color: str = COLOR_STAR_EMPTY,
) -> None:
	"""
	Draw one star filled left to right by a fraction, without outline.

	Args:
		page: Page to draw on.
		center_x: Centre X in millimetres.
		center_y: Centre Y in millimetres.
		diameter: Outer diameter in millimetres.
		fraction: Filled share in 0-1.
		filled_color: Color of the filled part.
		empty_color: Color of the unfilled part.
	"""
	points, outer = build_star_points(center_x, center_y, diameter)
	fill = max(0.0, min(1.0, fraction))
	pss.geometry.fill_polygon(page, points, empty_color)
	if fill <= 0.0:
		return
	if fill >= 1.0:
		pss.geometry.fill_polygon(page, points, filled_color)
		return
	page.pdf.saveState()
	path = pss.geometry.build_polygon_path(page, points)
	page.pdf.clipPath(path, stroke=0, fill=0)
	band = LayoutBox(center_x - outer, center_y - outer, outer * 2.0 * fill, outer * 2.0)
	pss.geometry.fill_rounded_box(page, band, filled_color)
	page.pdf.restoreState()


#============================================
def stars_width(size: float = STAR_SIZE, gap: float = STAR_GAP) -> float:
	return STAR_COUNT * size + (STAR_COUNT - 1) * gap


#============================================
def draw_stars(
	page: PageBuilder,
	x: float,
	center_y: float,
	rating_value: object,
	size: float = STAR_SIZE,
	gap: float = STAR_GAP,
) -> bool:
	"""
	Draw a row of five stars for a rating.

	Args:
		page: Page to draw on.
		x: Left edge of the first star in millimetres.
		center_y: Vertical centre of the row in millimetres.
		rating_value: Raw rating of any supported scale.
		size: Star diameter in millimetres.
		gap: Gap between stars in millimetres.

	Returns:
		True if stars were drawn, False when the rating is not numeric.
	"""
	rating = normalize_rating(rating_value)
	if rating is None:
		return False
	center_x = x + size / 2.0
	for fraction in star_fill_fractions(rating):
		draw_star(page, center_x, center_y, size, fraction)
		center_x += size + gap
	return True
