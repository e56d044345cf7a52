import pytest

import product_spec_sheet.geometry
import product_spec_sheet.stars


#============================================
@pytest.mark.parametrize(
	"value, expected",
	[
		(4.5, 4.5),
		("3", 3.0),
		(8, 4.0),
		(90, 4.5),
		(250, 5.0),
		(-2, 0.0),
	],
)
def test_normalize_rating_scales(value: object, expected: float) -> None:
	assert product_spec_sheet.stars.normalize_rating(value) == pytest.approx(expected)


#============================================
def test_normalize_rating_rejects_non_numeric() -> None:
	assert product_spec_sheet.stars.normalize_rating(None) is None
	assert product_spec_sheet.stars.normalize_rating("n/a") is None
	assert product_spec_sheet.stars.normalize_rating(True) is None


#============================================
def test_star_fill_fractions_partial() -> None:
	fractions = product_spec_sheet.stars.star_fill_fractions(3.5)
	assert fractions == pytest.approx([1.0, 1.0, 1.0, 0.5, 0.0])


#============================================
@pytest.mark.parametrize("rating", [0.0, 0.3, 1.0, 2.75, 4.99, 5.0])
def test_star_fill_fractions_sum_to_rating(rating: float) -> None:
	"""
	The filled area across all stars equals the rating.
	"""
	fractions = product_spec_sheet.stars.star_fill_fractions(rating)
	assert len(fractions) == product_spec_sheet.stars.STAR_COUNT
	assert sum(fractions) == pytest.approx(rating)
	assert all(0.0 <= fraction <= 1.0 for fraction in fractions)


#============================================
def test_build_star_points_upward() -> None:
	points, outer = product_spec_sheet.stars.build_star_points(10.0, 10.0, 4.0)
	assert len(points) == 10
	assert outer == pytest.approx(2.0)
	# first vertex is the top point; Y grows downward
	assert points[0][0] == pytest.approx(10.0)
	assert points[0][1] == pytest.approx(8.0)


#============================================
def test_draw_stars_reports_missing_rating() -> None:
	page = product_spec_sheet.geometry.PageBuilder()
	assert not product_spec_sheet.stars.draw_stars(page, 20.0, 20.0, None)
	assert product_spec_sheet.stars.draw_stars(page, 20.0, 20.0, 3.7)
	assert page.seal().startswith(b"%PDF")
