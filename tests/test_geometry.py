import pytest

import product_spec_sheet.config
import product_spec_sheet.geometry


FONT = product_spec_sheet.config.DEFAULT_FONT_REGULAR
SIZE = 9.0


#============================================
def test_fit_single_line_keeps_text_that_fits() -> None:
	"""
	Text narrower than the budget comes back unchanged.
	"""
	text = "Cotton"
	width = product_spec_sheet.geometry.measure_text(text, FONT, SIZE)
	assert product_spec_sheet.geometry.fit_single_line(text, width + 1.0, FONT, SIZE) == text


#============================================
def test_fit_single_line_ellipsizes_within_budget() -> None:
	"""
	Overlong text is cut with an ellipsis and never exceeds the budget.
	"""
	text = "Organic cotton linen blend with elastane stretch and a long tail"
	for budget in (10.0, 25.0, 40.0, 60.0):
		fitted = product_spec_sheet.geometry.fit_single_line(text, budget, FONT, SIZE)
		assert fitted.endswith(product_spec_sheet.config.ELLIPSIS)
		assert product_spec_sheet.geometry.measure_text(fitted, FONT, SIZE) <= budget


#============================================
def test_fit_single_line_empty_when_nothing_fits() -> None:
	assert product_spec_sheet.geometry.fit_single_line("Cotton", 0.5, FONT, SIZE) == ""
	assert product_spec_sheet.geometry.fit_single_line("", 50.0, FONT, SIZE) == ""


#============================================
def test_wrap_lines_respects_width_and_count() -> None:
	"""
	Wrapped lines stay inside the width and the line limit.
	"""
	text = " ".join(["woven"] * 60)
	lines = product_spec_sheet.geometry.wrap_lines(text, 40.0, 3, FONT, SIZE)
	assert len(lines) == 3
	for line in lines:
		assert product_spec_sheet.geometry.measure_text(line, FONT, SIZE) <= 40.0
	assert not lines[-1].endswith(product_spec_sheet.config.ELLIPSIS)


#============================================
def test_wrap_lines_splits_long_word() -> None:
	lines = product_spec_sheet.geometry.wrap_lines("x" * 80, 20.0, 10, FONT, SIZE)
	assert len(lines) > 1
	assert "".join(lines) == "x" * 80
	for line in lines:
		assert product_spec_sheet.geometry.measure_text(line, FONT, SIZE) <= 20.0


#============================================
def test_wrap_lines_zero_limit() -> None:
	assert product_spec_sheet.geometry.wrap_lines("some words", 50.0, 0, FONT, SIZE) == []


#============================================
def test_fit_contain_preserves_aspect() -> None:
	"""
	A wide source fills the box width and is centred vertically.
	"""
	fit = product_spec_sheet.geometry.fit_contain(200, 100, 60.0, 60.0)
	assert fit.width == pytest.approx(60.0)
	assert fit.height == pytest.approx(30.0)
	assert fit.dx == pytest.approx(0.0)
	assert fit.dy == pytest.approx(15.0)


#============================================
def test_fit_contain_unknown_size_fills_box() -> None:
	fit = product_spec_sheet.geometry.fit_contain(0, None, 30.0, 20.0)
	assert (fit.width, fit.height, fit.dx, fit.dy) == (30.0, 20.0, 0.0, 0.0)


#============================================
def test_contain_box_stays_inside() -> None:
	box = product_spec_sheet.geometry.LayoutBox(10.0, 20.0, 40.0, 80.0)
	target = product_spec_sheet.geometry.contain_box(50, 50, box)
	assert target.x >= box.x
	assert target.y >= box.y
	assert target.right <= box.right + 1e-9
	assert target.bottom <= box.bottom + 1e-9
	assert target.width == pytest.approx(40.0)


#============================================
def test_layout_box_inset_and_offset() -> None:
	box = product_spec_sheet.geometry.LayoutBox(0.0, 0.0, 10.0, 4.0)
	inset = box.inset(3.0)
	assert inset.width == 4.0
	assert inset.height == 0.0
	moved = box.offset(1.0, 2.0)
	assert (moved.x, moved.y, moved.right, moved.bottom) == (1.0, 2.0, 11.0, 6.0)


#============================================
def test_parse_hex_color() -> None:
	assert product_spec_sheet.geometry.parse_hex_color("#FF0000") == (1.0, 0.0, 0.0)
	assert product_spec_sheet.geometry.parse_hex_color("red") == (0.0, 0.0, 0.0)


#============================================
def test_page_builder_seal_once() -> None:
	"""
	A sealed page is a one-page PDF and refuses a second seal.
	"""
	page = product_spec_sheet.geometry.PageBuilder()
	product_spec_sheet.geometry.draw_text(page, 20.0, 20.0, "Hello", FONT, 12.0, "#000000")
	data = page.seal()
	assert data.startswith(b"%PDF")
	with pytest.raises(RuntimeError):
		page.seal()


#============================================
def test_page_builder_flips_y() -> None:
	page = product_spec_sheet.geometry.PageBuilder(100.0, 50.0)
	assert page.py(0.0) == pytest.approx(50.0 * product_spec_sheet.geometry.MM)
	assert page.py(50.0) == pytest.approx(0.0)
	assert page.px(10.0) == pytest.approx(10.0 * product_spec_sheet.geometry.MM)
