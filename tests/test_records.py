import pytest

import product_spec_sheet.records


ProductView = product_spec_sheet.records.ProductView


#============================================
def test_lookup_path_walks_dicts_and_lists() -> None:
	record = {"leadtime": ["Stock", "Made to order"], "collection": {"id": "C1"}}
	assert product_spec_sheet.records.lookup_path(record, "leadtime.0") == "Stock"
	assert product_spec_sheet.records.lookup_path(record, "leadtime.5") is None
	assert product_spec_sheet.records.lookup_path(record, "collection.id") == "C1"
	assert product_spec_sheet.records.lookup_path(record, "collection.id.deeper") is None


#============================================
def test_is_empty() -> None:
	assert product_spec_sheet.records.is_empty(None)
	assert product_spec_sheet.records.is_empty("  ")
	assert product_spec_sheet.records.is_empty([])
	assert not product_spec_sheet.records.is_empty(0)
	assert not product_spec_sheet.records.is_empty("x")


#============================================
@pytest.mark.parametrize(
	"value, decimals, expected",
	[
		(147, 0, "147"),
		("147.0", 0, "147"),
		(3.456, 2, "3.46"),
		(4.3, 2, "4.3"),
		("abc", 2, ""),
		(None, 2, ""),
	],
)
def test_format_number(value: object, decimals: int, expected: str) -> None:
	assert product_spec_sheet.records.format_number(value, decimals) == expected


#============================================
def test_width_and_weight_text() -> None:
	view = ProductView(width_cm=147.0, width_inch=58.0, gsm=120.0, oz=3.5)
	assert product_spec_sheet.records.width_text(view) == "147 cm / 58 inch"
	assert product_spec_sheet.records.weight_text(view) == "120 gsm / 3.5 oz"
	assert product_spec_sheet.records.width_text(ProductView(width_inch=58.0)) == "58 inch"
	assert product_spec_sheet.records.weight_text(ProductView()) == ""


#============================================
def test_moq_text_with_unit() -> None:
	assert product_spec_sheet.records.moq_text(ProductView(moq="500", unit="Meter")) == "500 Meter"
	assert product_spec_sheet.records.moq_text(ProductView(moq="on request")) == "on request"
	assert product_spec_sheet.records.moq_text(ProductView()) == ""


#============================================
def test_finish_labels() -> None:
	values = ("FIN-Peach=Peach Finish", "Soft-Wash", "Mercerized", "")
	assert product_spec_sheet.records.join_finish(values) == "Peach Finish, Wash, Mercerized"


#============================================
def test_to_text_list_variants() -> None:
	assert product_spec_sheet.records.to_text_list(["Cotton", " ", None]) == ("Cotton",)
	assert product_spec_sheet.records.to_text_list([{"name": "Indigo"}]) == ("Indigo",)
	assert product_spec_sheet.records.to_text_list("Linen") == ("Linen",)
	assert product_spec_sheet.records.to_text_list(None) == ()


#============================================
def test_hyphen_to_space() -> None:
	assert product_spec_sheet.records.hyphen_to_space("Ready-to-ship") == "Ready to ship"


#============================================
def test_normalize_text_stays_in_latin1() -> None:
	"""
	Typographic punctuation and accents map into the standard font range.
	"""
	text = product_spec_sheet.records.normalize_text("Café – “Soft” Dvořák •")
	assert text == 'Café - "Soft" Dvorák •'
	assert all(ord(char) < 256 or char == "•" for char in text)


#============================================
def test_sanitize_file_stem() -> None:
	assert product_spec_sheet.records.sanitize_file_stem("AB-12/34 x") == "AB-12_34_x"
	assert product_spec_sheet.records.sanitize_file_stem("///") == ""
