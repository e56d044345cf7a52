"""
Product record parsing and value normalization.
"""

# Standard Library
import dataclasses
import math
import re
import unicodedata


@dataclasses.dataclass(frozen=True)
class ProductView:
	code: str = ""
	title: str = ""
	tagline: str = ""
	short_description: str = ""
	category: str = ""
	supply_model: str = ""
	content: tuple[str, ...] = ()
	width_cm: float | None = None
	width_inch: float | None = None
	gsm: float | None = None
	oz: float | None = None
	design: str = ""
	structure: str = ""
	colors: tuple[str, ...] = ()
	motif: str = ""
	finish: tuple[str, ...] = ()
	moq: str = ""
	unit: str = ""
	rating: object = None
	collection_id: str = ""
	slug: str = ""
	product_id: str = ""
	primary_image_url: str = ""
	card_image_url: str = ""


TEXT_REPLACEMENTS = {
	"–": "-",
	"—": "-",
	"−": "-",
	"‘": "'",
	"’": "'",
	"“": '"',
	"”": '"',
	"…": "...",
	" ": " ",
}


#============================================
def clean_str(value: object) -> str:
	"""
	Convert a value to a stripped string.

	Args:
		value: Any value.

	Returns:
		Stripped string, empty for None.
	"""
	if value is None:
		return ""
	return str(value).strip()


#============================================
def is_empty(value: object) -> bool:
	"""
	Check whether a record value carries no information.

	Args:
		value: Any value.

	Returns:
		True for None, blank strings and empty containers.
	"""
	if value is None:
		return True
	if isinstance(value, str):
		return not value.strip()
	if isinstance(value, (list, tuple, dict, set)):
		return len(value) == 0
	return False


#============================================
def lookup_path(record: dict, path: str) -> object:
	"""
	Read a dotted path from a nested record.

	Integer segments index into lists, so "leadtime.0" reads the first
	lead time entry.

	Args:
		record: Source mapping.
		path: Dotted key path.

	Returns:
		The value or None when any segment is missing.
	"""
	current: object = record
	for segment in path.split("."):
		if isinstance(current, dict):
			current = current.get(segment)
		elif isinstance(current, (list, tuple)) and segment.isdigit():
			index = int(segment)
			current = current[index] if index < len(current) else None
		else:
			return None
		if current is None:
			return None
	return current


#============================================
def to_number(value: object) -> float | None:
	"""
	Parse a numeric value.

	Args:
		value: Number or numeric string.

	Returns:
		Finite float or None.
	"""
	if value is None or isinstance(value, bool):
		return None
	if isinstance(value, (int, float)):
		number = float(value)
	else:
		text = clean_str(value)
		if not text:
			return None
		try:
			number = float(text)
		except ValueError:
			return None
	if not math.isfinite(number):
		return None
	return number


#============================================
def format_number(value: object, decimals: int = 2) -> str:
	"""
	Format a number without trailing zeros.

	Args:
		value: Number or numeric string.
		decimals: Maximum decimal places.

	Returns:
		Formatted string, empty when not numeric.
	"""
	number = to_number(value)
	if number is None:
		return ""
	rounded = round(number)
	if abs(number - rounded) < 1e-6:
		return str(int(rounded))
	text = f"{number:.{decimals}f}"
	if "." in text:
		text = text.rstrip("0").rstrip(".")
	return text


#============================================
def to_text_list(value: object) -> tuple[str, ...]:
	"""
	Normalize a string or list value into a tuple of non-empty strings.
	"""
	if isinstance(value, (list, tuple)):
		items = [clean_str(item.get("name") if isinstance(item, dict) else item) for item in value]
		return tuple(item for item in items if item)
	if isinstance(value, dict):
		value = value.get("name")
	text = clean_str(value)
	if not text:
		return ()
	return (text,)


#============================================
def join_values(values: tuple[str, ...] | list[str], separator: str = ", ") -> str:
	return separator.join(value for value in values if value)


#============================================
def to_upper_label(value: object) -> str:
	return clean_str(value).upper()


#============================================
def hyphen_to_space(value: object) -> str:
	"""
	Replace hyphens with spaces and collapse runs of whitespace.

	Args:
		value: Source text.

	Returns:
		Cleaned text.
	"""
	text = clean_str(value).replace("-", " ")
	return re.sub(r"\s{2,}", " ", text).strip()


#============================================
def finish_label(value: object) -> str:
	"""
	Reduce a finish code such as "FIN-Peach=Peach Finish" to its label.

	Args:
		value: Raw finish entry.

	Returns:
		Display label.
	"""
	text = clean_str(value)
	if not text:
		return ""
	if "=" in text:
		return clean_str(text.split("=")[-1])
	if "-" in text:
		return clean_str(text.split("-")[-1])
	return text


#============================================
def join_finish(values: tuple[str, ...], separator: str = ", ") -> str:
	labels = [finish_label(value) for value in values]
	return separator.join(label for label in labels if label)


#============================================
def width_text(view: ProductView) -> str:
	"""
	Format the fabric width as "cm / inch".

	Args:
		view: Canonical product view.

	Returns:
		Width text, empty when unknown.
	"""
	cm_text = format_number(view.width_cm, 0)
	inch_text = format_number(view.width_inch, 0)
	if cm_text and inch_text:
		return f"{cm_text} cm / {inch_text} inch"
	if inch_text:
		return f"{inch_text} inch"
	if cm_text:
		return f"{cm_text} cm"
	return ""


#============================================
def weight_text(view: ProductView) -> str:
	"""
	Format the fabric weight as "gsm / oz".

	Args:
		view: Canonical product view.

	Returns:
		Weight text, empty when unknown.
	"""
	gsm_text = format_number(view.gsm, 0)
	oz_text = format_number(view.oz, 1)
	if gsm_text and oz_text:
		return f"{gsm_text} gsm / {oz_text} oz"
	if gsm_text:
		return f"{gsm_text} gsm"
	if oz_text:
		return f"{oz_text} oz"
	return ""


#============================================
def moq_text(view: ProductView) -> str:
	if not view.moq:
		return ""
	moq = format_number(view.moq, 0) or view.moq
	if view.unit:
		return f"{moq} {view.unit}"
	return moq


#============================================
def normalize_text(value: str) -> str:
	"""
	Normalize text to the Latin-1 range covered by the standard PDF fonts.

	Args:
		value: Input text.

	Returns:
		Normalized text.
	"""
	if not value:
		return value
	result: list[str] = []
	for char in value:
		char = TEXT_REPLACEMENTS.get(char, char)
		if len(char) > 1 or ord(char) < 256 or char == "•":
			result.append(char)
			continue
		decomposed = unicodedata.normalize("NFKD", char)
		ascii_text = decomposed.encode("ascii", "ignore").decode("ascii")
		result.append(ascii_text)
	return "".join(result)


#============================================
def sanitize_file_stem(value: str) -> str:
	"""
	Sanitize a product code for use as a file name stem.

	Args:
		value: Input string.

	Returns:
		Sanitized string, empty when nothing usable remains.
	"""
	result: list[str] = []
	for char in value:
		if char.isalnum() or char in "-_.":
			result.append(char)
		else:
			result.append("_")
	return "".join(result).strip("._")
