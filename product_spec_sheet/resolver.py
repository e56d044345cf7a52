"""
Resolution of sparse product, company and collection records.
"""

# Standard Library
import dataclasses
import logging

# local repo modules
import product_spec_sheet as pss
import product_spec_sheet.api_client
import product_spec_sheet.assets
import product_spec_sheet.config
import product_spec_sheet.records


ProductView = pss.records.ProductView
AssetImage = pss.assets.AssetImage
ApiClient = pss.api_client.ApiClient
SheetOptions = pss.config.SheetOptions

clean_str = pss.records.clean_str
is_empty = pss.records.is_empty
join_values = pss.records.join_values

FIELD_ALIASES = pss.config.FIELD_ALIASES
COLLECTION_MATCH_KEYS = pss.config.COLLECTION_MATCH_KEYS
COMPANY_MATCH_NAMES = pss.config.COMPANY_MATCH_NAMES
COMPANY_MATCH_LEGAL_FRAGMENT = pss.config.COMPANY_MATCH_LEGAL_FRAGMENT
DEFAULT_COMPANY = pss.config.DEFAULT_COMPANY
FALLBACK_TITLE = pss.config.FALLBACK_TITLE
TAGLINE_CLOSING = pss.config.TAGLINE_CLOSING

TEXT_FIELDS = (
	"code", "title", "tagline", "short_description", "category",
	"supply_model", "design", "structure", "motif", "unit",
	"collection_id", "slug", "product_id", "primary_image_url", "card_image_url",
)
NUMBER_FIELDS = ("width_cm", "width_inch", "gsm", "oz")
LIST_FIELDS = ("content", "colors", "finish")
ID_FIELDS = ("collection_id", "product_id")
ID_REFERENCE_KEYS = ("id", "_id")

LOGGER = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class CompanyRecord:
	name: str
	phone: str
	whatsapp: str
	email: str
	address: str


@dataclasses.dataclass(frozen=True)
class CollectionItem:
	view: ProductView
	image: AssetImage | None = None


#============================================
def record_text(value: object, reference_keys: tuple[str, ...] = ("name", "id", "_id")) -> str:
	"""
	Read a scalar display string, unwrapping reference objects.

	Args:
		value: Raw record value.
		reference_keys: Keys tried, in order, when the value is a mapping.

	Returns:
		Display string.
	"""
	if isinstance(value, dict):
		for key in reference_keys:
			text = clean_str(value.get(key))
			if text:
				return text
		return ""
	if isinstance(value, (list, tuple)):
		return ""
	return clean_str(value)


#============================================
def resolve_alias_values(record: dict, key: str) -> list[object]:
	"""
	List the non-empty raw values of a canonical key in priority order.

	Args:
		record: Source product mapping.
		key: Canonical key from FIELD_ALIASES.

	Returns:
		Candidate values, best first.
	"""
	values: list[object] = []
	for path in FIELD_ALIASES[key]:
		value = pss.records.lookup_path(record, path)
		if not is_empty(value):
			values.append(value)
	return values


#============================================
def resolve_text(record: dict, key: str) -> str:
	reference_keys = ID_REFERENCE_KEYS if key in ID_FIELDS else ("name", "id", "_id")
	for value in resolve_alias_values(record, key):
		text = record_text(value, reference_keys)
		if text:
			return pss.records.normalize_text(text)
	return ""


#============================================
def resolve_number(record: dict, key: str) -> float | None:
	for value in resolve_alias_values(record, key):
		number = pss.records.to_number(value)
		if number is not None:
			return number
	return None


#============================================
def resolve_list(record: dict, key: str) -> tuple[str, ...]:
	for value in resolve_alias_values(record, key):
		items = pss.records.to_text_list(value)
		if items:
			return tuple(pss.records.normalize_text(item) for item in items)
	return ()


#============================================
def resolve_product(record: dict | None) -> ProductView:
	"""
	Build the canonical view of a sparse product record.

	Args:
		record: Product mapping with any mix of legacy field names.

	Returns:
		Immutable ProductView.
	"""
	if not isinstance(record, dict):
		record = {}
	values: dict[str, object] = {}
	for key in TEXT_FIELDS:
		values[key] = resolve_text(record, key)
	for key in NUMBER_FIELDS:
		values[key] = resolve_number(record, key)
	for key in LIST_FIELDS:
		values[key] = resolve_list(record, key)
	moq_values = resolve_alias_values(record, "moq")
	values["moq"] = pss.records.normalize_text(record_text(moq_values[0])) if moq_values else ""
	rating_values = resolve_alias_values(record, "rating")
	values["rating"] = rating_values[0] if rating_values else None
	return ProductView(**values)


#============================================
def synthesize_title(view: ProductView) -> str:
	"""
	Build a descriptive title from product attributes.

	Args:
		view: Canonical product view.

	Returns:
		Title text; the product code or a generic title as last resort.
	"""
	parts: list[str] = []
	if view.design:
		parts.append(view.design)
	if view.colors:
		parts.append(join_values(view.colors))
	if view.content:
		parts.append(join_values(view.content))
	if view.structure:
		parts.append(view.structure)
	width = pss.records.width_text(view)
	if width:
		parts.append(f"Fabric {width}")
	gsm = pss.records.format_number(view.gsm, 0)
	if gsm:
		parts.append(f"{gsm}gsm")
	if view.supply_model:
		parts.append(view.supply_model)
	if parts:
		return " ".join(parts)
	return view.code or FALLBACK_TITLE


#============================================
def synthesize_tagline(view: ProductView) -> str:
	parts: list[str] = []
	if "stock" in view.supply_model.lower():
		parts.append("Never-out-of-stock")
	if view.content:
		parts.append(join_values(view.content).lower())
	if view.colors:
		parts.append(f"in {join_values(view.colors).lower()}")
	parts.append(TAGLINE_CLOSING)
	return " ".join(parts)


#============================================
def display_title(view: ProductView) -> str:
	return view.title or synthesize_title(view)


#============================================
def display_tagline(view: ProductView) -> str:
	return view.tagline or view.short_description or synthesize_tagline(view)


#============================================
def enrich_record(record: dict, full_record: dict | None) -> dict:
	"""
	Fill gaps in a product record from its full looked-up version.

	Non-empty values of the given record always win.

	Args:
		record: Record handed in by the caller.
		full_record: Record from the slug lookup, or None.

	Returns:
		New merged mapping.
	"""
	if not full_record:
		return dict(record)
	merged = dict(full_record)
	for key, value in record.items():
		if not is_empty(value) or key not in merged:
			merged[key] = value
	return merged


#============================================
def version_of(entry: dict) -> float:
	number = pss.records.to_number(entry.get("versionNumber"))
	return number if number is not None else 0.0


#============================================
def select_company_entry(entries: list[dict]) -> dict | None:
	"""
	Pick the most relevant company entry.

	Deleted entries are dropped. Entries matching the organization win;
	otherwise the highest version number among the rest.

	Args:
		entries: Company information entries.

	Returns:
		Chosen entry or None.
	"""
	live = [entry for entry in entries if isinstance(entry, dict) and not entry.get("deleted")]
	matches = [
		entry for entry in live
		if clean_str(entry.get("name")) in COMPANY_MATCH_NAMES
		or COMPANY_MATCH_LEGAL_FRAGMENT in clean_str(entry.get("legalName"))
	]
	pool = matches or live
	if not pool:
		return None
	return max(pool, key=version_of)


#============================================
def build_address(entry: dict | None) -> str:
	"""
	Join postal address parts of a company entry.

	Args:
		entry: Company entry or None.

	Returns:
		One-line address, empty when nothing is known.
	"""
	if not entry:
		return ""
	parts = [
		clean_str(entry.get(key))
		for key in ("addressStreet", "addressCity", "addressState", "addressCountry")
	]
	base = ", ".join(part for part in parts if part)
	postal = clean_str(entry.get("addressPostalCode"))
	if base and postal:
		return f"{base} {postal}"
	return base or postal


#============================================
def resolve_company(entry: dict | None, options: SheetOptions | None = None) -> CompanyRecord:
	"""
	Build the company record: option overrides, then API entry, then defaults.

	Args:
		entry: Selected company entry or None.
		options: Sheet options with optional overrides.

	Returns:
		CompanyRecord with every field filled.
	"""
	if options is None:
		options = SheetOptions()
	entry = entry or {}

	def pick(*values: object) -> str:
		for value in values:
			text = clean_str(value)
			if text:
				return pss.records.normalize_text(text)
		return ""

	return CompanyRecord(
		name=pick(options.company_name, entry.get("legalName"), entry.get("name"), DEFAULT_COMPANY["name"]),
		phone=pick(options.phone, entry.get("phone1"), DEFAULT_COMPANY["phone"]),
		whatsapp=pick(options.whatsapp, entry.get("whatsappNumber"), DEFAULT_COMPANY["whatsapp"]),
		email=pick(options.email, entry.get("primaryEmail"), DEFAULT_COMPANY["email"]),
		address=pick(options.address, build_address(entry), DEFAULT_COMPANY["address"]),
	)


#============================================
def fetch_company(client: ApiClient, options: SheetOptions | None = None) -> CompanyRecord:
	entries = client.fetch_company_entries()
	entry = select_company_entry(entries)
	if entry is None:
		LOGGER.info("No company information available; using built-in defaults")
	return resolve_company(entry, options)


#============================================
def collection_matches(product: dict, collection_id: str) -> bool:
	"""
	Check whether a listing entry belongs to a collection.

	Args:
		product: Listing entry.
		collection_id: Collection identifier.

	Returns:
		True on a string match of any collection field.
	"""
	for key in COLLECTION_MATCH_KEYS:
		if record_text(product.get(key), ID_REFERENCE_KEYS) == collection_id:
			return True
	return False


#============================================
def is_same_product(product: dict, view: ProductView) -> bool:
	other = resolve_product(product)
	if view.product_id and other.product_id == view.product_id:
		return True
	return bool(view.code) and other.code == view.code


#============================================
def filter_collection_siblings(products: list[dict], view: ProductView) -> list[dict]:
	"""
	Keep listing entries of the same collection, excluding the product itself.

	Args:
		products: Product listing.
		view: Canonical view of the current product.

	Returns:
		Sibling records in listing order.
	"""
	if not view.collection_id:
		return []
	return [
		product for product in products
		if isinstance(product, dict)
		and collection_matches(product, view.collection_id)
		and not is_same_product(product, view)
	]


#============================================
def fetch_siblings(client: ApiClient, view: ProductView) -> list[CollectionItem]:
	"""
	Fetch the collection siblings of a product.

	Args:
		client: API client.
		view: Canonical view of the current product.

	Returns:
		CollectionItem list without images; empty on any failure.
	"""
	if not view.collection_id:
		return []
	products = client.fetch_product_listing()
	siblings = filter_collection_siblings(products, view)
	LOGGER.info("Collection %s has %d sibling products", view.collection_id, len(siblings))
	return [CollectionItem(view=resolve_product(product)) for product in siblings]
