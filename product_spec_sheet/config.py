"""
Shared configuration and constants.
"""

# Standard Library
import dataclasses


# A4 portrait, millimetres
PAGE_WIDTH = 210.0
PAGE_HEIGHT = 297.0
PAGE_MARGIN = 14.0
HEADER_TOP = 6.5
FOOTER_RULE_OFFSET = 32.0
FOOTER_CONTENT_GAP = 8.0

DEFAULT_FONT_REGULAR = "Helvetica"
DEFAULT_FONT_BOLD = "Helvetica-Bold"
DEFAULT_FONT_TITLE = "Times-Bold"
ELLIPSIS = "..."
LINE_HEIGHT_FACTOR = 1.15

COLOR_WHITE = "#FFFFFF"
COLOR_BLACK = "#000000"
COLOR_BORDER = "#E2E8F0"
COLOR_TEXT = "#0F172A"
COLOR_TEXT_MUTED = "#64748B"
COLOR_TEXT_BODY = "#334155"
COLOR_TEXT_FOOTER = "#1E293B"
COLOR_LABEL = "#1E40AF"
COLOR_SHADOW = "#F1F5F9"
COLOR_PANEL = "#F8FAFC"
COLOR_PLACEHOLDER = "#94A3B8"
COLOR_PILL_BLUE = "#1E3A8A"
COLOR_PILL_TEAL = "#0D746E"
COLOR_AMBER_BG = "#FFF7CC"
COLOR_GOLD_LINE = "#C9A26A"
COLOR_GOLD_LINE_DARK = "#7A5C34"
COLOR_BADGE = "#4338CA"
COLOR_STAR_FILLED = "#F59E0B"
COLOR_STAR_EMPTY = "#CBD5E1"
COLOR_PHONE = "#C2783E"
COLOR_WHATSAPP = "#16A34A"
COLOR_EMAIL = "#1E40AF"
COLOR_QR_DARK = "#0F172A"

STAR_INNER_RATIO = 0.38
STAR_COUNT = 5
STAR_SIZE = 3.0
STAR_GAP = 0.5

LOGO_BOX_WIDTH = 22.0
LOGO_BOX_HEIGHT = 14.5
HERO_IMAGE_SIZE = 62.0
TITLE_MAX_LINES = 3
TAGLINE_MAX_LINES = 2
DESCRIPTION_MAX_LINES = 2
ADDRESS_MAX_LINES = 2
TABLE_ROW_HEIGHT = 12.8
TABLE_FINISH_HEIGHT = 16.0
QR_CARD_WIDTH = 34.0
QR_CARD_HEIGHT = 42.0
QR_IMAGE_SIZE = 28.0
QR_PIXEL_SIZE = 420
QR_BORDER = 0

GRID_COLUMNS = 2
GRID_GAP_X = 7.0
GRID_GAP_Y = 9.0
GRID_TOP = 29.0
GRID_MIN_CARD_HEIGHT = 96.0
CARD_ROW_HEIGHT = 14.2
CARD_MIN_ROW_HEIGHT = 12.8
CARD_MIN_TABLE_HEIGHT = 22.0

REQUEST_TIMEOUT = 12.0
PRODUCT_LISTING_LIMIT = 150
DEFAULT_MAX_WORKERS = 8
FALLBACK_FILE_NAME = "product-sample.pdf"
FALLBACK_TITLE = "Product Details"
TAGLINE_CLOSING = (
	"engineered for consistent bulk runs. "
	"Trusted textile manufacturing and custom fabric production partner."
)
LOGO_CANDIDATES = (
	"/assets/img/logo/my_logo.png",
	"/logo1.png",
	"/logo.png",
	"/assets/img/logo/logo.png",
)
DEFAULT_SITE_ORIGIN = "https://amrita-fashions.com"

COMPANY_MATCH_NAMES = {"AGE"}
COMPANY_MATCH_LEGAL_FRAGMENT = "Amrita"
DEFAULT_COMPANY = {
	"name": "Amrita Global Enterprises",
	"phone": "+91-9925155141",
	"whatsapp": "+91-9925155141",
	"email": "connect.age@outlook.com",
	"address": "404, 4th Floor, Safal Prelude, Opp SPIPA, Ahmedabad, Gujarat, India 380015",
}

# canonical key -> source keys, first non-empty wins; dots walk nested dicts
FIELD_ALIASES = {
	"code": ["fabricCode", "code", "vendorFabricCode"],
	"title": ["productTitle", "name", "title"],
	"tagline": ["productTagline", "tagline"],
	"short_description": ["shortProductDescription", "shortDescription"],
	"category": ["category", "category.name"],
	"supply_model": ["supplyModel", "leadtime.0", "status"],
	"content": ["content"],
	"width_cm": ["cm", "width"],
	"width_inch": ["inch"],
	"gsm": ["gsm"],
	"oz": ["ozs", "oz"],
	"design": ["design", "design.name"],
	"structure": ["structure"],
	"colors": ["color", "colors"],
	"motif": ["motif", "motifsize"],
	"finish": ["finish"],
	"moq": ["salesMOQ", "moq"],
	"unit": ["uM", "unit"],
	"rating": ["ratingValue", "rating", "ratingPercent"],
	"collection_id": ["collectionId", "collection.id", "collection._id", "collection_id", "collection"],
	"slug": ["productslug", "slug"],
	"product_id": ["_id", "id"],
	"primary_image_url": [
		"image1CloudUrl", "image1ThumbUrl",
		"image2CloudUrl", "image2ThumbUrl",
		"image3CloudUrl", "image3ThumbUrl",
		"img", "image1", "image2", "image3",
	],
	"card_image_url": [
		"image1ThumbUrl", "image1CloudUrl",
		"image2ThumbUrl", "image2CloudUrl",
		"image3ThumbUrl", "image3CloudUrl",
		"img", "image1",
	],
}
COLLECTION_MATCH_KEYS = ("collectionId", "collection", "collection_id")

APPAREL_USES = (
	"Womenswear: Blouses / tops, Summer dresses, and Tunics / kurta.",
	"Menswear: Casual shirts, Summer short-sleeve shirts, and Kurta / casual ethnic tops.",
	"Unisex: Casual shirts and Scarfs and Stoles (light weight) (non-med).",
	"Kidswear: Shirts / tops, Lightweight dresses / frocks, and Pyjamas / nightwear.",
)
HOME_USES = (
	"Accessories: Lightweight scarves / stoles, Pocket squares, and Fabric belts / trims.",
	"Home Textiles: Pillow covers, Lightweight cushion covers, and Decorative table runners.",
	"Uniforms / Workwear: Light service uniforms (indoor).",
)


@dataclasses.dataclass
class SheetOptions:
	product_url: str | None = None
	qr_payload: str | None = None
	logo_url: str | None = None
	site_origin: str = DEFAULT_SITE_ORIGIN
	company_name: str | None = None
	phone: str | None = None
	whatsapp: str | None = None
	email: str | None = None
	address: str | None = None
	output_dir: str = "."
	lookup_slug: bool = False
	max_workers: int = DEFAULT_MAX_WORKERS


@dataclasses.dataclass
class SheetResult:
	success: bool
	file_name: str
	path: str
	pages: int
	gallery_pages: int
	sibling_count: int


@dataclasses.dataclass(frozen=True)
class PillStyle:
	background: str
	foreground: str = COLOR_WHITE
	pad_x: float = 4.2
	height: float = 7.2
	radius: float = 3.6
	font_size: float = 7.2
	bold: bool = True


PILL_CATEGORY = PillStyle(background=COLOR_PILL_BLUE)
PILL_SUPPLY = PillStyle(background=COLOR_PILL_TEAL)
PILL_CODE = PillStyle(
	background=COLOR_BLACK,
	pad_x=5.2,
	height=9.0,
	radius=4.5,
	font_size=10.0,
)


#============================================
def content_max_y(page_height: float = PAGE_HEIGHT) -> float:
	"""
	Lowest Y any body block may reach before the footer region.

	Args:
		page_height: Page height in millimetres.

	Returns:
		Y coordinate in millimetres.
	"""
	return page_height - FOOTER_RULE_OFFSET - FOOTER_CONTENT_GAP
