"""
Remote asset fetching and decoding.

Every fetcher here is best effort: failures come back as None and the
caller draws a placeholder or omits the block.
"""

# Standard Library
import base64
import binascii
import dataclasses
import io
import logging
import pathlib
import re
import typing

# PIP3 modules
import PIL.Image
import qrcode
import qrcode.constants
import qrcode.exceptions
import reportlab.lib.utils
import requests

# local repo modules
import product_spec_sheet as pss
import product_spec_sheet.config
import product_spec_sheet.records


REQUEST_TIMEOUT = pss.config.REQUEST_TIMEOUT
QR_PIXEL_SIZE = pss.config.QR_PIXEL_SIZE
QR_BORDER = pss.config.QR_BORDER
COLOR_QR_DARK = pss.config.COLOR_QR_DARK
COLOR_WHITE = pss.config.COLOR_WHITE

LOGGER = logging.getLogger(__name__)
DATA_URL_PATTERN = re.compile(r"^data:image/[a-zA-Z0-9.+-]+;base64,(.*)$", re.DOTALL)


@dataclasses.dataclass(frozen=True)
class AssetImage:
	reader: reportlab.lib.utils.ImageReader
	width: int
	height: int
	source: str = ""


class AssetDecoder(typing.Protocol):
	def decode(self, data: bytes, source: str) -> AssetImage | None:
		...


class PillowDecoder:
	"""
	Decode raw image bytes with Pillow.
	"""

	def decode(self, data: bytes, source: str) -> AssetImage | None:
		if not data:
			return None
		try:
			image = PIL.Image.open(io.BytesIO(data))
			image.load()
		except (PIL.UnidentifiedImageError, OSError, ValueError) as error:
			LOGGER.warning("Could not decode image %s: %s", source, error)
			return None
		return image_to_asset(image, source)


DEFAULT_DECODER = PillowDecoder()


#============================================
def image_to_asset(image: PIL.Image.Image, source: str) -> AssetImage | None:
	"""
	Wrap a decoded Pillow image for drawing.

	Args:
		image: Decoded image.
		source: URL or label used in log messages.

	Returns:
		AssetImage, or None when the image has no pixels.
	"""
	width, height = image.size
	if width <= 0 or height <= 0:
		return None
	if image.mode not in ("RGB", "RGBA", "L"):
		image = image.convert("RGBA" if "A" in image.getbands() or image.mode == "P" else "RGB")
	return AssetImage(
		reader=reportlab.lib.utils.ImageReader(image),
		width=width,
		height=height,
		source=source,
	)


#============================================
def normalize_url(value: object) -> str:
	"""
	Normalize a URL-ish string to an absolute https URL.

	Args:
		value: Raw URL, host or protocol-relative URL.

	Returns:
		Normalized URL, empty when blank.
	"""
	text = pss.records.clean_str(value)
	if not text:
		return ""
	if re.match(r"^https?://", text, re.IGNORECASE):
		return text
	if text.startswith("//"):
		return "https:" + text
	return "https://" + text


#============================================
def resolve_asset_url(value: object, site_origin: object) -> str:
	"""
	Resolve an image URL from a record against the storefront origin.

	Data URLs and absolute http(s) URLs pass through; "//host/..." gets
	the https scheme; root-relative and bare paths join onto the origin.

	Args:
		value: Raw image URL from a product record.
		site_origin: Storefront origin such as "https://shop.example.com".

	Returns:
		Fetchable URL, empty when it cannot be resolved.
	"""
	text = pss.records.clean_str(value)
	if not text:
		return ""
	if DATA_URL_PATTERN.match(text) or re.match(r"^https?://", text, re.IGNORECASE):
		return text
	if text.startswith("//"):
		return "https:" + text
	origin = pss.records.clean_str(site_origin).rstrip("/")
	if not origin:
		LOGGER.warning("No site origin to resolve image URL %s", text)
		return ""
	origin = normalize_url(origin)
	return f"{origin}/{text.lstrip('/')}"


#============================================
def read_source_bytes(
	source: str,
	session: requests.Session | None = None,
	timeout: float = REQUEST_TIMEOUT,
	allow_local: bool = False,
) -> bytes | None:
	"""
	Read bytes from a data URL, an http(s) URL or, when allowed, a local file.

	Args:
		source: Image location.
		session: Optional requests session.
		timeout: Request timeout in seconds.
		allow_local: Read other sources as local file paths.

	Returns:
		Bytes, or None on any failure.
	"""
	match = DATA_URL_PATTERN.match(source)
	if match:
		try:
			return base64.b64decode(match.group(1), validate=False)
		except (binascii.Error, ValueError) as error:
			LOGGER.warning("Bad data URL: %s", error)
			return None

	if re.match(r"^https?://", source, re.IGNORECASE):
		getter = session.get if session is not None else requests.get
		try:
			response = getter(source, timeout=timeout, allow_redirects=True)
		except requests.RequestException as error:
			LOGGER.warning("Image fetch failed for %s: %s", source, error)
			return None
		if not 200 <= response.status_code < 300:
			LOGGER.warning("Image fetch for %s returned HTTP %s", source, response.status_code)
			return None
		return response.content or None

	if not allow_local:
		LOGGER.warning("Refusing non-http image source: %s", source)
		return None

	path = pathlib.Path(source)
	try:
		if path.is_file():
			return path.read_bytes()
	except OSError as error:
		LOGGER.warning("Could not read image file %s: %s", source, error)
		return None
	LOGGER.warning("Image source not found: %s", source)
	return None


#============================================
def fetch_image(
	url: object,
	session: requests.Session | None = None,
	decoder: AssetDecoder | None = None,
	timeout: float = REQUEST_TIMEOUT,
	allow_local: bool = False,
) -> AssetImage | None:
	"""
	Fetch and decode one image.

	Args:
		url: Image URL, data URL or local path.
		session: Optional requests session.
		decoder: Byte decoder; Pillow by default.
		timeout: Request timeout in seconds.
		allow_local: Accept local file paths.

	Returns:
		AssetImage, or None when the image is missing or broken.
	"""
	source = pss.records.clean_str(url)
	if not source:
		return None
	data = read_source_bytes(source, session=session, timeout=timeout, allow_local=allow_local)
	if not data:
		return None
	if decoder is None:
		decoder = DEFAULT_DECODER
	return decoder.decode(data, source)


#============================================
def fetch_first_image(
	urls: list[str],
	session: requests.Session | None = None,
	decoder: AssetDecoder | None = None,
	allow_local: bool = False,
) -> AssetImage | None:
	"""
	Try candidate image locations in order and keep the first that loads.

	Args:
		urls: Candidate locations.
		session: Optional requests session.
		decoder: Byte decoder.
		allow_local: Accept local file paths.

	Returns:
		First AssetImage found, or None.
	"""
	for url in urls:
		image = fetch_image(url, session=session, decoder=decoder, allow_local=allow_local)
		if image is not None:
			LOGGER.debug("Loaded image from %s", url)
			return image
	LOGGER.warning("No image could be loaded from %d candidates", len(urls))
	return None


#============================================
def fetch_qr_image(payload: object) -> AssetImage | None:
	"""
	Encode a payload as a QR code image.

	A payload that already is an image data URL is decoded as is.

	Args:
		payload: Text to encode, usually a normalized URL.

	Returns:
		Square AssetImage, or None when the payload is empty or encoding fails.
	"""
	text = pss.records.clean_str(payload)
	if not text:
		return None
	if DATA_URL_PATTERN.match(text):
		return fetch_image(text)
	try:
		code = qrcode.QRCode(
			error_correction=qrcode.constants.ERROR_CORRECT_M,
			border=QR_BORDER,
		)
		code.add_data(text)
		code.make(fit=True)
		wrapper = code.make_image(fill_color=COLOR_QR_DARK, back_color=COLOR_WHITE)
		image = wrapper.get_image().convert("RGB")
	except (ValueError, qrcode.exceptions.DataOverflowError) as error:
		LOGGER.warning("QR encoding failed: %s", error)
		return None
	image = image.resize((QR_PIXEL_SIZE, QR_PIXEL_SIZE), PIL.Image.Resampling.NEAREST)
	return image_to_asset(image, "qr")
