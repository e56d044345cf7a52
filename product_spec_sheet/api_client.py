"""
Read-only client for the storefront API.
"""

# Standard Library
import dataclasses
import logging
import os
import urllib.parse

# PIP3 modules
import requests

# local repo modules
import product_spec_sheet as pss
import product_spec_sheet.config


REQUEST_TIMEOUT = pss.config.REQUEST_TIMEOUT
PRODUCT_LISTING_LIMIT = pss.config.PRODUCT_LISTING_LIMIT

LOGGER = logging.getLogger(__name__)


@dataclasses.dataclass
class ApiSettings:
	base_url: str = ""
	api_key: str = ""
	timeout: float = REQUEST_TIMEOUT

	@classmethod
	def from_env(cls) -> "ApiSettings":
		"""
		Read settings from SPEC_SHEET_API_* environment variables.
		"""
		timeout_text = os.environ.get("SPEC_SHEET_API_TIMEOUT", "").strip()
		try:
			timeout = float(timeout_text) if timeout_text else REQUEST_TIMEOUT
		except ValueError:
			LOGGER.warning("Ignoring bad SPEC_SHEET_API_TIMEOUT value %r", timeout_text)
			timeout = REQUEST_TIMEOUT
		return cls(
			base_url=os.environ.get("SPEC_SHEET_API_BASE_URL", "").strip().rstrip("/"),
			api_key=os.environ.get("SPEC_SHEET_API_KEY", "").strip(),
			timeout=timeout,
		)


class ApiClient:
	"""
	Best-effort access to company and product listings.

	Every method returns an empty result instead of raising, so the
	caller can fall back to defaults.
	"""

	def __init__(self, settings: ApiSettings | None = None, session: requests.Session | None = None) -> None:
		self.settings = settings if settings is not None else ApiSettings.from_env()
		self.session = session if session is not None else requests.Session()

	def build_headers(self) -> dict[str, str]:
		headers = {"Content-Type": "application/json"}
		if self.settings.api_key:
			headers["X-Api-Key"] = self.settings.api_key
			headers["Authorization"] = f"Bearer {self.settings.api_key}"
		return headers

	def get_data(self, path: str, params: dict | None = None) -> object:
		"""
		GET an endpoint and unwrap its "data" member.

		Args:
			path: Path below the base URL.
			params: Optional query parameters.

		Returns:
			The data payload, or None on any failure.
		"""
		if not self.settings.base_url:
			LOGGER.debug("No API base URL configured; skipping %s", path)
			return None
		url = f"{self.settings.base_url}/{path.lstrip('/')}"
		try:
			response = self.session.get(
				url,
				headers=self.build_headers(),
				params=params,
				timeout=self.settings.timeout,
			)
		except requests.RequestException as error:
			LOGGER.warning("Request to %s failed: %s", url, error)
			return None
		if not response.ok:
			LOGGER.warning("Request to %s returned HTTP %s", url, response.status_code)
			return None
		try:
			payload = response.json()
		except ValueError as error:
			LOGGER.warning("Response from %s is not JSON: %s", url, error)
			return None
		if not isinstance(payload, dict):
			return None
		return payload.get("data")

	def fetch_company_entries(self) -> list[dict]:
		data = self.get_data("companyinformation")
		if not isinstance(data, list):
			return []
		return [entry for entry in data if isinstance(entry, dict)]

	def fetch_product_listing(self, limit: int = PRODUCT_LISTING_LIMIT) -> list[dict]:
		data = self.get_data("product", params={"limit": limit})
		if not isinstance(data, list):
			return []
		return [entry for entry in data if isinstance(entry, dict)]

	def fetch_product_by_slug(self, slug: str) -> dict | None:
		"""
		Look up the full product record for a slug.

		Args:
			slug: Product slug.

		Returns:
			Product mapping or None.
		"""
		if not slug:
			return None
		quoted = urllib.parse.quote(slug, safe="")
		data = self.get_data(f"product/fieldname/productslug/{quoted}")
		if isinstance(data, list):
			data = data[0] if data else None
		if not isinstance(data, dict):
			return None
		return data
