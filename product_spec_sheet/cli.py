"""
CLI entry points for product spec sheet generation.
"""

# Standard Library
import argparse
import json
import logging
import pathlib
import sys
import time

# local repo modules
import product_spec_sheet as pss
import product_spec_sheet.api_client
import product_spec_sheet.assemble
import product_spec_sheet.config


SheetOptions = pss.config.SheetOptions

DEFAULT_SITE_ORIGIN = pss.config.DEFAULT_SITE_ORIGIN
DEFAULT_MAX_WORKERS = pss.config.DEFAULT_MAX_WORKERS


#============================================
def load_product_record(path: pathlib.Path) -> dict:
	"""
	Load a product record from a JSON file.

	A top-level {"data": {...}} wrapper, as returned by the API, is unwrapped.

	Args:
		path: JSON file path.

	Returns:
		Product mapping.
	"""
	try:
		payload = json.loads(path.read_text(encoding="utf-8"))
	except json.JSONDecodeError as error:
		raise ValueError(f"{path} is not valid JSON: {error}") from error
	if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
		payload = payload["data"]
	if not isinstance(payload, dict):
		raise ValueError(f"{path} does not hold a product object")
	return payload


#============================================
def build_options(args: argparse.Namespace) -> SheetOptions:
	"""
	Build sheet options from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		SheetOptions.
	"""
	return SheetOptions(
		product_url=args.product_url,
		qr_payload=args.qr_payload,
		logo_url=args.logo_url,
		site_origin=args.site_origin,
		company_name=args.company_name,
		phone=args.phone,
		whatsapp=args.whatsapp,
		email=args.email,
		address=args.address,
		output_dir=args.output_dir,
		lookup_slug=args.lookup_slug,
		max_workers=args.max_workers,
	)


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list; sys.argv when None.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Generate a product specification sheet PDF.")
	parser.add_argument("product_json", help="Product record JSON file.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output-dir", dest="output_dir", required=True, help="Directory for the PDF.")

	link_group = parser.add_argument_group("Links and assets")
	link_group.add_argument("-u", "--product-url", dest="product_url", default=None, help="Product page URL for the QR code.")
	link_group.add_argument("-q", "--qr-payload", dest="qr_payload", default=None, help="QR text or image data URL; overrides the URL.")
	link_group.add_argument("-l", "--logo", dest="logo_url", default=None, help="Logo URL or file path.")
	link_group.add_argument("--site-origin", dest="site_origin", default=DEFAULT_SITE_ORIGIN, help="Origin for relative image URLs and logo fallbacks.")

	company_group = parser.add_argument_group("Company overrides")
	company_group.add_argument("--company-name", dest="company_name", default=None, help="Company name in the header.")
	company_group.add_argument("--phone", dest="phone", default=None, help="Phone number in the footer.")
	company_group.add_argument("--whatsapp", dest="whatsapp", default=None, help="WhatsApp number in the footer.")
	company_group.add_argument("--email", dest="email", default=None, help="Email in the footer.")
	company_group.add_argument("--address", dest="address", default=None, help="Address line in the footer.")

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("-s", "--lookup-slug", dest="lookup_slug", action="store_true", help="Fill gaps from the slug lookup.")
	behavior_group.add_argument("-w", "--max-workers", dest="max_workers", type=int, default=DEFAULT_MAX_WORKERS, help="Concurrent fetches.")
	behavior_group.add_argument("-v", "--verbose", dest="verbose", action="store_true", help="Debug logging.")

	parser.set_defaults(
		lookup_slug=False,
		verbose=False,
	)

	args = parser.parse_args(argv)
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> pss.config.SheetResult:
	"""
	Run the full pipeline from product JSON to PDF.

	Args:
		args: Parsed argparse namespace.

	Returns:
		SheetResult.
	"""
	print("Product spec sheet pipeline")
	print(f"Product JSON: {args.product_json}")
	print(f"Output directory: {args.output_dir}")
	if args.product_url:
		print(f"Product URL: {args.product_url}")
	print(f"Slug lookup: {args.lookup_slug}")

	start_time = time.perf_counter()
	record = load_product_record(pathlib.Path(args.product_json))
	options = build_options(args)
	client = pss.api_client.ApiClient()
	if not client.settings.base_url:
		print("API base URL: not set (company and collection use defaults)")
	result = pss.assemble.generate_spec_sheet(record, options, client)
	total_time = time.perf_counter() - start_time

	print(f"Siblings found: {result.sibling_count}")
	print(f"Pages written: {result.pages} (gallery {result.gallery_pages})")
	print(f"Output PDF: {result.path}")
	print(f"Timing: total={total_time:.2f}s")
	return result


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Main entry point.

	Input and write errors are reported on stderr with exit status 1.

	Args:
		argv: Argument list; sys.argv when None.
	"""
	args = parse_args(argv)
	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format="%(levelname)s %(name)s: %(message)s",
	)
	try:
		run_pipeline(args)
	except (ValueError, OSError) as error:
		print(f"Error: {error}", file=sys.stderr)
		sys.exit(1)
