"""
Pytest configuration: make product_spec_sheet importable from a checkout.
"""

# Standard Library
import os
import sys

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Put the repository root first on sys.path so the namespace package
	product_spec_sheet resolves to this checkout, not an installed copy.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()
