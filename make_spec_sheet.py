#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Generate a product specification sheet PDF from a product JSON record.
"""

# local repo modules
import product_spec_sheet.cli


if __name__ == "__main__":
	product_spec_sheet.cli.main()
