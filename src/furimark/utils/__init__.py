#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/furimark/utils/__init__.py
"""Utility helpers shared by the parser and the export strategies."""
