"""Vault loading and parsing utilities."""

from .files import VaultLoadError
from .loader import Vault, build_item, load_vault
from .parser import find_closest_matching_file, parse_references, parse_tags, resolve_link_text

__all__ = [
    "load_vault",
    "build_item",
    "Vault",
    "VaultLoadError",
    "find_closest_matching_file",
    "parse_references",
    "parse_tags",
    "resolve_link_text",
]
