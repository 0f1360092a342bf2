"""site_parity.extractor: link inventory and text rendering over a DocumentTree."""

from site_parity.extractor.link_collector import collect
from site_parity.extractor.page_extractor import extract
from site_parity.extractor.text_renderer import render

__all__ = ["collect", "extract", "render"]
