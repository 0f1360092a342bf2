"""site_parity.parser: markup → immutable document tree."""

from site_parity.parser.html_parser import DocumentTree, ElementNode, Node, TextNode, parse_html

__all__ = ["DocumentTree", "ElementNode", "Node", "TextNode", "parse_html"]
