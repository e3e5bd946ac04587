"""
HTML import built on BeautifulSoup and html5lib.
"""

from .html_parser import HTMLParser, parse_document, parse_fragment

__all__ = ['HTMLParser', 'parse_document', 'parse_fragment']
