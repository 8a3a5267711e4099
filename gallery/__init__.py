"""
Offline gallery of exported Figma screens.

Scans exported screenshots, links them back to Figma nodes using saved file
JSON, and writes one searchable HTML page.
"""
__version__ = '0.1.0'
