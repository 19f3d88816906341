"""
wndict — Convert Princeton WordNet lexicographer files into a word/definition
dictionary (SQLite database, SQL script or JSON document).
"""

__version__ = "1.0.0"
