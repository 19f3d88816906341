"""
Command-line interface entry points for wndict.

Entry points:
- wndict: Convert WordNet index/data files to SQLite, SQL or JSON
"""
