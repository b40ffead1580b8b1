"""
json-db-collection: named JSON document databases exposed as tools.
"""
__version__ = "0.0.1"
