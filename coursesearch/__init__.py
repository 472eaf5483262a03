"""Course search API: translates search requests into Elasticsearch queries."""

__version__ = "1.0.0"
