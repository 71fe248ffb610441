"""Metadata services."""

from bookshelf.services.metadata.ndl import NDLBookService, ndl_service, parse_ndl_response

__all__ = ["NDLBookService", "ndl_service", "parse_ndl_response"]
