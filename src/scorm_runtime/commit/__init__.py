"""Commit pipeline: payload rendering, transport and autocommit scheduling."""
