"""Catalog API web app."""
