"""Storefront catalog back office: catalog API with live product updates."""
