"""Lot and spot services used by the API routers."""
