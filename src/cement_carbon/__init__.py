"""Cement sector carbon-target and carbon-price exposure analytics."""
