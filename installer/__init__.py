"""
Installer package for the Laravel environment bootstrap.

This package holds the configuration layer, the install steps and the
presentation layer used by install.py.
"""
