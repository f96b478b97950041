"""Formterm command line interface."""
