"""
Version 1 of the API.

This subpackage bundles the user, deck and card endpoints.
"""
