"""Shared HTTP plumbing for the JSON API.

Not a Django app: holds the base exception type and the base view
that turns domain errors into JSON responses.
"""
