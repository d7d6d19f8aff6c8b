"""Test suite for the synthetics-dsl package.

This package contains unit and integration tests validating step
builders, browser test construction, payload serialization, settings
resolution, and the command-line utilities.
"""
