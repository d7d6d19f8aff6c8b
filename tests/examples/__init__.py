"""Example definitions used by tests."""
