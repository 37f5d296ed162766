"""Test suite for the pytest-quickspec package.

This package contains unit and integration tests validating example
tree compilation, invocation generation, failure attribution, pytest
integration, and the command-line interface.
"""
