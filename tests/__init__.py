"""
Tests Package.

This package contains test suites for the mesh model, the YAML scene compiler
and the DOT exporter, including the per-cycle statistics and legend rendering.
"""
