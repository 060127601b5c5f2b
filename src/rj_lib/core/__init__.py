# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core infrastructure for rj.

This module collects the foundational helpers used across the rj codebase:
configuration, error types, structured logging, help formatting, and the
bounded polling loop.
"""
