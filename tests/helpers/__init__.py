"""
Test helper utilities for overflow-events testing.

This module provides reusable utilities for:
- Generating synthetic sample series
- Checking event invariants
"""
