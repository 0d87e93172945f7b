"""
UI Module - Overlay rendering.

This module provides:
- Zone, skeleton and status drawing (display.py)
"""
