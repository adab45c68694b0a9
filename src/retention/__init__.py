"""Retention planning and enforcement.

This module decides which function versions fall outside the retention
window and removes them with bounded concurrency.
"""
