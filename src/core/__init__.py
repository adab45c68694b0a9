"""Shared configuration, errors, and typed models."""
