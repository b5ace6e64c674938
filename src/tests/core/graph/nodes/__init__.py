"""Tests for node types."""
