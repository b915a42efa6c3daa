"""Test suite for showcase."""
