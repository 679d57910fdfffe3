"""Tests for descriptor reading and project composition."""
