"""Tests for manifest and archive assembly."""
