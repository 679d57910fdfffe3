"""Tests for the build lifecycle."""
