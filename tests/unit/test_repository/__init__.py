"""Tests for artifact repositories."""
