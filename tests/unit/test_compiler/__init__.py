"""Tests for compilation planning and the compiler collaborator."""
