"""Tests for the login server."""
