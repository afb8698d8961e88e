"""Tests - run via pytest."""
