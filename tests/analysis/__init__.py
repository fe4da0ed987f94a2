"""Tests for static analysis of templates."""
