"""Tests for the Rain Bird Local integration."""
