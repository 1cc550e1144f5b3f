"""Tests for GeohashGrid module."""
