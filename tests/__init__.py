"""Test suite for EA Auth."""
