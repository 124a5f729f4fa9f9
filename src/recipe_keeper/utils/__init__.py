"""Utility modules: configuration, constants, validators, datetime helpers."""
