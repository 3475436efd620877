"""Test configuration package: markers and collection rules."""
