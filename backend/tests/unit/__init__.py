"""Unit tests: services with mocked repositories, validators and security helpers."""
