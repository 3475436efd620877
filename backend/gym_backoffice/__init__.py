"""Gym back office API: clients, memberships and gym entrance/exit control."""
