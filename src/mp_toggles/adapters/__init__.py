"""Adapters – concrete ToggleStore backends."""
