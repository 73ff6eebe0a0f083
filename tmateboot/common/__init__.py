"""Shared types, errors and settings for tmateboot."""
