"""Cutout: anonymous, owner-scoped background removal service."""
