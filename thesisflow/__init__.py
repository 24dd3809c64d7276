"""Thesis defense notification service."""
