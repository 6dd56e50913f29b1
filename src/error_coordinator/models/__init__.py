"""Collaborator protocols."""
