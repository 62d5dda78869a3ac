"""Signing, broadcast and recovery logic."""
