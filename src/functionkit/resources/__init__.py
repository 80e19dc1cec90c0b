"""Packaged resources for fnkit."""
