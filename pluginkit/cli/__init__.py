"""Command line helpers for pluginkit."""
