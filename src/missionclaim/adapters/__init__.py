"""Adapters binding domain ports to remote services."""
