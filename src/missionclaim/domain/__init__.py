"""Domain layer: identities, challenge auth and mission reconciliation."""
