"""HTTP adapters around the reconciliation engine."""
