"""Content integrity and asset reconciliation service package."""
