"""HTTP interface for the follows graph service."""
