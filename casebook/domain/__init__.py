"""Domain types and rules for design cases (no storage or HTTP concerns)."""
