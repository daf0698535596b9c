"""Categories feature: per-user task groupings."""
