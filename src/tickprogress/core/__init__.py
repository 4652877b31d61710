"""Progress state and snapshots."""
