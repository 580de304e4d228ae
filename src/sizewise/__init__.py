"""sizewise - backlog prioritization and economic sequencing."""
