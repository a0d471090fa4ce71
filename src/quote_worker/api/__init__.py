"""HTTP surface: liveness probe and quote submission."""
