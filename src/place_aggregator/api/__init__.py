"""HTTP boundary for the place aggregator."""
