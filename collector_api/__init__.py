"""DVL Analytics collector: tracking ingestion, dashboard aggregation and refresh notifications."""
