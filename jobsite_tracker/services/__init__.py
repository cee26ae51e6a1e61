"""Services built on top of the import pipeline: utilities, stats, orchestration."""
