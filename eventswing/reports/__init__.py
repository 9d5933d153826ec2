"""Signal artifacts and console summaries."""
