"""Indoor multi-floor routing engine and navigation API."""
