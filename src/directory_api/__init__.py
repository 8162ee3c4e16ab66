"""Employee directory API."""
