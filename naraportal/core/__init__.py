"""Access control core for the NARA admin portal."""
