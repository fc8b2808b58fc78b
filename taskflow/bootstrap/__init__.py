"""Bootstrap: logging, database and service wiring."""
