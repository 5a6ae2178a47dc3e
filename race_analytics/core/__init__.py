"""Core domain and analysis services, free of I/O."""
