"""TCP socket helpers, a re-entrant lock, a task thread pool, a one-client server and test client, and a GUI input backend model."""

__version__ = "1.0.0"