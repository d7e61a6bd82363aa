"""Command-line helpers that prepare saved sign-in sessions for the suite."""
