"""
Integration tests for parameterized retry.

Run real test bodies through the reference host loop:
sources -> retry run -> body -> outcome reports -> run report.
"""
