"""
Unit tests for parameterized retry.

Test individual components in isolation:
- Retry policy validation
- Exception classifier (retryable kinds, abort signals)
- Attempt history (window queries, bounds, thread safety)
- Invocation iterator (retry/advance decisions)
- Parameter sources, naming, models, logging setup
"""
