"""Bridge flow: orchestration, execution and error types."""
