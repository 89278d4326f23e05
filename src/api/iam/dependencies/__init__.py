"""FastAPI dependencies for IAM bounded context."""
