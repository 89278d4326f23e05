"""Application layer for IAM bounded context."""
