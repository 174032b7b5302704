"""Core data model: findings, results, errors and redaction."""
