"""Core text processing and generation components."""
