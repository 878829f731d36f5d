"""Command-line interface helpers for Journal Prompts."""
