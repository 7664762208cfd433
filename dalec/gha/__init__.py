"""Markdown helpers for GitHub Actions job summaries."""