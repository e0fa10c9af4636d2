"""Adapters package for entry points (CLI and Streamlit)."""

__all__: list[str] = []
