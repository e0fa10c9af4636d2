"""Ensure adapter packages expose the expected metadata."""

from importlib import import_module


def test_adapters_package_exports_are_empty() -> None:
    """Adapters package should not re-export symbols."""
    module = import_module("fleet_dashboard.adapters")
    assert module.__all__ == []


def test_interface_package_exports_are_empty() -> None:
    """Interface package should not re-export symbols."""
    module = import_module("fleet_dashboard.adapters.interface")
    assert module.__all__ == []


def test_streamlit_package_exports_are_empty() -> None:
    """Streamlit package should not re-export symbols."""
    module = import_module("fleet_dashboard.adapters.interface.streamlit")
    assert module.__all__ == []
