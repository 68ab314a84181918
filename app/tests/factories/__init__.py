"""Test data factories for deterministic test data generation."""

from tests.factories.intl import (
    make_config,
    make_intl,
    make_loader,
    make_messages,
    make_ref,
    make_ref_loader,
    make_ref_value,
)

__all__ = [
    "make_config",
    "make_intl",
    "make_loader",
    "make_messages",
    "make_ref",
    "make_ref_loader",
    "make_ref_value",
]
