"""Tests for opc_interpreter."""
