"""Reporting module - merged profile output."""

from .profile_writer import ProfileWriter, format_block, format_header, format_profiles

__all__ = ["ProfileWriter", "format_block", "format_header", "format_profiles"]
