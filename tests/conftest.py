"""Shared pytest configuration.

teamcity_* fixtures come from the installed pytest11 entry point.
"""
