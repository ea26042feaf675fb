"""Core domain package for statsd-notifier.

Core contains the emission rules and capability checks without any StatsD,
XML or filesystem-specific code. Collaborators are reached through ports.
"""
