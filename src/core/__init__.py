"""Core domain package for the transit site.

Core contains content lookup, route resolution, and the inquiry pipeline
without any storage- or mail-specific code, keeping the business logic
portable.
"""
