"""
Test suite for the template_helper package.
"""
