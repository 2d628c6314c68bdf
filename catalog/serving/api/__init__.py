"""
HTTP API Module
"""
